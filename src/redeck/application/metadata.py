"""Codec for a single ``<!--@ ... -->`` metadata line."""

from typing import Any

from redeck.application.codecs import METADATA_CODECS
from redeck.domain.constants import (
    METADATA_LINE_RE,
    METADATA_MAX_FIELDS,
    METADATA_MIN_FIELDS,
    METADATA_PREFIX,
    METADATA_SUFFIX,
)
from redeck.domain.errors import FieldCodecError, InvalidFieldValue, InvalidMetadataFormat
from redeck.domain.models import ItemMetadata


def parse_metadata_line(line: str, line_number: int = 1) -> ItemMetadata:
    """
    Decode one metadata line into an ItemMetadata record.

    A trailing carriage return is tolerated. Preserving the line ending is
    up to the caller.

    Raises:
        InvalidMetadataFormat: The comment shape or the field count is wrong.
        InvalidFieldValue: A field failed its codec (first failure wins).
    """
    text = line[:-1] if line.endswith("\r") else line
    match = METADATA_LINE_RE.fullmatch(text)
    if not match:
        raise InvalidMetadataFormat(
            line=line_number,
            raw=line,
            reason=f"expected {METADATA_PREFIX}<fields>{METADATA_SUFFIX}",
        )

    tokens = match.group(1).split()
    if not METADATA_MIN_FIELDS <= len(tokens) <= METADATA_MAX_FIELDS:
        raise InvalidMetadataFormat(
            line=line_number,
            raw=line,
            reason=f"Expected {METADATA_MIN_FIELDS}-{METADATA_MAX_FIELDS} fields, got {len(tokens)}",
        )

    values: dict[str, Any] = {}
    for (name, codec), token in zip(METADATA_CODECS, tokens):
        try:
            values[name] = codec.decode(token)
        except FieldCodecError as e:
            raise InvalidFieldValue(
                line=line_number, field=name, value=token, expected=e.expected
            ) from e

    return ItemMetadata(**values)


def serialize_metadata(metadata: ItemMetadata) -> str:
    """
    Encode an ItemMetadata record as a metadata line, without line terminator.

    Numeric fields use their preserved raw text; the last review is written in
    UTC and omitted entirely when absent.
    """
    tokens = []
    for name, codec in METADATA_CODECS:
        value = getattr(metadata, name)
        if value is None:
            continue
        tokens.append(codec.encode(value))
    return f"{METADATA_PREFIX}{' '.join(tokens)}{METADATA_SUFFIX}"
