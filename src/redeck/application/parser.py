"""
Deck file parser.

Splits a document into its preamble and items. Consecutive metadata lines
open one item (one card per line); the item's content runs verbatim until
the next metadata line or the end of the document.
"""

import logging
from dataclasses import dataclass, field

from redeck.application.metadata import parse_metadata_line
from redeck.domain.constants import (
    CRLF,
    LF,
    METADATA_MIN_LENGTH,
    METADATA_PREFIX,
    METADATA_SUFFIX,
)
from redeck.domain.models import Item, ItemMetadata, ParsedFile

logger = logging.getLogger(__name__)


@dataclass
class _ItemBuilder:
    cards: list[ItemMetadata] = field(default_factory=list)
    content: str = ""

    def build(self) -> Item:
        return Item(cards=tuple(self.cards), content=self.content)


def _is_metadata_line(line: str) -> bool:
    """
    Classify a physical line.

    Only the complete ``<!--@ ... -->`` shape with a non-empty body opens a
    card; any other line, including an unclosed or trailing-text comment, is
    content.
    """
    text = line[:-1] if line.endswith("\r") else line
    return (
        len(text) >= METADATA_MIN_LENGTH
        and text.startswith(METADATA_PREFIX)
        and text.endswith(METADATA_SUFFIX)
    )


def parse_file(text: str) -> ParsedFile:
    """
    Parse a deck document.

    The preamble and every item's content are kept byte-for-byte. The line
    terminator of the first metadata line is recorded on the result so the
    serializer can reproduce CRLF decks.

    Raises:
        InvalidMetadataFormat: A metadata comment has the wrong number of fields.
        InvalidFieldValue: A metadata field failed its codec.
    """
    items: list[_ItemBuilder] = []
    preamble_end = len(text)
    newline: str | None = None
    mode = "preamble"
    content_start = 0
    offset = 0
    line_number = 1

    while True:
        newline_at = text.find("\n", offset)
        has_newline = newline_at != -1
        line_end = newline_at if has_newline else len(text)
        line = text[offset:line_end]

        if _is_metadata_line(line):
            metadata = parse_metadata_line(line, line_number)
            if newline is None:
                newline = CRLF if line.endswith("\r") else LF

            if mode == "preamble":
                preamble_end = offset
            elif mode == "content":
                items[-1].content = text[content_start:offset]

            if mode != "metadata":
                items.append(_ItemBuilder())
            items[-1].cards.append(metadata)
            content_start = line_end + 1 if has_newline else line_end
            mode = "metadata"
        elif mode == "metadata":
            mode = "content"

        if not has_newline:
            break
        offset = newline_at + 1
        line_number += 1

    if items:
        items[-1].content = text[content_start:]

    parsed = ParsedFile(
        preamble=text[:preamble_end],
        items=tuple(builder.build() for builder in items),
        newline=newline or LF,
    )
    logger.debug(
        f"[parser] {line_number} lines -> {len(parsed.items)} items, {parsed.card_count} cards"
    )
    return parsed
