"""
Field codecs for metadata lines.

Each codec is a pure ``decode``/``encode`` pair. ``decode`` raises
FieldCodecError naming the expected grammar; ``encode`` of a decoded value
reproduces canonical input byte-for-byte.
"""

import math
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Generic, TypeVar

from redeck.domain.constants import (
    ISO_TIMESTAMP_RE,
    ITEM_ID_GRAMMAR,
    ITEM_ID_RE,
    LEARNING_STEPS_GRAMMAR,
    LEARNING_STEPS_RE,
    NUMERIC_GRAMMAR,
    NUMERIC_RE,
    STATE_GRAMMAR,
    STATE_RE,
    TIMESTAMP_GRAMMAR,
)
from redeck.domain.errors import FieldCodecError
from redeck.domain.models import ItemId, NumericField, State

T = TypeVar("T")


@dataclass(frozen=True)
class FieldCodec(Generic[T]):
    """A named decode/encode pair for one metadata field."""

    name: str
    grammar: str
    decode: Callable[[str], T]
    encode: Callable[[T], str]


# ---------- Numeric ----------


def decode_numeric(raw: str) -> NumericField:
    if not NUMERIC_RE.fullmatch(raw):
        raise FieldCodecError(value=raw, expected=NUMERIC_GRAMMAR)
    value = float(raw)
    if not math.isfinite(value):
        raise FieldCodecError(value=raw, expected=f"{NUMERIC_GRAMMAR} (finite)")
    return NumericField(value=value, raw=raw)


def encode_numeric(field: NumericField) -> str:
    return field.raw


# ---------- State ----------


def decode_state(raw: str) -> State:
    if not STATE_RE.fullmatch(raw):
        raise FieldCodecError(value=raw, expected=STATE_GRAMMAR)
    return State(int(raw))


def encode_state(state: State) -> str:
    return str(int(state))


# ---------- Learning steps ----------


def decode_learning_steps(raw: str) -> int:
    if not LEARNING_STEPS_RE.fullmatch(raw):
        raise FieldCodecError(value=raw, expected=LEARNING_STEPS_GRAMMAR)
    return int(raw)


def encode_learning_steps(steps: int) -> str:
    if steps < 0:
        raise FieldCodecError(value=str(steps), expected=LEARNING_STEPS_GRAMMAR)
    return str(steps)


# ---------- Item id ----------


def decode_item_id(raw: str) -> ItemId:
    if not ITEM_ID_RE.fullmatch(raw):
        raise FieldCodecError(value=raw, expected=ITEM_ID_GRAMMAR)
    return ItemId(raw)


def encode_item_id(value: ItemId) -> str:
    return value


def item_id(raw: str) -> ItemId:
    """Brand an existing string as an ItemId, validating its shape."""
    return decode_item_id(raw)


# ---------- Timestamp ----------


def _format_clock(dt: datetime) -> str:
    return (
        f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d}"
        f"T{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d}"
    )


def _parse_offset(tz: str) -> timezone | None:
    if tz == "Z":
        return timezone.utc
    sign = -1 if tz[0] == "-" else 1
    hours, minutes = int(tz[1:3]), int(tz[4:6])
    if hours > 23 or minutes > 59:
        return None
    return timezone(sign * timedelta(hours=hours, minutes=minutes))


def decode_timestamp(raw: str) -> datetime:
    """
    Decode a strict ISO 8601 timestamp into a UTC datetime.

    Two stages: the text must match the grammar (timezone mandatory), then the
    decoded instant is converted back into the original offset's local clock
    and compared with the written fields, so calendar-invalid input such as
    Feb 30 is rejected instead of normalized. Precision is truncated to
    milliseconds.
    """
    match = ISO_TIMESTAMP_RE.fullmatch(raw)
    if not match:
        raise FieldCodecError(value=raw, expected=TIMESTAMP_GRAMMAR)

    year, month, day, hour, minute, second, fraction, tz = match.groups()
    invalid = FieldCodecError(value=raw, expected=f"{TIMESTAMP_GRAMMAR}, valid calendar date")

    offset = _parse_offset(tz)
    if offset is None:
        raise invalid

    micro = int((fraction[1:] + "000000")[:6]) if fraction else 0
    micro -= micro % 1000

    try:
        local = datetime(
            int(year),
            int(month),
            int(day),
            int(hour),
            int(minute),
            int(second),
            micro,
            tzinfo=offset,
        )
        instant = local.astimezone(timezone.utc)
        echo = instant.astimezone(offset)
    except (ValueError, OverflowError):
        raise invalid from None

    if _format_clock(echo) != raw[:19]:
        raise invalid
    return instant


def encode_timestamp(value: datetime) -> str:
    """Encode as UTC with millisecond precision, e.g. 2025-01-04T10:30:00.000Z."""
    if value.tzinfo is None or value.utcoffset() is None:
        raise FieldCodecError(value=value.isoformat(), expected="timezone-aware datetime")
    utc = value.astimezone(timezone.utc)
    return f"{_format_clock(utc)}.{utc.microsecond // 1000:03d}Z"


NUMERIC = FieldCodec[NumericField]("numeric", NUMERIC_GRAMMAR, decode_numeric, encode_numeric)
STATE = FieldCodec[State]("state", STATE_GRAMMAR, decode_state, encode_state)
LEARNING_STEPS = FieldCodec[int](
    "learning_steps", LEARNING_STEPS_GRAMMAR, decode_learning_steps, encode_learning_steps
)
TIMESTAMP = FieldCodec[datetime]("timestamp", TIMESTAMP_GRAMMAR, decode_timestamp, encode_timestamp)
ITEM_ID = FieldCodec[ItemId]("item_id", ITEM_ID_GRAMMAR, decode_item_id, encode_item_id)

# Positional layout of a metadata line.
METADATA_CODECS: tuple[tuple[str, FieldCodec[Any]], ...] = (
    ("id", ITEM_ID),
    ("stability", NUMERIC),
    ("difficulty", NUMERIC),
    ("state", STATE),
    ("learning_steps", LEARNING_STEPS),
    ("last_review", TIMESTAMP),
)
