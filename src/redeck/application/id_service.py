"""Service for generating stable card IDs and fresh metadata records."""

from decimal import Decimal

from ulid import ULID

from redeck.application.codecs import decode_numeric
from redeck.domain.models import ItemId, ItemMetadata, NumericField, State


def generate_id() -> ItemId:
    """Generate a card ID using ULID (26 chars, Crockford base32, URL-safe)."""
    return ItemId(str(ULID()))


def numeric_field(value: float) -> NumericField:
    """
    Create a NumericField from a number.

    The raw text is always positional notation ("1e-07" becomes "0.0000001")
    and integral values drop the fractional part, so the result satisfies the
    numeric grammar. Negative or non-finite values raise FieldCodecError.
    For round-trips, keep the parsed NumericField instead of rebuilding it.
    """
    number = float(value)
    if number.is_integer():
        raw = str(int(number))
    else:
        raw = format(Decimal(repr(number)), "f")
    return decode_numeric(raw)


def create_metadata_with_id(item_id: ItemId) -> ItemMetadata:
    """Create an unreviewed ItemMetadata record with a specific ID."""
    return ItemMetadata(
        id=item_id,
        stability=numeric_field(0),
        difficulty=numeric_field(0),
        state=State.NEW,
        learning_steps=0,
        last_review=None,
    )


def create_metadata() -> ItemMetadata:
    """Create a fresh ItemMetadata record for a new card."""
    return create_metadata_with_id(generate_id())
