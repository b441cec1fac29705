# Domain Package
from .errors import (
    CardIndexError,
    ContentParseError,
    FieldCodecError,
    InvalidFieldValue,
    InvalidMetadataFormat,
    InvalidResponse,
    MetadataParseError,
    NoMatchingTypeError,
    ParseError,
    RedeckError,
)
from .item_type import CardSpec, ItemType, manual_card_spec
from .models import Grade, Item, ItemId, ItemMetadata, NumericField, ParsedFile, State

__all__ = [
    "CardIndexError",
    "CardSpec",
    "ContentParseError",
    "FieldCodecError",
    "Grade",
    "InvalidFieldValue",
    "InvalidMetadataFormat",
    "InvalidResponse",
    "Item",
    "ItemId",
    "ItemMetadata",
    "ItemType",
    "MetadataParseError",
    "NoMatchingTypeError",
    "NumericField",
    "ParseError",
    "ParsedFile",
    "RedeckError",
    "State",
    "manual_card_spec",
]
