"""redeck: plain-text flashcard decks with embedded spaced-repetition metadata."""

from redeck.application import (
    DEFAULT_ITEM_TYPES,
    CardLocation,
    InferredType,
    append_item,
    create_metadata,
    create_metadata_with_id,
    extract_card_locations,
    find_card,
    find_duplicates,
    generate_id,
    infer_type,
    item_id,
    new_item,
    numeric_field,
    parse_file,
    parse_metadata_line,
    replace_card,
    serialize_file,
    serialize_metadata,
)
from redeck.application.types import ClozeType, QAType
from redeck.consts import VERSION
from redeck.domain import (
    CardIndexError,
    CardSpec,
    ContentParseError,
    FieldCodecError,
    Grade,
    InvalidFieldValue,
    InvalidMetadataFormat,
    InvalidResponse,
    Item,
    ItemId,
    ItemMetadata,
    ItemType,
    MetadataParseError,
    NoMatchingTypeError,
    NumericField,
    ParseError,
    ParsedFile,
    RedeckError,
    State,
)

__version__ = VERSION

__all__ = [
    "DEFAULT_ITEM_TYPES",
    "CardIndexError",
    "CardLocation",
    "CardSpec",
    "ClozeType",
    "ContentParseError",
    "FieldCodecError",
    "Grade",
    "InferredType",
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
    "QAType",
    "RedeckError",
    "State",
    "append_item",
    "create_metadata",
    "create_metadata_with_id",
    "extract_card_locations",
    "find_card",
    "find_duplicates",
    "generate_id",
    "infer_type",
    "item_id",
    "new_item",
    "numeric_field",
    "parse_file",
    "parse_metadata_line",
    "replace_card",
    "serialize_file",
    "serialize_metadata",
]
