# Application Package
from .codecs import FieldCodec, item_id
from .deck_ops import (
    CardLocation,
    append_item,
    extract_card_locations,
    find_card,
    find_duplicates,
    new_item,
    replace_card,
)
from .id_service import create_metadata, create_metadata_with_id, generate_id, numeric_field
from .inference import InferredType, infer_type
from .metadata import parse_metadata_line, serialize_metadata
from .parser import parse_file
from .registry import DEFAULT_ITEM_TYPES, build_item_types
from .serializer import serialize_file

__all__ = [
    "CardLocation",
    "DEFAULT_ITEM_TYPES",
    "FieldCodec",
    "InferredType",
    "append_item",
    "build_item_types",
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
