"""
Type inference for item content.

Items carry no explicit type tag; the type is inferred from the content's
shape by trying the registered item types in order.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from redeck.domain.errors import ContentParseError, NoMatchingTypeError
from redeck.domain.item_type import CardSpec, ItemType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InferredType:
    """The first item type that accepted the content, with its parsed form."""

    type: ItemType[Any]
    content: Any

    def cards(self) -> list[CardSpec]:
        return self.type.cards(self.content)


def infer_type(types: Sequence[ItemType[Any]], content: str) -> InferredType:
    """
    Try each type's parser in order until one succeeds.

    Raises:
        NoMatchingTypeError: Every type rejected the content. ``tried_types``
            lists the type names in registry order.
    """
    tried: list[str] = []
    errors: list[ContentParseError] = []

    for item_type in types:
        result = item_type.parse(content)
        if not isinstance(result, ContentParseError):
            return InferredType(type=item_type, content=result)
        logger.debug(f"[infer] {item_type.name} rejected content: {result.message}")
        tried.append(item_type.name)
        errors.append(result)

    raise NoMatchingTypeError(raw=content, tried_types=tuple(tried), errors=tuple(errors))
