"""Builds the ordered item type registry used for type inference."""

from typing import Any

from redeck.application.config import AppConfig
from redeck.application.types import ClozeType, QAType
from redeck.domain.constants import CLOZE_TYPE_NAME, QA_TYPE_NAME
from redeck.domain.item_type import ItemType

DEFAULT_ITEM_TYPES: tuple[ItemType[Any], ...] = (QAType(), ClozeType())


def build_item_types(config: AppConfig) -> tuple[ItemType[Any], ...]:
    """Instantiate the configured item types in inference order."""
    factories = {
        QA_TYPE_NAME: lambda: QAType(separator=config.qa_separator),
        CLOZE_TYPE_NAME: lambda: ClozeType(
            placeholder=config.cloze_placeholder, emphasis=config.cloze_emphasis
        ),
    }
    return tuple(factories[name]() for name in config.item_types)
