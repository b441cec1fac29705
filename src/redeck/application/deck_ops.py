"""
Pure operations over parsed decks.

Every function returns new records; inputs are never modified.
"""

import logging
from collections import defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from typing import Any

from redeck.application.id_service import create_metadata
from redeck.application.inference import infer_type
from redeck.domain.errors import CardIndexError
from redeck.domain.item_type import ItemType
from redeck.domain.models import Item, ItemMetadata, ParsedFile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CardLocation:
    path: str
    item_index: int
    card_index: int
    id: str


def replace_card(
    file: ParsedFile, item_index: int, card_index: int, metadata: ItemMetadata
) -> ParsedFile:
    """
    Substitute one card's metadata record, e.g. after a review.

    Raises:
        CardIndexError: item_index or card_index is out of range.
    """
    if not 0 <= item_index < len(file.items):
        raise CardIndexError(
            item_index=item_index,
            card_index=card_index,
            message=f"Item index {item_index} out of bounds ({len(file.items)} items)",
        )

    item = file.items[item_index]
    if not 0 <= card_index < len(item.cards):
        raise CardIndexError(
            item_index=item_index,
            card_index=card_index,
            message=f"Card index {card_index} out of bounds ({len(item.cards)} cards)",
        )

    cards = item.cards[:card_index] + (metadata,) + item.cards[card_index + 1 :]
    items = (
        file.items[:item_index]
        + (replace(item, cards=cards),)
        + file.items[item_index + 1 :]
    )
    return replace(file, items=items)


def find_card(file: ParsedFile, card_id: str) -> tuple[int, int] | None:
    """Return (item_index, card_index) of the first card with this id."""
    for item_index, item in enumerate(file.items):
        for card_index, card in enumerate(item.cards):
            if card.id == card_id:
                return item_index, card_index
    return None


def new_item(content: str, types: Sequence[ItemType[Any]]) -> Item:
    """
    Create an item for freshly authored content.

    The content's type is inferred and one new metadata record is created per
    card it yields.

    Raises:
        NoMatchingTypeError: No item type accepts the content.
    """
    inferred = infer_type(types, content)
    count = len(inferred.cards())
    logger.debug(f"[deck] new {inferred.type.name} item with {count} cards")
    return Item(cards=tuple(create_metadata() for _ in range(count)), content=content)


def append_item(file: ParsedFile, item: Item) -> ParsedFile:
    """
    Append an item at the end of the deck.

    The text before the new metadata lines is terminated with the deck's
    newline so they start on a line of their own, and so is the new content.
    """
    nl = file.newline
    preamble = file.preamble
    items = file.items

    if items:
        last = items[-1]
        if last.content and not last.content.endswith("\n"):
            items = items[:-1] + (replace(last, content=last.content + nl),)
    elif preamble and not preamble.endswith("\n"):
        preamble += nl

    if item.content and not item.content.endswith("\n"):
        item = replace(item, content=item.content + nl)

    return replace(file, preamble=preamble, items=items + (item,))


def extract_card_locations(decks: Iterable[tuple[str, ParsedFile]]) -> list[CardLocation]:
    locations = []
    for path, file in decks:
        for item_index, item in enumerate(file.items):
            for card_index, card in enumerate(item.cards):
                locations.append(
                    CardLocation(
                        path=path, item_index=item_index, card_index=card_index, id=card.id
                    )
                )
    return locations


def find_duplicates(locations: Iterable[CardLocation]) -> dict[str, list[CardLocation]]:
    """Group locations by card id, keeping only ids that occur more than once."""
    grouped: dict[str, list[CardLocation]] = defaultdict(list)
    for location in locations:
        grouped[location.id].append(location)
    return {card_id: locs for card_id, locs in grouped.items() if len(locs) > 1}
