"""
Ports for item content interpretation.

An item type turns the raw content of an item into a typed representation and
derives the gradable cards it yields. Concrete types live in
``redeck.application.types``.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import TypeAdapter, ValidationError

from .errors import ContentParseError, InvalidResponse
from .models import Grade

ContentT = TypeVar("ContentT")

GRADE_ADAPTER: TypeAdapter[Grade] = TypeAdapter(Grade)


@dataclass(frozen=True)
class CardSpec:
    """
    A single gradable prompt/reveal pair derived from an item.

    Not persisted; review collaborators build it on demand.

    Attributes:
        prompt: Text shown before the answer is revealed.
        reveal: Text shown after the answer is revealed.
        card_type: Name of the item type that produced the card.
        response_schema: Validator for reviewer responses.
        grade: Maps a validated response to a Grade, raising InvalidResponse.
    """

    prompt: str
    reveal: str
    card_type: str
    response_schema: TypeAdapter[Any]
    grade: Callable[[Any], Grade]


def manual_card_spec(prompt: str, reveal: str, card_type: str) -> CardSpec:
    """Card graded by self-assessment: the response is the grade."""

    def grade(response: Any) -> Grade:
        try:
            return GRADE_ADAPTER.validate_python(response)
        except ValidationError:
            raise InvalidResponse(card_type=card_type, response=response) from None

    return CardSpec(
        prompt=prompt,
        reveal=reveal,
        card_type=card_type,
        response_schema=GRADE_ADAPTER,
        grade=grade,
    )


class ItemType(ABC, Generic[ContentT]):
    """
    Port for a pluggable content interpreter.

    Implementations:
        - QAType: question and answer split by a separator line.
        - ClozeType: text with {{cN::...}} deletions.
    """

    name: str

    @abstractmethod
    def parse(self, content: str) -> ContentT | ContentParseError:
        """
        Interpret raw item content.

        Rejection is expected control flow during type inference, so the
        error is returned rather than raised.
        """
        pass

    @abstractmethod
    def cards(self, content: ContentT) -> list[CardSpec]:
        """Derive the ordered cards for previously parsed content."""
        pass

    def parse_or_raise(self, content: str) -> ContentT:
        """Parse content, raising the ContentParseError instead of returning it."""
        result = self.parse(content)
        if isinstance(result, ContentParseError):
            raise result
        return result

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
