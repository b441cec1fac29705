"""
Error taxonomy for deck parsing and content interpretation.

Every error is a dataclass exception: it carries its diagnostic fields as
attributes and renders a readable message through ``str()``.
"""

from dataclasses import dataclass


class RedeckError(Exception):
    """Base class for every error raised by redeck."""


@dataclass(eq=False)
class ParseError(RedeckError):
    """Structural syntax violation at document level."""

    line: int
    column: int
    message: str
    source: str

    def __str__(self) -> str:
        return f"line {self.line}, column {self.column}: {self.message}"


@dataclass(eq=False)
class InvalidMetadataFormat(RedeckError):
    """A metadata comment whose outer shape or field count is wrong."""

    line: int
    raw: str
    reason: str

    def __str__(self) -> str:
        return f"line {self.line}: invalid metadata format: {self.reason}"


@dataclass(eq=False)
class InvalidFieldValue(RedeckError):
    """One field of a metadata line failed its codec."""

    line: int
    field: str
    value: str
    expected: str

    def __str__(self) -> str:
        return f"line {self.line}: invalid {self.field} {self.value!r}, expected {self.expected}"


@dataclass(eq=False)
class FieldCodecError(RedeckError):
    """A standalone field codec rejected its input."""

    value: str
    expected: str

    def __str__(self) -> str:
        return f"invalid value {self.value!r}, expected {self.expected}"


@dataclass(eq=False)
class ContentParseError(RedeckError):
    """An item type rejected a content block."""

    type: str
    message: str
    raw: str

    def __str__(self) -> str:
        return f"[{self.type}] {self.message}"


@dataclass(eq=False)
class NoMatchingTypeError(RedeckError):
    """No registered item type accepted a content block."""

    raw: str
    tried_types: tuple[str, ...]
    errors: tuple[ContentParseError, ...] = ()

    def __str__(self) -> str:
        tried = ", ".join(self.tried_types) or "none"
        return f"no item type matched content (tried: {tried})"


@dataclass(eq=False)
class InvalidResponse(RedeckError):
    """A card's grade function rejected the reviewer's response."""

    card_type: str
    response: object

    def __str__(self) -> str:
        return f"{self.card_type} card cannot grade response {self.response!r}"


@dataclass(eq=False)
class CardIndexError(RedeckError):
    """A deck operation addressed an item or card that does not exist."""

    item_index: int
    card_index: int
    message: str

    def __str__(self) -> str:
        return self.message


MetadataParseError = ParseError | InvalidMetadataFormat | InvalidFieldValue
