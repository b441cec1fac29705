"""
Cloze-deletion item type.

Canonical syntax: ``The {{c1::capital}} of {{c2::France}} is Paris.``
With an optional hint: ``The {{c1::Paris::capital city}} of France.``

Grouping rule: one card per distinct group number, in ascending order. All
deletions sharing a number are hidden together on that group's card; other
groups show their plain text. A hint replaces the placeholder in the prompt
and never appears in the reveal.
"""

import re
from dataclasses import dataclass

from redeck.domain.constants import (
    CLOZE_HINT_SEPARATOR,
    CLOZE_RE,
    CLOZE_TYPE_NAME,
    DEFAULT_CLOZE_EMPHASIS,
    DEFAULT_CLOZE_PLACEHOLDER,
)
from redeck.domain.errors import ContentParseError
from redeck.domain.item_type import CardSpec, ItemType, manual_card_spec


@dataclass(frozen=True)
class ClozeDeletion:
    """
    One ``{{cN::...}}`` marker.

    Attributes:
        index: Group number N.
        hidden: Text hidden on the group's card.
        hint: Optional hint shown instead of the placeholder.
        start: Offset of the marker in the content.
        end: Offset just past the marker.
    """

    index: int
    hidden: str
    hint: str | None
    start: int
    end: int


@dataclass(frozen=True)
class ClozeContent:
    text: str
    deletions: tuple[ClozeDeletion, ...]

    @property
    def groups(self) -> list[int]:
        return sorted({d.index for d in self.deletions})


def _split_marker(body: str) -> tuple[str, str | None]:
    parts = body.split(CLOZE_HINT_SEPARATOR)
    hint = parts[1] if len(parts) > 1 and parts[1] else None
    return parts[0], hint


class ClozeType(ItemType[ClozeContent]):
    name = CLOZE_TYPE_NAME

    def __init__(
        self,
        placeholder: str = DEFAULT_CLOZE_PLACEHOLDER,
        emphasis: str = DEFAULT_CLOZE_EMPHASIS,
    ):
        self.placeholder = placeholder
        self.emphasis = emphasis

    def parse(self, content: str) -> ClozeContent | ContentParseError:
        deletions = []
        for match in CLOZE_RE.finditer(content):
            hidden, hint = _split_marker(match.group(2))
            deletions.append(
                ClozeDeletion(
                    index=int(match.group(1)),
                    hidden=hidden,
                    hint=hint,
                    start=match.start(),
                    end=match.end(),
                )
            )

        if not deletions:
            return ContentParseError(
                type=self.name,
                message="No cloze deletions found (expected {{c1::...}} syntax)",
                raw=content,
            )

        deletions.sort(key=lambda d: d.index)
        return ClozeContent(text=content, deletions=tuple(deletions))

    def cards(self, content: ClozeContent) -> list[CardSpec]:
        return [
            manual_card_spec(
                self.prompt(content, group),
                self.reveal(content, group),
                self.name,
            )
            for group in content.groups
        ]

    def prompt(self, content: ClozeContent, group: int) -> str:
        def render(match: re.Match) -> str:
            hidden, hint = _split_marker(match.group(2))
            if int(match.group(1)) != group:
                return hidden
            return f"[{hint}]" if hint else self.placeholder

        return CLOZE_RE.sub(render, content.text)

    def reveal(self, content: ClozeContent, group: int) -> str:
        def render(match: re.Match) -> str:
            hidden, _ = _split_marker(match.group(2))
            if int(match.group(1)) != group:
                return hidden
            return f"{self.emphasis}{hidden}{self.emphasis}"

        return CLOZE_RE.sub(render, content.text)
