"""
Question/answer item type.

Canonical syntax::

    Question line(s)
    ---
    Answer line(s)
"""

from dataclasses import dataclass

from redeck.domain.constants import DEFAULT_QA_SEPARATOR, QA_TYPE_NAME
from redeck.domain.errors import ContentParseError
from redeck.domain.item_type import CardSpec, ItemType, manual_card_spec


@dataclass(frozen=True)
class QAContent:
    question: str
    answer: str


class QAType(ItemType[QAContent]):
    name = QA_TYPE_NAME

    def __init__(self, separator: str = DEFAULT_QA_SEPARATOR):
        self.separator = separator

    def parse(self, content: str) -> QAContent | ContentParseError:
        lines = content.split("\n")
        for index, line in enumerate(lines):
            if line.strip() == self.separator:
                question = "\n".join(lines[:index]).strip()
                answer = "\n".join(lines[index + 1 :]).strip()
                break
        else:
            return self._error(
                f"Missing '{self.separator}' separator between question and answer", content
            )

        if not question:
            return self._error("Question cannot be empty", content)
        if not answer:
            return self._error("Answer cannot be empty", content)
        return QAContent(question=question, answer=answer)

    def cards(self, content: QAContent) -> list[CardSpec]:
        return [manual_card_spec(content.question, content.answer, self.name)]

    def _error(self, message: str, raw: str) -> ContentParseError:
        return ContentParseError(type=self.name, message=message, raw=raw)
