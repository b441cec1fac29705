from redeck.application.metadata import serialize_metadata
from redeck.domain.models import ParsedFile


def serialize_file(file: ParsedFile) -> str:
    """
    Serialize a ParsedFile back to text.

    Round-trip guarantees:
    - Preamble and item content: byte-perfect.
    - Metadata lines: canonical (single spaces, UTC timestamps), each followed
      by ``file.newline``.
    """
    parts = [file.preamble]
    for item in file.items:
        for card in item.cards:
            parts.append(serialize_metadata(card))
            parts.append(file.newline)
        parts.append(item.content)
    return "".join(parts)
