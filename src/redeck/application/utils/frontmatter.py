"""YAML front-matter helpers for deck preambles."""

from typing import Any

import yaml  # type: ignore
import yaml.constructor

# ---------- Front-matter helpers ----------


def split_frontmatter(preamble: str) -> tuple[str | None, str]:
    """Split a deck preamble into its raw YAML block and the remaining text.
    Uses line-by-line parsing instead of regex for reliability.
    """
    # Handle potential BOM (Byte Order Mark)
    text = preamble.lstrip("\ufeff")
    lines = text.split("\n")

    if not lines or lines[0].strip() != "---":
        return None, preamble

    for i, line in enumerate(lines[1:], start=1):
        if line.strip() == "---":
            return "\n".join(lines[1:i]), "\n".join(lines[i + 1 :])

    # No closing ---
    return None, preamble


def parse_frontmatter(preamble: str) -> dict[str, Any]:
    """Parse YAML front-matter at the top of a deck preamble.

    Returns an empty dict when there is no front-matter, and
    ``{"__yaml_error__": message}`` when the block is not valid YAML or is not
    a mapping.
    """
    raw, _ = split_frontmatter(preamble)
    if raw is None:
        return {}

    # Fix tabs (common user error)
    if "\t" in raw:
        raw = raw.replace("\t", "  ")

    try:
        meta = yaml.load(raw, Loader=UniqueKeyLoader) or {}
    except yaml.YAMLError as e:
        return {"__yaml_error__": str(e)}

    if not isinstance(meta, dict):
        return {"__yaml_error__": f"front-matter must be a mapping, got {type(meta).__name__}"}
    return meta


def deck_title(preamble: str) -> str | None:
    meta = parse_frontmatter(preamble)
    title = meta.get("title")
    return str(title) if title is not None else None


class UniqueKeyLoader(yaml.SafeLoader):
    """Custom YAML loader that forbids duplicate keys."""

    def construct_mapping(self, node, deep=False):
        seen = set()
        for key_node, _ in node.value:
            key = self.construct_object(key_node, deep=deep)
            if key in seen:
                raise yaml.constructor.ConstructorError(
                    None, None, f"found duplicate key '{key}'", key_node.start_mark
                )
            seen.add(key)
        return super().construct_mapping(node, deep)
