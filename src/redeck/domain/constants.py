"""Centralized constants for the deck file format.

Grammar patterns and format tokens live here so the codecs, the parser and
the item types import from a single source of truth.
"""

import re

# ---------- Metadata line ----------
METADATA_PREFIX = "<!--@ "
METADATA_SUFFIX = "-->"
METADATA_MIN_LENGTH = len(METADATA_PREFIX) + len(METADATA_SUFFIX) + 1
METADATA_LINE_RE = re.compile(r"^<!--@ (.+)-->$")
METADATA_MIN_FIELDS = 5
METADATA_MAX_FIELDS = 6

# ---------- Field grammars ----------
NUMERIC_RE = re.compile(r"^(0|[1-9]\d*)(\.\d+)?$", re.ASCII)
STATE_RE = re.compile(r"^[0-3]$")
LEARNING_STEPS_RE = re.compile(r"^(0|[1-9]\d*)$", re.ASCII)
ISO_TIMESTAMP_RE = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(\.\d+)?(Z|[+-]\d{2}:\d{2})$",
    re.ASCII,
)
ITEM_ID_RE = re.compile(r"^\S+$")

NUMERIC_GRAMMAR = "non-negative decimal matching (0|[1-9]\\d*)(\\.\\d+)?"
STATE_GRAMMAR = "single digit 0-3"
LEARNING_STEPS_GRAMMAR = "non-negative integer without leading zeros"
TIMESTAMP_GRAMMAR = "ISO 8601 date-time with timezone (Z or +/-HH:MM)"
ITEM_ID_GRAMMAR = "non-empty token without whitespace"

# ---------- Line endings ----------
LF = "\n"
CRLF = "\r\n"

# ---------- Item types ----------
QA_TYPE_NAME = "qa"
CLOZE_TYPE_NAME = "cloze"
DEFAULT_QA_SEPARATOR = "---"
CLOZE_RE = re.compile(r"\{\{c(\d+)::([^}]*)\}\}", re.ASCII)
CLOZE_HINT_SEPARATOR = "::"
DEFAULT_CLOZE_PLACEHOLDER = "[...]"
DEFAULT_CLOZE_EMPHASIS = ""

