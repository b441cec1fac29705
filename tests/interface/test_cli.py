"""Tests for the redeck CLI commands."""

import json
import logging

import pytest
from typer.testing import CliRunner

from redeck.application.parser import parse_file
from redeck.consts import VERSION
from redeck.domain.errors import (
    CardIndexError,
    InvalidFieldValue,
    InvalidMetadataFormat,
    NoMatchingTypeError,
    ParseError,
)
from redeck.interface.cli import app, humanize_error

runner = CliRunner()


def _write(tmp_path, name, text):
    path = tmp_path / name
    path.write_bytes(text.encode("utf-8"))
    return path


# --- Help / version ---


def test_cli_help():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    for command in ["check", "cards", "fmt", "add", "new-id", "duplicates", "config"]:
        assert command in result.stdout


def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert result.stdout.strip() == VERSION


# --- check ---


def test_check_valid(deck_file):
    result = runner.invoke(app, ["check", str(deck_file)])
    assert result.exit_code == 0
    assert "Valid deck 'Geography'" in result.stdout
    assert "Items: 2  Cards: 3  (cloze: 1, qa: 1)" in result.stdout


def test_check_json(deck_file):
    result = runner.invoke(app, ["check", str(deck_file), "--json"])
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["ok"] is True
    assert data["title"] == "Geography"
    assert data["items"] == 2
    assert data["cards"] == 3
    assert data["types"] == {"qa": 1, "cloze": 1}
    assert data["errors"] == []


@pytest.mark.parametrize(
    "content,expected_output",
    [
        ("<!--@ a 0 0 7 0-->\nQ\n---\nA\n", "Field Error (line 1): state is '7'"),
        ("<!--@ a 0 0-->\nQ\n---\nA\n", "Metadata Error (line 1): Expected 5-6 fields, got 3"),
        ("<!--@ a 0 0 0 0-->\nJust a note\n", "Unknown Item Type"),
        ("<!--@ a 0 0 0 0-->\n{{c1::x}} {{c2::y}}\n", "Card Count Mismatch: 1 metadata lines for 2 cloze cards"),
        ("---\ntitle: A\ntitle: B\n---\n", "Front-matter: found duplicate key"),
    ],
    ids=["bad_field", "field_count", "unknown_type", "card_count", "frontmatter"],
)
def test_check_failures(tmp_path, content, expected_output):
    path = _write(tmp_path, "deck.md", content)
    result = runner.invoke(app, ["check", str(path)])
    assert result.exit_code == 1
    assert expected_output in result.stdout


def test_check_unclosed_comment_is_content(tmp_path):
    path = _write(tmp_path, "deck.md", "<!--@ a 0 0 0 0-->\nQ\n---\nA\n<!--@ todo\n")
    result = runner.invoke(app, ["check", str(path), "--json"])
    assert result.exit_code == 0
    assert json.loads(result.stdout)["cards"] == 1


def test_check_failure_json(tmp_path):
    path = _write(tmp_path, "deck.md", "<!--@ a 0 0 0 0-->\nJust a note\n")
    result = runner.invoke(app, ["check", str(path), "--json"])
    assert result.exit_code == 1
    data = json.loads(result.stdout)
    assert data["ok"] is False
    assert data["errors"][0]["item"] == 0


def test_check_file_not_found(tmp_path):
    result = runner.invoke(app, ["check", str(tmp_path / "missing.md")])
    assert result.exit_code == 1
    assert "Cannot read" in result.stdout


def test_check_uses_configured_types(deck_file, monkeypatch):
    monkeypatch.setenv("REDECK_ITEM_TYPES", "qa")
    result = runner.invoke(app, ["check", str(deck_file)])
    assert result.exit_code == 1
    assert "Unknown Item Type" in result.stdout


def test_invalid_config_is_reported(deck_file, monkeypatch):
    monkeypatch.setenv("REDECK_ITEM_TYPES", "qa,qa")
    result = runner.invoke(app, ["check", str(deck_file)])
    assert result.exit_code == 1
    assert "Invalid configuration" in result.stdout


# --- cards ---


def test_cards_json(deck_file):
    result = runner.invoke(app, ["cards", str(deck_file), "--json"])
    assert result.exit_code == 0
    rows = json.loads(result.stdout)
    assert [row["type"] for row in rows] == ["qa", "cloze", "cloze"]
    assert rows[0]["prompt"] == "What is the capital of France?"
    assert rows[0]["reveal"] == "Paris"
    assert rows[0]["state"] == "review"
    assert rows[1]["prompt"] == "The [...] flows through Paris.\n"
    assert rows[2]["reveal"] == "The Seine flows through Paris.\n"


def test_cards_text(deck_file):
    result = runner.invoke(app, ["cards", str(deck_file)])
    assert result.exit_code == 0
    assert "01JFQ4ZB8N9M2K3X7YTWVHGR5A  [qa, review]" in result.stdout
    assert "  Q: What is the capital of France?" in result.stdout


def test_cards_skips_unknown_items(tmp_path):
    path = _write(tmp_path, "deck.md", "<!--@ a 0 0 0 0-->\nnote\n\n<!--@ b 0 0 0 0-->\nQ\n---\nA\n")
    result = runner.invoke(app, ["cards", str(path), "--json"])
    assert result.exit_code == 0
    assert [row["id"] for row in json.loads(result.stdout)] == ["b"]


# --- fmt ---


def test_fmt_canonical_file_is_unchanged(deck_file):
    before = deck_file.read_bytes()
    result = runner.invoke(app, ["fmt", str(deck_file)])
    assert result.exit_code == 0
    assert "already formatted" in result.stdout
    assert deck_file.read_bytes() == before


def test_fmt_check_and_rewrite(tmp_path):
    path = _write(tmp_path, "deck.md", "<!--@  a 0 0 0 0 2025-01-04T11:30:00+01:00 -->\nQ\n---\nA\n")

    result = runner.invoke(app, ["fmt", str(path), "--check"])
    assert result.exit_code == 1
    assert "would be reformatted" in result.stdout

    result = runner.invoke(app, ["fmt", str(path)])
    assert result.exit_code == 0
    assert path.read_text(encoding="utf-8") == (
        "<!--@ a 0 0 0 0 2025-01-04T10:30:00.000Z-->\nQ\n---\nA\n"
    )

    result = runner.invoke(app, ["fmt", str(path), "--check"])
    assert result.exit_code == 0


def test_fmt_preserves_crlf(tmp_path):
    path = _write(tmp_path, "deck.md", "# D\r\n<!--@ a  0 0 0 0-->\r\nQ\r\n---\r\nA\r\n")
    result = runner.invoke(app, ["fmt", str(path)])
    assert result.exit_code == 0
    assert path.read_bytes() == b"# D\r\n<!--@ a 0 0 0 0-->\r\nQ\r\n---\r\nA\r\n"


def test_fmt_invalid_file(tmp_path):
    path = _write(tmp_path, "deck.md", "<!--@ a 0 0 0 x-->\n")
    result = runner.invoke(app, ["fmt", str(path)])
    assert result.exit_code == 1
    assert path.read_text(encoding="utf-8") == "<!--@ a 0 0 0 x-->\n"


# --- add ---


def test_add_creates_deck(tmp_path):
    path = tmp_path / "new.md"
    result = runner.invoke(app, ["add", str(path), "{{c1::Rome}} is the capital of {{c2::Italy}}."])
    assert result.exit_code == 0
    assert "Added 2 card(s)" in result.stdout

    parsed = parse_file(path.read_text(encoding="utf-8"))
    assert parsed.card_count == 2
    assert parsed.items[0].content == "{{c1::Rome}} is the capital of {{c2::Italy}}.\n"
    for meta in parsed.items[0].cards:
        assert meta.id in result.stdout


def test_add_appends_to_existing(deck_file):
    result = runner.invoke(app, ["add", str(deck_file), "-"], input="Largest ocean?\n---\nPacific\n")
    assert result.exit_code == 0

    parsed = parse_file(deck_file.read_text(encoding="utf-8"))
    assert len(parsed.items) == 3
    assert parsed.items[2].content == "Largest ocean?\n---\nPacific\n"
    assert parsed.items[1].content == "The {{c1::Seine}} flows through {{c2::Paris}}.\n"


def test_add_rejects_unknown_content(tmp_path):
    path = tmp_path / "new.md"
    result = runner.invoke(app, ["add", str(path), "just a note"])
    assert result.exit_code == 1
    assert "Unknown Item Type" in result.stdout
    assert not path.exists()


# --- new-id ---


def test_new_id():
    result = runner.invoke(app, ["new-id", "--count", "3"])
    assert result.exit_code == 0
    ids = result.stdout.split()
    assert len(ids) == 3
    assert len(set(ids)) == 3
    assert all(len(i) == 26 for i in ids)


def test_new_id_rejects_zero():
    result = runner.invoke(app, ["new-id", "--count", "0"])
    assert result.exit_code != 0


# --- duplicates ---


def test_duplicates_none(deck_file):
    result = runner.invoke(app, ["duplicates", str(deck_file)])
    assert result.exit_code == 0
    assert "No duplicate ids" in result.stdout


def test_duplicates_across_files(tmp_path, deck_file):
    other = _write(tmp_path, "other.md", "<!--@ 01JFQ4ZB8N9M2K3X7YTWVHGR5A 0 0 0 0-->\nQ\n---\nA\n")
    result = runner.invoke(app, ["duplicates", str(deck_file), str(other), "--json"])
    assert result.exit_code == 1
    data = json.loads(result.stdout)
    assert data["ok"] is False
    locations = data["duplicates"]["01JFQ4ZB8N9M2K3X7YTWVHGR5A"]
    assert locations == [
        {"path": str(deck_file), "item": 0, "card": 0},
        {"path": str(other), "item": 0, "card": 0},
    ]


# --- config ---


def test_config_show():
    result = runner.invoke(app, ["config", "show"])
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["item_types"] == ["qa", "cloze"]
    assert data["qa_separator"] == "---"


def test_config_show_env(monkeypatch):
    monkeypatch.setenv("REDECK_CLOZE_PLACEHOLDER", "___")
    result = runner.invoke(app, ["config", "show"])
    assert json.loads(result.stdout)["cloze_placeholder"] == "___"


# --- verbosity ---


def test_verbose_flag(deck_file):
    result = runner.invoke(app, ["-v", "check", str(deck_file)])
    assert result.exit_code == 0
    assert logging.getLogger("redeck").level == logging.DEBUG


def test_default_verbosity_is_info(deck_file):
    result = runner.invoke(app, ["check", str(deck_file)])
    assert result.exit_code == 0
    assert logging.getLogger("redeck").level == logging.INFO


def test_configured_verbosity_sets_log_level(deck_file, monkeypatch):
    monkeypatch.setenv("REDECK_VERBOSE", "0")
    runner.invoke(app, ["check", str(deck_file)])
    assert logging.getLogger("redeck").level == logging.WARNING

    runner.invoke(app, ["-v", "check", str(deck_file)])
    assert logging.getLogger("redeck").level == logging.INFO


# --- humanize_error ---


def test_humanize_parse_error():
    msg = humanize_error(ParseError(line=2, column=5, message="Unterminated", source="<!--@ a"))
    assert msg.startswith("Syntax Error (line 2, column 5): Unterminated")
    assert "<!--@ a" in msg


def test_humanize_metadata_errors():
    assert "Metadata Error" in humanize_error(InvalidMetadataFormat(line=1, raw="x", reason="bad"))
    msg = humanize_error(InvalidFieldValue(line=3, field="state", value="9", expected="0-3"))
    assert msg == "Field Error (line 3): state is '9', expected 0-3"


def test_humanize_no_matching_type():
    assert "no item types configured" in humanize_error(NoMatchingTypeError(raw="x", tried_types=()))


def test_humanize_fallback():
    assert humanize_error(CardIndexError(item_index=1, card_index=0, message="gone")) == "gone"
