import pytest

SAMPLE_DECK = (
    "---\n"
    "title: Geography\n"
    "---\n"
    "# Capitals\n"
    "\n"
    "<!--@ 01JFQ4ZB8N9M2K3X7YTWVHGR5A 5.2 3.1 2 0 2025-01-04T10:30:00.000Z-->\n"
    "What is the capital of France?\n"
    "---\n"
    "Paris\n"
    "\n"
    "<!--@ 01JFQ4ZB8N9M2K3X7YTWVHGR5B 0 0 0 0-->\n"
    "<!--@ 01JFQ4ZB8N9M2K3X7YTWVHGR5C 0 0 0 0-->\n"
    "The {{c1::Seine}} flows through {{c2::Paris}}.\n"
)


@pytest.fixture
def sample_deck_text():
    return SAMPLE_DECK


@pytest.fixture
def deck_file(tmp_path):
    """Writes the sample deck to a temporary file."""
    path = tmp_path / "geography.md"
    path.write_bytes(SAMPLE_DECK.encode("utf-8"))
    return path


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir(exist_ok=True)

    # Mocking HOME to a temp directory to isolate config files
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture(autouse=True)
def isolated_config(mock_home, monkeypatch):
    """Keeps the developer's own config and REDECK_* variables out of tests."""
    import os

    for key in list(os.environ):
        if key.startswith("REDECK_"):
            monkeypatch.delenv(key)
    return mock_home
