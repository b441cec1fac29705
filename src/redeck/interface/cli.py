"""redeck CLI: deck validation, listing, formatting and authoring commands."""

import json
import logging
import sys
from collections import Counter
from pathlib import Path
from typing import Annotated, Any

import typer
from pydantic import ValidationError

from redeck.application.config import resolve_config
from redeck.application.deck_ops import (
    append_item,
    extract_card_locations,
    find_duplicates,
    new_item,
)
from redeck.application.id_service import generate_id
from redeck.application.inference import infer_type
from redeck.application.parser import parse_file
from redeck.application.registry import build_item_types
from redeck.application.serializer import serialize_file
from redeck.application.utils.frontmatter import deck_title, parse_frontmatter
from redeck.consts import VERSION
from redeck.domain.errors import (
    InvalidFieldValue,
    InvalidMetadataFormat,
    NoMatchingTypeError,
    ParseError,
    RedeckError,
)
from redeck.domain.item_type import ItemType
from redeck.domain.models import ParsedFile

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="redeck: plain-text spaced-repetition decks.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

config_app = typer.Typer(help="Manage redeck configuration.")
app.add_typer(config_app, name="config")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def humanize_error(err: RedeckError) -> str:
    """Render a deck error as a short message for terminal output."""
    if isinstance(err, ParseError):
        return f"Syntax Error (line {err.line}, column {err.column}): {err.message}\n  {err.source}"
    if isinstance(err, InvalidMetadataFormat):
        return f"Metadata Error (line {err.line}): {err.reason}"
    if isinstance(err, InvalidFieldValue):
        return (
            f"Field Error (line {err.line}): {err.field} is {err.value!r}, "
            f"expected {err.expected}"
        )
    if isinstance(err, NoMatchingTypeError):
        reasons = "; ".join(str(e) for e in err.errors) or "no item types configured"
        return f"Unknown Item Type: {reasons}"
    return str(err)


def _fail(message: str, json_output: bool = False, **extra: Any):
    if json_output:
        typer.echo(json.dumps({"ok": False, "error": message, **extra}, indent=2))
    else:
        typer.secho(f"❌ {message}", fg="red")
    raise typer.Exit(1)


def _read_text(path: Path) -> str:
    # newline="" keeps CRLF decks byte-exact
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


def _write_text(path: Path, text: str) -> None:
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)


def _load_deck(path: Path, json_output: bool = False) -> tuple[str, ParsedFile]:
    try:
        text = _read_text(path)
    except OSError as e:
        _fail(f"Cannot read {path}: {e.strerror or e}", json_output, path=str(path))
    try:
        return text, parse_file(text)
    except RedeckError as e:
        logger.debug(f"[cli] parse failed for {path}: {e!r}")
        _fail(humanize_error(e), json_output, path=str(path))


def _item_types(json_output: bool = False) -> tuple[ItemType[Any], ...]:
    try:
        return build_item_types(resolve_config())
    except ValidationError as e:
        _fail(f"Invalid configuration: {e}", json_output)


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


def _log_level(verbosity: int) -> int:
    if verbosity <= 0:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 0,
):
    """Global settings for redeck."""
    try:
        base = resolve_config().verbose
    except ValidationError:
        # commands report the invalid configuration themselves
        base = 1
    logging.getLogger("redeck").setLevel(_log_level(base + verbose))


# ---------------------------------------------------------------------------
# Root commands
# ---------------------------------------------------------------------------


@app.command()
def version():
    """Print the redeck version."""
    typer.echo(VERSION)


@app.command()
def check(
    path: Annotated[Path, typer.Argument(help="Deck file to validate.")],
    json_output: Annotated[bool, typer.Option("--json", help="Output results as JSON.")] = False,
):
    """Validate a deck: metadata lines, item types and front-matter."""
    _, deck = _load_deck(path, json_output)
    types = _item_types(json_output)

    errors: list[dict[str, Any]] = []
    type_counts: Counter[str] = Counter()

    meta = parse_frontmatter(deck.preamble)
    if "__yaml_error__" in meta:
        errors.append({"item": None, "error": f"Front-matter: {meta['__yaml_error__']}"})

    for index, item in enumerate(deck.items):
        try:
            inferred = infer_type(types, item.content)
        except NoMatchingTypeError as e:
            errors.append({"item": index, "error": humanize_error(e)})
            continue

        type_counts[inferred.type.name] += 1
        expected = len(inferred.cards())
        if expected != len(item.cards):
            errors.append(
                {
                    "item": index,
                    "error": (
                        f"Card Count Mismatch: {len(item.cards)} metadata lines "
                        f"for {expected} {inferred.type.name} cards"
                    ),
                }
            )

    title = deck_title(deck.preamble)
    ok = not errors

    if json_output:
        typer.echo(
            json.dumps(
                {
                    "ok": ok,
                    "path": str(path),
                    "title": title,
                    "items": len(deck.items),
                    "cards": deck.card_count,
                    "types": dict(type_counts),
                    "errors": errors,
                },
                indent=2,
            )
        )
    else:
        label = f"'{title}' ({path})" if title else str(path)
        if ok:
            typer.secho(f"✅ Valid deck {label}", fg="green")
        else:
            typer.secho(f"❌ Validation Failed for {label}", fg="red")
            for err in errors:
                where = f"item {err['item']}" if err["item"] is not None else "preamble"
                typer.echo(f"  {where}: {err['error']}")
        summary = ", ".join(f"{name}: {count}" for name, count in sorted(type_counts.items()))
        typer.echo(f"Items: {len(deck.items)}  Cards: {deck.card_count}  ({summary or 'none'})")

    if not ok:
        raise typer.Exit(1)


@app.command()
def cards(
    path: Annotated[Path, typer.Argument(help="Deck file to list.")],
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """List every card with its prompt and reveal text."""
    _, deck = _load_deck(path, json_output)
    types = _item_types(json_output)

    rows = []
    for index, item in enumerate(deck.items):
        try:
            inferred = infer_type(types, item.content)
        except NoMatchingTypeError as e:
            logger.warning(f"Skipping item {index}: {humanize_error(e)}")
            continue

        specs = inferred.cards()
        if len(specs) != len(item.cards):
            logger.warning(
                f"Item {index} has {len(item.cards)} metadata lines for {len(specs)} cards"
            )
        for meta, spec in zip(item.cards, specs):
            rows.append(
                {
                    "id": meta.id,
                    "item": index,
                    "type": spec.card_type,
                    "state": meta.state.name.lower(),
                    "prompt": spec.prompt,
                    "reveal": spec.reveal,
                }
            )

    if json_output:
        typer.echo(json.dumps(rows, indent=2))
        return

    for row in rows:
        typer.secho(f"{row['id']}  [{row['type']}, {row['state']}]", bold=True)
        typer.echo(f"  Q: {row['prompt']}")
        typer.echo(f"  A: {row['reveal']}")


@app.command()
def fmt(
    path: Annotated[Path, typer.Argument(help="Deck file to format in place.")],
    check_only: Annotated[
        bool, typer.Option("--check", help="Only report whether the file would change.")
    ] = False,
):
    """Rewrite metadata lines in canonical form."""
    text, deck = _load_deck(path)
    formatted = serialize_file(deck)

    if formatted == text:
        typer.secho(f"{path} is already formatted.", fg="green")
        return

    if check_only:
        typer.secho(f"{path} would be reformatted.", fg="yellow")
        raise typer.Exit(1)

    _write_text(path, formatted)
    logger.debug(f"[cli] rewrote {path} ({len(text)} -> {len(formatted)} chars)")
    typer.secho(f"Formatted {path}.", fg="green")


@app.command()
def add(
    path: Annotated[Path, typer.Argument(help="Deck file to append to (created if missing).")],
    content: Annotated[str, typer.Argument(help="Item content, or '-' to read from stdin.")],
):
    """Append a new item with fresh card ids."""
    if content == "-":
        content = sys.stdin.read()

    if path.exists():
        _, deck = _load_deck(path)
    else:
        deck = ParsedFile(preamble="")

    types = _item_types()
    try:
        item = new_item(content, types)
    except NoMatchingTypeError as e:
        _fail(humanize_error(e))

    _write_text(path, serialize_file(append_item(deck, item)))
    typer.secho(f"Added {len(item.cards)} card(s) to {path}:", fg="green")
    for meta in item.cards:
        typer.echo(f"  {meta.id}")


@app.command("new-id")
def new_id(
    count: Annotated[int, typer.Option("--count", "-n", min=1, help="Number of ids.")] = 1,
):
    """Print freshly generated card ids."""
    for _ in range(count):
        typer.echo(generate_id())


@app.command()
def duplicates(
    paths: Annotated[list[Path], typer.Argument(help="Deck files to scan.")],
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """Report card ids that occur more than once across decks."""
    decks = [(str(p), _load_deck(p, json_output)[1]) for p in paths]
    dupes = find_duplicates(extract_card_locations(decks))

    if json_output:
        typer.echo(
            json.dumps(
                {
                    "ok": not dupes,
                    "duplicates": {
                        card_id: [
                            {"path": loc.path, "item": loc.item_index, "card": loc.card_index}
                            for loc in locs
                        ]
                        for card_id, locs in dupes.items()
                    },
                },
                indent=2,
            )
        )
    elif not dupes:
        typer.secho("No duplicate ids.", fg="green")
    else:
        typer.secho(f"Duplicate ids: {len(dupes)}", fg="red")
        for card_id, locs in dupes.items():
            typer.echo(f"  {card_id}")
            for loc in locs:
                typer.echo(f"    {loc.path} item {loc.item_index} card {loc.card_index}")

    if dupes:
        raise typer.Exit(1)


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show():
    """Display final resolved configuration."""
    try:
        config = resolve_config()
    except ValidationError as e:
        _fail(f"Invalid configuration: {e}")
    typer.echo(json.dumps(config.model_dump(), indent=2))
