"""SprachApp CLI: study, pack, stats and backup commands."""

import asyncio
import json
import logging
import sys
import time
from datetime import date
from pathlib import Path
from typing import Annotated

import typer

from sprachapp.application.cards import due_cards, next_due_card
from sprachapp.application.clock import day_key, now_ms
from sprachapp.application.config import AppConfig, resolve_config
from sprachapp.application.ledger import goal_progress, stat_for, xp_level, xp_progress
from sprachapp.application.study_service import answer_card, apply_pack
from sprachapp.domain.errors import SprachAppError
from sprachapp.domain.models import AppData, Lang
from sprachapp.infrastructure.adapters.bundled_packs import BundledPackSource
from sprachapp.infrastructure.backup import export_backup, import_backup
from sprachapp.infrastructure.state_store import JsonFileStateStore, load_or_create

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="sprachapp: spaced-repetition flashcards for language learners.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

config_app = typer.Typer(help="Manage sprachapp configuration.")
app.add_typer(config_app, name="config")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    data_dir: Annotated[
        Path | None, typer.Option(help="Directory holding the saved state.")
    ] = None,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 0,
):
    """Global settings for sprachapp."""
    ctx.ensure_object(dict)
    ctx.obj["overrides"] = {"data_dir": data_dir}
    if verbose:
        ctx.obj["overrides"]["verbose"] = verbose


def _config(ctx: typer.Context) -> AppConfig:
    overrides = (ctx.obj or {}).get("overrides", {})
    config = resolve_config(overrides)
    logging.getLogger("sprachapp").setLevel(config.log_level)
    return config


def _fail(error: Exception) -> typer.Exit:
    typer.secho(f"Error: {error}", fg="red", err=True)
    return typer.Exit(1)


def _load(config: AppConfig) -> tuple[JsonFileStateStore, AppData]:
    store = JsonFileStateStore(config.state_file)
    try:
        return store, load_or_create(store, now_ms(), username=config.username)
    except SprachAppError as e:
        raise _fail(e) from e


def _parse_lang(value: str) -> Lang:
    try:
        return Lang(value.upper())
    except ValueError:
        choices = ", ".join(lang.value for lang in Lang)
        raise typer.BadParameter(f"unknown language {value!r} (choose from {choices})") from None


# ---------------------------------------------------------------------------
# Study commands
# ---------------------------------------------------------------------------


@app.command()
def status(ctx: typer.Context):
    """Show profile, streak and today's progress."""
    _, data = _load(_config(ctx))
    now = now_ms()
    profile = data.profile
    lang = profile.target_lang
    today = stat_for(data.daily_stats_by_lang, lang, day_key(now))

    typer.echo(
        f"{profile.username}  ({profile.native_lang} -> {lang.value}, {profile.level.value})"
    )
    typer.echo(f"XP: {profile.xp}  Level {xp_level(profile.xp)}  ({xp_progress(profile.xp)}/100)")
    typer.echo(f"Streak: {profile.streak}  Best: {profile.best_streak}")
    typer.echo(
        f"Today: {today.reviewed}/{profile.daily_goal} reviewed "
        f"({goal_progress(today, profile.daily_goal):.0%}), {today.correct} correct"
    )
    typer.echo(f"Cards: {len(data.cards)}  Due now: {len(due_cards(data.cards, lang, now))}")


@app.command()
def due(ctx: typer.Context):
    """List the cards due for the current language."""
    _, data = _load(_config(ctx))
    cards = due_cards(data.cards, data.profile.target_lang, now_ms())
    if not cards:
        typer.secho("Nothing due. Load a pack with 'sprachapp pack'.", fg="green")
        return
    for card in cards:
        typer.echo(f"{card.id}  [{card.kind.value}]  {card.front}")


@app.command()
def review(
    ctx: typer.Context,
    limit: Annotated[int, typer.Option(help="Stop after this many cards.")] = 20,
):
    """[bold green]Review[/bold green] due cards for the current language."""
    config = _config(ctx)
    store, data = _load(config)
    lang = data.profile.target_lang
    done = 0

    while done < limit:
        card = next_due_card(data.cards, lang, now_ms())
        if card is None:
            break

        started = time.monotonic()
        typer.echo(f"\n{card.front}")
        typer.prompt("Press Enter to reveal", default="", show_default=False)
        typer.secho(card.back, bold=True)
        if card.example:
            typer.echo(f"  {card.example}")
            if card.example_translation:
                typer.echo(f"  {card.example_translation}")
        correct = typer.confirm("Did you know it?")

        minutes = (time.monotonic() - started) / 60
        # Re-read so a concurrent import or pack load is not overwritten.
        _, data = _load(config)
        try:
            data = answer_card(data, card.id, correct, now_ms(), minutes=minutes)
        except SprachAppError as e:
            raise _fail(e) from e
        store.save(data)
        done += 1

    if done == 0:
        typer.secho("All done for now!", fg="green")
    else:
        typer.secho(f"Reviewed {done} cards. XP: {data.profile.xp}", fg="green")


@app.command()
def pack(
    ctx: typer.Context,
    lang: Annotated[str, typer.Argument(help="Language: EN, ES, FR or RU.")],
):
    """Download a language pack and switch to that language."""
    target = _parse_lang(lang)
    config = _config(ctx)
    source = BundledPackSource(config.packs_file, step_delay=config.download_step_delay)

    with typer.progressbar(length=100, label=f"Loading {target.value} pack") as bar:
        last = 0

        def on_progress(percent: int) -> None:
            nonlocal last
            bar.update(percent - last)
            last = percent

        try:
            content = asyncio.run(source.fetch(target, progress=on_progress))
        except SprachAppError as e:
            raise _fail(e) from e

    store, data = _load(config)
    before = len(data.cards)
    data = apply_pack(data, content, now_ms())
    store.save(data)
    typer.secho(
        f"{target.value}: {len(data.cards) - before} new cards ({len(data.cards)} total).",
        fg="green",
    )


@app.command()
def stats(
    ctx: typer.Context,
    lang: Annotated[
        str | None, typer.Option(help="Language to show. Defaults to the current one.")
    ] = None,
    days: Annotated[int, typer.Option(help="Number of most recent days.")] = 7,
):
    """Show daily review statistics."""
    _, data = _load(_config(ctx))
    target = _parse_lang(lang) if lang else data.profile.target_lang
    by_day = data.daily_stats_by_lang.get(target, {})
    if not by_day:
        typer.echo(f"No reviews yet for {target.value}.")
        return

    typer.echo(f"{'day':<12}{'reviewed':>9}{'correct':>9}{'wrong':>7}{'minutes':>9}")
    for key in sorted(by_day, reverse=True)[:days]:
        s = by_day[key]
        typer.echo(f"{key:<12}{s.reviewed:>9}{s.correct:>9}{s.wrong:>7}{s.minutes:>9.1f}")


# ---------------------------------------------------------------------------
# Backup commands
# ---------------------------------------------------------------------------


@app.command("export")
def export_cmd(
    ctx: typer.Context,
    dest: Annotated[Path, typer.Argument(help="Directory to write the backup to.")] = Path("."),
):
    """Export the full state to a backup file."""
    _, data = _load(_config(ctx))
    path = export_backup(data, dest, date.fromisoformat(day_key(now_ms())))
    typer.secho(f"Backup written to {path}", fg="green")


@app.command("import")
def import_cmd(
    ctx: typer.Context,
    path: Annotated[Path, typer.Argument(help="Backup file to restore.")],
):
    """Replace the full state with a backup file."""
    config = _config(ctx)
    try:
        data = import_backup(path)
    except SprachAppError as e:
        raise _fail(e) from e

    JsonFileStateStore(config.state_file).save(data)
    typer.secho(
        f"Backup loaded: {len(data.cards)} cards, {data.profile.xp} XP.",
        fg="green",
    )


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show(ctx: typer.Context):
    """Display final resolved configuration."""
    config = _config(ctx)
    d = {k: str(v) if isinstance(v, Path) else v for k, v in config.model_dump().items()}
    d["state_file"] = str(config.state_file)
    typer.echo(json.dumps(d, indent=2))
