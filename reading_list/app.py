"""reading_list - interactive command line

This module wires configuration, logging, storage and the command logic
together and runs the read-eval-print loop.
"""

import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional

import click

from reading_list.config import LOG_LEVELS, AppConfig, load_config
from reading_list.exceptions import NetworkError, ReadingListError
from reading_list.logging_config import setup_logging
from reading_list.logic import CommandResult, Logic
from reading_list.models.schemas import Entry
from reading_list.models.view_mode import ReaderViewStyle, ViewMode, ViewType
from reading_list.services.reader import ReaderArticle, extract_article, fetch_article
from reading_list.storage import (
    JsonUserPrefsStorage,
    StorageManager,
    init_user_prefs,
    load_model,
)


logger = logging.getLogger(__name__)

RECALL_PREVIOUS = "!-"
RECALL_NEXT = "!+"


def create_logic(config: AppConfig) -> Logic:
    """Load preferences and entry books and build the command logic.

    Args:
        config: Application configuration

    Returns:
        Logic bound to a model loaded from the configured data directory
    """
    logger.info("=============================[ Initializing reading list ]===========================")

    prefs_storage = JsonUserPrefsStorage(config.user_prefs_path)
    user_prefs = init_user_prefs(prefs_storage)
    storage = StorageManager.from_user_prefs(user_prefs.resolve(config.data_dir), prefs_storage)
    model = load_model(storage, user_prefs)

    logger.info(f"Loaded {len(model.list_entry_book)} reading list entries from {config.data_dir}")
    return Logic(model, storage, article_storage=storage.article_storage)


def load_article(entry: Entry, article_storage=None) -> ReaderArticle:
    """Read the entry's offline copy if there is one, else fetch the page.

    Raises:
        NetworkError: If there is no offline copy and the page cannot be
            downloaded
    """
    if article_storage is not None and entry.address:
        try:
            html = article_storage.read_article(entry.address)
        except OSError as e:
            logger.warning(f"Cannot read offline copy {entry.address}: {e}")
            html = None
        if html is not None:
            return extract_article(html)
    return fetch_article(entry.link)


def render_entry(entry: Entry, view_mode: ViewMode, article_storage=None) -> None:
    """Show a selected entry the way the view mode asks for."""
    if view_mode.view_type is ViewType.BROWSER:
        click.echo(f"{entry.title}\n{entry.link}")
        return

    try:
        article = load_article(entry, article_storage)
    except NetworkError as e:
        click.echo(f"Could not load {entry.link} in reader view: {e}", err=True)
        return

    style = {}
    if view_mode.reader_view_style is ReaderViewStyle.DARK:
        style = {"fg": "bright_white", "bg": "black"}

    click.echo(click.style(article.title or entry.title, bold=True, **style))
    click.echo(click.style(article.text, **style))


def render_entries(logic: Logic) -> None:
    entries = logic.filtered_entry_list
    click.echo(f"{logic.context} ({len(entries)})")
    for number, entry in enumerate(entries, start=1):
        click.echo(f"{number:>3}. {entry.title}")
        click.echo(f"     {entry.link}")


def run_repl(logic: Logic) -> None:
    """Read command lines until ``exit`` or end of input.

    ``!-`` and ``!+`` step through earlier command lines; the recalled line
    becomes the prompt default, so an empty answer runs it again.
    """
    render_entries(logic)
    recalled = ""

    while True:
        try:
            command_text = click.prompt(
                str(logic.context), prompt_suffix="> ", default=recalled, show_default=bool(recalled)
            )
        except click.exceptions.Abort:
            break

        if command_text.strip() == RECALL_PREVIOUS:
            recalled = logic.history.previous() or recalled
            continue
        if command_text.strip() == RECALL_NEXT:
            recalled = logic.history.next() or ""
            continue
        recalled = ""

        if not command_text.strip():
            continue

        shown_before = (logic.context, logic.filtered_entry_list)
        try:
            result = logic.execute(command_text)
        except ReadingListError as e:
            click.echo(str(e), err=True)
            continue

        if handle_result(logic, result):
            break

        if (logic.context, logic.filtered_entry_list) != shown_before:
            render_entries(logic)


def handle_result(logic: Logic, result: CommandResult) -> bool:
    """Display a command result; returns True when the session should end."""
    click.echo(result.message)

    if result.show_help:
        click.echo("\n\n".join(logic.PARSERS[logic.context].usages))
    if result.selected is not None:
        render_entry(result.selected, logic.model.view_mode, logic.article_storage)
    return result.exit


@click.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="JSON config file (default: config.json or $READING_LIST_CONFIG)",
)
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding the reading list data files",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Log file level",
)
@click.option(
    "--view",
    type=click.Choice([view_type.value for view_type in ViewType]),
    default=None,
    help="Start in browser or reader view",
)
def main(config_path: Optional[Path], data_dir: Optional[Path], log_level: Optional[str], view: Optional[str]) -> int:
    """Manage a reading list and RSS feeds from the command line."""
    config = load_config(config_path)
    if data_dir is not None:
        config = replace(config, data_dir=data_dir)
    if log_level is not None:
        config = replace(config, log_level=log_level)

    setup_logging(config)
    logic = create_logic(config)
    if view is not None:
        logic.model.set_view_mode(ViewMode(ViewType(view)))

    try:
        run_repl(logic)
    except KeyboardInterrupt:
        logger.info("Stopped by user")
    finally:
        logger.info("============================ [ Stopping reading list ] =============================")
        try:
            logic.storage.save_user_prefs(logic.model.user_prefs)
        except OSError as e:
            logger.error(f"Failed to save preferences: {e}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
