"""Command orchestration.

``Logic`` is the single entry point for the UI: it parses a command line with
the parser of the model's current context, executes the command, records the
line in the history and writes the changed books to storage. Entries added to
the reading list get an offline copy when an article storage is configured.
"""

import logging
from typing import Dict, Iterable, Optional, Tuple

from reading_list.exceptions import CommandExecutionError, NetworkError
from reading_list.logic.commands import CommandResult
from reading_list.logic.executor import execute_command
from reading_list.logic.history import CommandHistory
from reading_list.logic.messages import FILE_OPS_ERROR_MESSAGE
from reading_list.logic.parser import (
    ArchivesParser,
    EntryBookParser,
    FeedsParser,
    ListParser,
    SearchParser,
)
from reading_list.models.model import Model, ModelContext
from reading_list.models.schemas import Entry
from reading_list.services import reader


logger = logging.getLogger(__name__)


class Logic:
    """Runs command lines against a model."""

    PARSERS: Dict[ModelContext, EntryBookParser] = {
        ModelContext.LIST: ListParser(),
        ModelContext.ARCHIVES: ArchivesParser(),
        ModelContext.SEARCH: SearchParser(),
        ModelContext.FEEDS: FeedsParser(),
    }

    def __init__(
        self,
        model: Model,
        storage=None,
        history: Optional[CommandHistory] = None,
        article_storage=None,
    ):
        """
        Args:
            model: Model to execute commands against
            storage: Optional StorageManager the books are saved to after
                every successful command
            history: Optional history to append to
            article_storage: Optional DataDirectoryArticleStorage holding
                offline copies of added entries
        """
        self.model = model
        self.storage = storage
        self.history = history if history is not None else CommandHistory()
        self.article_storage = article_storage

    def execute(self, command_text: str) -> CommandResult:
        """Parse and execute one command line.

        Raises:
            ParseError: If the line cannot be parsed in the current context
            CommandExecutionError: If the command fails or the books cannot
                be saved
        """
        logger.info(f"----------------[USER COMMAND][{command_text}]")

        parser = self.PARSERS[self.model.context]
        command = parser.parse_command(command_text)
        result = execute_command(command, self.model, self.history)
        self.history.add(command_text)

        if self.article_storage is not None:
            self._save_offline_copies(result.added)
        if self.storage is not None:
            self._save()

        return result

    def _save_offline_copies(self, entries: Iterable[Entry]) -> None:
        for entry in entries:
            if entry.address:
                continue
            try:
                html = reader.fetch_page(entry.link)
                address = self.article_storage.save_article(entry.link, html)
            except (NetworkError, OSError) as e:
                logger.warning(f"No offline copy of {entry.link}: {e}")
                continue
            self.model.set_entry(entry, entry.with_changes(address=address), context=ModelContext.LIST)

    def _save(self) -> None:
        try:
            self.storage.save_list_entry_book(self.model.list_entry_book)
            self.storage.save_archives_entry_book(self.model.archives_entry_book)
            self.storage.save_feeds_entry_book(self.model.feeds_entry_book)
        except OSError as e:
            logger.error(f"Failed to save entry books: {e}")
            raise CommandExecutionError(FILE_OPS_ERROR_MESSAGE + str(e)) from e

    @property
    def filtered_entry_list(self) -> Tuple[Entry, ...]:
        return self.model.filtered_entry_list

    @property
    def context(self) -> ModelContext:
        return self.model.context
