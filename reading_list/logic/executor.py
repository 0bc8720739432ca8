"""Command execution.

``execute_command`` dispatches on the command's type to the handler registered
for it. Handlers validate everything that can fail before touching the model,
so a failed command leaves the model as it was.
"""

import logging
from functools import singledispatch

from reading_list.exceptions import CommandExecutionError, FeedError, NetworkError, NotAFeedError
from reading_list.logic.commands import (
    AddCommand,
    AddFromResultsCommand,
    ArchiveCommand,
    ClearCommand,
    CommandResult,
    ContextCommand,
    DeleteCommand,
    EditCommand,
    ExitCommand,
    FeedCommand,
    FindCommand,
    HelpCommand,
    HistoryCommand,
    ListCommand,
    RefreshCommand,
    SelectCommand,
    SubscribeCommand,
    UnarchiveCommand,
    UnsubscribeCommand,
    ViewModeCommand,
)
from reading_list.logic.history import CommandHistory
from reading_list.logic.messages import (
    MESSAGE_ENTRIES_LISTED_OVERVIEW,
    MESSAGE_INVALID_ENTRY_DISPLAYED_INDEX,
)
from reading_list.models.entry_book import show_all
from reading_list.models.model import Model, ModelContext
from reading_list.models.schemas import Entry
from reading_list.services import feed_fetcher


logger = logging.getLogger(__name__)


@singledispatch
def execute_command(command, model: Model, history: CommandHistory) -> CommandResult:
    """Execute ``command`` against ``model``.

    Raises:
        CommandExecutionError: If the command cannot be applied
    """
    raise TypeError(f"No handler registered for {type(command).__name__}")


def _entry_at(model: Model, index: int) -> Entry:
    """Resolve a one-based index against the current filtered view."""
    entries = model.filtered_entry_list
    if index < 1 or index > len(entries):
        raise CommandExecutionError(MESSAGE_INVALID_ENTRY_DISPLAYED_INDEX)
    return entries[index - 1]


@execute_command.register
def _execute_add(command: AddCommand, model: Model, history: CommandHistory) -> CommandResult:
    if model.has_entry(command.entry):
        raise CommandExecutionError(AddCommand.MESSAGE_DUPLICATE_ENTRY)
    model.add_entry(command.entry)
    return CommandResult(AddCommand.MESSAGE_SUCCESS.format(command.entry), added=(command.entry,))


@execute_command.register
def _execute_add_from_results(
    command: AddFromResultsCommand, model: Model, history: CommandHistory
) -> CommandResult:
    entry = _entry_at(model, command.index)
    if model.has_entry(entry, context=ModelContext.LIST):
        raise CommandExecutionError(AddFromResultsCommand.MESSAGE_DUPLICATE_ENTRY)
    model.add_entry(entry, context=ModelContext.LIST)
    return CommandResult(AddFromResultsCommand.MESSAGE_SUCCESS.format(entry), added=(entry,))


@execute_command.register
def _execute_edit(command: EditCommand, model: Model, history: CommandHistory) -> CommandResult:
    entry_to_edit = _entry_at(model, command.index)

    if not command.descriptor.is_any_field_set():
        raise CommandExecutionError(EditCommand.MESSAGE_NOT_EDITED)

    try:
        edited_entry = command.descriptor.apply_to(entry_to_edit)
    except ValueError as e:
        raise CommandExecutionError(str(e)) from e

    if not entry_to_edit.is_same_entry(edited_entry) and model.has_entry(edited_entry):
        raise CommandExecutionError(EditCommand.MESSAGE_DUPLICATE_ENTRY)

    model.set_entry(entry_to_edit, edited_entry)
    model.update_filtered_entry_list(show_all)
    return CommandResult(EditCommand.MESSAGE_SUCCESS.format(edited_entry))


@execute_command.register
def _execute_delete(command: DeleteCommand, model: Model, history: CommandHistory) -> CommandResult:
    entry = _entry_at(model, command.index)
    model.delete_entry(entry)
    return CommandResult(DeleteCommand.MESSAGE_SUCCESS.format(entry))


@execute_command.register
def _execute_clear(command: ClearCommand, model: Model, history: CommandHistory) -> CommandResult:
    model.clear_entry_book()
    return CommandResult(ClearCommand.MESSAGE_SUCCESS.format(model.context))


@execute_command.register
def _execute_list(command: ListCommand, model: Model, history: CommandHistory) -> CommandResult:
    model.update_filtered_entry_list(show_all)
    return CommandResult(ListCommand.MESSAGE_SUCCESS)


@execute_command.register
def _execute_find(command: FindCommand, model: Model, history: CommandHistory) -> CommandResult:
    model.update_filtered_entry_list(command.predicate)
    return CommandResult(MESSAGE_ENTRIES_LISTED_OVERVIEW.format(len(model.filtered_entry_list)))


@execute_command.register
def _execute_select(command: SelectCommand, model: Model, history: CommandHistory) -> CommandResult:
    entry = _entry_at(model, command.index)
    return CommandResult(SelectCommand.MESSAGE_SUCCESS.format(command.index), selected=entry)


@execute_command.register
def _execute_archive(command: ArchiveCommand, model: Model, history: CommandHistory) -> CommandResult:
    entry = _entry_at(model, command.index)
    if model.has_entry(entry, context=ModelContext.ARCHIVES):
        raise CommandExecutionError(ArchiveCommand.MESSAGE_DUPLICATE_ENTRY)
    model.delete_entry(entry)
    model.add_entry(entry, context=ModelContext.ARCHIVES)
    return CommandResult(ArchiveCommand.MESSAGE_SUCCESS.format(entry))


@execute_command.register
def _execute_unarchive(command: UnarchiveCommand, model: Model, history: CommandHistory) -> CommandResult:
    entry = _entry_at(model, command.index)
    if model.has_entry(entry, context=ModelContext.LIST):
        raise CommandExecutionError(UnarchiveCommand.MESSAGE_DUPLICATE_ENTRY)
    model.delete_entry(entry)
    model.add_entry(entry, context=ModelContext.LIST)
    return CommandResult(UnarchiveCommand.MESSAGE_SUCCESS.format(entry))


@execute_command.register
def _execute_context(command: ContextCommand, model: Model, history: CommandHistory) -> CommandResult:
    model.set_context(command.context)
    return CommandResult(ContextCommand.MESSAGE_SUCCESS.format(command.context))


@execute_command.register
def _execute_feed(command: FeedCommand, model: Model, history: CommandHistory) -> CommandResult:
    fetch = command.fetcher or feed_fetcher.fetch_feed
    try:
        book = fetch(command.url)
    except NotAFeedError as e:
        raise CommandExecutionError(FeedCommand.MESSAGE_FAILURE_XML.format(command.url)) from e
    except NetworkError as e:
        raise CommandExecutionError(FeedCommand.MESSAGE_FAILURE_NET.format(e)) from e

    model.set_search_entry_book(book)
    model.set_context(ModelContext.SEARCH)
    return CommandResult(FeedCommand.MESSAGE_SUCCESS.format(command.url))


@execute_command.register
def _execute_subscribe(command: SubscribeCommand, model: Model, history: CommandHistory) -> CommandResult:
    if any(feed.link == command.url for feed in model.feeds_entry_book):
        raise CommandExecutionError(SubscribeCommand.MESSAGE_DUPLICATE_FEED)
    model.add_entry(Entry(title=command.title, link=command.url), context=ModelContext.FEEDS)
    return CommandResult(SubscribeCommand.MESSAGE_SUCCESS.format(command.url))


@execute_command.register
def _execute_unsubscribe(
    command: UnsubscribeCommand, model: Model, history: CommandHistory
) -> CommandResult:
    feed = _entry_at(model, command.index)
    model.delete_entry(feed)
    return CommandResult(UnsubscribeCommand.MESSAGE_SUCCESS.format(feed.link))


@execute_command.register
def _execute_refresh(command: RefreshCommand, model: Model, history: CommandHistory) -> CommandResult:
    fetch = command.fetcher or feed_fetcher.fetch_feed
    feeds = model.feeds_entry_book.entries
    added = 0
    failures = []

    for feed in feeds:
        try:
            book = fetch(feed.link)
        except FeedError as e:
            logger.warning(f"Error refreshing {feed.link}: {e}")
            failures.append(RefreshCommand.MESSAGE_FEED_FAILED.format(feed.title, e))
            continue

        for entry in book:
            if model.has_entry(entry, context=ModelContext.LIST):
                continue
            if model.has_entry(entry, context=ModelContext.ARCHIVES):
                logger.debug(f"Skipping archived feed item: {entry.link}")
                continue
            model.add_entry(entry, context=ModelContext.LIST)
            added += 1

    message = RefreshCommand.MESSAGE_SUCCESS.format(len(feeds), added)
    if failures:
        message += "\n" + "\n".join(failures)
    return CommandResult(message)


@execute_command.register
def _execute_view_mode(command: ViewModeCommand, model: Model, history: CommandHistory) -> CommandResult:
    model.set_view_mode(command.view_mode)
    return CommandResult(ViewModeCommand.MESSAGE_SET_VIEW_MODE_SUCCESS.format(command.view_mode))


@execute_command.register
def _execute_history(command: HistoryCommand, model: Model, history: CommandHistory) -> CommandResult:
    if history.is_empty():
        return CommandResult(HistoryCommand.MESSAGE_NO_HISTORY)
    previous_commands = "\n".join(reversed(history.entries))
    return CommandResult(HistoryCommand.MESSAGE_SUCCESS.format(previous_commands))


@execute_command.register
def _execute_help(command: HelpCommand, model: Model, history: CommandHistory) -> CommandResult:
    return CommandResult(HelpCommand.SHOWING_HELP_MESSAGE, show_help=True)


@execute_command.register
def _execute_exit(command: ExitCommand, model: Model, history: CommandHistory) -> CommandResult:
    return CommandResult(ExitCommand.MESSAGE_EXIT_ACKNOWLEDGEMENT, exit=True)
