"""Command values.

Each command is a frozen dataclass holding only its validated arguments, so two
commands built from the same arguments compare equal. Execution lives in
``reading_list.logic.executor``.
"""

from dataclasses import dataclass, field
from typing import Callable, ClassVar, FrozenSet, Optional, Tuple

from reading_list.models.entry_book import EntryBook
from reading_list.models.model import ModelContext
from reading_list.models.predicates import EntryMatchesDescriptorPredicate
from reading_list.models.schemas import Entry
from reading_list.models.view_mode import ViewMode


FeedFetcher = Callable[[str], EntryBook]


@dataclass
class CommandResult:
    """Outcome of a successful command.

    Attributes:
        message: Feedback shown to the user
        show_help: The UI should show the help text
        exit: The UI should end the session
        selected: Entry the UI should display
        added: Entries the command put into the reading list
    """

    message: str
    show_help: bool = False
    exit: bool = False
    selected: Optional[Entry] = None
    added: Tuple[Entry, ...] = ()


class Command:
    """Base for all commands; subclasses declare their command word and usage."""

    COMMAND_WORD: ClassVar[str] = ""
    COMMAND_ALIASES: ClassVar[Tuple[str, ...]] = ()
    MESSAGE_USAGE: ClassVar[str] = ""


@dataclass(frozen=True)
class EditEntryDescriptor:
    """Fields to change on an entry; None means leave the field as it is."""

    title: Optional[str] = None
    description: Optional[str] = None
    link: Optional[str] = None
    address: Optional[str] = None
    tags: Optional[FrozenSet[str]] = None

    def is_any_field_set(self) -> bool:
        return any(
            value is not None
            for value in (self.title, self.description, self.link, self.address, self.tags)
        )

    def apply_to(self, entry: Entry) -> Entry:
        """Return ``entry`` with every set field overlaid."""
        changes = {
            name: value
            for name, value in (
                ("title", self.title),
                ("description", self.description),
                ("link", self.link),
                ("address", self.address),
                ("tags", self.tags),
            )
            if value is not None
        }
        return entry.with_changes(**changes)


@dataclass(frozen=True)
class AddCommand(Command):
    COMMAND_WORD: ClassVar[str] = "add"
    COMMAND_ALIASES: ClassVar[Tuple[str, ...]] = ("a",)
    MESSAGE_USAGE: ClassVar[str] = (
        "add: Adds an entry to the reading list. "
        "Parameters: t/TITLE l/LINK [d/DESCRIPTION] [a/ADDRESS] [tag/TAG]...\n"
        "Example: add t/Clean Code l/https://example.com/clean-code tag/programming"
    )
    MESSAGE_SUCCESS: ClassVar[str] = "New entry added: {}"
    MESSAGE_DUPLICATE_ENTRY: ClassVar[str] = "This entry already exists in the book."

    entry: Entry


@dataclass(frozen=True)
class AddFromResultsCommand(Command):
    COMMAND_WORD: ClassVar[str] = "add"
    COMMAND_ALIASES: ClassVar[Tuple[str, ...]] = ("a",)
    MESSAGE_USAGE: ClassVar[str] = (
        "add: Adds the result identified by the index number to the reading list.\n"
        "Parameters: INDEX (must be a positive integer)\n"
        "Example: add 1"
    )
    MESSAGE_SUCCESS: ClassVar[str] = "Added to reading list: {}"
    MESSAGE_DUPLICATE_ENTRY: ClassVar[str] = "This entry is already in the reading list."

    index: int


@dataclass(frozen=True)
class EditCommand(Command):
    COMMAND_WORD: ClassVar[str] = "edit"
    COMMAND_ALIASES: ClassVar[Tuple[str, ...]] = ("e",)
    MESSAGE_USAGE: ClassVar[str] = (
        "edit: Edits the entry identified by the index number used in the displayed list. "
        "Existing values will be overwritten by the input values.\n"
        "Parameters: INDEX (must be a positive integer) "
        "[t/TITLE] [d/DESCRIPTION] [l/LINK] [a/ADDRESS] [tag/TAG]...\n"
        "Example: edit 1 t/A better title d/Worth a second read"
    )
    MESSAGE_SUCCESS: ClassVar[str] = "Edited Entry: {}"
    MESSAGE_NOT_EDITED: ClassVar[str] = "At least one field to edit must be provided."
    MESSAGE_DUPLICATE_ENTRY: ClassVar[str] = "This entry already exists in the book."

    index: int
    descriptor: EditEntryDescriptor


@dataclass(frozen=True)
class DeleteCommand(Command):
    COMMAND_WORD: ClassVar[str] = "delete"
    COMMAND_ALIASES: ClassVar[Tuple[str, ...]] = ("d",)
    MESSAGE_USAGE: ClassVar[str] = (
        "delete: Deletes the entry identified by the index number used in the displayed list.\n"
        "Parameters: INDEX (must be a positive integer)\n"
        "Example: delete 1"
    )
    MESSAGE_SUCCESS: ClassVar[str] = "Deleted Entry: {}"

    index: int


@dataclass(frozen=True)
class ClearCommand(Command):
    COMMAND_WORD: ClassVar[str] = "clear"
    COMMAND_ALIASES: ClassVar[Tuple[str, ...]] = ("c",)
    MESSAGE_USAGE: ClassVar[str] = "clear: Removes every entry from the current list."
    MESSAGE_SUCCESS: ClassVar[str] = "{} has been cleared!"


@dataclass(frozen=True)
class ListCommand(Command):
    COMMAND_WORD: ClassVar[str] = "list"
    COMMAND_ALIASES: ClassVar[Tuple[str, ...]] = ("ls",)
    MESSAGE_USAGE: ClassVar[str] = "list: Shows every entry of the current list."
    MESSAGE_SUCCESS: ClassVar[str] = "Listed all entries"


@dataclass(frozen=True)
class FindCommand(Command):
    COMMAND_WORD: ClassVar[str] = "find"
    COMMAND_ALIASES: ClassVar[Tuple[str, ...]] = ("f",)
    MESSAGE_USAGE: ClassVar[str] = (
        "find: Finds all entries whose titles contain any of the specified keywords "
        "(case-insensitive) and that match every given field, and displays them as a list "
        "with index numbers.\n"
        "Parameters: [KEYWORD]... [t/TITLE] [d/DESCRIPTION] [l/LINK] [a/ADDRESS] [tag/TAG]...\n"
        "Example: find python asyncio tag/programming"
    )

    predicate: EntryMatchesDescriptorPredicate


@dataclass(frozen=True)
class SelectCommand(Command):
    COMMAND_WORD: ClassVar[str] = "select"
    COMMAND_ALIASES: ClassVar[Tuple[str, ...]] = ("s",)
    MESSAGE_USAGE: ClassVar[str] = (
        "select: Selects the entry identified by the index number used in the displayed list.\n"
        "Parameters: INDEX (must be a positive integer)\n"
        "Example: select 1"
    )
    MESSAGE_SUCCESS: ClassVar[str] = "Selected Entry: {}"

    index: int


@dataclass(frozen=True)
class ArchiveCommand(Command):
    COMMAND_WORD: ClassVar[str] = "archive"
    COMMAND_ALIASES: ClassVar[Tuple[str, ...]] = ()
    MESSAGE_USAGE: ClassVar[str] = (
        "archive: Moves the entry identified by the index number to the archives.\n"
        "Parameters: INDEX (must be a positive integer)\n"
        "Example: archive 1"
    )
    MESSAGE_SUCCESS: ClassVar[str] = "Archived Entry: {}"
    MESSAGE_DUPLICATE_ENTRY: ClassVar[str] = "This entry is already in the archives."

    index: int


@dataclass(frozen=True)
class UnarchiveCommand(Command):
    COMMAND_WORD: ClassVar[str] = "unarchive"
    COMMAND_ALIASES: ClassVar[Tuple[str, ...]] = ()
    MESSAGE_USAGE: ClassVar[str] = (
        "unarchive: Moves the entry identified by the index number back to the reading list.\n"
        "Parameters: INDEX (must be a positive integer)\n"
        "Example: unarchive 1"
    )
    MESSAGE_SUCCESS: ClassVar[str] = "Unarchived Entry: {}"
    MESSAGE_DUPLICATE_ENTRY: ClassVar[str] = "This entry is already in the reading list."

    index: int


@dataclass(frozen=True)
class ContextCommand(Command):
    """Switches to another list; the command word names the list."""

    MESSAGE_USAGE: ClassVar[str] = (
        "readinglist | archives | feeds: Shows the reading list, the archives or the feed "
        "subscriptions."
    )
    MESSAGE_SUCCESS: ClassVar[str] = "Viewing {}"

    context: ModelContext


@dataclass(frozen=True)
class FeedCommand(Command):
    COMMAND_WORD: ClassVar[str] = "feed"
    COMMAND_ALIASES: ClassVar[Tuple[str, ...]] = ()
    MESSAGE_USAGE: ClassVar[str] = (
        "feed: Fetches the RSS/Atom feed at the given URL and shows its entries.\n"
        "Parameters: URL\n"
        "Example: feed https://example.com/rss.xml"
    )
    MESSAGE_SUCCESS: ClassVar[str] = "Fetched entries from {}"
    MESSAGE_FAILURE_NET: ClassVar[str] = "Failed to fetch feed: {}"
    MESSAGE_FAILURE_XML: ClassVar[str] = "{} is not a valid feed"

    url: str
    fetcher: Optional[FeedFetcher] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class SubscribeCommand(Command):
    COMMAND_WORD: ClassVar[str] = "subscribe"
    COMMAND_ALIASES: ClassVar[Tuple[str, ...]] = ("sub",)
    MESSAGE_USAGE: ClassVar[str] = (
        "subscribe: Subscribes to the RSS/Atom feed at the given URL.\n"
        "Parameters: URL [t/TITLE]\n"
        "Example: subscribe https://example.com/rss.xml t/Example news"
    )
    MESSAGE_SUCCESS: ClassVar[str] = "Subscribed to {}"
    MESSAGE_DUPLICATE_FEED: ClassVar[str] = "You are already subscribed to this feed."

    url: str
    title: str


@dataclass(frozen=True)
class UnsubscribeCommand(Command):
    COMMAND_WORD: ClassVar[str] = "unsubscribe"
    COMMAND_ALIASES: ClassVar[Tuple[str, ...]] = ("unsub",)
    MESSAGE_USAGE: ClassVar[str] = (
        "unsubscribe: Removes the feed subscription identified by the index number.\n"
        "Parameters: INDEX (must be a positive integer)\n"
        "Example: unsubscribe 1"
    )
    MESSAGE_SUCCESS: ClassVar[str] = "Unsubscribed from {}"

    index: int


@dataclass(frozen=True)
class RefreshCommand(Command):
    COMMAND_WORD: ClassVar[str] = "refresh"
    COMMAND_ALIASES: ClassVar[Tuple[str, ...]] = ()
    MESSAGE_USAGE: ClassVar[str] = (
        "refresh: Fetches every subscribed feed and adds new entries to the reading list."
    )
    MESSAGE_SUCCESS: ClassVar[str] = "Refreshed {} feeds, {} new entries added to the reading list."
    MESSAGE_FEED_FAILED: ClassVar[str] = "{}: {}"

    fetcher: Optional[FeedFetcher] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class ViewModeCommand(Command):
    COMMAND_WORD: ClassVar[str] = "view"
    COMMAND_ALIASES: ClassVar[Tuple[str, ...]] = ("v",)
    MESSAGE_USAGE: ClassVar[str] = (
        "view: Sets how selected entries are displayed.\n"
        "Parameters: browser | reader [default | dark]\n"
        "Example: view reader dark"
    )
    MESSAGE_SET_VIEW_MODE_SUCCESS: ClassVar[str] = "View mode set to {}"

    view_mode: ViewMode


@dataclass(frozen=True)
class HistoryCommand(Command):
    COMMAND_WORD: ClassVar[str] = "history"
    COMMAND_ALIASES: ClassVar[Tuple[str, ...]] = ("h",)
    MESSAGE_USAGE: ClassVar[str] = "history: Lists the commands entered so far."
    MESSAGE_SUCCESS: ClassVar[str] = "Entered commands (from most recent to earliest):\n{}"
    MESSAGE_NO_HISTORY: ClassVar[str] = "You have not yet entered any commands."


@dataclass(frozen=True)
class HelpCommand(Command):
    COMMAND_WORD: ClassVar[str] = "help"
    COMMAND_ALIASES: ClassVar[Tuple[str, ...]] = ()
    MESSAGE_USAGE: ClassVar[str] = "help: Shows program usage instructions."
    SHOWING_HELP_MESSAGE: ClassVar[str] = "Opened help window."


@dataclass(frozen=True)
class ExitCommand(Command):
    COMMAND_WORD: ClassVar[str] = "exit"
    COMMAND_ALIASES: ClassVar[Tuple[str, ...]] = ("quit",)
    MESSAGE_USAGE: ClassVar[str] = "exit: Exits the program."
    MESSAGE_EXIT_ACKNOWLEDGEMENT: ClassVar[str] = "Exiting reading list as requested ..."
