"""In-memory model: one entry book per context plus display state."""

import logging
from dataclasses import replace
from enum import Enum
from typing import Dict, Optional, Tuple

from reading_list.models.entry_book import EntryBook, EntryPredicate, show_all
from reading_list.models.schemas import Entry
from reading_list.models.user_prefs import UserPrefs
from reading_list.models.view_mode import ViewMode


logger = logging.getLogger(__name__)


class ModelContext(Enum):
    """The list the user is currently working on."""

    LIST = "Reading List"
    ARCHIVES = "Archives"
    SEARCH = "Results"
    FEEDS = "Feeds"

    def __str__(self) -> str:
        return self.value


class Model:
    """Owns the reading list, archives, search results and feed subscriptions.

    Operations without an explicit ``context`` act on the book of the current
    context. Switching context shows every entry of the newly active book.
    """

    def __init__(
        self,
        list_entry_book: Optional[EntryBook] = None,
        archives_entry_book: Optional[EntryBook] = None,
        feeds_entry_book: Optional[EntryBook] = None,
        user_prefs: Optional[UserPrefs] = None,
    ):
        self._books: Dict[ModelContext, EntryBook] = {
            ModelContext.LIST: _own_copy(list_entry_book),
            ModelContext.ARCHIVES: _own_copy(archives_entry_book),
            ModelContext.SEARCH: EntryBook(),
            ModelContext.FEEDS: _own_copy(feeds_entry_book),
        }
        self.user_prefs = user_prefs or UserPrefs()
        self._context = ModelContext.LIST
        self._view_mode = self.user_prefs.view_mode

    # Context

    @property
    def context(self) -> ModelContext:
        return self._context

    def set_context(self, context: ModelContext) -> None:
        logger.debug(f"Switching context from {self._context.name} to {context.name}")
        self._context = context
        self._books[context].update_filter(show_all)

    # Books

    def get_entry_book(self, context: Optional[ModelContext] = None) -> EntryBook:
        return self._books[context or self._context]

    @property
    def list_entry_book(self) -> EntryBook:
        return self._books[ModelContext.LIST]

    @property
    def archives_entry_book(self) -> EntryBook:
        return self._books[ModelContext.ARCHIVES]

    @property
    def search_entry_book(self) -> EntryBook:
        return self._books[ModelContext.SEARCH]

    @property
    def feeds_entry_book(self) -> EntryBook:
        return self._books[ModelContext.FEEDS]

    def set_search_entry_book(self, book: EntryBook) -> None:
        self.search_entry_book.reset_data(book)

    def clear_entry_book(self, context: Optional[ModelContext] = None) -> None:
        self.get_entry_book(context).clear()

    # Entries

    def has_entry(self, entry: Entry, context: Optional[ModelContext] = None) -> bool:
        return self.get_entry_book(context).has_entry(entry)

    def add_entry(self, entry: Entry, context: Optional[ModelContext] = None) -> None:
        self.get_entry_book(context).add_entry(entry)

    def set_entry(self, target: Entry, replacement: Entry, context: Optional[ModelContext] = None) -> None:
        self.get_entry_book(context).set_entry(target, replacement)

    def delete_entry(self, entry: Entry, context: Optional[ModelContext] = None) -> None:
        self.get_entry_book(context).remove_entry(entry)

    # Filtered view

    @property
    def filtered_entry_list(self) -> Tuple[Entry, ...]:
        return self.get_entry_book().filtered_entries

    def update_filtered_entry_list(self, predicate: EntryPredicate) -> None:
        self.get_entry_book().update_filter(predicate)

    # View mode

    @property
    def view_mode(self) -> ViewMode:
        return self._view_mode

    def set_view_mode(self, view_mode: ViewMode) -> None:
        self._view_mode = view_mode
        self.user_prefs.view_mode = view_mode

    def clone(self) -> "Model":
        """Return a copy that shares no mutable state with this model."""
        duplicate = Model.__new__(Model)
        duplicate._books = {context: book.copy() for context, book in self._books.items()}
        duplicate.user_prefs = replace(self.user_prefs)
        duplicate._context = self._context
        duplicate._view_mode = self._view_mode
        return duplicate

    def __eq__(self, other) -> bool:
        if not isinstance(other, Model):
            return NotImplemented
        return (
            self._books == other._books
            and self._context == other._context
            and self._view_mode == other._view_mode
            and self.filtered_entry_list == other.filtered_entry_list
        )

    __hash__ = None


def _own_copy(book: Optional[EntryBook]) -> EntryBook:
    return book.copy() if book is not None else EntryBook()
