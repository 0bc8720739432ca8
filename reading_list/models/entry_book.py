"""Ordered collection of unique entries with a filtered view."""

from typing import Callable, Iterable, Iterator, List, Optional, Tuple

from reading_list.exceptions import DuplicateEntryError, EntryNotFoundError
from reading_list.models.schemas import Entry


EntryPredicate = Callable[[Entry], bool]


def show_all(entry: Entry) -> bool:
    return True


class EntryBook:
    """A list of entries where no two entries are duplicates.

    The filtered view is the subsequence of entries accepted by the current
    predicate. It is dropped whenever the entries or the predicate change and
    rebuilt on the next read.
    """

    def __init__(self, entries: Optional[Iterable[Entry]] = None):
        self._entries: List[Entry] = []
        self._predicate: EntryPredicate = show_all
        self._filtered: Optional[Tuple[Entry, ...]] = None
        for entry in entries or ():
            self.add_entry(entry)

    @property
    def entries(self) -> Tuple[Entry, ...]:
        return tuple(self._entries)

    @property
    def predicate(self) -> EntryPredicate:
        return self._predicate

    @property
    def filtered_entries(self) -> Tuple[Entry, ...]:
        if self._filtered is None:
            self._filtered = tuple(e for e in self._entries if self._predicate(e))
        return self._filtered

    def update_filter(self, predicate: EntryPredicate) -> None:
        self._predicate = predicate
        self._filtered = None

    def has_entry(self, entry: Entry) -> bool:
        return any(existing.is_same_entry(entry) for existing in self._entries)

    def add_entry(self, entry: Entry) -> None:
        """Append an entry.

        Raises:
            DuplicateEntryError: If a duplicate is already in the book
        """
        if self.has_entry(entry):
            raise DuplicateEntryError()
        self._entries.append(entry)
        self._filtered = None

    def set_entry(self, target: Entry, replacement: Entry) -> None:
        """Replace ``target`` with ``replacement`` at the same position.

        Raises:
            EntryNotFoundError: If ``target`` is not in the book
            DuplicateEntryError: If ``replacement`` duplicates another entry
        """
        index = self._index_of(target)
        if index is None:
            raise EntryNotFoundError()
        if not target.is_same_entry(replacement) and self.has_entry(replacement):
            raise DuplicateEntryError()
        self._entries[index] = replacement
        self._filtered = None

    def remove_entry(self, entry: Entry) -> None:
        """Remove an entry.

        Raises:
            EntryNotFoundError: If ``entry`` is not in the book
        """
        index = self._index_of(entry)
        if index is None:
            raise EntryNotFoundError()
        del self._entries[index]
        self._filtered = None

    def clear(self) -> None:
        self._entries = []
        self._filtered = None

    def reset_data(self, other: "EntryBook") -> None:
        """Replace all entries with those of ``other``; the filter is kept."""
        self._entries = list(other.entries)
        self._filtered = None

    def copy(self) -> "EntryBook":
        duplicate = EntryBook()
        duplicate._entries = list(self._entries)
        duplicate._predicate = self._predicate
        return duplicate

    def _index_of(self, entry: Entry) -> Optional[int]:
        for index, existing in enumerate(self._entries):
            if existing == entry:
                return index
        return None

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.entries)

    def __eq__(self, other) -> bool:
        if not isinstance(other, EntryBook):
            return NotImplemented
        return self._entries == other._entries

    __hash__ = None

    def __repr__(self) -> str:
        return f"EntryBook({len(self._entries)} entries)"
