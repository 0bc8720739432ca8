"""Data model for reading_list."""

from .entry_book import EntryBook, show_all
from .model import Model, ModelContext
from .predicates import EntryMatchesDescriptorPredicate, FindEntryDescriptor
from .schemas import Entry
from .user_prefs import UserPrefs
from .view_mode import ReaderViewStyle, ViewMode, ViewType

__all__ = [
    "Entry",
    "EntryBook",
    "EntryMatchesDescriptorPredicate",
    "FindEntryDescriptor",
    "Model",
    "ModelContext",
    "ReaderViewStyle",
    "UserPrefs",
    "ViewMode",
    "ViewType",
    "show_all",
]
