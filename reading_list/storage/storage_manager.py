"""Storage manager for reading_list.

Groups the storages of the three persistent books and the user preferences,
and builds the initial model from them.
"""

import logging
from typing import Callable, Optional

from reading_list.exceptions import DataFormatError
from reading_list.models.entry_book import EntryBook
from reading_list.models.model import Model
from reading_list.models.user_prefs import UserPrefs
from reading_list.storage.article_storage import DataDirectoryArticleStorage
from reading_list.storage.json_storage import JsonEntryBookStorage, JsonUserPrefsStorage


logger = logging.getLogger(__name__)


class StorageManager:
    """Reads and writes the reading list, archives, feeds, preferences and offline articles."""

    def __init__(
        self,
        list_storage: JsonEntryBookStorage,
        archives_storage: JsonEntryBookStorage,
        feeds_storage: JsonEntryBookStorage,
        user_prefs_storage: JsonUserPrefsStorage,
        article_storage: Optional[DataDirectoryArticleStorage] = None,
    ):
        self.list_storage = list_storage
        self.archives_storage = archives_storage
        self.feeds_storage = feeds_storage
        self.user_prefs_storage = user_prefs_storage
        self.article_storage = article_storage

    @classmethod
    def from_user_prefs(cls, user_prefs: UserPrefs, user_prefs_storage: JsonUserPrefsStorage) -> "StorageManager":
        """Create storages at the (already resolved) paths in ``user_prefs``."""
        return cls(
            list_storage=JsonEntryBookStorage(user_prefs.list_entry_book_file),
            archives_storage=JsonEntryBookStorage(user_prefs.archives_entry_book_file),
            feeds_storage=JsonEntryBookStorage(user_prefs.feeds_entry_book_file),
            user_prefs_storage=user_prefs_storage,
            article_storage=DataDirectoryArticleStorage(user_prefs.article_data_directory),
        )

    def read_list_entry_book(self) -> Optional[EntryBook]:
        return self.list_storage.read()

    def read_archives_entry_book(self) -> Optional[EntryBook]:
        return self.archives_storage.read()

    def read_feeds_entry_book(self) -> Optional[EntryBook]:
        return self.feeds_storage.read()

    def save_list_entry_book(self, book: EntryBook) -> None:
        self.list_storage.save(book)

    def save_archives_entry_book(self, book: EntryBook) -> None:
        self.archives_storage.save(book)

    def save_feeds_entry_book(self, book: EntryBook) -> None:
        self.feeds_storage.save(book)

    def read_user_prefs(self) -> Optional[UserPrefs]:
        return self.user_prefs_storage.read()

    def save_user_prefs(self, prefs: UserPrefs) -> None:
        self.user_prefs_storage.save(prefs)


def init_entry_book(read: Callable[[], Optional[EntryBook]], name: str) -> EntryBook:
    """Read a book, falling back to an empty one on any load failure."""
    try:
        book = read()
    except DataFormatError as e:
        logger.warning(f"Data file not in the correct format ({e}). Will be starting with an empty {name}")
        return EntryBook()
    except OSError as e:
        logger.warning(f"Problem while reading from the file ({e}). Will be starting with an empty {name}")
        return EntryBook()

    if book is None:
        logger.info(f"Data file not found. Will be starting with an empty {name}")
        return EntryBook()
    return book


def init_user_prefs(storage: JsonUserPrefsStorage) -> UserPrefs:
    """Read user preferences, falling back to defaults on any load failure."""
    try:
        prefs = storage.read()
    except DataFormatError as e:
        logger.warning(f"UserPrefs file {storage.file_path} is not in the correct format ({e}). Using default user prefs")
        prefs = None
    except OSError as e:
        logger.warning(f"Problem while reading {storage.file_path} ({e}). Using default user prefs")
        prefs = None
    return prefs or UserPrefs()


def load_model(storage: StorageManager, user_prefs: UserPrefs) -> Model:
    """Build the startup model from whatever the storages hold."""
    return Model(
        list_entry_book=init_entry_book(storage.read_list_entry_book, "reading list"),
        archives_entry_book=init_entry_book(storage.read_archives_entry_book, "archives"),
        feeds_entry_book=init_entry_book(storage.read_feeds_entry_book, "feed list"),
        user_prefs=user_prefs,
    )
