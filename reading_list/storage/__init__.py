"""Storage layer for reading_list."""

from .article_storage import DataDirectoryArticleStorage
from .json_storage import JsonEntryBookStorage, JsonUserPrefsStorage
from .storage_manager import (
    StorageManager,
    init_entry_book,
    init_user_prefs,
    load_model,
)

__all__ = [
    "DataDirectoryArticleStorage",
    "JsonEntryBookStorage",
    "JsonUserPrefsStorage",
    "StorageManager",
    "init_entry_book",
    "init_user_prefs",
    "load_model",
]
