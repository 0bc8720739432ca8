"""JSON file storage for reading_list.

This module reads and writes entry books and user preferences as JSON files.
A missing file reads as None; a file that exists but cannot be understood
raises DataFormatError.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from reading_list.exceptions import DataFormatError, DuplicateEntryError
from reading_list.models.entry_book import EntryBook
from reading_list.models.schemas import Entry
from reading_list.models.user_prefs import UserPrefs


logger = logging.getLogger(__name__)


def _read_json(file_path: Path):
    try:
        with open(file_path, encoding="utf-8") as f:
            return json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DataFormatError(f"{file_path} is not valid JSON: {e}") from e


def _write_json(file_path: Path, data) -> None:
    file_path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = file_path.with_suffix(file_path.suffix + ".tmp")
    try:
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        tmp_path.replace(file_path)
    except (OSError, TypeError, ValueError):
        tmp_path.unlink(missing_ok=True)
        raise


class JsonEntryBookStorage:
    """Stores one entry book in a JSON file."""

    def __init__(self, file_path: Path):
        self.file_path = Path(file_path)

    def read(self) -> Optional[EntryBook]:
        """Read the entry book.

        Returns:
            The stored EntryBook, or None if the file does not exist

        Raises:
            DataFormatError: If the file content is not a valid entry book
            OSError: If the file cannot be read
        """
        if not self.file_path.exists():
            logger.info(f"Entry book file not found: {self.file_path}")
            return None

        data = _read_json(self.file_path)
        try:
            entries = [Entry.from_dict(item) for item in data["entries"]]
            return EntryBook(entries)
        except (KeyError, TypeError, AttributeError, ValueError) as e:
            raise DataFormatError(f"Illegal values in {self.file_path}: {e}") from e
        except DuplicateEntryError as e:
            raise DataFormatError(f"Duplicate entries in {self.file_path}") from e

    def save(self, book: EntryBook) -> None:
        """Write the entry book, replacing the file.

        Raises:
            OSError: If the file cannot be written
        """
        _write_json(self.file_path, {"entries": [entry.to_dict() for entry in book]})


class JsonUserPrefsStorage:
    """Stores user preferences in a JSON file."""

    def __init__(self, file_path: Path):
        self.file_path = Path(file_path)

    def read(self) -> Optional[UserPrefs]:
        if not self.file_path.exists():
            return None

        data = _read_json(self.file_path)
        try:
            return UserPrefs.from_dict(data)
        except (TypeError, AttributeError, ValueError) as e:
            raise DataFormatError(f"Illegal values in {self.file_path}: {e}") from e

    def save(self, prefs: UserPrefs) -> None:
        _write_json(self.file_path, prefs.to_dict())
