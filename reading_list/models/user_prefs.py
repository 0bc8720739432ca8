"""User preferences persisted between sessions."""

from dataclasses import dataclass, field
from pathlib import Path

from reading_list.models.view_mode import ViewMode


@dataclass
class UserPrefs:
    """Data file locations, the offline article directory and the last used view mode.

    Relative paths are resolved against the configured data directory.
    """

    list_entry_book_file: Path = Path("list.json")
    archives_entry_book_file: Path = Path("archives.json")
    feeds_entry_book_file: Path = Path("feeds.json")
    article_data_directory: Path = Path("articles")
    view_mode: ViewMode = field(default_factory=ViewMode)

    def resolve(self, data_dir: Path) -> "UserPrefs":
        """Return a copy whose file paths are anchored at ``data_dir``."""
        return UserPrefs(
            list_entry_book_file=Path(data_dir) / self.list_entry_book_file,
            archives_entry_book_file=Path(data_dir) / self.archives_entry_book_file,
            feeds_entry_book_file=Path(data_dir) / self.feeds_entry_book_file,
            article_data_directory=Path(data_dir) / self.article_data_directory,
            view_mode=self.view_mode,
        )

    def to_dict(self) -> dict:
        return {
            "list_entry_book_file": str(self.list_entry_book_file),
            "archives_entry_book_file": str(self.archives_entry_book_file),
            "feeds_entry_book_file": str(self.feeds_entry_book_file),
            "article_data_directory": str(self.article_data_directory),
            "view_mode": self.view_mode.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "UserPrefs":
        defaults = cls()
        return cls(
            list_entry_book_file=Path(data.get("list_entry_book_file", defaults.list_entry_book_file)),
            archives_entry_book_file=Path(
                data.get("archives_entry_book_file", defaults.archives_entry_book_file)
            ),
            feeds_entry_book_file=Path(data.get("feeds_entry_book_file", defaults.feeds_entry_book_file)),
            article_data_directory=Path(data.get("article_data_directory", defaults.article_data_directory)),
            view_mode=ViewMode.from_dict(data.get("view_mode", {})),
        )
