"""Offline article storage for reading_list.

Saved pages live as HTML files in one data directory. An entry's ``address``
holds the file name of its saved copy, relative to that directory.
"""

import hashlib
import logging
from pathlib import Path
from typing import Optional


logger = logging.getLogger(__name__)


class DataDirectoryArticleStorage:
    """Stores downloaded article pages in a directory."""

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    @staticmethod
    def article_address(link: str) -> str:
        """File name the page at ``link`` is saved under."""
        return hashlib.sha1(link.encode("utf-8")).hexdigest() + ".html"

    def save_article(self, link: str, html: str) -> str:
        """Save the page for ``link``, replacing any earlier copy.

        Returns:
            The address of the saved copy

        Raises:
            OSError: If the file cannot be written
        """
        address = self.article_address(link)
        self.directory.mkdir(parents=True, exist_ok=True)
        (self.directory / address).write_text(html, encoding="utf-8")
        logger.info(f"Saved offline copy of {link} as {address}")
        return address

    def read_article(self, address: str) -> Optional[str]:
        """Return the saved page at ``address``, or None if there is none.

        Raises:
            OSError: If the file exists but cannot be read
        """
        if not address:
            return None
        path = self.directory / address
        if not path.is_file():
            return None
        return path.read_text(encoding="utf-8", errors="replace")
