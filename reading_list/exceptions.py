"""Error types for reading_list.

Every failure the command core can report derives from ``ReadingListError`` so
the REPL can print the message and carry on.
"""


class ReadingListError(Exception):
    """Base class for all reading_list errors."""


class ParseError(ReadingListError):
    """Raised when a command line cannot be parsed.

    Attributes:
        usage: Usage text of the command being parsed, if known
    """

    def __init__(self, message: str, usage: str = ""):
        super().__init__(message)
        self.usage = usage


class CommandExecutionError(ReadingListError):
    """Raised when a well-formed command cannot be applied to the model."""


class DuplicateEntryError(ReadingListError):
    """Raised when an operation would leave two duplicate entries in a book."""

    def __init__(self, message: str = "Operation would result in duplicate entries"):
        super().__init__(message)


class EntryNotFoundError(ReadingListError):
    """Raised when an entry is not in the book."""

    def __init__(self, message: str = "Entry not found"):
        super().__init__(message)


class FeedError(ReadingListError):
    """Base class for feed fetch failures."""


class NetworkError(FeedError):
    """Raised when a feed cannot be downloaded."""


class NotAFeedError(FeedError):
    """Raised when a downloaded document is not an RSS/Atom feed."""

    def __init__(self, url: str):
        super().__init__(f"{url} is not a valid feed")
        self.url = url


class DataFormatError(ReadingListError):
    """Raised when a data file exists but cannot be understood."""
