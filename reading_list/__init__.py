"""reading_list - a reading list and RSS feed manager driven by text commands."""

__version__ = "1.3.1"
