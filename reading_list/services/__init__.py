"""Services for reading_list."""

from .feed_fetcher import fetch_feed, parse_feed
from .reader import ReaderArticle, extract_article, fetch_article, fetch_page

__all__ = [
    "fetch_feed",
    "parse_feed",
    "ReaderArticle",
    "extract_article",
    "fetch_article",
    "fetch_page",
]
