"""Feed fetcher service.

This module downloads RSS/Atom feeds and turns their items into entries.
"""

import logging
from urllib.parse import urljoin

import feedparser
import httpx
from bs4 import BeautifulSoup

from reading_list.exceptions import DuplicateEntryError, NetworkError, NotAFeedError
from reading_list.models.entry_book import EntryBook
from reading_list.models.schemas import Entry, is_valid_tag


logger = logging.getLogger(__name__)

USER_AGENT = "ReadingList/1.0 (RSS Feed Reader)"
TIMEOUT = 30.0


def fetch_feed(feed_url: str) -> EntryBook:
    """Download and parse a feed.

    Args:
        feed_url: URL of the RSS/Atom feed

    Returns:
        EntryBook holding one entry per usable feed item, in feed order

    Raises:
        NetworkError: If the feed cannot be downloaded
        NotAFeedError: If the document is not a feed
    """
    logger.info(f"Fetching feed: {feed_url}")

    with httpx.Client(
        follow_redirects=True,
        timeout=TIMEOUT,
        headers={"User-Agent": USER_AGENT},
    ) as client:
        try:
            response = client.get(feed_url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning(f"Failed to fetch feed {feed_url}: {e}")
            raise NetworkError(str(e)) from e

    return parse_feed(response.text, feed_url)


def parse_feed(document: str, feed_url: str) -> EntryBook:
    """Parse a feed document into an EntryBook.

    Items without a title or a usable link are skipped, as are items that
    duplicate an earlier item of the same feed.

    Raises:
        NotAFeedError: If ``document`` is not a feed
    """
    feed = feedparser.parse(document)

    if feed.bozo and not feed.entries:
        logger.warning(f"Feed parsing error for {feed_url}: {feed.get('bozo_exception')}")
        raise NotAFeedError(feed_url)

    if not feed.entries and not feed.feed.get("title"):
        raise NotAFeedError(feed_url)

    book = EntryBook()
    for item in feed.entries:
        entry = _to_entry(item, feed_url)
        if entry is None:
            continue
        try:
            book.add_entry(entry)
        except DuplicateEntryError:
            logger.debug(f"Skipping duplicate feed item: {entry.link}")

    logger.info(f"Parsed {len(book)} entries from {feed_url}")
    return book


def _to_entry(item: dict, feed_url: str):
    title = (item.get("title") or "").strip()
    if not title:
        return None

    link = (item.get("link") or "").strip()
    if not link:
        for alternate in item.get("links", []):
            if alternate.get("href"):
                link = alternate["href"].strip()
                break
    if not link:
        return None

    tags = [
        tag.get("term", "").strip()
        for tag in item.get("tags", [])
        if is_valid_tag((tag.get("term") or "").strip())
    ]

    try:
        return Entry(
            title=title,
            link=urljoin(feed_url, link),
            description=_plain_text(item.get("summary") or ""),
            tags=frozenset(tags),
        )
    except ValueError as e:
        logger.debug(f"Skipping feed item '{title}': {e}")
        return None


def _plain_text(html: str) -> str:
    """Strip markup from a feed summary."""
    if "<" not in html:
        return " ".join(html.split())
    return BeautifulSoup(html, "lxml").get_text(" ", strip=True)
