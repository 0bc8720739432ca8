"""Reader view service.

This module downloads an article page and extracts its readable text.
"""

import logging
from dataclasses import dataclass
from typing import List

import httpx
from bs4 import BeautifulSoup

from reading_list.exceptions import NetworkError


logger = logging.getLogger(__name__)

USER_AGENT = "ReadingList/1.0 (Reader View)"
TIMEOUT = 30.0

# Page furniture that never belongs to the article body
NOISE_TAGS = ["script", "style", "noscript", "nav", "header", "footer", "aside", "form", "iframe"]
TEXT_TAGS = ["h1", "h2", "h3", "h4", "p", "pre", "blockquote"]


@dataclass
class ReaderArticle:
    """Readable rendition of a web page."""

    title: str
    paragraphs: List[str]

    @property
    def text(self) -> str:
        return "\n\n".join(self.paragraphs)


def fetch_page(url: str) -> str:
    """Download a page and return its HTML.

    Raises:
        NetworkError: If the page cannot be downloaded
    """
    logger.info(f"Fetching article: {url}")

    with httpx.Client(
        follow_redirects=True,
        timeout=TIMEOUT,
        headers={"User-Agent": USER_AGENT},
    ) as client:
        try:
            response = client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning(f"Failed to fetch article {url}: {e}")
            raise NetworkError(str(e)) from e

    return response.text


def fetch_article(url: str) -> ReaderArticle:
    """Fetch a page and extract its article text.

    Raises:
        NetworkError: If the page cannot be downloaded
    """
    return extract_article(fetch_page(url))


def extract_article(html: str) -> ReaderArticle:
    """Extract the title and body paragraphs from an HTML page.

    The body is taken from the first <article>, then <main>, then <body>.
    Falls back to all remaining text when the body has no paragraph-like
    elements.
    """
    soup = BeautifulSoup(html, "lxml")

    for element in soup.find_all(NOISE_TAGS):
        element.decompose()

    title = ""
    if soup.title and soup.title.get_text(strip=True):
        title = soup.title.get_text(strip=True)
    elif soup.find("h1"):
        title = soup.find("h1").get_text(" ", strip=True)

    root = soup.find("article") or soup.find("main") or soup.body or soup

    paragraphs = []
    for element in root.find_all(TEXT_TAGS):
        text = element.get_text(" ", strip=True)
        if text:
            paragraphs.append(text)

    if not paragraphs:
        text = root.get_text("\n", strip=True)
        paragraphs = [line for line in text.splitlines() if line.strip()]

    return ReaderArticle(title=title, paragraphs=paragraphs)
