"""Data models for reading_list.

This module defines the entry record and the validation rules for its fields.
"""

import re
from dataclasses import dataclass, field, replace
from typing import FrozenSet, Iterable

import httpx


TAG_PATTERN = re.compile(r"^[A-Za-z0-9]+$")

MESSAGE_TITLE_CONSTRAINTS = "Titles should not be blank"
MESSAGE_LINK_CONSTRAINTS = "Links should be absolute http:// or https:// URLs"
MESSAGE_TAG_CONSTRAINTS = "Tags should be alphanumeric"


def is_valid_title(title: str) -> bool:
    return bool(title and title.strip())


def is_valid_link(link: str) -> bool:
    """Return True if ``link`` is an absolute http(s) URL with a host."""
    if not link or any(ch.isspace() for ch in link):
        return False
    try:
        url = httpx.URL(link)
    except (httpx.InvalidURL, TypeError):
        return False
    return url.scheme in ("http", "https") and bool(url.host)


def is_valid_tag(tag: str) -> bool:
    return bool(tag) and TAG_PATTERN.match(tag) is not None


def normalize_tags(tags: Iterable[str]) -> FrozenSet[str]:
    """Validate tags and fold them to lower case."""
    normalized = set()
    for tag in tags:
        tag = tag.strip()
        if not is_valid_tag(tag):
            raise ValueError(f"{MESSAGE_TAG_CONSTRAINTS}: '{tag}'")
        normalized.add(tag.lower())
    return frozenset(normalized)


@dataclass(frozen=True)
class Entry:
    """Represents one bookmarked article or feed item.

    Entries are values: two entries with the same fields are equal and hash
    the same. Editing an entry means building a new one with ``with_changes``.
    """

    title: str
    link: str
    description: str = ""
    address: str = ""
    tags: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        title = (self.title or "").strip()
        link = (self.link or "").strip()
        if not is_valid_title(title):
            raise ValueError(MESSAGE_TITLE_CONSTRAINTS)
        if not is_valid_link(link):
            raise ValueError(f"{MESSAGE_LINK_CONSTRAINTS}: '{link}'")

        # frozen dataclass, so normalised values go in through object.__setattr__
        object.__setattr__(self, "title", title)
        object.__setattr__(self, "link", link)
        object.__setattr__(self, "description", (self.description or "").strip())
        object.__setattr__(self, "address", (self.address or "").strip())
        object.__setattr__(self, "tags", normalize_tags(self.tags or ()))

    def is_same_entry(self, other: "Entry") -> bool:
        """Return True if ``other`` is a duplicate of this entry.

        Duplicates share both title and link; descriptions, addresses and tags
        are not considered.
        """
        if other is self:
            return True
        return (
            isinstance(other, Entry)
            and other.title == self.title
            and other.link == self.link
        )

    def with_changes(self, **changes) -> "Entry":
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "description": self.description,
            "link": self.link,
            "address": self.address,
            "tags": sorted(self.tags),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Entry":
        return cls(
            title=data.get("title", ""),
            link=data.get("link", ""),
            description=data.get("description", ""),
            address=data.get("address", ""),
            tags=frozenset(data.get("tags", [])),
        )

    def __str__(self) -> str:
        text = f"{self.title} Link: {self.link}"
        if self.description:
            text += f" Description: {self.description}"
        if self.address:
            text += f" Address: {self.address}"
        if self.tags:
            text += " Tags: " + " ".join(f"[{tag}]" for tag in sorted(self.tags))
        return text
