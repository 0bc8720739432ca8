"""Shared fixtures: typical entries and models built from them."""

import pytest

from reading_list.logic.history import CommandHistory
from reading_list.models.entry_book import EntryBook
from reading_list.models.model import Model
from reading_list.models.schemas import Entry


ALICE = Entry(
    title="Alice in Wonderland",
    link="https://example.com/alice",
    description="A girl falls down a rabbit hole",
    tags=frozenset({"fiction", "classic"}),
)
BENSON = Entry(
    title="Python asyncio explained",
    link="https://example.com/asyncio",
    description="Event loops and coroutines",
    address="articles/asyncio.html",
    tags=frozenset({"programming"}),
)
CARL = Entry(
    title="Carl's kitchen notes",
    link="https://example.org/kitchen",
)
DANIEL = Entry(
    title="Daniel on distributed systems",
    link="https://example.net/distributed",
    tags=frozenset({"programming", "systems"}),
)

TYPICAL_ENTRIES = [ALICE, BENSON, CARL, DANIEL]

ARCHIVED = Entry(title="Old news", link="https://example.com/old")
FEED = Entry(title="Example feed", link="https://example.com/rss.xml")


def typical_entry_book() -> EntryBook:
    return EntryBook(TYPICAL_ENTRIES)


@pytest.fixture
def model():
    """Model with the typical entries in the reading list."""
    return Model(
        list_entry_book=typical_entry_book(),
        archives_entry_book=EntryBook([ARCHIVED]),
        feeds_entry_book=EntryBook([FEED]),
    )


@pytest.fixture
def history():
    return CommandHistory()
