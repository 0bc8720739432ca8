"""Unit tests for command execution against the model."""

import pytest

from reading_list.exceptions import CommandExecutionError, NetworkError, NotAFeedError
from reading_list.logic.commands import (
    AddCommand,
    AddFromResultsCommand,
    ArchiveCommand,
    ClearCommand,
    ContextCommand,
    DeleteCommand,
    EditCommand,
    EditEntryDescriptor,
    ExitCommand,
    FeedCommand,
    FindCommand,
    HelpCommand,
    HistoryCommand,
    ListCommand,
    RefreshCommand,
    SelectCommand,
    SubscribeCommand,
    UnarchiveCommand,
    UnsubscribeCommand,
    ViewModeCommand,
)
from reading_list.logic.executor import execute_command
from reading_list.logic.messages import (
    MESSAGE_ENTRIES_LISTED_OVERVIEW,
    MESSAGE_INVALID_ENTRY_DISPLAYED_INDEX,
)
from reading_list.models.entry_book import EntryBook
from reading_list.models.model import Model, ModelContext
from reading_list.models.predicates import EntryMatchesDescriptorPredicate, FindEntryDescriptor
from reading_list.models.schemas import Entry
from reading_list.models.view_mode import ReaderViewStyle, ViewMode, ViewType
from tests.conftest import ALICE, ARCHIVED, BENSON, CARL, DANIEL, FEED, TYPICAL_ENTRIES


def assert_command_success(command, model, history, expected_message, expected_model):
    """Executes ``command`` and checks the message and the resulting model."""
    result = execute_command(command, model, history)
    assert result.message == expected_message
    assert model == expected_model
    return result


def assert_command_failure(command, model, history, expected_message):
    """Executes ``command`` and checks it fails without changing the model."""
    expected_model = model.clone()
    with pytest.raises(CommandExecutionError) as excinfo:
        execute_command(command, model, history)
    assert str(excinfo.value) == expected_message
    assert model == expected_model


def find(*words):
    return FindCommand(EntryMatchesDescriptorPredicate(FindEntryDescriptor(keywords=words)))


def show_entry_at(model, index):
    """Filters the model down to the entry at the one-based index."""
    entry = model.filtered_entry_list[index - 1]
    model.update_filtered_entry_list(lambda e: e == entry)


class TestFindCommand:
    def test_find_matches(self, model, history):
        expected_model = model.clone()
        predicate = EntryMatchesDescriptorPredicate(FindEntryDescriptor(tags=frozenset({"programming"})))
        expected_model.update_filtered_entry_list(predicate)

        assert_command_success(
            FindCommand(predicate), model, history,
            MESSAGE_ENTRIES_LISTED_OVERVIEW.format(2), expected_model,
        )
        assert model.filtered_entry_list == (BENSON, DANIEL)

    def test_find_never_changes_entries(self, model, history):
        execute_command(find("nothing"), model, history)
        assert model.list_entry_book.entries == tuple(TYPICAL_ENTRIES)
        assert model.filtered_entry_list == ()

    def test_find_scenario(self, history):
        model = Model(list_entry_book=EntryBook([Entry(title="A", link="http://a")]))

        result = execute_command(find("A"), model, history)
        assert len(model.filtered_entry_list) == 1
        assert result.message == "1 entries listed!"

        execute_command(find("Z"), model, history)
        assert len(model.filtered_entry_list) == 0

    def test_equality(self):
        assert find("a") == find("a")
        assert find("a") != find("b")
        assert find("a") != ListCommand()


class TestEditCommand:
    def test_all_fields_specified(self, model, history):
        edited = Entry(
            title="Completely new",
            link="https://example.com/new",
            description="new description",
            address="new/address",
            tags=frozenset({"new"}),
        )
        descriptor = EditEntryDescriptor(
            title=edited.title,
            link=edited.link,
            description=edited.description,
            address=edited.address,
            tags=edited.tags,
        )
        expected_model = model.clone()
        expected_model.set_entry(ALICE, edited)

        assert_command_success(
            EditCommand(1, descriptor), model, history,
            EditCommand.MESSAGE_SUCCESS.format(edited), expected_model,
        )

    def test_title_only_round_trip(self, model, history):
        """Test that only the title changes and the book keeps its size."""
        last = len(model.filtered_entry_list)
        original = model.filtered_entry_list[last - 1]

        execute_command(EditCommand(last, EditEntryDescriptor(title="Renamed")), model, history)

        edited = model.list_entry_book.entries[last - 1]
        assert edited == original.with_changes(title="Renamed")
        assert len(model.list_entry_book) == len(TYPICAL_ENTRIES)

    def test_single_entry_scenario(self, history):
        entry = Entry(title="A", link="http://a", description="keep me")
        model = Model(list_entry_book=EntryBook([entry]))

        result = execute_command(EditCommand(1, EditEntryDescriptor(title="B")), model, history)

        edited = entry.with_changes(title="B")
        assert model.list_entry_book.entries == (edited,)
        assert result.message == EditCommand.MESSAGE_SUCCESS.format(edited)

    def test_filtered_list_resolves_against_view(self, model, history):
        show_entry_at(model, 3)
        expected_model = model.clone()
        edited = CARL.with_changes(title="Carl renamed")
        expected_model.set_entry(CARL, edited)
        expected_model.update_filtered_entry_list(lambda e: True)

        assert_command_success(
            EditCommand(1, EditEntryDescriptor(title="Carl renamed")), model, history,
            EditCommand.MESSAGE_SUCCESS.format(edited), expected_model,
        )
        assert len(model.filtered_entry_list) == len(TYPICAL_ENTRIES)

    def test_no_field_edited(self, model, history):
        for index in range(1, len(TYPICAL_ENTRIES) + 1):
            assert_command_failure(
                EditCommand(index, EditEntryDescriptor()), model, history, EditCommand.MESSAGE_NOT_EDITED
            )

    def test_duplicate_entry_unfiltered(self, model, history):
        descriptor = EditEntryDescriptor(title=ALICE.title, link=ALICE.link)
        assert_command_failure(
            EditCommand(2, descriptor), model, history, EditCommand.MESSAGE_DUPLICATE_ENTRY
        )

    def test_duplicate_entry_filtered(self, model, history):
        show_entry_at(model, 1)
        descriptor = EditEntryDescriptor(title=BENSON.title, link=BENSON.link)
        assert_command_failure(
            EditCommand(1, descriptor), model, history, EditCommand.MESSAGE_DUPLICATE_ENTRY
        )

    def test_invalid_index_unfiltered(self, model, history):
        out_of_bound = len(model.filtered_entry_list) + 1
        assert_command_failure(
            EditCommand(out_of_bound, EditEntryDescriptor(title="x")), model, history,
            MESSAGE_INVALID_ENTRY_DISPLAYED_INDEX,
        )

    def test_invalid_index_filtered(self, model, history):
        """Test an index within the book but outside the filtered view."""
        show_entry_at(model, 1)
        assert 2 <= len(model.list_entry_book)
        assert_command_failure(
            EditCommand(2, EditEntryDescriptor(title="x")), model, history,
            MESSAGE_INVALID_ENTRY_DISPLAYED_INDEX,
        )

    def test_equality(self):
        descriptor = EditEntryDescriptor(title="a")
        assert EditCommand(1, descriptor) == EditCommand(1, EditEntryDescriptor(title="a"))
        assert EditCommand(1, descriptor) != EditCommand(2, descriptor)
        assert EditCommand(1, descriptor) != EditCommand(1, EditEntryDescriptor(title="b"))
        assert EditCommand(1, descriptor) != ClearCommand()


class TestEditEntryDescriptor:
    def test_overlay_keeps_unset_fields(self):
        edited = EditEntryDescriptor(description="").apply_to(BENSON)
        assert edited.description == ""
        assert edited.title == BENSON.title
        assert edited.address == BENSON.address
        assert edited.tags == BENSON.tags

    def test_is_any_field_set(self):
        assert not EditEntryDescriptor().is_any_field_set()
        assert EditEntryDescriptor(tags=frozenset()).is_any_field_set()


class TestFeedCommand:
    URL = "https://example.com/rss.xml"

    def test_success_replaces_results(self, model, history):
        fetched = EntryBook([CARL, ARCHIVED])
        expected_model = model.clone()
        expected_model.set_search_entry_book(fetched)
        expected_model.set_context(ModelContext.SEARCH)

        command = FeedCommand(self.URL, fetcher=lambda url: fetched)
        assert_command_success(
            command, model, history, FeedCommand.MESSAGE_SUCCESS.format(self.URL), expected_model
        )
        assert self.URL in FeedCommand.MESSAGE_SUCCESS.format(self.URL)
        assert model.filtered_entry_list == (CARL, ARCHIVED)

    def test_network_failure(self, model, history):
        def fail(url):
            raise NetworkError("[Errno -2] Name or service not known")

        assert_command_failure(
            FeedCommand(self.URL, fetcher=fail), model, history,
            FeedCommand.MESSAGE_FAILURE_NET.format("[Errno -2] Name or service not known"),
        )

    def test_not_a_feed(self, model, history):
        def fail(url):
            raise NotAFeedError(url)

        assert_command_failure(
            FeedCommand(self.URL, fetcher=fail), model, history,
            FeedCommand.MESSAGE_FAILURE_XML.format(self.URL),
        )

    def test_default_fetcher(self, model, history, monkeypatch):
        monkeypatch.setattr(
            "reading_list.services.feed_fetcher.fetch_feed", lambda url: EntryBook([DANIEL])
        )
        execute_command(FeedCommand(self.URL), model, history)
        assert model.search_entry_book.entries == (DANIEL,)

    def test_equality(self):
        assert FeedCommand(self.URL) == FeedCommand(self.URL, fetcher=lambda url: EntryBook())
        assert FeedCommand(self.URL) != FeedCommand("https://example.org/feed")
        assert FeedCommand(self.URL) != 1


class TestViewModeCommand:
    @pytest.mark.parametrize(
        "view_mode",
        [ViewMode(view_type) for view_type in ViewType]
        + [ViewMode(ViewType.READER, style) for style in ReaderViewStyle],
    )
    def test_set_view_mode(self, model, history, view_mode):
        expected_model = model.clone()
        expected_model.set_view_mode(view_mode)

        assert_command_success(
            ViewModeCommand(view_mode), model, history,
            ViewModeCommand.MESSAGE_SET_VIEW_MODE_SUCCESS.format(view_mode), expected_model,
        )

    def test_equality(self):
        browser = ViewModeCommand(ViewMode(ViewType.BROWSER))
        assert browser == ViewModeCommand(ViewMode(ViewType.BROWSER))
        assert browser != ViewModeCommand(ViewMode(ViewType.READER))
        assert browser != None  # noqa: E711


class TestListCommands:
    """Tests for add, delete, clear, list and select."""

    def test_add(self, model, history):
        expected_model = model.clone()
        expected_model.add_entry(ARCHIVED)
        assert_command_success(
            AddCommand(ARCHIVED), model, history, AddCommand.MESSAGE_SUCCESS.format(ARCHIVED), expected_model
        )

    def test_add_duplicate(self, model, history):
        assert_command_failure(
            AddCommand(ALICE.with_changes(description="dup")), model, history,
            AddCommand.MESSAGE_DUPLICATE_ENTRY,
        )

    def test_delete(self, model, history):
        expected_model = model.clone()
        expected_model.delete_entry(BENSON)
        assert_command_success(
            DeleteCommand(2), model, history, DeleteCommand.MESSAGE_SUCCESS.format(BENSON), expected_model
        )

    def test_delete_invalid_index(self, model, history):
        assert_command_failure(DeleteCommand(99), model, history, MESSAGE_INVALID_ENTRY_DISPLAYED_INDEX)

    def test_clear(self, model, history):
        result = execute_command(ClearCommand(), model, history)
        assert result.message == "Reading List has been cleared!"
        assert len(model.list_entry_book) == 0

    def test_list_resets_filter(self, model, history):
        execute_command(find("nothing"), model, history)
        execute_command(ListCommand(), model, history)
        assert model.filtered_entry_list == tuple(TYPICAL_ENTRIES)

    def test_select(self, model, history):
        result = execute_command(SelectCommand(3), model, history)
        assert result.selected == CARL
        assert result.message == "Selected Entry: 3"

    def test_select_invalid_index(self, model, history):
        assert_command_failure(SelectCommand(5), model, history, MESSAGE_INVALID_ENTRY_DISPLAYED_INDEX)


class TestArchiveCommands:
    def test_archive_moves_entry(self, model, history):
        execute_command(ArchiveCommand(1), model, history)
        assert not model.has_entry(ALICE)
        assert model.archives_entry_book.entries == (ARCHIVED, ALICE)

    def test_archive_already_archived(self, model, history):
        model.add_entry(ALICE, context=ModelContext.ARCHIVES)
        assert_command_failure(ArchiveCommand(1), model, history, ArchiveCommand.MESSAGE_DUPLICATE_ENTRY)

    def test_unarchive_moves_entry(self, model, history):
        model.set_context(ModelContext.ARCHIVES)
        execute_command(UnarchiveCommand(1), model, history)
        assert len(model.archives_entry_book) == 0
        assert model.list_entry_book.entries[-1] == ARCHIVED

    def test_unarchive_already_in_list(self, model, history):
        model.add_entry(ARCHIVED)
        model.set_context(ModelContext.ARCHIVES)
        assert_command_failure(UnarchiveCommand(1), model, history, UnarchiveCommand.MESSAGE_DUPLICATE_ENTRY)

    def test_context_command(self, model, history):
        result = execute_command(ContextCommand(ModelContext.ARCHIVES), model, history)
        assert model.context is ModelContext.ARCHIVES
        assert result.message == "Viewing Archives"


class TestResultsCommands:
    def test_add_from_results(self, model, history):
        model.set_search_entry_book(EntryBook([CARL, ARCHIVED]))
        model.set_context(ModelContext.SEARCH)

        execute_command(AddFromResultsCommand(2), model, history)

        assert model.list_entry_book.entries[-1] == ARCHIVED
        assert model.search_entry_book.entries == (CARL, ARCHIVED)

    def test_add_from_results_duplicate(self, model, history):
        model.set_search_entry_book(EntryBook([CARL]))
        model.set_context(ModelContext.SEARCH)
        assert_command_failure(
            AddFromResultsCommand(1), model, history, AddFromResultsCommand.MESSAGE_DUPLICATE_ENTRY
        )


class TestFeedSubscriptionCommands:
    def test_subscribe(self, model, history):
        url = "https://example.org/atom.xml"
        result = execute_command(SubscribeCommand(url, "Example org"), model, history)
        assert result.message == SubscribeCommand.MESSAGE_SUCCESS.format(url)
        assert model.feeds_entry_book.entries[-1] == Entry(title="Example org", link=url)

    def test_subscribe_twice(self, model, history):
        assert_command_failure(
            SubscribeCommand(FEED.link, "Another title"), model, history,
            SubscribeCommand.MESSAGE_DUPLICATE_FEED,
        )

    def test_unsubscribe(self, model, history):
        model.set_context(ModelContext.FEEDS)
        result = execute_command(UnsubscribeCommand(1), model, history)
        assert result.message == UnsubscribeCommand.MESSAGE_SUCCESS.format(FEED.link)
        assert len(model.feeds_entry_book) == 0

    def test_refresh_adds_new_entries(self, model, history):
        fresh = Entry(title="Fresh post", link="https://example.com/fresh")
        fetched = EntryBook([ALICE, fresh])
        result = execute_command(RefreshCommand(fetcher=lambda url: fetched), model, history)

        assert result.message == RefreshCommand.MESSAGE_SUCCESS.format(1, 1)
        assert model.list_entry_book.entries == tuple(TYPICAL_ENTRIES) + (fresh,)

    def test_refresh_skips_archived_entries(self, model, history):
        """Test that items already in the archives do not come back to the reading list."""
        fetched = EntryBook([ARCHIVED])
        result = execute_command(RefreshCommand(fetcher=lambda url: fetched), model, history)

        assert result.message == RefreshCommand.MESSAGE_SUCCESS.format(1, 0)
        assert not model.list_entry_book.has_entry(ARCHIVED)
        assert model.archives_entry_book.entries == (ARCHIVED,)

    def test_refresh_reports_failures(self, model, history):
        second = Entry(title="Broken feed", link="https://broken.example.com/rss")
        model.add_entry(second, context=ModelContext.FEEDS)

        def fetch(url):
            if url == second.link:
                raise NetworkError("connection refused")
            return EntryBook([CARL.with_changes(title="Fresh")])

        result = execute_command(RefreshCommand(fetcher=fetch), model, history)

        assert result.message.splitlines() == [
            RefreshCommand.MESSAGE_SUCCESS.format(2, 1),
            "Broken feed: connection refused",
        ]


class TestSessionCommands:
    def test_history_empty(self, model, history):
        result = execute_command(HistoryCommand(), model, history)
        assert result.message == HistoryCommand.MESSAGE_NO_HISTORY

    def test_history_most_recent_first(self, model, history):
        history.add("list")
        history.add("select 1")
        result = execute_command(HistoryCommand(), model, history)
        assert result.message == HistoryCommand.MESSAGE_SUCCESS.format("select 1\nlist")

    def test_help(self, model, history):
        result = execute_command(HelpCommand(), model, history)
        assert result.show_help
        assert not result.exit

    def test_exit(self, model, history):
        result = execute_command(ExitCommand(), model, history)
        assert result.exit

    def test_unknown_command_type(self, model, history):
        with pytest.raises(TypeError):
            execute_command(object(), model, history)
