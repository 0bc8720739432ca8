"""Command line parsing.

A command line is a command word followed by arguments. Named arguments are
introduced by prefixes such as ``t/`` (title) or ``tag/`` (tag); whatever comes
before the first prefix is the preamble (an index, keywords or a URL).

Every context has its own parser with its own set of command words; the
parser for a line is picked by the context the model is in.
"""

import re
from dataclasses import dataclass, field
from typing import Callable, Dict, FrozenSet, List, Optional, Type

import httpx

from reading_list.exceptions import ParseError
from reading_list.logic.commands import (
    AddCommand,
    AddFromResultsCommand,
    ArchiveCommand,
    ClearCommand,
    Command,
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
from reading_list.logic.messages import (
    MESSAGE_INVALID_COMMAND_FORMAT,
    MESSAGE_INVALID_INDEX,
    MESSAGE_UNKNOWN_COMMAND,
)
from reading_list.models.model import ModelContext
from reading_list.models.predicates import EntryMatchesDescriptorPredicate, FindEntryDescriptor
from reading_list.models.schemas import (
    MESSAGE_LINK_CONSTRAINTS,
    MESSAGE_TITLE_CONSTRAINTS,
    Entry,
    is_valid_link,
    is_valid_title,
    normalize_tags,
)
from reading_list.models.view_mode import ReaderViewStyle, ViewMode, ViewType


PREFIX_TITLE = "t/"
PREFIX_DESCRIPTION = "d/"
PREFIX_LINK = "l/"
PREFIX_ADDRESS = "a/"
PREFIX_TAG = "tag/"

ENTRY_PREFIXES = (PREFIX_TITLE, PREFIX_DESCRIPTION, PREFIX_LINK, PREFIX_ADDRESS, PREFIX_TAG)

BASIC_COMMAND_FORMAT = re.compile(r"^(?P<command_word>\S+)(?P<arguments>.*)$", re.DOTALL)

MESSAGE_BLANK_SEARCH_TERM = "Search terms should not be blank"

ArgumentParser = Callable[[str], Command]


# Tokenizer

@dataclass
class ArgumentMultimap:
    """Values of each prefix in the order they appeared, plus the preamble."""

    preamble: str = ""
    values: Dict[str, List[str]] = field(default_factory=dict)

    def get_value(self, prefix: str) -> Optional[str]:
        """Return the last value given for ``prefix``, or None if absent."""
        values = self.values.get(prefix)
        return values[-1] if values else None

    def get_all_values(self, prefix: str) -> List[str]:
        return list(self.values.get(prefix, []))

    def is_present(self, prefix: str) -> bool:
        return prefix in self.values


def tokenize(args_string: str, *prefixes: str) -> ArgumentMultimap:
    """Split ``args_string`` on the given prefixes.

    A prefix only counts when it starts the string or follows whitespace, so
    values such as URLs may contain the prefix text.
    """
    pattern = re.compile(
        r"(?<!\S)(" + "|".join(re.escape(p) for p in sorted(prefixes, key=len, reverse=True)) + ")"
    )
    matches = list(pattern.finditer(args_string))

    end_of_preamble = matches[0].start() if matches else len(args_string)
    multimap = ArgumentMultimap(preamble=args_string[:end_of_preamble].strip())

    for current, following in zip(matches, matches[1:] + [None]):
        value_end = following.start() if following else len(args_string)
        value = args_string[current.end():value_end].strip()
        multimap.values.setdefault(current.group(1), []).append(value)

    return multimap


# Field parsers

def parse_index(one_based_index: str) -> int:
    """Parse a positive one-based index.

    Raises:
        ParseError: If the text is not a positive integer
    """
    text = one_based_index.strip()
    if not text.isdecimal() or int(text) < 1:
        raise ParseError(MESSAGE_INVALID_INDEX)
    return int(text)


def parse_title(title: str) -> str:
    if not is_valid_title(title):
        raise ParseError(MESSAGE_TITLE_CONSTRAINTS)
    return title.strip()


def parse_link(link: str) -> str:
    link = link.strip()
    if not is_valid_link(link):
        raise ParseError(MESSAGE_LINK_CONSTRAINTS)
    return link


def parse_tags(tags: List[str]) -> FrozenSet[str]:
    try:
        return normalize_tags(tags)
    except ValueError as e:
        raise ParseError(str(e)) from e


def _invalid_format(usage: str) -> ParseError:
    return ParseError(MESSAGE_INVALID_COMMAND_FORMAT.format(usage), usage)


def _with_usage(usage: str, parse: Callable, *args):
    """Run a field parser, attaching ``usage`` to any error it raises."""
    try:
        return parse(*args)
    except ParseError as e:
        raise ParseError(str(e), usage) from e


def _index_argument(args: str, usage: str) -> int:
    try:
        return parse_index(args)
    except ParseError as e:
        raise _invalid_format(usage) from e


# Argument parsers, one per command

def parse_add(args: str) -> AddCommand:
    usage = AddCommand.MESSAGE_USAGE
    argmap = tokenize(args, *ENTRY_PREFIXES)
    if argmap.preamble or not (argmap.is_present(PREFIX_TITLE) and argmap.is_present(PREFIX_LINK)):
        raise _invalid_format(usage)

    entry = Entry(
        title=_with_usage(usage, parse_title, argmap.get_value(PREFIX_TITLE)),
        link=_with_usage(usage, parse_link, argmap.get_value(PREFIX_LINK)),
        description=argmap.get_value(PREFIX_DESCRIPTION) or "",
        address=argmap.get_value(PREFIX_ADDRESS) or "",
        tags=_with_usage(usage, parse_tags, argmap.get_all_values(PREFIX_TAG)),
    )
    return AddCommand(entry)


def parse_add_from_results(args: str) -> AddFromResultsCommand:
    return AddFromResultsCommand(_index_argument(args, AddFromResultsCommand.MESSAGE_USAGE))


def parse_edit(args: str) -> EditCommand:
    usage = EditCommand.MESSAGE_USAGE
    argmap = tokenize(args, *ENTRY_PREFIXES)
    index = _index_argument(argmap.preamble, usage)

    tags = None
    if argmap.is_present(PREFIX_TAG):
        # a lone "tag/" clears every tag
        values = argmap.get_all_values(PREFIX_TAG)
        tags = frozenset() if values == [""] else _with_usage(usage, parse_tags, values)

    title = argmap.get_value(PREFIX_TITLE)
    link = argmap.get_value(PREFIX_LINK)
    descriptor = EditEntryDescriptor(
        title=_with_usage(usage, parse_title, title) if title is not None else None,
        description=argmap.get_value(PREFIX_DESCRIPTION),
        link=_with_usage(usage, parse_link, link) if link is not None else None,
        address=argmap.get_value(PREFIX_ADDRESS),
        tags=tags,
    )

    if not descriptor.is_any_field_set():
        raise ParseError(EditCommand.MESSAGE_NOT_EDITED, usage)

    return EditCommand(index, descriptor)


def parse_delete(args: str) -> DeleteCommand:
    return DeleteCommand(_index_argument(args, DeleteCommand.MESSAGE_USAGE))


def parse_select(args: str) -> SelectCommand:
    return SelectCommand(_index_argument(args, SelectCommand.MESSAGE_USAGE))


def parse_archive(args: str) -> ArchiveCommand:
    return ArchiveCommand(_index_argument(args, ArchiveCommand.MESSAGE_USAGE))


def parse_unarchive(args: str) -> UnarchiveCommand:
    return UnarchiveCommand(_index_argument(args, UnarchiveCommand.MESSAGE_USAGE))


def parse_unsubscribe(args: str) -> UnsubscribeCommand:
    return UnsubscribeCommand(_index_argument(args, UnsubscribeCommand.MESSAGE_USAGE))


def parse_find(args: str) -> FindCommand:
    usage = FindCommand.MESSAGE_USAGE
    argmap = tokenize(args, *ENTRY_PREFIXES)

    for prefix in ENTRY_PREFIXES:
        if any(not value for value in argmap.get_all_values(prefix)):
            raise ParseError(MESSAGE_BLANK_SEARCH_TERM, usage)

    descriptor = FindEntryDescriptor(
        keywords=tuple(argmap.preamble.split()),
        title=argmap.get_value(PREFIX_TITLE),
        description=argmap.get_value(PREFIX_DESCRIPTION),
        link=argmap.get_value(PREFIX_LINK),
        address=argmap.get_value(PREFIX_ADDRESS),
        tags=(
            _with_usage(usage, parse_tags, argmap.get_all_values(PREFIX_TAG))
            if argmap.is_present(PREFIX_TAG)
            else None
        ),
    )

    if not descriptor.is_any_field_set():
        raise _invalid_format(usage)

    return FindCommand(EntryMatchesDescriptorPredicate(descriptor))


def parse_feed(args: str) -> FeedCommand:
    url = args.strip()
    if not is_valid_link(url):
        raise _invalid_format(FeedCommand.MESSAGE_USAGE)
    return FeedCommand(url)


def parse_subscribe(args: str) -> SubscribeCommand:
    usage = SubscribeCommand.MESSAGE_USAGE
    argmap = tokenize(args, PREFIX_TITLE)
    if not is_valid_link(argmap.preamble):
        raise _invalid_format(usage)

    title = argmap.get_value(PREFIX_TITLE)
    if title is None:
        title = httpx.URL(argmap.preamble).host
    return SubscribeCommand(argmap.preamble, _with_usage(usage, parse_title, title))


def parse_view_mode(args: str) -> ViewModeCommand:
    usage = ViewModeCommand.MESSAGE_USAGE
    words = args.lower().split()
    try:
        if len(words) == 1:
            return ViewModeCommand(ViewMode(ViewType(words[0])))
        if len(words) == 2 and ViewType(words[0]) is ViewType.READER:
            return ViewModeCommand(ViewMode(ViewType.READER, ReaderViewStyle(words[1])))
    except ValueError as e:
        raise _invalid_format(usage) from e
    raise _invalid_format(usage)


def _no_arguments(command_class: Type[Command]) -> ArgumentParser:
    return lambda args: command_class()


def _switch_to(context: ModelContext) -> ArgumentParser:
    return lambda args: ContextCommand(context)


def _words(command_class: Type[Command]):
    return (command_class.COMMAND_WORD,) + command_class.COMMAND_ALIASES


# Context parsers

class EntryBookParser:
    """Turns a command line into a command.

    Subclasses list the commands only available in their context in
    ``context_commands``; the commands in ``_common_commands`` work everywhere.
    """

    context_commands: Dict[Type[Command], ArgumentParser] = {}

    def __init__(self):
        self._argument_parsers: Dict[str, ArgumentParser] = {}
        self.usages: List[str] = []
        for command_class, parse in {**self._common_commands(), **self.context_commands}.items():
            self.usages.append(command_class.MESSAGE_USAGE)
            for word in _words(command_class):
                self._argument_parsers[word] = parse
        self.usages.append(ContextCommand.MESSAGE_USAGE)
        self._argument_parsers["readinglist"] = _switch_to(ModelContext.LIST)
        self._argument_parsers["rl"] = _switch_to(ModelContext.LIST)
        self._argument_parsers["archives"] = _switch_to(ModelContext.ARCHIVES)
        self._argument_parsers["feeds"] = _switch_to(ModelContext.FEEDS)

    @staticmethod
    def _common_commands() -> Dict[Type[Command], ArgumentParser]:
        return {
            HelpCommand: _no_arguments(HelpCommand),
            ExitCommand: _no_arguments(ExitCommand),
            HistoryCommand: _no_arguments(HistoryCommand),
            ListCommand: _no_arguments(ListCommand),
            SelectCommand: parse_select,
            ViewModeCommand: parse_view_mode,
            FindCommand: parse_find,
            FeedCommand: parse_feed,
            SubscribeCommand: parse_subscribe,
        }

    def parse_command(self, user_input: str) -> Command:
        """Parse one command line.

        Raises:
            ParseError: If the line is empty, the command word is unknown or
                the arguments do not fit the command
        """
        match = BASIC_COMMAND_FORMAT.match(user_input.strip())
        if not match:
            raise _invalid_format(HelpCommand.MESSAGE_USAGE)

        command_word = match.group("command_word").lower()
        parse = self._argument_parsers.get(command_word)
        if parse is None:
            raise ParseError(MESSAGE_UNKNOWN_COMMAND)
        return parse(match.group("arguments"))


class ListParser(EntryBookParser):
    context_commands = {
        AddCommand: parse_add,
        EditCommand: parse_edit,
        DeleteCommand: parse_delete,
        ClearCommand: _no_arguments(ClearCommand),
        ArchiveCommand: parse_archive,
    }


class ArchivesParser(EntryBookParser):
    context_commands = {
        DeleteCommand: parse_delete,
        ClearCommand: _no_arguments(ClearCommand),
        UnarchiveCommand: parse_unarchive,
    }


class SearchParser(EntryBookParser):
    context_commands = {
        AddFromResultsCommand: parse_add_from_results,
    }


class FeedsParser(EntryBookParser):
    context_commands = {
        UnsubscribeCommand: parse_unsubscribe,
        RefreshCommand: _no_arguments(RefreshCommand),
    }
