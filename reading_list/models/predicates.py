"""Search criteria for the find command."""

from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Tuple

from reading_list.models.schemas import Entry


@dataclass(frozen=True)
class FindEntryDescriptor:
    """Optional search terms, one per entry field.

    ``keywords`` match whole words of the title. Every other field that is set
    must occur in the entry's field as a case-insensitive substring, and every
    tag listed must be carried by the entry.
    """

    keywords: Tuple[str, ...] = ()
    title: Optional[str] = None
    description: Optional[str] = None
    link: Optional[str] = None
    address: Optional[str] = None
    tags: Optional[FrozenSet[str]] = None

    def is_any_field_set(self) -> bool:
        return bool(self.keywords) or any(
            value is not None
            for value in (self.title, self.description, self.link, self.address, self.tags)
        )


@dataclass(frozen=True)
class EntryMatchesDescriptorPredicate:
    """Callable predicate accepting entries that satisfy every set criterion."""

    descriptor: FindEntryDescriptor = field(default_factory=FindEntryDescriptor)

    def __call__(self, entry: Entry) -> bool:
        d = self.descriptor
        if d.keywords:
            title_words = entry.title.lower().split()
            if not any(keyword.lower() in title_words for keyword in d.keywords):
                return False

        for term, value in (
            (d.title, entry.title),
            (d.description, entry.description),
            (d.link, entry.link),
            (d.address, entry.address),
        ):
            if term is not None and term.lower() not in value.lower():
                return False

        if d.tags is not None and not {tag.lower() for tag in d.tags} <= entry.tags:
            return False

        return True
