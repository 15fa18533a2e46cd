"""Server tag sets advertised in heartbeat replies."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Mapping


@dataclass(frozen=True)
class Tag:
    name: str
    value: str


@dataclass(frozen=True)
class TagSet:
    """Immutable ordered collection of tags.

    Usage::

        tags = TagSet.from_mapping({"dc": "ny", "rack": "1"})
        tags.contains("dc", "ny")            # True
        Tag("rack", "1") in tags             # True
    """

    tags: tuple[Tag, ...] = ()

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str] | None) -> TagSet:
        if not mapping:
            return cls()
        return cls(tuple(Tag(k, v) for k, v in mapping.items()))

    def contains(self, name: str, value: str) -> bool:
        return Tag(name, value) in self.tags

    def contains_all(self, other: TagSet) -> bool:
        """Whether every tag in *other* is also in this set."""
        return all(t in self.tags for t in other)

    def __contains__(self, tag: object) -> bool:
        return tag in self.tags

    def __iter__(self) -> Iterator[Tag]:
        return iter(self.tags)

    def __len__(self) -> int:
        return len(self.tags)
