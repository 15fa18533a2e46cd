"""Server and topology kinds."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class ServerKind(enum.IntEnum):
    """Role of a single server in a cluster.

    Replica set roles share the ``RS_MEMBER`` bit so membership can be
    tested with a mask.
    """
    UNKNOWN = 0
    STANDALONE = 1
    RS_MEMBER = 2
    RS_PRIMARY = 6  # 4 | RS_MEMBER
    RS_SECONDARY = 10  # 8 | RS_MEMBER
    RS_ARBITER = 18  # 16 | RS_MEMBER
    RS_GHOST = 34  # 32 | RS_MEMBER
    MONGOS = 256

    @property
    def is_replica_set_member(self) -> bool:
        return bool(self & ServerKind.RS_MEMBER)


class TopologyKind(enum.IntEnum):
    """Classification of the whole cluster a server belongs to."""
    UNKNOWN = 0
    SINGLE = 1
    REPLICA_SET = 2
    REPLICA_SET_NO_PRIMARY = 6  # 4 | REPLICA_SET
    REPLICA_SET_WITH_PRIMARY = 10  # 8 | REPLICA_SET
    SHARDED = 256


@dataclass(frozen=True)
class VersionRange:
    """Inclusive ``[min, max]`` wire version range."""

    min: int
    max: int

    def includes(self, version: int) -> bool:
        return self.min <= version <= self.max

    def __str__(self) -> str:
        return f"[{self.min}, {self.max}]"
