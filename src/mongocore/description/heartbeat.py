"""Typed view of a heartbeat (``isMaster``) reply document."""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from collections.abc import Mapping
from typing import Any

from ..exc import MalformedHeartbeatError

_MISSING = object()


def _get(doc: Mapping[str, Any], key: str, types: type | tuple[type, ...],
         default: Any) -> Any:
    """Read *key* from *doc*, checking its type.

    Missing or null keys yield *default*. ``bool`` is rejected where an
    integer is expected.
    """
    if not isinstance(types, tuple):
        types = (types,)
    value = doc.get(key, _MISSING)
    if value is _MISSING or value is None:
        return default
    if not isinstance(value, types) or (isinstance(value, bool) and bool not in types):
        raise MalformedHeartbeatError(
            f"heartbeat field {key!r}: expected "
            f"{' or '.join(t.__name__ for t in types)}, got {type(value).__name__}"
        )
    return value


def _get_strings(doc: Mapping[str, Any], key: str) -> tuple[str, ...]:
    values = _get(doc, key, (list, tuple), ())
    for v in values:
        if not isinstance(v, str):
            raise MalformedHeartbeatError(
                f"heartbeat field {key!r}: expected list of str, "
                f"got element {type(v).__name__}"
            )
    return tuple(values)


@dataclass(frozen=True)
class Heartbeat:
    """Fields of a heartbeat reply consumed by :func:`build_server`.

    Build one from a decoded reply document with :meth:`from_document`;
    absent fields keep their zero values.
    """

    me: str = ""
    compression: tuple[str, ...] = ()
    election_id: Any = None
    last_write_timestamp: datetime.datetime | None = None
    max_write_batch_size: int = 0
    max_bson_object_size: int = 0
    max_message_size_bytes: int = 0
    set_name: str = ""
    set_version: int = 0
    tags: Mapping[str, str] = field(default_factory=dict)
    ok: float = 0
    hosts: tuple[str, ...] = ()
    passives: tuple[str, ...] = ()
    arbiters: tuple[str, ...] = ()
    is_replica_set: bool = False
    is_master: bool = False
    hidden: bool = False
    secondary: bool = False
    arbiter_only: bool = False
    msg: str = ""
    min_wire_version: int = 0
    max_wire_version: int = 0

    @property
    def is_ok(self) -> bool:
        return self.ok == 1

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> Heartbeat:
        """Decode a heartbeat reply document.

        Raises
        ------
        MalformedHeartbeatError
            If *doc* is not a mapping or a field has the wrong type.
        """
        if not isinstance(doc, Mapping):
            raise MalformedHeartbeatError(
                f"heartbeat reply must be a document, got {type(doc).__name__}"
            )

        last_write = _get(doc, 'lastWrite', Mapping, {})
        tags = _get(doc, 'tags', Mapping, {})
        for name, value in tags.items():
            if not isinstance(value, str):
                raise MalformedHeartbeatError(
                    f"heartbeat tag {name!r}: expected str, got {type(value).__name__}"
                )

        return cls(
            me=_get(doc, 'me', str, ""),
            compression=_get_strings(doc, 'compression'),
            election_id=doc.get('electionId'),
            last_write_timestamp=_get(last_write, 'lastWriteDate', datetime.datetime, None),
            max_write_batch_size=_get(doc, 'maxWriteBatchSize', int, 0),
            max_bson_object_size=_get(doc, 'maxBsonObjectSize', int, 0),
            max_message_size_bytes=_get(doc, 'maxMessageSizeBytes', int, 0),
            set_name=_get(doc, 'setName', str, ""),
            set_version=_get(doc, 'setVersion', int, 0),
            tags=dict(tags),
            ok=_get(doc, 'ok', (int, float, bool), 0),
            hosts=_get_strings(doc, 'hosts'),
            passives=_get_strings(doc, 'passives'),
            arbiters=_get_strings(doc, 'arbiters'),
            is_replica_set=_get(doc, 'isreplicaset', bool, False),
            is_master=_get(doc, 'ismaster', bool, False),
            hidden=_get(doc, 'hidden', bool, False),
            secondary=_get(doc, 'secondary', bool, False),
            arbiter_only=_get(doc, 'arbiterOnly', bool, False),
            msg=_get(doc, 'msg', str, ""),
            min_wire_version=_get(doc, 'minWireVersion', int, 0),
            max_wire_version=_get(doc, 'maxWireVersion', int, 0),
        )
