"""Immutable server descriptions built from heartbeat replies."""

from __future__ import annotations

import dataclasses
import datetime
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ..address import canonicalize
from ..exc import MalformedHeartbeatError, NotOkHeartbeatError
from ..tag import TagSet
from .heartbeat import Heartbeat
from .kinds import ServerKind, TopologyKind, VersionRange


log = logging.getLogger("mongocore.description")

# Sentinel round trip time meaning "no measurement yet".
UNSET_RTT = datetime.timedelta(milliseconds=-1)


@dataclass(frozen=True)
class ServerDescription:
    """Description of one server, created from a heartbeat reply.

    Instances never change; updates such as :meth:`set_average_rtt`
    return a new description, so a topology monitor can swap them in
    without locking readers.
    """

    address: str
    canonical_address: str = ""
    average_rtt: datetime.timedelta = datetime.timedelta(0)
    average_rtt_set: bool = False
    compression: tuple[str, ...] = ()
    election_id: Any = None
    heartbeat_interval: datetime.timedelta = datetime.timedelta(0)
    last_error: BaseException | None = None
    last_update_time: datetime.datetime | None = None
    last_write_time: datetime.datetime | None = None
    max_batch_count: int = 0
    max_document_size: int = 0
    max_message_size: int = 0
    members: tuple[str, ...] = ()
    read_only: bool = False
    set_name: str = ""
    set_version: int = 0
    tags: TagSet = TagSet()
    kind: ServerKind = ServerKind.UNKNOWN
    wire_version: VersionRange | None = None

    def set_average_rtt(self, rtt: datetime.timedelta) -> ServerDescription:
        """Return a copy with *rtt* as the average round trip time.

        Passing :data:`UNSET_RTT` marks the round trip time as not set.
        """
        return dataclasses.replace(
            self, average_rtt=rtt, average_rtt_set=rtt != UNSET_RTT,
        )


@dataclass(frozen=True)
class SelectedServer:
    """A server description paired with the kind of its enclosing topology."""

    server: ServerDescription
    topology_kind: TopologyKind = TopologyKind.UNKNOWN

    @property
    def server_kind(self) -> ServerKind:
        return self.server.kind

    @property
    def address(self) -> str:
        return self.server.address


def _classify(hb: Heartbeat) -> ServerKind:
    if hb.is_replica_set:
        return ServerKind.RS_GHOST
    if hb.set_name:
        if hb.is_master:
            return ServerKind.RS_PRIMARY
        if hb.hidden:
            return ServerKind.RS_MEMBER
        if hb.secondary:
            return ServerKind.RS_SECONDARY
        if hb.arbiter_only:
            return ServerKind.RS_ARBITER
        return ServerKind.RS_MEMBER
    if hb.msg == "isdbgrid":
        return ServerKind.MONGOS
    return ServerKind.STANDALONE


def build_server(address: str,
                 heartbeat: Heartbeat | Mapping[str, Any]) -> ServerDescription:
    """Build a :class:`ServerDescription` from a heartbeat reply.

    Parameters
    ----------
    address : str
        Address the heartbeat was sent to.
    heartbeat : Heartbeat or mapping
        The reply, either decoded or as a raw document.

    Returns
    -------
    ServerDescription
        Never raises for a bad reply: a reply that is not ok, or that cannot
        be decoded, yields a description whose ``last_error`` is set and
        whose ``kind`` is ``UNKNOWN``.
    """
    now = datetime.datetime.now(datetime.timezone.utc)

    if not isinstance(heartbeat, Heartbeat):
        try:
            heartbeat = Heartbeat.from_document(heartbeat)
        except MalformedHeartbeatError as e:
            log.debug("Malformed heartbeat from %s: %s", address, e)
            return ServerDescription(
                address=address, canonical_address=address,
                last_error=e, last_update_time=now,
            )

    fields: dict[str, Any] = dict(
        address=address,
        canonical_address=canonicalize(heartbeat.me) if heartbeat.me else address,
        compression=tuple(heartbeat.compression),
        election_id=heartbeat.election_id,
        last_update_time=now,
        last_write_time=heartbeat.last_write_timestamp,
        max_batch_count=heartbeat.max_write_batch_size,
        max_document_size=heartbeat.max_bson_object_size,
        max_message_size=heartbeat.max_message_size_bytes,
        set_name=heartbeat.set_name,
        set_version=heartbeat.set_version,
        tags=TagSet.from_mapping(heartbeat.tags),
    )

    if not heartbeat.is_ok:
        log.debug("Heartbeat from %s not ok", address)
        return ServerDescription(last_error=NotOkHeartbeatError(), **fields)

    members = [canonicalize(h) for h in heartbeat.hosts]
    members.extend(canonicalize(h) for h in heartbeat.passives)
    members.extend(canonicalize(h) for h in heartbeat.arbiters)

    desc = ServerDescription(
        members=tuple(members),
        kind=_classify(heartbeat),
        wire_version=VersionRange(heartbeat.min_wire_version, heartbeat.max_wire_version),
        **fields,
    )
    log.debug("Described %s as %s (wire versions %s)", address, desc.kind.name, desc.wire_version)
    return desc
