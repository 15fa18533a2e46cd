"""Test fixtures: scripted SASL clients and in-memory command channels."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Mapping
from typing import Any

import pytest

from mongocore.auth.base import AsyncCommandChannel, CommandChannel, SaslClient
from mongocore.description import (
    SelectedServer, ServerDescription, ServerKind, TopologyKind,
)


class ScriptedClient(SaslClient):
    """A SASL client that is complete after ``steps`` calls to :meth:`next`.

    Records every challenge it is given and how often it was closed.
    """

    def __init__(self, steps: int = 0, mechanism: str = "TEST",
                 fail_start: Exception | None = None,
                 fail_next: Exception | None = None,
                 fail_close: Exception | None = None) -> None:
        self.steps = steps
        self.mechanism = mechanism
        self.fail_start = fail_start
        self.fail_next = fail_next
        self.fail_close = fail_close
        self.challenges: list[bytes] = []
        self.next_calls = 0
        self.closed = 0

    def start(self) -> tuple[str, bytes]:
        if self.fail_start is not None:
            raise self.fail_start
        return self.mechanism, b"client-first"

    def next(self, challenge: bytes) -> bytes:
        self.challenges.append(challenge)
        if self.fail_next is not None:
            raise self.fail_next
        self.next_calls += 1
        return f"client-{self.next_calls}".encode()

    def completed(self) -> bool:
        return self.next_calls >= self.steps

    def close(self) -> None:
        self.closed += 1
        if self.fail_close is not None:
            raise self.fail_close


class RecordingChannel(CommandChannel):
    """Replays canned replies and records the commands it was sent.

    A reply that is an exception instance is raised instead of returned.
    With a *delay*, each round trip takes that long, or fails with
    :class:`TimeoutError` when the timeout it is given is shorter.
    """

    def __init__(self, replies: list[Any], delay: float = 0.0) -> None:
        self.replies = list(replies)
        self.delay = delay
        self.calls: list[tuple[str, dict[str, Any], float | None]] = []

    @property
    def commands(self) -> list[dict[str, Any]]:
        return [c for _, c, _ in self.calls]

    def round_trip(self, database: str, command: Mapping[str, Any],
                   server: SelectedServer,
                   timeout: float | None = None) -> Mapping[str, Any]:
        self.calls.append((database, dict(command), timeout))
        if self.delay:
            time.sleep(self.delay if timeout is None else min(self.delay, timeout))
            if timeout is not None and timeout < self.delay:
                raise TimeoutError("round trip timed out")
        if not self.replies:
            raise AssertionError(f"unexpected command {command!r}")
        reply = self.replies.pop(0)
        if isinstance(reply, BaseException):
            raise reply
        return reply


class AsyncRecordingChannel(AsyncCommandChannel):
    """Async version of :class:`RecordingChannel` with an optional delay."""

    def __init__(self, replies: list[Any], delay: float = 0.0) -> None:
        self.replies = list(replies)
        self.delay = delay
        self.calls: list[tuple[str, dict[str, Any]]] = []

    async def round_trip(self, database: str, command: Mapping[str, Any],
                         server: SelectedServer) -> Mapping[str, Any]:
        self.calls.append((database, dict(command)))
        if self.delay:
            await asyncio.sleep(self.delay)
        if not self.replies:
            raise AssertionError(f"unexpected command {command!r}")
        reply = self.replies.pop(0)
        if isinstance(reply, BaseException):
            raise reply
        return reply


def sasl_reply(done: bool = False, code: int = 0, cid: int = 1,
               payload: bytes = b"server") -> dict[str, Any]:
    return {'conversationId': cid, 'code': code, 'done': done, 'payload': payload, 'ok': 1}


def selected(kind: ServerKind = ServerKind.STANDALONE,
             topology: TopologyKind = TopologyKind.SINGLE) -> SelectedServer:
    return SelectedServer(
        ServerDescription(address="db1:27017", kind=kind), topology,
    )


@pytest.fixture
def server():
    """A selected standalone server."""
    return selected()


@pytest.fixture
def arbiter():
    """A selected replica set arbiter."""
    return selected(ServerKind.RS_ARBITER, TopologyKind.REPLICA_SET_WITH_PRIMARY)


@pytest.fixture
def make_client():
    """Factory for :class:`ScriptedClient`."""
    return ScriptedClient


@pytest.fixture
def make_channel():
    """Factory for :class:`RecordingChannel`."""
    return RecordingChannel


@pytest.fixture
def make_async_channel():
    """Factory for :class:`AsyncRecordingChannel`."""
    return AsyncRecordingChannel


@pytest.fixture
def reply():
    """Factory for SASL reply documents."""
    return sasl_reply
