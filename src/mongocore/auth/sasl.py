"""SASL conversation driver.

A conversation runs as a sequence of command/reply round trips:

1. Client sends ``{saslStart: 1, mechanism, payload}`` against the auth
   database; the server replies with a ``conversationId``, a response
   ``code``, a ``done`` flag and its challenge ``payload``.
2. While neither side has finished, the client answers each challenge with
   ``{saslContinue: 1, conversationId, payload}``.

The conversation succeeds once the server reports ``done`` and the client
agrees that it is complete. There is no round limit; the number of rounds
is up to the mechanism and the server.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

from ..description import ServerKind
from ..exc import AuthenticationError, MechanismError, ProtocolError
from .base import AsyncCommandChannel, CommandChannel, SaslClient

if TYPE_CHECKING:
    from ..description import SelectedServer


log = logging.getLogger("mongocore.auth")

DEFAULT_AUTH_DB = "admin"


@dataclass(frozen=True)
class SaslResponse:
    """Decoded reply to a ``saslStart`` or ``saslContinue`` command."""

    conversation_id: int = 0
    code: int = 0
    done: bool = False
    payload: bytes = b''

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> SaslResponse:
        """Decode a reply document; missing fields keep their zero values.

        Raises
        ------
        ProtocolError
            If *doc* is not a document or a field has the wrong type.
        """
        if not isinstance(doc, Mapping):
            raise ProtocolError(f"malformed reply: expected document, got {type(doc).__name__}")

        cid = doc.get('conversationId', 0)
        code = doc.get('code', 0)
        done = doc.get('done', False)
        payload = doc.get('payload', b'')

        for key, value in (('conversationId', cid), ('code', code)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise ProtocolError(f"malformed reply: {key!r} must be an integer")
        if not isinstance(done, bool):
            raise ProtocolError("malformed reply: 'done' must be a boolean")
        if not isinstance(payload, (bytes, bytearray, memoryview)):
            raise ProtocolError("malformed reply: 'payload' must be binary")

        return cls(conversation_id=cid, code=code, done=done, payload=bytes(payload))


class SaslConversation:
    """Command/reply state machine for one conversation.

    Drives a :class:`SaslClient` without doing any I/O, so the sync and
    async drivers share it. Call :meth:`start` for the first command, then
    feed each reply to :meth:`step` until it returns ``None``.
    """

    def __init__(self, client: SaslClient) -> None:
        self.client = client
        self.mechanism = ""
        self.conversation_id: int | None = None
        self.rounds = 0

    def start(self) -> dict[str, Any]:
        """Return the ``saslStart`` command."""
        try:
            self.mechanism, payload = self.client.start()
        except MechanismError:
            raise
        except Exception as e:
            raise MechanismError(self.mechanism, e) from e
        return {'saslStart': 1, 'mechanism': self.mechanism, 'payload': payload}

    def step(self, reply: Mapping[str, Any]) -> dict[str, Any] | None:
        """Consume a reply and return the next command, or ``None`` when done.

        Raises
        ------
        ProtocolError
            If the reply is malformed or carries a nonzero code.
        MechanismError
            If the client fails to answer the challenge.
        """
        resp = SaslResponse.from_document(reply)
        self.rounds += 1
        if self.conversation_id is None:
            self.conversation_id = resp.conversation_id

        if resp.code != 0:
            raise ProtocolError(
                f"server rejected {self.mechanism} conversation", code=resp.code,
            )

        if resp.done and self.client.completed():
            return None

        try:
            payload = self.client.next(resp.payload)
        except MechanismError:
            raise
        except Exception as e:
            raise MechanismError(self.mechanism, e) from e

        # The client may complete on this challenge without another round trip.
        if resp.done and self.client.completed():
            return None

        return {
            'saslContinue': 1,
            'conversationId': self.conversation_id,
            'payload': payload,
        }

    def close(self) -> None:
        """Close the client after a conversation that did not fail.

        Raises
        ------
        MechanismError
            If the client fails to release its resources.
        """
        try:
            self.client.close()
        except Exception as e:
            raise MechanismError(self.mechanism, e) from e

    def close_after_error(self) -> None:
        """Close the client while another error is propagating.

        A failure here is logged and dropped so the caller sees the
        original error.
        """
        try:
            self.client.close()
        except Exception:
            log.debug("Error closing %s client after failed conversation",
                      self.mechanism or "SASL", exc_info=True)


def _remaining(deadline: float | None, mechanism: str) -> float | None:
    """Seconds left before *deadline*, or ``None`` when there is no deadline."""
    if deadline is None:
        return None
    remaining = deadline - time.monotonic()
    if remaining <= 0:
        err = TimeoutError("SASL conversation deadline exceeded")
        raise MechanismError(mechanism, err) from err
    return remaining


def _converse(channel: CommandChannel, server: SelectedServer, database: str,
              conv: SaslConversation, deadline: float | None) -> None:
    command = conv.start()
    log.debug("saslStart %s on %s.%s", conv.mechanism, server.address, database)

    while command is not None:
        timeout = _remaining(deadline, conv.mechanism)
        try:
            reply = channel.round_trip(database, command, server, timeout=timeout)
        except AuthenticationError:
            raise
        except Exception as e:
            raise MechanismError(conv.mechanism, e) from e
        command = conv.step(reply)

    log.debug("Authenticated %s with %s after %d round trip(s)",
              server.address, conv.mechanism, conv.rounds)


async def _async_converse(channel: AsyncCommandChannel, server: SelectedServer,
                          database: str, conv: SaslConversation,
                          deadline: float | None) -> None:
    command = conv.start()
    log.debug("saslStart %s on %s.%s", conv.mechanism, server.address, database)

    while command is not None:
        timeout = _remaining(deadline, conv.mechanism)
        try:
            reply = await asyncio.wait_for(
                channel.round_trip(database, command, server), timeout=timeout,
            )
        except AuthenticationError:
            raise
        except Exception as e:
            raise MechanismError(conv.mechanism, e) from e
        command = conv.step(reply)

    log.debug("Authenticated %s with %s after %d round trip(s)",
              server.address, conv.mechanism, conv.rounds)


def conduct_sasl_conversation(channel: CommandChannel, server: SelectedServer,
                              database: str, client: SaslClient,
                              timeout: float | None = None) -> None:
    """Authenticate a connection by running a SASL conversation.

    Parameters
    ----------
    channel : CommandChannel
        Sends commands over the connection being authenticated.
    server : SelectedServer
        The server on the other end. Arbiters are never authenticated.
    database : str
        Authentication database; empty means :data:`DEFAULT_AUTH_DB`.
    client : SaslClient
        The mechanism. Its :meth:`~SaslClient.close` is always called once.
    timeout : float, optional
        Seconds allowed for the whole conversation. Each round trip is
        handed the time remaining.

    Raises
    ------
    MechanismError
        If the mechanism or a round trip fails, or the deadline passes.
    ProtocolError
        If the server sends a malformed reply or a nonzero code.
    """
    deadline = None if timeout is None else time.monotonic() + timeout
    conv = SaslConversation(client)
    try:
        if server.server_kind == ServerKind.RS_ARBITER:
            log.debug("Skipping authentication of arbiter %s", server.address)
        else:
            _converse(channel, server, database or DEFAULT_AUTH_DB, conv, deadline)
    except BaseException:
        conv.close_after_error()
        raise
    conv.close()


async def async_conduct_sasl_conversation(channel: AsyncCommandChannel,
                                          server: SelectedServer,
                                          database: str, client: SaslClient,
                                          timeout: float | None = None) -> None:
    """Async version of :func:`conduct_sasl_conversation`.

    *timeout* bounds the whole conversation. Cancelling the calling task
    aborts the conversation and still closes *client*.
    """
    deadline = None if timeout is None else time.monotonic() + timeout
    conv = SaslConversation(client)
    try:
        if server.server_kind == ServerKind.RS_ARBITER:
            log.debug("Skipping authentication of arbiter %s", server.address)
        else:
            await _async_converse(channel, server, database or DEFAULT_AUTH_DB,
                                  conv, deadline)
    except BaseException:
        conv.close_after_error()
        raise
    conv.close()
