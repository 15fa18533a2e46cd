"""Abstract SASL client and command channel interfaces."""

from __future__ import annotations

import abc
from collections.abc import Mapping
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from ..description import SelectedServer


class SaslClient(abc.ABC):
    """Client side of one SASL conversation.

    A mechanism implements :meth:`start`, :meth:`next` and
    :meth:`completed`. Mechanisms holding key material or crypto contexts
    also override :meth:`close`, which the conversation calls exactly once
    when it finishes, however it finishes.
    """

    @abc.abstractmethod
    def start(self) -> tuple[str, bytes]:
        """Return the mechanism name and the initial payload."""

    @abc.abstractmethod
    def next(self, challenge: bytes) -> bytes:
        """Return the response to a server challenge."""

    @abc.abstractmethod
    def completed(self) -> bool:
        """Whether the client considers the conversation complete."""

    def close(self) -> None:
        """Release resources held by the mechanism."""


class CommandChannel(abc.ABC):
    """Sends a command to a selected server and returns its reply."""

    @abc.abstractmethod
    def round_trip(self, database: str, command: Mapping[str, Any],
                   server: SelectedServer,
                   timeout: float | None = None) -> Mapping[str, Any]:
        """Run *command* against *database* and return the reply document.

        Parameters
        ----------
        timeout : float, optional
            Seconds allowed for this round trip; ``None`` waits forever.
        """


class AsyncCommandChannel(abc.ABC):
    """Async version of :class:`CommandChannel`.

    Cancelling the awaiting task cancels the round trip in flight.
    """

    @abc.abstractmethod
    async def round_trip(self, database: str, command: Mapping[str, Any],
                         server: SelectedServer) -> Mapping[str, Any]:
        """Run *command* against *database* and return the reply document."""
