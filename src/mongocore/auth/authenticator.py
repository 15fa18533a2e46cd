"""Credential-bound authenticator running a SASL conversation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .cred import Credential
from .registry import MechanismRegistry, SaslClientFactory, default_registry
from .sasl import async_conduct_sasl_conversation, conduct_sasl_conversation

if TYPE_CHECKING:
    from ..description import SelectedServer
    from .base import AsyncCommandChannel, CommandChannel


class SaslAuthenticator:
    """Authenticates connections with one credential.

    A fresh SASL client is created for every connection, so concurrent
    handshakes never share mechanism state.

    Usage::

        auth = SaslAuthenticator.from_credential(cred)
        auth.authenticate(channel, selected_server)
    """

    def __init__(self, credential: Credential, factory: SaslClientFactory,
                 timeout: float | None = None) -> None:
        self.credential = credential
        self.factory = factory
        self.timeout = timeout

    @classmethod
    def from_credential(cls, credential: Credential,
                        registry: MechanismRegistry | None = None,
                        timeout: float | None = None) -> SaslAuthenticator:
        """Look up the credential's mechanism in *registry* (default registry if None)."""
        registry = registry if registry is not None else default_registry
        return cls(credential, registry.get(credential.mechanism), timeout=timeout)

    def authenticate(self, channel: CommandChannel, server: SelectedServer) -> None:
        conduct_sasl_conversation(
            channel, server, self.credential.source,
            self.factory(self.credential), timeout=self.timeout,
        )

    async def async_authenticate(self, channel: AsyncCommandChannel,
                                 server: SelectedServer) -> None:
        await async_conduct_sasl_conversation(
            channel, server, self.credential.source,
            self.factory(self.credential), timeout=self.timeout,
        )

    def __repr__(self) -> str:
        return f"SaslAuthenticator({self.credential!r})"
