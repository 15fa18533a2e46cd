"""Exception hierarchy for mongocore."""

from __future__ import annotations


class MongoCoreError(Exception):
    """Base exception for all mongocore errors."""


class ConnectionError(MongoCoreError):
    """Failed to establish a usable connection to a server."""


class HandshakeError(ConnectionError):
    """Connection handshake failed."""


class AuthenticationError(HandshakeError):
    """Authentication of a connection failed."""


class MechanismError(AuthenticationError):
    """A SASL mechanism, or the round trip carrying its payload, failed."""

    def __init__(self, mechanism: str, cause: BaseException | None = None) -> None:
        self.mechanism = mechanism
        self.cause = cause
        msg = f'unable to authenticate using mechanism "{mechanism}"'
        if cause is not None:
            msg = f"{msg}: {cause}"
        super().__init__(msg)


class ProtocolError(AuthenticationError):
    """The server sent a malformed SASL reply or a nonzero response code."""

    def __init__(self, detail: str, code: int | None = None) -> None:
        self.detail = detail
        self.code = code
        if code is not None:
            detail = f"{detail} (code {code})"
        super().__init__(detail)


class HeartbeatError(MongoCoreError):
    """A heartbeat reply could not be used. Stored, never raised, by the builder."""


class NotOkHeartbeatError(HeartbeatError):
    """The heartbeat reply reported failure."""

    def __init__(self, message: str = "not ok") -> None:
        super().__init__(message)


class MalformedHeartbeatError(HeartbeatError):
    """A heartbeat reply field had an unexpected type."""


class MechanismNotFoundError(MongoCoreError):
    """No SASL client factory registered under the requested name."""


class ConfigError(MongoCoreError):
    """Credential configuration is missing or malformed."""
