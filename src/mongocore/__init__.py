"""mongocore — authentication handshake and server description core of a
MongoDB driver.

Usage::

    from mongocore import (
        Credential, SaslAuthenticator, SelectedServer, TopologyKind,
        build_server,
    )

    desc = build_server("db1.example.com:27017", heartbeat_reply)
    if desc.last_error is None:
        server = SelectedServer(desc, TopologyKind.REPLICA_SET_WITH_PRIMARY)
        SaslAuthenticator.from_credential(cred).authenticate(channel, server)
"""

from .address import canonicalize, DEFAULT_PORT
from .tag import Tag, TagSet
from .description import (
    ServerKind, TopologyKind, VersionRange, Heartbeat,
    UNSET_RTT, SelectedServer, ServerDescription, build_server,
)
from .auth import (
    SaslClient, CommandChannel, AsyncCommandChannel, Credential,
    MechanismRegistry, default_registry, register_mechanism,
    DEFAULT_AUTH_DB, SaslResponse, SaslConversation,
    conduct_sasl_conversation, async_conduct_sasl_conversation,
    SaslAuthenticator,
)
from .config import load_config, credential_from_config
from .exc import (
    MongoCoreError, ConnectionError, HandshakeError, AuthenticationError,
    MechanismError, ProtocolError, HeartbeatError, NotOkHeartbeatError,
    MalformedHeartbeatError, MechanismNotFoundError, ConfigError,
)

__version__ = "0.1.0"

__all__ = [
    # Addresses and tags
    'canonicalize', 'DEFAULT_PORT', 'Tag', 'TagSet',
    # Descriptions
    'ServerKind', 'TopologyKind', 'VersionRange', 'Heartbeat',
    'UNSET_RTT', 'SelectedServer', 'ServerDescription', 'build_server',
    # Authentication
    'SaslClient', 'CommandChannel', 'AsyncCommandChannel', 'Credential',
    'MechanismRegistry', 'default_registry', 'register_mechanism',
    'DEFAULT_AUTH_DB', 'SaslResponse', 'SaslConversation',
    'conduct_sasl_conversation', 'async_conduct_sasl_conversation',
    'SaslAuthenticator',
    # Config
    'load_config', 'credential_from_config',
    # Exceptions
    'MongoCoreError', 'ConnectionError', 'HandshakeError', 'AuthenticationError',
    'MechanismError', 'ProtocolError', 'HeartbeatError', 'NotOkHeartbeatError',
    'MalformedHeartbeatError', 'MechanismNotFoundError', 'ConfigError',
]
