"""SASL authentication handshake."""

from .base import SaslClient, CommandChannel, AsyncCommandChannel
from .cred import Credential
from .registry import MechanismRegistry, default_registry, register_mechanism
from .sasl import (
    DEFAULT_AUTH_DB, SaslResponse, SaslConversation,
    conduct_sasl_conversation, async_conduct_sasl_conversation,
)
from .authenticator import SaslAuthenticator

__all__ = [
    'SaslClient', 'CommandChannel', 'AsyncCommandChannel',
    'Credential',
    'MechanismRegistry', 'default_registry', 'register_mechanism',
    'DEFAULT_AUTH_DB', 'SaslResponse', 'SaslConversation',
    'conduct_sasl_conversation', 'async_conduct_sasl_conversation',
    'SaslAuthenticator',
]
