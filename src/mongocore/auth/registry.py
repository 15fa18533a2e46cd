"""Registry of SASL mechanism implementations."""

from __future__ import annotations

from typing import Callable

from ..exc import MechanismNotFoundError
from .base import SaslClient
from .cred import Credential

SaslClientFactory = Callable[[Credential], SaslClient]


class MechanismRegistry:
    """Named collection of SASL client factories.

    Names are matched case-insensitively.

    Usage::

        registry = MechanismRegistry()
        registry.register("PLAIN", PlainClient)
        client = registry.create(Credential(username="u", password="p",
                                            mechanism="PLAIN"))
    """

    def __init__(self) -> None:
        self._factories: dict[str, SaslClientFactory] = {}

    def register(self, name: str, factory: SaslClientFactory) -> None:
        """Register *factory* under *name*, replacing any previous one."""
        self._factories[name.upper()] = factory

    def unregister(self, name: str) -> None:
        self._factories.pop(name.upper(), None)

    def get(self, name: str) -> SaslClientFactory:
        """Get the factory registered under *name*."""
        try:
            return self._factories[name.upper()]
        except KeyError:
            available = ", ".join(sorted(self._factories)) or "(none)"
            raise MechanismNotFoundError(
                f"Mechanism {name!r} not registered. Available: {available}"
            ) from None

    def create(self, credential: Credential) -> SaslClient:
        """Create a SASL client for ``credential.mechanism``."""
        return self.get(credential.mechanism)(credential)

    @property
    def names(self) -> list[str]:
        return list(self._factories)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.upper() in self._factories


default_registry = MechanismRegistry()


def register_mechanism(name: str, factory: SaslClientFactory) -> None:
    """Register *factory* in the default registry."""
    default_registry.register(name, factory)
