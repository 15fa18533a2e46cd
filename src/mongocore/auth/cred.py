"""Authentication credentials."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Credential:
    """User credentials and the mechanism to authenticate them with.

    ``password_set`` distinguishes an explicitly empty password from no
    password at all.
    """

    username: str = ""
    password: str = ""
    password_set: bool = False
    source: str = ""
    mechanism: str = ""
    mechanism_properties: dict[str, Any] = field(default_factory=dict)

    def __repr__(self) -> str:
        return (
            f"Credential(username={self.username!r}, source={self.source!r}, "
            f"mechanism={self.mechanism!r})"
        )
