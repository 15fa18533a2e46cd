"""Load credential configuration from YAML, TOML, or JSON files."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .auth.cred import Credential
from .exc import ConfigError


log = logging.getLogger("mongocore.config")

_CREDENTIAL_KEYS = {'username', 'password', 'source', 'mechanism', 'mechanism_properties'}


def load_config(path: str | Path) -> dict[str, Any]:
    """Load a configuration dict from a file, dispatched by extension.

    Supported extensions: ``.json``, ``.toml``, ``.yaml`` / ``.yml``.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    suffix = path.suffix.lower()

    if suffix == '.json':
        with open(path) as f:
            return json.load(f)

    if suffix == '.toml':
        return _load_toml(path)

    if suffix in ('.yaml', '.yml'):
        return _load_yaml(path)

    raise ConfigError(
        f"Unsupported config file extension {suffix!r}. "
        "Use .json, .toml, .yaml, or .yml."
    )


def credential_from_config(source: str | Path | Mapping[str, Any]) -> Credential:
    """Build a :class:`Credential` from a config file or an already loaded dict.

    Recognised keys: ``username``, ``password``, ``source``, ``mechanism``
    and ``mechanism_properties``. A ``credential`` table, if present, is
    used instead of the top level.
    """
    data = source if isinstance(source, Mapping) else load_config(source)
    if not isinstance(data, Mapping):
        raise ConfigError(f"Credential config must be a mapping, got {type(data).__name__}")
    if 'credential' in data:
        data = data['credential']
        if not isinstance(data, Mapping):
            raise ConfigError("'credential' must be a table")

    unknown = set(data) - _CREDENTIAL_KEYS
    if unknown:
        raise ConfigError(f"Unknown credential keys: {', '.join(sorted(unknown))}")

    for key in ('username', 'password', 'source', 'mechanism'):
        if key in data and not isinstance(data[key], str):
            raise ConfigError(f"Credential key {key!r} must be a string")
    props = data.get('mechanism_properties', {})
    if not isinstance(props, Mapping):
        raise ConfigError("'mechanism_properties' must be a table")

    cred = Credential(
        username=data.get('username', ''),
        password=data.get('password', ''),
        password_set='password' in data,
        source=data.get('source', ''),
        mechanism=data.get('mechanism', ''),
        mechanism_properties=dict(props),
    )
    log.debug("Loaded %r", cred)
    return cred


# ── Internal loaders ─────────────────────────────────────────────

def _load_toml(path: Path) -> dict[str, Any]:
    """Load TOML using ``tomllib`` (3.11+) or ``tomli``."""
    try:
        import tomllib  # type: ignore[import-not-found]
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore[no-redef]
        except ModuleNotFoundError:
            raise ImportError(
                "TOML support requires Python 3.11+ (built-in tomllib) "
                "or the 'tomli' package. Install with: pip install mongocore[toml]"
            )
    with open(path, 'rb') as f:
        return tomllib.load(f)


def _load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML using ``pyyaml``."""
    try:
        import yaml
    except ModuleNotFoundError:
        raise ImportError(
            "YAML support requires the 'pyyaml' package. "
            "Install with: pip install mongocore[yaml]"
        )
    with open(path) as f:
        return yaml.safe_load(f)
