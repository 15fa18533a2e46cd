"""Server descriptions and cluster role classification."""

from .kinds import ServerKind, TopologyKind, VersionRange
from .heartbeat import Heartbeat
from .server import UNSET_RTT, SelectedServer, ServerDescription, build_server

__all__ = [
    'ServerKind', 'TopologyKind', 'VersionRange',
    'Heartbeat',
    'UNSET_RTT', 'SelectedServer', 'ServerDescription', 'build_server',
]
