"""
ltc Core

Configuration resolution and polling engine for the create/scale workflows.
"""

from .clock import SystemClock
from .environment import build_environment
from .monitor import get_monitor_config
from .poller import Poller
from .ports import get_exposed_ports
from .routes import parse_route_overrides

__all__ = [
    "SystemClock",
    "build_environment",
    "get_monitor_config",
    "Poller",
    "get_exposed_ports",
    "parse_route_overrides",
]
