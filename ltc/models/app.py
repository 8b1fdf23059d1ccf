"""
Application Models

Dataclass models describing an app creation request and its parts.
"""

from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Any, Dict

from ltc.constants import (
    DEFAULT_CPU_WEIGHT,
    DEFAULT_DISK_MB,
    DEFAULT_INSTANCES,
    DEFAULT_MEMORY_MB,
    DEFAULT_MONITOR_TIMEOUT,
    DEFAULT_POLLING_TIMEOUT,
    DEFAULT_WORKING_DIR,
)


class MonitorMethod(Enum):
    """Health-check strategy for app instances."""

    NONE = "none"
    PORT = "port"
    URL = "url"


@dataclass(frozen=True)
class MonitorConfig:
    """How the cluster decides an instance is healthy."""

    method: MonitorMethod
    port: int = 0
    uri: str = ""
    timeout: timedelta = DEFAULT_MONITOR_TIMEOUT

    @classmethod
    def none(cls) -> "MonitorConfig":
        return cls(method=MonitorMethod.NONE)

    @property
    def is_enabled(self) -> bool:
        """Check if any health-check is performed."""
        return self.method != MonitorMethod.NONE

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        if not self.is_enabled:
            return {"method": self.method.value}
        data: Dict[str, Any] = {
            "method": self.method.value,
            "port": self.port,
            "timeout_seconds": self.timeout.total_seconds(),
        }
        if self.method == MonitorMethod.URL:
            data["uri"] = self.uri
        return data


@dataclass(frozen=True)
class RouteOverride:
    """Routes HOSTNAME_PREFIX.<domain> to a container port."""

    hostname_prefix: str
    port: int

    def to_dict(self) -> Dict[str, Any]:
        return {"hostname_prefix": self.hostname_prefix, "port": self.port}


@dataclass
class ImageMetadata:
    """Metadata read from a docker image config."""

    working_dir: str = ""
    start_command: list[str] = field(default_factory=list)
    exposed_ports: list[int] = field(default_factory=list)

    @property
    def has_start_command(self) -> bool:
        return len(self.start_command) > 0


@dataclass(frozen=True)
class CreateAppParams:
    """Everything the scheduler needs to create a docker app."""

    name: str
    root_fs: str
    start_command: str
    app_args: tuple[str, ...] = ()
    environment_variables: Dict[str, str] = field(default_factory=dict)
    privileged: bool = False
    monitor: MonitorConfig = field(default_factory=MonitorConfig.none)
    instances: int = DEFAULT_INSTANCES
    cpu_weight: int = DEFAULT_CPU_WEIGHT
    memory_mb: int = DEFAULT_MEMORY_MB
    disk_mb: int = DEFAULT_DISK_MB
    exposed_ports: tuple[int, ...] = ()
    working_dir: str = DEFAULT_WORKING_DIR
    route_overrides: tuple[RouteOverride, ...] = ()
    no_routes: bool = False
    timeout: timedelta = DEFAULT_POLLING_TIMEOUT

    @property
    def process_guid(self) -> str:
        return self.name

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for the scheduler API."""
        return {
            "process_guid": self.process_guid,
            "root_fs": self.root_fs,
            "start_command": self.start_command,
            "app_args": list(self.app_args),
            "env": dict(self.environment_variables),
            "privileged": self.privileged,
            "monitor": self.monitor.to_dict(),
            "instances": self.instances,
            "cpu_weight": self.cpu_weight,
            "memory_mb": self.memory_mb,
            "disk_mb": self.disk_mb,
            "ports": list(self.exposed_ports),
            "working_dir": self.working_dir,
            "routes": [route.to_dict() for route in self.route_overrides],
            "no_routes": self.no_routes,
        }

    def __repr__(self) -> str:
        return f"CreateAppParams(name={self.name}, root_fs={self.root_fs}, instances={self.instances})"
