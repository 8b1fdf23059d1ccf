"""
ltc Services Layer

Clients for the registry and the cluster, built from the target config.
"""

from dataclasses import dataclass

from ltc.core.config_loader import TargetConfig
from ltc.core.interfaces import UI

from .log_tailer import LogTailer
from .receptor_service import ReceptorService
from .registry_service import ImageReference, RegistryService


@dataclass
class ClusterServices:
    """Collaborators for commands that talk to a targeted cluster."""

    receptor: ReceptorService
    registry: RegistryService
    log_tailer: LogTailer


def connect(config: TargetConfig, ui: UI) -> ClusterServices:
    """
    Build service clients for the configured target.

    No request is made here; commands check the target with
    TargetConfig.require_target once their arguments are valid.
    """
    receptor = ReceptorService(config.api_url, auth=config.auth)
    return ClusterServices(
        receptor=receptor,
        registry=RegistryService(),
        log_tailer=LogTailer(receptor, ui),
    )


__all__ = [
    "ClusterServices",
    "connect",
    "ImageReference",
    "LogTailer",
    "ReceptorService",
    "RegistryService",
]
