"""
ltc Domain Models

Clean dataclass-based models for type-safe data handling.
"""

from .app import (
    MonitorMethod,
    MonitorConfig,
    RouteOverride,
    ImageMetadata,
    CreateAppParams,
)
from .results import (
    PollingAction,
    PollOutcome,
    PollResult,
)

__all__ = [
    # App
    "MonitorMethod",
    "MonitorConfig",
    "RouteOverride",
    "ImageMetadata",
    "CreateAppParams",
    # Results
    "PollingAction",
    "PollOutcome",
    "PollResult",
]
