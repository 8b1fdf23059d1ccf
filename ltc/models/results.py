"""
Result Models

Dataclass models for polling results.
"""

from dataclasses import dataclass
from enum import Enum


class PollingAction(Enum):
    """Why the cluster is being polled."""

    START = "start"
    SCALE = "scale"


class PollOutcome(Enum):
    """Final state of a poll."""

    RUNNING = "running"
    TIMED_OUT = "timed_out"
    PLACEMENT_FAILED = "placement_failed"


@dataclass
class PollResult:
    """Result of polling the cluster for running instances."""

    outcome: PollOutcome
    running_instances: int = 0

    @property
    def is_success(self) -> bool:
        """Check if all requested instances came up."""
        return self.outcome == PollOutcome.RUNNING

    @property
    def is_placement_failure(self) -> bool:
        return self.outcome == PollOutcome.PLACEMENT_FAILED

    def __repr__(self) -> str:
        return f"PollResult(outcome={self.outcome.value}, running={self.running_instances})"
