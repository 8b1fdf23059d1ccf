"""Contracts for the collaborators the create/scale workflows depend on.

Commands receive these by injection so tests can swap in fakes, most
importantly a clock that advances virtually instead of sleeping.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Protocol, runtime_checkable

from ltc.models import CreateAppParams, ImageMetadata


@runtime_checkable
class UI(Protocol):
    """User-facing message sink."""

    def say(self, message: str, style: str | None = None) -> None: ...

    def say_line(self, message: str, style: str | None = None) -> None: ...

    def say_new_line(self) -> None: ...

    def say_incorrect_usage(self, message: str) -> None: ...


@runtime_checkable
class Clock(Protocol):
    """Time source for polling loops."""

    def now(self) -> datetime: ...

    def sleep(self, duration: timedelta) -> None: ...


@runtime_checkable
class ImageMetadataFetcher(Protocol):
    def fetch_metadata(self, image: str) -> ImageMetadata: ...


@runtime_checkable
class AppRunner(Protocol):
    """Submits desired state to the cluster."""

    def create_docker_app(self, params: CreateAppParams) -> None: ...

    def scale_app(self, name: str, instances: int) -> None: ...


@runtime_checkable
class AppExaminer(Protocol):
    def running_app_instances_info(self, name: str) -> tuple[int, bool]:
        """Return (running instance count, placement error occurred)."""
        ...


@runtime_checkable
class TailedLogsOutputter(Protocol):
    """Streams app logs in the background while a command waits."""

    def output_tailed_logs(self, name: str) -> None: ...

    def stop_outputting(self) -> None: ...
