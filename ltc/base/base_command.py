"""
Base Command Class

Abstract base for all ltc commands.
Provides common functionality and structure.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Optional

from ltc.constants import ExitCode
from ltc.core.interfaces import UI
from ltc.exceptions import IncorrectUsageError, LatticeError
from ltc.logger import CommandLogger
from ltc.ui_components import show_header


class BaseCommand(ABC):
    """
    Abstract base command class.

    Provides:
    - Logger initialization
    - Header display
    - Error handling (LatticeError -> exit category)
    - Consistent structure
    """

    def __init__(
        self,
        ui: UI,
        verbose: bool = False,
        logs_dir: Optional[Path] = None,
        require_target: Optional[Callable[[], None]] = None,
    ):
        self.ui = ui
        self.verbose = verbose
        self.logs_dir = logs_dir
        self.require_target = require_target
        self.logger: Optional[CommandLogger] = None

    def init_logger(self, app_name: str, operation: str) -> Optional[CommandLogger]:
        """
        Initialize command logger (skipped when no logs directory is set).

        Args:
            app_name: App the command acts on
            operation: Operation name

        Returns:
            CommandLogger instance or None
        """
        if self.logs_dir is None:
            return None
        self.logger = CommandLogger(
            app_name, operation, self.logs_dir, verbose=self.verbose
        )
        return self.logger

    def check_target(self) -> None:
        """
        Fail unless a cluster is targeted.

        Called by commands after argument validation, so usage errors are
        reported even on an untargeted machine.

        Raises:
            ConfigurationError: If no target is set
        """
        if self.require_target is not None:
            self.require_target()

    def log(self, message: str, level: str = "INFO") -> None:
        """Write to the command log if one is open."""
        if self.logger:
            self.logger.log(message, level)

    def show_header(
        self,
        title: str,
        app: Optional[str] = None,
        details: Optional[dict] = None,
    ) -> None:
        """Show command header (skip in verbose mode)."""
        console = getattr(self.ui, "console", None)
        if not self.verbose and console is not None:
            show_header(title=title, app=app, details=details, console=console)

    def handle_error(self, error: LatticeError) -> None:
        """
        Report an error with consistent formatting.

        Args:
            error: Error raised by the command
        """
        if self.logger:
            self.logger.log_error(error.message, context=error.context)

        if error.announced:
            return

        if isinstance(error, IncorrectUsageError):
            self.ui.say_incorrect_usage(error.message)
        else:
            self.ui.say_line(error.message, style="red")
            if error.context:
                self.ui.say_line(error.context, style="dim")

    @abstractmethod
    def execute(self) -> None:
        """
        Execute command logic.

        Must be implemented by subclasses.
        """
        pass

    def run(self) -> None:
        """
        Run command with error handling.

        Raises:
            SystemExit: With the exit category of any failure
        """
        try:
            self.execute()
        except KeyboardInterrupt:
            self.ui.say_new_line()
            self.ui.say_line("Operation cancelled by user", style="yellow")
            if self.logger:
                self.logger.log_error("Operation cancelled by user")
            raise SystemExit(ExitCode.SIGNAL)
        except SystemExit:
            raise
        except LatticeError as e:
            self.handle_error(e)
            raise SystemExit(e.exit_code)
        except Exception as e:
            error_type = type(e).__name__
            self.ui.say_line(f"{error_type}: {e}", style="bold red")
            if self.logger:
                self.logger.log_error(f"{error_type}: {e}")
            raise SystemExit(ExitCode.UNEXPECTED)
        finally:
            if self.logger:
                if not self.verbose:
                    self.ui.say_line(f"Logs saved to: {self.logger.log_path}", style="dim")
                self.logger.close()
