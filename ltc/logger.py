"""
Logging system for ltc
Provides real-time logging to files with clean console output
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, TextIO

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from ltc.constants import LOG_DATE_FORMAT, LOG_TIME_FORMAT

console = Console()


def configure_logging(verbose: bool = False) -> None:
    """
    Route library logging (services, poller) through rich.

    Args:
        verbose: Show DEBUG records, otherwise only warnings
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, markup=False)],
        force=True,
    )


class CommandLogger:
    """
    Manages logging for app operations
    - Writes all output to log files in real-time
    - Mirrors log lines to the console in verbose mode
    - Captures errors with context
    """

    def __init__(
        self,
        app_name: str,
        operation: str,
        logs_dir: Path,
        verbose: bool = False,
        console: Optional[Console] = None,
    ):
        """
        Initialize logger

        Args:
            app_name: Name of the app the operation acts on
            operation: Operation name (e.g., 'create', 'scale')
            logs_dir: Root directory for log files
            verbose: If True, show all log lines in console
            console: Rich console (creates new if None)
        """
        self.app_name = app_name
        self.operation = operation
        self.verbose = verbose
        self.console = console or Console()
        self.log_file: Optional[TextIO] = None
        self.log_path: Optional[Path] = None
        self.current_step = ""
        self.has_errors = False

        # Structure: logs/{app}/{date}/{time}_{operation}.log
        now = datetime.now()
        app_logs_dir = Path(logs_dir) / app_name / now.strftime(LOG_DATE_FORMAT)
        app_logs_dir.mkdir(parents=True, exist_ok=True)

        self.log_path = app_logs_dir / f"{now.strftime(LOG_TIME_FORMAT)}_{operation}.log"

        # Line buffered for real-time tailing
        self.log_file = open(self.log_path, "w", buffering=1)

        self._write_log_header()

    def _write_log_header(self):
        """Write log file header"""
        header = f"""
{"=" * 80}
ltc Operation Log
{"=" * 80}
App: {self.app_name}
Operation: {self.operation}
Started: {datetime.now().isoformat()}
{"=" * 80}

"""
        self.log_file.write(header)
        self.log_file.flush()

    def log(self, message: str, level: str = "INFO"):
        """
        Log a message to file and optionally console

        Args:
            message: Message to log
            level: Log level (INFO, WARNING, ERROR, DEBUG)
        """
        timestamp = datetime.now().strftime("%H:%M:%S")
        log_line = f"[{timestamp}] [{level}] {message}\n"

        if self.log_file:
            self.log_file.write(log_line)
            self.log_file.flush()

        if self.verbose:
            text = escape(message)
            if level == "ERROR":
                self.console.print(f"[red]{text}[/red]")
            elif level == "WARNING":
                self.console.print(f"[yellow]{text}[/yellow]")
            elif level == "DEBUG":
                self.console.print(f"[dim]{text}[/dim]")
            else:
                self.console.print(text)

    def log_error(self, error: str, context: Optional[str] = None):
        """
        Log an error with context

        Args:
            error: Error message
            context: Additional context (e.g., the request that failed)
        """
        self.has_errors = True

        error_block = f"""
{"!" * 80}
ERROR OCCURRED
{"!" * 80}
{error}
"""
        if self.current_step:
            error_block += f"\nStep: {self.current_step}\n"
        if context:
            error_block += f"\nContext: {context}\n"

        error_block += f"{'!' * 80}\n\n"

        if self.log_file:
            self.log_file.write(error_block)
            self.log_file.flush()

    def step(self, step_name: str):
        """
        Start a new step

        Args:
            step_name: Name of the step
        """
        self.current_step = step_name
        self.log(f"Step: {step_name}", "INFO")

    def success(self, message: str):
        """Log a success message"""
        self.log(message, "INFO")

    def warning(self, message: str):
        """Log a warning message"""
        self.log(message, "WARNING")

    def close(self):
        """Close log file"""
        if self.log_file:
            footer = f"""
{"=" * 80}
Completed: {datetime.now().isoformat()}
Status: {"FAILED" if self.has_errors else "SUCCESS"}
{"=" * 80}
"""
            self.log_file.write(footer)
            self.log_file.close()
            self.log_file = None
