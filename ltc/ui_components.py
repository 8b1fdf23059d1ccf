"""
ltc - UI Components
Standardized headers and the terminal notifier used by commands
"""

from typing import Optional

from rich.console import Console
from rich.markup import escape

# Color scheme
BRAND_COLOR = "cyan"
SUCCESS_COLOR = "green"
WARNING_COLOR = "yellow"
ERROR_COLOR = "red"


class TerminalUI:
    """
    Plain-text notifier backed by a rich Console.

    Messages are printed verbatim (no markup parsing) so app names, image
    references and URIs are never mistaken for rich styles.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(highlight=False)

    def say(self, message: str, style: Optional[str] = None) -> None:
        """Print without a trailing newline."""
        self.console.print(message, style=style, end="", markup=False, highlight=False)

    def say_line(self, message: str, style: Optional[str] = None) -> None:
        self.console.print(message, style=style, markup=False, highlight=False)

    def say_new_line(self) -> None:
        self.console.print()

    def say_incorrect_usage(self, message: str) -> None:
        """Report a usage error with a pointer to --help."""
        self.console.print(
            f"Incorrect Usage: {message}", style=ERROR_COLOR, markup=False, highlight=False
        )
        self.console.print("[dim]Run[/dim] [cyan]ltc --help[/cyan] [dim]for usage information[/dim]")


def show_header(
    title: str,
    app: str = None,
    details: dict = None,
    console: Console = None,
):
    """
    Display a standardized ltc command header.

    Args:
        title: Main title (e.g., "Create App", "Scale App")
        app: App name (if applicable)
        details: Additional key-value pairs to display
        console: Rich Console instance (creates new if None)

    Example:
        show_header(
            title="Create App",
            app="lattice-app",
            details={"Image": "cloudfoundry/lattice-app", "Instances": "3"}
        )
    """
    if console is None:
        console = Console()

    console.print(
        f" [bold color(214)]ltc[/bold color(214)] [dim]›[/dim] [bold white]{escape(title)}[/bold white]"
    )

    if app:
        console.print(
            f" [bold color(214)]ltc[/bold color(214)] [dim]›[/dim] App: [{BRAND_COLOR}]{escape(app)}[/{BRAND_COLOR}]"
        )

    if details:
        for key, value in details.items():
            console.print(
                f" [bold color(214)]ltc[/bold color(214)] [dim]›[/dim] {key}: [{BRAND_COLOR}]{escape(str(value))}[/{BRAND_COLOR}]"
            )

    console.print()
