#!/usr/bin/env python3
"""ltc - Lattice CLI main entry point"""

import functools
import os
import sys

from rich.console import Console
from rich.markup import escape

# Rich-Click: CLI help with colors
import rich_click as click

from ltc.commands.create import create
from ltc.commands.scale import scale
from ltc.commands.target import target
from ltc.constants import ExitCode
from ltc.exceptions import LatticeError
from ltc.logger import configure_logging

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.MAX_WIDTH = 100

click.rich_click.STYLE_COMMAND = "bold cyan"
click.rich_click.STYLE_OPTION = "bold magenta"
click.rich_click.STYLE_SWITCH = "bold green"
click.rich_click.STYLE_ARGUMENT = "bold yellow"
click.rich_click.STYLE_USAGE = "bold yellow"
click.rich_click.STYLE_OPTION_DEFAULT = "dim cyan"
click.rich_click.STYLE_OPTIONS_PANEL_BORDER = "cyan"
click.rich_click.STYLE_COMMANDS_PANEL_BORDER = "cyan"
click.rich_click.ERRORS_EPILOGUE = ""

console = Console()

BANNER = """
[bold cyan]╔═══════════════════════════════════════════════════════════╗[/bold cyan]
[bold cyan]║[/bold cyan]  [bold white]ltc[/bold white] - Lattice CLI                                      [bold cyan]║[/bold cyan]
[bold cyan]╚═══════════════════════════════════════════════════════════╝[/bold cyan]
"""


def handle_cli_errors(func):
    """Decorator to handle CLI errors gracefully."""
    from click.exceptions import ClickException

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except LatticeError as e:
            # Raised before a command took over error handling (e.g. no target)
            console.print(f"\n[bold red]✗ Error:[/bold red] {escape(e.message)}")
            if e.context:
                console.print(f"  [dim]{escape(e.context)}[/dim]")
            console.print()
            sys.exit(e.exit_code)
        except ClickException as e:
            e.show()
            sys.exit(e.exit_code)
        except KeyboardInterrupt:
            console.print("\n\n[yellow]⚠️  Operation cancelled by user[/yellow]")
            sys.exit(ExitCode.SIGNAL)
        except Exception as e:
            console.print(f"\n[bold red]✗ Unexpected error:[/bold red] {escape(str(e))}\n")
            console.print("[dim]If this persists, please report this issue.[/dim]\n")

            # Show traceback when DEBUG is set
            if os.environ.get("DEBUG"):
                import traceback

                console.print("[dim]Traceback:[/dim]")
                traceback.print_exc()
            sys.exit(ExitCode.UNEXPECTED)

    return wrapper


@click.group(invoke_without_command=True)
@click.version_option(version="1.0.0")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging and full command logs")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """
    ltc - Create and scale docker apps on a Lattice cluster.

    \b
    Quick Start:
      ltc target 192.168.11.11.xip.io         # Point at a cluster
      ltc create lattice-app cloudfoundry/lattice-app
      ltc scale lattice-app 3
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(verbose)

    if ctx.invoked_subcommand is None:
        console.print(BANNER)
        console.print("[yellow]Run 'ltc --help' for usage[/yellow]\n")


# Register commands
cli.add_command(target)
cli.add_command(create)
cli.add_command(create, "cr")
cli.add_command(scale)


@handle_cli_errors
def main():
    """Main entry point with error handling."""
    cli()


if __name__ == "__main__":
    main()
