"""
Target Command - Point ltc at a lattice cluster
"""

import click
from rich.console import Console
from rich.markup import escape

from ltc.core.config_loader import (
    get_config_dir,
    load_target_config,
    save_target_config,
)

console = Console()


@click.command("target")
@click.argument("domain", required=False)
@click.option("--username", "-u", default=None, help="Receptor API username")
@click.option("--password", "-P", default=None, help="Receptor API password")
@click.option("--logs-dir", default=None, help="Directory for command log files")
def target(domain, username, password, logs_dir):
    """
    Targets a lattice cluster

    \b
    Examples:
        # Show the current target
        ltc target

        # Target a cluster
        ltc target 192.168.11.11.xip.io

        # Target a cluster with receptor credentials
        ltc target lattice.example.com -u admin -P secret
    """
    config_dir = get_config_dir()
    config = load_target_config(config_dir)

    if not domain:
        if not config.is_targeted:
            console.print("[yellow]⚠ Target not set.[/yellow]")
            console.print("[dim]Run:[/dim] [cyan]ltc target DOMAIN[/cyan]")
            return
        console.print(f"Target:\t\t[cyan]{escape(config.target)}[/cyan]")
        if config.username:
            console.print(f"Username:\t[cyan]{escape(config.username)}[/cyan]")
        return

    config.target = domain
    if username is not None:
        config.username = username
    if password is not None:
        config.password = password
    if logs_dir is not None:
        config.logs_dir = logs_dir

    config_path = save_target_config(config, config_dir)
    console.print(f"[green]✓ Api Location Set[/green] [dim]({escape(str(config_path))})[/dim]")
