"""Main CLI entry point for auto-merge-bot."""

import os

import click
from rich.console import Console
from rich.text import Text

from ..utils.logging import get_console, set_verbose
from .commands.open_prs import open_prs
from .commands.sync import sync
from .commands.update import update
from .commands.watch import watch
from .utils import get_version


def print_banner(console: Console) -> None:
    """Print ASCII art banner using Rich.

    Args:
        console: Rich console instance for output

    """
    if os.environ.get("AUTO_MERGE_BOT_NO_BANNER"):
        return

    banner = Text()
    banner.append("  ╔══════════════════════════════════════════╗\n", style="bold cyan")
    banner.append("  ║                                          ║\n", style="bold cyan")
    banner.append("  ║   ", style="bold cyan")
    banner.append("🤖 Auto Merge Bot", style="bold white")
    banner.append("                      ║\n", style="bold cyan")
    banner.append("  ║   ", style="bold cyan")
    banner.append("Approved, green and idle PRs merged", style="cyan")
    banner.append("    ║\n", style="bold cyan")
    banner.append("  ║                                          ║\n", style="bold cyan")
    banner.append("  ╚══════════════════════════════════════════╝", style="bold cyan")

    console.print(banner)


def version_callback(ctx: click.Context, param: click.Parameter, value: bool) -> None:
    """Show version and exit.

    Args:
        ctx: Click context
        param: Click parameter (unused)
        value: Whether --version flag was provided

    """
    if not value or ctx.resilient_parsing:
        return
    click.echo(f"auto-merge-bot {get_version()}")
    ctx.exit()


@click.group(
    invoke_without_command=True,
    help="Merge pull requests once they are approved, pass CI and have been idle long enough",
)
@click.option(
    "--version",
    is_flag=True,
    callback=version_callback,
    expose_value=False,
    is_eager=True,
    help="Show version and exit",
)
@click.option(
    "--no-banner",
    is_flag=True,
    help="Disable ASCII art banner",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Print debug output",
)
@click.pass_context
def cli(ctx: click.Context, no_banner: bool, verbose: bool) -> None:
    """Auto Merge Bot - scheduled merging of tracked pull requests.

    Use 'auto-merge-bot COMMAND --help' for command-specific help.
    """
    ctx.ensure_object(dict)
    ctx.obj["no_banner"] = no_banner
    if verbose:
        set_verbose(True)

    # Show banner only if no subcommand and not disabled
    if ctx.invoked_subcommand is None:
        if not no_banner:
            print_banner(get_console())
        click.echo(ctx.get_help())


# Register subcommands
cli.add_command(update)
cli.add_command(sync)
cli.add_command(open_prs)
cli.add_command(watch)


if __name__ == "__main__":
    cli()
