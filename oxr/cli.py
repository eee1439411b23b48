import argparse
import sys

from rich.console import Console
from rich.traceback import install

from .config import load_settings
from .constants import USAGE
from .launcher import launch_app
from .utils import check_for_cli_updates


install(show_locals=True)
console = Console()
err_console = Console(stderr=True)


class UsageError(Exception):
    """Raised when the command line is missing required input."""

    pass


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="oxr",
        usage=USAGE,
        description="Open a URL as an app window in the best browser installed on this machine.",
    )
    # Optional here so a missing URL gets our own message and exit code
    parser.add_argument(
        "url", nargs="?", default=None, help="URL or host to open (e.g. 'example.com', 'localhost:3000')"
    )
    return parser


def require_url(url: str | None) -> str:
    """
    Return the URL argument.

    Raises:
        UsageError: If no URL was given.
    """
    if not url:
        raise UsageError(f"No URL provided! Usage: {USAGE}")
    return url


def main(argv: list[str] | None = None) -> None:
    """Main function for the oxr CLI."""
    try:
        _main(argv)
    except KeyboardInterrupt:
        # Clean exit on Ctrl+C without traceback
        console.print("\n[yellow]Interrupted.[/]")
        sys.exit(130)  # Standard exit code for SIGINT


def _main(argv: list[str] | None) -> None:
    """Internal main function containing the CLI logic."""
    args = build_parser().parse_args(argv)

    try:
        url = require_url(args.url)
    except UsageError as e:
        err_console.print(f"[bold red]Error:[/] {e}")
        sys.exit(1)

    settings = load_settings()
    launch_app(url, console=console, settings=settings)

    # Must follow launch_app: the browser never waits on PyPI
    if settings.check_updates:
        check_for_cli_updates(err_console)
