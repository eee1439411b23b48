# oxr/launcher.py
"""Pick a browser and open a URL in it as an app window.

Each tier is tried once, in order:

1. the installed browser that ranks highest in the platform's preference order,
   or the first installed browser when none of them is preferred;
2. the operating system's default URL handler.

Processes are spawned detached: oxr never waits on them or reads their exit code.
"""

import os
import shlex
import subprocess
from dataclasses import dataclass
from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape

from .catalog import BrowserDescriptor, Platform, preferences_for
from .config import Settings, load_settings
from .platforms import PlatformStrategy, UnsupportedPlatformError, current_platform, get_platform_strategy


class SpawnError(Exception):
    """Raised when the OS refuses to start a process."""

    def __init__(self, command: Sequence[str], cause: OSError):
        self.command = list(command)
        super().__init__(f"Could not start {command[0]!r}: {cause}")


@dataclass(frozen=True)
class LaunchResult:
    """What ``launch_app`` ended up doing."""

    platform: Platform
    url: str
    detected: tuple[BrowserDescriptor, ...] = ()
    browser: Optional[BrowserDescriptor] = None
    command: Optional[list[str]] = None
    used_default_handler: bool = False

    @property
    def launched(self) -> bool:
        return self.command is not None


def normalize_url(url: str) -> str:
    """Give a bare host a scheme: ``http://`` for localhost, ``https://`` otherwise.

    Anything already starting with ``http`` is left alone, including
    strings like ``httpfoo.com``.
    """
    if url.startswith("http"):
        return url
    if url.startswith("localhost"):
        return f"http://{url}"
    return f"https://{url}"


def select_browser(
    detected: Sequence[BrowserDescriptor], preferences: Sequence[str]
) -> Optional[BrowserDescriptor]:
    """Pick the detected browser that ranks highest in ``preferences``.

    Falls back to the first detected browser (catalog order) if none of them
    is in ``preferences``, and to None if nothing was detected.
    """
    by_name = {browser.name: browser for browser in reversed(detected)}
    for name in preferences:
        if name in by_name:
            return by_name[name]
    return detected[0] if detected else None


def format_command(command: Sequence[str]) -> str:
    """Render an argv as a shell-quoted string for display."""
    return shlex.join(command)


def spawn_detached(command: Sequence[str]) -> subprocess.Popen:
    """Start ``command`` without waiting for it or capturing its output.

    Raises:
        SpawnError: If the process could not be started.
    """
    kwargs = {"stdin": subprocess.DEVNULL, "stdout": subprocess.DEVNULL, "stderr": subprocess.DEVNULL}
    if os.name == "nt":
        kwargs["creationflags"] = subprocess.DETACHED_PROCESS | subprocess.CREATE_NEW_PROCESS_GROUP
    else:
        kwargs["start_new_session"] = True

    try:
        return subprocess.Popen(list(command), **kwargs)
    except OSError as e:
        raise SpawnError(command, e) from e


def _try_spawn(command: list[str], console: Console, debug: bool) -> bool:
    if debug:
        console.print(f"[dim]Running: {escape(format_command(command))}[/]")
    try:
        spawn_detached(command)
    except SpawnError as e:
        console.print(f"[bold yellow]Warning:[/] {escape(str(e))}")
        return False
    return True


def _open_with_default_handler(
    strategy: Optional[PlatformStrategy], url: str, console: Console, debug: bool
) -> Optional[list[str]]:
    if strategy is None:
        console.print("Unsupported OS for launching app!")
        return None

    command = strategy.build_default_open_command(url)
    if _try_spawn(command, console, debug):
        return command
    return None


def launch_app(
    url: str,
    platform: Optional[Platform] = None,
    console: Optional[Console] = None,
    settings: Optional[Settings] = None,
) -> LaunchResult:
    """
    Open ``url`` in an app-mode browser window, or in the default browser as a fallback.

    Args:
        url: URL or bare host (``example.com``, ``localhost:3000``).
        platform: Host platform. Detected from the running interpreter if omitted.
        console: Console for diagnostics.
        settings: Runtime settings. Read from the environment if omitted.

    Returns:
        A LaunchResult describing the browser chosen and the command spawned.
    """
    console = console or Console()
    settings = settings or load_settings()
    platform = platform or current_platform()

    try:
        strategy: Optional[PlatformStrategy] = get_platform_strategy(platform)
    except UnsupportedPlatformError:
        console.print("Unsupported OS")
        strategy = None

    detected = tuple(strategy.detect_installed()) if strategy else ()

    console.print(f"Detected OS: {platform.value}")
    names = ", ".join(browser.name for browser in detected)
    console.print(f"Detected browsers: {names or 'None'}")

    url = normalize_url(url)

    browser = select_browser(detected, preferences_for(platform, settings.preferred_browser))
    if browser is not None and strategy is not None:
        if settings.debug:
            console.print(f"[dim]Selected {browser.name} ({escape(browser.locator)})[/]")
        command = strategy.build_launch_command(browser, url)
        if _try_spawn(command, console, settings.debug):
            return LaunchResult(platform=platform, url=url, detected=detected, browser=browser, command=command)

    command = _open_with_default_handler(strategy, url, console, settings.debug)
    return LaunchResult(
        platform=platform,
        url=url,
        detected=detected,
        command=command,
        used_default_handler=command is not None,
    )
