# oxr/platforms.py
"""
Per-platform browser detection and command construction.

The platform is resolved once per run and every OS-specific decision goes
through the matching ``PlatformStrategy``.
"""

import os
import re
import shutil
import sys
from abc import ABC, abstractmethod

from .catalog import BrowserDescriptor, Platform, catalog_for
from .constants import TEMP_PROFILE_DIR, WINDOW_HEIGHT, WINDOW_WIDTH


class UnsupportedPlatformError(Exception):
    """Raised when the host OS has no browser catalog."""

    def __init__(self, platform_tag: str):
        self.platform_tag = platform_tag
        super().__init__(f"Unsupported OS: {platform_tag}")


def current_platform(platform_tag: str | None = None) -> Platform:
    """Map a ``sys.platform`` style tag (defaults to the host's) to a Platform."""
    tag = sys.platform if platform_tag is None else platform_tag
    if tag == "win32":
        return Platform.WINDOWS
    if tag == "darwin":
        return Platform.MACOS
    if tag.startswith("linux"):
        return Platform.LINUX
    return Platform.OTHER


_CMD_METACHARACTERS = re.compile(r"([\^&|<>%])")


def _escape_for_cmd(url: str) -> str:
    """Caret-escape a URL so ``cmd /c`` passes it through as one literal argument.

    Spaces and double quotes are percent-encoded first: a quoted argument would turn the carets
    back into literal text.
    """
    return _CMD_METACHARACTERS.sub(r"^\1", url.replace(" ", "%20").replace('"', "%22"))


def _size_flags() -> list[str]:
    return [f"--width={WINDOW_WIDTH}", f"--height={WINDOW_HEIGHT}"]


def _direct_launch_command(browser: BrowserDescriptor, url: str) -> list[str]:
    """Command for platforms that execute the browser binary directly."""
    if browser.uses_width_height_flags:
        return [browser.locator, url, *_size_flags()]
    return [
        browser.locator,
        f"--app={url}",
        f"--window-size={WINDOW_WIDTH},{WINDOW_HEIGHT}",
        "--new-window",
        f"--user-data-dir={TEMP_PROFILE_DIR}",
    ]


class PlatformStrategy(ABC):
    """Detection and launch rules for one operating system family."""

    platform: Platform

    def catalog(self) -> tuple[BrowserDescriptor, ...]:
        return catalog_for(self.platform)

    @abstractmethod
    def is_installed(self, browser: BrowserDescriptor) -> bool:
        """Probe the host for a browser. Must never raise."""
        pass

    def detect_installed(self) -> list[BrowserDescriptor]:
        """Return the installed browsers in catalog order."""
        return [browser for browser in self.catalog() if self.is_installed(browser)]

    @abstractmethod
    def build_launch_command(self, browser: BrowserDescriptor, url: str) -> list[str]:
        """Build the argv that opens ``url`` in app mode with ``browser``."""
        pass

    @abstractmethod
    def build_default_open_command(self, url: str) -> list[str]:
        """Build the argv that hands ``url`` to the OS default handler."""
        pass


class _PathExistsMixin:
    def is_installed(self, browser: BrowserDescriptor) -> bool:
        # Bundles on macOS are directories, so any existing path counts
        return os.path.exists(browser.locator)


class WindowsPlatform(_PathExistsMixin, PlatformStrategy):
    platform = Platform.WINDOWS

    def build_launch_command(self, browser: BrowserDescriptor, url: str) -> list[str]:
        return _direct_launch_command(browser, url)

    def build_default_open_command(self, url: str) -> list[str]:
        # start is a cmd builtin; the empty string is the window title
        return ["cmd", "/c", "start", "", _escape_for_cmd(url)]


class MacOSPlatform(_PathExistsMixin, PlatformStrategy):
    platform = Platform.MACOS

    def build_launch_command(self, browser: BrowserDescriptor, url: str) -> list[str]:
        if browser.uses_width_height_flags:
            return ["open", "-na", browser.locator, url, *_size_flags()]
        return [
            "open",
            "-na",
            browser.locator,
            "--args",
            f"--app={url}",
            "--new-window",
            f"--user-data-dir={TEMP_PROFILE_DIR}",
        ]

    def build_default_open_command(self, url: str) -> list[str]:
        return ["open", url]


class LinuxPlatform(PlatformStrategy):
    platform = Platform.LINUX

    def is_installed(self, browser: BrowserDescriptor) -> bool:
        try:
            return shutil.which(browser.locator) is not None
        except OSError:
            return False

    def build_launch_command(self, browser: BrowserDescriptor, url: str) -> list[str]:
        return _direct_launch_command(browser, url)

    def build_default_open_command(self, url: str) -> list[str]:
        return ["xdg-open", url]


_STRATEGIES: dict[Platform, type[PlatformStrategy]] = {
    Platform.WINDOWS: WindowsPlatform,
    Platform.MACOS: MacOSPlatform,
    Platform.LINUX: LinuxPlatform,
}


def get_platform_strategy(platform: Platform) -> PlatformStrategy:
    """
    Return the strategy for a platform.

    Raises:
        UnsupportedPlatformError: If the platform has no strategy.
    """
    try:
        return _STRATEGIES[platform]()
    except KeyError:
        raise UnsupportedPlatformError(platform.value) from None


def detect_browsers(platform: Platform) -> list[BrowserDescriptor]:
    """
    Return the browsers from ``platform``'s catalog that are installed on this host.

    Raises:
        UnsupportedPlatformError: If the platform has no catalog.
    """
    return get_platform_strategy(platform).detect_installed()
