# oxr/catalog.py
"""Static per-platform tables of known browsers and their selection priority."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class Platform(str, Enum):
    """Host operating system families oxr knows how to drive."""

    WINDOWS = "windows"
    MACOS = "macos"
    LINUX = "linux"
    OTHER = "other"


class BrowserDescriptor(BaseModel):
    """A known browser and how to find it on the host.

    ``locator`` is an absolute path on Windows and macOS (an ``.exe`` or an
    ``.app`` bundle) and a bare executable name resolved through ``PATH`` on Linux.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    locator: str
    # Firefox sizes its window with --width/--height and has no --app mode
    uses_width_height_flags: bool = False


def _firefox(locator: str) -> BrowserDescriptor:
    return BrowserDescriptor(name="Firefox", locator=locator, uses_width_height_flags=True)


CATALOG: dict[Platform, tuple[BrowserDescriptor, ...]] = {
    Platform.WINDOWS: (
        BrowserDescriptor(name="Chrome", locator="C:\\Program Files\\Google\\Chrome\\Application\\chrome.exe"),
        _firefox("C:\\Program Files\\Mozilla Firefox\\firefox.exe"),
        BrowserDescriptor(name="Edge", locator="C:\\Program Files (x86)\\Microsoft\\Edge\\Application\\msedge.exe"),
        BrowserDescriptor(
            name="Brave", locator="C:\\Program Files\\BraveSoftware\\Brave-Browser\\Application\\brave.exe"
        ),
        BrowserDescriptor(name="Vivaldi", locator="C:\\Program Files\\Vivaldi\\Application\\vivaldi.exe"),
        BrowserDescriptor(name="Opera", locator="C:\\Program Files\\Opera\\launcher.exe"),
    ),
    Platform.MACOS: (
        BrowserDescriptor(name="Chrome", locator="/Applications/Google Chrome.app"),
        BrowserDescriptor(name="Safari", locator="/Applications/Safari.app"),
        _firefox("/Applications/Firefox.app"),
        BrowserDescriptor(name="Brave", locator="/Applications/Brave Browser.app"),
        BrowserDescriptor(name="Edge", locator="/Applications/Microsoft Edge.app"),
        BrowserDescriptor(name="Vivaldi", locator="/Applications/Vivaldi.app"),
        BrowserDescriptor(name="Opera", locator="/Applications/Opera.app"),
    ),
    Platform.LINUX: (
        BrowserDescriptor(name="Chromium", locator="chromium"),
        BrowserDescriptor(name="Chrome", locator="google-chrome"),
        # Launched through the app-mode branch like the Chromium family
        BrowserDescriptor(name="Firefox", locator="firefox"),
        BrowserDescriptor(name="Brave", locator="brave-browser"),
        BrowserDescriptor(name="Vivaldi", locator="vivaldi"),
        BrowserDescriptor(name="Opera", locator="opera"),
    ),
}

PREFERENCES: dict[Platform, tuple[str, ...]] = {
    Platform.WINDOWS: ("Chrome", "Firefox", "Edge", "Brave", "Vivaldi", "Opera"),
    Platform.MACOS: ("Chrome", "Safari", "Firefox", "Edge", "Brave", "Vivaldi", "Opera"),
    Platform.LINUX: ("Chromium", "Chrome", "Firefox", "Brave", "Vivaldi", "Opera"),
}


def catalog_for(platform: Platform) -> tuple[BrowserDescriptor, ...]:
    """Return the known browsers for a platform, empty if it has none."""
    return CATALOG.get(platform, ())


def preferences_for(platform: Platform, preferred: str | None = None) -> tuple[str, ...]:
    """Return the selection priority for a platform.

    Args:
        platform: The host platform.
        preferred: Optional browser name to move to the front. Matched
            case-insensitively against the platform's catalog; ignored if unknown.

    Returns:
        Browser names in priority order, empty for unrecognized platforms.
    """
    order = PREFERENCES.get(platform, ())
    if not preferred:
        return order

    wanted = preferred.strip().lower()
    for browser in catalog_for(platform):
        if browser.name.lower() == wanted:
            return (browser.name,) + tuple(name for name in order if name != browser.name)
    return order
