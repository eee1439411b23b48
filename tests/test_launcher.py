"""Tests for URL normalization, browser selection and the launch fallbacks."""

import pytest

from oxr import launcher
from oxr.catalog import BrowserDescriptor, Platform
from oxr.config import Settings
from oxr.launcher import SpawnError, format_command, launch_app, normalize_url, select_browser, spawn_detached
from oxr.platforms import LinuxPlatform, MacOSPlatform, WindowsPlatform

CHROME = BrowserDescriptor(name="Chrome", locator="google-chrome")
CHROMIUM = BrowserDescriptor(name="Chromium", locator="chromium")
FIREFOX = BrowserDescriptor(name="Firefox", locator="firefox", uses_width_height_flags=True)
OPERA = BrowserDescriptor(name="Opera", locator="opera")


@pytest.fixture
def spawned(monkeypatch):
    """Record spawn requests instead of starting processes."""
    calls = []

    def fake_spawn(command):
        calls.append(list(command))

    monkeypatch.setattr(launcher, "spawn_detached", fake_spawn)
    return calls


def _install(monkeypatch, strategy_cls, names):
    monkeypatch.setattr(strategy_cls, "is_installed", lambda self, browser: browser.name in names)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("example.com", "https://example.com"),
        ("localhost:3000", "http://localhost:3000"),
        ("http://foo", "http://foo"),
        ("https://foo", "https://foo"),
        ("httpfoo.com", "httpfoo.com"),
    ],
)
def test_normalize_url(raw, expected):
    assert normalize_url(raw) == expected


def test_preference_beats_detection_order():
    assert select_browser([FIREFOX, CHROMIUM], ["Chromium", "Chrome", "Firefox"]) is CHROMIUM


def test_falls_back_to_first_detected_when_nothing_preferred():
    assert select_browser([OPERA, FIREFOX], ["Chrome", "Edge"]) is OPERA


def test_no_detected_browsers_selects_nothing():
    assert select_browser([], ["Chrome"]) is None


def test_selection_is_deterministic():
    detected = [FIREFOX, CHROME, OPERA]
    preferences = ["Opera", "Chrome"]
    assert {select_browser(detected, preferences).name for _ in range(5)} == {"Opera"}


def test_format_command_quotes_spaces():
    assert format_command(["open", "-na", "/Applications/Google Chrome.app"]) == (
        "open -na '/Applications/Google Chrome.app'"
    )


def test_spawn_detached_wraps_os_errors(tmp_path):
    missing = str(tmp_path / "no-such-browser")
    with pytest.raises(SpawnError) as excinfo:
        spawn_detached([missing, "https://example.com"])
    assert excinfo.value.command == [missing, "https://example.com"]


def test_launch_linux_prefers_chromium(monkeypatch, spawned, console, output, settings):
    _install(monkeypatch, LinuxPlatform, {"Firefox", "Chromium"})

    result = launch_app("example.com", platform=Platform.LINUX, console=console, settings=settings)

    assert result.browser.name == "Chromium"
    assert spawned == [
        [
            "chromium",
            "--app=https://example.com",
            "--window-size=960,800",
            "--new-window",
            "--user-data-dir=/tmp/temp-profile",
        ]
    ]
    assert result.command == spawned[0]
    assert not result.used_default_handler
    text = output()
    assert "Detected OS: linux" in text
    assert "Detected browsers: Chromium, Firefox" in text


def test_launch_windows_firefox(monkeypatch, spawned, console, settings):
    _install(monkeypatch, WindowsPlatform, {"Firefox"})

    result = launch_app("localhost:8080", platform=Platform.WINDOWS, console=console, settings=settings)

    assert result.url == "http://localhost:8080"
    command = spawned[0]
    assert command[1:] == ["http://localhost:8080", "--width=960", "--height=800"]
    assert not any(arg.startswith("--app=") for arg in command)


def test_launch_macos_uses_open(monkeypatch, spawned, console, settings):
    _install(monkeypatch, MacOSPlatform, {"Safari", "Edge"})

    launch_app("https://example.com", platform=Platform.MACOS, console=console, settings=settings)

    assert spawned[0][:4] == ["open", "-na", "/Applications/Safari.app", "--args"]


def test_preferred_browser_setting_overrides_order(monkeypatch, spawned, console):
    _install(monkeypatch, LinuxPlatform, {"Chromium", "Firefox"})

    result = launch_app(
        "example.com",
        platform=Platform.LINUX,
        console=console,
        settings=Settings(preferred_browser="firefox", check_updates=False),
    )

    assert result.browser.name == "Firefox"


def test_no_browsers_uses_default_handler(monkeypatch, spawned, console, output, settings):
    _install(monkeypatch, LinuxPlatform, set())

    result = launch_app("example.com", platform=Platform.LINUX, console=console, settings=settings)

    assert spawned == [["xdg-open", "https://example.com"]]
    assert result.used_default_handler
    assert result.browser is None
    assert "Detected browsers: None" in output()


def test_unsupported_platform_spawns_nothing(spawned, console, output, settings):
    result = launch_app("example.com", platform=Platform.OTHER, console=console, settings=settings)

    assert spawned == []
    assert not result.launched
    text = output()
    assert "Unsupported OS" in text
    assert "Unsupported OS for launching app!" in text


def test_spawn_failure_falls_back_to_default_handler(monkeypatch, console, output, settings):
    _install(monkeypatch, WindowsPlatform, {"Chrome"})
    calls = []

    def flaky_spawn(command):
        calls.append(list(command))
        if len(calls) == 1:
            raise SpawnError(command, PermissionError("denied"))

    monkeypatch.setattr(launcher, "spawn_detached", flaky_spawn)

    result = launch_app("example.com", platform=Platform.WINDOWS, console=console, settings=settings)

    assert len(calls) == 2
    assert calls[1] == ["cmd", "/c", "start", "", "https://example.com"]
    assert result.used_default_handler
    assert "Warning:" in output()


def test_every_tier_failing_is_reported_not_raised(monkeypatch, console, settings):
    _install(monkeypatch, LinuxPlatform, {"Chrome"})
    calls = []

    def failing_spawn(command):
        calls.append(list(command))
        raise SpawnError(command, FileNotFoundError("gone"))

    monkeypatch.setattr(launcher, "spawn_detached", failing_spawn)

    result = launch_app("example.com", platform=Platform.LINUX, console=console, settings=settings)

    assert len(calls) == 2
    assert not result.launched


def test_debug_prints_spawned_command(monkeypatch, spawned, console, output):
    _install(monkeypatch, LinuxPlatform, {"Chrome"})

    launch_app(
        "example.com",
        platform=Platform.LINUX,
        console=console,
        settings=Settings(debug=True, check_updates=False),
    )

    assert "Running: google-chrome --app=https://example.com" in output()


def test_windows_default_handler_keeps_query_string_intact(monkeypatch, spawned, console, settings):
    _install(monkeypatch, WindowsPlatform, set())

    result = launch_app(
        "example.com/search?q=kiosk&page=2", platform=Platform.WINDOWS, console=console, settings=settings
    )

    assert result.used_default_handler
    assert spawned == [["cmd", "/c", "start", "", "https://example.com/search?q=kiosk^&page=2"]]
