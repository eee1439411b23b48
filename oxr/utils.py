# oxr/utils.py
import time

import requests
from packaging.version import parse as parse_version
from rich.console import Console

from .constants import UPDATE_CHECK_TIMEOUT, UPDATE_NOTICE_DELAY


# Update Check Function
def check_for_cli_updates(console: Console | None = None) -> bool:
    """Checks PyPI for a newer version of the oxr package and notifies the user.

    Returns:
        True if a newer release was found, False otherwise (including on any failure).
    """
    try:
        from . import __pkg_version__, __pypi_url__

        response = requests.get(__pypi_url__, timeout=UPDATE_CHECK_TIMEOUT)  # Short timeout for non-critical check
        response.raise_for_status()
        latest_version_str = response.json()["info"]["version"]

        current_version = parse_version(__pkg_version__)
        latest_version = parse_version(latest_version_str)

        if latest_version > current_version:
            console = console or Console(stderr=True)
            console.print(
                f"[bold yellow]WARNING: New oxr version ({latest_version_str}) available "
                f"(you have {__pkg_version__}). Run: pip install --upgrade oxr[/]"
            )
            time.sleep(UPDATE_NOTICE_DELAY)
            return True

    except requests.exceptions.RequestException:
        # Network errors should never get in the way of opening the app
        pass
    except (KeyError, TypeError, ValueError):
        # Unexpected PyPI response format or unparseable version
        pass
    return False
