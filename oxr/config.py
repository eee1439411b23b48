# oxr/config.py
"""Runtime settings for oxr.

Settings come from environment variables only:

- ``OXR_BROWSER``: browser name to try before the platform's usual preference order.
- ``OXR_DEBUG``: print probe results and the exact command spawned.
- ``OXR_DISABLE_UPDATE_CHECK``: skip the PyPI version check.
"""

import os
from typing import Mapping

from pydantic import BaseModel, ConfigDict

BROWSER_ENV = "OXR_BROWSER"
DEBUG_ENV = "OXR_DEBUG"
DISABLE_UPDATE_CHECK_ENV = "OXR_DISABLE_UPDATE_CHECK"

_TRUTHY = ("1", "true", "yes", "on")


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    preferred_browser: str | None = None
    debug: bool = False
    check_updates: bool = True


def _is_truthy(value: str | None) -> bool:
    return value is not None and value.strip().lower() in _TRUTHY


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from the environment (``os.environ`` unless given)."""
    env = os.environ if environ is None else environ

    preferred = (env.get(BROWSER_ENV) or "").strip() or None
    return Settings(
        preferred_browser=preferred,
        debug=_is_truthy(env.get(DEBUG_ENV)),
        check_updates=not _is_truthy(env.get(DISABLE_UPDATE_CHECK_ENV)),
    )
