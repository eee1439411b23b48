# oxr/constants.py
"""
Constants for the oxr package.
"""

# App window geometry in pixels (not user configurable)
WINDOW_WIDTH = 960
WINDOW_HEIGHT = 800

# Throwaway profile so app-mode flags are honoured even if the browser is already running
TEMP_PROFILE_DIR = "/tmp/temp-profile"

# Update check
UPDATE_CHECK_TIMEOUT = 5  # Seconds to wait on PyPI before giving up
UPDATE_NOTICE_DELAY = 2  # Seconds to keep the update notice on screen

USAGE = "oxr <url>"
