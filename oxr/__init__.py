# oxr/__init__.py
"""Open a URL as a kiosk-style app window in the best available browser."""

__pkg_version__ = "0.1.0"
__pypi_url__ = "https://pypi.org/pypi/oxr/json"
