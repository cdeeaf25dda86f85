"""Tag names, defaults and manifest format shared across the package."""

from __future__ import annotations

HTML_CONTENT_TYPE_PREFIX = "text/html"

DEFAULT_VIEWPORT = "width = device-width"
DEFAULT_STATUS_BAR_STYLE = "gray"

META_VIEWPORT = "viewport"
META_WEB_APP_CAPABLE = "apple-mobile-web-app-capable"
META_STATUS_BAR_STYLE = "apple-mobile-web-app-status-bar-style"

REL_TOUCH_ICON = "apple-touch-icon"
REL_STARTUP_IMAGE = "apple-touch-startup-image"

MANIFEST_HEADER = "CACHE MANIFEST"
MANIFEST_GLOB = "*.*"
MANIFEST_ENCODING = "utf-8"

BODY_ENCODING = "utf-8"
# Maps every byte to one character, so any body survives decode and encode.
FALLBACK_BODY_ENCODING = "latin-1"


__all__ = [
    "BODY_ENCODING",
    "DEFAULT_STATUS_BAR_STYLE",
    "DEFAULT_VIEWPORT",
    "FALLBACK_BODY_ENCODING",
    "HTML_CONTENT_TYPE_PREFIX",
    "MANIFEST_ENCODING",
    "MANIFEST_GLOB",
    "MANIFEST_HEADER",
    "META_STATUS_BAR_STYLE",
    "META_VIEWPORT",
    "META_WEB_APP_CAPABLE",
    "REL_STARTUP_IMAGE",
    "REL_TOUCH_ICON",
]
