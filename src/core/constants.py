"""Core constants used across paperdoll container modules.

This module centralizes well-known names and defaults.
Keeping values here avoids magic literals in pipeline logic.
"""

from __future__ import annotations

EXTENSION_NAME = "ppd"
FILE_NAME_MANIFEST = "manifest.yml"
DEFAULT_STAGING_PREFIX = "paperdoll_ppd_"
DEFAULT_MAX_WORKERS = 1
DEFAULT_IMAGE_EXTENSION = "png"
DOLL_KIND = "doll"
FRAGMENT_KIND = "fragment"
RGBA_CHANNELS = 4
WRITABLE_IMAGE_FORMATS = {
    "png": "PNG",
    "tif": "TIFF",
    "tiff": "TIFF",
    "tga": "TGA",
}
EXTENSION_FALLBACKS = {
    "webp": DEFAULT_IMAGE_EXTENSION,
    "jpg": DEFAULT_IMAGE_EXTENSION,
    "jpeg": DEFAULT_IMAGE_EXTENSION,
    "gif": DEFAULT_IMAGE_EXTENSION,
    "bmp": DEFAULT_IMAGE_EXTENSION,
}
