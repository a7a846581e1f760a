"""
Constants used internally by the photostrip compositor.

These are implementation-level values that should not be overridden
via config files.
"""

from photostrip.type_defs import LayoutType

# Internal color constants
COLOR_MODE_RGB = "RGB"
COLOR_MODE_RGBA = "RGBA"

# Encoded output
OUTPUT_FORMAT = "JPEG"
OUTPUT_MIME_TYPE = "image/jpeg"
OUTPUT_EXTENSION = ".jpg"
JPEG_QUALITY_MIN = 1
JPEG_QUALITY_MAX = 95

# Data URI handling
DATA_URI_PREFIX = "data:"
BASE64_MARKER = ";base64"

# Minimum legible WCAG contrast for footer text
MIN_TEXT_CONTRAST = 4.5

# Photo counts offered by the layout picker, with their display names
LAYOUT_LABELS: dict[LayoutType, str] = {2: "Duo", 3: "Trio", 4: "Classic"}
