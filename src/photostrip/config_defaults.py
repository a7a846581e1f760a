"""Shared default values for user-facing configuration settings."""

# Layout
DEFAULT_PHOTO_WIDTH = 400
DEFAULT_PADDING = 24
DEFAULT_FOOTER_HEIGHT = 140
DEFAULT_PHOTO_COUNT = 4

# Footer typography
DEFAULT_TITLE = "HAPPY VALENTINE'S DAY"
DEFAULT_ATTRIBUTION = "© waveeeh"
DEFAULT_TITLE_PX = 24
DEFAULT_DATE_PX = 16
DEFAULT_ATTRIBUTION_PX = 10
DEFAULT_TITLE_SPACING = 4
DEFAULT_DATE_SPACING = 2
# Attribution is drawn while the title spacing is still in effect
DEFAULT_ATTRIBUTION_SPACING = 4

# Footer vertical offsets, relative to the title baseline
DEFAULT_TITLE_OFFSET = 30
DEFAULT_DATE_OFFSET = 30
DEFAULT_RULE_OFFSET = 50
DEFAULT_ATTRIBUTION_OFFSET = 70
DEFAULT_RULE_HALF_WIDTH = 40
DEFAULT_RULE_THICKNESS = 2

# Export
DEFAULT_QUALITY = 90
DEFAULT_FILENAME_PREFIX = "photobooth"

# Selections
DEFAULT_FILTER = "none"
DEFAULT_STYLE = "white"
