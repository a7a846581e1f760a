"""Strip style themes: background fill plus dependent footer colors."""

from __future__ import annotations

from dataclasses import dataclass

from photostrip.type_defs import RGB, STYLE_CHOICES, StripStyle

_HEX_RGB_LENGTH = 6

# WCAG relative luminance constants
_SRGB_THRESHOLD = 0.03928
_SRGB_LINEAR_DIVISOR = 12.92
_SRGB_OFFSET = 0.055
_SRGB_GAMMA = 2.4
_LUMINANCE_FLARE = 0.05


@dataclass(frozen=True, slots=True)
class StripPalette:
    """Resolved colors for one strip style."""

    background: RGB
    text_color: RGB
    meta_color: RGB
    line_color: RGB


def parse_hex_color(text: str) -> RGB:
    """Parse ``#rrggbb`` strings into RGB triples."""
    stripped = text.strip().lstrip("#")
    if len(stripped) != _HEX_RGB_LENGTH:
        msg = "color must look like #rrggbb"
        raise ValueError(msg)
    try:
        red = int(stripped[0:2], 16)
        green = int(stripped[2:4], 16)
        blue = int(stripped[4:6], 16)
    except ValueError as exc:
        msg = "color contains invalid hex digits"
        raise ValueError(msg) from exc
    return red, green, blue


_NEAR_BLACK = parse_hex_color("#1a1a1a")
_MID_GRAY = parse_hex_color("#666666")
_LIGHT_LINE = parse_hex_color("#e5e5e5")

_WHITE = StripPalette(
    background=parse_hex_color("#fdfdfd"),
    text_color=_NEAR_BLACK,
    meta_color=_MID_GRAY,
    line_color=_LIGHT_LINE,
)
_BLACK = StripPalette(
    background=_NEAR_BLACK,
    text_color=parse_hex_color("#ffffff"),
    meta_color=parse_hex_color("#888888"),
    line_color=parse_hex_color("#333333"),
)
_GRAY = StripPalette(
    background=parse_hex_color("#e5e7eb"),
    text_color=_NEAR_BLACK,
    meta_color=_MID_GRAY,
    line_color=_LIGHT_LINE,
)


def resolve_style(name: StripStyle) -> StripPalette:
    """Map a strip style to its palette."""
    if name == "white":
        return _WHITE
    if name == "black":
        return _BLACK
    if name == "gray":
        return _GRAY
    msg = f"unknown strip style {name!r}"
    raise ValueError(msg)


def parse_strip_style(text: str) -> StripStyle:
    """Validate a user-supplied style name against the known choices."""
    value = text.strip().lower()
    for choice in STYLE_CHOICES:
        if value == choice:
            return choice
    msg = f"unknown strip style {text!r}; expected one of {', '.join(STYLE_CHOICES)}"
    raise ValueError(msg)


def _relative_luminance(color: RGB) -> float:
    def channel(value: int) -> float:
        c = value / 255
        if c <= _SRGB_THRESHOLD:
            return c / _SRGB_LINEAR_DIVISOR
        return ((c + _SRGB_OFFSET) / (1 + _SRGB_OFFSET)) ** _SRGB_GAMMA

    r, g, b = (channel(v) for v in color)
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(first: RGB, second: RGB) -> float:
    """Return the WCAG contrast ratio between two colors (1.0 to 21.0)."""
    lighter, darker = sorted(
        (_relative_luminance(first), _relative_luminance(second)),
        reverse=True,
    )
    return (lighter + _LUMINANCE_FLARE) / (darker + _LUMINANCE_FLARE)
