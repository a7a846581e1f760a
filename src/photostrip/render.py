"""
Rasterize a photostrip: background, filtered photos, plain footer.

The drawing order is fixed. The surface is filled with the palette
background, each photo is stretched into its layout box with the filter
applied, and only then is the footer typography drawn, so no filter can
tint text or the decorative rule.
"""

from __future__ import annotations

import io
from datetime import datetime
from functools import lru_cache
from typing import TYPE_CHECKING

from PIL import Image, ImageDraw, ImageFont

from photostrip.config import FooterConfig
from photostrip.constants import COLOR_MODE_RGB, COLOR_MODE_RGBA, OUTPUT_FORMAT
from photostrip.errors import ExportEncodingError
from photostrip.logging_utils import logger

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence

    from photostrip.filters import FilterExpression
    from photostrip.image_io import LoadedImage
    from photostrip.layout import LayoutGeometry
    from photostrip.styles import StripPalette
    from photostrip.type_defs import RGB

_Font = ImageFont.FreeTypeFont | ImageFont.ImageFont

# Monospace faces tried in order before Pillow's built-in font
_BOLD_FONTS = (
    "courbd.ttf",
    "Courier New Bold.ttf",
    "DejaVuSansMono-Bold.ttf",
    "LiberationMono-Bold.ttf",
)
_REGULAR_FONTS = (
    "cour.ttf",
    "Courier New.ttf",
    "DejaVuSansMono.ttf",
    "LiberationMono-Regular.ttf",
)
_BASELINE_LEFT = "ls"


@lru_cache(maxsize=16)
def _get_font(px: int, *, bold: bool, font_path: str | None) -> _Font:
    """Load a monospace font at the given pixel size with fallback; cached."""
    candidates = (font_path,) if font_path else ()
    candidates += _BOLD_FONTS if bold else _REGULAR_FONTS
    for name in candidates:
        try:
            return ImageFont.truetype(name, px)
        except OSError:
            continue
    logger.debug("No monospace font found for %dpx, using default", px)
    return ImageFont.load_default(size=px)


def spaced_text_width(text: str, font: _Font, spacing: float) -> float:
    """Advance width of ``text`` with ``spacing`` added after each glyph."""
    return sum(font.getlength(ch) + spacing for ch in text)


def draw_spaced_text(  # noqa: PLR0913
    draw: ImageDraw.ImageDraw,
    text: str,
    *,
    center_x: float,
    baseline_y: float,
    font: _Font,
    fill: RGB,
    spacing: float = 0,
) -> None:
    """Draw ``text`` centered on ``center_x`` with its baseline at y."""
    x = center_x - spaced_text_width(text, font, spacing) / 2
    for ch in text:
        draw.text((x, baseline_y), ch, font=font, fill=fill,
                  anchor=_BASELINE_LEFT)
        x += font.getlength(ch) + spacing


def draw_rule(  # noqa: PLR0913
    draw: ImageDraw.ImageDraw,
    *,
    center_x: float,
    y: float,
    half_width: float,
    thickness: int,
    fill: RGB,
) -> None:
    """Draw a short horizontal rule centered on ``center_x``."""
    draw.line(
        [(center_x - half_width, y), (center_x + half_width, y)],
        fill=fill,
        width=thickness,
    )


def format_timestamp(moment: datetime) -> str:
    """Format like ``Feb 14, 2026 • 03:45 PM``."""
    return (
        f"{moment:%b} {moment.day}, {moment.year} • {moment:%I:%M %p}"
    )


def _draw_photos(
    canvas: Image.Image,
    images: Sequence[LoadedImage],
    geometry: LayoutGeometry,
    expression: FilterExpression,
) -> None:
    for loaded, box in zip(images, geometry.photo_boxes(), strict=True):
        stretched = loaded.image.resize(box.size(), Image.Resampling.LANCZOS)
        tinted = expression.apply(stretched)
        if tinted.mode == COLOR_MODE_RGBA:
            canvas.paste(tinted, (box.x0, box.y0), tinted)
        else:
            canvas.paste(tinted, (box.x0, box.y0))


def _draw_footer(
    canvas: Image.Image,
    geometry: LayoutGeometry,
    palette: StripPalette,
    footer: FooterConfig,
    moment: datetime,
) -> None:
    draw = ImageDraw.Draw(canvas)
    cx = geometry.center_x
    y0 = geometry.footer_top + footer.title_offset

    draw_spaced_text(
        draw, footer.title,
        center_x=cx, baseline_y=y0,
        font=_get_font(footer.title_px, bold=True,
                       font_path=footer.font_path),
        fill=palette.text_color, spacing=footer.title_spacing,
    )
    draw_spaced_text(
        draw, format_timestamp(moment),
        center_x=cx, baseline_y=y0 + footer.date_offset,
        font=_get_font(footer.date_px, bold=False,
                       font_path=footer.font_path),
        fill=palette.meta_color, spacing=footer.date_spacing,
    )
    draw_rule(
        draw,
        center_x=cx, y=y0 + footer.rule_offset,
        half_width=footer.rule_half_width,
        thickness=footer.rule_thickness,
        fill=palette.line_color,
    )
    draw_spaced_text(
        draw, footer.attribution,
        center_x=cx, baseline_y=y0 + footer.attribution_offset,
        font=_get_font(footer.attribution_px, bold=False,
                       font_path=footer.font_path),
        fill=palette.meta_color, spacing=footer.attribution_spacing,
    )


def render_strip(  # noqa: PLR0913
    images: Sequence[LoadedImage],
    geometry: LayoutGeometry,
    expression: FilterExpression,
    palette: StripPalette,
    *,
    footer: FooterConfig | None = None,
    now: datetime | None = None,
) -> Image.Image:
    """
    Draw one complete strip and return the RGB surface.

    ``now`` is the generation time printed in the footer; it defaults to
    the current local time.
    """
    footer = footer or FooterConfig.model_validate({})
    moment = now or datetime.now().astimezone()

    canvas = Image.new(COLOR_MODE_RGB, geometry.canvas_size,
                       palette.background)
    _draw_photos(canvas, images, geometry, expression)
    _draw_footer(canvas, geometry, palette, footer, moment)
    return canvas


def encode_strip(surface: Image.Image, *, quality: int) -> bytes:
    """
    Encode the surface as JPEG in memory.

    Raises:
        ExportEncodingError: If Pillow cannot encode the surface.

    """
    buffer = io.BytesIO()
    try:
        surface.save(buffer, format=OUTPUT_FORMAT, quality=quality)
    except (OSError, ValueError) as exc:
        msg = f"Could not encode strip as {OUTPUT_FORMAT}: {exc}"
        raise ExportEncodingError(msg) from exc
    return buffer.getvalue()
