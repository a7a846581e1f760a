"""
Geometry for the single-column photostrip.

All photos share one aspect ratio, taken from the first loaded image,
and stack vertically with uniform padding above a fixed-height footer::

    strip_width  = photo_width + 2 * padding
    strip_height = padding * (N + 1) + N * photo_height + footer_height
    photo_y[i]   = padding + i * (photo_height + padding)

Values are kept exact as floats. ``canvas_size`` and ``photo_boxes``
give the integer pixel view used for rasterizing.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from photostrip.config import LayoutConfig
from photostrip.config_defaults import DEFAULT_PHOTO_COUNT
from photostrip.constants import LAYOUT_LABELS
from photostrip.errors import EmptyInputError
from photostrip.type_defs import LAYOUT_CHOICES

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence

    from photostrip.image_io import LoadedImage


@dataclass(frozen=True)
class Rect:
    """Simple rectangle with convenience accessors."""

    x0: int
    y0: int
    x1: int
    y1: int

    @property
    def w(self) -> int:
        """Width."""
        return self.x1 - self.x0

    @property
    def h(self) -> int:
        """Height."""
        return self.y1 - self.y0

    def size(self) -> tuple[int, int]:
        """Return (w, h)."""
        return self.w, self.h

    def overlaps(self, other: Rect) -> bool:
        """True when the two rectangles share any pixel."""
        return (
            self.x0 < other.x1 and other.x0 < self.x1
            and self.y0 < other.y1 and other.y0 < self.y1
        )


@dataclass(frozen=True)
class LayoutGeometry:
    """Derived canvas geometry for one run."""

    count: int
    aspect_ratio: float
    photo_width: float
    photo_height: float
    padding: float
    footer_height: float
    strip_width: float
    strip_height: float
    photo_ys: tuple[float, ...]

    @property
    def photo_x(self) -> float:
        """Left edge shared by every photo."""
        return self.padding

    @property
    def footer_top(self) -> float:
        """Y coordinate where the footer region begins."""
        return self.strip_height - self.footer_height

    @property
    def center_x(self) -> float:
        """Horizontal center line used for footer elements."""
        return self.strip_width / 2

    @property
    def canvas_size(self) -> tuple[int, int]:
        """Integer surface size; fractional pixels are truncated."""
        return int(self.strip_width), int(self.strip_height)

    def photo_boxes(self) -> list[Rect]:
        """
        Pixel rectangles for each photo, in index order.

        Every box is at least one pixel in each dimension, so very wide
        or very tall photos still get a drawable slot.
        """
        x0 = round(self.photo_x)
        x1 = max(x0 + 1, round(self.photo_x + self.photo_width))
        boxes = []
        for y in self.photo_ys:
            y0 = round(y)
            y1 = max(y0 + 1, round(y + self.photo_height))
            boxes.append(Rect(x0, y0, x1, y1))
        return boxes


def compute_layout(
    aspect_ratio: float,
    count: int = DEFAULT_PHOTO_COUNT,
    config: LayoutConfig | None = None,
) -> LayoutGeometry:
    """
    Compute strip geometry for ``count`` photos of the given aspect ratio.

    Raises:
        EmptyInputError: If ``count`` is zero.
        ValueError: If ``count`` is negative or the aspect ratio is not a
            positive finite number.

    """
    if count == 0:
        raise EmptyInputError
    if count < 0:
        msg = f"photo count must be positive, got {count}"
        raise ValueError(msg)
    if not math.isfinite(aspect_ratio) or aspect_ratio <= 0:
        msg = f"aspect ratio must be positive, got {aspect_ratio}"
        raise ValueError(msg)

    cfg = config or LayoutConfig.model_validate({})
    photo_width = float(cfg.photo_width)
    padding = float(cfg.padding)
    footer_height = float(cfg.footer_height)
    photo_height = photo_width * aspect_ratio

    return LayoutGeometry(
        count=count,
        aspect_ratio=aspect_ratio,
        photo_width=photo_width,
        photo_height=photo_height,
        padding=padding,
        footer_height=footer_height,
        strip_width=photo_width + 2 * padding,
        strip_height=(
            padding * (count + 1) + count * photo_height + footer_height
        ),
        photo_ys=tuple(
            padding + i * (photo_height + padding) for i in range(count)
        ),
    )


def layout_for_images(
    images: Sequence[LoadedImage],
    config: LayoutConfig | None = None,
) -> LayoutGeometry:
    """Lay out loaded images using the first image's aspect ratio."""
    if not images:
        raise EmptyInputError
    return compute_layout(images[0].aspect_ratio, len(images), config)


def layout_label(count: int) -> str:
    """Display name for a photo count, e.g. ``Classic`` for four."""
    if count in LAYOUT_CHOICES:
        return LAYOUT_LABELS[count]  # type: ignore[index]
    return f"{count} Photos"
