"""
Tonal filters applied to the photo regions of a strip.

Each filter selection maps to a ``FilterExpression``: an ordered chain of
CSS-style adjustments (``brightness``, ``contrast``, ``saturate``,
``hue-rotate``, ``grayscale``, ``sepia``). Every adjustment is expressed
as a 3x4 affine color matrix using the coefficients from the W3C Filter
Effects module, so the chain reproduces what a browser canvas does with
``ctx.filter``. Values are clamped to the 8-bit range after each step.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
from PIL import Image

from photostrip.constants import COLOR_MODE_RGB, COLOR_MODE_RGBA
from photostrip.type_defs import FILTER_CHOICES, AdjustmentKind, FilterName

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable

_MAX_CHANNEL = 255.0

# Rec. 709 luma weights used by the CSS grayscale/saturate/hue matrices
_LUMA_R = 0.2126
_LUMA_G = 0.7152
_LUMA_B = 0.0722


def _affine(linear: np.ndarray, offset: float = 0.0) -> np.ndarray:
    """Stack a 3x3 matrix with a constant per-channel offset column."""
    return np.hstack([linear, np.full((3, 1), offset)])


def _grayscale_matrix(amount: float) -> np.ndarray:
    s = 1.0 - min(1.0, amount)
    return _affine(np.array([
        [_LUMA_R + (1 - _LUMA_R) * s, _LUMA_G - _LUMA_G * s,
         _LUMA_B - _LUMA_B * s],
        [_LUMA_R - _LUMA_R * s, _LUMA_G + (1 - _LUMA_G) * s,
         _LUMA_B - _LUMA_B * s],
        [_LUMA_R - _LUMA_R * s, _LUMA_G - _LUMA_G * s,
         _LUMA_B + (1 - _LUMA_B) * s],
    ]))


def _sepia_matrix(amount: float) -> np.ndarray:
    s = 1.0 - min(1.0, amount)
    return _affine(np.array([
        [0.393 + 0.607 * s, 0.769 - 0.769 * s, 0.189 - 0.189 * s],
        [0.349 - 0.349 * s, 0.686 + 0.314 * s, 0.168 - 0.168 * s],
        [0.272 - 0.272 * s, 0.534 - 0.534 * s, 0.131 + 0.869 * s],
    ]))


def _saturate_matrix(amount: float) -> np.ndarray:
    s = amount
    return _affine(np.array([
        [0.213 + 0.787 * s, 0.715 - 0.715 * s, 0.072 - 0.072 * s],
        [0.213 - 0.213 * s, 0.715 + 0.285 * s, 0.072 - 0.072 * s],
        [0.213 - 0.213 * s, 0.715 - 0.715 * s, 0.072 + 0.928 * s],
    ]))


def _hue_rotate_matrix(degrees: float) -> np.ndarray:
    rad = math.radians(degrees)
    c, s = math.cos(rad), math.sin(rad)
    base = np.array([[0.213, 0.715, 0.072]] * 3)
    cos_part = np.array([
        [0.787, -0.715, -0.072],
        [-0.213, 0.285, -0.072],
        [-0.213, -0.715, 0.928],
    ])
    sin_part = np.array([
        [-0.213, -0.715, 0.928],
        [0.143, 0.140, -0.283],
        [-0.787, 0.715, 0.072],
    ])
    return _affine(base + c * cos_part + s * sin_part)


def _brightness_matrix(amount: float) -> np.ndarray:
    return _affine(np.eye(3) * amount)


def _contrast_matrix(amount: float) -> np.ndarray:
    intercept = (0.5 - 0.5 * amount) * _MAX_CHANNEL
    return _affine(np.eye(3) * amount, intercept)


_MATRIX_BUILDERS: dict[str, Callable[[float], np.ndarray]] = {
    "brightness": _brightness_matrix,
    "contrast": _contrast_matrix,
    "saturate": _saturate_matrix,
    "hue-rotate": _hue_rotate_matrix,
    "grayscale": _grayscale_matrix,
    "sepia": _sepia_matrix,
}


@dataclass(frozen=True, slots=True)
class Adjustment:
    """One CSS filter function with its amount (degrees for hue-rotate)."""

    kind: AdjustmentKind
    amount: float

    def matrix(self) -> np.ndarray:
        """Return the 3x4 affine color matrix for this adjustment."""
        builder = _MATRIX_BUILDERS.get(self.kind)
        if builder is None:
            msg = f"unknown adjustment {self.kind!r}"
            raise ValueError(msg)
        return builder(self.amount)

    def css(self) -> str:
        """Render the adjustment in CSS filter notation."""
        if self.kind == "hue-rotate":
            return f"hue-rotate({self.amount:g}deg)"
        return f"{self.kind}({self.amount:g})"


@dataclass(frozen=True, slots=True)
class FilterExpression:
    """Ordered, composable chain of adjustments."""

    adjustments: tuple[Adjustment, ...] = ()

    @property
    def is_identity(self) -> bool:
        """True when the expression leaves pixels untouched."""
        return not self.adjustments

    def then(self, kind: AdjustmentKind, amount: float) -> FilterExpression:
        """Return a new expression with one more adjustment appended."""
        return FilterExpression((*self.adjustments, Adjustment(kind, amount)))

    def css(self) -> str:
        """Render as a CSS ``filter`` value, ``none`` for identity."""
        if self.is_identity:
            return "none"
        return " ".join(adj.css() for adj in self.adjustments)

    def apply(self, image: Image.Image) -> Image.Image:
        """
        Apply the chain to an RGB or RGBA image.

        The identity expression returns the input unchanged. Alpha is
        carried over untouched so transparent regions still composite
        onto the strip background.
        """
        if self.is_identity:
            return image

        alpha = image.getchannel("A") if image.mode == COLOR_MODE_RGBA \
            else None
        pixels = np.asarray(
            image.convert(COLOR_MODE_RGB),
            dtype=np.float64,
        )
        for adj in self.adjustments:
            m = adj.matrix()
            pixels = pixels @ m[:, :3].T + m[:, 3]
            np.clip(pixels, 0.0, _MAX_CHANNEL, out=pixels)

        out = Image.fromarray(np.rint(pixels).astype(np.uint8))
        if alpha is not None:
            out.putalpha(alpha)
        return out


IDENTITY = FilterExpression()


def filter_expression(name: FilterName) -> FilterExpression:
    """Map a filter selection to its adjustment chain."""
    if name == "none":
        return IDENTITY
    if name == "grayscale":
        return IDENTITY.then("grayscale", 1.0)
    if name == "sepia":
        return IDENTITY.then("sepia", 0.5).then("contrast", 1.1)
    if name == "soft":
        return (
            IDENTITY.then("contrast", 0.95)
            .then("brightness", 1.05)
            .then("saturate", 1.1)
        )
    if name == "vintage":
        return (
            IDENTITY.then("sepia", 0.3)
            .then("contrast", 1.1)
            .then("brightness", 0.9)
            .then("hue-rotate", -5.0)
        )
    msg = f"unknown filter {name!r}"
    raise ValueError(msg)


def parse_filter_name(text: str) -> FilterName:
    """Validate a user-supplied filter name against the known choices."""
    value = text.strip().lower()
    for choice in FILTER_CHOICES:
        if value == choice:
            return choice
    msg = f"unknown filter {text!r}; expected one of {', '.join(FILTER_CHOICES)}"
    raise ValueError(msg)
