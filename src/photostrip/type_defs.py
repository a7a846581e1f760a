"""
Defines shared type aliases for the photostrip compositor.

Centralizes reusable type hints to improve consistency and readability.
"""
from __future__ import annotations

from typing import Literal

FilterName = Literal["none", "grayscale", "sepia", "soft", "vintage"]
StripStyle = Literal["white", "black", "gray"]
AdjustmentKind = Literal[
    "brightness",
    "contrast",
    "saturate",
    "hue-rotate",
    "grayscale",
    "sepia",
]
LayoutType = Literal[2, 3, 4]
PhotoSource = str
RGB = tuple[int, int, int]

FILTER_CHOICES: tuple[FilterName, ...] = (
    "none",
    "grayscale",
    "sepia",
    "soft",
    "vintage",
)
STYLE_CHOICES: tuple[StripStyle, ...] = ("white", "black", "gray")
LAYOUT_CHOICES: tuple[LayoutType, ...] = (2, 3, 4)
