"""
Test configuration and shared fixtures for photostrip.

This module defines reusable pytest fixtures for building photo sources,
decoded images and a frozen clock. These fixtures support all test
modules in the test suite.

Note:
    This file is automatically loaded by pytest and should not be
    renamed.

"""
import base64
import io
from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from pathlib import Path

import pytest
from PIL import Image

from photostrip.constants import COLOR_MODE_RGB
from photostrip.image_io import LoadedImage, decode_source
from photostrip.logging_utils import logger

# Portrait 2:3 photos give an aspect ratio of exactly 1.5
PORTRAIT_SIZE = (100, 150)
PHOTO_COLORS = [
    (200, 60, 40),
    (40, 160, 70),
    (50, 80, 200),
    (230, 200, 40),
]
FROZEN_TIME = datetime(2026, 2, 14, 15, 45, tzinfo=UTC)


def encode_data_uri(img: Image.Image, fmt: str = "PNG") -> str:
    """Encode a PIL image as a base64 data URI."""
    buffer = io.BytesIO()
    img.save(buffer, format=fmt)
    encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
    return f"data:image/{fmt.lower()};base64,{encoded}"


@pytest.fixture
def make_photo_source() -> Callable[..., str]:
    """Factory producing solid-color data URIs."""

    def _build(
        size: tuple[int, int] = PORTRAIT_SIZE,
        color: tuple[int, int, int] = PHOTO_COLORS[0],
        fmt: str = "PNG",
    ) -> str:
        return encode_data_uri(Image.new(COLOR_MODE_RGB, size, color), fmt)

    return _build


@pytest.fixture
def photo_sources(make_photo_source: Callable[..., str]) -> list[str]:
    """Four portrait photos, each a different solid color."""
    return [make_photo_source(color=c) for c in PHOTO_COLORS]


@pytest.fixture
def make_loaded_images(
    make_photo_source: Callable[..., str],
) -> Callable[..., list[LoadedImage]]:
    """Decode ``count`` solid-color photos synchronously."""

    def _build(
        count: int = 4,
        size: tuple[int, int] = PORTRAIT_SIZE,
        colors: Sequence[tuple[int, int, int]] = PHOTO_COLORS,
    ) -> list[LoadedImage]:
        return [
            decode_source(i, make_photo_source(size, colors[i % len(colors)]))
            for i in range(count)
        ]

    return _build


@pytest.fixture
def photo_file(tmp_path: Path) -> Path:
    """A JPEG photo written to disk."""
    path = tmp_path / "capture.jpg"
    Image.new(COLOR_MODE_RGB, (120, 90), color="green").save(path)
    return path


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    """Clock frozen at Valentine's Day 2026, 15:45 UTC."""
    return lambda: FROZEN_TIME


@pytest.fixture(autouse=True)
def enable_logger_propagation(monkeypatch: pytest.MonkeyPatch) -> None:
    """Enable propagation for the photostrip logger to allow caplog to work."""
    monkeypatch.setattr(logger, "propagate", True)
