"""Photo source decoding and concurrent, all-or-nothing batch loading."""
from __future__ import annotations

import asyncio
import base64
import binascii
import io
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING
from urllib.parse import unquote_to_bytes

from PIL import Image, ImageOps, UnidentifiedImageError

from photostrip.constants import (
    BASE64_MARKER,
    COLOR_MODE_RGB,
    COLOR_MODE_RGBA,
    DATA_URI_PREFIX,
)
from photostrip.errors import EmptyInputError, ImageDecodeError
from photostrip.logging_utils import logger

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence

    from photostrip.type_defs import PhotoSource


@dataclass(frozen=True, slots=True)
class LoadedImage:
    """A decoded photo with known pixel dimensions."""

    index: int
    source: PhotoSource
    image: Image.Image

    @property
    def width(self) -> int:
        """Pixel width."""
        return self.image.width

    @property
    def height(self) -> int:
        """Pixel height."""
        return self.image.height

    @property
    def aspect_ratio(self) -> float:
        """Height divided by width."""
        return self.height / self.width


def _read_source_bytes(source: PhotoSource) -> bytes:
    """Return the raw encoded bytes behind a data URI or file path."""
    if source.startswith(DATA_URI_PREFIX):
        header, sep, payload = source.partition(",")
        if not sep:
            msg = "data URI has no payload"
            raise ValueError(msg)
        if header.endswith(BASE64_MARKER):
            return base64.b64decode(payload, validate=True)
        return unquote_to_bytes(payload)
    return Path(source).expanduser().read_bytes()


def _normalize_mode(img: Image.Image) -> Image.Image:
    """Reduce decoded images to RGB, keeping alpha where present."""
    if img.mode in (COLOR_MODE_RGB, COLOR_MODE_RGBA):
        return img
    if "A" in img.getbands() or "transparency" in img.info:
        return img.convert(COLOR_MODE_RGBA)
    return img.convert(COLOR_MODE_RGB)


def decode_source(index: int, source: PhotoSource) -> LoadedImage:
    """
    Decode a single photo source.

    Args:
        index: Position of the source in the requested sequence.
        source: A ``data:`` URI or a filesystem path.

    Returns:
        The fully decoded image, with EXIF orientation applied.

    Raises:
        ImageDecodeError: If the bytes cannot be read or decoded, the
            image exceeds Pillow's pixel limit, or it has no area.

    """
    try:
        raw = _read_source_bytes(source)
    except (binascii.Error, ValueError) as exc:
        raise ImageDecodeError(index, source, f"malformed data URI: {exc}") \
            from exc
    except OSError as exc:
        raise ImageDecodeError(index, source, str(exc)) from exc

    try:
        with Image.open(io.BytesIO(raw)) as opened:
            opened.load()
            img = ImageOps.exif_transpose(opened)
            img = _normalize_mode(img)
            img.load()
    except UnidentifiedImageError as exc:
        raise ImageDecodeError(index, source, "unrecognized image data") \
            from exc
    except Image.DecompressionBombError as exc:
        raise ImageDecodeError(index, source, "image too large to decode") \
            from exc
    except (OSError, ValueError) as exc:
        raise ImageDecodeError(index, source, str(exc)) from exc

    if img.width <= 0 or img.height <= 0:
        raise ImageDecodeError(index, source, "image has zero size")
    return LoadedImage(index=index, source=source, image=img)


async def load_images(sources: Sequence[PhotoSource]) -> list[LoadedImage]:
    """
    Decode every source concurrently and return them in input order.

    Decodes run in worker threads. The first failure stops waiting on the
    rest and is raised; when several decodes have already failed, the
    lowest index is reported. Completed results are discarded on failure.

    Raises:
        EmptyInputError: If ``sources`` is empty.
        ImageDecodeError: If any source fails to decode.

    """
    if not sources:
        raise EmptyInputError

    tasks = [
        asyncio.create_task(asyncio.to_thread(decode_source, i, src))
        for i, src in enumerate(sources)
    ]
    try:
        done, pending = await asyncio.wait(
            tasks,
            return_when=asyncio.FIRST_EXCEPTION,
        )
    except asyncio.CancelledError:
        for task in tasks:
            task.cancel()
        raise

    failures = [
        exc for task in done
        if (exc := task.exception()) is not None
    ]
    if failures:
        for task in pending:
            task.cancel()
        decode_errors = sorted(
            (e for e in failures if isinstance(e, ImageDecodeError)),
            key=lambda e: e.index,
        )
        first = decode_errors[0] if decode_errors else failures[0]
        logger.debug("Discarding %d loaded photo(s) after failure",
                     len(done) - len(failures))
        raise first

    return [task.result() for task in tasks]
