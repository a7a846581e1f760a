"""Holds the latest finished composite and serves it for download."""

from __future__ import annotations

import base64
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING

from photostrip.config_defaults import DEFAULT_FILENAME_PREFIX
from photostrip.constants import OUTPUT_EXTENSION, OUTPUT_MIME_TYPE
from photostrip.logging_utils import logger

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable


def utc_now() -> datetime:
    """Default clock for download naming."""
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True)
class CompositeResult:
    """A finished, encoded photostrip."""

    data: bytes
    width: int
    height: int
    created_at: datetime
    mime_type: str = OUTPUT_MIME_TYPE

    @property
    def data_uri(self) -> str:
        """Base64 ``data:`` URI suitable for an <img> or download link."""
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"


def suggested_filename(
    now: datetime,
    prefix: str = DEFAULT_FILENAME_PREFIX,
) -> str:
    """Build ``<prefix>-YYYY-MM-DD.jpg`` from the UTC date of ``now``."""
    if now.tzinfo is not None:
        now = now.astimezone(UTC)
    return f"{prefix}-{now.date().isoformat()}{OUTPUT_EXTENSION}"


class ExportSurface:
    """
    Read side of the compositor.

    Only ever exposes the latest completed result; downloads are pure
    reads and never trigger rendering.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], datetime] = utc_now,
        filename_prefix: str = DEFAULT_FILENAME_PREFIX,
    ) -> None:
        self._clock = clock
        self._prefix = filename_prefix
        self._result: CompositeResult | None = None

    @property
    def available(self) -> bool:
        """True once a composite has been published."""
        return self._result is not None

    @property
    def result(self) -> CompositeResult | None:
        """The latest composite, if any."""
        return self._result

    @property
    def payload(self) -> bytes | None:
        """Encoded JPEG bytes, if available."""
        return self._result.data if self._result else None

    @property
    def data_uri(self) -> str | None:
        """Encoded image as a data URI, if available."""
        return self._result.data_uri if self._result else None

    def suggested_filename(self) -> str:
        """Filename for a download made right now."""
        return suggested_filename(self._clock(), self._prefix)

    def publish(self, result: CompositeResult) -> None:
        """Replace the held composite wholesale."""
        self._result = result

    def clear(self) -> None:
        """Drop the held composite."""
        self._result = None

    def download(self) -> tuple[str, bytes]:
        """
        Return ``(filename, data)`` for the current composite.

        Raises:
            LookupError: If no composite is available yet.

        """
        if self._result is None:
            msg = "No photostrip is available for download"
            raise LookupError(msg)
        return self.suggested_filename(), self._result.data

    def save(self, directory: Path | str) -> Path:
        """Write the current composite into ``directory`` and return it."""
        filename, data = self.download()
        out_dir = Path(directory)
        out_dir.mkdir(parents=True, exist_ok=True)
        out_path = out_dir / filename
        out_path.write_bytes(data)
        logger.info("Photostrip saved to: %s", out_path)
        return out_path
