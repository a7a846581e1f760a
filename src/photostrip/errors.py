"""Exception taxonomy for a compositing run."""

from __future__ import annotations


class PhotostripError(Exception):
    """Base class for failures contained within a single run."""


class ImageDecodeError(PhotostripError):
    """A photo source could not be decoded into an image."""

    def __init__(self, index: int, source: str, reason: str = "") -> None:
        self.index = index
        self.source = source
        self.reason = reason
        msg = f"Could not decode photo {index} ({_preview(source)})"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class EmptyInputError(PhotostripError):
    """A run was requested with zero photo sources."""

    def __init__(self) -> None:
        super().__init__("No photo sources supplied")


class ExportEncodingError(PhotostripError):
    """The rendered surface could not be encoded to the output format."""


_PREVIEW_CHARS = 48


def _preview(source: str) -> str:
    """Shorten long sources such as data URIs for messages."""
    if len(source) <= _PREVIEW_CHARS:
        return source
    return source[:_PREVIEW_CHARS] + "..."
