"""Public package exports for the photostrip compositor."""

from __future__ import annotations

from .api import (
    StripRenderOptions,
    compose_photostrip,
    compose_photostrip_sync,
    save_photostrip,
)
from .errors import (
    EmptyInputError,
    ExportEncodingError,
    ImageDecodeError,
    PhotostripError,
)
from .export import CompositeResult, ExportSurface
from .session import CompositeRun, PhotostripSession, RunState

__all__ = [
    "CompositeResult",
    "CompositeRun",
    "EmptyInputError",
    "ExportEncodingError",
    "ExportSurface",
    "ImageDecodeError",
    "PhotostripError",
    "PhotostripSession",
    "RunState",
    "StripRenderOptions",
    "compose_photostrip",
    "compose_photostrip_sync",
    "save_photostrip",
]
