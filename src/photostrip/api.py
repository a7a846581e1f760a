"""
One-shot photostrip rendering API shared by embedding apps and tests.

Wraps a throwaway ``PhotostripSession`` so callers that only need a
single strip can skip the request/wait bookkeeping. Failures surface as
the run's own ``PhotostripError`` instead of being contained.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from photostrip.config import PhotostripConfig
from photostrip.config_defaults import DEFAULT_FILTER, DEFAULT_STYLE
from photostrip.errors import PhotostripError
from photostrip.session import PhotostripSession, RunState

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable
    from datetime import datetime
    from pathlib import Path

    from photostrip.export import CompositeResult
    from photostrip.type_defs import FilterName, PhotoSource, StripStyle


@dataclass(slots=True)
class StripRenderOptions:
    """Inputs for a single compositing run."""

    sources: list[PhotoSource]
    filter_name: FilterName = DEFAULT_FILTER
    style: StripStyle = DEFAULT_STYLE
    config: PhotostripConfig = field(
        default_factory=lambda: PhotostripConfig.model_validate({}),
    )
    clock: Callable[[], datetime] | None = None


def _session_for(options: StripRenderOptions) -> PhotostripSession:
    if options.clock is None:
        return PhotostripSession(options.config)
    return PhotostripSession(options.config, clock=options.clock)


async def compose_photostrip(options: StripRenderOptions) -> CompositeResult:
    """
    Render one strip and return the encoded result.

    Raises:
        PhotostripError: The decode, empty-input or encoding error that
            ended the run.

    """
    session = _session_for(options)
    session.request(options.sources, options.filter_name, options.style)
    run = await session.wait()
    if run is None or run.state is not RunState.ENCODED:
        if run is not None and run.error is not None:
            raise run.error
        msg = "photostrip run did not complete"
        raise PhotostripError(msg)
    return run.result  # type: ignore[return-value]


def compose_photostrip_sync(options: StripRenderOptions) -> CompositeResult:
    """Blocking wrapper around :func:`compose_photostrip`."""
    return asyncio.run(compose_photostrip(options))


def save_photostrip(options: StripRenderOptions, directory: Path) -> Path:
    """Render one strip and write it under its suggested download name."""

    async def _render() -> Path:
        session = _session_for(options)
        session.request(options.sources, options.filter_name, options.style)
        run = await session.wait()
        if run is not None and run.error is not None:
            raise run.error
        return session.surface.save(directory)

    return asyncio.run(_render())
