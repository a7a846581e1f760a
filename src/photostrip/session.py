"""
Run orchestration for the photostrip compositor.

A ``PhotostripSession`` owns one export surface and accepts run requests
for (sources, filter, style) triples. Each request supersedes whatever
run is still in flight: the older run is marked SUPERSEDED, its task is
cancelled if it already started, and should it still produce an image
the result is discarded because its generation number is no longer the
latest. Only the last-requested run may publish.

Per-run state machine::

    IDLE -> LOADING -> LAYING_OUT -> DRAWING -> ENCODED
      \\       \\            \\           \\
       +--------+------------+-----------+--> FAILED | SUPERSEDED
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

from photostrip.config import PhotostripConfig
from photostrip.config_defaults import DEFAULT_FILTER, DEFAULT_STYLE
from photostrip.errors import EmptyInputError, PhotostripError
from photostrip.export import CompositeResult, ExportSurface
from photostrip.filters import filter_expression
from photostrip.image_io import load_images
from photostrip.layout import layout_for_images, layout_label
from photostrip.logging_utils import logger
from photostrip.render import encode_strip, render_strip
from photostrip.styles import resolve_style

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Awaitable, Callable, Sequence

    from photostrip.filters import FilterExpression
    from photostrip.image_io import LoadedImage
    from photostrip.layout import LayoutGeometry
    from photostrip.styles import StripPalette
    from photostrip.type_defs import FilterName, PhotoSource, StripStyle

    Loader = Callable[[Sequence[PhotoSource]], Awaitable[list[LoadedImage]]]


class RunState(Enum):
    """Lifecycle stages of a single compositing run."""

    IDLE = "idle"
    LOADING = "loading"
    LAYING_OUT = "laying-out"
    DRAWING = "drawing"
    ENCODED = "encoded"
    FAILED = "failed"
    SUPERSEDED = "superseded"


_TERMINAL_STATES = frozenset(
    {RunState.ENCODED, RunState.FAILED, RunState.SUPERSEDED},
)


@dataclass(slots=True)
class CompositeRun:
    """Bookkeeping for one end-to-end pipeline execution."""

    generation: int
    sources: tuple[PhotoSource, ...]
    filter_name: FilterName
    style: StripStyle
    state: RunState = RunState.IDLE
    history: list[RunState] = field(
        default_factory=lambda: [RunState.IDLE],
    )
    error: PhotostripError | None = None
    result: CompositeResult | None = None

    @property
    def finished(self) -> bool:
        """True once the run reached a terminal state."""
        return self.state in _TERMINAL_STATES

    def advance(self, state: RunState) -> None:
        """Move to ``state`` and record the transition."""
        self.state = state
        self.history.append(state)

    def fail(self, error: PhotostripError) -> None:
        """Record ``error`` and end the run."""
        self.error = error
        self.advance(RunState.FAILED)


def _local_now() -> datetime:
    return datetime.now().astimezone()


class PhotostripSession:
    """
    Accepts compositing requests and publishes the latest finished strip.

    Must be driven from a running asyncio event loop. Requests never block
    the caller: ``request`` schedules a task and returns it immediately.
    """

    def __init__(
        self,
        config: PhotostripConfig | None = None,
        *,
        clock: Callable[[], datetime] = _local_now,
        loader: Loader = load_images,
    ) -> None:
        self.config = config or PhotostripConfig.model_validate({})
        self._clock = clock
        self._loader = loader
        self.surface = ExportSurface(
            clock=clock,
            filename_prefix=self.config.export.filename_prefix,
        )
        self._generation = 0
        self._task: asyncio.Task[CompositeRun] | None = None
        self._current: CompositeRun | None = None
        self._draw_lock = asyncio.Lock()

    @property
    def generation(self) -> int:
        """Number of the most recently requested run."""
        return self._generation

    @property
    def current_run(self) -> CompositeRun | None:
        """Bookkeeping for the most recent request, if any."""
        return self._current

    @property
    def busy(self) -> bool:
        """True while the latest run is still in flight."""
        return self._task is not None and not self._task.done()

    def request(
        self,
        sources: Sequence[PhotoSource],
        filter_name: FilterName = DEFAULT_FILTER,
        style: StripStyle = DEFAULT_STYLE,
    ) -> asyncio.Task[CompositeRun]:
        """Start a new run, superseding any run still in flight."""
        self._supersede()
        self._generation += 1
        run = CompositeRun(
            generation=self._generation,
            sources=tuple(sources),
            filter_name=filter_name,
            style=style,
        )
        self._current = run
        self._task = asyncio.get_running_loop().create_task(
            self._execute(run),
            name=f"photostrip-run-{run.generation}",
        )
        return self._task

    def retake(self) -> None:
        """Discard the current composite and any pending run."""
        self._supersede()
        self._generation += 1
        self._task = None
        self._current = None
        self.surface.clear()
        logger.info("Retake requested; composite cleared")

    async def wait(self) -> CompositeRun | None:
        """Wait for the most recently requested run to finish."""
        while self._task is not None:
            task = self._task
            run = await task
            if task is self._task:
                return run
        return None

    def _supersede(self) -> None:
        """
        End the in-flight run, if any, as SUPERSEDED.

        A run whose task has not started yet is only marked; ``_execute``
        returns it untouched, so awaiting its task still yields the run.
        A started run is also cancelled at its current await point.
        """
        task, run = self._task, self._current
        if task is None or task.done():
            return
        logger.debug("Superseding run %d", self._generation)
        started = run is None or run.state is not RunState.IDLE
        if run is not None and not run.finished:
            run.advance(RunState.SUPERSEDED)
        if started:
            task.cancel()

    def _is_stale(self, run: CompositeRun) -> bool:
        return run.generation != self._generation

    async def _execute(self, run: CompositeRun) -> CompositeRun:
        if run.finished:
            return run
        try:
            if not run.sources:
                raise EmptyInputError
            run.advance(RunState.LOADING)
            images = await self._loader(run.sources)

            run.advance(RunState.LAYING_OUT)
            geometry = layout_for_images(images, self.config.layout)
            expression = filter_expression(run.filter_name)
            palette = resolve_style(run.style)
            logger.info(
                "Rendering %s strip: %d photo(s), filter=%s, style=%s",
                layout_label(geometry.count),
                geometry.count,
                expression.css(),
                run.style,
            )

            result = await self._draw_exclusive(
                run, images, geometry, expression, palette,
            )
            if result is None or self._is_stale(run):
                logger.info("Discarding result of superseded run %d",
                            run.generation)
                if not run.finished:
                    run.advance(RunState.SUPERSEDED)
                return run

            run.result = result
            self.surface.publish(result)
            run.advance(RunState.ENCODED)
            logger.info("Photostrip ready: %dx%d, %d bytes",
                        result.width, result.height, len(result.data))
        except EmptyInputError as exc:
            logger.warning("Nothing to render: %s", exc)
            run.fail(exc)
        except PhotostripError as exc:
            logger.error("Photostrip generation failed: %s", exc)
            run.fail(exc)
        except asyncio.CancelledError:
            if not self._is_stale(run):
                raise
            if not run.finished:
                run.advance(RunState.SUPERSEDED)
        return run

    async def _draw_exclusive(  # noqa: PLR0913
        self,
        run: CompositeRun,
        images: list[LoadedImage],
        geometry: LayoutGeometry,
        expression: FilterExpression,
        palette: StripPalette,
    ) -> CompositeResult | None:
        """Draw and encode while holding the surface lock."""
        async with self._draw_lock:
            if self._is_stale(run):
                return None
            run.advance(RunState.DRAWING)
            created_at = self._clock()
            job = asyncio.ensure_future(asyncio.to_thread(
                self._draw_and_encode,
                images, geometry, expression, palette, created_at,
            ))
            try:
                data = await asyncio.shield(job)
            except asyncio.CancelledError:
                # the worker thread keeps running; hold the lock until done
                await asyncio.wait([job])
                if not job.cancelled():
                    job.exception()
                raise

        width, height = geometry.canvas_size
        return CompositeResult(
            data=data,
            width=width,
            height=height,
            created_at=created_at,
        )

    def _draw_and_encode(  # noqa: PLR0913
        self,
        images: list[LoadedImage],
        geometry: LayoutGeometry,
        expression: FilterExpression,
        palette: StripPalette,
        created_at: datetime,
    ) -> bytes:
        surface = render_strip(
            images, geometry, expression, palette,
            footer=self.config.footer,
            now=created_at,
        )
        return encode_strip(surface, quality=self.config.export.quality)
