"""Cancellable frame loop driving a particle system."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, TypeAlias

from folioforge.particles.render import render_frame

if TYPE_CHECKING:
    from PIL import Image

    from folioforge.models.particles import ParticleConfig
    from folioforge.particles.engine import ParticleSystem

logger = logging.getLogger(__name__)

# Receives each rendered frame; may be sync or async.
FrameSink: TypeAlias = Callable[["Image.Image"], Awaitable[None] | None]


class FrameLoop:
    """Repeating update+draw task with an explicit stop token.

    ``start`` schedules the task on the running event loop, ``stop`` cancels
    it and waits for it to finish.  Reconfiguring or resizing in a way that
    reseeds the system restarts the loop with the fresh batch.
    """

    def __init__(
        self,
        system: ParticleSystem,
        sink: FrameSink | None = None,
        *,
        fps: int = 30,
        background: str | None = None,
    ) -> None:
        self.system = system
        self.sink = sink
        self.fps = fps
        self.background = background
        self._task: asyncio.Task[None] | None = None
        self._stop = asyncio.Event()

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> bool:
        """Begin ticking; returns ``False`` if the system cannot run."""
        if self.running:
            return True
        if not self.system.start():
            return False
        self._stop = asyncio.Event()
        self._task = asyncio.get_running_loop().create_task(self._run())
        return True

    async def stop(self) -> None:
        """Cancel the task (if any) and mark the system stopped."""
        self._stop.set()
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        elif task is not None and not task.cancelled() and task.exception() is not None:
            logger.error("Frame loop failed: %s", task.exception())
        self.system.stop()

    async def restart(self) -> bool:
        await self.stop()
        return self.start()

    async def configure(self, config: ParticleConfig) -> None:
        """Apply a new config, restarting or halting the loop as needed."""
        was_running = self.running
        reseeded = self.system.configure(config)
        if not config.enabled:
            await self.stop()
        elif reseeded and was_running:
            await self.restart()
        elif not was_running:
            self.start()

    async def resize(self, width: float, height: float) -> None:
        was_running = self.running
        if self.system.resize(width, height) and was_running:
            await self.restart()

    async def tick(self) -> Image.Image:
        """Run a single update+draw step and hand the frame to the sink."""
        self.system.step()
        frame = render_frame(self.system, background=self.background)
        if self.sink is not None:
            result = self.sink(frame)
            if asyncio.iscoroutine(result):
                await result
        return frame

    async def _run(self) -> None:
        interval = 1.0 / self.fps
        logger.debug("Frame loop started at %d fps", self.fps)
        while not self._stop.is_set():
            await self.tick()
            await asyncio.sleep(interval)
        logger.debug("Frame loop stopped after %d frames", self.system.frame)
