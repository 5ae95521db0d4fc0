"""Debounced y-scale transitions.

The first y-scale a chart receives is applied right away. Later changes are
applied only after ``delay_s`` without a newer change, so a burst of page moves
settles into a single rescale.
"""

from __future__ import annotations

import asyncio
from typing import Callable, Optional

from measurecharts.utils.logging import get_logger

logger = get_logger(__name__)

YScale = tuple[float, float]
ApplyScale = Callable[[YScale], None]


class ScaleTransition:
    """Applies y-scale changes through a cancellable delayed task."""

    def __init__(self, apply: ApplyScale, delay_s: float = 0.2) -> None:
        if delay_s < 0:
            raise ValueError(f"delay_s must be >= 0, got {delay_s}")
        self._apply = apply
        self.delay_s = delay_s
        self._initialized = False
        self._pending: Optional[YScale] = None
        self._task: Optional[asyncio.Task[None]] = None

    @property
    def pending(self) -> Optional[YScale]:
        """Scale waiting to be applied, if any."""
        return self._pending

    def request(self, scale: YScale) -> None:
        """Apply scale now (first request) or after the settle delay."""
        if not self._initialized:
            self._initialized = True
            self._apply_now(scale)
            return

        self._cancel_task()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # outside an event loop there is nothing to debounce against
            self._apply_now(scale)
            return

        self._pending = scale

        async def _apply_later() -> None:
            try:
                await asyncio.sleep(self.delay_s)
            except asyncio.CancelledError:
                return
            self._task = None
            if self._pending is not None:
                target = self._pending
                self._pending = None
                self._apply_now(target)

        self._task = loop.create_task(_apply_later())

    def cancel(self) -> None:
        """Drop a scheduled change without applying it."""
        self._cancel_task()
        self._pending = None

    def reset(self) -> None:
        """Cancel pending work; the next request applies immediately again."""
        self.cancel()
        self._initialized = False

    def _cancel_task(self) -> None:
        t = self._task
        self._task = None
        if t is not None and not t.done():
            t.cancel()

    def _apply_now(self, scale: YScale) -> None:
        logger.debug("Applying y scale %s", scale)
        self._apply(scale)
