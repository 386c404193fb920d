"""Rotating status messages shown while a generation call is in flight.

Purely advisory: the ticker never touches workflow state.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
import logging

logger = logging.getLogger(__name__)

PROCESSING_MESSAGES: tuple[str, ...] = (
    "Analyzing player pose...",
    "Detecting original jersey...",
    "Mapping new jersey texture...",
    "Applying realistic folds and shadows...",
    "Blending colors seamlessly...",
    "Preserving background details...",
    "Finalizing the swap...",
    "Analyzing new background...",
    "Matching lighting and perspective...",
    "Casting realistic shadows...",
    "Compositing final image...",
)

DEFAULT_INTERVAL_S = 2.5


def message_at(tick: int, messages: Sequence[str] = PROCESSING_MESSAGES) -> str:
    """Message shown at a given tick (0 = first message), cycling."""
    return messages[tick % len(messages)]


class StatusTicker:
    """Cycles through status messages on a fixed interval.

    The first message is emitted immediately on start(); each following
    message after interval_s seconds, wrapping around at the end.

    Args:
        on_message: Callback receiving each message.
        messages: Ordered messages to cycle through.
        interval_s: Seconds between messages.
    """

    def __init__(
        self,
        on_message: Callable[[str], None],
        *,
        messages: Sequence[str] = PROCESSING_MESSAGES,
        interval_s: float = DEFAULT_INTERVAL_S,
    ) -> None:
        if not messages:
            raise ValueError("messages must not be empty")
        if interval_s <= 0:
            raise ValueError("interval_s must be positive")
        self._on_message = on_message
        self._messages = tuple(messages)
        self._interval_s = interval_s
        self._task: asyncio.Task[None] | None = None
        self._current: str | None = None

    @property
    def current(self) -> str | None:
        """Most recently emitted message (None before start)."""
        return self._current

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def _emit(self, tick: int) -> None:
        self._current = message_at(tick, self._messages)
        self._on_message(self._current)

    async def _run(self) -> None:
        tick = 1
        while True:
            await asyncio.sleep(self._interval_s)
            try:
                self._emit(tick)
            except Exception:
                logger.exception("Status callback failed")
            tick += 1

    def start(self) -> None:
        """Emit the first message and schedule the rest.

        Must be called from a running event loop. No-op if already running.
        """
        if self.running:
            return
        self._emit(0)
        self._task = asyncio.get_running_loop().create_task(self._run())

    def stop(self) -> None:
        """Stop cycling. Safe to call when not running."""
        if self._task is not None:
            self._task.cancel()
            self._task = None
