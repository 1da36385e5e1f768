"""Single-consumer intent channel.

All intents reach the state store through one asyncio queue drained by one
task, so they are handled strictly one at a time and in arrival order.  An
intent whose handling suspends (the initial catalog load) holds back every
intent queued behind it until its outputs have been emitted.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Awaitable, Callable

from cartbind.exceptions import ChannelClosedError
from cartbind.state.events import Intent


class IntentChannel:
    """Ordered, single-consumer queue in front of an intent handler."""

    def __init__(
        self,
        handler: Callable[[Intent], Awaitable[None]],
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self._handler = handler
        self._logger = logger or logging.getLogger(__name__)
        # ``None`` marks the end of the stream.
        self._queue: asyncio.Queue[Intent | None] = asyncio.Queue()
        self._loop: asyncio.AbstractEventLoop | None = None
        self._task: asyncio.Task[None] | None = None
        self._loop_thread: int | None = None
        self._closed = False

    @property
    def is_running(self) -> bool:
        """Whether the consumer task is alive."""
        return self._task is not None and not self._task.done()

    @property
    def closed(self) -> bool:
        return self._closed

    def start(self) -> None:
        """Start the consumer task on the running loop."""
        if self.is_running:
            return
        if self._closed:
            raise ChannelClosedError("Intent channel already closed")
        self._loop = asyncio.get_running_loop()
        self._loop_thread = threading.get_ident()
        self._task = self._loop.create_task(self._run(), name="cartbind-intent-channel")
        self._logger.debug("Intent channel consumer started")

    def send(self, intent: Intent) -> None:
        """Queue *intent*.  Must be called on the loop thread."""
        if self._closed:
            raise ChannelClosedError(f"Cannot send {intent.kind}: intent channel closed")
        self._queue.put_nowait(intent)

    def send_threadsafe(self, intent: Intent) -> None:
        """Queue *intent* from a thread other than the loop thread."""
        loop = self._loop
        if loop is None:
            raise ChannelClosedError("Intent channel not started")
        if self._closed:
            raise ChannelClosedError(f"Cannot send {intent.kind}: intent channel closed")
        loop.call_soon_threadsafe(self._put_from_thread, intent)

    def submit(self, intent: Intent) -> None:
        """Queue *intent* from any thread."""
        if self._loop_thread is not None and threading.get_ident() != self._loop_thread:
            self.send_threadsafe(intent)
            return
        self.send(intent)

    def _put_from_thread(self, intent: Intent) -> None:
        # Runs on the loop; the channel may have closed since the caller checked.
        if self._closed:
            self._logger.debug("Dropping %s sent after intent channel closed", intent.kind)
            return
        self._queue.put_nowait(intent)

    async def drain(self) -> None:
        """Wait until every queued intent has been handled."""
        await self._queue.join()

    async def aclose(self) -> None:
        """Stop accepting intents, handle what is queued, then stop the consumer."""
        if self._closed:
            return
        self._closed = True
        task = self._task
        if task is None or task.done():
            return
        self._queue.put_nowait(None)
        await task
        self._logger.debug("Intent channel consumer stopped")

    async def _run(self) -> None:
        while True:
            intent = await self._queue.get()
            try:
                if intent is None:
                    return
                await self._handler(intent)
            except Exception:
                self._logger.warning("Intent handling failed kind=%s", getattr(intent, "kind", None), exc_info=True)
            finally:
                self._queue.task_done()
