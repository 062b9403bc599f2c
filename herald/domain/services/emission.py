"""
Emission Service

Architectural Intent:
- Executes one channel's middleware chain for a single publish call
- Works on an immutable snapshot of the middleware list taken at publish time
- Each middleware step receives a single-use Proceed token to continue the chain

Execution Model:
1. The chain starts at step 0 with the published argument tuple
2. A middleware continues by calling proceed(*args), now or at any later point
3. When the step index reaches the snapshot length the emission resolves and
   the completion callback receives the final argument tuple, exactly once
4. A middleware that never calls proceed stalls the emission for good

Async Middleware:
- A middleware may be an ``async def``; its coroutine is scheduled on the
  running event loop and the caller of digest() does not wait for it
- A failing coroutine stalls the emission and is reported to the logger sink
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Optional, Sequence

from herald.domain.ports.logger_port import LoggerPort

logger = logging.getLogger(__name__)

# Strong references to scheduled middleware coroutines; the loop only keeps weak ones.
_pending_tasks: set[asyncio.Task] = set()

Args = tuple[Any, ...]
Middleware = Callable[[Args, "Proceed"], Any]


class Proceed:
    """Single-use continuation handed to one middleware invocation.

    The first call advances the chain; any further call is ignored.
    """

    def __init__(self, emission: Emission, step: int) -> None:
        self._emission = emission
        self._step = step
        self._spent = False

    @property
    def spent(self) -> bool:
        return self._spent

    def __call__(self, *args: Any) -> None:
        if self._spent:
            self._emission.logger.debug(
                "Ignoring repeated proceed() at step %d on channel '%s'",
                self._step,
                self._emission.channel_name,
            )
            return
        self._spent = True
        self._emission._advance(args)


class Emission:
    def __init__(
        self,
        channel_name: str,
        args: Sequence[Any],
        middlewares: Sequence[Middleware],
        sink: Optional[LoggerPort] = None,
    ) -> None:
        self.channel_name = channel_name
        self.logger = sink or logger
        self._middlewares: tuple[Middleware, ...] = tuple(middlewares)
        self._args: Args = tuple(args)
        self._step = 0
        self._on_resolved: Optional[Callable[[Args], None]] = None
        self._resolved = False
        self._digesting = False

    @property
    def args(self) -> Args:
        return self._args

    @property
    def step(self) -> int:
        return self._step

    @property
    def resolved(self) -> bool:
        return self._resolved

    def then(self, callback: Callable[[Args], None]) -> Emission:
        """Register the completion callback invoked with the final arguments."""
        if self._on_resolved is not None:
            raise RuntimeError(
                f"Emission on channel '{self.channel_name}' already has a completion callback"
            )
        self._on_resolved = callback
        return self

    def digest(self) -> None:
        """Start running the middleware chain."""
        self._digest()

    def _advance(self, args: Args) -> None:
        self._args = tuple(args)
        self._step += 1
        # A synchronous proceed() is picked up by the running digest loop
        if not self._digesting:
            self._digest()

    def _digest(self) -> None:
        self._digesting = True
        try:
            while True:
                if self._step >= len(self._middlewares):
                    self._resolve()
                    return

                step = self._step
                middleware = self._middlewares[step]
                result = middleware(self._args, Proceed(self, step))
                if asyncio.iscoroutine(result):
                    self._schedule(middleware, result)
                if self._step == step:
                    return
        finally:
            self._digesting = False

    def _schedule(self, middleware: Middleware, coro) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            coro.close()
            raise
        task = loop.create_task(coro)
        _pending_tasks.add(task)
        task.add_done_callback(lambda t: self._on_task_done(middleware, t))

    def _on_task_done(self, middleware: Middleware, task: asyncio.Task) -> None:
        _pending_tasks.discard(task)
        if task.cancelled():
            self.logger.debug(
                "Middleware %r cancelled on channel '%s'", middleware, self.channel_name
            )
            return
        exc = task.exception()
        if exc is not None:
            self.logger.error(
                "Middleware %r failed on channel '%s': %s",
                middleware,
                self.channel_name,
                exc,
                exc_info=exc,
            )

    def _resolve(self) -> None:
        if self._resolved:
            return
        self._resolved = True
        if self._on_resolved is not None:
            self._on_resolved(self._args)
