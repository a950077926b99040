"""
Execution contexts — wrap a Result-returning computation with HOW it runs.

Steps and pipelines describe WHAT happens and return Result[T]; an
execution context decides what surrounds a run (timing, logging, ...)
without the steps knowing about it:

    result = chain(steps, person_id).within(LoggingExecutionContext(operation="RegisterPerson"))

    @with_context(LoggingExecutionContext(operation="RegisterPerson"))
    def handle(person_id: int) -> Result[RegistrationContext]:
        return chain(steps, person_id)

Every context offers execute() for synchronous computations and
execute_async() for coroutine functions returning a Result.
"""

from __future__ import annotations

import asyncio
import functools
import inspect
import logging
import time
from typing import Any, Awaitable, Callable, Protocol, TypeVar, runtime_checkable

from railway.failure import ErrorCode, FailureDescription
from railway.result import Failure, Result

T = TypeVar("T")
logger = logging.getLogger("railway.execution")


# ──────────────────────── Protocol (Interface) ────────────────────────


@runtime_checkable
class ExecutionContext(Protocol):
    """
    Anything with execute(computation) is an execution context;
    no explicit inheritance needed.
    """

    def execute(self, computation: Callable[[], Result[T]]) -> Result[T]:
        """Execute a Result-returning computation within this context."""
        ...

    async def execute_async(self, computation: Callable[[], Awaitable[Result[T]]]) -> Result[T]:
        """Await a Result-returning coroutine function within this context."""
        ...


# ──────────────────────── NoOp (Testing) ────────────────────────


class NoOpExecutionContext:
    """
    Passthrough execution context — runs computation without any wrapper.

        service = RegistrationService(..., execution_context=NoOpExecutionContext())
    """

    def execute(self, computation: Callable[[], Result[T]]) -> Result[T]:
        return computation()

    async def execute_async(self, computation: Callable[[], Awaitable[Result[T]]]) -> Result[T]:
        return await computation()


# ──────────────────────── Logging ────────────────────────


class LoggingExecutionContext:
    """
    Execution context that logs entry, exit, duration, and result state.

    Wraps another context (decorator pattern). An exception escaping the
    inner context is logged and turned into Failure(TECHNICAL_ERROR).

        ctx = LoggingExecutionContext(operation="RegisterPerson")
    """

    def __init__(
        self,
        inner: ExecutionContext | None = None,
        operation: str = "unknown",
        log_level: int = logging.INFO,
    ) -> None:
        self._inner = inner or NoOpExecutionContext()
        self._operation = operation
        self._log_level = log_level

    def execute(self, computation: Callable[[], Result[T]]) -> Result[T]:
        logger.log(self._log_level, "[%s] Starting execution", self._operation)
        start = time.monotonic()

        try:
            result = self._inner.execute(computation)
        except Exception as e:
            return self._escaped(e, time.monotonic() - start)

        self._completed(result, time.monotonic() - start)
        return result

    async def execute_async(self, computation: Callable[[], Awaitable[Result[T]]]) -> Result[T]:
        logger.log(self._log_level, "[%s] Starting async execution", self._operation)
        start = time.monotonic()

        try:
            result = await self._inner.execute_async(computation)
        except asyncio.CancelledError as e:
            elapsed = time.monotonic() - start
            logger.warning("[%s] Execution cancelled after %.3fs", self._operation, elapsed)
            return Failure(FailureDescription.from_exception(e, "Execution cancelled"))
        except Exception as e:
            return self._escaped(e, time.monotonic() - start)

        self._completed(result, time.monotonic() - start)
        return result

    def _escaped(self, error: Exception, elapsed: float) -> Result[Any]:
        logger.error(
            "[%s] Execution failed after %.3fs: %s",
            self._operation,
            elapsed,
            error,
        )
        return Failure(
            FailureDescription(
                ErrorCode.TECHNICAL_ERROR,
                f"Execution failed: {error}",
                error,
            )
        )

    def _completed(self, result: Result[Any], elapsed: float) -> None:
        state = "SUCCESS" if result.is_success() else "FAILURE"
        logger.log(
            self._log_level,
            "[%s] Completed in %.3fs — %s",
            self._operation,
            elapsed,
            state,
        )


# ──────────────────────── Composable ────────────────────────


class ComposableExecutionContext:
    """
    Compose multiple execution contexts into a single one.

    The first context is the outermost:

        composed = ComposableExecutionContext(
            LoggingExecutionContext(operation="RegisterPerson"),
            TimingContext(),
        )
        # Logging wraps Timing wraps computation
    """

    def __init__(self, *contexts: ExecutionContext) -> None:
        if not contexts:
            raise ValueError("At least one execution context is required")
        self._contexts = list(contexts)

    def execute(self, computation: Callable[[], Result[T]]) -> Result[T]:
        wrapped = computation
        for ctx in reversed(self._contexts):
            prev = wrapped
            wrapped = lambda _ctx=ctx, _prev=prev: _ctx.execute(_prev)
        return wrapped()

    async def execute_async(self, computation: Callable[[], Awaitable[Result[T]]]) -> Result[T]:
        wrapped = computation
        for ctx in reversed(self._contexts):
            prev = wrapped
            wrapped = lambda _ctx=ctx, _prev=prev: _ctx.execute_async(_prev)
        return await wrapped()


# ──────────────────────── Decorator Helper ────────────────────────


def with_context(ctx: ExecutionContext) -> Callable:
    """
    Decorator running a Result-returning function inside an execution context.

    Coroutine functions are routed through execute_async():

        @with_context(LoggingExecutionContext(operation="RegisterPerson"))
        async def handle(person_id: int) -> Result[RegistrationContext]:
            return await chain_async(steps, person_id)
    """

    def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
        if inspect.iscoroutinefunction(fn):
            @functools.wraps(fn)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Result[Any]:
                return await ctx.execute_async(lambda: fn(*args, **kwargs))
            return async_wrapper

        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Result[Any]:
            return ctx.execute(lambda: fn(*args, **kwargs))
        return wrapper
    return decorator
