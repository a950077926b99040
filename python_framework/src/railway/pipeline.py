"""
Pipeline composer — fold an ordered list of fallible steps over a value.

A step maps the current value (usually an immutable context record) to a
Result holding the next value. The composer feeds each step the value the
previous one produced, stops at the first Failure, and never lets an
exception raised inside a step escape: it is captured at the step boundary
and becomes the Failure the pipeline settles with.

    chain([lookup, register, authenticate], person_id)
      → Success(context) | Failure(first error)

    run(steps, person_id,
        on_success=lambda ctx: ctx.url,
        on_failure=lambda err: "")

The async variants await one step at a time. Steps may be coroutine
functions or plain functions; cancellation of an awaited step settles the
pipeline as Failure(CANCELLED_ERROR).
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from railway.failure import ErrorCode, FailureDescription
from railway.result import Failure, Result

T = TypeVar("T")
R = TypeVar("R")

type Step = Callable[[Any], Result[Any]]
type AsyncStep = Callable[[Any], Awaitable[Result[Any]] | Result[Any]]

logger = logging.getLogger("railway.pipeline")


def step_name(step: Callable[..., Any]) -> str:
    """Readable name of a step, seeing through functools.partial."""
    inner = getattr(step, "func", step)
    return getattr(inner, "__qualname__", None) or getattr(inner, "__name__", None) or repr(inner)


def _settle_step(step: Callable[..., Any], outcome: object) -> Result[Any]:
    if isinstance(outcome, Result):
        return outcome
    return Failure(
        FailureDescription(
            ErrorCode.TECHNICAL_ERROR,
            f"Step {step_name(step)} returned {type(outcome).__name__} instead of a Result",
        )
    )


def _raised(step: Callable[..., Any], exception: BaseException) -> Result[Any]:
    return Failure(FailureDescription.from_exception(exception, f"Step {step_name(step)} raised"))


def _unseeded() -> Result[Any]:
    return Failure(FailureDescription(ErrorCode.VALIDATION_ERROR, "Pipeline seed must not be None"))


def _log_short_circuit(index: int, steps: Sequence[Callable[..., Any]], error: FailureDescription) -> None:
    skipped = len(steps) - index - 1
    logger.debug(
        "Step %s failed with %s, skipping %d remaining step(s)",
        step_name(steps[index]),
        error.code.value,
        skipped,
    )


# ──────────────────────── Synchronous ────────────────────────


def chain(steps: Iterable[Step], initial: Any) -> Result[Any]:
    """
    Run steps left to right, short-circuiting on the first Failure.

    An empty sequence returns Success(initial); a None seed settles as
    Failure(VALIDATION_ERROR) without running any step. A step that raises
    or returns a non-Result settles the pipeline as Failure; later steps
    never run.
    """
    if initial is None:
        return _unseeded()
    steps = list(steps)
    value = initial
    for index, step in enumerate(steps):
        try:
            result = _settle_step(step, step(value))
        except Exception as e:
            result = _raised(step, e)
        if result.is_failure():
            _log_short_circuit(index, steps, result.error())
            return result
        value = result.value()
    return Result.success(value)


def run(
    steps: Iterable[Step],
    initial: Any,
    on_success: Callable[[Any], R],
    on_failure: Callable[[FailureDescription], R],
) -> R:
    """Chain the steps, then hand the settled Result to exactly one continuation."""
    return chain(steps, initial).either(on_success, on_failure)


# ──────────────────────── Asynchronous ────────────────────────


async def chain_async(steps: Iterable[AsyncStep], initial: Any) -> Result[Any]:
    """
    Await steps one at a time, short-circuiting on the first Failure.

    Step n+1 is not invoked until step n has completed. Cancellation of an
    awaited step is captured as Failure(CANCELLED_ERROR) like any other fault.
    A None seed is refused as in chain().
    """
    if initial is None:
        return _unseeded()
    steps = list(steps)
    value = initial
    for index, step in enumerate(steps):
        try:
            outcome = step(value)
            if inspect.isawaitable(outcome):
                outcome = await outcome
            result = _settle_step(step, outcome)
        except asyncio.CancelledError as e:
            result = Failure(FailureDescription.from_exception(e, f"Step {step_name(step)} cancelled"))
        except Exception as e:
            result = _raised(step, e)
        if result.is_failure():
            _log_short_circuit(index, steps, result.error())
            return result
        value = result.value()
    return Result.success(value)


async def run_async(
    steps: Iterable[AsyncStep],
    initial: Any,
    on_success: Callable[[Any], R],
    on_failure: Callable[[FailureDescription], R],
) -> R:
    result = await chain_async(steps, initial)
    return result.either(on_success, on_failure)


# ──────────────────────── Builder ────────────────────────


@dataclass(frozen=True, slots=True)
class Pipeline(Generic[T]):
    """
    Immutable step list for callers that assemble a pipeline incrementally.

        pipeline = Pipeline.of(lookup).then(register).then(publish)
        url = pipeline.run(person_id, lambda ctx: ctx.url, lambda err: "")

    then() returns a new Pipeline; the original is left untouched.
    """

    steps: tuple[Callable[..., Any], ...] = ()

    @staticmethod
    def of(*steps: Callable[..., Any]) -> Pipeline[Any]:
        return Pipeline(tuple(steps))

    def then(self, step: Callable[..., Any]) -> Pipeline[T]:
        return Pipeline((*self.steps, step))

    def __len__(self) -> int:
        return len(self.steps)

    def chain(self, initial: Any) -> Result[T]:
        return chain(self.steps, initial)

    def run(
        self,
        initial: Any,
        on_success: Callable[[T], R],
        on_failure: Callable[[FailureDescription], R],
    ) -> R:
        return run(self.steps, initial, on_success, on_failure)

    async def chain_async(self, initial: Any) -> Result[T]:
        return await chain_async(self.steps, initial)

    async def run_async(
        self,
        initial: Any,
        on_success: Callable[[T], R],
        on_failure: Callable[[FailureDescription], R],
    ) -> R:
        return await run_async(self.steps, initial, on_success, on_failure)
