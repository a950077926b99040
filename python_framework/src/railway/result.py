"""
Result monad — the two-track value every pipeline step returns.

A Result[T] is either Success(value: T) or Failure(error: FailureDescription).
Steps return Result instead of raising; .flat_map() connects them and a
Failure short-circuits every later step:

    ┌───────────┐   flat_map    ┌───────────┐   flat_map    ┌──────────┐
    │  lookup   │──Success──────│ register  │──Success──────│ publish  │──→ Result[T]
    │           │               │           │               │          │
    └─────┬─────┘               └─────┬─────┘               └─────┬────┘
          │ Failure                   │ Failure                   │ Failure
          └───────────────────────────┴───────────────────────────┴──→ Result[T]

Once a Failure exists no mapper runs again, so the first error is the one
that reaches the terminal .either() / .match().
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import (
    Any,
    Awaitable,
    Callable,
    Generic,
    List,
    Optional,
    TypeVar,
)

from railway.failure import ErrorCode, FailureDescription

T = TypeVar("T")
U = TypeVar("U")
A = TypeVar("A")
B = TypeVar("B")
C = TypeVar("C")
R = TypeVar("R")


class Result(Generic[T]):
    """
    Two possible states:
      - Success(value: T)
      - Failure(error: FailureDescription)

    All transformations short-circuit on failure, so you only write
    the success path and errors propagate automatically.

    Usage:
        >>> result = Result.success(42).map(lambda x: x * 2)
        >>> result.value()
        84

        >>> result = Result.failure(ErrorCode.VALIDATION_ERROR, "bad input")
        >>> result.map(lambda x: x * 2).is_failure()
        True
    """

    # ──────────────────────── Introspection ────────────────────────

    def is_success(self) -> bool:
        return isinstance(self, Success)

    def is_failure(self) -> bool:
        return isinstance(self, Failure)

    def value(self) -> T:
        """
        Extract the success value. Raises ValueError if called on a Failure.

        Prefer .either() or match/case for safe access.
        """
        match self:
            case Success(v):
                return v
            case Failure(err):
                raise ValueError(f"Cannot get value from a Failure: {err.message}")
        raise TypeError("unreachable")  # pragma: no cover

    def error(self) -> FailureDescription:
        """Extract the failure description. Raises ValueError if called on a Success."""
        match self:
            case Failure(err):
                return err
            case Success(v):
                raise ValueError(f"Cannot get error from a Success: {v}")
        raise TypeError("unreachable")  # pragma: no cover

    # ──────────────────────── Core Transformations ────────────────────────

    def either(
        self,
        on_success: Callable[[T], R],
        on_failure: Callable[[FailureDescription], R],
    ) -> R:
        """
        Apply exactly one of two functions depending on the state.

        This is the terminal consumer of a pipeline:

            result.either(
                on_success=lambda ctx: ctx.url,
                on_failure=lambda err: "",
            )
        """
        match self:
            case Success(v):
                return on_success(v)
            case Failure(err):
                return on_failure(err)
        raise TypeError("unreachable")  # pragma: no cover

    def match(
        self,
        on_success: Callable[[T], R],
        on_failure: Callable[[FailureDescription], R],
    ) -> R:
        """Alias of either()."""
        return self.either(on_success, on_failure)

    def map(self, mapper: Callable[[T], U]) -> Result[U]:
        """
        Transform the success value. Short-circuits on failure.

            Result.success(5).map(lambda x: x * 2)  # → Success(10)
            Result.failure(...).map(lambda x: x * 2)  # → same Failure
        """
        match self:
            case Success(v):
                return Success(mapper(v))
            case Failure(err):
                return Failure(err)
        raise TypeError("unreachable")  # pragma: no cover

    def map_failure(
        self, mapper: Callable[[FailureDescription], FailureDescription]
    ) -> Result[T]:
        """Transform the failure description. Passes through success unchanged."""
        match self:
            case Success(_):
                return self
            case Failure(err):
                return Failure(mapper(err))
        raise TypeError("unreachable")  # pragma: no cover

    def flat_map(self, mapper: Callable[[T], Result[U]]) -> Result[U]:
        """
        Chain a Result-returning function (monadic bind). Short-circuits on failure.

            def validate(x: int) -> Result[int]:
                if x > 0: return Result.success(x)
                return Result.failure(ErrorCode.VALIDATION_ERROR, "Must be positive")

            Result.success(5).flat_map(validate)   # → Success(5)
            Result.success(-1).flat_map(validate)  # → Failure(...)
        """
        match self:
            case Success(v):
                return mapper(v)
            case Failure(err):
                return Failure(err)
        raise TypeError("unreachable")  # pragma: no cover

    def ensure(
        self,
        predicate: Callable[[T], bool],
        error: FailureDescription | ErrorCode,
        message: str = "",
    ) -> Result[T]:
        """
        Validate the success value against a condition.

            Result.success(person).ensure(
                lambda p: p.email,
                ErrorCode.VALIDATION_ERROR, "Person has no email"
            )
        """
        if isinstance(error, ErrorCode):
            error = FailureDescription(code=error, message=message)

        return self.flat_map(
            lambda v: Result.success(v) if predicate(v) else Result.failure_from(error)
        )

    # ──────────────────────── Side Effects ────────────────────────

    def peek(self, action: Callable[[T], Any]) -> Result[T]:
        """Run a side effect on the success value without altering the Result."""
        match self:
            case Success(v):
                action(v)
        return self

    def peek_failure(self, action: Callable[[FailureDescription], Any]) -> Result[T]:
        match self:
            case Failure(err):
                action(err)
        return self

    # ──────────────────────── Recovery ────────────────────────

    def recover(self, recovery_fn: Callable[[FailureDescription], T]) -> Result[T]:
        match self:
            case Success(_):
                return self
            case Failure(err):
                return Success(recovery_fn(err))
        raise TypeError("unreachable")  # pragma: no cover

    def get_or_else(self, default: T) -> T:
        match self:
            case Success(v):
                return v
            case _:
                return default

    def get_or_else_get(self, fallback: Callable[[FailureDescription], T]) -> T:
        return self.either(lambda v: v, fallback)

    # ──────────────────────── Execution Context ────────────────────────

    def within(self, execution_context: Any) -> Result[T]:
        """
        Hand this Result to an execution context (logging, timing, ...).

            result = chain(steps, person_id).within(LoggingExecutionContext(operation="Register"))
        """
        return execution_context.execute(lambda: self)

    # ──────────────────────── Static Factories ────────────────────────

    @staticmethod
    def success(value: T) -> Result[T]:
        return Success(value)

    @staticmethod
    def failure_from(error: FailureDescription) -> Result[T]:
        return Failure(error)

    @staticmethod
    def failure(
        code: ErrorCode,
        message: str,
        exception: Optional[BaseException] = None,
    ) -> Result[T]:
        """
        Create a failed Result with error code, message, and optional exception.

            Result.failure(ErrorCode.NOT_FOUND, "Person not found")
            Result.failure(ErrorCode.EXTERNAL_SERVICE_ERROR, "Tweet rejected", ex)
        """
        return Failure(FailureDescription(code=code, message=message, exception=exception))

    # ──────────────────────── Fallible Computations ────────────────────────

    @staticmethod
    def from_computation(
        computation: Callable[[], T],
        error_code: ErrorCode,
        error_message: str,
    ) -> Result[T]:
        """
        Run a computation that may raise, with a fixed code and message on failure.

            return Result.from_computation(
                lambda: repo.get_by_id(person_id),
                ErrorCode.NOT_FOUND,
                "Failed to find person",
            )
        """
        try:
            return Result.success(computation())
        except Exception as e:
            return Result.failure(error_code, error_message, e)

    @staticmethod
    def attempt(
        computation: Callable[[], T],
        error_code: Optional[ErrorCode] = None,
        error_message: Optional[str] = None,
    ) -> Result[T]:
        """
        Run a computation that may raise and capture the exception as a Failure.

        Unlike from_computation, the exception text is kept in the failure
        message and the code is derived from the exception type unless given:

            Result.attempt(lambda: network.register(email, name))
            Result.attempt(lambda: int(raw), error_message="Bad person id")

        Success cannot hold None, so a computation that returns None settles
        as Failure(VALIDATION_ERROR, "... returned None") with no exception.
        """
        try:
            value = computation()
        except Exception as e:
            return Failure(FailureDescription.from_exception(e, error_message, error_code))
        return _settled(value, error_message)

    @staticmethod
    async def attempt_async(
        computation: Callable[[], Awaitable[T]],
        error_code: Optional[ErrorCode] = None,
        error_message: Optional[str] = None,
    ) -> Result[T]:
        """
        Await a coroutine function that may raise and capture the exception.

        Cancellation of the awaited operation becomes Failure(CANCELLED_ERROR)
        carrying the CancelledError, so it settles like any other failure.
        A None result is refused the same way as in attempt().

            result = await Result.attempt_async(lambda: network.tweet(token, message))
        """
        try:
            value = await computation()
        except asyncio.CancelledError as e:
            return Failure(FailureDescription.from_exception(e, error_message or "Operation cancelled"))
        except Exception as e:
            return Failure(FailureDescription.from_exception(e, error_message, error_code))
        return _settled(value, error_message)

    @staticmethod
    def from_optional(
        value: Optional[T],
        error_message: str,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
    ) -> Result[T]:
        """
        Create a Result from an Optional/None value.

            Result.from_optional(person.email, "Person has no email")
        """
        if value is not None:
            return Result.success(value)
        return Result.failure(error_code, error_message)

    @staticmethod
    def combine(
        ra: Result[A],
        rb: Result[B],
        combiner: Callable[[A, B], R],
    ) -> Result[R]:
        """Combine two Results. Both must succeed for the combination to succeed."""
        return ra.flat_map(lambda a: rb.map(lambda b: combiner(a, b)))

    @staticmethod
    def combine3(
        ra: Result[A],
        rb: Result[B],
        rc: Result[C],
        combiner: Callable[[A, B, C], R],
    ) -> Result[R]:
        return ra.flat_map(lambda a: rb.flat_map(lambda b: rc.map(lambda c: combiner(a, b, c))))

    @staticmethod
    def all_of(results: List[Result[T]]) -> Result[List[T]]:
        """
        Collect a list of Results into a Result of list.
        Returns the first failure encountered, or Success with all values.
        """
        values: list[T] = []
        for r in results:
            match r:
                case Success(v):
                    values.append(v)
                case Failure(err):
                    return Failure(err)
        return Success(values)

    # ──────────────────────── Async Support ────────────────────────

    async def map_async(self, mapper: Callable[[T], Awaitable[U]]) -> Result[U]:
        """
        Async map — apply an async function to the success value.

            result = await Result.success(person_id).map_async(repository.get_by_id)
        """
        match self:
            case Success(v):
                return await Result.attempt_async(
                    lambda: mapper(v),
                    ErrorCode.EXTERNAL_SERVICE_ERROR,
                    "Async operation failed",
                )
            case Failure(err):
                return Failure(err)
        raise TypeError("unreachable")  # pragma: no cover

    async def flat_map_async(self, mapper: Callable[[T], Awaitable[Result[U]]]) -> Result[U]:
        """
        Async flat_map — chain an async Result-returning function.

            result = await Result.success(context).flat_map_async(publish_async)
        """
        match self:
            case Success(v):
                try:
                    return await mapper(v)
                except asyncio.CancelledError as e:
                    return Failure(FailureDescription.from_exception(e, "Async operation cancelled"))
                except Exception as e:
                    return Failure(
                        FailureDescription(ErrorCode.EXTERNAL_SERVICE_ERROR, "Async operation failed", e)
                    )
            case Failure(err):
                return Failure(err)
        raise TypeError("unreachable")  # pragma: no cover

    # ──────────────────────── Dunder methods ────────────────────────

    def __bool__(self) -> bool:
        """`if result: ...` succeeds only on Success."""
        return self.is_success()

    def __repr__(self) -> str:
        match self:
            case Success(v):
                return f"Success({v!r})"
            case Failure(err):
                return f"Failure({err.code.value}: {err.message!r})"
        raise TypeError("unreachable")  # pragma: no cover

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Result):
            return NotImplemented
        match (self, other):
            case (Success(a), Success(b)):
                return a == b
            case (Failure(a), Failure(b)):
                return a.code == b.code and a.message == b.message
            case _:
                return False


@dataclass(frozen=True, slots=True)
class Success(Result[T]):
    """The success track — wraps a value of type T."""

    __match_args__ = ("_value",)

    _value: T

    def __init__(self, value: T) -> None:
        if value is None:
            raise TypeError("Success value must not be None")
        object.__setattr__(self, "_value", value)

    def __repr__(self) -> str:
        return f"Success({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Success):
            return self._value == other._value
        if isinstance(other, Failure):
            return False
        return NotImplemented

    def __hash__(self) -> int:
        return hash(("Success", self._value))


@dataclass(frozen=True, slots=True)
class Failure(Result[T]):
    """The failure track — wraps a FailureDescription."""

    __match_args__ = ("_error",)

    _error: FailureDescription

    def __init__(self, error: FailureDescription) -> None:
        if error is None:
            raise TypeError("Failure error must not be None")
        object.__setattr__(self, "_error", error)

    def __repr__(self) -> str:
        return f"Failure({self._error.code.value}: {self._error.message!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Failure):
            return self._error.code == other._error.code and self._error.message == other._error.message
        if isinstance(other, Success):
            return False
        return NotImplemented

    def __hash__(self) -> int:
        return hash(("Failure", self._error.code, self._error.message))


def _settled(value: Any, error_message: Optional[str]) -> Result[Any]:
    """Wrap an attempt() outcome; None cannot be a Success payload."""
    if value is None:
        detail = "Computation returned None"
        return Failure(
            FailureDescription(
                code=ErrorCode.VALIDATION_ERROR,
                message=f"{error_message}: {detail}" if error_message else detail,
            )
        )
    return Success(value)
