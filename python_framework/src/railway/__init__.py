"""
Railway-Oriented Programming (ROP) Framework for Python.

Explicit, composable, functional error handling — no exceptions in business logic.

    from railway import Result, run

    def lookup(person_id: int) -> Result[Person]:
        return Result.attempt(lambda: repository.get_by_id(person_id))

    url = run(
        [lookup, register, publish],
        10,
        on_success=lambda context: context.url,
        on_failure=lambda error: "",
    )
"""

from railway.result import Result, Success, Failure
from railway.failure import ErrorCode, FailureDescription, error_code_for
from railway.execution import (
    ExecutionContext,
    NoOpExecutionContext,
    LoggingExecutionContext,
    ComposableExecutionContext,
    with_context,
)
from railway.pipeline import (
    AsyncStep,
    Pipeline,
    Step,
    chain,
    chain_async,
    run,
    run_async,
)
from railway.result_failures import ResultFailures
from railway.assertions import ResultAssertions

__all__ = [
    "Result",
    "Success",
    "Failure",
    "ErrorCode",
    "FailureDescription",
    "error_code_for",
    "ExecutionContext",
    "NoOpExecutionContext",
    "LoggingExecutionContext",
    "ComposableExecutionContext",
    "with_context",
    "Step",
    "AsyncStep",
    "Pipeline",
    "chain",
    "chain_async",
    "run",
    "run_async",
    "ResultFailures",
    "ResultAssertions",
]

__version__ = "1.1.0"
