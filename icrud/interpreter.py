"""
Drivers that walk a Program to completion with a caller-supplied executor.

Three executor contracts are supported:

* ``eval_icrud``: the executor receives an operation whose continuation already
  evaluates the rest of the program, and must return the *final* value. The
  executor therefore re-enters the driver through the continuation; recursion
  depth grows with the length of the chain.
* ``run_icrud``: the executor receives a pending operation and returns the
  *next program* (usually ``operation.next(outcome)``). The driver loops, so
  chains of any length run in constant stack.
* ``run_icrud_async``: as ``run_icrud``, but the executor returns an awaitable
  of the next program. Operations are awaited strictly one at a time, in
  program order.

Executor exceptions are never caught: they leave the driver unchanged.
"""

from __future__ import annotations

from collections.abc import Awaitable
from typing import Any, Protocol, TypeVar

from loguru import logger as loguru_logger

from icrud.errors import InvalidProgramError
from icrud.operations import Operation, map_operation
from icrud.program import Pending, Program, Terminal

A = TypeVar("A")
X = TypeVar("X")

logger = loguru_logger.bind(component="interpreter")


class EagerExecutor(Protocol):
    """Resolve an operation and return its continuation's final value.

    The continuation handed over already runs the remainder of the program,
    so calling ``operation.next(outcome)`` completes the whole evaluation.
    """

    def __call__(self, operation: Operation[Any, Any, X]) -> X: ...


class StepExecutor(Protocol):
    """Resolve an operation and return the next program."""

    def __call__(self, operation: Operation[Any, Any, Program[Any, Any, X]]) -> Program[Any, Any, X]: ...


class AsyncStepExecutor(Protocol):
    """Resolve an operation asynchronously and return the next program."""

    def __call__(
        self, operation: Operation[Any, Any, Program[Any, Any, X]]
    ) -> Awaitable[Program[Any, Any, X]]: ...


def _eval(executor: EagerExecutor, program: Program[Any, Any, A]) -> A:
    match program:
        case Terminal(value=value):
            return value
        case Pending(operation=operation):
            logger.debug("eval_icrud step: {!r}", operation)
            return executor(
                map_operation(lambda next_program: _eval(executor, next_program), operation)
            )
        case _:
            raise InvalidProgramError(program)


def eval_icrud(executor: EagerExecutor, program: Program[Any, Any, A]) -> A:
    logger.debug("eval_icrud started")
    value = _eval(executor, program)
    logger.debug("eval_icrud finished")
    return value


def run_icrud(executor: StepExecutor, program: Program[Any, Any, A]) -> A:
    logger.debug("run_icrud started")
    current: Any = program
    steps = 0
    while True:
        match current:
            case Terminal(value=value):
                logger.debug("run_icrud finished after {} step(s)", steps)
                return value
            case Pending(operation=operation):
                logger.debug("run_icrud step {}: {!r}", steps, operation)
                current = executor(operation)
                steps += 1
            case _:
                raise InvalidProgramError(current)


async def run_icrud_async(executor: AsyncStepExecutor, program: Program[Any, Any, A]) -> A:
    logger.debug("run_icrud_async started")
    current: Any = program
    steps = 0
    while True:
        match current:
            case Terminal(value=value):
                logger.debug("run_icrud_async finished after {} step(s)", steps)
                return value
            case Pending(operation=operation):
                logger.debug("run_icrud_async step {}: {!r}", steps, operation)
                current = await executor(operation)
                steps += 1
            case _:
                raise InvalidProgramError(current)


__all__ = [
    "AsyncStepExecutor",
    "EagerExecutor",
    "StepExecutor",
    "eval_icrud",
    "run_icrud",
    "run_icrud_async",
]
