from __future__ import annotations

from typing import Any


class ICRUDError(Exception):
    """Base class for errors raised by icrud itself (never by executors)."""


class InvalidProgramError(ICRUDError, TypeError):
    """Raised when a value that is not a Terminal or Pending program is walked."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(
            f"Expected a Program (Terminal or Pending), got {type(value).__name__}: {value!r}\n"
            "Hint: a run_icrud executor must return the next Program, e.g. `operation.next(outcome)`"
        )


class UnknownOperationError(ICRUDError, TypeError):
    """Raised when a value outside the four operation variants is dispatched."""

    def __init__(self, operation: Any) -> None:
        self.operation = operation
        super().__init__(
            f"Unknown operation {type(operation).__name__}: expected GetById, GetAll, Update or Create"
        )


__all__ = ["ICRUDError", "InvalidProgramError", "UnknownOperationError"]
