"""
Program representation and combinators.

A program is an inert description of a persistence workflow: either a
``Terminal`` holding the final value, or a ``Pending`` operation whose
continuation yields the next program once the operation's outcome is known.
Nothing here performs I/O; drivers in ``icrud.interpreter`` do the walking.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from icrud.errors import InvalidProgramError
from icrud.operations import Create, GetAll, GetById, Operation, Update, map_operation

Id = TypeVar("Id")
Doc = TypeVar("Doc")
A = TypeVar("A")
B = TypeVar("B")
T = TypeVar("T")


@dataclass(frozen=True)
class Terminal(Generic[A]):
    """A finished program."""

    value: A


@dataclass(frozen=True)
class Pending(Generic[Id, Doc, A]):
    """A program waiting on one operation whose continuation returns the next program."""

    operation: Operation[Id, Doc, Program[Id, Doc, A]]


Program = Pending[Id, Doc, A] | Terminal[A]


def is_program(value: object) -> bool:
    return isinstance(value, (Terminal, Pending))


def ensure_program(value: Any) -> Program[Any, Any, Any]:
    if not isinstance(value, (Terminal, Pending)):
        raise InvalidProgramError(value)
    return value


def terminal(value: A) -> Terminal[A]:
    return Terminal(value)


finished = terminal


def pending(operation: Operation[Id, Doc, Program[Id, Doc, A]]) -> Pending[Id, Doc, A]:
    return Pending(operation)


# ---------------------------------------------------------------------------
# Single-step helpers
# ---------------------------------------------------------------------------


def get_by_id_(id: Id, next: Callable[[Doc], Program[Id, Doc, A]]) -> Program[Id, Doc, A]:
    return Pending(GetById(id, next))


def get_by_id(id: Id) -> Program[Id, Doc, Doc]:
    """Program that fetches one document and finishes with it."""
    return get_by_id_(id, terminal)


def get_all_(next: Callable[[list[Doc]], Program[Id, Doc, A]]) -> Program[Id, Doc, A]:
    return Pending(GetAll(next))


def get_all() -> Program[Id, Doc, list[Doc]]:
    """Program that fetches every document and finishes with the list."""
    return get_all_(terminal)


def update_(id: Id, doc: Doc, next: Callable[[None], Program[Id, Doc, A]]) -> Program[Id, Doc, A]:
    return Pending(Update(id, doc, next))


def update(id: Id, doc: Doc) -> Program[Id, Doc, None]:
    """Program that overwrites one document and finishes with ``None``."""
    return update_(id, doc, terminal)


def create_(doc: Doc, next: Callable[[Id], Program[Id, Doc, A]]) -> Program[Id, Doc, A]:
    return Pending(Create(doc, next))


def create(doc: Doc) -> Program[Id, Doc, Id]:
    """Program that inserts a document and finishes with its new identifier."""
    return create_(doc, terminal)


# ---------------------------------------------------------------------------
# Combinators
# ---------------------------------------------------------------------------


def map_program(f: Callable[[A], B], program: Program[Id, Doc, A]) -> Program[Id, Doc, B]:
    """Apply ``f`` to the eventual result of ``program``, keeping its operations."""
    match program:
        case Terminal(value=value):
            return Terminal(f(value))
        case Pending(operation=operation):
            return Pending(map_operation(lambda next_program: map_program(f, next_program), operation))
        case _:
            raise InvalidProgramError(program)


def and_then(
    program: Program[Id, Doc, A], f: Callable[[A], Program[Id, Doc, B]]
) -> Program[Id, Doc, B]:
    """Monadic bind: continue into ``f(result)`` once ``program`` has finished.

    A terminal program is substituted directly (``f`` is called now); a pending
    one gets ``f`` threaded into its continuation and is called by the driver.
    """
    match program:
        case Terminal(value=value):
            return f(value)
        case Pending(operation=operation):
            return Pending(map_operation(lambda next_program: and_then(next_program, f), operation))
        case _:
            raise InvalidProgramError(program)


def pair(
    first: Program[Id, Doc, A], second: Program[Id, Doc, B]
) -> Program[Id, Doc, tuple[A, B]]:
    """Program of both results. Every operation of ``first`` precedes those of ``second``."""
    return and_then(first, lambda a: map_program(lambda b: (a, b), second))


def _collect(acc: tuple[Any, Any] | None) -> list[Any]:
    results: list[Any] = []
    while acc is not None:
        value, acc = acc
        results.append(value)
    results.reverse()
    return results


def _sequence_from(
    programs: Sequence[Program[Id, Doc, A]], index: int, acc: tuple[Any, Any] | None
) -> Program[Id, Doc, list[A]]:
    # Finished elements are folded in place; only a pending one needs a continuation.
    while index < len(programs):
        current = programs[index]
        if not isinstance(current, Terminal):
            return and_then(
                current, lambda value: _sequence_from(programs, index + 1, (value, acc))
            )
        acc = (current.value, acc)
        index += 1
    return Terminal(_collect(acc))


def sequence(programs: Iterable[Program[Id, Doc, A]]) -> Program[Id, Doc, list[A]]:
    """Program of every result, in input order.

    Programs run one after the other in input order, so the executor sees the
    operations of the first program before those of the second. Results are
    accumulated in a cons list threaded through the continuations; finished
    programs are folded in without a continuation at all. The nesting of each
    step stays constant however many programs there are, and a fresh list is
    produced on every run.
    """
    programs = tuple(programs)
    if not programs:
        return Terminal([])
    return _sequence_from(programs, 0, None)


def traverse(
    f: Callable[[T], Program[Id, Doc, A]], items: Iterable[T]
) -> Program[Id, Doc, list[A]]:
    return sequence([f(item) for item in items])


__all__ = [
    "Pending",
    "Program",
    "Terminal",
    "and_then",
    "create",
    "create_",
    "ensure_program",
    "finished",
    "get_all",
    "get_all_",
    "get_by_id",
    "get_by_id_",
    "is_program",
    "map_program",
    "pair",
    "pending",
    "sequence",
    "terminal",
    "traverse",
    "update",
    "update_",
]
