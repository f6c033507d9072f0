"""
Fluent facade over the program combinators.

``Query`` wraps one program and exposes the combinators as chained methods:

    >>> from icrud import Query
    >>> q = (
    ...     Query.get_by_id("user:1")
    ...     .map(lambda doc: {**doc, "visits": doc["visits"] + 1})
    ...     .and_then(lambda doc: Query.update("user:1", doc))
    ... )
    >>> q.run(executor(backend))

The verbs ``get_by_id``, ``get_all``, ``update``, ``create`` and ``finished``
work on the class, starting a new query, and on an instance, where they run
after the query and replace its result.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from functools import wraps
from typing import Any, Generic, TypeVar

from icrud import program as _program
from icrud.interpreter import (
    AsyncStepExecutor,
    EagerExecutor,
    StepExecutor,
    eval_icrud,
    run_icrud,
    run_icrud_async,
)
from icrud.program import Program, and_then, ensure_program, map_program, pair, sequence

Id = TypeVar("Id")
Doc = TypeVar("Doc")
A = TypeVar("A")
B = TypeVar("B")


def as_program(value: Any) -> Program[Any, Any, Any]:
    """Unwrap a ``Query`` to its program; programs pass through unchanged."""
    if isinstance(value, Query):
        return value.program
    return ensure_program(value)


class _verb:
    """Build a query from the class, or chain one onto an instance."""

    def __init__(self, build: Callable[..., Program[Any, Any, Any]]) -> None:
        self.build = build
        self.__doc__ = build.__doc__

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name
        self.qualname = f"{owner.__qualname__}.{name}"

    def _named(self, func: Callable[..., Any]) -> Callable[..., Any]:
        func.__name__ = self.name
        func.__qualname__ = self.qualname
        return func

    def __get__(self, instance: Query[Any, Any, Any] | None, owner: type[Query[Any, Any, Any]]):
        build = self.build
        if instance is None:

            @wraps(build)
            def start(*args: Any, **kwargs: Any) -> Query[Any, Any, Any]:
                return owner(build(*args, **kwargs))

            return self._named(start)

        @wraps(build)
        def chain(*args: Any, **kwargs: Any) -> Query[Any, Any, Any]:
            return instance.and_then_(lambda _: build(*args, **kwargs))

        return self._named(chain)


class Query(Generic[Id, Doc, A]):
    """An inert, immutable persistence workflow producing an ``A``."""

    __slots__ = ("_program",)

    def __init__(self, program: Program[Id, Doc, A]) -> None:
        self._program = ensure_program(program)

    @property
    def program(self) -> Program[Id, Doc, A]:
        return self._program

    def __repr__(self) -> str:
        return f"Query({self._program!r})"

    # -- running -----------------------------------------------------------

    def run_eval(self, executor: EagerExecutor) -> A:
        return eval_icrud(executor, self._program)

    def run(self, executor: StepExecutor) -> A:
        return run_icrud(executor, self._program)

    async def run_async(self, executor: AsyncStepExecutor) -> A:
        return await run_icrud_async(executor, self._program)

    # -- combinators -------------------------------------------------------

    def map(self, f: Callable[[A], B]) -> Query[Id, Doc, B]:
        return Query(map_program(f, self._program))

    def zip_(self, other: Program[Id, Doc, B]) -> Query[Id, Doc, tuple[A, B]]:
        return Query(pair(self._program, other))

    def zip(self, other: Query[Id, Doc, B]) -> Query[Id, Doc, tuple[A, B]]:
        return self.zip_(other.program)

    def and_then_(self, f: Callable[[A], Program[Id, Doc, B]]) -> Query[Id, Doc, B]:
        return Query(and_then(self._program, f))

    def and_then(self, f: Callable[[A], Query[Id, Doc, B]]) -> Query[Id, Doc, B]:
        return self.and_then_(lambda a: as_program(f(a)))

    @staticmethod
    def sequence(queries: Iterable[Query[Id, Doc, A]]) -> Query[Id, Doc, list[A]]:
        return Query(sequence([as_program(query) for query in queries]))

    # -- verbs -------------------------------------------------------------

    get_by_id = _verb(_program.get_by_id)
    get_all = _verb(_program.get_all)
    update = _verb(_program.update)
    create = _verb(_program.create)
    finished = _verb(_program.finished)


__all__ = ["Query", "as_program"]
