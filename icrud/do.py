"""
The do decorator for icrud.

This module provides the @do decorator that turns a generator function into a
function returning a Program, giving do-notation over ``and_then``:

    >>> @do
    ... def rename(user_id, name):
    ...     user = yield get_by_id(user_id)
    ...     yield update(user_id, {**user, "name": name})
    ...     return user["name"]

Each ``yield`` takes a Program (or a Query) and evaluates to its result once a
driver has resolved it.

REUSABLE PROGRAMS:
Generators are single-use, but a Program may be run any number of times and
by any driver. Every continuation therefore starts a fresh generator and
replays the results received so far before sending the new one. A yielded
``Terminal`` is sent back without building a continuation, so only pending
yields restart the generator. The body of a
@do function must be free of side effects; anything effectful belongs in the
executor.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Generator
from functools import wraps
from typing import Any, ParamSpec, TypeVar

from icrud.program import Program, Terminal, and_then, terminal
from icrud.query import as_program

P = ParamSpec("P")
T = TypeVar("T")

DoGenerator = Generator[Any, Any, T]


def _resume(
    start: Callable[[], DoGenerator[T]], history: tuple[Any, ...]
) -> Program[Any, Any, T]:
    gen = start()
    received = list(history)
    try:
        yielded = next(gen)
        for sent_value in history:
            yielded = gen.send(sent_value)
        program = as_program(yielded)
        # Finished programs are fed straight back into the same generator.
        while isinstance(program, Terminal):
            received.append(program.value)
            program = as_program(gen.send(program.value))
    except StopIteration as stop_exc:
        return terminal(stop_exc.value)
    finally:
        gen.close()
    replay = tuple(received)
    return and_then(program, lambda value: _resume(start, (*replay, value)))


def do(func: Callable[P, DoGenerator[T]]) -> Callable[P, Program[Any, Any, T]]:
    """Decorator that converts a generator function into a Program factory."""
    if not inspect.isgeneratorfunction(func):
        raise TypeError(f"@do expects a generator function, got {func!r}")

    @wraps(func)
    def build(*args: P.args, **kwargs: P.kwargs) -> Program[Any, Any, T]:
        return _resume(lambda: func(*args, **kwargs), ())

    return build


__all__ = ["DoGenerator", "do"]
