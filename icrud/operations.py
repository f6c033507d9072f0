"""
Operation variants for the icrud algebra.

An operation is one primitive unit of persistence work paired with a
continuation. The four variants are closed: every function that dispatches on
an operation matches all four and raises ``UnknownOperationError`` otherwise.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from icrud.errors import UnknownOperationError

Id = TypeVar("Id")
Doc = TypeVar("Doc")
R = TypeVar("R")
S = TypeVar("S")


@dataclass(frozen=True)
class GetById(Generic[Id, Doc, R]):
    """Fetch the document stored under ``id``."""

    id: Id
    next: Callable[[Doc], R] = field(repr=False)


@dataclass(frozen=True)
class GetAll(Generic[Id, Doc, R]):
    """Fetch every stored document."""

    next: Callable[[list[Doc]], R] = field(repr=False)


@dataclass(frozen=True)
class Update(Generic[Id, Doc, R]):
    """Overwrite the document stored under ``id``. The continuation receives ``None``."""

    id: Id
    doc: Doc
    next: Callable[[None], R] = field(repr=False)


@dataclass(frozen=True)
class Create(Generic[Id, Doc, R]):
    """Insert ``doc``. The continuation receives the identifier assigned to it."""

    doc: Doc
    next: Callable[[Id], R] = field(repr=False)


Operation = GetById[Id, Doc, R] | GetAll[Id, Doc, R] | Update[Id, Doc, R] | Create[Id, Doc, R]


def map_operation(f: Callable[[R], S], operation: Operation[Id, Doc, R]) -> Operation[Id, Doc, S]:
    """Return the same operation with ``f`` composed after its continuation."""
    match operation:
        case GetById(id=id_, next=next_):
            return GetById(id_, lambda doc: f(next_(doc)))
        case GetAll(next=next_):
            return GetAll(lambda docs: f(next_(docs)))
        case Update(id=id_, doc=doc, next=next_):
            return Update(id_, doc, lambda unit: f(next_(unit)))
        case Create(doc=doc, next=next_):
            return Create(doc, lambda new_id: f(next_(new_id)))
        case _:
            raise UnknownOperationError(operation)


__all__ = [
    "Create",
    "GetAll",
    "GetById",
    "Operation",
    "Update",
    "map_operation",
]
