"""
Storage backend interfaces and the executors built from them.

icrud never stores anything itself. A backend is whatever object answers the
four primitive calls; the adapters below turn one into an executor for the
drivers in ``icrud.interpreter``.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, Protocol, TypeVar, runtime_checkable

from icrud.errors import UnknownOperationError
from icrud.operations import Create, GetAll, GetById, Operation, Update

Id = TypeVar("Id")
Doc = TypeVar("Doc")
R = TypeVar("R")


@runtime_checkable
class StorageBackend(Protocol[Id, Doc]):
    def get_by_id(self, id: Id) -> Doc: ...

    def get_all(self) -> list[Doc]: ...

    def update(self, id: Id, doc: Doc) -> None: ...

    def create(self, doc: Doc) -> Id: ...


@runtime_checkable
class AsyncStorageBackend(Protocol[Id, Doc]):
    async def get_by_id(self, id: Id) -> Doc: ...

    async def get_all(self) -> list[Doc]: ...

    async def update(self, id: Id, doc: Doc) -> None: ...

    async def create(self, doc: Doc) -> Id: ...


def resolve(backend: StorageBackend[Id, Doc], operation: Operation[Id, Doc, Any]) -> Any:
    """Perform ``operation`` against ``backend`` and return its raw outcome."""
    match operation:
        case GetById(id=id_):
            return backend.get_by_id(id_)
        case GetAll():
            return list(backend.get_all())
        case Update(id=id_, doc=doc):
            backend.update(id_, doc)
            return None
        case Create(doc=doc):
            return backend.create(doc)
        case _:
            raise UnknownOperationError(operation)


async def resolve_async(
    backend: AsyncStorageBackend[Id, Doc], operation: Operation[Id, Doc, Any]
) -> Any:
    match operation:
        case GetById(id=id_):
            return await backend.get_by_id(id_)
        case GetAll():
            return list(await backend.get_all())
        case Update(id=id_, doc=doc):
            await backend.update(id_, doc)
            return None
        case Create(doc=doc):
            return await backend.create(doc)
        case _:
            raise UnknownOperationError(operation)


def executor(backend: StorageBackend[Id, Doc]) -> Callable[[Operation[Id, Doc, R]], R]:
    """Executor for ``eval_icrud`` and ``run_icrud``.

    Both synchronous contracts reduce to ``operation.next(outcome)``: under
    ``eval_icrud`` the continuation yields the final value, under ``run_icrud``
    the next program.
    """

    def execute(operation: Operation[Id, Doc, R]) -> R:
        return operation.next(resolve(backend, operation))

    return execute


def async_executor(
    backend: AsyncStorageBackend[Id, Doc],
) -> Callable[[Operation[Id, Doc, R]], Awaitable[R]]:
    """Executor for ``run_icrud_async``."""

    async def execute(operation: Operation[Id, Doc, R]) -> R:
        return operation.next(await resolve_async(backend, operation))

    return execute


__all__ = [
    "AsyncStorageBackend",
    "StorageBackend",
    "async_executor",
    "executor",
    "resolve",
    "resolve_async",
]
