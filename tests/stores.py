"""In-memory backends and driver adapters shared by the test suite."""

from __future__ import annotations

import asyncio
from typing import Any, Protocol, TypeVar

from icrud import async_executor, eval_icrud, executor, run_icrud, run_icrud_async
from icrud.program import Program

T = TypeVar("T")


class InMemoryStore:
    """Dict-backed store that records every call it receives."""

    def __init__(self, docs: dict[Any, Any] | None = None) -> None:
        self.docs: dict[Any, Any] = dict(docs or {})
        self.calls: list[tuple[Any, ...]] = []
        self._next_id = 0

    def get_by_id(self, id: Any) -> Any:
        self.calls.append(("get_by_id", id))
        return self.docs[id]

    def get_all(self) -> list[Any]:
        self.calls.append(("get_all",))
        return list(self.docs.values())

    def update(self, id: Any, doc: Any) -> None:
        self.calls.append(("update", id, doc))
        self.docs[id] = doc

    def create(self, doc: Any) -> Any:
        self.calls.append(("create", doc))
        self._next_id += 1
        new_id = f"doc-{self._next_id}"
        self.docs[new_id] = doc
        return new_id


class EchoStore(InMemoryStore):
    """Answers every get_by_id with the identifier itself."""

    def get_by_id(self, id: Any) -> Any:
        self.calls.append(("get_by_id", id))
        return id


class AsyncInMemoryStore:
    """Async view over an ``InMemoryStore``; yields to the loop on every call."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def get_by_id(self, id: Any) -> Any:
        await asyncio.sleep(0)
        return self.store.get_by_id(id)

    async def get_all(self) -> list[Any]:
        await asyncio.sleep(0)
        return self.store.get_all()

    async def update(self, id: Any, doc: Any) -> None:
        await asyncio.sleep(0)
        self.store.update(id, doc)

    async def create(self, doc: Any) -> Any:
        await asyncio.sleep(0)
        return self.store.create(doc)


class Driver(Protocol):
    async def run(self, program: Program[Any, Any, T], store: InMemoryStore) -> T: ...


class EvalDriver:
    async def run(self, program: Program[Any, Any, T], store: InMemoryStore) -> T:
        return eval_icrud(executor(store), program)


class RunDriver:
    async def run(self, program: Program[Any, Any, T], store: InMemoryStore) -> T:
        return run_icrud(executor(store), program)


class AsyncDriver:
    async def run(self, program: Program[Any, Any, T], store: InMemoryStore) -> T:
        return await run_icrud_async(async_executor(AsyncInMemoryStore(store)), program)


ALL_DRIVERS: dict[str, type] = {"eval": EvalDriver, "run": RunDriver, "async": AsyncDriver}
