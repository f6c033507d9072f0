from __future__ import annotations

import pytest

from icrud.backend import (
    AsyncStorageBackend,
    StorageBackend,
    async_executor,
    executor,
    resolve,
    resolve_async,
)
from icrud.errors import UnknownOperationError
from icrud.operations import Create, GetAll, GetById, Update
from icrud.program import Terminal, get_by_id

from tests.stores import AsyncInMemoryStore


class TestResolve:
    def test_dispatches_each_variant(self, store):
        assert resolve(store, GetById("a", lambda doc: doc)) == {"name": "alice"}
        assert resolve(store, GetAll(lambda docs: docs)) == [{"name": "alice"}, {"name": "bob"}]
        assert resolve(store, Update("a", {"name": "ann"}, lambda unit: unit)) is None
        assert resolve(store, Create({"name": "carol"}, lambda new_id: new_id)) == "doc-1"
        assert store.calls == [
            ("get_by_id", "a"),
            ("get_all",),
            ("update", "a", {"name": "ann"}),
            ("create", {"name": "carol"}),
        ]

    def test_unknown_operation(self, store):
        with pytest.raises(UnknownOperationError):
            resolve(store, ("get_by_id", "a"))  # type: ignore[arg-type]

    @pytest.mark.asyncio
    async def test_resolve_async(self, store):
        backend = AsyncInMemoryStore(store)
        assert await resolve_async(backend, Create({"n": 1}, lambda new_id: new_id)) == "doc-1"
        assert await resolve_async(backend, GetById("doc-1", lambda doc: doc)) == {"n": 1}
        with pytest.raises(UnknownOperationError):
            await resolve_async(backend, None)  # type: ignore[arg-type]


class TestExecutors:
    def test_executor_returns_continuation_result(self, store):
        step = executor(store)
        assert step(get_by_id("b").operation) == Terminal({"name": "bob"})

    @pytest.mark.asyncio
    async def test_async_executor_returns_continuation_result(self, store):
        step = async_executor(AsyncInMemoryStore(store))
        assert await step(get_by_id("b").operation) == Terminal({"name": "bob"})

    def test_backends_satisfy_protocols(self, store):
        assert isinstance(store, StorageBackend)
        assert isinstance(AsyncInMemoryStore(store), AsyncStorageBackend)
