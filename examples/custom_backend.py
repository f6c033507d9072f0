"""Running one icrud workflow against a custom backend with every driver.

This example shows how a workflow is described once, as inert data, and then
handed to each driver together with an executor built from a backend.

Key concepts:
- Describe the workflow with @do notation or the Query facade
- Implement the four backend calls (get_by_id, get_all, update, create)
- Turn the backend into an executor with executor() / async_executor()
- Run the same Program with run_icrud, eval_icrud and run_icrud_async

Run with: uv run python examples/custom_backend.py
"""

import asyncio
import itertools
from typing import Any

from icrud import (
    Query,
    async_executor,
    create,
    do,
    eval_icrud,
    executor,
    get_all,
    get_by_id,
    run_icrud,
    run_icrud_async,
    sequence,
    update,
)


# ============================================================================
# Step 1: Implement a backend
# ============================================================================


class DictBackend:
    """Keeps documents in a dict and hands out sequential integer ids."""

    def __init__(self) -> None:
        self.docs: dict[int, dict[str, Any]] = {}
        self._ids = itertools.count(1)

    def get_by_id(self, id: int) -> dict[str, Any]:
        return self.docs[id]

    def get_all(self) -> list[dict[str, Any]]:
        return list(self.docs.values())

    def update(self, id: int, doc: dict[str, Any]) -> None:
        self.docs[id] = doc

    def create(self, doc: dict[str, Any]) -> int:
        new_id = next(self._ids)
        self.docs[new_id] = doc
        return new_id


class AsyncDictBackend:
    """Async wrapper, standing in for a network-backed store."""

    def __init__(self, backend: DictBackend) -> None:
        self.backend = backend

    async def get_by_id(self, id: int) -> dict[str, Any]:
        return self.backend.get_by_id(id)

    async def get_all(self) -> list[dict[str, Any]]:
        return self.backend.get_all()

    async def update(self, id: int, doc: dict[str, Any]) -> None:
        self.backend.update(id, doc)

    async def create(self, doc: dict[str, Any]) -> int:
        return self.backend.create(doc)


# ============================================================================
# Step 2: Describe the workflow
# ============================================================================


@do
def register(names: list[str]):
    ids = yield sequence([create({"name": name, "visits": 0}) for name in names])
    first = yield get_by_id(ids[0])
    yield update(ids[0], {**first, "visits": first["visits"] + 1})
    return (yield get_all())


def visit_count(doc_id: int) -> Query:
    return Query.get_by_id(doc_id).map(lambda doc: doc["visits"])


# ============================================================================
# Step 3: Run it
# ============================================================================


def main() -> None:
    names = ["alice", "bob", "carol"]

    backend = DictBackend()
    print("run_icrud:       ", run_icrud(executor(backend), register(names)))
    print("visits of 1:     ", visit_count(1).run(executor(backend)))

    backend = DictBackend()
    print("eval_icrud:      ", eval_icrud(executor(backend), register(names)))

    backend = DictBackend()
    result = asyncio.run(run_icrud_async(async_executor(AsyncDictBackend(backend)), register(names)))
    print("run_icrud_async: ", result)


if __name__ == "__main__":
    main()
