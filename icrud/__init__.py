"""
icrud - persistence workflows as inert data.

Describe fetch-by-id, fetch-all, update and create steps as a Program, compose
them with ``map_program``, ``and_then``, ``pair`` and ``sequence`` (or the
``Query`` facade, or @do notation), then hand the Program to a driver together
with an executor that talks to a real store.

Example:
    >>> from icrud import do, get_by_id, update, run_icrud, executor
    >>>
    >>> @do
    ... def touch(doc_id):
    ...     doc = yield get_by_id(doc_id)
    ...     yield update(doc_id, {**doc, "touched": True})
    ...     return doc
    >>>
    >>> run_icrud(executor(backend), touch("a"))
"""

from icrud.backend import (
    AsyncStorageBackend,
    StorageBackend,
    async_executor,
    executor,
    resolve,
    resolve_async,
)
from icrud.config import configure_logging, is_debug_enabled
from icrud.do import do
from icrud.errors import ICRUDError, InvalidProgramError, UnknownOperationError
from icrud.interpreter import (
    AsyncStepExecutor,
    EagerExecutor,
    StepExecutor,
    eval_icrud,
    run_icrud,
    run_icrud_async,
)
from icrud.operations import Create, GetAll, GetById, Operation, Update, map_operation
from icrud.program import (
    Pending,
    Program,
    Terminal,
    and_then,
    create,
    create_,
    finished,
    get_all,
    get_all_,
    get_by_id,
    get_by_id_,
    map_program,
    pair,
    pending,
    sequence,
    terminal,
    traverse,
    update,
    update_,
)
from icrud.query import Query

configure_logging()

__version__ = "0.1.0"

__all__ = [
    # Operations
    "Create",
    "GetAll",
    "GetById",
    "Operation",
    "Update",
    "map_operation",
    # Programs
    "Pending",
    "Program",
    "Terminal",
    "pending",
    "terminal",
    "finished",
    "get_by_id",
    "get_by_id_",
    "get_all",
    "get_all_",
    "update",
    "update_",
    "create",
    "create_",
    # Combinators
    "and_then",
    "map_program",
    "pair",
    "sequence",
    "traverse",
    "do",
    # Drivers
    "AsyncStepExecutor",
    "EagerExecutor",
    "StepExecutor",
    "eval_icrud",
    "run_icrud",
    "run_icrud_async",
    # Backends
    "AsyncStorageBackend",
    "StorageBackend",
    "async_executor",
    "executor",
    "resolve",
    "resolve_async",
    # Facade
    "Query",
    # Errors
    "ICRUDError",
    "InvalidProgramError",
    "UnknownOperationError",
    # Configuration
    "configure_logging",
    "is_debug_enabled",
]
