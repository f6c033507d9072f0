from __future__ import annotations

import pytest

from icrud.errors import UnknownOperationError
from icrud.operations import Create, GetAll, GetById, Update, map_operation


class TestConstructors:
    def test_get_by_id_carries_id(self):
        op = GetById("a", lambda doc: doc)
        assert op.id == "a"
        assert op.next({"x": 1}) == {"x": 1}

    def test_update_continuation_receives_none(self):
        op = Update("a", {"x": 1}, lambda unit: unit is None)
        assert (op.id, op.doc) == ("a", {"x": 1})
        assert op.next(None) is True

    def test_operations_are_frozen(self):
        op = Create({"x": 1}, lambda new_id: new_id)
        with pytest.raises(AttributeError):
            op.doc = {"x": 2}  # type: ignore[misc]

    def test_repr_hides_continuation(self):
        assert repr(GetById("a", lambda doc: doc)) == "GetById(id='a')"
        assert repr(GetAll(lambda docs: docs)) == "GetAll()"


class TestMapOperation:
    @pytest.mark.parametrize(
        ("operation", "outcome"),
        [
            (GetById("a", lambda doc: doc["n"]), {"n": 2}),
            (GetAll(lambda docs: len(docs)), [1, 2]),
            (Update("a", {"n": 1}, lambda unit: 2), None),
            (Create({"n": 1}, lambda new_id: int(new_id)), "2"),
        ],
    )
    def test_composes_after_continuation(self, operation, outcome):
        mapped = map_operation(lambda n: n * 10, operation)
        assert type(mapped) is type(operation)
        assert mapped.next(outcome) == 20

    def test_keeps_data_fields(self):
        mapped = map_operation(str, Update("a", {"n": 1}, lambda unit: 1))
        assert (mapped.id, mapped.doc) == ("a", {"n": 1})

        mapped_create = map_operation(str, Create({"n": 1}, lambda new_id: new_id))
        assert mapped_create.doc == {"n": 1}

    def test_does_not_mutate_original(self):
        op = GetById("a", lambda doc: doc)
        map_operation(lambda doc: None, op)
        assert op.next("doc") == "doc"

    def test_unknown_operation_raises(self):
        with pytest.raises(UnknownOperationError, match="Unknown operation str"):
            map_operation(lambda x: x, "get")  # type: ignore[arg-type]

    def test_unknown_operation_is_type_error(self):
        with pytest.raises(TypeError):
            map_operation(lambda x: x, object())  # type: ignore[arg-type]
