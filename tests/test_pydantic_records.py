"""Tests for decoding into pydantic models (and models mixed with dataclasses)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

import pytest
from pydantic import BaseModel, ConfigDict, Field

from querybind import (
    CoercionError,
    FieldNotAssignableError,
    NestedValueError,
    decode,
    param,
    param_field,
)

# -- models ------------------------------------------------------------------


class Paging(BaseModel):
    page: int = param_field("page", default=1)
    per_page: int = param_field("per_page", default=20)


class Search(BaseModel):
    q: str = param_field("q", default="")
    tags: List[str] = param_field("tags", default_factory=list)
    exact: bool = param_field("exact", default=False)
    paging: Paging = Field(default_factory=Paging)
    internal: str = param_field("-", default="secret")


class Validated(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    count: int = param_field("count", default=0, ge=0)


class Locked(BaseModel):
    model_config = ConfigDict(frozen=True)

    q: str = param_field("q", default="")


class LockedId(BaseModel):
    name: str = param_field("name", default="")
    id: int = param_field("id", default=0, frozen=True)


@dataclass
class Envelope:
    trace: str = param("trace", default="")
    search: Search = field(default_factory=Search)


# -- tests -------------------------------------------------------------------


class TestPydanticDecode:
    def test_scalars_and_lists(self):
        s = Search()
        decode(s, "?q=shoes&tags=red,blue&exact=true")
        assert s.q == "shoes"
        assert s.tags == ["red", "blue"]
        assert s.exact is True

    def test_nested_model_decoded_in_place(self):
        s = Search()
        paging = s.paging
        decode(s, {"page": "3"})
        assert s.paging is paging
        assert s.paging.page == 3
        assert s.paging.per_page == 20

    def test_skip_marker(self):
        s = Search()
        decode(s, {"-": "x", "internal": "y"})
        assert s.internal == "secret"

    def test_defaults_preserved(self):
        s = Search(q="keep")
        decode(s, {})
        assert s == Search(q="keep")

    def test_nested_coercion_error_wrapped(self):
        with pytest.raises(NestedValueError) as exc_info:
            decode(Search(), {"per_page": "lots"})
        assert exc_info.value.field == "paging"
        assert isinstance(exc_info.value.root_cause, CoercionError)


class TestValidateAssignment:
    def test_valid_value_assigned(self):
        v = Validated()
        decode(v, {"count": "4"})
        assert v.count == 4

    def test_constraint_violation_is_coercion_error(self):
        v = Validated()
        with pytest.raises(CoercionError) as exc_info:
            decode(v, {"count": "-1"})
        assert exc_info.value.field == "count"
        assert v.count == 0


class TestFrozenModels:
    def test_frozen_model_rejected(self):
        with pytest.raises(FieldNotAssignableError) as exc_info:
            decode(Locked(), {"q": "x"})
        assert exc_info.value.field == "q"

    def test_frozen_field_rejected_after_earlier_fields(self):
        m = LockedId()
        with pytest.raises(FieldNotAssignableError) as exc_info:
            decode(m, {"name": "n", "id": "1"})
        assert exc_info.value.field == "id"
        assert m.name == "n"
        assert m.id == 0


class TestMixedRecords:
    def test_dataclass_holding_model(self):
        env = Envelope()
        decode(env, {"trace": "t1", "q": "hats", "page": "2"})
        assert env.trace == "t1"
        assert env.search.q == "hats"
        assert env.search.paging.page == 2
