"""Tests for FrameDecoder: one record per DataFrame row."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

import pandas as pd
import pytest

from querybind.core.config import DecoderConfig
from querybind.core.exceptions import CoercionError, NestedValueError, RowError
from querybind.core.frame import FrameDecoder, FrameDecodeResult, decode_frame
from querybind.schemas.binding import param

# -- records -----------------------------------------------------------------


@dataclass
class Location:
    city: str = param("city", default="unknown")


@dataclass
class Person:
    name: str = param("name", default="")
    age: int = param("age", default=0)
    tags: List[str] = param("tags", default_factory=list)
    location: Location = field(default_factory=Location)


@dataclass
class Strict:
    count: int = param("count", default=0)


@dataclass
class Wrapper:
    strict: Strict = field(default_factory=Strict)


@dataclass
class Member:
    name: str = param("name", default="")
    age: int = param("age", default=0)
    active: bool = param("active", default=False)


def _people() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "name": ["Ada", "Bob", "Cy"],
            "age": ["36", "41", "29"],
            "tags": ["math,code", None, ""],
            "city": ["London", None, "Paris"],
        }
    )


# -- basic decoding ----------------------------------------------------------


class TestFrameDecoding:
    def test_one_record_per_row(self):
        result = decode_frame(_people(), Person)

        assert isinstance(result, FrameDecodeResult)
        assert [p.name for p in result.records] == ["Ada", "Bob", "Cy"]
        assert [p.age for p in result.records] == [36, 41, 29]
        assert result.records[0].tags == ["math", "code"]
        assert result.records[0].location.city == "London"
        assert not result.has_errors

    def test_missing_cells_keep_defaults(self):
        result = decode_frame(_people(), Person)
        bob, cy = result.records[1], result.records[2]
        assert bob.tags == []
        assert bob.location.city == "unknown"
        assert cy.tags == []
        assert cy.location.city == "Paris"

    def test_records_are_independent(self):
        result = decode_frame(_people(), Person)
        assert result.records[1].tags is not result.records[2].tags
        assert result.records[0].location is not result.records[1].location

    def test_unknown_columns_ignored(self):
        df = pd.DataFrame({"name": ["Ada"], "extra": ["x"]})
        result = decode_frame(df, Person)
        assert result.records == [Person(name="Ada")]

    def test_factory_callable(self):
        result = decode_frame(pd.DataFrame({"name": ["Ada"]}), lambda: Person(age=99))
        assert result.records[0].age == 99

    def test_empty_frame(self):
        result = decode_frame(pd.DataFrame({"name": []}), Person)
        assert result.records == []
        assert result.success_rate == 0.0

    def test_progress_bar(self):
        config = DecoderConfig(enable_progress_bar=True)
        result = FrameDecoder(Person, config).run(_people())
        assert len(result.records) == 3


# -- native column dtypes ----------------------------------------------------


class TestNativeDtypes:
    def test_int_column_next_to_float_column(self):
        df = pd.DataFrame({"name": ["Ada", "Bob"], "age": [36, 41], "score": [1.5, 2.25]})
        result = decode_frame(df, Member)
        assert [m.age for m in result.records] == [36, 41]

    def test_large_int_keeps_precision_next_to_float_column(self):
        big = 2**53 + 1
        df = pd.DataFrame({"age": [big], "score": [0.5]})
        result = decode_frame(df, Member)
        assert result.records[0].age == big

    def test_int_column_with_missing_values(self):
        df = pd.DataFrame({"name": ["Ada", "Bob"], "age": [36, None]})
        result = decode_frame(df, lambda: Member(age=-1))
        assert [m.age for m in result.records] == [36, -1]

    def test_bool_column(self):
        df = pd.DataFrame({"name": ["Ada", "Bob"], "active": [True, False]})
        result = decode_frame(df, lambda: Member(active=True))
        assert [m.active for m in result.records] == [True, False]

    def test_fractional_float_still_fails_int_field(self):
        df = pd.DataFrame({"age": [36.5]})
        with pytest.raises(CoercionError):
            decode_frame(df, Member)


# -- errors ------------------------------------------------------------------


def _bad_rows() -> pd.DataFrame:
    return pd.DataFrame(
        {"name": ["Ada", "Bob", "Cy", "Di"], "age": ["36", "old", "29", "?"]},
        index=[10, 20, 30, 40],
    )


class TestFrameErrors:
    def test_raise_mode_stops_at_first_failure(self):
        with pytest.raises(CoercionError) as exc_info:
            decode_frame(_bad_rows(), Person)
        assert exc_info.value.value == "old"

    def test_collect_mode(self):
        result = decode_frame(_bad_rows(), Person, DecoderConfig(on_error="collect"))

        assert result.has_errors
        assert [e.row_index for e in result.errors] == [1, 3]
        assert result.records[1] is None
        assert result.records[3] is None
        assert [p.name for p in result.successful_records] == ["Ada", "Cy"]
        assert result.success_rate == 0.5
        assert result.get_error_summary() == {"CoercionError": 2}
        assert "2 success, 2 errors, 50.0% success rate" in str(result)

    def test_nested_failure_collected(self):
        df = pd.DataFrame({"count": ["1", "x"]})
        result = decode_frame(df, Wrapper, DecoderConfig(on_error="collect"))
        assert result.records[0].strict.count == 1
        assert isinstance(result.errors[0].error, NestedValueError)
        assert result.get_error_summary() == {"NestedValueError": 1}


class TestRowError:
    def test_str_representation(self):
        err = RowError(row_index=5, error=ValueError("bad value"))
        s = str(err)
        assert "row=5" in s
        assert "ValueError" in s

    def test_error_type_auto_set(self):
        err = RowError(row_index=0, error=CoercionError("fail"))
        assert err.error_type == "CoercionError"
