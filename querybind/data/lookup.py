"""Lookup sources: where raw parameter strings come from.

The decoder only ever calls ``lookup(key) -> (value, present)``.  This
module provides that protocol plus adapters for the usual flat sources:
plain mappings (including Starlette ``QueryParams``), raw query strings
and pandas rows.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable
from urllib.parse import parse_qs

import numpy as np
import pandas as pd

from ..core.exceptions import DecodeError

_MISSING = ("", False)


def render_value(value: Any) -> str:
    """Render a non-missing source value as the text the decoder parses.

    Booleans become ``"true"``/``"false"`` and integral floats lose their
    ``".0"`` (pandas stores int columns with gaps as float), so both still
    decode into ``bool`` and ``int`` fields.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, (bool, np.bool_)):
        return "true" if value else "false"
    if isinstance(value, (float, np.floating)) and float(value).is_integer():
        return str(int(value))
    return str(value)


@runtime_checkable
class Lookup(Protocol):
    """Anything that resolves a key to ``(raw_value, present)``."""

    def lookup(self, key: str) -> tuple[str, bool]: ...


class MappingLookup:
    """Lookup over a ``Mapping[str, Any]``.

    List or tuple values (e.g. ``parse_qs`` output) resolve to their first
    element. ``None`` counts as absent; other values go through
    :func:`render_value`.
    """

    def __init__(self, mapping: Mapping[str, Any]):
        self.mapping = mapping

    def lookup(self, key: str) -> tuple[str, bool]:
        if key not in self.mapping:
            return _MISSING
        value = self.mapping[key]
        if isinstance(value, (list, tuple)):
            if not value:
                return _MISSING
            value = value[0]
        if value is None:
            return _MISSING
        return render_value(value), True

    def __repr__(self) -> str:
        return f"MappingLookup({len(self.mapping)} keys)"


class QueryStringLookup(MappingLookup):
    """Lookup over a raw URL query string such as ``"?a=1&b=x,y"``.

    Blank values are kept (``a=`` is present but empty); when a key repeats,
    the first occurrence wins.
    """

    def __init__(self, query: str):
        self.query = query
        super().__init__(parse_qs(query.lstrip("?"), keep_blank_values=True))


class SeriesLookup:
    """Lookup over a single pandas row.

    Missing labels and NA values (``None``, ``NaN``, ``pd.NA``) are absent;
    present cells go through :func:`render_value`.
    """

    def __init__(self, row: pd.Series):
        self.row = row

    def lookup(self, key: str) -> tuple[str, bool]:
        if key not in self.row.index:
            return _MISSING
        value = self.row[key]
        if not pd.api.types.is_scalar(value) or pd.isna(value):
            return _MISSING
        return render_value(value), True


def as_lookup(source: Any) -> Lookup:
    """Adapt *source* to the :class:`Lookup` protocol.

    Accepts Lookup objects (returned unchanged), pandas Series, mappings and
    raw query strings.

    Raises:
        DecodeError: If *source* is none of the above.
    """
    # Series first: a row labelled "lookup" would satisfy the protocol check
    if isinstance(source, pd.Series):
        return SeriesLookup(source)
    if isinstance(source, Lookup):
        return source
    if isinstance(source, Mapping):
        return MappingLookup(source)
    if isinstance(source, str):
        return QueryStringLookup(source)
    raise DecodeError(f"Unsupported lookup source: {type(source).__name__}")
