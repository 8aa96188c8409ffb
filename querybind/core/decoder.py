"""Decoder: populate a record's fields from a flat string lookup.

Walks the cached :class:`~querybind.schemas.RecordSchema` of the target in
declaration order and, for every bound field, coerces the looked-up string
into the field's declared type.  Nested records are decoded in place.

Fields whose key is missing, or whose value is empty, keep their current
value: decoding merges into defaults and never zeroes anything.

Compatible field types: ``bool``, ``int``, ``str``, ``list`` of those,
``Optional`` of those, and nested dataclasses / pydantic models.  List
values are split on ``","`` and there is no way to escape the delimiter.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Optional

from ..data.lookup import Lookup, as_lookup
from ..schemas.binding import BindingState
from ..schemas.field_schema import FieldKind, FieldSchema, get_schema, is_record
from .config import DecoderConfig
from .exceptions import (
    CoercionError,
    DecodeError,
    FieldNotAssignableError,
    InvalidTargetKindError,
    NestedValueError,
)

logger = logging.getLogger(__name__)

TRUE_TOKEN = "true"

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT_MIN = -(1 << 63)
_INT_MAX = (1 << 63) - 1


# ---------------------------------------------------------------------------
# Scalar coercion
# ---------------------------------------------------------------------------


def coerce_bool(raw: str) -> bool:
    """Only the exact token ``"true"`` is true; everything else is false."""
    return raw == TRUE_TOKEN


def coerce_int(raw: str) -> int:
    """Parse a base-10 signed 64-bit integer.

    Stricter than ``int()``: no surrounding whitespace, no underscores,
    ASCII digits only.

    Raises:
        ValueError: On malformed or out-of-range text.
    """
    if not _INT_PATTERN.fullmatch(raw):
        raise ValueError(f"invalid syntax: {raw!r}")
    value = int(raw)
    if not _INT_MIN <= value <= _INT_MAX:
        raise ValueError(f"value out of range: {raw!r}")
    return value


def coerce_str(raw: str) -> str:
    return raw


_SCALAR_COERCERS: dict[FieldKind, Callable[[str], Any]] = {
    FieldKind.BOOL: coerce_bool,
    FieldKind.INT: coerce_int,
    FieldKind.STR: coerce_str,
}


# ---------------------------------------------------------------------------
# Decoder
# ---------------------------------------------------------------------------


class Decoder:
    """Decodes lookup sources into record instances.

    A single instance is stateless apart from its config and can be reused
    for any number of records and record types.

    Args:
        config: Decoder configuration (defaults to ``DecoderConfig()``).
    """

    def __init__(self, config: Optional[DecoderConfig] = None):
        self.config = config or DecoderConfig()

    def decode(self, target: Any, source: Any) -> None:
        """Populate *target* in place from *source*.

        Args:
            target: Dataclass or pydantic model instance to populate.
            source: A :class:`~querybind.data.Lookup`, a mapping, a raw query
                string or a pandas Series.

        Raises:
            InvalidTargetKindError: *target* is not a record instance.
            FieldNotAssignableError: A field of *target* cannot be written.
            CoercionError: A value does not convert to its field's type.
            NestedValueError: Any of the above, raised inside a nested record.
        """
        self._decode_record(target, as_lookup(source))

    def _decode_record(self, target: Any, lookup: Lookup) -> None:
        if not is_record(target):
            raise InvalidTargetKindError(
                f"passed incompatible type ({type(target).__name__}): "
                "target must be an assignable record instance"
            )

        schema = get_schema(type(target), self.config.tag)

        for f in schema.fields:
            if not f.writable:
                raise FieldNotAssignableError(
                    f"passed incompatible type ({type(target).__name__}): field must be assignable",
                    field=f.name,
                )

            if f.binding is BindingState.SKIP:
                continue

            if f.kind is FieldKind.RECORD:
                try:
                    self._decode_record(getattr(target, f.name), lookup)
                except DecodeError as e:
                    raise NestedValueError(
                        f"error raised in nested value: {e}", cause=e, field=f.name
                    ) from e
                continue

            if f.binding is BindingState.ABSENT:
                continue

            raw, present = lookup.lookup(f.key)
            if not present or raw == "":
                continue

            if f.kind is FieldKind.UNSUPPORTED:
                logger.debug("Leaving field %s untouched: unsupported type", f.name)
                continue

            self._assign(target, f, raw)

    def _assign(self, target: Any, f: FieldSchema, raw: str) -> None:
        try:
            if f.kind is FieldKind.LIST:
                coerce = _SCALAR_COERCERS[f.element_kind]
                value: Any = [coerce(part) for part in raw.split(self.config.delimiter)]
            else:
                value = _SCALAR_COERCERS[f.kind](raw)
            # pydantic models with validate_assignment may reject the value here
            setattr(target, f.name, value)
        except ValueError as e:
            kind = f"list[{f.element_kind.value}]" if f.kind is FieldKind.LIST else f.kind.value
            raise CoercionError(
                f"can't cast {kind} value: {e}", field=f.name, key=f.key, value=raw
            ) from e


def decode(target: Any, source: Any, config: Optional[DecoderConfig] = None) -> None:
    """Populate *target* in place from *source*.

    Example::

        from dataclasses import dataclass
        from querybind import decode, param

        @dataclass
        class Request:
            page: int = param("page", default=1)
            tags: list[str] = param("tags", default_factory=list)

        req = Request()
        decode(req, {"page": "3", "tags": "a,b"})
        # Request(page=3, tags=['a', 'b'])
    """
    Decoder(config).decode(target, source)
