"""Field schemas: the per-type descriptor the decoder walks.

A :class:`RecordSchema` is derived once per (record type, tag) pair from
``dataclasses.fields`` or pydantic ``model_fields`` and cached, so the
decoder never re-inspects annotations on the hot path.
"""

from __future__ import annotations

import dataclasses
import logging
import sys
import types
import typing
from enum import Enum
from functools import lru_cache
from typing import Any, Optional, Union, get_args, get_origin

from pydantic import BaseModel, ConfigDict

from ..core.config import DEFAULT_TAG
from .binding import BindingState, parse_directive

logger = logging.getLogger(__name__)


class FieldKind(str, Enum):
    """Declared kind of a field, as far as decoding is concerned."""

    BOOL = "bool"
    INT = "int"
    STR = "str"
    LIST = "list"
    RECORD = "record"
    UNSUPPORTED = "unsupported"


# Scalar annotation → kind.  bool must be matched by identity, never via
# issubclass, since bool is an int subclass.
_SCALAR_KINDS: dict[Any, FieldKind] = {
    bool: FieldKind.BOOL,
    int: FieldKind.INT,
    str: FieldKind.STR,
}

_UNION_TYPES: tuple[Any, ...] = (Union, getattr(types, "UnionType", Union))


class FieldSchema(BaseModel):
    """Decoding metadata for a single field.

    Attributes:
        name: Attribute name on the record.
        kind: Declared kind.
        element_kind: Scalar kind of list elements (``LIST`` only).
        record_type: Nested record class (``RECORD`` only).
        binding: Directive state.
        key: Binding key (``KEY`` state only).
        writable: Whether the decoder may assign the attribute.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    kind: FieldKind
    element_kind: Optional[FieldKind] = None
    record_type: Optional[type] = None
    binding: BindingState = BindingState.ABSENT
    key: Optional[str] = None
    writable: bool = True

    @property
    def is_skipped(self) -> bool:
        return self.binding is BindingState.SKIP


class RecordSchema(BaseModel):
    """Ordered field schemas for one record type."""

    model_config = ConfigDict(frozen=True)

    record_type: type
    tag: str = DEFAULT_TAG
    fields: tuple[FieldSchema, ...] = ()

    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]

    def bound_keys(self) -> list[str]:
        """Binding keys in declaration order, including those of nested records.

        Skipped fields and skipped nested records contribute nothing.
        """
        return self._collect_keys(set())

    def _collect_keys(self, seen: set[type]) -> list[str]:
        seen = seen | {self.record_type}
        keys: list[str] = []
        for f in self.fields:
            if f.is_skipped:
                continue
            if f.kind is FieldKind.RECORD:
                if f.record_type not in seen:
                    keys.extend(get_schema(f.record_type, self.tag)._collect_keys(seen))
                continue
            if f.binding is BindingState.KEY:
                keys.append(f.key)
        return keys


# ---------------------------------------------------------------------------
# Record detection
# ---------------------------------------------------------------------------


def is_record_type(tp: Any) -> bool:
    """True for dataclass classes and pydantic model classes."""
    if not isinstance(tp, type) or get_origin(tp) is not None:
        return False
    return dataclasses.is_dataclass(tp) or issubclass(tp, BaseModel)


def is_record(obj: Any) -> bool:
    """True for dataclass instances and pydantic model instances."""
    return not isinstance(obj, type) and is_record_type(type(obj))


# ---------------------------------------------------------------------------
# Kind resolution
# ---------------------------------------------------------------------------


def resolve_kind(annotation: Any) -> tuple[FieldKind, Optional[FieldKind], Optional[type]]:
    """Map a type annotation to ``(kind, element_kind, record_type)``.

    ``Optional[X]`` resolves like ``X`` for scalar and list kinds only;
    ``Optional[Record]`` and every other union is unsupported.
    """
    origin = get_origin(annotation)

    if origin in _UNION_TYPES:
        args = [a for a in get_args(annotation) if a is not type(None)]
        if len(args) != 1:
            return FieldKind.UNSUPPORTED, None, None
        kind, element_kind, _ = resolve_kind(args[0])
        if kind in (FieldKind.RECORD, FieldKind.UNSUPPORTED):
            return FieldKind.UNSUPPORTED, None, None
        return kind, element_kind, None

    if origin is list:
        args = get_args(annotation)
        if len(args) == 1 and isinstance(args[0], type) and args[0] in _SCALAR_KINDS:
            return FieldKind.LIST, _SCALAR_KINDS[args[0]], None
        return FieldKind.UNSUPPORTED, None, None

    if isinstance(annotation, type) and annotation in _SCALAR_KINDS:
        return _SCALAR_KINDS[annotation], None, None

    if is_record_type(annotation):
        return FieldKind.RECORD, None, annotation

    return FieldKind.UNSUPPORTED, None, None


# ---------------------------------------------------------------------------
# Schema derivation
# ---------------------------------------------------------------------------


def get_schema(record_type: type, tag: str = DEFAULT_TAG) -> RecordSchema:
    """Derive (and cache) the schema of *record_type* for annotation *tag*.

    Raises:
        TypeError: If *record_type* is not a dataclass or pydantic model class.
    """
    return _derive_schema(record_type, tag)


@lru_cache(maxsize=None)
def _derive_schema(record_type: type, tag: str) -> RecordSchema:
    if isinstance(record_type, type) and issubclass(record_type, BaseModel):
        fields = _pydantic_fields(record_type, tag)
    elif is_record_type(record_type):
        fields = _dataclass_fields(record_type, tag)
    else:
        raise TypeError(f"{record_type!r} is not a dataclass or pydantic model class")

    logger.debug(
        "Derived schema for %s (tag=%r): %d fields", record_type.__qualname__, tag, len(fields)
    )
    return RecordSchema(record_type=record_type, tag=tag, fields=tuple(fields))


def clear_schema_cache() -> None:
    """Drop every cached schema (useful when classes are redefined in tests)."""
    _derive_schema.cache_clear()


def _dataclass_fields(cls: type, tag: str) -> list[FieldSchema]:
    try:
        hints = typing.get_type_hints(cls)
    except (NameError, TypeError):
        # At least one annotation does not resolve; resolve the rest one by one
        logger.debug("Could not resolve all type hints for %s", cls.__qualname__, exc_info=True)
        hints = None

    frozen = cls.__dataclass_params__.frozen
    result = []
    for f in dataclasses.fields(cls):
        if hints is not None:
            annotation = hints.get(f.name, f.type)
        else:
            annotation = _resolve_annotation(cls, f)
        state, key = parse_directive(f.metadata.get(tag))
        result.append(
            _build_field(f.name, annotation, state, key, writable=not frozen)
        )
    return result


def _pydantic_fields(cls: type[BaseModel], tag: str) -> list[FieldSchema]:
    model_frozen = bool(cls.model_config.get("frozen", False))
    result = []
    for name, info in cls.model_fields.items():
        extra = info.json_schema_extra
        directive = extra.get(tag) if isinstance(extra, dict) else None
        state, key = parse_directive(directive)
        result.append(
            _build_field(
                name,
                info.annotation,
                state,
                key,
                writable=not (model_frozen or info.frozen),
            )
        )
    return result


def _build_field(
    name: str,
    annotation: Any,
    state: BindingState,
    key: Optional[str],
    writable: bool,
) -> FieldSchema:
    kind, element_kind, record_type = resolve_kind(annotation)
    return FieldSchema(
        name=name,
        kind=kind,
        element_kind=element_kind,
        record_type=record_type,
        binding=state,
        key=key,
        # Underscore-prefixed attributes are not part of the public surface
        writable=writable and not name.startswith("_"),
    )


def _resolve_annotation(cls: type, f: dataclasses.Field) -> Any:
    """Evaluate a single (possibly string) dataclass annotation.

    A name that cannot be resolved, e.g. one only imported under
    ``TYPE_CHECKING``, makes this field alone unsupported.
    """
    annotation = f.type
    if isinstance(annotation, typing.ForwardRef):
        annotation = annotation.__forward_arg__
    if not isinstance(annotation, str):
        return annotation

    module = sys.modules.get(cls.__module__)
    globalns = dict(vars(module)) if module is not None else {}
    try:
        return eval(annotation, globalns, dict(vars(cls)))
    except (NameError, TypeError, SyntaxError, AttributeError):
        logger.debug(
            "Leaving field %s.%s unsupported: cannot resolve %r",
            cls.__qualname__,
            f.name,
            annotation,
        )
        return None
