"""Binding directives: how a field declares the key it is read from.

A directive is the string stored under the annotation tag (``"query"`` by
default):

  - ``"-"``: skip the field, even when it is a nested record.
  - ``""`` or missing: unbound; nested records are still recursed into.
  - anything else: the binding key.

Dataclass fields carry it in ``field(metadata=...)``, pydantic fields in
``Field(json_schema_extra=...)``.  :func:`param` and :func:`param_field`
build those for you::

    @dataclass
    class Request:
        page: int = param("page", default=1)
        tags: list[str] = param("tags", default_factory=list)

    class Search(BaseModel):
        q: str = param_field("q", default="")
"""

from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Any, Optional

from pydantic import Field

from ..core.config import DEFAULT_TAG

SKIP_MARKER = "-"


class BindingState(str, Enum):
    """The three states of a field's binding directive."""

    KEY = "key"
    SKIP = "skip"
    ABSENT = "absent"


def parse_directive(directive: Any) -> tuple[BindingState, Optional[str]]:
    """Classify a raw directive into ``(state, key)``.

    Non-string directives are treated as absent.
    """
    if not isinstance(directive, str) or directive == "":
        return BindingState.ABSENT, None
    if directive == SKIP_MARKER:
        return BindingState.SKIP, None
    return BindingState.KEY, directive


def param(key: str, *, tag: str = DEFAULT_TAG, metadata: Optional[dict] = None, **kwargs: Any) -> Any:
    """``dataclasses.field`` carrying a binding directive.

    Extra keyword arguments (``default``, ``default_factory``, ``repr`` ...)
    are passed through to ``dataclasses.field``.
    """
    merged = dict(metadata or {})
    merged[tag] = key
    return dataclasses.field(metadata=merged, **kwargs)


def param_field(key: str, *args: Any, tag: str = DEFAULT_TAG, **kwargs: Any) -> Any:
    """``pydantic.Field`` carrying a binding directive.

    Positional and keyword arguments are passed through to ``pydantic.Field``.
    """
    extra = dict(kwargs.pop("json_schema_extra", None) or {})
    extra[tag] = key
    return Field(*args, json_schema_extra=extra, **kwargs)
