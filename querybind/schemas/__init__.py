"""Field schemas and binding directives for querybind.

- FieldKind / FieldSchema / RecordSchema: per-type decoding descriptors
- get_schema: cached schema derivation for dataclasses and pydantic models
- param / param_field: declare a field's binding key

Example:
    from dataclasses import dataclass
    from querybind.schemas import get_schema, param

    @dataclass
    class Request:
        page: int = param("page", default=1)

    get_schema(Request).bound_keys()  # ["page"]
"""

from .binding import SKIP_MARKER, BindingState, param, param_field, parse_directive
from .field_schema import (
    FieldKind,
    FieldSchema,
    RecordSchema,
    clear_schema_cache,
    get_schema,
    is_record,
    is_record_type,
    resolve_kind,
)

__all__ = [
    "SKIP_MARKER",
    "BindingState",
    "param",
    "param_field",
    "parse_directive",
    "FieldKind",
    "FieldSchema",
    "RecordSchema",
    "clear_schema_cache",
    "get_schema",
    "is_record",
    "is_record_type",
    "resolve_kind",
]
