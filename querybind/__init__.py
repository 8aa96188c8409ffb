"""
querybind - Query Parameter Record Decoder

Populates dataclass and pydantic model fields from flat string key/value
sources (URL query parameters, form bodies, table rows) using per-field
binding annotations.
"""

from .core import (
    Decoder,
    decode,
    DecoderConfig,
    FrameDecoder,
    FrameDecodeResult,
    decode_frame,
    DecodeError,
    InvalidTargetKindError,
    FieldNotAssignableError,
    CoercionError,
    NestedValueError,
    ConfigurationError,
)
from .data import Lookup, MappingLookup, QueryStringLookup, SeriesLookup, as_lookup
from .schemas import get_schema, param, param_field

__version__ = "0.1.0"

__all__ = [
    'Decoder',
    'decode',
    'DecoderConfig',
    'FrameDecoder',
    'FrameDecodeResult',
    'decode_frame',
    'DecodeError',
    'InvalidTargetKindError',
    'FieldNotAssignableError',
    'CoercionError',
    'NestedValueError',
    'ConfigurationError',
    'Lookup',
    'MappingLookup',
    'QueryStringLookup',
    'SeriesLookup',
    'as_lookup',
    'get_schema',
    'param',
    'param_field',
]
