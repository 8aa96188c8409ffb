"""
Core functionality for the querybind decoder.
"""

from .config import DecoderConfig
from .decoder import Decoder, decode
from .exceptions import (
    CoercionError,
    ConfigurationError,
    DecodeError,
    FieldNotAssignableError,
    InvalidTargetKindError,
    NestedValueError,
    RowError,
)
from .frame import FrameDecoder, FrameDecodeResult, decode_frame

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
    'RowError',
]
