"""
Custom exceptions for the querybind decoder.

Provides specific exception types for different failure modes
with helpful error messages and context.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


class DecodeError(Exception):
    """Base exception for all decoding errors.

    Attributes:
        message: Human-readable error description.
        field: Field name involved (``None`` if not field-specific).
        key: Binding key that was looked up (``None`` if not key-specific).
    """

    def __init__(self, message: str, field: Optional[str] = None, key: Optional[str] = None):
        self.message = message
        self.field = field
        self.key = key

        # Build descriptive error message
        error_parts = [message]
        if field is not None:
            error_parts.append(f"Field: {field}")
        if key is not None:
            error_parts.append(f"Key: {key}")

        super().__init__(" | ".join(error_parts))

    @property
    def root_cause(self) -> BaseException:
        """Innermost error, following ``NestedValueError`` wrappers."""
        err: BaseException = self
        while isinstance(err, NestedValueError) and err.cause is not None:
            err = err.cause
        return err


class InvalidTargetKindError(DecodeError):
    """Raised when the decode target is not a record instance.

    Records are dataclass instances and pydantic model instances. Passing
    the class itself, ``None``, a dict or a primitive fails with this error.
    """

    pass


class FieldNotAssignableError(DecodeError):
    """Raised when a field of the target cannot be written.

    Common causes:
        - The field name starts with an underscore.
        - The dataclass is declared ``frozen=True``.
        - The pydantic model (or the field itself) is frozen.
    """

    pass


class CoercionError(DecodeError):
    """Raised when a found value cannot be converted to the field's type.

    Attributes:
        value: The raw string that failed to convert.
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        key: Optional[str] = None,
        value: Optional[str] = None,
    ):
        self.value = value
        super().__init__(message, field=field, key=key)


class NestedValueError(DecodeError):
    """Raised when decoding a nested record fails.

    Attributes:
        cause: The error raised while decoding the nested record. It is also
            chained as ``__cause__``.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None, **kwargs):
        self.cause = cause
        super().__init__(message, **kwargs)


class ConfigurationError(DecodeError, ValueError):
    """Raised when decoder configuration is invalid."""

    pass


@dataclass
class RowError:
    """Per-row failure record for frame decoding."""

    row_index: int
    error: BaseException
    error_type: str = ""

    def __post_init__(self) -> None:
        if not self.error_type:
            self.error_type = type(self.error).__name__

    def __str__(self) -> str:
        return f"RowError(row={self.row_index}, {self.error_type}: {self.error})"
