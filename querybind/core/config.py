"""
Configuration for the querybind decoder.

Every option has a default matching the usual query-string conventions,
so ``DecoderConfig()`` is enough for most callers.
"""

import os
from dataclasses import dataclass
from typing import Optional

from .exceptions import ConfigurationError

DEFAULT_TAG = "query"
DEFAULT_DELIMITER = ","

_ON_ERROR_MODES = ("raise", "collect")
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class DecoderConfig:
    """
    Configuration for decoding records.

    The annotation tag and list delimiter shape the single-record decoder;
    the remaining options only affect frame (row-by-row) decoding.
    """

    # === Annotation ===
    tag: str = DEFAULT_TAG
    """Metadata key holding a field's binding directive"""

    # === Coercion ===
    delimiter: str = DEFAULT_DELIMITER
    """Separator used to split list values (no escaping)"""

    # === Frame Decoding ===
    on_error: str = "raise"
    """'raise' stops at the first failing row, 'collect' records it and continues"""

    enable_progress_bar: bool = False
    """Show a progress bar while decoding DataFrame rows"""

    # === Logging ===
    log_level: str = "WARNING"
    """Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"""

    def __post_init__(self):
        """Validate configuration values after initialization."""
        if not self.tag:
            raise ConfigurationError("tag must be a non-empty string")

        if not self.delimiter:
            raise ConfigurationError("delimiter must be a non-empty string")

        if self.on_error not in _ON_ERROR_MODES:
            raise ConfigurationError(
                f"on_error must be one of {', '.join(_ON_ERROR_MODES)}, got {self.on_error!r}"
            )

        self.log_level = self.log_level.upper()
        if self.log_level not in _LOG_LEVELS:
            raise ConfigurationError(
                f"log_level must be one of {', '.join(_LOG_LEVELS)}, got {self.log_level!r}"
            )

    @classmethod
    def from_env(cls, prefix: str = "QUERYBIND_") -> 'DecoderConfig':
        """Create configuration from ``{prefix}TAG``-style environment variables.

        Unset variables fall back to the dataclass defaults.
        """
        overrides = {}
        for name in ("tag", "delimiter", "on_error", "log_level"):
            value: Optional[str] = os.getenv(f"{prefix}{name.upper()}")
            if value is not None:
                overrides[name] = value

        progress = os.getenv(f"{prefix}ENABLE_PROGRESS_BAR")
        if progress is not None:
            overrides["enable_progress_bar"] = progress.strip().lower() in ("1", "true", "yes")

        return cls(**overrides)

    @classmethod
    def for_batch(cls) -> 'DecoderConfig':
        """Create configuration suited to decoding large DataFrames."""
        return cls(
            on_error="collect",        # Keep going past bad rows
            enable_progress_bar=True,
            log_level="INFO"
        )
