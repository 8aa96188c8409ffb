"""
Row-by-row decoding of pandas DataFrames.

Each row is decoded into a fresh record built by a factory, so every row
starts from the record's own defaults. Per-row failures either stop the run
or are collected, depending on ``DecoderConfig.on_error``.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

import pandas as pd
from tqdm.auto import tqdm

from ..data.lookup import SeriesLookup
from .config import DecoderConfig
from .decoder import Decoder
from .exceptions import DecodeError, RowError

logger = logging.getLogger(__name__)


class FrameDecodeResult:
    """
    Decoded records for every row, plus the rows that failed.

    ``records`` is aligned with the input rows; a failed row holds ``None``.
    """

    def __init__(self, records: List[Optional[Any]], errors: List[RowError]):
        self.records = records
        self.errors = errors
        self.total_rows = len(records)
        succeeded = self.total_rows - len(errors)
        self.success_rate = succeeded / self.total_rows if self.total_rows > 0 else 0.0

    @property
    def has_errors(self) -> bool:
        """True if any rows failed to decode."""
        return len(self.errors) > 0

    @property
    def successful_records(self) -> List[Any]:
        failed = {e.row_index for e in self.errors}
        return [r for i, r in enumerate(self.records) if i not in failed]

    def get_error_summary(self) -> Dict[str, int]:
        """Get summary of error types."""
        error_counts: Dict[str, int] = {}
        for error in self.errors:
            error_counts[error.error_type] = error_counts.get(error.error_type, 0) + 1
        return error_counts

    def __str__(self) -> str:
        return (
            f"FrameDecodeResult({self.total_rows - len(self.errors)} success, "
            f"{len(self.errors)} errors, {self.success_rate:.1%} success rate)"
        )


class FrameDecoder:
    """Decodes every row of a DataFrame into a new record.

    Args:
        record_factory: Zero-argument callable returning a fresh record
            (usually the record class itself).
        config: Decoder configuration (defaults to ``DecoderConfig()``).
    """

    def __init__(self, record_factory: Callable[[], Any], config: Optional[DecoderConfig] = None):
        self.record_factory = record_factory
        self.config = config or DecoderConfig()
        self.decoder = Decoder(self.config)

    def run(self, df: pd.DataFrame) -> FrameDecodeResult:
        """Decode all rows of *df*.

        Row indices in :class:`RowError` are positional (0-based), not
        DataFrame labels.

        Raises:
            DecodeError: The first row failure, when ``on_error="raise"``.
        """
        records: List[Optional[Any]] = []
        errors: List[RowError] = []

        # Object dtype keeps each cell as stored; a plain iterrows upcasts
        # mixed int/float rows to float
        rows = df.astype(object).iterrows()
        if self.config.enable_progress_bar:
            rows = tqdm(rows, total=len(df), desc="Decoding rows")

        for position, (_, row) in enumerate(rows):
            record = self.record_factory()
            try:
                self.decoder.decode(record, SeriesLookup(row))
            except DecodeError as e:
                if self.config.on_error == "raise":
                    raise
                logger.warning("Row %d failed to decode: %s", position, e)
                errors.append(RowError(row_index=position, error=e))
                records.append(None)
                continue
            records.append(record)

        result = FrameDecodeResult(records, errors)
        logger.info("Decoded %d rows: %s", len(df), result)
        return result


def decode_frame(
    df: pd.DataFrame,
    record_factory: Callable[[], Any],
    config: Optional[DecoderConfig] = None,
) -> FrameDecodeResult:
    """Decode every row of *df* into a record built by *record_factory*.

    Example::

        df = pd.read_csv("requests.csv", dtype=str)
        result = decode_frame(df, Request, DecoderConfig(on_error="collect"))
        for record in result.successful_records:
            ...
    """
    return FrameDecoder(record_factory, config).run(df)
