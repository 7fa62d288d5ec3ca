#!/filepath: src/Process.py
"""
Process module for filtering and aggregating dispensing records.

This module turns the in-memory record set into the figures the dashboard
shows: a filtered view, headline statistics, a day x pharmacy pivot and
dense chart series. Every method is pure: inputs are never modified and
results are rebuilt from scratch on each call.
"""

import logging
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import polars as pl

from src.models import (
    ALL_PHARMACIES,
    ChartSeries,
    FilterState,
    PivotCell,
    Record,
    SeriesLine,
    SummaryStats,
)
from src.normalize import date_key_to_display

FRAME_SCHEMA = {
    "surgery_date": pl.Date,
    "surgery_date_key": pl.Utf8,
    "pharmacy": pl.Utf8,
    "quantity": pl.Float64,
}


class Process:
    """
    Filters and aggregates dispensing records.

    Attributes:
        logger: Logger instance for this class
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the processor.

        Args:
            logger: Parent logger; a module logger is used when omitted
        """
        self.logger = (logger or logging.getLogger(__name__)).getChild("Process")

    @staticmethod
    def records_to_frame(records: Iterable[Record]) -> pl.DataFrame:
        """
        Build a polars frame with the columns used for aggregation.

        Args:
            records: Records to convert

        Returns:
            pl.DataFrame: One row per record, typed per FRAME_SCHEMA
        """
        records = list(records)
        return pl.DataFrame(
            {
                "surgery_date": [r.surgery_date for r in records],
                "surgery_date_key": [r.surgery_date_key for r in records],
                "pharmacy": [r.pharmacy for r in records],
                "quantity": [float(r.quantity) for r in records],
            },
            schema=FRAME_SCHEMA,
        )

    def filter_records(
        self, records: Sequence[Record], state: FilterState
    ) -> Tuple[Record, ...]:
        """
        Apply the pharmacy and date-range filters.

        Date keys are fixed-width "YYYY-MM-DD", so string comparison orders
        them chronologically. The input sequence is left untouched.

        Args:
            records: Full record set
            state: Filters selected in the UI

        Returns:
            Tuple[Record, ...]: Records passing every filter, in input order
        """
        filtered = tuple(r for r in records if self._passes(r, state))
        self.logger.debug(
            f"Filter {state} kept {len(filtered)} of {len(records)} records"
        )
        return filtered

    @staticmethod
    def _passes(record: Record, state: FilterState) -> bool:
        if state.pharmacy != ALL_PHARMACIES and record.pharmacy != state.pharmacy:
            return False
        key = record.surgery_date_key
        if state.from_date_key is not None and (key is None or key < state.from_date_key):
            return False
        if state.to_date_key is not None and (key is None or key > state.to_date_key):
            return False
        return True

    def summarize(self, records: Sequence[Record]) -> SummaryStats:
        """
        Compute headline statistics.

        The per-day average divides by at least one day, so an empty set
        gives zeros rather than an error.

        Args:
            records: Records to summarize

        Returns:
            SummaryStats: Derived statistics
        """
        df = self.records_to_frame(records)
        if df.height == 0:
            return SummaryStats()

        distinct_days = df["surgery_date_key"].n_unique()
        return SummaryStats(
            record_count=df.height,
            unit_total=float(df["quantity"].sum()),
            distinct_pharmacy_count=df["pharmacy"].n_unique(),
            min_date=df["surgery_date"].min(),
            max_date=df["surgery_date"].max(),
            records_per_day_average=df.height / max(1, distinct_days),
        )

    def pivot_by_day_and_pharmacy(
        self, records: Sequence[Record]
    ) -> Tuple[PivotCell, ...]:
        """
        Count records and sum quantities per (date key, pharmacy).

        Records missing either key are skipped. Cells are ordered by date key,
        then pharmacy name.

        Args:
            records: Records to aggregate

        Returns:
            Tuple[PivotCell, ...]: Sparse pivot, one cell per present pair
        """
        grouped = (
            self.records_to_frame(records)
            .filter(
                pl.col("surgery_date_key").is_not_null() & (pl.col("pharmacy") != "")
            )
            .group_by(["surgery_date_key", "pharmacy"])
            .agg(
                pl.len().alias("count"),
                pl.col("quantity").sum().alias("unit_sum"),
            )
            .sort(["surgery_date_key", "pharmacy"])
        )

        return tuple(
            PivotCell(
                date_key=row["surgery_date_key"],
                pharmacy=row["pharmacy"],
                count=int(row["count"]),
                unit_sum=float(row["unit_sum"]),
            )
            for row in grouped.iter_rows(named=True)
        )

    @staticmethod
    def to_chart_series(pivot: Sequence[PivotCell]) -> ChartSeries:
        """
        Expand the sparse pivot into one count vector per pharmacy.

        Every vector is aligned to the sorted date keys, with 0 where the
        pivot has no cell for that (date, pharmacy) pair.

        Args:
            pivot: Pivot cells

        Returns:
            ChartSeries: Display-format labels and aligned series
        """
        date_keys = sorted({cell.date_key for cell in pivot})
        pharmacies = sorted({cell.pharmacy for cell in pivot})
        counts: Dict[Tuple[str, str], int] = {
            (cell.date_key, cell.pharmacy): cell.count for cell in pivot
        }

        series = tuple(
            SeriesLine(
                name=pharmacy,
                values=tuple(counts.get((key, pharmacy), 0) for key in date_keys),
            )
            for pharmacy in pharmacies
        )
        labels = tuple(date_key_to_display(key) for key in date_keys)
        return ChartSeries(labels=labels, series=series)

    @staticmethod
    def detail_records(
        records: Sequence[Record], limit: Optional[int] = None
    ) -> Tuple[Record, ...]:
        """
        Most recent entries first, for the audit table.

        Records without a timestamp go last; ties keep input order.

        Args:
            records: Records to sort
            limit: Maximum number of rows, None for all

        Returns:
            Tuple[Record, ...]: Sorted, capped records
        """
        ordered = sorted(
            records,
            key=lambda r: (r.timestamp is not None, r.timestamp or datetime.min),
            reverse=True,
        )
        if limit is not None:
            ordered = ordered[: max(0, limit)]
        return tuple(ordered)

    @staticmethod
    def pharmacy_names(records: Iterable[Record]) -> List[str]:
        """Sorted distinct pharmacy names."""
        return sorted({r.pharmacy for r in records if r.pharmacy})
