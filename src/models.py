#!/filepath: models.py
"""Data models for the kit dispensing dashboard."""

from collections import Counter
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict  # pylint: disable=import-error

# Pharmacy filter value meaning "no pharmacy restriction"
ALL_PHARMACIES = "__ALL__"


# pylint: disable=too-few-public-methods
class Record(BaseModel):
    """
    One normalized dispensing event.

    Attributes:
        surgery_date: Surgery date parsed from "dd/mm/yyyy", None if unparseable
        surgery_date_raw: Original surgery date text
        surgery_date_key: "YYYY-MM-DD" key used for sorting, filtering and grouping
        pharmacy: Pharmacy that dispensed the kit
        shift, kind, person_name, operating_room_no: Free-text attributes
        kit_code, kit_name: Kit identity
        quantity: Units dispensed, 0 when missing or unparseable
        notes, user: Free text
        timestamp: Entry timestamp parsed from "dd/mm/yyyy hh:mm:ss"
        timestamp_raw: Original timestamp text
    """

    model_config = ConfigDict(frozen=True)

    surgery_date: Optional[date] = None
    surgery_date_raw: str = ""
    surgery_date_key: Optional[str] = None
    pharmacy: str = ""
    shift: str = ""
    kind: str = ""
    person_name: str = ""
    operating_room_no: str = ""
    kit_code: str = ""
    kit_name: str = ""
    quantity: float = 0.0
    notes: str = ""
    user: str = ""
    timestamp: Optional[datetime] = None
    timestamp_raw: str = ""

    def is_retained(self) -> bool:
        """A record is kept only with a date key and a pharmacy."""
        return self.surgery_date_key is not None and self.pharmacy != ""


@dataclass(frozen=True)
class FilterState:
    """
    User-selected filters for one dashboard refresh.

    Attributes:
        from_date_key: Inclusive lower bound "YYYY-MM-DD", or None
        to_date_key: Inclusive upper bound "YYYY-MM-DD", or None
        pharmacy: Pharmacy name or ALL_PHARMACIES
    """

    from_date_key: Optional[str] = None
    to_date_key: Optional[str] = None
    pharmacy: str = ALL_PHARMACIES

    @classmethod
    def from_inputs(
        cls,
        start_date: Optional[str],
        end_date: Optional[str],
        pharmacy: Optional[str],
    ) -> "FilterState":
        """
        Build a filter state from raw UI input values.

        Date pickers may send "YYYY-MM-DDTHH:MM:SS"; only the date part is kept.
        """
        return cls(
            from_date_key=_date_input_to_key(start_date),
            to_date_key=_date_input_to_key(end_date),
            pharmacy=pharmacy or ALL_PHARMACIES,
        )


def _date_input_to_key(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    return str(value)[:10]


@dataclass(frozen=True)
class PivotCell:
    """Aggregate for one (date key, pharmacy) pair."""

    date_key: str
    pharmacy: str
    count: int
    unit_sum: float


@dataclass(frozen=True)
class SummaryStats:
    """
    Headline figures over a record set.

    Attributes:
        record_count: Number of records
        unit_total: Sum of quantities
        distinct_pharmacy_count: Number of distinct pharmacies
        min_date: Earliest surgery date, None for an empty set
        max_date: Latest surgery date, None for an empty set
        records_per_day_average: record_count / max(1, distinct days)
    """

    record_count: int = 0
    unit_total: float = 0.0
    distinct_pharmacy_count: int = 0
    min_date: Optional[date] = None
    max_date: Optional[date] = None
    records_per_day_average: float = 0.0


@dataclass(frozen=True)
class SeriesLine:
    """Values for one pharmacy, aligned to ChartSeries.labels."""

    name: str
    values: Tuple[int, ...]


@dataclass(frozen=True)
class ChartSeries:
    """Dense, chart-ready series: display labels plus one line per pharmacy."""

    labels: Tuple[str, ...] = ()
    series: Tuple[SeriesLine, ...] = ()

    def is_empty(self) -> bool:
        return not self.labels


@dataclass
class SkippedRow:
    """
    Represents a CSV row that was discarded while building records.

    Attributes:
        row_index: Row number in the CSV (1-based, the header is row 1)
        row_data: The raw cells of the row
        reason: Why the row was discarded
    """

    row_index: int
    row_data: List[str]
    reason: str


@dataclass
class LoadResult:
    """
    Result of loading the published sheet.

    Attributes:
        records: Records retained, in input order
        skipped_rows: Rows discarded during record building
        source_rows: Number of body rows read from the CSV
    """

    records: Tuple[Record, ...] = ()
    skipped_rows: List[SkippedRow] = field(default_factory=list)
    source_rows: int = 0

    def get_summary(self) -> Dict[str, Any]:
        """
        Get summary statistics about the load.

        Returns:
            Dict[str, Any]: Summary statistics
        """
        reasons = Counter(row.reason for row in self.skipped_rows)
        return {
            "source_rows": self.source_rows,
            "total_records": len(self.records),
            "total_skipped_rows": len(self.skipped_rows),
            "skipped_by_reason": dict(reasons),
        }


@dataclass(frozen=True)
class DashboardView:
    """Everything the rendering layer needs for one filter state."""

    filter_state: FilterState
    summary: SummaryStats
    pivot: Tuple[PivotCell, ...]
    chart: ChartSeries
    detail: Tuple[Record, ...]
