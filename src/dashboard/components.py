"""
Dashboard components module for the kit dispensing dashboard.

This module contains reusable components used throughout the dashboard:
the configuration dataclass, KPI cards, the pivot and detail tables, and
the number formatting used in them.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

import dash_bootstrap_components as dbc
import polars as pl
from dash import dash_table, html

from src.models import PivotCell, Record, SummaryStats
from src.normalize import date_key_to_display, format_timestamp, to_display_date

DETAIL_COLUMNS = [
    ("date", "Surgery date"),
    ("pharmacy", "Pharmacy"),
    ("shift", "Shift"),
    ("kind", "Type"),
    ("person_name", "Name"),
    ("operating_room_no", "Operating room"),
    ("kit_name", "Kit"),
    ("quantity", "Quantity"),
    ("user", "User"),
    ("timestamp", "Timestamp"),
]

PIVOT_COLUMNS = [
    ("date", "Date"),
    ("pharmacy", "Pharmacy"),
    ("count", "Dispensings"),
    ("unit_sum", "Units"),
]


@dataclass
class DashboardConfig:
    """Configuration container for the dashboard."""

    color_theme: Dict[str, Any]
    chart_styling: Dict[str, Any] = field(default_factory=dict)
    fonts: Dict[str, str] = field(default_factory=dict)
    title: str = "Kit Dispensing Dashboard"


def format_count(value: float) -> str:
    """Thousands separated with dots, es-PY style: 12345 -> "12.345"."""
    return f"{int(round(value)):,}".replace(",", ".")


def format_quantity(value: float) -> str:
    """Whole quantities without decimals, others with a decimal comma."""
    if float(value).is_integer():
        return format_count(value)
    whole, _, fraction = f"{value:,.2f}".partition(".")
    return f"{whole.replace(',', '.')},{fraction}"


def format_date_range(stats: SummaryStats) -> str:
    if stats.min_date is None or stats.max_date is None:
        return "-"
    return f"{to_display_date(stats.min_date)} – {to_display_date(stats.max_date)}"


class CardCreator:
    """
    Creates the KPI cards shown above the chart.
    """

    def __init__(self, color_theme: Dict[str, Any]):
        """
        Initialize the card creator.

        Args:
            color_theme: Color theme for the cards
        """
        self.color_theme = color_theme

    def _card(self, title: str, value: str, color_key: str, note: str = "") -> Any:
        color = self.color_theme.get(color_key, "#1B6CA8")
        body = [
            html.H6(title, className="card-title text-muted"),
            html.H3(value, className="card-text fw-bold", style={"color": color}),
        ]
        if note:
            body.append(html.P(note, className="text-muted small mb-0"))
        return dbc.Col(
            dbc.Card(
                dbc.CardBody(body),
                className="shadow-sm h-100",
                style={"borderColor": color},
            ),
            md=3,
            sm=6,
            className="mb-3",
        )

    def create_summary_cards(self, stats: SummaryStats) -> Any:
        """
        Create KPI cards for a summary.

        Args:
            stats: Summary of the filtered records

        Returns:
            dbc.Row: Row of cards for the dashboard
        """
        return dbc.Row(
            [
                self._card(
                    "Dispensings",
                    format_count(stats.record_count),
                    "headline",
                    format_date_range(stats),
                ),
                self._card("Units", format_quantity(stats.unit_total), "accent"),
                self._card(
                    "Active pharmacies",
                    format_count(stats.distinct_pharmacy_count),
                    "headline",
                ),
                self._card(
                    "Daily average",
                    f"{stats.records_per_day_average:.2f}",
                    "accent",
                    "dispensings per day with activity",
                ),
            ]
        )


class TableBuilder:
    """
    Builds the pivot and detail tables.
    """

    def __init__(self, color_theme: Dict[str, Any], page_size: int = 20):
        self.color_theme = color_theme
        self.page_size = page_size

    @staticmethod
    def pivot_rows(pivot: Sequence[PivotCell]) -> List[Dict[str, Any]]:
        """Pivot cells as display rows, in pivot order."""
        frame = pl.DataFrame(
            {
                "date": [date_key_to_display(cell.date_key) for cell in pivot],
                "pharmacy": [cell.pharmacy for cell in pivot],
                "count": [cell.count for cell in pivot],
                "unit_sum": [cell.unit_sum for cell in pivot],
            },
            schema={
                "date": pl.Utf8,
                "pharmacy": pl.Utf8,
                "count": pl.Int64,
                "unit_sum": pl.Float64,
            },
        )
        return frame.to_dicts()

    @staticmethod
    def detail_rows(records: Sequence[Record]) -> List[Dict[str, Any]]:
        """Records as display rows for the audit table."""
        return [
            {
                "date": to_display_date(r.surgery_date),
                "pharmacy": r.pharmacy,
                "shift": r.shift,
                "kind": r.kind,
                "person_name": r.person_name,
                "operating_room_no": r.operating_room_no,
                "kit_name": r.kit_name,
                "quantity": r.quantity,
                "user": r.user,
                "timestamp": format_timestamp(r.timestamp, r.timestamp_raw),
            }
            for r in records
        ]

    def _table(
        self, table_id: str, columns: Sequence, rows: List[Dict[str, Any]], numeric: Sequence[str]
    ) -> Any:
        headline = self.color_theme.get("headline", "#1B6CA8")
        return dash_table.DataTable(
            id=table_id,
            data=rows,
            columns=[
                {"name": name, "id": col_id, "type": "numeric" if col_id in numeric else "text"}
                for col_id, name in columns
            ],
            style_table={"overflowX": "auto"},
            style_cell={
                "textAlign": "left",
                "padding": "8px",
                "whiteSpace": "normal",
                "height": "auto",
                "backgroundColor": "white",
            },
            style_cell_conditional=[
                {"if": {"column_id": col_id}, "textAlign": "right"} for col_id in numeric
            ],
            style_header={
                "backgroundColor": "rgba(27, 108, 168, 0.1)",
                "fontWeight": "bold",
                "color": headline,
                "borderBottom": f"2px solid {headline}",
            },
            page_size=self.page_size,
        )

    def create_pivot_table(self, pivot: Sequence[PivotCell]) -> Any:
        """Table of dispensings and units per day and pharmacy."""
        if not pivot:
            return self._no_data("No dispensings for the selected filters.")
        return self._table(
            "pivot-table-grid", PIVOT_COLUMNS, self.pivot_rows(pivot), ("count", "unit_sum")
        )

    def create_detail_table(self, records: Sequence[Record]) -> Any:
        """Latest dispensings, newest first."""
        if not records:
            return self._no_data("No records for the selected filters.")
        return self._table(
            "detail-table-grid", DETAIL_COLUMNS, self.detail_rows(records), ("quantity",)
        )

    def _no_data(self, message: str) -> Any:
        return html.Div(
            message,
            style={"color": self.color_theme.get("headline", "#1B6CA8")},
            className="text-center p-4",
        )
