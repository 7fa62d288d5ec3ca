#!/filepath: src/dashboard/layouts.py
"""
DashboardLayout module for the kit dispensing dashboard.

This module handles the layout and structure of the dashboard: the filter
bar, the KPI cards, the daily chart and the two tables.
"""

from datetime import date
from typing import Any, Dict, List, Optional, Sequence

import dash_bootstrap_components as dbc
from dash import dcc, html

from src.dashboard.components import DashboardConfig
from src.models import ALL_PHARMACIES

ALL_PHARMACIES_LABEL = "All"


def pharmacy_dropdown_options(pharmacies: Sequence[str]) -> List[Dict[str, str]]:
    """Dropdown options: the "all" entry followed by each pharmacy."""
    options = [{"label": ALL_PHARMACIES_LABEL, "value": ALL_PHARMACIES}]
    options.extend({"label": name, "value": name} for name in pharmacies)
    return options


class DashboardLayout:
    """
    Handles the layout and structure of the dashboard.
    """

    def __init__(
        self,
        config: DashboardConfig,
        pharmacies: Sequence[str],
        min_date: Optional[date] = None,
        max_date: Optional[date] = None,
        load_error: Optional[str] = None,
    ):
        """
        Initialize the dashboard layout.

        Args:
            config: Dashboard colours, fonts and title
            pharmacies: Pharmacy names for the filter dropdown
            min_date: Earliest selectable date
            max_date: Latest selectable date
            load_error: Message shown when the last load failed
        """
        self.config = config
        self.pharmacies = list(pharmacies)
        self.min_date = min_date
        self.max_date = max_date
        self.load_error = load_error

    def _filter_bar(self, label_style: Dict[str, str]) -> Any:
        return dbc.Row(
            [
                dbc.Col(
                    [
                        html.Label("Surgery date", style=label_style),
                        dcc.DatePickerRange(
                            id="date-range",
                            min_date_allowed=self.min_date,
                            max_date_allowed=self.max_date,
                            display_format="DD/MM/YYYY",
                            start_date_placeholder_text="From",
                            end_date_placeholder_text="To",
                            clearable=True,
                        ),
                    ],
                    md=5,
                ),
                dbc.Col(
                    [
                        html.Label("Pharmacy", style=label_style),
                        dcc.Dropdown(
                            id="pharmacy-dropdown",
                            options=pharmacy_dropdown_options(self.pharmacies),
                            value=ALL_PHARMACIES,
                            clearable=False,
                        ),
                    ],
                    md=5,
                ),
                dbc.Col(
                    dbc.Button(
                        "Reset filters",
                        id="reset-button",
                        color="secondary",
                        outline=True,
                        className="w-100",
                    ),
                    md=2,
                    className="d-flex align-items-end",
                ),
            ],
            className="p-3 mb-4 shadow-sm rounded g-3",
            style={"backgroundColor": "#FFFFFF"},
        )

    def create_layout(self) -> Any:
        """
        Create the dashboard layout.

        Returns:
            dbc.Container: Container with dashboard layout
        """
        theme = self.config.color_theme
        title_font = self.config.fonts.get("title_font", "Montserrat")
        body_font = self.config.fonts.get("body_font", "Open Sans")

        body_style = {
            "backgroundColor": theme.get("background", "#FFFFFF"),
            "fontFamily": f'"{body_font}", sans-serif',
            "color": theme.get("text", "#232323"),
        }
        heading_style = {
            "fontFamily": f'"{title_font}", sans-serif',
            "fontWeight": "700",
            "color": theme.get("headline", "#1B6CA8"),
        }
        label_style = {"fontWeight": "600", "marginBottom": "6px", "display": "block"}

        alert = (
            dbc.Alert(self.load_error, color="danger", className="mb-4")
            if self.load_error
            else None
        )

        return dbc.Container(
            [
                html.H1(self.config.title, className="text-center mt-4 mb-4", style=heading_style),
                html.Div(alert, id="load-status"),
                self._filter_bar(label_style),
                html.Div(id="summary-cards", className="mb-4"),
                dbc.Row(
                    dbc.Col(
                        dcc.Graph(id="daily-pharmacy-chart", style={"height": "450px"}),
                        width=12,
                    ),
                    className="mb-4",
                ),
                html.H4("Dispensings per day and pharmacy", className="mt-2 mb-3", style=heading_style),
                html.Div(id="pivot-table", className="mb-4"),
                html.H4("Latest records", className="mt-2 mb-3", style=heading_style),
                html.Div(id="detail-table", className="mb-5"),
            ],
            fluid=True,
            style=body_style,
        )
