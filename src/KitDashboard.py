#!/filepath: src/KitDashboard.py
"""
Dash application for the kit dispensing dashboard.

The layout is served by a function, so every page load reloads the
published sheet before the filters and figures are built, like a browser
refresh of the original page.
"""

import logging
from typing import Any, Optional, Tuple

import dash
import dash_bootstrap_components as dbc

from src.category_mapper import PharmacyColorMapper
from src.Config import Config
from src.DashboardController import DashboardController
from src.dashboard.callbacks import setup_callbacks
from src.dashboard.charts import ChartFactory, ChartStyler
from src.dashboard.components import CardCreator, DashboardConfig, TableBuilder
from src.dashboard.layouts import DashboardLayout
from src.DataWrangler import DataSourceError
from src.models import FilterState

LOAD_ERROR_MESSAGE = (
    "Could not download data from the published sheet. "
    "Check the sheet is public and the sheet name is correct."
)


class KitDashboard:
    """
    Wires the controller to the Dash app, layout and callbacks.

    Attributes:
        config: Application configuration
        logger: Logger instance for this class
        controller: Owner of the record set and derived views
        app: The Dash application
    """

    def __init__(
        self,
        config: Config,
        logger: logging.Logger,
        controller: Optional[DashboardController] = None,
        color_mapper: Optional[PharmacyColorMapper] = None,
    ):
        self.config = config
        self.logger = logger.getChild("KitDashboard")
        self.controller = controller or DashboardController(config, logger)
        self.color_mapper = color_mapper or PharmacyColorMapper(config, self.logger)

        self.dashboard_config = DashboardConfig(
            color_theme=config.get("color_theme", {}) or {},
            chart_styling=config.get("chart_styling", {}) or {},
            fonts=config.get("fonts", {}) or {},
            title=config.get("dashboard.title", "Kit Dispensing Dashboard"),
        )
        theme = self.dashboard_config.color_theme
        self.card_creator = CardCreator(theme)
        self.table_builder = TableBuilder(theme)
        self.chart_factory = ChartFactory(
            theme, ChartStyler(self.dashboard_config), self.color_mapper, self.logger
        )

        self.app = dash.Dash(
            __name__,
            title=self.dashboard_config.title,
            external_stylesheets=[dbc.themes.BOOTSTRAP],
        )
        self.app.layout = self.serve_layout
        setup_callbacks(self)

    def serve_layout(self) -> Any:
        """
        Reload the data and build the page.

        A failed download keeps the previously loaded records and shows an
        error banner instead of failing the page.
        """
        load_error = None
        try:
            self.controller.reload()
        except DataSourceError as e:
            self.logger.error(f"Error loading data: {e}")
            load_error = LOAD_ERROR_MESSAGE

        pharmacies = self.controller.pharmacy_options()
        self.color_mapper.register(pharmacies)
        overall = self.controller.process.summarize(self.controller.records)

        return DashboardLayout(
            self.dashboard_config,
            pharmacies,
            min_date=overall.min_date,
            max_date=overall.max_date,
            load_error=load_error,
        ).create_layout()

    def render_view(self, state: FilterState) -> Tuple[Any, ...]:
        """
        Build every filtered component for a filter state.

        Returns:
            Tuple of KPI cards, chart figure, pivot table and detail table
        """
        view = self.controller.apply_filter(state)
        return (
            self.card_creator.create_summary_cards(view.summary),
            self.chart_factory.create_daily_pharmacy_chart(view.chart),
            self.table_builder.create_pivot_table(view.pivot),
            self.table_builder.create_detail_table(view.detail),
        )

    def run_server(self, debug: bool = False, port: int = 8050) -> None:
        self.logger.info(f"Dashboard will run at http://127.0.0.1:{port}/")
        self.app.run(debug=debug, port=port)
