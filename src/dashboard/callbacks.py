#!/filepath: src/dashboard/callbacks.py
"""
Dashboard callbacks module for the interactive filters.

Every change to the date range or the pharmacy selection recomputes the
whole view from the controller's record set. The reset button clears the
filter inputs, which in turn triggers a refresh.
"""

from typing import Any, Optional, Tuple

from dash import Input, Output

from src.models import ALL_PHARMACIES, FilterState


def setup_callbacks(dashboard_instance) -> None:
    """
    Set up the dashboard callbacks to respond to user interactions.

    Args:
        dashboard_instance: The KitDashboard instance holding the app, the
            controller and the rendering components
    """

    @dashboard_instance.app.callback(
        [
            Output("summary-cards", "children"),
            Output("daily-pharmacy-chart", "figure"),
            Output("pivot-table", "children"),
            Output("detail-table", "children"),
        ],
        [
            Input("date-range", "start_date"),
            Input("date-range", "end_date"),
            Input("pharmacy-dropdown", "value"),
        ],
    )
    def update_dashboard(
        start_date: Optional[str], end_date: Optional[str], pharmacy: Optional[str]
    ) -> Tuple[Any, ...]:
        """
        Update all dashboard components for the selected filters.

        Args:
            start_date: Start date from the picker ("YYYY-MM-DD") or None
            end_date: End date from the picker ("YYYY-MM-DD") or None
            pharmacy: Selected pharmacy or the "all" value

        Returns:
            Tuple containing all dashboard components in Output order
        """
        state = FilterState.from_inputs(start_date, end_date, pharmacy)
        return dashboard_instance.render_view(state)

    @dashboard_instance.app.callback(
        [
            Output("date-range", "start_date"),
            Output("date-range", "end_date"),
            Output("pharmacy-dropdown", "value"),
        ],
        Input("reset-button", "n_clicks"),
        prevent_initial_call=True,
    )
    def reset_filters(_n_clicks: Optional[int]) -> Tuple[Any, ...]:
        """Clear both dates and select every pharmacy."""
        dashboard_instance.logger.info("Filters reset")
        return None, None, ALL_PHARMACIES
