"""
Chart components for the kit dispensing dashboard.

This module contains the classes that build and style the Plotly figures
shown on the dashboard. A new figure is built on every refresh; no figure
object is reused between filter states.
"""

import logging
from typing import Any, Dict, Optional

import plotly.graph_objects as go

from src.category_mapper import PharmacyColorMapper
from src.models import ChartSeries

X_AXIS_TITLE = "Surgery date"
Y_AXIS_TITLE = "Dispensings (record count)"
GRID_COLOR = "rgba(35, 35, 35, 0.05)"

# Overridable through the chart_styling section of config.yaml
DEFAULT_CHART_STYLING: Dict[str, Any] = {
    "legend_orientation": "h",
    "legend_y": -0.25,
    "margin": {"l": 50, "r": 30, "t": 60, "b": 90},
    "title_size": 20,
}


class ChartStyler:
    """
    Applies the dashboard theme to a figure.
    """

    def __init__(self, config: Any):
        """
        Args:
            config: DashboardConfig with colours, fonts and chart settings
        """
        self.config = config
        self.settings = {**DEFAULT_CHART_STYLING, **(config.chart_styling or {})}

    def apply_styling(self, fig: go.Figure, title: str) -> go.Figure:
        """
        Apply title, theme colours, a bottom legend and unified hover.

        Args:
            fig: Figure to style in place
            title: Figure title

        Returns:
            go.Figure: The same figure
        """
        theme = self.config.color_theme
        fonts = self.config.fonts
        background = theme.get("background", "#FFFFFF")
        text_color = theme.get("text", "#232323")

        fig.update_layout(
            title={
                "text": title,
                "font": {
                    "color": theme.get("headline", "#1B6CA8"),
                    "family": fonts.get("title_font", "Montserrat"),
                    "size": self.settings["title_size"],
                },
            },
            font={"color": text_color, "family": fonts.get("body_font", "Open Sans")},
            plot_bgcolor=background,
            paper_bgcolor=background,
            xaxis={"gridcolor": GRID_COLOR},
            yaxis={"gridcolor": GRID_COLOR},
            legend={
                "orientation": self.settings["legend_orientation"],
                "y": self.settings["legend_y"],
                "yanchor": "top",
                "x": 0.5,
                "xanchor": "center",
                "bgcolor": background,
            },
            margin=self.settings["margin"],
            hoverlabel={"bgcolor": "white", "font": {"color": text_color}},
            hovermode="x unified",
        )
        return fig


class ChartFactory:
    """
    Builds the dashboard figures with consistent pharmacy colours.
    """

    def __init__(
        self,
        color_theme: dict,
        chart_styler: ChartStyler,
        color_mapper: PharmacyColorMapper,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the chart factory.

        Args:
            color_theme: Colour theme for the charts
            chart_styler: Chart styler instance for consistent styling
            color_mapper: Mapper giving each pharmacy a stable colour
            logger: Logger instance
        """
        self.color_theme = color_theme
        self.chart_styler = chart_styler
        self.color_mapper = color_mapper
        self.logger = logger or logging.getLogger(__name__)

    def create_empty_figure(self, title: str, message: str) -> go.Figure:
        """Blank figure carrying a centred message."""
        fig = go.Figure()
        fig.update_layout(
            title=title,
            plot_bgcolor=self.color_theme.get("background", "#FFFFFF"),
            xaxis=dict(visible=False),
            yaxis=dict(visible=False),
            annotations=[
                dict(
                    text=message,
                    showarrow=False,
                    xref="paper",
                    yref="paper",
                    x=0.5,
                    y=0.5,
                    font=dict(color=self.color_theme.get("text", "#232323")),
                )
            ],
        )
        return fig

    def create_daily_pharmacy_chart(self, chart: ChartSeries) -> go.Figure:
        """
        Line chart of daily dispensing counts, one line per pharmacy.

        Args:
            chart: Dense series aligned to the date labels

        Returns:
            go.Figure: Plotly figure for the dashboard
        """
        title = "Daily dispensings by pharmacy"
        if chart.is_empty():
            return self.create_empty_figure(
                title, "No dispensings for the selected filters"
            )

        fig = go.Figure()
        for line in chart.series:
            color = self.color_mapper.get_color(line.name)
            fig.add_trace(
                go.Scatter(
                    x=list(chart.labels),
                    y=list(line.values),
                    name=line.name,
                    mode="lines+markers",
                    line=dict(color=color, width=2, shape="spline", smoothing=0.4),
                    marker=dict(size=6, color=color),
                    hovertemplate=f"{line.name}: %{{y}} dispensings<extra></extra>",
                )
            )

        fig = self.chart_styler.apply_styling(fig, title)
        fig.update_layout(
            xaxis=dict(title=dict(text=X_AXIS_TITLE), type="category", tickangle=0),
            yaxis=dict(title=dict(text=Y_AXIS_TITLE), rangemode="tozero"),
        )
        self.logger.debug(
            f"Built chart with {len(chart.series)} series over {len(chart.labels)} days"
        )
        return fig
