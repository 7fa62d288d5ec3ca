#!/filepath: src/DashboardController.py
"""
Controller owning the dashboard's in-memory state.

The full record set is replaced wholesale on every reload and every view is
recomputed from it; nothing derived is cached between filter changes.
"""

import logging
from typing import List, Optional, Tuple

from src.Config import Config
from src.DataWrangler import DataSourceError, DataWrangler
from src.models import (
    ALL_PHARMACIES,
    DashboardView,
    FilterState,
    LoadResult,
    Record,
)
from src.Process import Process

DEFAULT_DETAIL_ROW_LIMIT = 100


class DashboardController:
    """
    Holds the loaded records and derives views for filter states.

    Attributes:
        config: Application configuration
        logger: Logger instance for this class
        data_wrangler: Loader for the published sheet
        process: Filtering and aggregation component
        last_load: Result of the last successful reload, if any
    """

    def __init__(
        self,
        config: Config,
        logger: logging.Logger,
        data_wrangler: Optional[DataWrangler] = None,
        process: Optional[Process] = None,
    ):
        self.config = config
        self.logger = logger.getChild("DashboardController")
        self.data_wrangler = data_wrangler or DataWrangler(config, logger)
        self.process = process or Process(logger)
        self.last_load: Optional[LoadResult] = None
        self._records: Tuple[Record, ...] = ()

    @property
    def records(self) -> Tuple[Record, ...]:
        """Full record set from the last successful load."""
        return self._records

    @property
    def detail_row_limit(self) -> int:
        return int(self.config.get("detail_row_limit", DEFAULT_DETAIL_ROW_LIMIT))

    def reload(self) -> LoadResult:
        """
        Fetch the sheet again and replace the record set.

        Raises:
            DataSourceError: If the download fails; the previous records
                stay in place
        """
        try:
            result = self.data_wrangler.load_records()
        except DataSourceError:
            self.logger.error(
                f"Reload failed, keeping {len(self._records)} previously loaded records"
            )
            raise

        self._records = result.records
        self.last_load = result
        self.logger.info(f"Loaded records: {result.get_summary()}")
        return result

    @staticmethod
    def default_filter() -> FilterState:
        """Filter state after a reset: no dates, all pharmacies."""
        return FilterState(None, None, ALL_PHARMACIES)

    def pharmacy_options(self) -> List[str]:
        """Pharmacies present in the full record set, sorted."""
        return self.process.pharmacy_names(self._records)

    def apply_filter(self, state: Optional[FilterState] = None) -> DashboardView:
        """
        Recompute every derived figure for a filter state.

        Args:
            state: Filters to apply; defaults to no filtering

        Returns:
            DashboardView: Summary, pivot, chart series and detail rows
        """
        state = state or self.default_filter()
        filtered = self.process.filter_records(self._records, state)
        pivot = self.process.pivot_by_day_and_pharmacy(filtered)

        return DashboardView(
            filter_state=state,
            summary=self.process.summarize(filtered),
            pivot=pivot,
            chart=self.process.to_chart_series(pivot),
            detail=self.process.detail_records(filtered, self.detail_row_limit),
        )
