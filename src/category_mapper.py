#!/filepath: src/category_mapper.py
"""
Colour mapping for pharmacies in the kit dispensing dashboard.

Each pharmacy keeps the same colour on every refresh, whatever filter is
active, so lines stay recognisable as the chart is redrawn.
"""

import logging
from typing import Dict, Iterable, List, Optional

from src.Config import Config

DEFAULT_COLOR = "#6C757D"


class PharmacyColorMapper:
    """
    Maps pharmacy names to stable colours.

    Explicit colours come from the ``pharmacy_colors`` setting. Other
    pharmacies are assigned palette colours in sorted-name order, cycling
    when there are more pharmacies than colours.
    """

    def __init__(self, config: Config, logger: Optional[logging.Logger] = None):
        """
        Initialize the mapper with configuration.

        Args:
            config: Application configuration with palette and explicit colours
            logger: Logger instance for logging mapping events
        """
        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        self._explicit: Dict[str, str] = dict(self.config.get("pharmacy_colors", {}) or {})
        self._palette: List[str] = list(
            self.config.get("color_palette.categories", []) or []
        )
        self._assigned: Dict[str, str] = {}

        if not self._palette:
            self.logger.warning(
                f"No colour palette configured, using {DEFAULT_COLOR} for all pharmacies"
            )

    def register(self, pharmacies: Iterable[str]) -> None:
        """
        Assign palette colours to pharmacies not yet mapped.

        Call with the full pharmacy list after each load so assignment does
        not depend on the active filter.
        """
        new_names = sorted(
            set(pharmacies) - set(self._explicit) - set(self._assigned)
        )
        for name in new_names:
            self._assigned[name] = self._next_color()
        if new_names:
            self.logger.info(f"Assigned colours to {len(new_names)} pharmacies")

    def _next_color(self) -> str:
        if not self._palette:
            return DEFAULT_COLOR
        return self._palette[len(self._assigned) % len(self._palette)]

    def get_color(self, pharmacy: str) -> str:
        """Colour for a pharmacy, assigning one on first use."""
        if pharmacy in self._explicit:
            return self._explicit[pharmacy]
        if pharmacy not in self._assigned:
            self._assigned[pharmacy] = self._next_color()
        return self._assigned[pharmacy]
