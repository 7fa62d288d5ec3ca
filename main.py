#!/filepath: main.py
"""
Main module for the kit dispensing dashboard.

This module serves as the entry point of the application: it loads the
configuration, sets up logging and starts the dashboard server. Data is
fetched from the published sheet on every page load.
"""

import logging
import os
import sys
import traceback

from src.Config import Config
from src.DashboardController import DashboardController
from src.KitDashboard import KitDashboard
from src.category_mapper import PharmacyColorMapper
from src.logger import create_logger, resolve_level

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), "src", "config.yaml")


def log_error(logger: logging.Logger, error_message: str, traceback_str: str) -> None:
    """
    Log errors with traceback information.

    Args:
        logger: The logger to use
        error_message: The error message to log
        traceback_str: The traceback string to include
    """
    logger.error(f"Error occurred: {error_message}")
    logger.error(f"Traceback:\n{traceback_str}")


def main(config_path: str = DEFAULT_CONFIG_PATH) -> int:
    """
    Main application entry point.

    Returns:
        int: Exit code (0 for success, 1 for error)
    """
    logger = create_logger("kit_dashboard", level=logging.INFO, console=True)
    logger.info("Starting kit dispensing dashboard...")

    try:
        config = Config(config_path, logger)
    except FileNotFoundError:
        logger.critical(f"Configuration file not found at {config_path}")
        return 1
    except ValueError as e:
        logger.critical(f"Failed to load configuration: {e}")
        return 1

    log_dir = config.get("log_dir", "logs")
    level = resolve_level(config.get("log_level", "INFO"))
    if log_dir != "logs" or level != logging.INFO:
        logger = create_logger("kit_dashboard", level=level, log_dir=log_dir, console=True)
        logger.info(f"Log level set to {logging.getLevelName(level)}")

    try:
        controller = DashboardController(config, logger)
        color_mapper = PharmacyColorMapper(config, logger)
        dashboard = KitDashboard(config, logger, controller, color_mapper)

        port = config.get("dashboard.port", 8050)
        debug_mode = config.get("dashboard.debug_mode", False)
        dashboard.run_server(debug=debug_mode, port=port)
    except Exception as e:  # pylint: disable=broad-except
        log_error(logger, f"Failed to start dashboard: {str(e)}", traceback.format_exc())
        logger.critical(
            "The application has encountered a critical error and cannot continue."
        )
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
