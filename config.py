"""
Chart configuration.
Values come from the environment (or a .env file) with sensible defaults.
"""

import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")


# Input data and field selection
CHART_CONFIG = {
    "data_path": os.getenv("CHART_DATA_PATH", "./data/barData.csv"),
    "category_field": os.getenv("CHART_CATEGORY_FIELD", "year"),
    "value_field": os.getenv("CHART_VALUE_FIELD", "avg_views"),
    "grid_step": _float_env("CHART_GRID_STEP", 0.05),  # 1/20 of a unit
    "tick_count": 10,
    "title": os.getenv("CHART_TITLE") or None,

    # Write an HTML file instead of opening the chart
    "output_html": os.getenv("CHART_OUTPUT_HTML") or None
}

# Drawing surface (full size, margins inside it)
VIEWPORT_CONFIG = {
    "surface_width": _float_env("CHART_WIDTH", 960),
    "surface_height": _float_env("CHART_HEIGHT", 500),
    "margin_top": 50,
    "margin_left": 70,
    "margin_bottom": 20,
    "margin_right": 10
}

# Application Configuration
APP_CONFIG = {
    "debug": os.getenv("DEBUG", "false").lower() == "true",
    "name": "Season Viewership Chart",
    "version": "1.0.0"
}

# Logging Configuration
LOG_CONFIG = {
    "level": "INFO" if not APP_CONFIG["debug"] else "DEBUG",
    "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
}


def check_config():
    """Check configuration and provide helpful messages."""
    import logging

    logger = logging.getLogger(__name__)

    if not os.path.exists(CHART_CONFIG["data_path"]):
        logger.warning(f"Data file not found: {CHART_CONFIG['data_path']} (set CHART_DATA_PATH)")

    if CHART_CONFIG["output_html"]:
        logger.info(f"Chart will be written to {CHART_CONFIG['output_html']} instead of shown")

    if APP_CONFIG["debug"]:
        logger.info(f"Starting {APP_CONFIG['name']} (Debug Mode)")


# Run config check on import
check_config()
