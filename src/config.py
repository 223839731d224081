"""
Configuration module for the task analytics engine.
Contains weighting tables, grading thresholds and forecast defaults.
"""

import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Numeric presentation
ROUNDING_DECIMALS = 2  # ROI, revenue/hour and average ROI are reported to cents

# Priority weights (comparison only, never stored on a task)
PRIORITY_WEIGHTS = {
    "High": 3,
    "Medium": 2,
    "Low": 1,
}

# Pipeline stage weights used for risk-adjusted pipeline value
STATUS_WEIGHTS = {
    "Todo": 0.1,
    "In Progress": 0.5,
    "Done": 1.0,
}

# Performance grade thresholds on average ROI
PERFORMANCE_GRADE_EXCELLENT_ABOVE = float(os.getenv("PERFORMANCE_GRADE_EXCELLENT_ABOVE", "500"))  # strict >
PERFORMANCE_GRADE_GOOD_FROM = float(os.getenv("PERFORMANCE_GRADE_GOOD_FROM", "200"))  # inclusive >=

# Forecast Configuration
DEFAULT_FORECAST_HORIZON_WEEKS = int(os.getenv("FORECAST_HORIZON_WEEKS", "4"))
MIN_FORECAST_POINTS = 2  # A trend needs at least two observations

# Time constants
SECONDS_PER_DAY = 24 * 60 * 60
