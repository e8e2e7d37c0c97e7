"""
Utility Functions.

This module contains utility functions for:
- Time series recording and CSV export
- Tracking error and consistency metrics
- Visualization (organized in visualization/ subfolder)
"""
from .timeseries import TimeSeries
from .metrics import (
    rmse,
    normalized_squared_error,
    chi2_interval,
    covariance_health,
)
from .visualization import plot_time_series, plot_kalman_filter

__all__ = [
    # recording
    'TimeSeries',
    # metrics
    'rmse',
    'normalized_squared_error',
    'chi2_interval',
    'covariance_health',
    # visualization
    'plot_time_series',
    'plot_kalman_filter',
]
