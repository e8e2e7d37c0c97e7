"""
Visualization utilities for state estimation.

- filters: recorded time series overlays and Kalman filter bands
"""
from .filters import (
    plot_time_series,
    plot_kalman_filter,
    DEFAULT_COLORS,
    DEFAULT_LINESTYLES,
)

__all__ = [
    'plot_time_series',
    'plot_kalman_filter',
    'DEFAULT_COLORS',
    'DEFAULT_LINESTYLES',
]
