"""Kalman filter building blocks."""
from .kf import kalman_filter, kalman_gain, get_solver, SOLVERS
from .common import joseph_update, standard_update

__all__ = [
    # Main filter
    'kalman_filter',
    # Gain
    'kalman_gain',
    'get_solver',
    'SOLVERS',
    # Covariance updates
    'joseph_update',
    'standard_update',
]
