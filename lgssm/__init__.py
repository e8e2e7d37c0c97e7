"""
Linear Gaussian state-space estimation.

This package contains:
- LinearGaussianModel: a single state-space component usable as true-system
  simulator, Kalman filter or dead-reckoning integrator
- Kalman gain solvers and a batch filter runner
- Vehicle simulation scenario, recording, metrics and plots
"""
from .errors import ModelError, DimensionMismatch, SingularInnovationCovariance
from .ssm import LinearGaussianModel

__all__ = [
    'ModelError',
    'DimensionMismatch',
    'SingularInnovationCovariance',
    'LinearGaussianModel',
]
