"""State Space Model implementations."""
from .linear_gaussian import LinearGaussianModel, linear_gaussian_ssm, gaussian_noise

__all__ = [
    'LinearGaussianModel',
    'linear_gaussian_ssm',
    'gaussian_noise',
]
