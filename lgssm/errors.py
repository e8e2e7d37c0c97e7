"""Error types raised by the state-space models and filters."""
import numpy as np


class ModelError(Exception):
    """Base class for all model errors."""


class DimensionMismatch(ModelError, ValueError):
    """
    An argument's length does not match the dimensions fixed at construction.

    Parameters
    ----------
    name : str
        Name of the offending argument (e.g. 'A', 'input')
    expected : int
        Number of elements the model expects
    actual : int
        Number of elements received
    """

    def __init__(self, name, expected, actual):
        self.name = name
        self.expected = expected
        self.actual = actual
        super().__init__(f"{name}: expected {expected} elements, got {actual}")


class SingularInnovationCovariance(ModelError, np.linalg.LinAlgError):
    """The innovation covariance S = C P C' + R could not be solved against."""
