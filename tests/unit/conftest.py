"""Shared pytest fixtures for unit tests."""

import numpy as np
import pytest

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from lgssm.ssm import LinearGaussianModel


def build_model(A, B, C, Q, R, m0, P0, **kwargs):
    """Construct a LinearGaussianModel from 2-D matrices."""
    A, B, C = np.atleast_2d(A), np.atleast_2d(B), np.atleast_2d(C)
    model = LinearGaussianModel(A.shape[0], B.shape[1], C.shape[0], **kwargs)
    model.set_mat_a(A)
    model.set_mat_b(B)
    model.set_mat_c(C)
    model.set_mat_q(Q)
    model.set_mat_r(R)
    model.init_state(m0, P0)
    return model


def snapshot(model):
    """Copy every matrix and vector owned by the model."""
    return {name: getattr(model, name) for name in ('A', 'B', 'C', 'Q', 'R', 'x', 'P')}


def assert_unchanged(model, before):
    """Assert the model still matches a snapshot taken earlier."""
    for name, value in before.items():
        np.testing.assert_array_equal(getattr(model, name), value, err_msg=name)


def check_psd(matrix, tol=1e-10):
    """Check if matrix is positive semi-definite."""
    return np.all(np.linalg.eigvalsh(matrix) >= -tol)


@pytest.fixture
def scalar_model():
    """1-D textbook model: A=1, B=0, C=1, Q=0, R=1, x0=0, P0=1."""
    return build_model([[1.0]], [[0.0]], [[1.0]], [0.0], [1.0], [0.0], [1.0])


@pytest.fixture
def cv_system():
    """Constant-velocity system matrices with position observed."""
    dt = 0.1
    A = np.array([[1.0, dt], [0.0, 1.0]])
    B = np.array([[0.5 * dt**2], [dt]])
    C = np.array([[1.0, 0.0]])
    Q = 0.01 * np.eye(2)
    R = np.array([[0.1]])
    m0 = np.zeros(2)
    P0 = np.eye(2)
    return {'A': A, 'B': B, 'C': C, 'Q': Q, 'R': R, 'm0': m0, 'P0': P0}


@pytest.fixture
def cv_model(cv_system):
    """Constant-velocity LinearGaussianModel."""
    return build_model(**cv_system)
