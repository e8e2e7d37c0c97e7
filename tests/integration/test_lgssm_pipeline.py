"""Integration tests for the Linear Gaussian SSM pipeline."""

import numpy as np
import pytest

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from lgssm.ssm import LinearGaussianModel, linear_gaussian_ssm, gaussian_noise
from lgssm.filters import kalman_filter
from lgssm.utils.metrics import normalized_squared_error, rmse


def _model(A, C, Q, R, m0, P0, **kwargs):
    n_x, n_y = A.shape[0], C.shape[0]
    model = LinearGaussianModel(n_x, 1, n_y, **kwargs)
    model.set_mat_a(A)
    model.set_mat_b(np.zeros(n_x))
    model.set_mat_c(C)
    model.set_mat_q(Q)
    model.set_mat_r(R)
    model.init_state(m0, P0)
    return model


@pytest.fixture
def lgssm_data(rng):
    """Generate LGSSM data for testing."""
    A = np.array([[1.0, 0.1], [0.0, 0.95]])
    Q = 0.01 * np.eye(2)
    C = np.eye(2)
    R = 0.01 * np.eye(2)
    Sigma = np.eye(2)
    T = 100

    x0 = rng.multivariate_normal(np.zeros(2), Sigma)
    true_model = _model(A, C, Q, R, x0, np.zeros((2, 2)))
    xs, ys = linear_gaussian_ssm(true_model, None,
                                 gaussian_noise(rng, Q, T), gaussian_noise(rng, R, T))

    return {
        'A': A, 'C': C, 'Q': Q, 'R': R, 'Sigma': Sigma,
        'm0': np.zeros(2), 'xs': xs, 'ys': ys, 'T': T
    }


class TestKFOnLGSSM:
    """Test Kalman Filter on LGSSM."""

    def test_kf_on_lgssm(self, lgssm_data):
        """KF should be optimal for LGSSM, NEES should be approximately n_x."""
        d = lgssm_data
        model = _model(d['A'], d['C'], d['Q'], d['R'], d['m0'], d['Sigma'])

        m_filt, P_filt, cond_nums = kalman_filter(model, d['ys'])

        # For consistent filter, mean NEES should be approximately n_x = 2
        nees = normalized_squared_error(d['xs'] - m_filt, P_filt)
        mean_nees = np.mean(nees)
        assert 0.5 < mean_nees < 4.0, f"Mean NEES = {mean_nees}"

        assert np.all(rmse(m_filt, d['xs']) < 1.0)

    def test_nis_consistent(self, lgssm_data):
        """Mean NIS should be approximately n_y for a matched model."""
        d = lgssm_data
        model = _model(d['A'], d['C'], d['Q'], d['R'], d['m0'], d['Sigma'])

        innovations, S_innov = [], []
        for t in range(d['T']):
            model.predict_nextstate([0.0])
            model.update_nextstate(d['ys'][t])
            innovations.append(model.innovation)
            S_innov.append(model.innovation_covariance)

        nis = normalized_squared_error(innovations, S_innov)
        assert 0.5 < np.mean(nis) < 4.0, f"Mean NIS = {np.mean(nis)}"

    def test_filter_beats_raw_observations(self, lgssm_data):
        """Filtered estimates should be closer to the truth than the raw sensor."""
        d = lgssm_data
        model = _model(d['A'], d['C'], d['Q'], d['R'], d['m0'], d['Sigma'])

        m_filt, _, _ = kalman_filter(model, d['ys'])

        # Skip the transient from the diffuse prior
        assert rmse(m_filt[10:], d['xs'][10:]).sum() < rmse(d['ys'][10:], d['xs'][10:]).sum()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
