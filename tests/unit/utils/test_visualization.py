"""Smoke tests for plotting functions."""

import numpy as np
import pytest

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', '..'))

from lgssm.utils.timeseries import TimeSeries
from lgssm.utils.visualization import plot_time_series, plot_kalman_filter


class TestPlots:
    """Plots should render to file without error."""

    def test_plot_time_series(self, tmp_path):
        series = []
        for name in ('x_true', 'x_est'):
            ts = TimeSeries(name, 0.1, 1.0)
            for k in range(5):
                ts.record_value(0.1 * k)
            series.append(ts)
        path = tmp_path / "plots_x.png"

        plot_time_series(series, save_path=path, title="Position")

        assert path.exists()

    @pytest.mark.parametrize("n_x", [1, 2])
    def test_plot_kalman_filter(self, tmp_path, rng, n_x):
        T = 20
        t = np.arange(T) * 0.1
        xs = rng.standard_normal((T, n_x))
        m_filt = xs + 0.1 * rng.standard_normal((T, n_x))
        P_filt = np.array([0.01 * np.eye(n_x) for _ in range(T)])
        path = tmp_path / "kf.png"

        plot_kalman_filter(t, xs, m_filt, P_filt, save_path=path)

        assert path.exists()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
