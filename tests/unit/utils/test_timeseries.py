"""Unit tests for the TimeSeries recorder."""

import csv

import numpy as np
import pytest

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', '..'))

from lgssm.utils.timeseries import TimeSeries


class TestTimeSeries:
    """Tests for TimeSeries."""

    def test_initial_sample(self):
        ts = TimeSeries('x', 0.5, 2.0, initial_value=1.5)

        assert ts.capacity == 4
        assert len(ts) == 1
        assert ts.value_at_step(0) == 1.5

    def test_record_and_read(self):
        ts = TimeSeries('x', 0.5, 2.0)
        for v in (1.0, 2.0, 3.0):
            ts.record_value(v)

        np.testing.assert_array_equal(ts.values, [0.0, 1.0, 2.0, 3.0])
        np.testing.assert_allclose(ts.times, [0.0, 0.5, 1.0, 1.5])
        assert ts.value_at_step(3) == 3.0

    def test_full_raises(self):
        ts = TimeSeries('x', 0.5, 1.0)
        ts.record_value(1.0)

        with pytest.raises(IndexError, match="full"):
            ts.record_value(2.0)

    @pytest.mark.parametrize("step", [-1, 2])
    def test_value_at_step_out_of_range(self, step):
        ts = TimeSeries('x', 0.1, 1.0)
        ts.record_value(1.0)

        with pytest.raises(IndexError):
            ts.value_at_step(step)

    def test_values_is_copy(self):
        ts = TimeSeries('x', 0.1, 1.0)
        values = ts.values
        values[0] = 99.0

        assert ts.value_at_step(0) == 0.0

    def test_invalid_sample_time(self):
        with pytest.raises(ValueError):
            TimeSeries('x', 0.0, 1.0)

    def test_to_csv(self, tmp_path):
        ts = TimeSeries('v_est', 0.25, 1.0)
        ts.record_value(0.5)
        ts.record_value(-1.25)
        path = tmp_path / "v_est.csv"

        ts.to_csv(path)

        with open(path, newline='') as f:
            rows = list(csv.reader(f))
        assert rows[0] == ['time', 'v_est']
        assert len(rows) == 4
        np.testing.assert_allclose([float(r[0]) for r in rows[1:]], [0.0, 0.25, 0.5])
        np.testing.assert_allclose([float(r[1]) for r in rows[1:]], [0.0, 0.5, -1.25])


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
