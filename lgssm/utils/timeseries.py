"""Fixed-rate time series recorder."""
import csv

import numpy as np


class TimeSeries:
    """
    Record a scalar signal sampled at a fixed rate.

    Sample 0 holds `initial_value` at time 0; each `record_value` call
    appends the next sample. The series holds at most
    int(duration / sample_time) samples.

    Parameters
    ----------
    name : str
        Signal name, used as CSV column header and plot label
    sample_time : float
        Sampling period [s]
    duration : float
        Total recording time [s]
    initial_value : float
        Value at time 0
    """

    def __init__(self, name, sample_time, duration, initial_value=0.0):
        if sample_time <= 0:
            raise ValueError(f"sample_time must be positive, got {sample_time}")
        self.name = name
        self.sample_time = sample_time
        self.capacity = max(int(duration / sample_time), 1)
        self._values = np.zeros(self.capacity)
        self._values[0] = initial_value
        self._length = 1

    def __len__(self):
        return self._length

    def record_value(self, value):
        """Append the next sample. Raises IndexError when the series is full."""
        if self._length >= self.capacity:
            raise IndexError(f"TimeSeries '{self.name}' is full ({self.capacity} samples)")
        self._values[self._length] = value
        self._length += 1

    def value_at_step(self, step):
        """Return the sample recorded at `step`."""
        if not 0 <= step < self._length:
            raise IndexError(
                f"step {step} out of range for '{self.name}' ({self._length} samples)"
            )
        return self._values[step]

    @property
    def times(self):
        """Sample times of the recorded part [s]."""
        return np.arange(self._length) * self.sample_time

    @property
    def values(self):
        """Recorded samples."""
        return self._values[:self._length].copy()

    def to_csv(self, filepath):
        """Write the recorded samples as `time,<name>` rows."""
        with open(filepath, 'w', newline='') as f:
            writer = csv.writer(f)
            writer.writerow(['time', self.name])
            for t, v in zip(self.times, self.values):
                writer.writerow([f"{t:.6f}", repr(float(v))])
