"""Simulation configuration."""
import hashlib
import json
from dataclasses import asdict, dataclass, fields
from typing import Optional

SCENARIOS = ('velocity', 'position_velocity')

# Velocity sensor noise std used when none is given
DEFAULT_SENSOR_SIGMA = {
    'velocity': 5.1,
    'position_velocity': 1.0,
}


@dataclass
class SimulationConfig:
    """
    Parameters of a vehicle simulation run.

    Noise parameters are standard deviations of zero-mean Gaussian samples.

    Attributes
    ----------
    scenario : str
        'velocity' (velocity sensor only) or 'position_velocity'
        (both states observed)
    sample_time : float
        Discretisation step dt [s]
    simulation_time : float
        Total simulated time [s]
    sigma_pos : float
        Noise on the applied acceleration and on the true position
    sigma_sensor : float, optional
        Sensor noise; defaults per scenario
    seed : int, optional
        Seed for numpy.random.default_rng
    """
    scenario: str = 'velocity'
    sample_time: float = 0.01
    simulation_time: float = 100.0
    sigma_pos: float = 0.01
    sigma_sensor: Optional[float] = None
    seed: Optional[int] = 42

    def __post_init__(self):
        if self.scenario not in SCENARIOS:
            raise ValueError(f"Unknown scenario '{self.scenario}', expected one of {SCENARIOS}")
        if self.sample_time <= 0 or self.simulation_time <= 0:
            raise ValueError("sample_time and simulation_time must be positive")
        if self.sigma_sensor is None:
            self.sigma_sensor = DEFAULT_SENSOR_SIGMA[self.scenario]

    @property
    def n_steps(self):
        """Number of samples in a run, including the initial one."""
        return int(self.simulation_time / self.sample_time)

    def to_dict(self):
        return asdict(self)

    def config_hash(self):
        """Short md5 hash of the configuration, for naming result folders."""
        key_str = json.dumps(self.to_dict(), sort_keys=True)
        return hashlib.md5(key_str.encode()).hexdigest()[:12]

    @classmethod
    def from_dict(cls, data):
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")
        return cls(**data)

    @classmethod
    def from_json(cls, filepath):
        with open(filepath) as f:
            return cls.from_dict(json.load(f))

    def to_json(self, filepath):
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)
