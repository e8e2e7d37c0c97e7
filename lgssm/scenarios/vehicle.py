"""
One-dimensional vehicle scenario.

A vehicle with state [position, velocity] is driven by a periodic
acceleration profile. Three independently configured models run side by
side:

- true system: simulated with sampled input and process noise
- estimator: Kalman filter fed with the nominal acceleration and the
  noisy sensor reading
- odometry: dead reckoning that integrates the measured velocity
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List

import numpy as np

from ..errors import SingularInnovationCovariance
from ..ssm import LinearGaussianModel
from ..utils.metrics import chi2_interval, normalized_squared_error, rmse
from ..utils.timeseries import TimeSeries
from .config import SimulationConfig

logger = logging.getLogger(__name__)

ROLES = ('true', 'est', 'odo')


def acceleration_profile(t):
    """
    Nominal acceleration [m/s^2] at time t [s].

    The profile repeats every 10 s: rest, accelerate for 2 s, coast,
    brake for 2 s, rest.
    """
    tau = t % 10.0
    if tau < 1.0:
        return 0.0
    elif tau < 3.0:
        return 1.0
    elif tau < 5.0:
        return 0.0
    elif tau < 7.0:
        return -1.0
    return 0.0


def _constant_velocity(model, dt):
    model.init_state([0.0, 0.0], [0.01, 0.0, 0.0, 0.001])
    model.set_mat_a([1.0, dt, 0.0, 1.0])
    model.set_mat_b([0.0, dt])
    model.set_mat_q([0.1, 0.0, 0.0, 0.1])
    return model


def create_velocity_model(dt):
    """Constant-velocity model observed by a velocity sensor only."""
    model = _constant_velocity(LinearGaussianModel(2, 1, 1), dt)
    model.set_mat_c([0.0, 1.0])
    model.set_mat_r([0.1])
    return model


def create_position_velocity_model(dt):
    """Constant-velocity model with both position and velocity observed."""
    model = _constant_velocity(LinearGaussianModel(2, 1, 2), dt)
    model.set_mat_c([1.0, 0.0, 0.0, 1.0])
    model.set_mat_r([0.05, 0.0, 0.0, 0.05])
    return model


def create_odometry_model(dt):
    """
    Dead-reckoning model: position integrates the measured velocity.

    The velocity row of A is zero, so the velocity state is replaced each
    step by the input (the measured wheel speed).
    """
    model = LinearGaussianModel(2, 1, 1)
    model.init_state([0.0, 0.0], [0.1, 0.0, 0.0, 0.1])
    model.set_mat_a([1.0, dt, 0.0, 0.0])
    model.set_mat_b([0.0, 1.0])
    model.set_mat_c([0.0, 1.0])
    model.set_mat_q([0.01, 0.0, 0.0, 0.001])
    model.set_mat_r([0.05])
    return model


MODEL_FACTORIES = {
    'velocity': create_velocity_model,
    'position_velocity': create_position_velocity_model,
}


@dataclass
class SimulationResult:
    """
    Recorded output of `run_simulation`.

    Attributes
    ----------
    config : SimulationConfig
        Configuration the run used
    series : dict
        TimeSeries keyed 'x_true', 'v_true', 'x_est', 'v_est', 'x_odo', 'v_odo'
    P_est : ndarray [n_steps, 2, 2]
        Estimator covariance at each sample (index 0 is the initial P)
    innovations : list of ndarray [n_y]
        Innovations of successful updates
    innovation_covs : list of ndarray [n_y, n_y]
        Innovation covariances of successful updates
    skipped_updates : int
        Updates skipped because S was singular
    """
    config: SimulationConfig
    series: Dict[str, TimeSeries]
    P_est: np.ndarray = field(repr=False)
    innovations: List[np.ndarray] = field(default_factory=list, repr=False)
    innovation_covs: List[np.ndarray] = field(default_factory=list, repr=False)
    skipped_updates: int = 0

    def states(self, role):
        """Recorded [position, velocity] of a role as ndarray [n, 2]."""
        return np.stack([self.series[f'x_{role}'].values,
                         self.series[f'v_{role}'].values], axis=1)

    def final_positions(self):
        """Last recorded position of each role."""
        return {role: float(self.series[f'x_{role}'].values[-1]) for role in ROLES}

    def summary(self):
        """RMSE of estimator and odometry against the true system, plus NIS."""
        summary = {f'x_{role}_final': x for role, x in self.final_positions().items()}
        truth = self.states('true')
        for role in ('est', 'odo'):
            rmse_x, rmse_v = rmse(self.states(role), truth)
            summary[f'rmse_x_{role}'] = float(rmse_x)
            summary[f'rmse_v_{role}'] = float(rmse_v)
        if self.innovations:
            nis = normalized_squared_error(self.innovations, self.innovation_covs)
            summary['mean_nis'] = float(np.mean(nis))
            # Band the mean NIS should fall in if R and Q match the sensor
            summary['nis_interval'] = list(chi2_interval(self.innovations[0].size, len(nis)))
        summary['skipped_updates'] = self.skipped_updates
        return summary


def run_simulation(config=None, rng=None):
    """
    Run the vehicle scenario.

    Parameters
    ----------
    config : SimulationConfig, optional
        Run parameters (default: SimulationConfig())
    rng : numpy.random.Generator, optional
        Noise source. If None, default_rng(config.seed) is used.

    Returns
    -------
    SimulationResult
    """
    if config is None:
        config = SimulationConfig()
    if rng is None:
        rng = np.random.default_rng(config.seed)

    dt = config.sample_time
    factory = MODEL_FACTORIES[config.scenario]
    models = {
        'true': factory(dt),
        'est': factory(dt),
        'odo': create_odometry_model(dt),
    }
    n_y = models['true'].output_dim

    series = {}
    for role in ROLES:
        for name in ('x', 'v'):
            key = f'{name}_{role}'
            series[key] = TimeSeries(key, dt, config.simulation_time)

    P_est = np.zeros((max(config.n_steps, 1), 2, 2))
    P_est[0] = models['est'].P
    result = SimulationResult(config=config, series=series, P_est=P_est)

    logger.info("Running '%s' scenario: %d steps, dt=%g",
                config.scenario, config.n_steps, dt)

    for step in range(1, config.n_steps):
        t = step * dt
        accr = acceleration_profile(t)

        state_true = models['true'].sim_nextstate(
            [accr + rng.normal(0.0, config.sigma_pos)],
            [rng.normal(0.0, config.sigma_pos), 0.0],
        )

        y = models['true'].observation(rng.normal(0.0, config.sigma_sensor, size=n_y))

        # Wheel speed is the last observed component in every scenario
        state_odo = models['odo'].predict_nextstate([y[-1]])

        state_est = models['est'].predict_nextstate([accr])
        try:
            state_est = models['est'].update_nextstate(y)
        except SingularInnovationCovariance as e:
            result.skipped_updates += 1
            logger.warning("Step %d: measurement update skipped (%s)", step, e)
        else:
            result.innovations.append(models['est'].innovation)
            result.innovation_covs.append(models['est'].innovation_covariance)

        for role, state in (('true', state_true), ('est', state_est), ('odo', state_odo)):
            series[f'x_{role}'].record_value(state[0])
            series[f'v_{role}'].record_value(state[1])
        P_est[step] = models['est'].P

    final = result.final_positions()
    logger.info("x_true = %.4f, x_est = %.4f, x_odo = %.4f",
                final['true'], final['est'], final['odo'])
    return result
