"""Linear Gaussian State Space Model (LGSSM)."""
import numpy as np

from ..errors import DimensionMismatch
from ..filters.common import joseph_update, standard_update
from ..filters.kf import get_solver, kalman_gain


def _leaf_count(values):
    """Number of scalars in a possibly ragged nested sequence."""
    try:
        return np.array(values, dtype=float).size
    except ValueError:
        if isinstance(values, (str, bytes)) or not np.iterable(values):
            raise
        return sum(_leaf_count(v) for v in values)


def _flatten(values, expected, name):
    """Return `values` as a flat float array, checking its length first."""
    try:
        arr = np.array(values, dtype=float).ravel()
    except ValueError:
        # Ragged rows have no row-major layout
        raise DimensionMismatch(name, expected, _leaf_count(values)) from None
    if arr.size != expected:
        raise DimensionMismatch(name, expected, arr.size)
    return arr


class LinearGaussianModel:
    """Discrete-time linear Gaussian state-space model with Kalman recursion.

    x_{t+1} = A x_t + B u_t + v_t,    v_t ~ N(0, Q)
    y_t     = C x_t + w_t,            w_t ~ N(0, R)

    The same component serves as true-system simulator (`sim_nextstate`,
    `observation`), Kalman estimator (`predict_nextstate`, `update_nextstate`)
    or dead-reckoning integrator (`predict_nextstate` only); the role is
    decided entirely by the matrices the caller configures.

    All matrices start zero-filled. Setters take row-major flat sequences
    (or arrays of any shape with the right number of elements). Every entry
    point validates lengths before touching any state.

    Parameters
    ----------
    state_dim : int
        Dimension n_x of the state
    input_dim : int
        Dimension n_u of the control input
    output_dim : int
        Dimension n_y of the observation
    solver : str
        Gain solver: 'lu', 'cholesky' or 'inv' (default: 'lu')
    joseph : bool
        Use Joseph stabilized covariance update (default: False)
    """

    def __init__(self, state_dim, input_dim, output_dim, solver='lu', joseph=False):
        for name, dim in (('state_dim', state_dim), ('input_dim', input_dim),
                          ('output_dim', output_dim)):
            if int(dim) != dim or dim < 0:
                raise ValueError(f"{name} must be a non-negative integer, got {dim}")

        self.state_dim = int(state_dim)
        self.input_dim = int(input_dim)
        self.output_dim = int(output_dim)

        get_solver(solver)
        self.solver = solver
        self.joseph = joseph

        n_x, n_u, n_y = self.state_dim, self.input_dim, self.output_dim
        self._A = np.zeros((n_x, n_x))
        self._B = np.zeros((n_x, n_u))
        self._C = np.zeros((n_y, n_x))
        self._Q = np.zeros((n_x, n_x))
        self._R = np.zeros((n_y, n_y))
        self._x = np.zeros(n_x)
        self._P = np.zeros((n_x, n_x))

        self._innovation = None
        self._S = None

    def __repr__(self):
        return (f"{type(self).__name__}(state_dim={self.state_dim}, "
                f"input_dim={self.input_dim}, output_dim={self.output_dim})")

    @property
    def A(self):
        """State transition matrix [n_x, n_x]."""
        return self._A.copy()

    @property
    def B(self):
        """Input matrix [n_x, n_u]."""
        return self._B.copy()

    @property
    def C(self):
        """Observation matrix [n_y, n_x]."""
        return self._C.copy()

    @property
    def Q(self):
        """Process noise covariance [n_x, n_x]."""
        return self._Q.copy()

    @property
    def R(self):
        """Observation noise covariance [n_y, n_y]."""
        return self._R.copy()

    @property
    def x(self):
        """Current state estimate [n_x]."""
        return self._x.copy()

    @property
    def P(self):
        """Current error covariance [n_x, n_x]."""
        return self._P.copy()

    @property
    def innovation(self):
        """Innovation y - C x of the last update, or None."""
        return None if self._innovation is None else self._innovation.copy()

    @property
    def innovation_covariance(self):
        """Innovation covariance S of the last update, or None."""
        return None if self._S is None else self._S.copy()

    def init_state(self, initial_state, initial_covariance):
        """Set the state estimate x and error covariance P."""
        n_x = self.state_dim
        x = _flatten(initial_state, n_x, 'initial_state')
        P = _flatten(initial_covariance, n_x * n_x, 'initial_covariance')
        self._x = x
        self._P = P.reshape(n_x, n_x)

    def set_mat_a(self, values):
        """Set the state transition matrix A (row-major, n_x * n_x values)."""
        n_x = self.state_dim
        self._A = _flatten(values, n_x * n_x, 'A').reshape(n_x, n_x)

    def set_mat_b(self, values):
        """Set the input matrix B (row-major, n_x * n_u values)."""
        n_x, n_u = self.state_dim, self.input_dim
        self._B = _flatten(values, n_x * n_u, 'B').reshape(n_x, n_u)

    def set_mat_c(self, values):
        """Set the observation matrix C (row-major, n_y * n_x values)."""
        n_y, n_x = self.output_dim, self.state_dim
        self._C = _flatten(values, n_y * n_x, 'C').reshape(n_y, n_x)

    def set_mat_q(self, values):
        """Set the process noise covariance Q (row-major, n_x * n_x values)."""
        n_x = self.state_dim
        self._Q = _flatten(values, n_x * n_x, 'Q').reshape(n_x, n_x)

    def set_mat_r(self, values):
        """Set the observation noise covariance R (row-major, n_y * n_y values)."""
        n_y = self.output_dim
        self._R = _flatten(values, n_y * n_y, 'R').reshape(n_y, n_y)

    def predict_nextstate(self, u):
        """
        Time update: propagate the state distribution one step.

        x <- A x + B u
        P <- A P A' + Q

        Parameters
        ----------
        u : array_like [n_u]
            Control input

        Returns
        -------
        ndarray [n_x]
            Predicted state
        """
        u = _flatten(u, self.input_dim, 'input')
        A = self._A

        x = A @ self._x + self._B @ u
        P = A @ self._P @ A.T + self._Q

        self._x, self._P = x, P
        return x.copy()

    def observation(self, noise):
        """
        Observation of the current state: C x + noise.

        Does not modify the model.

        Parameters
        ----------
        noise : array_like [n_y]
            Observation noise sample

        Returns
        -------
        ndarray [n_y]
            Observation
        """
        w = _flatten(noise, self.output_dim, 'noise')
        return self._C @ self._x + w

    def update_nextstate(self, y):
        """
        Measurement update: fuse an observation into the state estimate.

        S <- C P C' + R
        K <- P C' S^{-1}
        x <- x + K (y - C x)
        P <- P - K C P    (or Joseph form)

        Parameters
        ----------
        y : array_like [n_y]
            Observation

        Returns
        -------
        ndarray [n_x]
            Updated state

        Raises
        ------
        DimensionMismatch
            If len(y) != n_y.
        SingularInnovationCovariance
            If S cannot be inverted. The model is left unchanged.
        """
        y = _flatten(y, self.output_dim, 'observation')
        C, P, R = self._C, self._P, self._R

        innovation = y - C @ self._x
        S = C @ P @ C.T + R
        K = kalman_gain(P, C, S, solver=self.solver)

        x = self._x + K @ innovation
        P = joseph_update(P, K, C, R) if self.joseph else standard_update(P, K, C)

        self._x, self._P = x, P
        self._innovation, self._S = innovation, S
        return x.copy()

    def sim_nextstate(self, u, noise):
        """
        True-system step with an explicit process noise sample.

        x <- A x + B u + noise

        P is not touched.

        Parameters
        ----------
        u : array_like [n_u]
            Control input
        noise : array_like [n_x]
            Process noise sample

        Returns
        -------
        ndarray [n_x]
            New state
        """
        u = _flatten(u, self.input_dim, 'input')
        v = _flatten(noise, self.state_dim, 'noise')

        self._x = self._A @ self._x + self._B @ u + v
        return self._x.copy()


def gaussian_noise(rng, cov, T):
    """
    Draw zero-mean Gaussian noise samples.

    Parameters
    ----------
    rng : numpy.random.Generator
        Random number generator
    cov : ndarray [n, n]
        Noise covariance
    T : int
        Number of samples

    Returns
    -------
    ndarray [T, n]
    """
    cov = np.atleast_2d(np.asarray(cov, dtype=float))
    return rng.multivariate_normal(np.zeros(cov.shape[0]), cov, size=T)


def linear_gaussian_ssm(model, us, process_noise, observation_noise):
    """
    Simulate Linear Gaussian SSM by driving `model` as the true system.

    Parameters
    ----------
    model : LinearGaussianModel
        Configured model; its state is the initial true state and is mutated
    us : ndarray [T, n_u] or None
        Control inputs. If None, zero input is applied.
    process_noise : ndarray [T, n_x]
        Process noise samples
    observation_noise : ndarray [T, n_y]
        Observation noise samples

    Returns
    -------
    xs : ndarray [T, n_x]
        Latent states
    ys : ndarray [T, n_y]
        Observations
    """
    process_noise = np.asarray(process_noise, dtype=float)
    observation_noise = np.asarray(observation_noise, dtype=float)
    T = process_noise.shape[0]
    n_x, n_y = model.state_dim, model.output_dim

    if us is None:
        us = np.zeros((T, model.input_dim))

    xs = np.zeros((T, n_x))
    ys = np.zeros((T, n_y))

    for t in range(T):
        xs[t] = model.sim_nextstate(us[t], process_noise[t])
        ys[t] = model.observation(observation_noise[t])

    return xs, ys
