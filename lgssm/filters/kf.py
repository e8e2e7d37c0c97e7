"""Kalman gain solvers and batch Kalman Filter (KF) runner."""
import numpy as np
from scipy import linalg as sla

from ..errors import SingularInnovationCovariance


def _solve_lu(S, B):
    """Solve S @ X = B using LU factorization (np.linalg.solve)."""
    return np.linalg.solve(S, B)


def _solve_cholesky(S, B):
    """Solve S @ X = B using Cholesky factorization (assumes S is SPD)."""
    L = sla.cholesky(S, lower=True, check_finite=False)
    return sla.cho_solve((L, True), B, check_finite=False)


def _solve_inv(S, B):
    """Solve S @ X = B using explicit matrix inversion (least stable)."""
    return np.linalg.inv(S) @ B


SOLVERS = {
    'lu': _solve_lu,
    'cholesky': _solve_cholesky,
    'inv': _solve_inv,
}


def get_solver(name):
    """Look up a gain solver by name ('lu', 'cholesky' or 'inv')."""
    try:
        return SOLVERS[name]
    except KeyError:
        raise ValueError(
            f"Unknown solver '{name}', expected one of {sorted(SOLVERS)}"
        ) from None


def kalman_gain(P, C, S, solver='lu'):
    """
    Compute the Kalman gain K = P C' S^{-1} without forming S^{-1}.

    The gain is obtained by solving S' K' = C P'.

    Parameters
    ----------
    P : ndarray [n_x, n_x]
        Prior (predicted) covariance
    C : ndarray [n_y, n_x]
        Observation matrix
    S : ndarray [n_y, n_y]
        Innovation covariance C P C' + R
    solver : str
        'lu', 'cholesky' or 'inv' (default: 'lu')

    Returns
    -------
    ndarray [n_x, n_y]
        Kalman gain

    Raises
    ------
    SingularInnovationCovariance
        If S cannot be solved against or the gain is not finite.
    """
    solve_fn = get_solver(solver)
    try:
        K = solve_fn(S.T, C @ P.T).T
    except np.linalg.LinAlgError as e:
        raise SingularInnovationCovariance(
            f"innovation covariance is not invertible ({solver}): {e}"
        ) from e

    if not np.all(np.isfinite(K)):
        raise SingularInnovationCovariance(
            f"innovation covariance is not invertible ({solver}): non-finite gain"
        )
    return K


def kalman_filter(model, ys, us=None):
    """
    Run predict/update over an observation sequence.

    The model is used in the estimator role and is mutated in place; its
    configured matrices, solver and covariance form are used as-is.

    Parameters
    ----------
    model : LinearGaussianModel
        Configured and initialised model
    ys : ndarray [T, n_y]
        Observations
    us : ndarray [T, n_u], optional
        Control inputs. If None, zero input is applied.

    Returns
    -------
    m_filt : ndarray [T, n_x]
        Filtered state means
    P_filt : ndarray [T, n_x, n_x]
        Filtered state covariances
    cond_nums : ndarray [T]
        Condition numbers of P
    """
    ys = np.asarray(ys, dtype=float)
    T = ys.shape[0]
    ys = ys.reshape(T, -1)
    n_x = model.state_dim

    if us is None:
        us = np.zeros((T, model.input_dim))
    else:
        us = np.asarray(us, dtype=float).reshape(T, -1)

    m_filt = np.zeros((T, n_x))
    P_filt = np.zeros((T, n_x, n_x))
    cond_nums = np.zeros(T)

    for t in range(T):
        model.predict_nextstate(us[t])
        m_filt[t] = model.update_nextstate(ys[t])
        P_filt[t] = model.P
        cond_nums[t] = np.linalg.cond(P_filt[t])

    return m_filt, P_filt, cond_nums
