"""
Tracking error and filter consistency metrics.

Errors are laid out time-first: arrays of shape [T, d] hold one
d-dimensional sample per recorded step.
"""
import numpy as np
from scipy import stats


def rmse(estimate, truth):
    """
    Root mean squared error over time, per component.

    Parameters
    ----------
    estimate : array_like [T] or [T, d]
        Estimated trajectory (e.g. `SimulationResult.states('est')`)
    truth : array_like, same shape as `estimate`
        Reference trajectory

    Returns
    -------
    float or ndarray [d]
    """
    err = np.asarray(estimate, dtype=float) - np.asarray(truth, dtype=float)
    return np.sqrt(np.mean(err**2, axis=0))


def normalized_squared_error(errors, covs):
    """
    Per-step e' S^{-1} e.

    With state errors and filter covariances this is the NEES; with
    innovations and innovation covariances it is the NIS. Either follows
    chi2(d) for a consistent filter.

    Parameters
    ----------
    errors : array_like [T, d]
    covs : array_like [T, d, d]

    Returns
    -------
    ndarray [T]
    """
    errors = np.asarray(errors, dtype=float)
    covs = np.asarray(covs, dtype=float)
    weighted = np.linalg.solve(covs, errors[..., None])[..., 0]
    return np.einsum('ti,ti->t', errors, weighted)


def chi2_interval(dof, n_samples, confidence=0.95):
    """
    Acceptance interval for the mean of `n_samples` chi2(dof) values.

    n * mean ~ chi2(n * dof), so the two-sided bounds are the chi2
    quantiles divided by n.
    """
    alpha = 1.0 - confidence
    total_dof = dof * n_samples
    lower = stats.chi2.ppf(alpha / 2, total_dof) / n_samples
    upper = stats.chi2.ppf(1.0 - alpha / 2, total_dof) / n_samples
    return float(lower), float(upper)


def covariance_health(P_seq, tol=1e-10):
    """
    Summarise the conditioning of a covariance sequence.

    Parameters
    ----------
    P_seq : array_like [T, n, n]
    tol : float
        Eigenvalues above -tol count as non-negative

    Returns
    -------
    dict
        min_eig, mean_cond, max_cond and psd (all eigenvalues >= -tol)
    """
    P_seq = np.asarray(P_seq, dtype=float)
    min_eig = float(np.linalg.eigvalsh(P_seq).min())
    cond = np.linalg.cond(P_seq)
    return {
        'min_eig': min_eig,
        'mean_cond': float(np.mean(cond)),
        'max_cond': float(np.max(cond)),
        'psd': min_eig >= -tol,
    }
