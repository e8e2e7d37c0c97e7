"""Covariance update forms shared by the Kalman measurement step."""
import numpy as np


def joseph_update(P_pred, K, C, R):
    """
    Compute Joseph-stabilized covariance update.

    P = (I - K C) P_pred (I - K C)' + K R K'

    Parameters
    ----------
    P_pred : ndarray [n_x, n_x]
        Predicted covariance
    K : ndarray [n_x, n_y]
        Kalman gain
    C : ndarray [n_y, n_x]
        Observation matrix
    R : ndarray [n_y, n_y]
        Observation noise covariance

    Returns
    -------
    ndarray [n_x, n_x]
        Updated covariance
    """
    n_x = P_pred.shape[0]
    IKC = np.eye(n_x) - K @ C
    return IKC @ P_pred @ IKC.T + K @ R @ K.T


def standard_update(P_pred, K, C):
    """
    Compute standard covariance update: P = P_pred - K C P_pred.

    Parameters
    ----------
    P_pred : ndarray [n_x, n_x]
        Predicted covariance
    K : ndarray [n_x, n_y]
        Kalman gain
    C : ndarray [n_y, n_x]
        Observation matrix

    Returns
    -------
    ndarray [n_x, n_x]
        Updated covariance
    """
    return P_pred - K @ C @ P_pred
