"""
Visualization functions for state estimation results.
"""
import numpy as np
import matplotlib.pyplot as plt

DEFAULT_COLORS = ['k', '#1f77b4', '#d62728', '#2ca02c', '#9467bd']
DEFAULT_LINESTYLES = ['-', '--', ':', '-.']


def plot_time_series(series, save_path=None, title="Time Series", ylabel="Value"):
    """
    Overlay several recorded time series on one axis.

    Parameters
    ----------
    series : list of TimeSeries
        Series to plot; each is labelled with its name
    save_path : str, optional
        Path to save figure. If None, the figure is shown.
    title : str
        Plot title
    ylabel : str
        Y-axis label
    """
    fig, ax = plt.subplots(figsize=(12, 4))

    for idx, ts in enumerate(series):
        ax.plot(ts.times, ts.values,
                color=DEFAULT_COLORS[idx % len(DEFAULT_COLORS)],
                linestyle=DEFAULT_LINESTYLES[idx % len(DEFAULT_LINESTYLES)],
                linewidth=1.2, label=ts.name, alpha=0.8)

    ax.set_xlabel('Time [s]')
    ax.set_ylabel(ylabel)
    ax.set_title(title)
    ax.legend()
    ax.grid(True, alpha=0.3)

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        plt.close(fig)
    else:
        plt.show()


def plot_kalman_filter(t, xs, m_filt, P_filt, save_path=None, title="Kalman Filter",
                       state_labels=None):
    """
    Plot Kalman filter results.

    Parameters
    ----------
    t : ndarray [T]
        Time stamps
    xs : ndarray [T, n_x]
        True states
    m_filt : ndarray [T, n_x]
        Filtered means
    P_filt : ndarray [T, n_x, n_x]
        Filtered covariances
    save_path : str, optional
        Path to save figure
    title : str
        Plot title
    state_labels : list of str, optional
        Name of each state component
    """
    xs = xs.reshape(len(t), -1)
    m_filt = m_filt.reshape(len(t), -1)
    n_x = xs.shape[1]
    if state_labels is None:
        state_labels = [f'State {i+1}' for i in range(n_x)]

    fig, axes = plt.subplots(n_x, 1, figsize=(12, 4*n_x))
    if n_x == 1:
        axes = [axes]

    for i in range(n_x):
        ax = axes[i]
        std_filt = np.sqrt(np.maximum(P_filt[:, i, i], 0.0))

        ax.plot(t, xs[:, i], 'k-', linewidth=2, label='True State', alpha=0.8)
        ax.plot(t, m_filt[:, i], 'b--', linewidth=1.5, label='Filter Mean', alpha=0.8)
        ax.fill_between(t, m_filt[:, i] - 2*std_filt, m_filt[:, i] + 2*std_filt,
                        alpha=0.2, color='blue', label='+/-2sigma')

        ax.set_xlabel('Time [s]')
        ax.set_ylabel(state_labels[i])
        ax.set_title(f'{title} - {state_labels[i]}')
        ax.legend()
        ax.grid(True, alpha=0.3)

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        plt.close(fig)
    else:
        plt.show()
