from __future__ import annotations

from collections.abc import Iterable

import matplotlib.gridspec as gridspec
import matplotlib.pyplot as plt
import numpy as np
from brokenaxes import brokenaxes
from matplotlib.figure import Figure

from classifiers.knn import KnnPredictor
from utils.pmu.phasor import Phasor


def plot_signal_and_phasor(
    signal: np.ndarray,
    estimate: Phasor,
    fs: float,
    f0: float = 60.0,
    reference: Phasor | None = None,
    title: str = "Scenario",
    zoom_windows_top: Iterable[tuple[float, float]] | None = None,
    zoom_window_bottom: tuple[float, float] | None = None,
) -> Figure:
    signal = np.asarray(signal, dtype=float).ravel()
    n = signal.shape[0]
    t = np.arange(n, dtype=float) / float(fs)

    fig = plt.figure(figsize=(6.0, 3.2))
    gs = gridspec.GridSpec(2, 1, height_ratios=[1, 2], figure=fig)

    if zoom_windows_top:
        bax = brokenaxes(xlims=list(zoom_windows_top), hspace=0.05, fig=fig, subplot_spec=gs[0])
        for t0, t1 in zoom_windows_top:
            mask = (t >= t0) & (t <= t1)
            bax.plot(t[mask], signal[mask], linewidth=1.0, label=f"{t0}-{t1}s")
        bax.set_ylabel("Amplitude", fontsize=9)
        bax.legend(fontsize=7, loc="best", framealpha=0.9)
        bax.set_title(f"{title} — AC Signal (zoomed ranges)", fontsize=9)
    else:
        ax0 = fig.add_subplot(gs[0])
        ax0.plot(t, signal, linewidth=1.0)
        ax0.set_ylabel("Amplitude", fontsize=9)
        ax0.set_title(f"{title} — AC Signal (full)", fontsize=9)
        ax0.grid(True, which="both", linestyle="--", linewidth=0.5)

    ax1 = fig.add_subplot(gs[1])

    # sinusoid rebuilt from the estimated phasor
    def rebuild(p: Phasor) -> np.ndarray:
        return np.sqrt(2.0) * p.rms_value * np.sin(
            2.0 * np.pi * f0 * t + np.deg2rad(p.phase_angle_degrees)
        )

    ax1.plot(t, signal, linewidth=1.0, label="Samples")
    ax1.plot(t, rebuild(estimate), linestyle="--", linewidth=1.2, label=f"Estimate {estimate}")
    if reference is not None:
        ax1.plot(t, rebuild(reference), linestyle=":", linewidth=1.2, label=f"Reference {reference}")
    ax1.set_xlabel("Time [s]", fontsize=9)
    ax1.set_ylabel("Amplitude", fontsize=9)
    ax1.legend(fontsize=7, framealpha=0.9, loc="best")
    ax1.grid(True, which="both", linestyle="--", linewidth=0.5)
    ax1.set_title("Samples vs Estimated Phasor", fontsize=9)

    if zoom_window_bottom is not None:
        t0, t1 = zoom_window_bottom
        ax1.set_xlim(t0, t1)

    plt.tight_layout()
    return fig


def plot_neighbor_distances(predictor: KnnPredictor, title: str = "KNN") -> Figure:
    """Bar chart of the k nearest distances, green for working, red for open."""
    distances = np.asarray(predictor.distances, dtype=float)
    colors = ["tab:green" if d.is_working else "tab:red" for d in predictor.nearest]

    fig, ax = plt.subplots(figsize=(6.0, 3.2))
    ax.bar(np.arange(distances.size), distances, color=colors)
    ax.set_xlabel("Neighbor rank", fontsize=9)
    ax.set_ylabel("Distance [p.u.]", fontsize=9)
    ax.set_title(
        f"{title} — k={predictor.number_of_nearest_neighbors}, "
        f"prediction: {'working' if predictor.predicted_status else 'not working'}",
        fontsize=9,
    )
    ax.grid(True, axis="y", linestyle="--", linewidth=0.5)

    plt.tight_layout()
    return fig
