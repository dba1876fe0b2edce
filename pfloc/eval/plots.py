"""
Visualization Utilities for Landmark Localization.

This module provides plotting functions for trajectories, particle clouds
and pose errors.

All functions return matplotlib Figure objects for flexible display/saving.
"""

from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

import matplotlib.pyplot as plt
import numpy as np


def plot_trajectory_2d(
    truth_xy: np.ndarray,
    est_xy_dict: Dict[str, np.ndarray],
    landmarks_xy: Optional[np.ndarray] = None,
    title: str = "2D Trajectory",
) -> plt.Figure:
    """
    Plot 2D trajectory with true and estimated paths.

    Args:
        truth_xy: True trajectory, shape (N, 2)
        est_xy_dict: Dictionary of estimated trajectories {name: array}
        landmarks_xy: Map landmark positions, shape (L, 2) (optional)
        title: Plot title

    Returns:
        fig: Matplotlib figure
    """
    fig, ax = plt.subplots(figsize=(10, 8))

    ax.plot(truth_xy[:, 0], truth_xy[:, 1], "k-", linewidth=2,
            label="Ground Truth", zorder=10)
    ax.plot(truth_xy[0, 0], truth_xy[0, 1], "go", markersize=10,
            label="Start", zorder=11)
    ax.plot(truth_xy[-1, 0], truth_xy[-1, 1], "ro", markersize=10,
            label="End", zorder=11)

    colors = ["blue", "red", "green", "orange", "purple"]
    linestyles = ["-", "--", "-.", ":", "-"]

    for i, (name, est_xy) in enumerate(est_xy_dict.items()):
        ax.plot(
            est_xy[:, 0],
            est_xy[:, 1],
            linestyle=linestyles[i % len(linestyles)],
            color=colors[i % len(colors)],
            linewidth=1.5,
            label=name,
        )

    if landmarks_xy is not None and len(landmarks_xy) > 0:
        ax.scatter(landmarks_xy[:, 0], landmarks_xy[:, 1], marker="^",
                   s=80, c="darkred", edgecolors="black", label="Landmarks",
                   zorder=12)

    ax.set_xlabel("x (m)", fontsize=12)
    ax.set_ylabel("y (m)", fontsize=12)
    ax.set_title(title, fontsize=14, fontweight="bold")
    ax.legend(loc="best", fontsize=10)
    ax.grid(True, alpha=0.3)
    ax.axis("equal")

    plt.tight_layout()
    return fig


def plot_particles(
    poses: np.ndarray,
    weights: Optional[np.ndarray] = None,
    truth_pose: Optional[np.ndarray] = None,
    landmarks_xy: Optional[np.ndarray] = None,
    title: str = "Particle Cloud",
) -> plt.Figure:
    """
    Plot a particle population with heading arrows.

    Args:
        poses: Particle poses [x, y, theta], shape (N, 3)
        weights: Particle weights, shape (N,) (optional, used for colour)
        truth_pose: True pose [x, y, theta] (optional)
        landmarks_xy: Map landmark positions, shape (L, 2) (optional)
        title: Plot title

    Returns:
        fig: Matplotlib figure
    """
    poses = np.asarray(poses, dtype=float)
    fig, ax = plt.subplots(figsize=(8, 8))

    quiver_args = [poses[:, 0], poses[:, 1], np.cos(poses[:, 2]), np.sin(poses[:, 2])]
    style = dict(angles="xy", scale_units="xy", scale=2.0, width=0.003, label="Particles")
    if weights is None:
        ax.quiver(*quiver_args, color="tab:blue", **style)
    else:
        ax.quiver(*quiver_args, np.asarray(weights, dtype=float), cmap="viridis", **style)

    if truth_pose is not None:
        ax.plot(truth_pose[0], truth_pose[1], "r*", markersize=15, label="Truth")

    if landmarks_xy is not None and len(landmarks_xy) > 0:
        ax.scatter(landmarks_xy[:, 0], landmarks_xy[:, 1], marker="^",
                   s=80, c="darkred", edgecolors="black", label="Landmarks")

    ax.set_xlabel("x (m)", fontsize=12)
    ax.set_ylabel("y (m)", fontsize=12)
    ax.set_title(title, fontsize=14, fontweight="bold")
    ax.legend(loc="best", fontsize=10)
    ax.grid(True, alpha=0.3)
    ax.axis("equal")

    plt.tight_layout()
    return fig


def plot_position_error_time(
    errors_dict: Dict[str, np.ndarray],
    dt: float = 1.0,
    title: str = "Pose Error vs Time",
) -> plt.Figure:
    """
    Plot x, y and (optionally) heading error over time.

    Args:
        errors_dict: Dictionary of error arrays {name: errors}, each of
                     shape (N, 2) for [x, y] or (N, 3) for [x, y, theta]
        dt: Time step in seconds
        title: Plot title

    Returns:
        fig: Matplotlib figure
    """
    sample_errors = next(iter(errors_dict.values()))
    n_dims = sample_errors.shape[1]
    axis_labels = ["x Error (m)", "y Error (m)", "Heading Error (rad)"][:n_dims]

    fig, axes_arr = plt.subplots(n_dims, 1, figsize=(12, 3.5 * n_dims))
    if n_dims == 1:
        axes_arr = [axes_arr]

    colors = ["blue", "red", "green", "orange", "purple"]

    for i, axis_label in enumerate(axis_labels):
        ax = axes_arr[i]

        for j, (name, errors) in enumerate(errors_dict.items()):
            time = np.arange(len(errors)) * dt
            ax.plot(time, errors[:, i], label=name,
                    color=colors[j % len(colors)], linewidth=1.5)

        ax.set_xlabel("Time (s)", fontsize=11)
        ax.set_ylabel(axis_label, fontsize=11)
        ax.legend(fontsize=9)
        ax.grid(True, alpha=0.3)
        ax.axhline(y=0, color="k", linestyle="--", linewidth=0.8, alpha=0.5)

    fig.suptitle(title, fontsize=14, fontweight="bold", y=1.0)
    plt.tight_layout()
    return fig


def save_figure(
    fig: plt.Figure,
    out_dir: Union[str, Path],
    name: str,
    formats: Tuple[str, ...] = ("svg", "png"),
) -> List[Path]:
    """
    Save figure in multiple formats.

    Args:
        fig: Matplotlib figure to save
        out_dir: Output directory
        name: Base filename (without extension)
        formats: Tuple of format extensions

    Returns:
        paths: List of saved file paths
    """
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    paths = []
    for fmt in formats:
        filepath = out_dir / f"{name}.{fmt}"
        fig.savefig(filepath, dpi=150, bbox_inches="tight")
        paths.append(filepath)

    return paths
