"""
Evaluation and Visualization Module.

This module provides evaluation metrics and visualization utilities
for landmark localization.

Modules:
    metrics: Error metrics (position/heading errors, RMSE, statistics)
    plots: Visualization functions for trajectories, particles and errors
"""

from .metrics import (
    compute_error_stats,
    compute_heading_errors,
    compute_pose_rmse,
    compute_position_errors,
    compute_rmse,
)
from .plots import (
    plot_particles,
    plot_position_error_time,
    plot_trajectory_2d,
    save_figure,
)

__all__ = [
    # Metrics
    "compute_position_errors",
    "compute_heading_errors",
    "compute_rmse",
    "compute_pose_rmse",
    "compute_error_stats",
    # Plots
    "plot_trajectory_2d",
    "plot_particles",
    "plot_position_error_time",
    "save_figure",
]
