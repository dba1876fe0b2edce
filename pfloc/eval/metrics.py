"""
Evaluation Metrics for Landmark Localization.

This module provides functions to compare estimated vehicle poses with
ground truth: position errors, wrapped heading errors, RMSE and summary
statistics.
"""

from typing import Dict, Optional, Union

import numpy as np

from pfloc.utils.angles import angle_diff


def compute_position_errors(
    truth: np.ndarray, estimated: np.ndarray
) -> np.ndarray:
    """
    Compute position errors between true and estimated positions.

    Args:
        truth: True positions, shape (N, 2)
        estimated: Estimated positions, shape (N, 2)

    Returns:
        errors: Position error vectors (estimated - truth), shape (N, 2)

    Raises:
        ValueError: If inputs have incompatible shapes
    """
    truth = np.asarray(truth, dtype=float)
    estimated = np.asarray(estimated, dtype=float)

    if truth.shape != estimated.shape:
        raise ValueError(
            f"Shape mismatch: truth {truth.shape} vs estimated {estimated.shape}"
        )

    return estimated - truth


def compute_heading_errors(
    truth: np.ndarray, estimated: np.ndarray
) -> np.ndarray:
    """
    Compute heading errors wrapped to [-π, π].

    Headings produced by the filter are unbounded, so a raw difference of
    2π means no error at all.

    Args:
        truth: True headings (radians), shape (N,)
        estimated: Estimated headings (radians), shape (N,)

    Returns:
        errors: Wrapped heading errors, shape (N,)

    Raises:
        ValueError: If inputs have incompatible shapes
    """
    truth = np.asarray(truth, dtype=float)
    estimated = np.asarray(estimated, dtype=float)

    if truth.shape != estimated.shape:
        raise ValueError(
            f"Shape mismatch: truth {truth.shape} vs estimated {estimated.shape}"
        )

    return angle_diff(estimated, truth)


def compute_rmse(errors: np.ndarray, axis: Optional[int] = None) -> Union[float, np.ndarray]:
    """
    Compute Root Mean Square Error (RMSE).

    Args:
        errors: Error vectors, shape (N, d) or (N,)
        axis: Axis along which to compute RMSE
              None: scalar RMSE across all dimensions
              0: per-dimension RMSE
              1: per-sample RMSE

    Returns:
        rmse: RMSE value(s)
    """
    errors = np.asarray(errors, dtype=float)

    if axis is None:
        return float(np.sqrt(np.mean(errors**2)))
    return np.sqrt(np.mean(errors**2, axis=axis))


def compute_pose_rmse(
    truth_poses: np.ndarray, estimated_poses: np.ndarray
) -> Dict[str, float]:
    """
    Per-axis RMSE of pose trajectories [x, y, theta].

    Args:
        truth_poses: True poses, shape (N, 3)
        estimated_poses: Estimated poses, shape (N, 3)

    Returns:
        Dictionary with keys 'x', 'y', 'theta' and 'position'
        (RMSE of the Euclidean position error).
    """
    truth_poses = np.asarray(truth_poses, dtype=float)
    estimated_poses = np.asarray(estimated_poses, dtype=float)
    if truth_poses.ndim != 2 or truth_poses.shape[1] != 3:
        raise ValueError(f"Poses must have shape (N, 3), got {truth_poses.shape}")

    pos_err = compute_position_errors(truth_poses[:, :2], estimated_poses[:, :2])
    head_err = compute_heading_errors(truth_poses[:, 2], estimated_poses[:, 2])

    per_axis = compute_rmse(pos_err, axis=0)
    return {
        "x": float(per_axis[0]),
        "y": float(per_axis[1]),
        "theta": compute_rmse(head_err),
        "position": float(np.sqrt(np.mean(np.sum(pos_err**2, axis=1)))),
    }


def compute_error_stats(errors: np.ndarray) -> Dict[str, float]:
    """
    Compute error statistics.

    Args:
        errors: Error vectors, shape (N, d) or (N,)

    Returns:
        stats: Dictionary with keys:
               - 'mean': Mean error
               - 'median': Median error
               - 'std': Standard deviation
               - 'rmse': Root mean square error
               - 'p90': 90th percentile
               - 'p95': 95th percentile
               - 'max': Maximum error
    """
    errors = np.asarray(errors, dtype=float)

    # Compute error magnitudes if multi-dimensional
    if errors.ndim > 1:
        error_magnitudes = np.linalg.norm(errors, axis=1)
    else:
        error_magnitudes = np.abs(errors)

    stats = {
        "mean": float(np.mean(error_magnitudes)),
        "median": float(np.median(error_magnitudes)),
        "std": float(np.std(error_magnitudes)),
        "rmse": float(np.sqrt(np.mean(error_magnitudes**2))),
        "p90": float(np.percentile(error_magnitudes, 90)),
        "p95": float(np.percentile(error_magnitudes, 95)),
        "max": float(np.max(error_magnitudes)),
    }

    return stats
