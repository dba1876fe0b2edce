"""
Angle wrapping and averaging utilities.

Particle headings are never wrapped while the filter runs, so they may grow
without bound. These helpers are used wherever headings are compared or
averaged:
- Weighted mean pose of a particle population
- Heading errors against ground truth
"""

import numpy as np
from typing import Optional, Union


def wrap_angle(angle: float) -> float:
    """
    Wrap angle to [-π, π] range.

    Args:
        angle: Angle in radians (can be any value)

    Returns:
        Wrapped angle in range [-π, π]

    Example:
        >>> wrap_angle(3.5 * np.pi)  # 630° -> -90°
        -1.5707963267948966
        >>> wrap_angle(-3.5 * np.pi)  # -630° -> 90°
        1.5707963267948966
    """
    return float(np.arctan2(np.sin(angle), np.cos(angle)))


def wrap_angle_array(angles: np.ndarray) -> np.ndarray:
    """
    Wrap array of angles to [-π, π] range.

    Vectorized version of wrap_angle().

    Args:
        angles: Array of angles in radians

    Returns:
        Array of wrapped angles in range [-π, π]
    """
    angles = np.asarray(angles, dtype=float)
    return np.arctan2(np.sin(angles), np.cos(angles))


def angle_diff(angle1: Union[float, np.ndarray],
               angle2: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
    """
    Compute the shortest angular difference between two angles.

    Returns angle1 - angle2, wrapped to [-π, π].

    Example:
        >>> angle_diff(0.1, -0.1)
        0.2
        >>> angle_diff(4 * np.pi + 0.1, 0.0)  # unbounded heading
        0.1
    """
    if isinstance(angle1, np.ndarray) or isinstance(angle2, np.ndarray):
        return wrap_angle_array(np.asarray(angle1) - np.asarray(angle2))
    else:
        return wrap_angle(angle1 - angle2)


def circular_mean(angles: np.ndarray, weights: Optional[np.ndarray] = None) -> float:
    """
    Weighted mean direction of a set of angles.

    Averages unit vectors instead of raw angles, so headings of 2π - ε and ε
    average to ~0 rather than ~π.

    Args:
        angles: Angles in radians, shape (N,)
        weights: Non-negative weights, shape (N,). Uniform if None.

    Returns:
        Mean direction in [-π, π]

    Raises:
        ValueError: If angles is empty or shapes mismatch.
    """
    angles = np.asarray(angles, dtype=float)
    if angles.size == 0:
        raise ValueError("circular_mean requires at least one angle")

    if weights is None:
        weights = np.ones_like(angles)
    else:
        weights = np.asarray(weights, dtype=float)
        if weights.shape != angles.shape:
            raise ValueError(
                f"weights shape {weights.shape} does not match angles shape {angles.shape}"
            )

    s = np.sum(weights * np.sin(angles))
    c = np.sum(weights * np.cos(angles))
    return float(np.arctan2(s, c))
