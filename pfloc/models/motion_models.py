"""
Motion models (process models) for particle propagation.

Provides the kinematic model used to advance vehicle pose hypotheses:
- Bicycle / constant turn rate and velocity (CTRV) model
- Additive Gaussian process noise on [x, y, theta]

State convention: pose = [x, y, theta] in the map frame, theta in radians
measured counter-clockwise from the +x axis and never wrapped.
"""

import warnings
from typing import Optional, Sequence

import numpy as np


def validate_std(
    std: Sequence[float],
    expected_dim: int,
    name: str = "std",
    strictly_positive: bool = False,
) -> np.ndarray:
    """
    Validate a per-axis standard deviation vector.

    Args:
        std: Standard deviations.
        expected_dim: Required length.
        name: Name used in error messages.
        strictly_positive: If True, zero is rejected as well.

    Returns:
        Standard deviations as a float array of shape (expected_dim,).

    Raises:
        ValueError: On wrong length, non-finite or out-of-range values.
    """
    std = np.asarray(std, dtype=float)
    if std.shape != (expected_dim,):
        raise ValueError(f"{name} must have {expected_dim} elements, got shape {std.shape}")
    if not np.all(np.isfinite(std)):
        raise ValueError(f"{name} must be finite, got {std}")
    if strictly_positive and np.any(std <= 0):
        raise ValueError(f"{name} must be strictly positive, got {std}")
    if np.any(std < 0):
        raise ValueError(f"{name} must be non-negative, got {std}")
    return std


class BicycleModel:
    """
    Bicycle (constant turn rate and velocity) motion model.

    For yaw rate ω above ``yaw_rate_epsilon`` in magnitude:
        x' = x + (v/ω) (sin(θ + ωΔt) - sin θ)
        y' = y + (v/ω) (cos θ - cos(θ + ωΔt))
        θ' = θ + ωΔt
    otherwise the straight-line limit is used:
        x' = x + vΔt cos θ
        y' = y + vΔt sin θ
        θ' = θ

    Example:
        >>> model = BicycleModel()
        >>> model.f(np.array([0.0, 0.0, 0.0]), velocity=1.0, yaw_rate=0.0, dt=1.0)
        array([1., 0., 0.])
    """

    def __init__(self, yaw_rate_epsilon: float = 1e-4):
        """
        Initialize bicycle model.

        Args:
            yaw_rate_epsilon: Yaw rates with magnitude at or below this value
                use the straight-line equations (avoids dividing by ~0).
        """
        if yaw_rate_epsilon < 0:
            raise ValueError(f"yaw_rate_epsilon must be non-negative, got {yaw_rate_epsilon}")
        self.yaw_rate_epsilon = yaw_rate_epsilon

    def f(self, poses: np.ndarray, velocity: float, yaw_rate: float, dt: float) -> np.ndarray:
        """
        Deterministic pose propagation.

        Args:
            poses: Pose [x, y, theta] of shape (3,), or stacked poses (N, 3).
            velocity: Forward speed (m/s).
            yaw_rate: Turn rate (rad/s).
            dt: Time step in seconds.

        Returns:
            Propagated poses, same shape as ``poses``.
        """
        poses = np.asarray(poses, dtype=float)
        if poses.shape[-1] != 3:
            raise ValueError(f"Poses must have last dimension 3, got shape {poses.shape}")

        x = poses[..., 0]
        y = poses[..., 1]
        theta = poses[..., 2]

        if abs(yaw_rate) > self.yaw_rate_epsilon:
            theta_new = theta + yaw_rate * dt
            x_new = x + (velocity / yaw_rate) * (np.sin(theta_new) - np.sin(theta))
            y_new = y + (velocity / yaw_rate) * (np.cos(theta) - np.cos(theta_new))
        else:
            x_new = x + velocity * dt * np.cos(theta)
            y_new = y + velocity * dt * np.sin(theta)
            theta_new = theta.copy()

        return np.stack([x_new, y_new, theta_new], axis=-1)

    @staticmethod
    def sample_noise(
        n: int,
        std: np.ndarray,
        rng: Optional[np.random.Generator] = None,
    ) -> np.ndarray:
        """
        Draw zero-mean Gaussian process noise for n poses.

        Args:
            n: Number of poses.
            std: Standard deviations [σx, σy, σθ].
            rng: Random number generator. If None, uses np.random.default_rng().

        Returns:
            Noise array of shape (n, 3). Axes with zero std get exactly zero.
        """
        if rng is None:
            rng = np.random.default_rng()
        std = validate_std(std, 3, name="std_pos")
        return rng.normal(0.0, 1.0, size=(n, 3)) * std

    def propagate(
        self,
        poses: np.ndarray,
        velocity: float,
        yaw_rate: float,
        dt: float,
        std: np.ndarray,
        rng: Optional[np.random.Generator] = None,
    ) -> np.ndarray:
        """
        Kinematic step followed by additive process noise.

        Noise is always applied after the deterministic step.

        Args:
            poses: Stacked poses (N, 3).
            velocity: Forward speed (m/s).
            yaw_rate: Turn rate (rad/s).
            dt: Time step in seconds, must be positive.
            std: Process noise standard deviations [σx, σy, σθ].
            rng: Random number generator.

        Returns:
            Propagated noisy poses (N, 3).
        """
        validate_motion_inputs(dt, velocity, yaw_rate)
        poses = np.atleast_2d(np.asarray(poses, dtype=float))
        return self.f(poses, velocity, yaw_rate, dt) + self.sample_noise(len(poses), std, rng)


def validate_motion_inputs(
    dt: float,
    velocity: float,
    yaw_rate: float,
    model_name: str = "bicycle model",
) -> None:
    """
    Validate control inputs to the motion model.

    Raises:
        TypeError: If dt is not numeric.
        ValueError: If dt is not positive or any input is not finite.
    """
    if not isinstance(dt, (int, float, np.floating, np.integer)):
        raise TypeError(f"{model_name}: dt must be numeric, got {type(dt)}")
    if not np.isfinite(dt) or dt <= 0:
        raise ValueError(f"{model_name}: dt must be positive, got {dt}")
    if not np.isfinite(velocity):
        raise ValueError(f"{model_name}: velocity must be finite, got {velocity}")
    if not np.isfinite(yaw_rate):
        raise ValueError(f"{model_name}: yaw_rate must be finite, got {yaw_rate}")
    if dt > 10.0:
        warnings.warn(
            f"{model_name}: dt={dt}s is unusually large. "
            "Check units (should be seconds).",
            RuntimeWarning
        )
