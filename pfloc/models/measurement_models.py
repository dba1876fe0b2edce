"""
Landmark measurement model for particle weighting.

Observations are landmark positions measured in the vehicle frame. A
particle's pose maps them into the map frame, where each one is compared to
its associated landmark with a bivariate Gaussian of diagonal covariance
diag(σx², σy²):

    p(z | m) = 1/(2π σx σy) · exp(-[(zx - mx)²/(2σx²) + (zy - my)²/(2σy²)])
"""

import numpy as np
from typing import Sequence

from pfloc.models.motion_models import validate_std


def vehicle_to_map(observations_xy: np.ndarray, pose: np.ndarray) -> np.ndarray:
    """
    Transform vehicle-frame points into the map frame.

        map_x = x + obs_x cos θ - obs_y sin θ
        map_y = y + obs_x sin θ + obs_y cos θ

    Args:
        observations_xy: Vehicle-frame points, shape (M, 2).
        pose: Vehicle pose [x, y, theta].

    Returns:
        Map-frame points, shape (M, 2).

    Example:
        >>> np.round(vehicle_to_map(np.array([[1.0, 0.0]]), np.array([2.0, 3.0, np.pi / 2])), 6)
        array([[2., 4.]])
    """
    observations_xy = np.asarray(observations_xy, dtype=float).reshape(-1, 2)
    x, y, theta = np.asarray(pose, dtype=float)
    c, s = np.cos(theta), np.sin(theta)

    map_x = x + observations_xy[:, 0] * c - observations_xy[:, 1] * s
    map_y = y + observations_xy[:, 0] * s + observations_xy[:, 1] * c
    return np.column_stack([map_x, map_y])


def map_to_vehicle(points_xy: np.ndarray, pose: np.ndarray) -> np.ndarray:
    """
    Inverse of vehicle_to_map: express map-frame points in the vehicle frame.

    Args:
        points_xy: Map-frame points, shape (M, 2).
        pose: Vehicle pose [x, y, theta].

    Returns:
        Vehicle-frame points, shape (M, 2).
    """
    points_xy = np.asarray(points_xy, dtype=float).reshape(-1, 2)
    x, y, theta = np.asarray(pose, dtype=float)
    c, s = np.cos(theta), np.sin(theta)

    dx = points_xy[:, 0] - x
    dy = points_xy[:, 1] - y
    return np.column_stack([dx * c + dy * s, -dx * s + dy * c])


class LandmarkGaussian2D:
    """
    Bivariate Gaussian landmark position likelihood.

    Example:
        >>> model = LandmarkGaussian2D([0.3, 0.3])
        >>> z = np.array([[5.0, 5.0]])
        >>> m = np.array([[5.0, 5.0]])
        >>> bool(np.isclose(model.density(z, m)[0], model.peak_density))
        True
    """

    def __init__(self, std_landmark: Sequence[float]):
        """
        Initialize measurement model.

        Args:
            std_landmark: Standard deviations [σx, σy] (meters), strictly positive.

        Raises:
            ValueError: If std_landmark is not two finite positive values.
        """
        self.std = validate_std(std_landmark, 2, name="std_landmark", strictly_positive=True)
        self.std_x, self.std_y = float(self.std[0]), float(self.std[1])

        self.log_norm = -np.log(2.0 * np.pi * self.std_x * self.std_y)

    @property
    def peak_density(self) -> float:
        """Density at zero residual, 1/(2π σx σy)."""
        return 1.0 / (2.0 * np.pi * self.std_x * self.std_y)

    def _exponent(self, observed_xy: np.ndarray, landmarks_xy: np.ndarray) -> np.ndarray:
        observed_xy = np.asarray(observed_xy, dtype=float).reshape(-1, 2)
        landmarks_xy = np.asarray(landmarks_xy, dtype=float).reshape(-1, 2)
        if observed_xy.shape != landmarks_xy.shape:
            raise ValueError(
                f"observed_xy shape {observed_xy.shape} does not match "
                f"landmarks_xy shape {landmarks_xy.shape}"
            )

        dx = observed_xy[:, 0] - landmarks_xy[:, 0]
        dy = observed_xy[:, 1] - landmarks_xy[:, 1]
        return dx**2 / (2.0 * self.std_x**2) + dy**2 / (2.0 * self.std_y**2)

    def log_density(self, observed_xy: np.ndarray, landmarks_xy: np.ndarray) -> np.ndarray:
        """
        Log density of each observation given its landmark.

        Args:
            observed_xy: Map-frame observations, shape (M, 2).
            landmarks_xy: Associated landmark positions, shape (M, 2).

        Returns:
            Log densities, shape (M,).

        Raises:
            ValueError: If the two arrays have different shapes.
        """
        return self.log_norm - self._exponent(observed_xy, landmarks_xy)

    def density(self, observed_xy: np.ndarray, landmarks_xy: np.ndarray) -> np.ndarray:
        """Density of each observation given its landmark, shape (M,)."""
        return self.peak_density * np.exp(-self._exponent(observed_xy, landmarks_xy))
