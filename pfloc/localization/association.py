"""
Nearest-neighbor data association for landmark observations.

Both the candidate landmarks and the observations are expected in the same
(map) frame. Association is pure geometry: it does not look at particle
weights and can be reused for every particle in every cycle.
"""

from typing import List, Sequence

import numpy as np

from pfloc.localization.types import UNASSOCIATED_ID, LandmarkMap, LandmarkObservation


def _as_points(points: np.ndarray, name: str) -> np.ndarray:
    """Coerce to a float (n, 2) array; empty input becomes (0, 2)."""
    points = np.asarray(points, dtype=float)
    if points.size == 0:
        return points.reshape(0, 2)
    if points.ndim != 2 or points.shape[1] != 2:
        raise ValueError(f"{name} must have shape (n, 2), got {points.shape}")
    return points


def landmarks_in_range(
    landmark_map: LandmarkMap,
    x: float,
    y: float,
    sensor_range: float,
) -> np.ndarray:
    """
    Select landmarks inside the sensor window around (x, y).

    The gate is a square (L∞) window: a landmark is kept when both
    |lx - x| <= sensor_range and |ly - y| <= sensor_range. Boundary points
    are included.

    Args:
        landmark_map: Known landmarks.
        x: Map-frame x of the sensor (meters).
        y: Map-frame y of the sensor (meters).
        sensor_range: Half-width of the window (meters).

    Returns:
        Boolean mask of shape (L,) in map order.
    """
    positions = landmark_map.positions()
    if positions.shape[0] == 0:
        return np.zeros(0, dtype=bool)

    return (
        (np.abs(positions[:, 0] - x) <= sensor_range)
        & (np.abs(positions[:, 1] - y) <= sensor_range)
    )


def nearest_neighbor_indices(
    candidates_xy: np.ndarray,
    observations_xy: np.ndarray,
) -> np.ndarray:
    """
    Index of the nearest candidate for every observation.

    Distances are Euclidean. When two candidates are equally close, the one
    that comes first in ``candidates_xy`` wins; a later candidate replaces
    the current best only if it is strictly closer.

    Args:
        candidates_xy: Candidate positions, shape (K, 2).
        observations_xy: Observation positions, shape (M, 2).

    Returns:
        Integer array of shape (M,) indexing into ``candidates_xy``.
        All entries are -1 when there are no candidates.

    Raises:
        ValueError: If either array is not (n, 2).

    Example:
        >>> cands = np.array([[0.0, 0.0], [10.0, 10.0]])
        >>> nearest_neighbor_indices(cands, np.array([[1.0, 1.0]]))
        array([0])
    """
    candidates_xy = _as_points(candidates_xy, "candidates_xy")
    observations_xy = _as_points(observations_xy, "observations_xy")

    n_obs = observations_xy.shape[0]
    if candidates_xy.shape[0] == 0:
        return np.full(n_obs, -1, dtype=int)
    if n_obs == 0:
        return np.zeros(0, dtype=int)

    # (M, K) squared distances; argmin returns the first minimum.
    diff = observations_xy[:, np.newaxis, :] - candidates_xy[np.newaxis, :, :]
    d_sq = np.sum(diff**2, axis=2)
    return np.argmin(d_sq, axis=1).astype(int)


def associate_observations(
    predicted: Sequence[LandmarkObservation],
    observations: List[LandmarkObservation],
) -> np.ndarray:
    """
    Assign each observation the id of its nearest predicted landmark.

    Observations are updated in place. With no predicted landmarks every
    observation gets UNASSOCIATED_ID.

    Args:
        predicted: Candidate landmarks in the map frame.
        observations: Observations in the map frame; their ``id`` is overwritten.

    Returns:
        Assigned ids, shape (M,).
    """
    candidates_xy = np.array([[p.x, p.y] for p in predicted], dtype=float).reshape(-1, 2)
    candidate_ids = np.array([p.id for p in predicted], dtype=int)
    observations_xy = np.array([[o.x, o.y] for o in observations], dtype=float).reshape(-1, 2)

    idx = nearest_neighbor_indices(candidates_xy, observations_xy)

    assigned = np.full(len(observations), UNASSOCIATED_ID, dtype=int)
    matched = idx >= 0
    assigned[matched] = candidate_ids[idx[matched]]

    for obs, obs_id in zip(observations, assigned):
        obs.id = int(obs_id)

    return assigned
