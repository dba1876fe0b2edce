"""Data types for landmark-based particle filter localization.

This module defines the core data structures shared by the filter, the data
association routines, and the diagnostic helpers.

Key types:
    - Particle: One weighted pose hypothesis [x, y, theta]
    - LandmarkObservation: A sensor detection in the vehicle frame
    - MapLandmark: A static, known landmark in the map frame
    - LandmarkMap: Read-only collection of map landmarks

Frames:
    - Vehicle frame: x forward, y to the left, origin at the vehicle.
    - Map frame: fixed world frame in which particles and landmarks live.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Sequence, Tuple

import numpy as np


# Id carried by an observation that could not be matched to any landmark.
UNASSOCIATED_ID = -1


@dataclass
class Particle:
    """
    One pose hypothesis of the vehicle.

    Attributes:
        id: Index of the particle within its generation.
        x: Map-frame x position (meters).
        y: Map-frame y position (meters).
        theta: Heading (radians). Not wrapped; grows with accumulated turns.
        weight: Relative likelihood from the most recent weight update.
        log_weight: Natural log of the likelihood, kept alongside ``weight``
            so that resampling still works after ``weight`` underflows.
        associations: Landmark ids matched in the most recent update.
        sense_x: Map-frame x of each associated observation.
        sense_y: Map-frame y of each associated observation.
    """

    id: int
    x: float
    y: float
    theta: float
    weight: float = 1.0
    log_weight: float = 0.0
    associations: List[int] = field(default_factory=list)
    sense_x: List[float] = field(default_factory=list)
    sense_y: List[float] = field(default_factory=list)

    def pose(self) -> np.ndarray:
        """Return the pose as an array [x, y, theta]."""
        return np.array([self.x, self.y, self.theta], dtype=np.float64)

    def __repr__(self) -> str:
        return (
            f"Particle(id={self.id}, x={self.x:.4f}, y={self.y:.4f}, "
            f"theta={self.theta:.4f}, weight={self.weight:.4g})"
        )


@dataclass(kw_only=True)
class LandmarkObservation:
    """
    Landmark detection expressed in the vehicle frame.

    The ``id`` field is overwritten by data association with the id of the
    nearest map landmark, or UNASSOCIATED_ID when nothing could be matched.
    Fields are keyword-only: ``LandmarkObservation(x=1.0, y=2.0)``.
    """

    id: int = UNASSOCIATED_ID
    x: float
    y: float


@dataclass(frozen=True)
class MapLandmark:
    """Static landmark with a known map-frame position."""

    id: int
    x: float
    y: float

    def __post_init__(self) -> None:
        """Validate landmark coordinates."""
        if not np.isfinite(self.x):
            raise ValueError(f"Landmark {self.id}: x must be finite, got {self.x}")
        if not np.isfinite(self.y):
            raise ValueError(f"Landmark {self.id}: y must be finite, got {self.y}")


@dataclass(frozen=True)
class LandmarkMap:
    """
    Read-only map of known landmarks.

    Landmark order is preserved; it defines the enumeration order used to
    break ties in nearest-neighbor data association.

    Examples:
        >>> m = LandmarkMap.from_array(np.array([[1, 0.0, 0.0], [2, 10.0, 10.0]]))
        >>> len(m)
        2
        >>> m.ids()
        array([1, 2])
    """

    landmarks: Tuple[MapLandmark, ...]

    def __post_init__(self) -> None:
        """Normalize to a tuple and check ids are unique."""
        landmarks = tuple(self.landmarks)
        for lm in landmarks:
            if not isinstance(lm, MapLandmark):
                raise TypeError(f"Expected MapLandmark, got {type(lm)}")
        object.__setattr__(self, "landmarks", landmarks)

        ids = [lm.id for lm in landmarks]
        if len(set(ids)) != len(ids):
            raise ValueError("Landmark ids must be unique")

    @classmethod
    def from_array(cls, arr: np.ndarray) -> "LandmarkMap":
        """
        Build a map from an (L, 3) array of [id, x, y] rows.

        Raises:
            ValueError: If the array is not (L, 3).
        """
        arr = np.asarray(arr, dtype=float)
        if arr.size == 0:
            return cls(landmarks=())
        if arr.ndim != 2 or arr.shape[1] != 3:
            raise ValueError(f"Landmark array must have shape (L, 3), got {arr.shape}")
        return cls(
            landmarks=tuple(
                MapLandmark(id=int(row[0]), x=float(row[1]), y=float(row[2]))
                for row in arr
            )
        )

    @classmethod
    def from_landmarks(cls, landmarks: Sequence[MapLandmark]) -> "LandmarkMap":
        return cls(landmarks=tuple(landmarks))

    def ids(self) -> np.ndarray:
        """Landmark ids, shape (L,)."""
        return np.array([lm.id for lm in self.landmarks], dtype=int)

    def positions(self) -> np.ndarray:
        """Landmark positions, shape (L, 2)."""
        if not self.landmarks:
            return np.zeros((0, 2))
        return np.array([[lm.x, lm.y] for lm in self.landmarks], dtype=np.float64)

    def __len__(self) -> int:
        return len(self.landmarks)

    def __iter__(self) -> Iterator[MapLandmark]:
        return iter(self.landmarks)
