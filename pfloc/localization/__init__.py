"""
Landmark localization building blocks.

Provides the particle and landmark data types, nearest-neighbor data
association, and the diagnostic association helpers used by the particle
filter in ``pfloc.estimators``.
"""

from pfloc.localization.types import (
    UNASSOCIATED_ID,
    LandmarkMap,
    LandmarkObservation,
    MapLandmark,
    Particle,
)
from pfloc.localization.association import (
    associate_observations,
    landmarks_in_range,
    nearest_neighbor_indices,
)
from pfloc.localization.diagnostics import (
    get_associations,
    get_sense_x,
    get_sense_y,
    set_associations,
)

__all__ = [
    # Types
    "UNASSOCIATED_ID",
    "Particle",
    "LandmarkObservation",
    "MapLandmark",
    "LandmarkMap",
    # Data association
    "landmarks_in_range",
    "nearest_neighbor_indices",
    "associate_observations",
    # Diagnostics
    "set_associations",
    "get_associations",
    "get_sense_x",
    "get_sense_y",
]
