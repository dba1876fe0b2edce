"""
Motion and measurement models for landmark localization.

This module provides the bicycle motion model used to propagate particles
and the Gaussian landmark measurement model used to weight them.
"""

from .motion_models import (
    BicycleModel,
    validate_motion_inputs,
    validate_std,
)

from .measurement_models import (
    LandmarkGaussian2D,
    map_to_vehicle,
    vehicle_to_map,
)

__all__ = [
    # Motion models
    'BicycleModel',
    'validate_motion_inputs',
    'validate_std',

    # Measurement models
    'LandmarkGaussian2D',
    'vehicle_to_map',
    'map_to_vehicle',
]
