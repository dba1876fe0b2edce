"""
State estimation algorithms for landmark localization.

Available estimators:
    - Particle Filter (PF) with bicycle motion model and nearest-neighbor
      landmark association

Supporting pieces:
    - ParticleFilterConfig and named presets
    - Multinomial and systematic resampling
"""

from pfloc.estimators.base import StateEstimator
from pfloc.estimators.config import PRESETS, ParticleFilterConfig
from pfloc.estimators.resampling import (
    RESAMPLERS,
    effective_sample_size,
    multinomial_resample,
    normalize_weights,
    systematic_resample,
)
from pfloc.estimators.particle_filter import ParticleFilter

__all__ = [
    "StateEstimator",
    # Configuration
    "ParticleFilterConfig",
    "PRESETS",
    # Resampling
    "normalize_weights",
    "effective_sample_size",
    "multinomial_resample",
    "systematic_resample",
    "RESAMPLERS",
    # Particle Filter
    "ParticleFilter",
]
