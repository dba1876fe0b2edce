"""Landmark-based particle filter localization.

This package estimates the pose of a moving vehicle on a known landmark map
with a sequential Monte Carlo (particle) filter:
- estimators: Particle filter, resampling schemes, configuration
- models: Bicycle motion model and landmark measurement model
- localization: Particle/landmark types, data association, diagnostics
- utils: Angle helpers
- eval: Error metrics and plots
- sim: Synthetic landmark scenarios
"""

__version__ = "0.1.0"
