"""Landmark particle filter localization examples.

Examples:
    - example_landmark_pf.py: Simulated drive through a landmark field,
      localized with the particle filter

Dependencies:
    - pfloc.estimators: Particle filter and presets
    - pfloc.sim: Scenario simulation
    - pfloc.eval: Metrics and plots
    - tqdm: Progress bar
    - matplotlib: Visualization
"""

__version__ = "0.1.0"

__all__ = []
