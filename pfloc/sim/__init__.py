"""
Simulation utilities for landmark localization.

Generates synthetic maps, ground-truth trajectories, noisy controls and
vehicle-frame observations, and runs the particle filter over them.

Modules:
    landmark_scenario: Scenario generation and filter runner
"""

from pfloc.sim.landmark_scenario import (
    LandmarkScenario,
    generate_landmark_map,
    generate_observations,
    run_particle_filter,
    simulate_scenario,
    simulate_trajectory,
)

__all__ = [
    "LandmarkScenario",
    "generate_landmark_map",
    "simulate_trajectory",
    "generate_observations",
    "simulate_scenario",
    "run_particle_filter",
]
