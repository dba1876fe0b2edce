"""
Particle Filter for landmark-based vehicle localization.

This module implements a sequential Monte Carlo estimator of the vehicle pose
[x, y, theta] on a known landmark map. Each estimation cycle runs three
stages over a fixed-size particle population:

    1. predict:        x_k⁽ⁱ⁾ = f(x_{k-1}⁽ⁱ⁾, v, ω, Δt) + w,  w ~ N(0, diag(σ²))
    2. update_weights: w⁽ⁱ⁾ = Π_j p(z_j | m_{a(j)}, x_k⁽ⁱ⁾)
    3. resample:       draw N particles with replacement, P(i) ∝ w⁽ⁱ⁾

where f is the bicycle model, z_j are landmark observations transformed into
the map frame with the particle pose, and a(j) is the nearest in-range map
landmark (nearest-neighbor data association).
"""

import warnings
from dataclasses import replace
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from pfloc.estimators.base import StateEstimator
from pfloc.estimators.config import ParticleFilterConfig
from pfloc.estimators.resampling import (
    RESAMPLERS,
    effective_sample_size,
    normalize_weights,
)
from pfloc.localization.association import landmarks_in_range, nearest_neighbor_indices
from pfloc.localization.diagnostics import set_associations
from pfloc.localization.types import (
    LandmarkMap,
    LandmarkObservation,
    MapLandmark,
    Particle,
)
from pfloc.models.measurement_models import LandmarkGaussian2D, vehicle_to_map
from pfloc.models.motion_models import BicycleModel, validate_std
from pfloc.utils.angles import angle_diff, circular_mean


Observations = Union[Sequence[LandmarkObservation], np.ndarray]
MapLike = Union[LandmarkMap, Sequence[MapLandmark]]


class ParticleFilter(StateEstimator):
    """
    Particle Filter for 2D vehicle localization against known landmarks.

    The filter owns its particle population and a single random number
    generator created once at construction. It starts uninitialized;
    ``initialize`` seeds the population and every other operation raises
    RuntimeError before that.

    Weights are relative likelihoods recomputed from scratch by each
    ``update_weights`` call; they are not normalized. With
    ``config.log_domain`` the filter also resamples from log weights, which
    stay finite when the linear weights underflow. Log weights are always
    kept, and linear mode falls back to them if the product overflows.

    Attributes:
        config: Lifetime settings (population size, seed, policies).
        particles: Current generation, list of Particle.
        motion_model: Bicycle model used by predict.
        last_resample_indices: Source index of every particle produced by the
            most recent resample (None before the first resample).

    Example:
        >>> pf = ParticleFilter(ParticleFilterConfig(n_particles=100, seed=0))
        >>> pf.initialize(0.0, 0.0, 0.0, [0.3, 0.3, 0.01])
        >>> pf.predict(0.1, [0.3, 0.3, 0.01], velocity=5.0, yaw_rate=0.1)
        >>> landmarks = LandmarkMap.from_array(np.array([[1, 5.0, 2.0]]))
        >>> pf.update_weights(50.0, [0.3, 0.3], np.array([[4.5, 2.0]]), landmarks)
        >>> pf.resample()
        >>> len(pf.particles)
        100
    """

    def __init__(
        self,
        config: Optional[ParticleFilterConfig] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        """
        Create an uninitialized filter.

        Args:
            config: Filter settings. Defaults to ParticleFilterConfig().
            rng: Random number generator to own. If None, one is created
                from ``config.seed``.
        """
        super().__init__(state_dim=3)

        self.config = config if config is not None else ParticleFilterConfig()
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)
        self.motion_model = BicycleModel(yaw_rate_epsilon=self.config.yaw_rate_epsilon)

        self.particles: List[Particle] = []
        self.last_resample_indices: Optional[np.ndarray] = None

    @property
    def n_particles(self) -> int:
        return self.config.n_particles

    @property
    def weights(self) -> np.ndarray:
        """Current particle weights, shape (N,)."""
        return np.array([p.weight for p in self.particles], dtype=float)

    @property
    def log_weights(self) -> np.ndarray:
        """Current particle log weights, shape (N,)."""
        return np.array([p.log_weight for p in self.particles], dtype=float)

    def poses(self) -> np.ndarray:
        """Current particle poses, shape (N, 3)."""
        return np.array([[p.x, p.y, p.theta] for p in self.particles], dtype=float).reshape(-1, 3)

    def initialize(self, x: float, y: float, theta: float, std: Sequence[float]) -> None:
        """
        Seed the population around an initial pose estimate.

        Each particle is drawn from independent Gaussians N(x, σx²),
        N(y, σy²), N(theta, σθ²) and given weight 1.0.

        Args:
            x: Initial x estimate (meters), e.g. from GPS.
            y: Initial y estimate (meters).
            theta: Initial heading estimate (radians).
            std: Standard deviations [σx, σy, σθ], finite and non-negative.

        Raises:
            ValueError: If the pose is not finite or std is invalid.
            RuntimeError: If the filter was already initialized.
        """
        if self.is_initialized:
            raise RuntimeError("ParticleFilter is already initialized")

        mean = np.array([x, y, theta], dtype=float)
        if not np.all(np.isfinite(mean)):
            raise ValueError(f"Initial pose must be finite, got {mean}")
        std = validate_std(std, 3, name="std")

        samples = self.rng.normal(loc=mean, scale=std, size=(self.n_particles, 3))
        self.particles = [
            Particle(id=i, x=float(s[0]), y=float(s[1]), theta=float(s[2]))
            for i, s in enumerate(samples)
        ]

        self._mark_initialized()

    def predict(
        self,
        dt: float,
        std_pos: Sequence[float],
        velocity: float,
        yaw_rate: float,
    ) -> None:
        """
        Advance every particle with the bicycle model plus process noise.

        Noise N(0, diag(std_pos²)) is added after the deterministic step.

        Args:
            dt: Elapsed time in seconds, must be positive.
            std_pos: Process noise standard deviations [σx, σy, σθ].
            velocity: Commanded forward speed (m/s).
            yaw_rate: Commanded yaw rate (rad/s).

        Raises:
            RuntimeError: If the filter is not initialized.
            ValueError: If dt is not positive or std_pos is invalid.
        """
        self._require_initialized("predict")

        poses = self.motion_model.propagate(
            self.poses(), velocity, yaw_rate, dt, std_pos, rng=self.rng
        )
        for p, pose in zip(self.particles, poses):
            p.x, p.y, p.theta = float(pose[0]), float(pose[1]), float(pose[2])

    def update_weights(
        self,
        sensor_range: float,
        std_landmark: Sequence[float],
        observations: Observations,
        landmark_map: MapLike,
    ) -> None:
        """
        Recompute every particle's weight from the current observations.

        For each particle:
            1. keep map landmarks with |lx - x| <= range and |ly - y| <= range
            2. transform observations from the vehicle frame to the map frame
            3. associate each observation with its nearest in-range landmark
            4. weight = product of Gaussian densities over matched pairs

        Observations without an in-range landmark follow
        ``config.unmatched_policy``. A particle with nothing matched keeps
        weight 1.0 under the default "ignore" policy.

        Args:
            sensor_range: Sensor window half-width (meters), positive.
            std_landmark: Measurement standard deviations [σx, σy] (meters).
            observations: Vehicle-frame observations, either a sequence of
                LandmarkObservation or an (M, 2) array.
            landmark_map: Known landmarks.

        Raises:
            RuntimeError: If the filter is not initialized.
            ValueError: On invalid range, std or observation shape.
        """
        self._require_initialized("update_weights")

        if not np.isfinite(sensor_range) or sensor_range <= 0:
            raise ValueError(f"sensor_range must be positive, got {sensor_range}")

        model = LandmarkGaussian2D(std_landmark)
        observations_xy = _observations_to_array(observations)
        landmark_map = _as_landmark_map(landmark_map)
        landmark_ids = landmark_map.ids()
        landmark_xy = landmark_map.positions()

        for p in self.particles:
            in_range = landmarks_in_range(landmark_map, p.x, p.y, sensor_range)
            candidate_ids = landmark_ids[in_range]
            candidate_xy = landmark_xy[in_range]

            observed_xy = vehicle_to_map(observations_xy, p.pose())
            idx = nearest_neighbor_indices(candidate_xy, observed_xy)
            matched = idx >= 0

            matched_xy = observed_xy[matched]
            associated_xy = candidate_xy[idx[matched]]

            if self.config.unmatched_policy == "zero" and not np.all(matched):
                p.weight, p.log_weight = 0.0, -np.inf
            else:
                # log_weight stays finite when the linear product under- or overflows
                p.log_weight = float(np.sum(model.log_density(matched_xy, associated_xy)))
                if self.config.log_domain:
                    p.weight = float(np.exp(p.log_weight))
                else:
                    p.weight = float(np.prod(model.density(matched_xy, associated_xy)))

            set_associations(
                p,
                candidate_ids[idx[matched]],
                matched_xy[:, 0],
                matched_xy[:, 1],
            )

    def resample(self) -> None:
        """
        Replace the population by N draws with replacement, P(i) ∝ w⁽ⁱ⁾.

        The new generation copies poses only: weights are reset to 1.0,
        association lists are cleared, and ids are renumbered 0..N-1. If all
        weights are zero the draw is uniform; if the linear weights overflowed
        the draw uses the log weights (both issue a RuntimeWarning).

        Raises:
            RuntimeError: If the filter is not initialized.
            ValueError: If weights are negative or NaN.
        """
        self._require_initialized("resample")

        probabilities = self._probabilities()
        resampler = RESAMPLERS[self.config.resampling]
        indices = resampler(probabilities, self.n_particles, self.rng)

        previous = self.particles
        self.particles = [
            Particle(id=i, x=previous[j].x, y=previous[j].y, theta=previous[j].theta)
            for i, j in enumerate(indices)
        ]
        self.last_resample_indices = np.asarray(indices, dtype=int)

    def update(
        self,
        sensor_range: float,
        std_landmark: Sequence[float],
        observations: Observations,
        landmark_map: MapLike,
    ) -> None:
        """Measurement update followed by resampling."""
        self.update_weights(sensor_range, std_landmark, observations, landmark_map)
        self.resample()

    def step(
        self,
        dt: float,
        std_pos: Sequence[float],
        velocity: float,
        yaw_rate: float,
        sensor_range: float,
        std_landmark: Sequence[float],
        observations: Observations,
        landmark_map: MapLike,
    ) -> Particle:
        """
        Run one full cycle: predict, update_weights, resample.

        Returns:
            The highest-weight particle of the weighted population, taken
            before resampling resets the weights.
        """
        self.predict(dt, std_pos, velocity, yaw_rate)
        self.update_weights(sensor_range, std_landmark, observations, landmark_map)
        best = self.best_estimate()
        self.resample()
        return best

    def best_estimate(self, method: str = "max_weight") -> Particle:
        """
        Summarize the population as a single pose.

        Args:
            method: "max_weight" returns a copy of the highest-weight
                particle (the first one on ties), associations included.
                "weighted_mean" returns a particle (id -1) at the
                weighted mean position with circular mean heading.

        Returns:
            Particle holding the estimate.

        Raises:
            RuntimeError: If the filter is not initialized.
            ValueError: If method is unknown.
        """
        self._require_initialized("best_estimate")

        if method == "max_weight":
            scores = self.log_weights if self._use_log_weights() else self.weights
            best = self.particles[int(np.argmax(scores))]
            return replace(
                best,
                associations=list(best.associations),
                sense_x=list(best.sense_x),
                sense_y=list(best.sense_y),
            )
        if method == "weighted_mean":
            state, _ = self._compute_state()
            return Particle(id=-1, x=float(state[0]), y=float(state[1]), theta=float(state[2]))

        raise ValueError(f"Unknown method {method!r}, use 'max_weight' or 'weighted_mean'")

    def effective_sample_size(self) -> float:
        """
        Effective sample size N_eff = 1 / Σ(w̄ᵢ²) of the normalized weights.

        Raises:
            RuntimeError: If the filter is not initialized.
        """
        self._require_initialized("effective_sample_size")
        return effective_sample_size(self._probabilities())

    def _use_log_weights(self) -> bool:
        """
        True when normalization has to go through the log weights.

        That is always the case in log-domain mode. In linear mode it is the
        fallback for a product of densities that overflowed to +inf.
        """
        if self.config.log_domain:
            return True
        if np.any(np.isposinf(self.weights)):
            warnings.warn(
                "Particle weights overflowed; normalizing from log weights",
                RuntimeWarning
            )
            return True
        return False

    def _probabilities(self) -> np.ndarray:
        if self._use_log_weights():
            return normalize_weights(log_weights=self.log_weights)
        return normalize_weights(weights=self.weights)

    def _compute_state(self) -> Tuple[np.ndarray, np.ndarray]:
        """
        Weighted mean and covariance of the particle poses.

        The heading uses the circular mean, and heading deviations are
        wrapped before entering the covariance.
        """
        w = self._probabilities()
        poses = self.poses()

        mean = np.array([
            np.sum(w * poses[:, 0]),
            np.sum(w * poses[:, 1]),
            circular_mean(poses[:, 2], w),
        ])

        diff = poses - mean
        diff[:, 2] = angle_diff(poses[:, 2], np.full(len(poses), mean[2]))
        covariance = (w[:, np.newaxis, np.newaxis]
                      * diff[:, :, np.newaxis]
                      * diff[:, np.newaxis, :]).sum(axis=0)

        return mean, covariance


def _observations_to_array(observations: Observations) -> np.ndarray:
    """Vehicle-frame observations as an (M, 2) float array."""
    if isinstance(observations, np.ndarray):
        arr = np.asarray(observations, dtype=float)
    else:
        arr = np.array([[o.x, o.y] for o in observations], dtype=float)

    if arr.size == 0:
        return arr.reshape(0, 2)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise ValueError(f"observations must have shape (M, 2), got {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise ValueError("observations must be finite")
    return arr


def _as_landmark_map(landmark_map: MapLike) -> LandmarkMap:
    if isinstance(landmark_map, LandmarkMap):
        return landmark_map
    return LandmarkMap.from_landmarks(landmark_map)
