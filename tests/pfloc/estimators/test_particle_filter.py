"""
Unit tests for the landmark Particle Filter.

Tests cover:
    - Lifecycle (uninitialized -> ready) and precondition errors
    - Initialization cardinality, weights and sample mean
    - Prediction with zero and non-zero process noise
    - Weight update: peak density, falloff, gating, unmatched policies
    - Log-domain weights under likelihood underflow
    - Resampling cardinality, lineage and degenerate weights
    - Pose estimates (best particle, weighted mean, covariance)
"""

import unittest

import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal

from pfloc.estimators import ParticleFilter, ParticleFilterConfig
from pfloc.localization import LandmarkMap, LandmarkObservation, MapLandmark


ZERO_STD3 = [0.0, 0.0, 0.0]
STD_LANDMARK = [0.3, 0.3]


def make_filter(n_particles=1, seed=0, **kwargs):
    return ParticleFilter(ParticleFilterConfig(n_particles=n_particles, seed=seed, **kwargs))


def place_particles(pf, poses):
    """Overwrite particle poses for controlled weight tests."""
    for p, (x, y, theta) in zip(pf.particles, poses):
        p.x, p.y, p.theta = x, y, theta


class TestLifecycle(unittest.TestCase):
    """The filter must be initialized exactly once before use."""

    def setUp(self):
        self.pf = make_filter(n_particles=10)
        self.landmarks = LandmarkMap.from_array(np.array([[1, 5.0, 5.0]]))

    def test_starts_uninitialized(self):
        self.assertFalse(self.pf.is_initialized)
        self.assertEqual(self.pf.particles, [])

    def test_operations_before_initialize_raise(self):
        with self.assertRaises(RuntimeError):
            self.pf.predict(0.1, ZERO_STD3, 1.0, 0.0)
        with self.assertRaises(RuntimeError):
            self.pf.update_weights(50.0, STD_LANDMARK, np.array([[1.0, 1.0]]), self.landmarks)
        with self.assertRaises(RuntimeError):
            self.pf.resample()
        with self.assertRaises(RuntimeError):
            self.pf.best_estimate()
        with self.assertRaises(RuntimeError):
            self.pf.get_state()
        with self.assertRaises(RuntimeError):
            self.pf.effective_sample_size()

    def test_double_initialize_raises(self):
        self.pf.initialize(0.0, 0.0, 0.0, [1.0, 1.0, 0.1])
        self.assertTrue(self.pf.is_initialized)
        with self.assertRaises(RuntimeError):
            self.pf.initialize(0.0, 0.0, 0.0, [1.0, 1.0, 0.1])

    def test_invalid_initialize_inputs(self):
        with self.assertRaises(ValueError):
            self.pf.initialize(0.0, 0.0, 0.0, [1.0, -1.0, 0.1])
        with self.assertRaises(ValueError):
            self.pf.initialize(0.0, 0.0, 0.0, [1.0, 1.0])
        with self.assertRaises(ValueError):
            self.pf.initialize(np.nan, 0.0, 0.0, [1.0, 1.0, 0.1])
        self.assertFalse(self.pf.is_initialized)


class TestInitialize(unittest.TestCase):

    def test_cardinality_and_weights(self):
        for n in (1, 7, 50):
            pf = make_filter(n_particles=n)
            pf.initialize(3.0, -2.0, 0.5, [0.3, 0.3, 0.01])

            self.assertEqual(len(pf.particles), n)
            self.assertTrue(all(p.weight == 1.0 for p in pf.particles))
            self.assertEqual([p.id for p in pf.particles], list(range(n)))

    def test_zero_std_places_particles_on_estimate(self):
        pf = make_filter(n_particles=5)
        pf.initialize(1.0, 2.0, 3.0, ZERO_STD3)
        assert_allclose(pf.poses(), np.tile([1.0, 2.0, 3.0], (5, 1)))

    def test_sample_mean_converges(self):
        """Empirical mean and std match the requested distribution."""
        n = 5000
        std = np.array([1.0, 2.0, 0.1])
        pf = make_filter(n_particles=n, seed=123)
        pf.initialize(10.0, -5.0, 0.7, std)

        poses = pf.poses()
        assert_allclose(poses.mean(axis=0), [10.0, -5.0, 0.7], atol=4 * std.max() / np.sqrt(n))
        assert_allclose(poses.std(axis=0), std, rtol=0.05)

    def test_same_seed_reproducible(self):
        a, b = make_filter(20, seed=9), make_filter(20, seed=9)
        a.initialize(0.0, 0.0, 0.0, [1.0, 1.0, 1.0])
        b.initialize(0.0, 0.0, 0.0, [1.0, 1.0, 1.0])
        assert_array_equal(a.poses(), b.poses())

    def test_generator_advances_between_calls(self):
        """The owned generator is not re-seeded per call."""
        pf = make_filter(n_particles=1, seed=1)
        pf.initialize(0.0, 0.0, 0.0, ZERO_STD3)
        pf.predict(1.0, [1.0, 1.0, 0.0], 0.0, 0.0)
        first = pf.poses()[0].copy()
        pf.predict(1.0, [1.0, 1.0, 0.0], 0.0, 0.0)
        step = pf.poses()[0] - first
        self.assertFalse(np.allclose(step[:2], first[:2]))

    def test_external_generator(self):
        rng = np.random.default_rng(77)
        pf = ParticleFilter(ParticleFilterConfig(n_particles=3), rng=rng)
        self.assertIs(pf.rng, rng)


class TestPredict(unittest.TestCase):

    def setUp(self):
        self.pf = make_filter(n_particles=4)
        self.pf.initialize(0.0, 0.0, 0.0, ZERO_STD3)

    def test_straight_line(self):
        self.pf.predict(1.0, ZERO_STD3, velocity=1.0, yaw_rate=0.0)
        assert_allclose(self.pf.poses(), np.tile([1.0, 0.0, 0.0], (4, 1)), atol=0.0)

    def test_turning(self):
        self.pf.predict(1.0, ZERO_STD3, velocity=1.0, yaw_rate=np.pi / 2)
        expected = [2.0 / np.pi, 2.0 / np.pi, np.pi / 2]
        assert_allclose(self.pf.poses(), np.tile(expected, (4, 1)), atol=1e-12)

    def test_weights_untouched(self):
        for p in self.pf.particles:
            p.weight = 0.25
        self.pf.predict(0.1, [0.1, 0.1, 0.01], 1.0, 0.1)
        assert_allclose(self.pf.weights, 0.25)

    def test_noise_spreads_particles(self):
        pf = make_filter(n_particles=200, seed=4)
        pf.initialize(0.0, 0.0, 0.0, ZERO_STD3)
        pf.predict(0.1, [0.3, 0.3, 0.01], 10.0, 0.0)
        self.assertGreater(pf.poses()[:, 0].std(), 0.2)
        self.assertAlmostEqual(pf.poses()[:, 0].mean(), 1.0, delta=0.1)

    def test_invalid_inputs(self):
        with self.assertRaises(ValueError):
            self.pf.predict(0.0, ZERO_STD3, 1.0, 0.0)
        with self.assertRaises(ValueError):
            self.pf.predict(-1.0, ZERO_STD3, 1.0, 0.0)
        with self.assertRaises(ValueError):
            self.pf.predict(0.1, [0.1, 0.1], 1.0, 0.0)
        with self.assertRaises(ValueError):
            self.pf.predict(0.1, [0.1, -0.1, 0.1], 1.0, 0.0)


class TestUpdateWeights(unittest.TestCase):

    def setUp(self):
        self.peak = 1.0 / (2.0 * np.pi * 0.3 * 0.3)
        self.landmarks = LandmarkMap.from_array(np.array([[1, 5.0, 5.0]]))

    def test_exact_observation_gives_peak_density(self):
        """Particle at (0, 0, 0) observing (5, 5) matches the landmark at (5, 5)."""
        pf = make_filter(n_particles=1)
        pf.initialize(0.0, 0.0, 0.0, ZERO_STD3)

        pf.update_weights(50.0, STD_LANDMARK, [LandmarkObservation(x=5.0, y=5.0)], self.landmarks)

        p = pf.particles[0]
        self.assertAlmostEqual(p.weight, self.peak, places=12)
        self.assertEqual(p.associations, [1])
        assert_allclose([p.sense_x[0], p.sense_y[0]], [5.0, 5.0])

    def test_one_sigma_offset(self):
        pf = make_filter(n_particles=1)
        pf.initialize(0.0, 0.0, 0.0, ZERO_STD3)

        pf.update_weights(50.0, STD_LANDMARK, np.array([[5.3, 5.3]]), self.landmarks)

        ratio = pf.particles[0].weight / self.peak
        self.assertAlmostEqual(ratio, np.exp(-1.0), places=10)
        self.assertTrue(0.25 <= ratio <= 0.5)

    def test_rotated_particle(self):
        """Observation is transformed with the particle's own heading."""
        pf = make_filter(n_particles=1)
        pf.initialize(5.0, 0.0, np.pi / 2, ZERO_STD3)

        # Landmark 5 m straight ahead of a vehicle at (5, 0) facing +y
        pf.update_weights(50.0, STD_LANDMARK, np.array([[5.0, 0.0]]), self.landmarks)

        self.assertAlmostEqual(pf.particles[0].weight, self.peak, places=10)

    def test_product_over_observations(self):
        landmarks = LandmarkMap.from_array(np.array([[1, 5.0, 0.0], [2, 0.0, 5.0]]))
        pf = make_filter(n_particles=1)
        pf.initialize(0.0, 0.0, 0.0, ZERO_STD3)

        pf.update_weights(50.0, STD_LANDMARK, np.array([[5.0, 0.0], [0.0, 5.3]]), landmarks)

        self.assertAlmostEqual(pf.particles[0].weight,
                               self.peak * self.peak * np.exp(-0.5), places=10)
        self.assertEqual(pf.particles[0].associations, [1, 2])

    def test_closer_particle_scores_higher(self):
        pf = make_filter(n_particles=2)
        pf.initialize(0.0, 0.0, 0.0, ZERO_STD3)
        place_particles(pf, [(0.0, 0.0, 0.0), (0.5, 0.0, 0.0)])

        pf.update_weights(50.0, STD_LANDMARK, np.array([[5.0, 5.0]]), self.landmarks)

        self.assertGreater(pf.weights[0], pf.weights[1])

    def test_idempotent(self):
        pf = make_filter(n_particles=30, seed=5)
        pf.initialize(0.0, 0.0, 0.0, [0.5, 0.5, 0.05])
        obs = np.array([[5.1, 4.8]])

        pf.update_weights(50.0, STD_LANDMARK, obs, self.landmarks)
        first = pf.weights
        pf.update_weights(50.0, STD_LANDMARK, obs, self.landmarks)

        assert_array_equal(pf.weights, first)

    def test_weights_reset_each_update(self):
        pf = make_filter(n_particles=1)
        pf.initialize(0.0, 0.0, 0.0, ZERO_STD3)
        pf.particles[0].weight = 123.0

        pf.update_weights(50.0, STD_LANDMARK, [], self.landmarks)

        self.assertEqual(pf.particles[0].weight, 1.0)

    def test_no_landmark_in_range_keeps_neutral_weight(self):
        """Default policy: an unmatched observation contributes no factor."""
        pf = make_filter(n_particles=1)
        pf.initialize(100.0, 100.0, 0.0, ZERO_STD3)

        pf.update_weights(10.0, STD_LANDMARK, np.array([[1.0, 1.0]]), self.landmarks)

        self.assertEqual(pf.particles[0].weight, 1.0)
        self.assertEqual(pf.particles[0].associations, [])

    def test_square_gate_on_particle_position(self):
        """Landmark at (5, 5) is inside a 5 m square window at the origin."""
        pf = make_filter(n_particles=1)
        pf.initialize(0.0, 0.0, 0.0, ZERO_STD3)

        pf.update_weights(5.0, STD_LANDMARK, np.array([[5.0, 5.0]]), self.landmarks)

        self.assertAlmostEqual(pf.particles[0].weight, self.peak, places=12)

    def test_zero_policy(self):
        pf = make_filter(n_particles=1, unmatched_policy="zero")
        pf.initialize(100.0, 100.0, 0.0, ZERO_STD3)

        pf.update_weights(10.0, STD_LANDMARK, np.array([[1.0, 1.0]]), self.landmarks)

        self.assertEqual(pf.particles[0].weight, 0.0)
        self.assertEqual(pf.particles[0].log_weight, -np.inf)

    def test_zero_policy_without_observations(self):
        pf = make_filter(n_particles=1, unmatched_policy="zero")
        pf.initialize(100.0, 100.0, 0.0, ZERO_STD3)

        pf.update_weights(10.0, STD_LANDMARK, np.zeros((0, 2)), self.landmarks)

        self.assertEqual(pf.particles[0].weight, 1.0)

    def test_accepts_landmark_sequence(self):
        pf = make_filter(n_particles=1)
        pf.initialize(0.0, 0.0, 0.0, ZERO_STD3)

        pf.update_weights(50.0, STD_LANDMARK, np.array([[5.0, 5.0]]),
                          [MapLandmark(id=1, x=5.0, y=5.0)])

        self.assertAlmostEqual(pf.particles[0].weight, self.peak, places=12)

    def test_invalid_inputs(self):
        pf = make_filter(n_particles=1)
        pf.initialize(0.0, 0.0, 0.0, ZERO_STD3)
        obs = np.array([[5.0, 5.0]])

        with self.assertRaises(ValueError):
            pf.update_weights(0.0, STD_LANDMARK, obs, self.landmarks)
        with self.assertRaises(ValueError):
            pf.update_weights(50.0, [0.0, 0.3], obs, self.landmarks)
        with self.assertRaises(ValueError):
            pf.update_weights(50.0, [0.3], obs, self.landmarks)
        with self.assertRaises(ValueError):
            pf.update_weights(50.0, STD_LANDMARK, np.array([[1.0, 2.0, 3.0]]), self.landmarks)


class TestLogDomain(unittest.TestCase):
    """Many observations make the linear product underflow."""

    def setUp(self):
        self.landmarks = LandmarkMap.from_array(np.array([[1, 5.0, 5.0]]))
        self.obs = np.tile([5.9, 5.0], (400, 1))

    def _run_update(self, log_domain):
        pf = make_filter(n_particles=2, log_domain=log_domain)
        pf.initialize(0.0, 0.0, 0.0, ZERO_STD3)
        place_particles(pf, [(0.0, 0.0, 0.0), (0.1, 0.0, 0.0)])
        pf.update_weights(50.0, STD_LANDMARK, self.obs, self.landmarks)
        return pf

    def test_linear_weights_underflow(self):
        pf = self._run_update(log_domain=False)
        assert_array_equal(pf.weights, [0.0, 0.0])

    def test_log_weights_remain_ordered(self):
        pf = self._run_update(log_domain=True)
        log_w = pf.log_weights

        self.assertTrue(np.all(np.isfinite(log_w)))
        self.assertGreater(log_w[0], log_w[1])
        self.assertEqual(pf.best_estimate().x, 0.0)

    def test_log_weight_matches_sum_of_log_densities(self):
        pf = self._run_update(log_domain=True)
        log_peak = -np.log(2.0 * np.pi * 0.09)
        expected = 400 * (log_peak - 0.9**2 / (2 * 0.09))
        self.assertAlmostEqual(pf.log_weights[0], expected, places=6)

    def test_resample_selects_likely_particle(self):
        pf = self._run_update(log_domain=True)
        pf.resample()
        assert_allclose(pf.poses()[:, 0], [0.0, 0.0])

    def test_same_weights_as_linear_when_no_underflow(self):
        obs = np.array([[5.1, 4.9]])
        weights = []
        for log_domain in (False, True):
            pf = make_filter(n_particles=10, seed=3, log_domain=log_domain)
            pf.initialize(0.0, 0.0, 0.0, [0.2, 0.2, 0.02])
            pf.update_weights(50.0, STD_LANDMARK, obs, self.landmarks)
            weights.append(pf.weights)
        assert_allclose(weights[0], weights[1], rtol=1e-10)


class TestResample(unittest.TestCase):

    def test_cardinality_and_reset(self):
        pf = make_filter(n_particles=25, seed=2)
        pf.initialize(0.0, 0.0, 0.0, [1.0, 1.0, 0.1])
        landmarks = LandmarkMap.from_array(np.array([[1, 5.0, 5.0]]))
        pf.update_weights(50.0, STD_LANDMARK, np.array([[5.0, 5.0]]), landmarks)

        pf.resample()

        self.assertEqual(len(pf.particles), 25)
        self.assertEqual([p.id for p in pf.particles], list(range(25)))
        self.assertTrue(all(p.weight == 1.0 for p in pf.particles))
        self.assertTrue(all(p.associations == [] for p in pf.particles))

    def test_poses_copied_from_previous_generation(self):
        pf = make_filter(n_particles=15, seed=6)
        pf.initialize(0.0, 0.0, 0.0, [1.0, 1.0, 0.1])
        previous = pf.poses()

        pf.resample()

        assert_array_equal(pf.poses(), previous[pf.last_resample_indices])

    def test_dominant_particle_takes_over(self):
        pf = make_filter(n_particles=20, seed=8)
        pf.initialize(0.0, 0.0, 0.0, [1.0, 1.0, 0.1])
        for p in pf.particles:
            p.weight = 1e-6
        pf.particles[3].weight = 1.0
        winner = pf.particles[3].pose()

        pf.resample()

        matches = np.all(pf.poses() == winner, axis=1)
        self.assertGreater(matches.mean(), 0.9)

    def test_resampled_particles_are_independent_copies(self):
        pf = make_filter(n_particles=5, seed=1)
        pf.initialize(0.0, 0.0, 0.0, ZERO_STD3)
        pf.resample()

        pf.particles[0].x = 99.0
        self.assertTrue(all(p.x == 0.0 for p in pf.particles[1:]))

    def test_all_zero_weights_fall_back_to_uniform(self):
        pf = make_filter(n_particles=8, seed=3)
        pf.initialize(0.0, 0.0, 0.0, [1.0, 1.0, 0.1])
        for p in pf.particles:
            p.weight = 0.0

        with pytest.warns(RuntimeWarning):
            pf.resample()

        self.assertEqual(len(pf.particles), 8)

    def test_systematic_scheme(self):
        pf = make_filter(n_particles=10, seed=3, resampling="systematic")
        pf.initialize(0.0, 0.0, 0.0, [1.0, 1.0, 0.1])
        for p in pf.particles:
            p.weight = 0.0
        pf.particles[2].weight = 1.0
        pf.particles[7].weight = 1.0

        pf.resample()

        counts = np.bincount(pf.last_resample_indices, minlength=10)
        self.assertEqual(counts[2], 5)
        self.assertEqual(counts[7], 5)

    def test_negative_weight_raises(self):
        pf = make_filter(n_particles=3)
        pf.initialize(0.0, 0.0, 0.0, ZERO_STD3)
        pf.particles[1].weight = -1.0
        with self.assertRaises(ValueError):
            pf.resample()


class TestLinearOverflow(unittest.TestCase):
    """Many exact matches with a tight std overflow the linear product."""

    def setUp(self):
        xs = np.arange(1.0, 121.0)
        self.landmarks = LandmarkMap.from_array(
            np.column_stack([np.arange(1, 121), xs, np.zeros(120)])
        )
        self.obs = self.landmarks.positions()
        self.std_landmark = [0.01, 0.01]

        self.pf = make_filter(n_particles=3)
        self.pf.initialize(0.0, 0.0, 0.0, ZERO_STD3)
        place_particles(self.pf, [(0.0, 0.0, 0.0), (0.0, 0.0, 0.0), (0.001, 0.0, 0.0)])
        with np.errstate(over="ignore"):
            self.pf.update_weights(200.0, self.std_landmark, self.obs, self.landmarks)

    def test_log_weights_stay_finite(self):
        self.assertTrue(np.all(np.isposinf(self.pf.weights)))
        log_w = self.pf.log_weights
        self.assertTrue(np.all(np.isfinite(log_w)))

        log_peak = -np.log(2.0 * np.pi * 1e-4)
        self.assertAlmostEqual(log_w[0], 120 * log_peak, places=6)
        self.assertGreater(log_w[0], log_w[2])

    def test_resample_uses_log_weights(self):
        with pytest.warns(RuntimeWarning):
            ess = self.pf.effective_sample_size()
        self.assertTrue(1.0 <= ess <= 3.0)

        with pytest.warns(RuntimeWarning):
            self.pf.resample()
        self.assertEqual(len(self.pf.particles), 3)

    def test_estimates_use_log_weights(self):
        with pytest.warns(RuntimeWarning):
            best = self.pf.best_estimate()
        self.assertEqual(best.id, 0)

        with pytest.warns(RuntimeWarning):
            mean = self.pf.best_estimate("weighted_mean")
        self.assertTrue(np.all(np.isfinite(mean.pose())))
        self.assertLess(abs(mean.x), 0.001)


class TestEstimates(unittest.TestCase):

    def setUp(self):
        self.pf = make_filter(n_particles=3)
        self.pf.initialize(0.0, 0.0, 0.0, ZERO_STD3)
        place_particles(self.pf, [(0.0, 0.0, 0.1), (2.0, 4.0, -0.1), (10.0, 10.0, 0.0)])

    def test_best_particle_is_max_weight(self):
        for p, w in zip(self.pf.particles, [0.2, 0.7, 0.1]):
            p.weight = w
        best = self.pf.best_estimate()
        self.assertEqual(best.id, 1)
        self.assertEqual((best.x, best.y), (2.0, 4.0))

    def test_best_particle_tie_goes_to_first(self):
        for p in self.pf.particles:
            p.weight = 0.5
        self.assertEqual(self.pf.best_estimate().id, 0)

    def test_best_estimate_is_a_copy(self):
        self.pf.particles[0].weight = 5.0
        self.pf.particles[0].associations = [1]
        best = self.pf.best_estimate()
        best.associations.append(2)
        best.x = 50.0
        self.assertEqual(self.pf.particles[0].associations, [1])
        self.assertEqual(self.pf.particles[0].x, 0.0)

    def test_weighted_mean(self):
        for p, w in zip(self.pf.particles, [1.0, 1.0, 0.0]):
            p.weight = w
        mean = self.pf.best_estimate("weighted_mean")
        assert_allclose([mean.x, mean.y, mean.theta], [1.0, 2.0, 0.0], atol=1e-12)

    def test_weighted_mean_heading_across_wrap(self):
        place_particles(self.pf, [(0.0, 0.0, np.pi - 0.1), (0.0, 0.0, -np.pi + 0.1),
                                  (0.0, 0.0, 5 * np.pi)])
        theta = self.pf.best_estimate("weighted_mean").theta
        self.assertAlmostEqual(abs(theta), np.pi, places=6)

    def test_unknown_method_raises(self):
        with self.assertRaises(ValueError):
            self.pf.best_estimate("median")

    def test_get_state(self):
        for p, w in zip(self.pf.particles, [1.0, 1.0, 0.0]):
            p.weight = w
        state, cov = self.pf.get_state()

        assert_allclose(state, [1.0, 2.0, 0.0], atol=1e-12)
        self.assertEqual(cov.shape, (3, 3))
        assert_allclose(cov, cov.T)
        assert_allclose(np.diag(cov), [1.0, 4.0, 0.01], atol=1e-12)

    def test_effective_sample_size(self):
        for p in self.pf.particles:
            p.weight = 2.0
        self.assertAlmostEqual(self.pf.effective_sample_size(), 3.0)
        self.pf.particles[0].weight = 0.0
        self.pf.particles[1].weight = 0.0
        self.assertAlmostEqual(self.pf.effective_sample_size(), 1.0)


class TestFullCycle(unittest.TestCase):

    def test_step_tracks_single_landmark(self):
        """Vehicle drives past a landmark; the best particle stays close to truth."""
        landmarks = LandmarkMap.from_array(np.array([
            [1, 10.0, 5.0], [2, 20.0, -5.0], [3, 30.0, 5.0],
        ]))
        pf = make_filter(n_particles=100, seed=11)
        pf.initialize(0.0, 0.0, 0.0, [0.3, 0.3, 0.01])

        truth = np.array([0.0, 0.0, 0.0])
        for _ in range(20):
            truth = truth + np.array([1.0, 0.0, 0.0])
            rel = landmarks.positions() - truth[:2]
            best = pf.step(0.1, [0.1, 0.1, 0.005], 10.0, 0.0,
                           50.0, STD_LANDMARK, rel, landmarks)

        self.assertLess(np.hypot(best.x - truth[0], best.y - truth[1]), 0.5)
        self.assertEqual(len(pf.particles), 100)
        self.assertEqual(sorted(best.associations), [1, 2, 3])

    def test_update_runs_weights_then_resample(self):
        pf = make_filter(n_particles=10, seed=12)
        pf.initialize(0.0, 0.0, 0.0, [0.3, 0.3, 0.01])
        landmarks = LandmarkMap.from_array(np.array([[1, 5.0, 5.0]]))

        pf.update(50.0, STD_LANDMARK, np.array([[5.0, 5.0]]), landmarks)

        self.assertIsNotNone(pf.last_resample_indices)
        self.assertTrue(all(p.weight == 1.0 for p in pf.particles))


if __name__ == "__main__":
    unittest.main()
