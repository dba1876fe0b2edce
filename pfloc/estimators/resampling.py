"""
Importance resampling schemes for particle filters.

Weights handed to the filter are relative likelihoods, not probabilities.
This module turns them into a categorical distribution and draws particle
indices from it:

- Multinomial: N independent categorical draws with replacement.
- Systematic: one uniform offset and N evenly spaced pointers into the
  cumulative weights (lower variance).

All functions take an explicit ``numpy.random.Generator``.
"""

import warnings
from typing import Callable, Dict, Optional

import numpy as np
from scipy.special import logsumexp


def normalize_weights(
    weights: Optional[np.ndarray] = None,
    log_weights: Optional[np.ndarray] = None,
) -> np.ndarray:
    """
    Convert relative weights into probabilities that sum to one.

    Exactly one of ``weights`` and ``log_weights`` must be given. Log weights
    are normalized with log-sum-exp, so they stay usable when the linear
    weights would underflow to zero.

    If the total weight is zero (or every log weight is -inf) the
    distribution is undefined; a uniform distribution is returned and a
    RuntimeWarning is issued.

    Args:
        weights: Non-negative weights, shape (N,).
        log_weights: Log weights, shape (N,). -inf marks a zero weight.

    Returns:
        Probabilities, shape (N,).

    Raises:
        ValueError: If both or neither input is given, the array is empty,
            or weights are negative/NaN (log weights NaN or +inf).

    Example:
        >>> normalize_weights(np.array([1.0, 3.0]))
        array([0.25, 0.75])
    """
    if (weights is None) == (log_weights is None):
        raise ValueError("Provide exactly one of weights or log_weights")

    if log_weights is not None:
        log_weights = np.asarray(log_weights, dtype=float)
        _check_population(log_weights)
        if np.any(np.isnan(log_weights)) or np.any(log_weights == np.inf):
            raise ValueError("log_weights must not contain NaN or +inf")
        if np.all(np.isneginf(log_weights)):
            return _uniform_fallback(len(log_weights))
        return np.exp(log_weights - logsumexp(log_weights))

    weights = np.asarray(weights, dtype=float)
    _check_population(weights)
    if not np.all(np.isfinite(weights)):
        raise ValueError("weights must be finite")
    if np.any(weights < 0):
        raise ValueError(f"weights must be non-negative, got min {weights.min()}")

    total = np.sum(weights)
    if total <= 0:
        return _uniform_fallback(len(weights))
    return weights / total


def _check_population(values: np.ndarray) -> None:
    if values.ndim != 1 or values.size == 0:
        raise ValueError(f"Expected a non-empty 1D weight array, got shape {values.shape}")


def _uniform_fallback(n: int) -> np.ndarray:
    warnings.warn(
        "All particle weights are zero; resampling uniformly",
        RuntimeWarning
    )
    return np.full(n, 1.0 / n)


def effective_sample_size(probabilities: np.ndarray) -> float:
    """
    Effective sample size of a normalized weight vector.

    N_eff = 1 / Σ(wᵢ²)

    Equals N for uniform weights and 1 when a single particle has all mass.
    """
    probabilities = np.asarray(probabilities, dtype=float)
    return float(1.0 / np.sum(probabilities**2))


def multinomial_resample(
    probabilities: np.ndarray,
    n: int,
    rng: np.random.Generator,
) -> np.ndarray:
    """
    Draw n indices independently from a categorical distribution.

    Args:
        probabilities: Normalized probabilities, shape (N,).
        n: Number of draws.
        rng: Random number generator.

    Returns:
        Integer indices, shape (n,).
    """
    probabilities = np.asarray(probabilities, dtype=float)
    return rng.choice(len(probabilities), size=n, replace=True, p=probabilities)


def systematic_resample(
    probabilities: np.ndarray,
    n: int,
    rng: np.random.Generator,
) -> np.ndarray:
    """
    Systematic (low-variance) resampling.

    Uses a single uniform offset u0 ~ U[0, 1/n) and pointers
    u_i = u0 + i/n into the cumulative weights.

    Args:
        probabilities: Normalized probabilities, shape (N,).
        n: Number of draws.
        rng: Random number generator.

    Returns:
        Integer indices, shape (n,), non-decreasing.
    """
    probabilities = np.asarray(probabilities, dtype=float)
    cumsum = np.cumsum(probabilities)
    # Guard against round-off leaving the last bin short of 1.
    cumsum[-1] = 1.0

    u0 = rng.uniform(0.0, 1.0 / n)
    u = u0 + np.arange(n) / n

    return np.searchsorted(cumsum, u, side="right").astype(int)


RESAMPLERS: Dict[str, Callable[[np.ndarray, int, np.random.Generator], np.ndarray]] = {
    "multinomial": multinomial_resample,
    "systematic": systematic_resample,
}
