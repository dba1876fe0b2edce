"""
Base classes for sequential state estimators.

This module defines the abstract lifecycle shared by the estimators in this
package: an estimator is constructed uninitialized, becomes ready after
``initialize``, and only then accepts predict/update calls.
"""

from abc import ABC, abstractmethod
from typing import Tuple

import numpy as np


class StateEstimator(ABC):
    """Abstract base class for sequential state estimators."""

    def __init__(self, state_dim: int):
        """
        Initialize state estimator.

        Args:
            state_dim: Dimension of the state vector.
        """
        self.state_dim = state_dim
        self._initialized = False

    @property
    def is_initialized(self) -> bool:
        """True once ``initialize`` has been called."""
        return self._initialized

    def _mark_initialized(self) -> None:
        if self._initialized:
            raise RuntimeError(f"{type(self).__name__} is already initialized")
        self._initialized = True

    def _require_initialized(self, operation: str) -> None:
        if not self._initialized:
            raise RuntimeError(
                f"{type(self).__name__} not initialized. Call initialize() before {operation}()."
            )

    @abstractmethod
    def initialize(self, *args, **kwargs) -> None:
        """Seed the estimator from an initial state estimate."""
        pass

    @abstractmethod
    def predict(self, *args, **kwargs) -> None:
        """Perform prediction step (time update)."""
        pass

    @abstractmethod
    def update(self, *args, **kwargs) -> None:
        """Perform measurement update (correction step)."""
        pass

    @abstractmethod
    def _compute_state(self) -> Tuple[np.ndarray, np.ndarray]:
        """Return (state_vector, covariance_matrix) for the current belief."""
        pass

    def get_state(self) -> Tuple[np.ndarray, np.ndarray]:
        """
        Get current state estimate and covariance.

        Returns:
            Tuple of (state_vector, covariance_matrix).

        Raises:
            RuntimeError: If the estimator has not been initialized.
        """
        self._require_initialized("get_state")
        state, covariance = self._compute_state()
        return state.copy(), covariance.copy()
