from __future__ import annotations

__all__ = ["Solver"]

from abc import abstractmethod
from typing import Any

import equinox as eqx
import numpy as np


class Solver(eqx.Module):
    """The interface for a factorization of a symmetric covariance matrix

    Implementations factor the matrix in their constructor and raise
    :class:`numpy.linalg.LinAlgError` if that is not possible.
    """

    def __init__(self, covariance: Any):
        del covariance
        raise NotImplementedError

    @abstractmethod
    def solve(self, y: Any) -> np.ndarray:
        """Solve the linear system ``K @ x = y`` for a vector or matrix ``y``"""
        raise NotImplementedError

    @abstractmethod
    def vector_d(self) -> np.ndarray:
        """The diagonal scaling terms of the factorization

        The sum of the logarithms of these values is the log determinant of
        the covariance matrix.
        """
        raise NotImplementedError

    def log_determinant(self) -> float:
        """The log determinant of the covariance matrix

        This will be ``nan`` if the matrix is not positive definite.
        """
        with np.errstate(invalid="ignore", divide="ignore"):
            return float(np.sum(np.log(self.vector_d())))

    def trace_solve(self, M: Any) -> float:
        """Compute ``trace(K^-1 @ M)`` without inverting ``K``"""
        return float(np.trace(self.solve(M)))
