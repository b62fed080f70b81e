from __future__ import annotations

__all__ = [
    "GaussianProcess",
    "SUCCESS",
    "FACTORIZATION_FAILURE",
    "DIMENSION_MISMATCH",
    "SOLVE_FAILURE",
]

import logging
from typing import Any

import jax.numpy as jnp
import numpy as np

from gplike import kernels
from gplike.covariance import covariance_matrix, gradient_matrices
from gplike.helpers import JAXArray, as_inputs, default_float
from gplike.solvers import LDLTSolver
from gplike.solvers.solver import Solver

logger = logging.getLogger(__name__)

SUCCESS = 0
FACTORIZATION_FAILURE = -1
DIMENSION_MISMATCH = -1
SOLVE_FAILURE = -2

TWOLNPI = np.log(2 * np.pi)


class GaussianProcess:
    """A Gaussian Process likelihood model with a fixed kernel

    The typical usage is to :func:`compute` the factorization of the
    covariance matrix for a set of training inputs once, and then evaluate
    :func:`lnlikelihood` and :func:`gradlnlikelihood` for any number of
    target vectors observed at those inputs.

    Failures never raise by default. Instead, they are reported through status
    codes, available from :func:`info`:

    - ``0``: success,
    - ``-1``: the factorization failed in :func:`compute`, or the process
      hasn't been computed, or the target vector has the wrong length,
    - ``-2``: the linear solve failed.

    Instances hold mutable state and are not safe to use from several threads
    at once without external locking.

    Args:
        kernel (Kernel, optional): The kernel function. Defaults to the
            degenerate :class:`gplike.kernels.Kernel` which is zero everywhere.
    """

    kernel: kernels.Kernel
    X: JAXArray | None
    solver: Solver | None

    def __init__(self, kernel: kernels.Kernel | None = None):
        self.kernel = kernels.Kernel() if kernel is None else kernel
        self.X = None
        self.solver = None
        self._info = SUCCESS
        self._computed = False

    def info(self) -> int:
        """The status code of the most recent operation"""
        return self._info

    def computed(self) -> bool:
        """Has the covariance matrix been successfully factored?"""
        return self._computed

    def compute(self, X: Any, yerr: Any) -> int:
        """Build and factor the covariance matrix for a set of training inputs

        Any previous factorization is discarded, even if this one fails.

        Args:
            X (JAXArray): The input coordinates with shape ``(N_data, N_dim)``,
                or ``(N_data,)`` for one dimensional inputs.
            yerr (JAXArray): The noise standard deviation for each sample,
                with shape ``(N_data,)``, or a scalar.

        Returns:
            ``0`` on success or ``-1`` if the covariance matrix couldn't be
            factored.

        Raises:
            ValueError: If the shapes of ``X`` and ``yerr`` are incompatible.
        """
        X = as_inputs(X)
        yerr = jnp.asarray(yerr, dtype=default_float())
        if yerr.ndim == 0:
            yerr = jnp.broadcast_to(yerr, X.shape[:1])
        if yerr.shape != X.shape[:1]:
            raise ValueError(
                "Invalid noise shape: "
                f"expected shape {X.shape[:1]}, got shape {yerr.shape}"
            )

        self.X = None
        self.solver = None
        self._computed = False

        K = covariance_matrix(self.kernel, X, yerr)
        try:
            solver = LDLTSolver(K)
        except np.linalg.LinAlgError as e:
            logger.warning("Failed to factor the covariance matrix: %s", e)
            self._info = FACTORIZATION_FAILURE
            return self._info

        logger.debug("Factored the covariance matrix for %d samples", X.shape[0])
        self.X = X
        self.solver = solver
        self._computed = True
        self._info = SUCCESS
        return self._info

    def lnlikelihood(self, y: Any, quiet: bool = True) -> float:
        """Compute the log marginal likelihood of a target vector

        Args:
            y (JAXArray): The observed data with shape ``(N_data,)``, where
                ``N_data`` is the number of samples passed to :func:`compute`.
            quiet (bool, optional): If ``True`` (default), failures return
                ``-inf``. Otherwise, they raise.

        Returns:
            The log likelihood ``-0.5 * (y.T @ K^-1 @ y + log|K| + N*log(2*pi))``,
            or ``-inf`` if it couldn't be evaluated or isn't finite.

        Raises:
            ValueError: If ``quiet`` is ``False`` and the process hasn't been
                computed or ``y`` has the wrong shape.
            numpy.linalg.LinAlgError: If ``quiet`` is ``False`` and the solve
                fails.
        """
        solved = self._solve(y, quiet)
        if solved is None:
            return -np.inf
        y, alpha = solved
        logdet = self.solver.log_determinant()
        loglike = -0.5 * (y @ alpha + logdet + len(y) * TWOLNPI)
        return float(loglike) if np.isfinite(loglike) else -np.inf

    def gradlnlikelihood(self, y: Any, quiet: bool = True) -> np.ndarray:
        """Compute the gradient of :func:`lnlikelihood` with respect to the
        kernel hyperparameters

        Args:
            y (JAXArray): The observed data with shape ``(N_data,)``.
            quiet (bool, optional): If ``True`` (default), failures return a
                vector of zeros and the reason is available from
                :func:`info`. Otherwise, they raise.

        Returns:
            An array with shape ``(npars,)``.
        """
        grad = np.zeros(self.kernel.npars())
        solved = self._solve(y, quiet)
        if solved is None:
            return grad
        _, alpha = solved

        dK = np.asarray(gradient_matrices(self.kernel, self.X), dtype=np.float64)
        for k in range(len(grad)):
            grad[k] = self.solver.trace_solve(dK[k]) - alpha @ dK[k] @ alpha
        return -0.5 * grad

    def _solve(self, y: Any, quiet: bool) -> tuple[np.ndarray, np.ndarray] | None:
        y = np.asarray(y, dtype=np.float64)
        if not self._computed or y.shape != (self.X.shape[0],):
            self._info = DIMENSION_MISMATCH
            if not quiet:
                if not self._computed:
                    raise ValueError("You must call compute before evaluating")
                raise ValueError(
                    "Invalid target shape: "
                    f"expected shape {(self.X.shape[0],)}, got shape {y.shape}"
                )
            logger.debug("Invalid target vector or uncomputed process")
            return None

        try:
            alpha = self.solver.solve(y)
        except np.linalg.LinAlgError as e:
            self._info = SOLVE_FAILURE
            if not quiet:
                raise
            logger.debug("Failed to solve the linear system: %s", e)
            return None

        self._info = SUCCESS
        return y, alpha
