from __future__ import annotations

__all__ = ["LDLTSolver"]

import logging
from typing import Any

import numpy as np
from scipy import linalg

from gplike.solvers.solver import Solver

logger = logging.getLogger(__name__)


class LDLTSolver(Solver):
    """A direct solver using a symmetric indefinite factorization

    The covariance matrix is factored as ``K = L @ D @ L.T`` using the
    Bunch-Kaufman algorithm provided by :func:`scipy.linalg.ldl`, where ``L``
    is a row permutation of a unit lower triangular matrix and ``D`` is block
    diagonal with ``1x1`` and ``2x2`` blocks. For a positive definite ``K``,
    all the blocks are ``1x1`` and positive.

    Args:
        covariance: The symmetric ``(N, N)`` covariance matrix.

    Raises:
        numpy.linalg.LinAlgError: If the matrix contains non-finite values, is
            not square, or is exactly singular.
    """

    scale_tril: np.ndarray
    d_bands: np.ndarray
    perm: np.ndarray

    def __init__(self, covariance: Any):
        covariance = np.asarray(covariance, dtype=np.float64)
        try:
            lu, d, perm = linalg.ldl(covariance, lower=True)
        except ValueError as e:
            logger.debug("rejected covariance matrix: %s", e)
            raise np.linalg.LinAlgError(str(e)) from e

        # D is tridiagonal so it is stored in the banded form expected by
        # scipy.linalg.solve_banded
        n = d.shape[0]
        d_bands = np.zeros((3, n))
        d_bands[0, 1:] = np.diag(d, 1)
        d_bands[1] = np.diag(d)
        d_bands[2, :-1] = np.diag(d, -1)

        if np.any(_block_eigenvalues(d_bands) == 0):
            logger.debug("rejected covariance matrix: singular block diagonal")
            raise np.linalg.LinAlgError("The covariance matrix is singular")

        self.scale_tril = lu[perm]
        self.d_bands = d_bands
        self.perm = perm

    def solve(self, y: Any) -> np.ndarray:
        y = np.asarray(y, dtype=np.float64)
        z = linalg.solve_triangular(
            self.scale_tril,
            y[self.perm],
            lower=True,
            unit_diagonal=True,
            check_finite=False,
        )
        z = linalg.solve_banded((1, 1), self.d_bands, z, check_finite=False)
        z = linalg.solve_triangular(
            self.scale_tril,
            z,
            lower=True,
            trans="T",
            unit_diagonal=True,
            check_finite=False,
        )
        x = np.empty_like(z)
        x[self.perm] = z
        if not np.all(np.isfinite(x)):
            raise np.linalg.LinAlgError("Non-finite solution")
        return x

    def vector_d(self) -> np.ndarray:
        return _block_eigenvalues(self.d_bands)


def _block_eigenvalues(d_bands: np.ndarray) -> np.ndarray:
    """The eigenvalues of a block diagonal D given in banded form

    When there are no 2x2 blocks these are just the pivots, in order.
    """
    diag, off_diag = d_bands[1], d_bands[2, :-1]
    if not np.any(off_diag):
        return diag.copy()
    return linalg.eigvalsh_tridiagonal(diag, off_diag)
