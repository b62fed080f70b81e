"""
In ``gplike``, "solvers" wrap the factorization of the training covariance
matrix and provide the linear algebra needed to evaluate the likelihood and
its gradient: solving linear systems, the diagonal scaling terms of the
factorization (and from those the log determinant), and the trace of a solve.

The only built in solver is :class:`LDLTSolver`, a symmetric indefinite
``L @ D @ L.T`` factorization. Users generally won't instantiate it directly;
:func:`gplike.GaussianProcess.compute` does that.
"""

__all__ = ["Solver", "LDLTSolver"]

from gplike.solvers.ldlt import LDLTSolver
from gplike.solvers.solver import Solver
