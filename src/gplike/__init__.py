"""
``gplike`` is a small library for evaluating the marginal likelihood of
Gaussian Process regression models, and its gradient with respect to the
kernel hyperparameters. Kernels are built using the ``kernels`` subpackage
(see :ref:`api-kernels`), written in `jax <https://github.com/google/jax>`_,
and then passed to a :class:`GaussianProcess` object which factors the
covariance matrix for a set of training inputs and does all the other
computations.
"""

__author__ = "gplike developers"
__email__ = "gplike-dev@googlegroups.com"
__uri__ = "https://github.com/gplike/gplike"
__license__ = "MIT"
__description__ = "Gaussian Process likelihoods and gradients in Python"

from gplike import (
    kernels as kernels,
    solvers as solvers,
)
from gplike.covariance import (
    covariance_matrix as covariance_matrix,
    gradient_matrices as gradient_matrices,
)
from gplike.gp import GaussianProcess as GaussianProcess
from gplike.gplike_version import __version__ as __version__
