"""
Stationary kernels depend on their inputs only through the separation between
two coordinates. The only one implemented here is the isotropic
squared-exponential kernel, parameterized in terms of a *squared* length
scale.
"""

from __future__ import annotations

__all__ = ["IsotropicGaussian"]

import jax.numpy as jnp

from gplike.helpers import JAXArray
from gplike.kernels.base import Kernel


class IsotropicGaussian(Kernel):
    r"""The isotropic exponential squared kernel

    .. math::

        k(\mathbf{x}_i,\,\mathbf{x}_j) = a\,\exp(-r^2 / 2)

    where

    .. math::

        r^2 = ||\mathbf{x}_i - \mathbf{x}_j||_2^2 / s

    The parameter values are not checked; a non-positive :math:`s` will give
    non-finite covariances.

    Args:
        pars: The parameters ``[a, s]``: the amplitude :math:`a` and the
            squared length scale :math:`s`.
    """

    def __check_init__(self):
        if self.npars() != 2:
            raise ValueError(
                "IsotropicGaussian takes exactly 2 parameters (amplitude, scale); "
                f"got {self.npars()}"
            )

    def evaluate(self, X1: JAXArray, X2: JAXArray) -> JAXArray:
        chi2 = jnp.sum(jnp.square(X1 - X2)) / self.pars[1]
        return self.pars[0] * jnp.exp(-0.5 * chi2)

    def gradient(self, X1: JAXArray, X2: JAXArray) -> JAXArray:
        e = -0.5 * jnp.sum(jnp.square(X1 - X2)) / self.pars[1]
        value = jnp.exp(e)
        return jnp.stack([value, -e / self.pars[1] * self.pars[0] * value])
