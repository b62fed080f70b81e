from __future__ import annotations

__all__ = ["Kernel", "Custom"]

from collections.abc import Sequence
from typing import Any, Callable, Union

import equinox as eqx
import jax
import jax.numpy as jnp

from gplike.helpers import JAXArray, default_float

Parameters = Union[JAXArray, Sequence[float]]


def _as_parameters(pars: Parameters) -> JAXArray:
    return jnp.atleast_1d(jnp.asarray(pars, dtype=default_float()))


class Kernel(eqx.Module):
    """The base class for all kernel implementations

    A kernel carries an ordered vector of hyperparameters ``pars`` and
    exposes the covariance between two input coordinates through
    :func:`Kernel.evaluate` along with its derivatives with respect to each
    hyperparameter through :func:`Kernel.gradient`. Subclasses override both.

    The base class itself is a degenerate kernel that evaluates to zero
    everywhere, and it is only used as the default kernel for a
    :class:`gplike.GaussianProcess`.

    Args:
        pars: The hyperparameter vector.
    """

    pars: JAXArray

    def __init__(self, pars: Parameters = ()):
        self.pars = _as_parameters(pars)

    def npars(self) -> int:
        """The number of hyperparameters"""
        return self.pars.shape[0]

    def evaluate(self, X1: JAXArray, X2: JAXArray) -> JAXArray:
        """Evaluate the kernel at a pair of input coordinates

        When implementing a custom kernel, this method should treat ``X1`` and
        ``X2`` as single datapoints with shape ``(n_dim,)``. The result must be
        symmetric in its arguments.
        """
        del X1, X2
        return jnp.zeros((), dtype=self.pars.dtype)

    def gradient(self, X1: JAXArray, X2: JAXArray) -> JAXArray:
        """The derivatives of :func:`Kernel.evaluate` with respect to ``pars``

        This should return an array with shape ``(npars,)``, evaluated at the
        current parameter vector.
        """
        del X1, X2
        return jnp.zeros_like(self.pars)

    def __call__(self, X1: JAXArray, X2: JAXArray | None = None) -> JAXArray:
        if X2 is None:
            k = jax.vmap(self.evaluate, in_axes=(0, 0))(X1, X1)
            if k.ndim != 1:
                raise ValueError(
                    "Invalid kernel diagonal shape: "
                    f"expected ndim = 1, got ndim={k.ndim} "
                    "check the dimensions of parameters and custom kernels"
                )
            return k
        k = jax.vmap(jax.vmap(self.evaluate, in_axes=(None, 0)), in_axes=(0, None))(
            X1, X2
        )
        if k.ndim != 2:
            raise ValueError(
                "Invalid kernel shape: "
                f"expected ndim = 2, got ndim={k.ndim} "
                "check the dimensions of parameters and custom kernels"
            )
        return k


class Custom(Kernel):
    """A custom kernel class implemented as a callable

    The gradient with respect to the parameters is computed by ``jax``
    automatic differentiation.

    Args:
        function: A callable with the signature ``function(X1, X2, pars)``
            returning the scalar covariance between ``X1`` and ``X2``.
        pars: The hyperparameter vector passed to ``function``.
    """

    function: Callable[[Any, Any, Any], Any] = eqx.field(static=True)

    def __init__(self, function: Callable[[Any, Any, Any], Any], pars: Parameters):
        self.function = function
        self.pars = _as_parameters(pars)

    def evaluate(self, X1: JAXArray, X2: JAXArray) -> JAXArray:
        return self.function(X1, X2, self.pars)

    def gradient(self, X1: JAXArray, X2: JAXArray) -> JAXArray:
        return jax.grad(self.function, argnums=2)(X1, X2, self.pars)
