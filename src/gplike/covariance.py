"""
Dense covariance matrices for a set of training inputs. Both builders exploit
the symmetry of the kernel: each unordered pair of inputs is evaluated once
and the result is mirrored across the diagonal.
"""

from __future__ import annotations

__all__ = ["covariance_matrix", "gradient_matrices"]

import equinox as eqx
import jax
import jax.numpy as jnp

from gplike.helpers import JAXArray
from gplike.kernels.base import Kernel


@eqx.filter_jit
def covariance_matrix(kernel: Kernel, X: JAXArray, yerr: JAXArray) -> JAXArray:
    """Compute the training covariance matrix

    Args:
        kernel: The kernel function.
        X: The input coordinates with shape ``(n_data, n_dim)``.
        yerr: The per-sample noise standard deviations with shape
            ``(n_data,)``; their squares are added to the diagonal.

    Returns:
        The symmetric ``(n_data, n_data)`` covariance matrix.
    """
    n = X.shape[0]
    i, j = jnp.triu_indices(n)
    upper = jax.vmap(kernel.evaluate)(X[i], X[j])
    K = jnp.zeros((n, n), dtype=upper.dtype)
    K = K.at[i, j].set(upper).at[j, i].set(upper)
    return K.at[jnp.diag_indices(n)].add(jnp.square(yerr))


@eqx.filter_jit
def gradient_matrices(kernel: Kernel, X: JAXArray) -> JAXArray:
    """Compute the derivative of the kernel matrix for each hyperparameter

    Args:
        kernel: The kernel function.
        X: The input coordinates with shape ``(n_data, n_dim)``.

    Returns:
        An array with shape ``(npars, n_data, n_data)`` where the ``k``-th
        slice is the symmetric matrix of partial derivatives with respect to
        the ``k``-th hyperparameter.
    """
    n = X.shape[0]
    i, j = jnp.triu_indices(n)
    grad = jax.vmap(kernel.gradient)(X[i], X[j]).T
    dK = jnp.zeros((kernel.npars(), n, n), dtype=kernel.pars.dtype)
    return dK.at[:, i, j].set(grad).at[:, j, i].set(grad)
