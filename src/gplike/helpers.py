from __future__ import annotations

__all__ = ["JAXArray", "as_inputs", "default_float"]

from typing import Any

import jax
import jax.numpy as jnp

JAXArray = jax.Array


def default_float() -> Any:
    """The floating point dtype selected by the current ``jax`` configuration"""
    return jnp.result_type(float)


def as_inputs(X: Any) -> JAXArray:
    """Coerce training inputs to an ``(n_data, n_dim)`` array

    A one dimensional array is interpreted as ``n_data`` scalar inputs.
    """
    X = jnp.asarray(X, dtype=default_float())
    if X.ndim == 1:
        return X[:, None]
    if X.ndim != 2:
        raise ValueError(
            "Invalid input shape: "
            f"expected ndim = 1 or 2, got ndim={X.ndim}"
        )
    return X
