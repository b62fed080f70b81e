# mypy: ignore-errors

import jax
import jax.numpy as jnp
import numpy as np
import pytest
from numpy import random as np_random

from gplike import GaussianProcess, covariance_matrix, kernels
from gplike.test_utils import assert_allclose


@pytest.fixture
def random():
    return np_random.default_rng(1058390)


@pytest.fixture
def data(random):
    X = np.sort(random.uniform(0, 5, 10))
    yerr = random.uniform(0.1, 0.3, len(X))
    y = np.sin(X) + yerr * random.normal(size=len(X))
    return X, yerr, y


def dense_lnlikelihood(K, y):
    _, logdet = np.linalg.slogdet(K)
    return -0.5 * (y @ np.linalg.solve(K, y) + logdet + len(y) * np.log(2 * np.pi))


def test_three_points():
    gp = GaussianProcess(kernels.IsotropicGaussian([1.0, 1.0]))
    assert not gp.computed()
    assert gp.compute(np.array([0.0, 1.0, 2.0]), np.full(3, 0.1)) == 0
    assert gp.computed()
    assert gp.info() == 0

    i = np.arange(3)
    K = np.exp(-0.5 * (i[:, None] - i[None, :]) ** 2) + 0.01 * np.eye(3)
    value = gp.lnlikelihood(np.zeros(3))
    assert np.isfinite(value)
    assert value < 0
    assert_allclose(value, dense_lnlikelihood(K, np.zeros(3)))


@pytest.mark.parametrize("y", [-1.3, 0.0, 0.7])
def test_single_point(y):
    amp, scale, sigma = 1.5, 0.7, 0.2
    gp = GaussianProcess(kernels.IsotropicGaussian([amp, scale]))
    assert gp.compute(np.zeros((1, 1)), [sigma]) == 0

    K = amp + sigma**2
    assert_allclose(
        gp.lnlikelihood([y]), -0.5 * (y**2 / K + np.log(K) + np.log(2 * np.pi))
    )


def test_lnlikelihood(data):
    X, yerr, y = data
    kernel = kernels.IsotropicGaussian([1.3, 0.9])
    gp = GaussianProcess(kernel)
    gp.compute(X, yerr)
    K = np.asarray(kernel(X[:, None], X[:, None])) + np.diag(yerr**2)
    assert_allclose(gp.lnlikelihood(y), dense_lnlikelihood(K, y))


def test_multidimensional_inputs(random):
    X = random.uniform(-2, 2, (15, 3))
    yerr = np.full(len(X), 0.2)
    y = random.normal(size=len(X))
    kernel = kernels.IsotropicGaussian([0.8, 1.7])
    gp = GaussianProcess(kernel)
    assert gp.compute(X, yerr) == 0
    K = np.asarray(kernel(X, X)) + np.diag(yerr**2)
    assert_allclose(gp.lnlikelihood(y), dense_lnlikelihood(K, y))


def test_default_kernel(data):
    X, yerr, y = data
    gp = GaussianProcess()
    assert gp.compute(X, yerr) == 0
    expect = np.sum(
        -0.5 * (y / yerr) ** 2 - np.log(yerr) - 0.5 * np.log(2 * np.pi)
    )
    assert_allclose(gp.lnlikelihood(y), expect)
    assert gp.gradlnlikelihood(y).shape == (0,)
    assert gp.info() == 0


def test_scalar_noise(data):
    X, _, y = data
    gp1 = GaussianProcess(kernels.IsotropicGaussian([1.3, 0.9]))
    gp2 = GaussianProcess(kernels.IsotropicGaussian([1.3, 0.9]))
    gp1.compute(X, 0.2)
    gp2.compute(X, np.full(len(X), 0.2))
    assert_allclose(gp1.lnlikelihood(y), gp2.lnlikelihood(y))


def test_finite_difference_gradient(random):
    for _ in range(5):
        X = random.uniform(0, 5, (8, 2))
        yerr = random.uniform(0.1, 0.3, len(X))
        y = random.normal(size=len(X))
        pars = np.array([random.uniform(0.5, 2.0), random.uniform(0.5, 3.0)])

        def lnlikelihood(p):
            gp = GaussianProcess(kernels.IsotropicGaussian(p))
            assert gp.compute(X, yerr) == 0
            return gp.lnlikelihood(y)

        gp = GaussianProcess(kernels.IsotropicGaussian(pars))
        gp.compute(X, yerr)
        grad = gp.gradlnlikelihood(y)
        assert gp.info() == 0
        assert grad.shape == (2,)

        for k in range(len(pars)):
            eps = 1e-6 * pars[k]
            delta = np.zeros_like(pars)
            delta[k] = eps
            expect = (lnlikelihood(pars + delta) - lnlikelihood(pars - delta)) / (
                2 * eps
            )
            assert_allclose(grad[k], expect, rtol=1e-4, atol=1e-6)


def test_autodiff_gradient(data):
    X, yerr, y = data
    X = X[:, None]
    y = jnp.asarray(y)
    pars = jnp.array([1.3, 0.9])

    def lnlikelihood(p):
        K = covariance_matrix(kernels.IsotropicGaussian(p), X, yerr)
        _, logdet = jnp.linalg.slogdet(K)
        return -0.5 * (
            y @ jnp.linalg.solve(K, y) + logdet + len(y) * jnp.log(2 * jnp.pi)
        )

    gp = GaussianProcess(kernels.IsotropicGaussian(pars))
    gp.compute(X, yerr)
    assert_allclose(gp.lnlikelihood(y), lnlikelihood(pars))
    assert_allclose(gp.gradlnlikelihood(y), jax.grad(lnlikelihood)(pars), rtol=1e-6)


def test_custom_kernel_gradient(data):
    X, yerr, y = data

    def exp_squared(X1, X2, pars):
        return pars[0] * jnp.exp(-0.5 * jnp.sum(jnp.square(X1 - X2)) / pars[1])

    gp1 = GaussianProcess(kernels.Custom(exp_squared, [1.3, 0.9]))
    gp2 = GaussianProcess(kernels.IsotropicGaussian([1.3, 0.9]))
    gp1.compute(X, yerr)
    gp2.compute(X, yerr)
    assert_allclose(gp1.lnlikelihood(y), gp2.lnlikelihood(y))
    assert_allclose(gp1.gradlnlikelihood(y), gp2.gradlnlikelihood(y))


def test_uncomputed(data):
    _, _, y = data
    gp = GaussianProcess(kernels.IsotropicGaussian([1.0, 1.0]))
    assert gp.lnlikelihood(y) == -np.inf
    assert gp.info() == -1

    grad = gp.gradlnlikelihood(y)
    assert gp.info() == -1
    assert_allclose(grad, np.zeros(2))

    with pytest.raises(ValueError):
        gp.lnlikelihood(y, quiet=False)
    with pytest.raises(ValueError):
        gp.gradlnlikelihood(y, quiet=False)


def test_dimension_mismatch(data):
    X, yerr, y = data
    gp = GaussianProcess(kernels.IsotropicGaussian([1.0, 1.0]))
    gp.compute(X, yerr)
    assert gp.lnlikelihood(y[:-1]) == -np.inf
    assert gp.info() == -1
    assert_allclose(gp.gradlnlikelihood(y[:-1]), np.zeros(2))
    assert gp.info() == -1

    with pytest.raises(ValueError):
        gp.lnlikelihood(y[:-1], quiet=False)

    # A valid call afterwards resets the status
    gp.gradlnlikelihood(y)
    assert gp.info() == 0


def test_solve_failure(data):
    X, yerr, y = data
    y = np.array(y)
    y[2] = np.nan
    gp = GaussianProcess(kernels.IsotropicGaussian([1.0, 1.0]))
    gp.compute(X, yerr)
    assert gp.lnlikelihood(y) == -np.inf
    assert gp.info() == -2
    assert_allclose(gp.gradlnlikelihood(y), np.zeros(2))
    assert gp.info() == -2

    with pytest.raises(np.linalg.LinAlgError):
        gp.gradlnlikelihood(y, quiet=False)


def test_compute_idempotent(data):
    X, yerr, y = data
    gp = GaussianProcess(kernels.IsotropicGaussian([1.3, 0.9]))
    assert gp.compute(X, yerr) == 0
    value = gp.lnlikelihood(y)
    grad = gp.gradlnlikelihood(y)
    assert gp.compute(X, yerr) == 0
    assert gp.lnlikelihood(y) == value
    assert_allclose(gp.gradlnlikelihood(y), grad, atol=0, rtol=0)


def test_compute_failure(data):
    X, yerr, y = data
    gp = GaussianProcess(kernels.IsotropicGaussian([1.0, 1.0]))
    assert gp.compute(X, yerr) == 0
    assert np.isfinite(gp.lnlikelihood(y))

    X = np.array(X)
    X[0] = np.nan
    assert gp.compute(X, yerr) == -1
    assert gp.info() == -1
    assert not gp.computed()
    assert gp.X is None
    assert gp.lnlikelihood(y) == -np.inf


def test_zero_scale():
    gp = GaussianProcess(kernels.IsotropicGaussian([1.0, 0.0]))
    assert gp.compute(np.array([0.0, 1.0, 2.0]), np.full(3, 0.1)) == -1
    assert not gp.computed()


def test_indefinite_covariance(data):
    X, yerr, y = data
    gp = GaussianProcess(kernels.IsotropicGaussian([-1.0, 1.0]))
    assert gp.compute(X, yerr) == 0
    assert gp.lnlikelihood(y) == -np.inf


def test_noise_shape_error(data):
    X, yerr, _ = data
    gp = GaussianProcess(kernels.IsotropicGaussian([1.0, 1.0]))
    with pytest.raises(ValueError):
        gp.compute(X, yerr[:-1])
    with pytest.raises(ValueError):
        gp.compute(np.zeros((3, 2, 2)), np.ones(3))
    assert not gp.computed()
