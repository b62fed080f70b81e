"""
Kernels define the prior covariance between pairs of input coordinates. Every
kernel carries a flat vector of hyperparameters and knows how to differentiate
its value with respect to them, which is what
:func:`gplike.GaussianProcess.gradlnlikelihood` needs. Custom kernels can be
built from a plain function using :class:`Custom`, or by subclassing
:class:`Kernel`.
"""

__all__ = ["Kernel", "Custom", "IsotropicGaussian"]

from gplike.kernels.base import Custom, Kernel
from gplike.kernels.stationary import IsotropicGaussian
