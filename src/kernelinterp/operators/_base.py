# operators/_base.py
"""Template for linear differential operators applied to kernels."""

__all__ = [
    "DifferentialOperatorTemplate",
]

import abc
import numpy as np

from .. import utils
from ..kernels import KernelTemplate


class DifferentialOperatorTemplate(abc.ABC):
    r"""Template for linear differential operators :math:`\mathcal{L}`.

    An operator is applied either to a kernel in its first argument,
    :math:`\mathcal{L}K(\cdot, \y)` evaluated at :math:`\x`, or to every
    monomial of a polynomial basis. Both reduce to a combination of the
    function values, gradients, Hessians, and Laplacians the kernel or the
    basis provides exactly; child classes implement that combination in
    :meth:`_combine()`.
    """

    def __call__(self, kernel, x, y):
        r"""Apply the operator to :math:`\x \mapsto K(\x, \y)`.

        Parameters
        ----------
        kernel : KernelTemplate
            Kernel to differentiate.
        x, y : (..., d) ndarray (or scalars if ``d = 1``)
            Points. Leading axes are broadcast against each other.

        Returns
        -------
        values : ndarray
            Operator applied to the kernel, shape ``(...)`` or
            ``(..., d)`` for vector-valued operators.
        """
        return self.apply(kernel, x, y)

    def apply(self, kernel, x, y):
        """Apply the operator to the kernel in its first argument."""
        if not isinstance(kernel, KernelTemplate):
            raise TypeError("kernel must be a KernelTemplate instance")
        x, y = kernel._points(x, y)
        values = self._combine(
            x,
            value=lambda: kernel._evaluate(x, y),
            gradient=lambda: kernel._gradient(x, y),
            hessian=lambda: kernel._hessian(x, y),
            laplacian=lambda: kernel._laplacian(x, y),
        )
        return float(values) if np.ndim(values) == 0 else values

    def apply_basis(self, basis, x):
        """Apply the operator to every function of a polynomial basis.

        Parameters
        ----------
        basis : kernelinterp.interpolation.PolynomialBasis
            Polynomial basis with ``q`` monomials.
        x : (m, d) ndarray
            Points.

        Returns
        -------
        values : (m, q) ndarray
            Entry ``(i, j)`` is the operator applied to the ``j``-th monomial,
            evaluated at ``x[i]``.
        """
        x = np.atleast_2d(np.asarray(x, dtype=float))
        return self._combine(
            x[:, np.newaxis, :],
            value=lambda: basis.evaluate(x),
            gradient=lambda: basis.gradient(x),
            hessian=lambda: basis.hessian(x),
            laplacian=lambda: basis.laplacian(x),
        )

    @abc.abstractmethod
    def _combine(self, x, value, gradient, hessian, laplacian):
        """Combine the derivatives of the function the operator acts on.

        Parameters
        ----------
        x : (..., d) ndarray
            Points, broadcastable against the leading axes of the results.
        value, gradient, hessian, laplacian : callable
            Functions without arguments returning the function values
            ``(...)``, gradients ``(..., d)``, Hessians ``(..., d, d)``,
            and Laplacians ``(...)``. Only the ones called are computed.
        """
        raise NotImplementedError  # pragma: no cover

    def __str__(self) -> str:
        return self.__class__.__name__

    def __repr__(self) -> str:
        """Unique ID + string representation."""
        return utils.str2repr(self)
