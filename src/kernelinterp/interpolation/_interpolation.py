# interpolation/_interpolation.py
"""Kernel interpolants and the interpolation routine."""

__all__ = [
    "Interpolation",
    "interpolate",
    "kernel_inner_product",
    "kernel_norm",
]

import numbers
import numpy as np

from .. import errors, utils
from ..kernels import KernelTemplate, GaussKernel
from ..nodes import NodeSet
from ..nodes._nodeset import _as_point_array
from ._polynomials import PolynomialBasis
from ._matrices import interpolation_matrix, FactorizedSystem


class Interpolation:
    r"""Kernel interpolant

    .. math::
        s(\x) = \sum_{j=1}^n c_j K(\x, \x_j) + \sum_{k=1}^q d_k p_k(\x),

    where :math:`\x_j` are the centers and :math:`p_k` are the monomials of
    a polynomial basis. Objects of this class are created by
    :func:`interpolate()` or
    :func:`kernelinterp.discretization.solve_stationary()` and are not
    modified afterwards.

    Parameters
    ----------
    kernel : KernelTemplate
        Kernel :math:`K`.
    nodeset : NodeSet
        Centers :math:`\x_1, \ldots, \x_n`. A copy is stored.
    coefficients : (n + q,) ndarray
        Kernel coefficients :math:`c_j` followed by polynomial coefficients
        :math:`d_k`.
    system : FactorizedSystem
        Factorized system matrix the coefficients were computed with.
    basis : PolynomialBasis
        Polynomial basis with ``q`` monomials.
    """

    def __init__(self, kernel, nodeset, coefficients, system, basis):
        """Store the interpolant data."""
        coefficients = np.array(coefficients, dtype=float)
        if coefficients.shape != (len(nodeset) + len(basis),):
            raise errors.DimensionMismatchError(
                f"expected {len(nodeset) + len(basis)} coefficients "
                f"(got shape {coefficients.shape})"
            )
        coefficients.flags.writeable = False
        self.__kernel = kernel
        self.__nodeset = nodeset.copy()
        self.__coefficients = coefficients
        self.__system = system
        self.__basis = basis

    # Properties --------------------------------------------------------------
    @property
    def kernel(self) -> KernelTemplate:
        """Kernel of the interpolant."""
        return self.__kernel

    @property
    def nodeset(self) -> NodeSet:
        """Centers of the interpolant (a copy)."""
        return self.__nodeset.copy()

    @property
    def dim(self) -> int:
        """Dimension of the input variables."""
        return self.__nodeset.dim

    @property
    def coefficients(self) -> np.ndarray:
        """All coefficients: kernel part followed by polynomial part."""
        return self.__coefficients

    @property
    def kernel_coefficients(self) -> np.ndarray:
        """Coefficients :math:`c_j` of the kernel part."""
        return self.__coefficients[: len(self.__nodeset)]

    @property
    def polynomial_coefficients(self) -> np.ndarray:
        """Coefficients :math:`d_k` of the polynomial part."""
        return self.__coefficients[len(self.__nodeset):]

    @property
    def polynomial_basis(self) -> PolynomialBasis:
        """Polynomial basis of the interpolant."""
        return self.__basis

    @property
    def polyvars(self) -> tuple:
        """sympy variables of the polynomial basis."""
        return self.__basis.variables

    @property
    def order(self) -> int:
        """Order of the polynomial part: degree plus 1, or 0 if there is no
        polynomial part.
        """
        return self.__basis.order

    @property
    def system_matrix(self) -> FactorizedSystem:
        """Factorized system matrix; its ``matrix`` is read-only."""
        return self.__system

    def __str__(self) -> str:
        """String representation: nodes, kernel, and polynomial order."""
        return (
            f"Interpolation with {len(self.__nodeset)} nodes, "
            f"{self.kernel} kernel and polynomial of order {self.order}"
        )

    def __repr__(self) -> str:
        """Unique ID + string representation."""
        return utils.str2repr(self)

    # Evaluation --------------------------------------------------------------
    def _points(self, x):
        """Return the points as an (m, d) array and whether x was one point.
        """
        points = _as_point_array(x, self.dim)
        return points.reshape((-1, self.dim)), points.ndim == 1

    def __call__(self, x):
        """Evaluate the interpolant.

        Parameters
        ----------
        x : float, (d,) ndarray, (m, d) ndarray, or NodeSet
            One point (a scalar if ``d = 1``) or several points.

        Returns
        -------
        values : float or (m,) ndarray
        """
        points, single = self._points(x)
        centers = self.__nodeset.values
        A = self.kernel._evaluate(
            points[:, np.newaxis, :], centers[np.newaxis, :, :]
        )
        P = self.__basis.evaluate(points)
        values = A @ self.kernel_coefficients
        values += P @ self.polynomial_coefficients
        return float(values[0]) if single else values

    def apply_operator(self, operator, x):
        """Apply a differential operator to the interpolant.

        Parameters
        ----------
        operator : DifferentialOperatorTemplate
            Linear differential operator, e.g., ``Gradient()``.
        x : float, (d,) ndarray, (m, d) ndarray, or NodeSet
            Evaluation points.

        Returns
        -------
        values : ndarray or float
            Shape ``(m,)`` for scalar operators and ``(m, d)`` for the
            gradient; one point gives a float or a (d,) array.
        """
        points, single = self._points(x)
        centers = self.__nodeset.values
        kernel_part = operator(
            self.kernel, points[:, np.newaxis, :], centers[np.newaxis, :, :]
        )
        polynomial_part = operator.apply_basis(self.__basis, points)
        values = np.einsum(
            "mn...,n->m...", kernel_part, self.kernel_coefficients
        ) + np.einsum(
            "mq...,q->m...", polynomial_part, self.polynomial_coefficients
        )
        if single:
            return float(values[0]) if values.ndim == 1 else values[0]
        return values


def interpolate(nodeset, values, kernel=None, order=None) -> Interpolation:
    r"""Interpolate ``values`` given at the nodes of ``nodeset``.

    Determine the coefficients of

    .. math::
        s(\x) = \sum_{j=1}^n c_j K(\x, \x_j) + \sum_{k=1}^q d_k p_k(\x)

    such that :math:`s(\x_i) = f_i` for all nodes, subject to
    :math:`\sum_j c_j p_k(\x_j) = 0` for all monomials :math:`p_k` of
    degree less than ``order``.

    Parameters
    ----------
    nodeset : NodeSet
        Interpolation nodes :math:`\x_1, \ldots, \x_n`.
    values : (n,) ndarray
        Values :math:`f_1, \ldots, f_n` at the nodes.
    kernel : KernelTemplate or None
        Kernel :math:`K`. Defaults to ``GaussKernel(nodeset.dim)``.
    order : int or None
        Order of the polynomial part (degree plus 1); 0 means no
        polynomial. Defaults to ``kernel.order``.

    Returns
    -------
    itp : Interpolation

    Raises
    ------
    kernelinterp.errors.DimensionMismatchError
        If the number of values does not match the number of nodes or the
        kernel dimension does not match the node set dimension.
    kernelinterp.errors.SingularSystemError
        If the system matrix is singular, e.g., for duplicate nodes.
    """
    if not isinstance(nodeset, NodeSet):
        nodeset = NodeSet(nodeset)
    if kernel is None:
        kernel = GaussKernel(nodeset.dim)
    if kernel.dim != nodeset.dim:
        raise errors.DimensionMismatchError(
            f"kernel has dimension {kernel.dim}, "
            f"node set has dimension {nodeset.dim}"
        )
    values = np.asarray(values, dtype=float)
    if values.ndim != 1 or values.shape[0] != len(nodeset):
        raise errors.DimensionMismatchError(
            f"{len(nodeset)} nodes but values have shape {values.shape}"
        )
    if order is None:
        order = kernel.order
    if not isinstance(order, numbers.Integral) or order < 0:
        raise errors.InvalidArgumentError(
            f"polynomial order must be a nonnegative integer (got {order})"
        )

    basis = PolynomialBasis(nodeset.dim, order)
    system = FactorizedSystem(interpolation_matrix(nodeset, kernel, basis))
    rhs = np.concatenate([values, np.zeros(len(basis))])
    return Interpolation(kernel, nodeset, system.solve(rhs), system, basis)


def kernel_inner_product(itp1, itp2) -> float:
    r"""Inner product of the kernel parts of two interpolants in the native
    space of their kernel,
    :math:`\langle s_1, s_2\rangle = \sum_{i,j} c^{(1)}_i c^{(2)}_j
    K(\x^{(1)}_i, \x^{(2)}_j)`.

    Both interpolants must use the same kernel.
    """
    if str(itp1.kernel) != str(itp2.kernel):
        raise errors.InvalidArgumentError(
            "interpolants must use the same kernel"
        )
    X, Y = itp1.nodeset.values, itp2.nodeset.values
    K = itp1.kernel._evaluate(X[:, np.newaxis, :], Y[np.newaxis, :, :])
    return float(itp1.kernel_coefficients @ K @ itp2.kernel_coefficients)


def kernel_norm(itp) -> float:
    r"""Native space norm of the kernel part of an interpolant,
    :math:`\|s\|_K = \sqrt{\langle s, s\rangle_K}`.
    """
    return float(np.sqrt(kernel_inner_product(itp, itp)))
