# interpolation/_polynomials.py
"""Monomial bases of multivariate polynomial spaces."""

__all__ = [
    "PolynomialBasis",
]

import numbers
import numpy as np
import sympy
from sympy.polys.orderings import monomial_key

from .. import errors, utils
from ..nodes._nodeset import _as_point_array


class PolynomialBasis:
    r"""Monomials :math:`\x^\alpha = x_1^{\alpha_1}\cdots x_d^{\alpha_d}` of
    total degree :math:`|\alpha| \leq m - 1`, where :math:`m` is the order.

    The monomials are sympy expressions in the variables ``x1, ..., xd``,
    sorted in graded lexicographic order (``1, x1, x2, x1**2, x1*x2, ...``).
    Numerical evaluation and differentiation use the integer exponent table,
    so derivatives are exact.

    Parameters
    ----------
    dim : int
        Number of variables :math:`d`.
    order : int
        Order :math:`m \geq 0` of the space. Order 0 gives the empty basis.

    Examples
    --------
    >>> basis = PolynomialBasis(2, 2)
    >>> basis.monomials
    [1, x1, x2]
    >>> basis.evaluate([[2.0, 3.0]])
    array([[1., 2., 3.]])
    """

    def __init__(self, dim: int, order: int):
        """Build the monomials and their exponents."""
        if not isinstance(dim, numbers.Integral) or dim < 1:
            raise errors.InvalidArgumentError(
                f"dimension must be a positive integer (got {dim})"
            )
        if not isinstance(order, numbers.Integral) or order < 0:
            raise errors.InvalidArgumentError(
                f"polynomial order must be a nonnegative integer (got {order})"
            )
        self.__dim = int(dim)
        self.__order = int(order)
        self.__variables = sympy.symbols(f"x1:{dim + 1}")

        if order == 0:
            self.__monomials = []
            self.__exponents = np.zeros((0, dim), dtype=int)
            return

        key = monomial_key("grlex", list(reversed(self.__variables)))
        self.__monomials = sorted(
            sympy.itermonomials(self.__variables, order - 1),
            key=key,
        )
        self.__exponents = np.array(
            [
                sympy.Poly(monomial, *self.__variables).monoms()[0]
                for monomial in self.__monomials
            ],
            dtype=int,
        )

    # Properties --------------------------------------------------------------
    @property
    def dim(self) -> int:
        """Number of variables."""
        return self.__dim

    @property
    def order(self) -> int:
        """Order of the space: maximal degree plus 1, or 0 if empty."""
        return self.__order

    @property
    def variables(self) -> tuple:
        """sympy symbols ``x1, ..., xd``."""
        return self.__variables

    @property
    def monomials(self) -> list:
        """Monomials as sympy expressions, in graded lexicographic order."""
        return list(self.__monomials)

    @property
    def exponents(self) -> np.ndarray:
        """(q, d) integer array, the exponents of each monomial."""
        return self.__exponents.copy()

    def __len__(self) -> int:
        """Number :math:`q` of monomials."""
        return len(self.__monomials)

    def __str__(self) -> str:
        """String representation: the monomials."""
        return (
            f"PolynomialBasis of order {self.order} in {self.dim} variables: "
            f"{self.__monomials}"
        )

    def __repr__(self) -> str:
        """Unique ID + string representation."""
        return utils.str2repr(self)

    # Evaluation --------------------------------------------------------------
    def _points(self, x) -> np.ndarray:
        return _as_point_array(x, self.dim).reshape((-1, self.dim))

    def _derivative(self, x, alpha) -> np.ndarray:
        r"""Evaluate :math:`\partial^\alpha` of every monomial at the points
        ``x``, shape (m, q).
        """
        alpha = np.asarray(alpha, dtype=int)
        exponents = self.__exponents
        factor = np.ones(len(exponents))
        for i, a in enumerate(alpha):
            for j in range(a):
                factor = factor * (exponents[:, i] - j)
        reduced = np.maximum(exponents - alpha, 0)
        return factor * np.prod(x[:, None, :] ** reduced, axis=-1)

    def evaluate(self, x) -> np.ndarray:
        """Evaluate every monomial at the points ``x``.

        Parameters
        ----------
        x : (m, d) ndarray, (d,) ndarray, or NodeSet
            Points (scalars are accepted if ``d = 1``).

        Returns
        -------
        values : (m, q) ndarray
        """
        return self._derivative(self._points(x), np.zeros(self.dim))

    def gradient(self, x) -> np.ndarray:
        """Gradients of every monomial at the points ``x``, shape (m, q, d).
        """
        x = self._points(x)
        unit = np.eye(self.dim, dtype=int)
        if len(self) == 0:
            return np.zeros((x.shape[0], 0, self.dim))
        return np.stack(
            [self._derivative(x, unit[k]) for k in range(self.dim)], axis=-1
        )

    def hessian(self, x) -> np.ndarray:
        """Hessians of every monomial at the points ``x``,
        shape (m, q, d, d).
        """
        x = self._points(x)
        unit = np.eye(self.dim, dtype=int)
        hess = np.zeros((x.shape[0], len(self), self.dim, self.dim))
        for k in range(self.dim):
            for l in range(k, self.dim):  # noqa: E741
                hess[..., k, l] = self._derivative(x, unit[k] + unit[l])
                hess[..., l, k] = hess[..., k, l]
        return hess

    def laplacian(self, x) -> np.ndarray:
        """Laplacians of every monomial at the points ``x``, shape (m, q)."""
        x = self._points(x)
        unit = np.eye(self.dim, dtype=int)
        return sum(self._derivative(x, 2 * unit[k]) for k in range(self.dim))
