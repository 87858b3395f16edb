# operators/_differential.py
"""Gradient, Laplacian, and general second-order elliptic operators."""

__all__ = [
    "Gradient",
    "Laplacian",
    "EllipticOperator",
]

import numbers
import numpy as np

from .. import errors
from ._base import DifferentialOperatorTemplate


class Gradient(DifferentialOperatorTemplate):
    r"""Gradient :math:`\nabla = (\partial_1, \ldots, \partial_d)^\trp`.

    Applied to a kernel, the result has shape ``(..., d)``; applied to a
    polynomial basis at ``m`` points, the result has shape ``(m, q, d)``.
    """

    def _combine(self, x, value, gradient, hessian, laplacian):
        return gradient()


class Laplacian(DifferentialOperatorTemplate):
    r"""Laplacian :math:`\Delta = \sum_{i=1}^d \partial_i^2`.

    For radial kernels this is evaluated as
    :math:`\phi''(r) + (d - 1)\phi'(r)/r`.
    """

    def _combine(self, x, value, gradient, hessian, laplacian):
        return laplacian()


def _coefficient(coefficient, x, shape):
    """Evaluate a constant or callable coefficient at the points ``x``.

    Callables receive one point at a time. The result has shape
    ``x.shape[:-1] + shape`` for callables and ``shape`` for constants.
    """
    if not callable(coefficient):
        return coefficient
    points = x.reshape((-1, x.shape[-1]))
    values = np.array([coefficient(point) for point in points], dtype=float)
    return values.reshape(x.shape[:-1] + shape)


class EllipticOperator(DifferentialOperatorTemplate):
    r"""Linear second-order operator

    .. math::
        \mathcal{L}u = -\sum_{i,j=1}^d a_{ij}\partial_{ij}u
        + \sum_{i=1}^d b_i\partial_i u + cu.

    Parameters
    ----------
    A : float, (d, d) ndarray, or callable
        Diffusion coefficients :math:`a_{ij}`. A scalar ``a`` means
        ``a * I``, so that ``EllipticOperator(1)`` is :math:`-\Delta`.
        A callable maps one point to a (d, d) array.
    b : (d,) ndarray, callable, or None
        Advection coefficients :math:`b_i` (default none). A callable maps
        one point to a (d,) array.
    c : float, callable, or None
        Reaction coefficient :math:`c` (default none). A callable maps one
        point to a float.
    """

    def __init__(self, A, b=None, c=None):
        """Validate and store the coefficients."""
        if not callable(A) and not isinstance(A, numbers.Real):
            A = np.array(A, dtype=float)
            if A.ndim != 2 or A.shape[0] != A.shape[1]:
                raise errors.DimensionMismatchError(
                    f"A must be a square matrix (got shape {A.shape})"
                )
        if b is not None and not callable(b):
            b = np.atleast_1d(np.array(b, dtype=float))
            if b.ndim != 1:
                raise errors.DimensionMismatchError(
                    f"b must be a vector (got shape {b.shape})"
                )
        if c is not None and not callable(c) and np.ndim(c) != 0:
            raise errors.DimensionMismatchError("c must be a scalar")
        self.__A = A
        self.__b = b
        self.__c = c

    # Properties --------------------------------------------------------------
    @property
    def A(self):
        """Diffusion coefficients."""
        return self.__A

    @property
    def b(self):
        """Advection coefficients (``None`` if absent)."""
        return self.__b

    @property
    def c(self):
        """Reaction coefficient (``None`` if absent)."""
        return self.__c

    def __str__(self) -> str:
        """String representation: the coefficients."""
        def label(coefficient):
            if callable(coefficient):
                return "<function>"
            return str(coefficient).replace("\n", "")

        return (
            f"EllipticOperator(A={label(self.A)}, b={label(self.b)}, "
            f"c={label(self.c)})"
        )

    def _check_dimension(self, dim: int):
        """Compare the constant coefficients with the point dimension."""
        for label, coefficient in (("A", self.A), ("b", self.b)):
            if isinstance(coefficient, np.ndarray) and (
                coefficient.shape[0] != dim
            ):
                raise errors.DimensionMismatchError(
                    f"{label} has shape {coefficient.shape}, "
                    f"points have dimension {dim}"
                )

    def _combine(self, x, value, gradient, hessian, laplacian):
        dim = x.shape[-1]
        self._check_dimension(dim)
        terms = []

        # Second-order part.
        if isinstance(self.A, numbers.Real):
            if self.A != 0:
                terms.append(-self.A * laplacian())
        else:
            A = _coefficient(self.A, x, (dim, dim))
            terms.append(-np.einsum("...ij,...ij->...", hessian(), A))

        # First-order part.
        if self.b is not None:
            b = _coefficient(self.b, x, (dim,))
            terms.append(np.einsum("...i,...i->...", gradient(), b))

        # Zeroth-order part.
        if self.c is not None:
            terms.append(_coefficient(self.c, x, ()) * value())

        if not terms:
            # Zero operator: keep the shape of the function values.
            return np.zeros_like(value())
        return sum(terms[1:], terms[0])
