# kernels/_base.py
"""Template for kernels evaluated with numpy broadcasting."""

__all__ = [
    "KernelTemplate",
]

import abc
import numbers
import numpy as np

from .. import errors, utils
from ..nodes._nodeset import _as_point_array


class KernelTemplate(abc.ABC):
    r"""Template for symmetric kernels
    :math:`K : \RR^d \times \RR^d \to \RR`.

    Child classes implement the kernel, its gradient, and its Hessian with
    respect to the first argument for arrays of points of shape
    ``(..., d)``; leading axes of the two arguments are broadcast against
    each other. The public methods validate and reshape their inputs and
    accept scalars if ``d = 1``.

    Parameters
    ----------
    dim : int
        Dimension :math:`d` of the points the kernel is evaluated at.
    """

    _name = NotImplemented  # Human readable name, e.g., "Gauss".

    def __init__(self, dim: int):
        """Set the dimension."""
        if not isinstance(dim, numbers.Integral) or dim < 1:
            raise errors.InvalidArgumentError(
                f"dimension must be a positive integer (got {dim})"
            )
        self.__dim = int(dim)

    # Properties --------------------------------------------------------------
    @property
    def dim(self) -> int:
        """Dimension of the points the kernel is evaluated at."""
        return self.__dim

    @property
    def name(self) -> str:
        """Name of the kernel."""
        return self._name

    @property
    @abc.abstractmethod
    def order(self) -> int:
        """Minimal order of the polynomial space (polynomial degree plus 1)
        that must be added to guarantee a nonsingular interpolation matrix.
        """
        raise NotImplementedError  # pragma: no cover

    def _parameters(self) -> dict:
        """Constructor arguments other than ``dim``, for printing."""
        return dict()

    def __str__(self) -> str:
        """String representation: class name and parameters."""
        params = ", ".join(
            [f"dim={self.dim}"]
            + [f"{key}={val}" for key, val in self._parameters().items()]
        )
        return f"{self.__class__.__name__}({params})"

    def __repr__(self) -> str:
        """Unique ID + string representation."""
        return utils.str2repr(self)

    # Kernel algebra ----------------------------------------------------------
    def __add__(self, other):
        from ._combinators import SumKernel

        if not isinstance(other, KernelTemplate):
            return NotImplemented
        return SumKernel(self, other)

    def __mul__(self, other):
        from ._combinators import ProductKernel, TransformationKernel

        if isinstance(other, KernelTemplate):
            return ProductKernel(self, other)
        if isinstance(other, numbers.Real):
            return TransformationKernel(self, output_scale=other)
        return NotImplemented

    __rmul__ = __mul__

    # Evaluation --------------------------------------------------------------
    def _points(self, x, y):
        """Validate the arguments and convert them to (..., d) arrays."""
        return _as_point_array(x, self.dim), _as_point_array(y, self.dim)

    @staticmethod
    def _squeeze(values):
        """Return a Python float for zero-dimensional results."""
        return float(values) if np.ndim(values) == 0 else values

    def __call__(self, x, y):
        """Evaluate the kernel :math:`K(\\x, \\y)`.

        Parameters
        ----------
        x, y : (..., d) ndarray (or scalars / (...,) arrays if ``d = 1``)
            Points. Leading axes are broadcast against each other.

        Returns
        -------
        values : (...) ndarray or float
        """
        return self._squeeze(self._evaluate(*self._points(x, y)))

    def evaluate(self, x, y):
        """Evaluate the kernel; same as calling the kernel directly."""
        return self(x, y)

    def gradient(self, x, y):
        r"""Gradient :math:`\nabla_{\x} K(\x, \y)` with respect to the first
        argument, of shape ``(..., d)``.
        """
        return self._gradient(*self._points(x, y))

    def hessian(self, x, y):
        r"""Hessian :math:`\nabla_{\x}^2 K(\x, \y)` with respect to the first
        argument, of shape ``(..., d, d)``.
        """
        return self._hessian(*self._points(x, y))

    def laplacian(self, x, y):
        r"""Laplacian :math:`\Delta_{\x} K(\x, \y)` with respect to the first
        argument, of shape ``(...)``.
        """
        return self._squeeze(self._laplacian(*self._points(x, y)))

    @abc.abstractmethod
    def _evaluate(self, x, y):  # pragma: no cover
        """Kernel values for validated (..., d) arrays."""
        raise NotImplementedError

    @abc.abstractmethod
    def _gradient(self, x, y):  # pragma: no cover
        """Gradients for validated (..., d) arrays."""
        raise NotImplementedError

    @abc.abstractmethod
    def _hessian(self, x, y):  # pragma: no cover
        """Hessians for validated (..., d) arrays."""
        raise NotImplementedError

    def _laplacian(self, x, y):
        """Laplacians for validated (..., d) arrays: trace of the Hessian."""
        return np.trace(self._hessian(x, y), axis1=-2, axis2=-1)
