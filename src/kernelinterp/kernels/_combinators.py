# kernels/_combinators.py
"""Kernels composed from other kernels."""

__all__ = [
    "SumKernel",
    "ProductKernel",
    "TransformationKernel",
]

import numbers
import numpy as np

from .. import errors
from ._base import KernelTemplate


class _CompositeKernel(KernelTemplate):
    """Base class for kernels built from several kernels of equal dimension.
    """

    def __init__(self, *kernels):
        """Validate and store the child kernels."""
        if len(kernels) < 2:
            raise errors.InvalidArgumentError(
                "at least two kernels required"
            )
        for kernel in kernels:
            if not isinstance(kernel, KernelTemplate):
                raise TypeError("kernels must be KernelTemplate instances")
        dims = {kernel.dim for kernel in kernels}
        if len(dims) != 1:
            raise errors.DimensionMismatchError(
                f"kernels must have the same dimension (got {sorted(dims)})"
            )
        KernelTemplate.__init__(self, kernels[0].dim)
        self.__kernels = tuple(kernels)

    @property
    def kernels(self) -> tuple:
        """Child kernels."""
        return self.__kernels

    def __str__(self) -> str:
        """String representation: the children joined by the operation."""
        joined = f" {self._symbol} ".join(str(k) for k in self.kernels)
        return f"{self.__class__.__name__}({joined})"


class SumKernel(_CompositeKernel):
    r"""Pointwise sum :math:`K = K_1 + \cdots + K_m` of kernels.

    The polynomial order is the maximum of the children's orders.

    Parameters
    ----------
    kernels : KernelTemplate
        At least two kernels of the same dimension.
    """

    _symbol = "+"

    @property
    def name(self) -> str:
        return " + ".join(kernel.name for kernel in self.kernels)

    @property
    def order(self) -> int:
        return max(kernel.order for kernel in self.kernels)

    def _evaluate(self, x, y):
        return sum(kernel._evaluate(x, y) for kernel in self.kernels)

    def _gradient(self, x, y):
        return sum(kernel._gradient(x, y) for kernel in self.kernels)

    def _hessian(self, x, y):
        return sum(kernel._hessian(x, y) for kernel in self.kernels)

    def _laplacian(self, x, y):
        return sum(kernel._laplacian(x, y) for kernel in self.kernels)


class ProductKernel(_CompositeKernel):
    r"""Pointwise product :math:`K = K_1 \cdots K_m` of kernels.

    Derivatives follow the product rule. The polynomial order is the sum of
    the children's orders, a conservative bound.

    Parameters
    ----------
    kernels : KernelTemplate
        At least two kernels of the same dimension.
    """

    _symbol = "*"

    @property
    def name(self) -> str:
        return " * ".join(kernel.name for kernel in self.kernels)

    @property
    def order(self) -> int:
        return sum(kernel.order for kernel in self.kernels)

    def _evaluate(self, x, y):
        values = self.kernels[0]._evaluate(x, y)
        for kernel in self.kernels[1:]:
            values = values * kernel._evaluate(x, y)
        return values

    def _gradient(self, x, y):
        first = self.kernels[0]
        f, df = first._evaluate(x, y), first._gradient(x, y)
        for kernel in self.kernels[1:]:
            g, dg = kernel._evaluate(x, y), kernel._gradient(x, y)
            f, df = f * g, f[..., None] * dg + g[..., None] * df
        return df

    def _hessian(self, x, y):
        first = self.kernels[0]
        f, df = first._evaluate(x, y), first._gradient(x, y)
        hf = first._hessian(x, y)
        for kernel in self.kernels[1:]:
            g, dg = kernel._evaluate(x, y), kernel._gradient(x, y)
            hg = kernel._hessian(x, y)
            outer = df[..., :, None] * dg[..., None, :]
            hf = (
                f[..., None, None] * hg
                + g[..., None, None] * hf
                + outer
                + np.swapaxes(outer, -1, -2)
            )
            f, df = f * g, f[..., None] * dg + g[..., None] * df
        return hf


class TransformationKernel(KernelTemplate):
    r"""Kernel with an affine transformation of its inputs and a scaled
    output, :math:`K(\x, \y) = \alpha K_0(\A\x + \b, \A\y + \b)`.

    Parameters
    ----------
    kernel : KernelTemplate
        Kernel :math:`K_0` applied to the transformed points.
    matrix : (d0, d) ndarray, float, or None
        Linear map :math:`\A` of the points. A scalar scales the points
        isotropically; ``None`` means the identity. The dimension of the
        transformed kernel is ``d``, the number of columns.
    offset : (d0,) ndarray or None
        Shift :math:`\b` (default zero).
    output_scale : float
        Positive factor :math:`\alpha` multiplying the output.
    """

    def __init__(self, kernel, matrix=None, offset=None, output_scale=1.0):
        """Validate and store the transformation."""
        if not isinstance(kernel, KernelTemplate):
            raise TypeError("kernel must be a KernelTemplate instance")
        if matrix is None or isinstance(matrix, numbers.Real):
            scale = 1.0 if matrix is None else float(matrix)
            matrix = scale * np.eye(kernel.dim)
        matrix = np.atleast_2d(np.array(matrix, dtype=float))
        if matrix.ndim != 2 or matrix.shape[0] != kernel.dim:
            raise errors.DimensionMismatchError(
                f"matrix must have {kernel.dim} rows (got shape "
                f"{matrix.shape})"
            )
        offset = np.zeros(kernel.dim) if offset is None else offset
        offset = np.atleast_1d(np.array(offset, dtype=float))
        if offset.shape != (kernel.dim,):
            raise errors.DimensionMismatchError(
                f"offset must have length {kernel.dim} (got shape "
                f"{offset.shape})"
            )
        if not output_scale > 0:
            raise errors.InvalidArgumentError(
                f"output scale must be positive (got {output_scale})"
            )
        KernelTemplate.__init__(self, matrix.shape[1])
        self.__kernel = kernel
        self.__matrix = matrix
        self.__offset = offset
        self.__scale = float(output_scale)

    # Properties --------------------------------------------------------------
    @property
    def kernel(self) -> KernelTemplate:
        """Kernel applied to the transformed points."""
        return self.__kernel

    @property
    def matrix(self) -> np.ndarray:
        r"""Linear map :math:`\A`."""
        return self.__matrix

    @property
    def offset(self) -> np.ndarray:
        r"""Shift :math:`\b`."""
        return self.__offset

    @property
    def output_scale(self) -> float:
        r"""Output factor :math:`\alpha`."""
        return self.__scale

    @property
    def name(self) -> str:
        return f"Transformed {self.kernel.name}"

    @property
    def order(self) -> int:
        return self.kernel.order

    def __str__(self) -> str:
        return (
            f"TransformationKernel({self.kernel}, "
            f"dim={self.dim}, output_scale={self.output_scale})"
        )

    # Evaluation --------------------------------------------------------------
    def _transform(self, x):
        return x @ self.matrix.T + self.offset

    def _evaluate(self, x, y):
        return self.output_scale * self.kernel._evaluate(
            self._transform(x), self._transform(y)
        )

    def _gradient(self, x, y):
        grad = self.kernel._gradient(self._transform(x), self._transform(y))
        return self.output_scale * (grad @ self.matrix)

    def _hessian(self, x, y):
        hess = self.kernel._hessian(self._transform(x), self._transform(y))
        A = self.matrix
        return self.output_scale * np.einsum("ki,...kl,lj->...ij", A, hess, A)
