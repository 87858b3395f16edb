# kernels/_compact.py
"""Compactly supported piecewise polynomial kernels of Wendland and Wu."""

__all__ = [
    "WendlandKernel",
    "WuKernel",
]

import numbers
import functools
import sympy

from .. import errors
from ._radial import RadialSymmetricKernel, _truncated


class WendlandKernel(RadialSymmetricKernel):
    r"""Wendland's compactly supported kernel

    .. math::
        \phi(r) = (1 - s)_+^{\ell + k} p_{k,\ell}(s),
        \qquad s = \varepsilon r,
        \qquad \ell = \lfloor d/2\rfloor + k + 1,

    positive definite in :math:`\RR^d` and :math:`2k` times continuously
    differentiable. The support is the ball of radius
    :math:`1/\varepsilon`.

    Parameters
    ----------
    dim : int
        Dimension of the points.
    k : int
        Smoothness index, one of 0, 1, 2, 3.
    shape_parameter : float
        Positive shape parameter :math:`\varepsilon`.
    """

    _name = "Wendland"

    def __init__(self, dim, k=0, shape_parameter=1.0):
        """Validate and store the smoothness index."""
        if k not in (0, 1, 2, 3):
            raise errors.InvalidArgumentError(
                f"k must be 0, 1, 2, or 3 (got {k})"
            )
        self.__k = int(k)
        RadialSymmetricKernel.__init__(self, dim, shape_parameter)

    @property
    def k(self) -> int:
        """Smoothness index :math:`k`."""
        return self.__k

    @property
    def order(self) -> int:
        return 0

    def _parameters(self) -> dict:
        return dict(k=self.k, shape_parameter=self.shape_parameter)

    def _profile(self, r, epsilon):
        s = epsilon * r
        k = self.k
        l = self.dim // 2 + k + 1  # noqa: E741
        if k == 0:
            p = sympy.Integer(1)
        elif k == 1:
            p = (l + 1) * s + 1
        elif k == 2:
            p = (
                (l**2 + 4 * l + 3) * s**2 + (3 * l + 6) * s + 3
            ) / sympy.Integer(3)
        else:
            p = (
                (l**3 + 9 * l**2 + 23 * l + 15) * s**3
                + (6 * l**2 + 36 * l + 45) * s**2
                + (15 * l + 45) * s
                + 15
            ) / sympy.Integer(15)
        return _truncated((1 - s) ** (l + k) * p, r, epsilon)


@functools.lru_cache(maxsize=None)
def _wu_polynomial(l: int, k: int) -> tuple:  # noqa: E741
    r"""Wu's polynomial :math:`D^k(\psi_\ell * \psi_\ell)(2s)` on
    :math:`0 \le s \le 1`, normalized to value 1 at the origin.
    Returns the symbol :math:`s` and the polynomial.

    Here :math:`\psi_\ell(t) = (1 - t^2)_+^\ell` and
    :math:`Df(s) = -f'(s)/s`.
    """
    s, t = sympy.symbols("s t", real=True)
    psi = sympy.expand(
        sympy.integrate(
            ((1 - t**2) * (1 - (2 * s - t) ** 2)) ** l, (t, 2 * s - 1, 1)
        )
    )
    for _ in range(k):
        psi = sympy.cancel(-sympy.diff(psi, s) / s)
    return s, sympy.expand(psi / psi.subs(s, 0))


class WuKernel(RadialSymmetricKernel):
    r"""Wu's compactly supported kernel
    :math:`\phi(r) = (D^k(\psi_\ell * \psi_\ell))(2\varepsilon r)`
    with :math:`\psi_\ell(t) = (1 - t^2)_+^\ell` and
    :math:`Df(r) = -f'(r)/r`, normalized to :math:`\phi(0) = 1`.

    The kernel is :math:`2(\ell - k)` times continuously differentiable and
    positive definite in :math:`\RR^d` for :math:`d \leq 2k + 1`.

    Parameters
    ----------
    dim : int
        Dimension of the points, at most ``2k + 1``.
    l : int
        Exponent of the convolved truncated power function.
    k : int
        Number of applications of :math:`D`, ``0 <= k <= l``.
    shape_parameter : float
        Positive shape parameter :math:`\varepsilon`.
    """

    _name = "Wu"

    def __init__(self, dim, l, k, shape_parameter=1.0):  # noqa: E741
        """Validate and store the indices."""
        for label, value in (("l", l), ("k", k)):
            if not isinstance(value, numbers.Integral) or value < 0:
                raise errors.InvalidArgumentError(
                    f"{label} must be a nonnegative integer (got {value})"
                )
        if k > l:
            raise errors.InvalidArgumentError(
                f"k must not exceed l (got k = {k}, l = {l})"
            )
        if dim > 2 * k + 1:
            raise errors.InvalidArgumentError(
                f"Wu kernel with k = {k} is positive definite only for "
                f"dim <= {2 * k + 1} (got dim = {dim})"
            )
        self.__l, self.__k = int(l), int(k)
        RadialSymmetricKernel.__init__(self, dim, shape_parameter)

    @property
    def l(self) -> int:  # noqa: E743
        r"""Exponent :math:`\ell`."""
        return self.__l

    @property
    def k(self) -> int:
        """Number of applications of :math:`D`."""
        return self.__k

    @property
    def order(self) -> int:
        return 0

    def _parameters(self) -> dict:
        return dict(l=self.l, k=self.k, shape_parameter=self.shape_parameter)

    def _profile(self, r, epsilon):
        s, polynomial = _wu_polynomial(self.l, self.k)
        return _truncated(polynomial.subs(s, epsilon * r), r, epsilon)
