# kernels/_radial.py
"""Radial symmetric kernels :math:`K(\\x, \\y) = \\phi(\\|\\x - \\y\\|_2)`."""

__all__ = [
    "RadialSymmetricKernel",
    "GaussKernel",
    "MultiquadricKernel",
    "InverseMultiquadricKernel",
    "PolyharmonicSplineKernel",
    "ThinPlateSplineKernel",
    "RadialCharacteristicKernel",
    "RieszKernel",
]

import abc
import numbers
import functools
import numpy as np
import sympy

from .. import errors
from ..nodes._nodeset import _as_point_array
from ._base import KernelTemplate


# Symbolic machinery ==========================================================
R = sympy.Symbol("r", positive=True)
EPSILON = sympy.Symbol("epsilon", positive=True)


def _rational(value):
    """Exact sympy number for a (decimal) kernel parameter."""
    return sympy.Rational(str(value))


def _cancel(expr):
    """Cancel common factors, piece by piece for piecewise expressions."""
    expr = sympy.piecewise_fold(expr)
    if isinstance(expr, sympy.Piecewise):
        return sympy.Piecewise(
            *[(sympy.cancel(piece), cond) for piece, cond in expr.args]
        )
    return sympy.cancel(expr)


@functools.lru_cache(maxsize=None)
def _derivatives(phi):
    """Symbolic profile, first derivative, first derivative divided by r,
    and second derivative of the profile ``phi(r)``.
    """
    dphi = sympy.diff(phi, R)
    return {
        "phi": phi,
        "dphi": dphi,
        "g": _cancel(dphi / R),
        "d2phi": sympy.diff(dphi, R),
    }


@functools.lru_cache(maxsize=None)
def _compile(phi):
    """Numerical functions ``f(r, epsilon)`` for every expression of
    :func:`_derivatives()`.
    """
    return {
        key: sympy.lambdify((R, EPSILON), expr, modules=["scipy", "numpy"])
        for key, expr in _derivatives(phi).items()
    }


@functools.lru_cache(maxsize=None)
def _limit_at_zero(expr, epsilon: float) -> float:
    """Exact one-sided limit of ``expr`` for r -> 0."""
    if isinstance(expr, sympy.Piecewise):
        # The first piece is the one on the support around the origin.
        expr = expr.args[0][0]
    return float(sympy.limit(expr, R, 0, "+").subs(EPSILON, epsilon))


# Base class ==================================================================
class RadialSymmetricKernel(KernelTemplate):
    r"""Template for radial symmetric kernels
    :math:`K(\x, \y) = \phi(\|\x - \y\|_2)`.

    Child classes only provide the profile :math:`\phi` as a sympy
    expression in the radius :math:`r` and the shape parameter
    :math:`\varepsilon`. Derivatives are computed symbolically once per
    profile and compiled to numpy/scipy functions. The gradient and the
    Hessian follow from the chain rule,

    .. math::
        \nabla_{\x} K = \frac{\phi'(r)}{r}(\x - \y),
        \qquad
        \nabla_{\x}^2 K = \frac{\phi'(r)}{r}\I
        + \left(\phi''(r) - \frac{\phi'(r)}{r}\right)
        \frac{(\x - \y)(\x - \y)^\trp}{r^2}.

    Values at :math:`r = 0` that are not finite in floating point
    arithmetic (e.g., :math:`0 \log 0`) are replaced by their exact limits.

    Parameters
    ----------
    dim : int
        Dimension of the points.
    shape_parameter : float
        Positive shape parameter :math:`\varepsilon`.
    """

    def __init__(self, dim: int, shape_parameter: float = 1.0):
        """Validate and store the shape parameter."""
        KernelTemplate.__init__(self, dim)
        if not shape_parameter > 0:
            raise errors.InvalidArgumentError(
                f"shape parameter must be positive (got {shape_parameter})"
            )
        self.__epsilon = float(shape_parameter)
        self.__expression = None

    # Properties --------------------------------------------------------------
    @property
    def shape_parameter(self) -> float:
        r"""Shape parameter :math:`\varepsilon`."""
        return self.__epsilon

    @property
    def expression(self) -> sympy.Expr:
        r"""Profile :math:`\phi` as a sympy expression of the symbols
        ``r`` and ``epsilon``.
        """
        if self.__expression is None:
            self.__expression = self._profile(R, EPSILON)
        return self.__expression

    def derivative_expressions(self) -> dict:
        r"""Symbolic :math:`\phi`, :math:`\phi'`, :math:`\phi'/r`, and
        :math:`\phi''` under the keys ``"phi"``, ``"dphi"``, ``"g"``, and
        ``"d2phi"``.
        """
        return dict(_derivatives(self.expression))

    def _parameters(self) -> dict:
        return dict(shape_parameter=self.shape_parameter)

    @abc.abstractmethod
    def _profile(self, r, epsilon):  # pragma: no cover
        """Return the profile phi as a sympy expression of r and epsilon."""
        raise NotImplementedError

    # Radial functions --------------------------------------------------------
    def _value_at_zero(self, which: str) -> float:
        """Limit of the function ``which`` for r -> 0."""
        return _limit_at_zero(_derivatives(self.expression)[which],
                              self.shape_parameter)

    def _radial(self, which: str, r) -> np.ndarray:
        """Evaluate phi, dphi, g = dphi / r, or d2phi at radii ``r``."""
        r = np.asarray(r, dtype=float)
        function = _compile(self.expression)[which]
        with np.errstate(all="ignore"):
            values = np.array(
                np.broadcast_to(function(r, self.shape_parameter), r.shape),
                dtype=float,
            )
        singular = (r == 0) & ~np.isfinite(values)
        if np.any(singular):
            values[singular] = self._value_at_zero(which)
        return values

    def phi(self, r):
        r"""Evaluate the profile :math:`\phi(r)`."""
        return self._squeeze(self._radial("phi", r))

    def Phi(self, x):
        r"""Evaluate :math:`\Phi(\x) = \phi(\|\x\|_2)`."""
        x = _as_point_array(x, self.dim)
        return self._squeeze(self._radial("phi", np.linalg.norm(x, axis=-1)))

    # Kernel evaluation -------------------------------------------------------
    def _evaluate(self, x, y):
        return self._radial("phi", np.linalg.norm(x - y, axis=-1))

    def _gradient(self, x, y):
        z = x - y
        g = self._radial("g", np.linalg.norm(z, axis=-1))
        singular = ~np.isfinite(g)
        if np.any(singular):
            # At r = 0 the gradient vanishes iff phi'(0) = 0.
            g[singular] = 0.0 if self._value_at_zero("dphi") == 0 else np.nan
        return g[..., np.newaxis] * z

    def _hessian(self, x, y):
        z = x - y
        r = np.linalg.norm(z, axis=-1)
        g = self._radial("g", r)
        d2phi = self._radial("d2phi", r)
        with np.errstate(divide="ignore", invalid="ignore"):
            coeff = np.where(r > 0, (d2phi - g) / r**2, 0.0)
        diagonal = np.eye(self.dim, dtype=bool)
        return np.where(diagonal, g[..., None, None], 0.0) + (
            coeff[..., None, None] * z[..., :, None] * z[..., None, :]
        )

    def _laplacian(self, x, y):
        r = np.linalg.norm(x - y, axis=-1)
        return self._radial("d2phi", r) + (self.dim - 1) * self._radial("g", r)


# Globally supported kernels ==================================================
class GaussKernel(RadialSymmetricKernel):
    r"""Gaussian kernel :math:`\phi(r) = \exp(-(\varepsilon r)^2)`,
    positive definite in every dimension.
    """

    _name = "Gauss"

    @property
    def order(self) -> int:
        return 0

    def _profile(self, r, epsilon):
        return sympy.exp(-((epsilon * r) ** 2))


class MultiquadricKernel(RadialSymmetricKernel):
    r"""Multiquadric kernel :math:`\phi(r) = (1 + (\varepsilon r)^2)^\beta`
    with :math:`\beta > 0`, :math:`\beta \notin \NN`, conditionally positive
    definite of order :math:`\lceil\beta\rceil`.
    """

    _name = "Multiquadric"

    def __init__(self, dim, beta=0.5, shape_parameter=1.0):
        """Validate and store the exponent."""
        if beta <= 0 or float(beta).is_integer():
            raise errors.InvalidArgumentError(
                f"beta must be positive and not an integer (got {beta})"
            )
        self.__beta = beta
        RadialSymmetricKernel.__init__(self, dim, shape_parameter)

    @property
    def beta(self):
        r"""Exponent :math:`\beta`."""
        return self.__beta

    @property
    def order(self) -> int:
        return int(np.ceil(self.beta))

    def _parameters(self) -> dict:
        return dict(beta=self.beta, shape_parameter=self.shape_parameter)

    def _profile(self, r, epsilon):
        return (1 + (epsilon * r) ** 2) ** _rational(self.beta)


class InverseMultiquadricKernel(RadialSymmetricKernel):
    r"""Inverse multiquadric kernel
    :math:`\phi(r) = (1 + (\varepsilon r)^2)^{-\beta}` with :math:`\beta > 0`,
    positive definite in every dimension.
    """

    _name = "Inverse multiquadric"

    def __init__(self, dim, beta=0.5, shape_parameter=1.0):
        """Validate and store the exponent."""
        if beta <= 0:
            raise errors.InvalidArgumentError(
                f"beta must be positive (got {beta})"
            )
        self.__beta = beta
        RadialSymmetricKernel.__init__(self, dim, shape_parameter)

    @property
    def beta(self):
        r"""Exponent :math:`\beta`."""
        return self.__beta

    @property
    def order(self) -> int:
        return 0

    def _parameters(self) -> dict:
        return dict(beta=self.beta, shape_parameter=self.shape_parameter)

    def _profile(self, r, epsilon):
        return (1 + (epsilon * r) ** 2) ** (-_rational(self.beta))


class PolyharmonicSplineKernel(RadialSymmetricKernel):
    r"""Polyharmonic spline :math:`\phi(r) = r^k` for odd :math:`k` and
    :math:`\phi(r) = r^k\log(r)` for even :math:`k`.

    Conditionally positive definite of order :math:`\lceil k/2\rceil` for odd
    :math:`k` and :math:`k/2 + 1` for even :math:`k`. The kernel has no shape
    parameter.

    Parameters
    ----------
    dim : int
        Dimension of the points.
    k : int
        Positive integer exponent.
    """

    _name = "Polyharmonic spline"

    def __init__(self, dim, k):
        """Validate and store the exponent."""
        if not isinstance(k, numbers.Integral) or k < 1:
            raise errors.InvalidArgumentError(
                f"k must be a positive integer (got {k})"
            )
        self.__k = int(k)
        RadialSymmetricKernel.__init__(self, dim)

    @property
    def k(self) -> int:
        """Exponent :math:`k`."""
        return self.__k

    @property
    def order(self) -> int:
        if self.k % 2:
            return (self.k + 1) // 2
        return self.k // 2 + 1

    def _parameters(self) -> dict:
        return dict(k=self.k)

    def _profile(self, r, epsilon):
        if self.k % 2:
            return r**self.k
        return r**self.k * sympy.log(r)


class ThinPlateSplineKernel(PolyharmonicSplineKernel):
    r"""Thin plate spline :math:`\phi(r) = r^2\log(r)`, i.e., the
    polyharmonic spline with :math:`k = 2`.
    """

    _name = "Thin plate spline"

    def __init__(self, dim):
        PolyharmonicSplineKernel.__init__(self, dim, 2)

    def _parameters(self) -> dict:
        return dict()


class RieszKernel(RadialSymmetricKernel):
    r"""Riesz kernel :math:`\phi(r) = -(\varepsilon r)^\beta` with
    :math:`0 < \beta < 2`, conditionally positive definite of order 1.
    """

    _name = "Riesz"

    def __init__(self, dim, beta=1.0, shape_parameter=1.0):
        """Validate and store the exponent."""
        if not 0 < beta < 2:
            raise errors.InvalidArgumentError(
                f"beta must be in (0, 2) (got {beta})"
            )
        self.__beta = beta
        RadialSymmetricKernel.__init__(self, dim, shape_parameter)

    @property
    def beta(self):
        r"""Exponent :math:`\beta`."""
        return self.__beta

    @property
    def order(self) -> int:
        return 1

    def _parameters(self) -> dict:
        return dict(beta=self.beta, shape_parameter=self.shape_parameter)

    def _profile(self, r, epsilon):
        return -((epsilon * r) ** _rational(self.beta))


# Compactly supported kernels =================================================
def _truncated(expr, r, epsilon):
    """Restrict ``expr`` to the support ``epsilon * r <= 1``."""
    return sympy.Piecewise((expr, epsilon * r <= 1), (0, True))


class RadialCharacteristicKernel(RadialSymmetricKernel):
    r"""Radial characteristic (truncated power) kernel
    :math:`\phi(r) = (1 - \varepsilon r)_+^\beta`, positive definite in
    :math:`\RR^d` for :math:`\beta \geq (d + 1)/2`.
    """

    _name = "Radial characteristic"

    def __init__(self, dim, beta=2.0, shape_parameter=1.0):
        """Validate and store the exponent."""
        if beta < (dim + 1) / 2:
            raise errors.InvalidArgumentError(
                f"beta must be at least (dim + 1)/2 = {(dim + 1) / 2} "
                f"(got {beta})"
            )
        self.__beta = beta
        RadialSymmetricKernel.__init__(self, dim, shape_parameter)

    @property
    def beta(self):
        r"""Exponent :math:`\beta`."""
        return self.__beta

    @property
    def order(self) -> int:
        return 0

    def _parameters(self) -> dict:
        return dict(beta=self.beta, shape_parameter=self.shape_parameter)

    def _profile(self, r, epsilon):
        s = epsilon * r
        return _truncated((1 - s) ** _rational(self.beta), r, epsilon)
