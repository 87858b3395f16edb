# kernels/_matern.py
"""Matérn kernels: general order via Bessel functions and closed forms."""

__all__ = [
    "MaternKernel",
    "Matern12Kernel",
    "Matern32Kernel",
    "Matern52Kernel",
    "Matern72Kernel",
]

import numpy as np
import sympy

from .. import errors
from ._radial import RadialSymmetricKernel, _rational


class MaternKernel(RadialSymmetricKernel):
    r"""Matérn kernel of order :math:`\nu > 0`,

    .. math::
        \phi(r) = \frac{2^{1 - \nu}}{\Gamma(\nu)}
        \left(\sqrt{2\nu}\,\varepsilon r\right)^\nu
        K_\nu\left(\sqrt{2\nu}\,\varepsilon r\right),

    where :math:`K_\nu` is the modified Bessel function of the second kind.
    The normalization is computed through the log-gamma function so that
    large orders do not overflow. The kernel is positive definite in every
    dimension and normalized to :math:`\phi(0) = 1`.

    For half-integer orders, the closed forms :class:`Matern12Kernel`,
    :class:`Matern32Kernel`, :class:`Matern52Kernel`, and
    :class:`Matern72Kernel` are cheaper to evaluate.

    Parameters
    ----------
    dim : int
        Dimension of the points.
    nu : float
        Positive order :math:`\nu`.
    shape_parameter : float
        Positive shape parameter :math:`\varepsilon`.
    """

    _name = "Matérn"

    def __init__(self, dim, nu=1.5, shape_parameter=1.0):
        """Validate and store the order."""
        if not nu > 0:
            raise errors.InvalidArgumentError(
                f"nu must be positive (got {nu})"
            )
        self.__nu = nu
        RadialSymmetricKernel.__init__(self, dim, shape_parameter)

    @property
    def nu(self):
        r"""Order :math:`\nu`."""
        return self.__nu

    @property
    def order(self) -> int:
        return 0

    def _parameters(self) -> dict:
        return dict(nu=self.nu, shape_parameter=self.shape_parameter)

    def _profile(self, r, epsilon):
        nu = _rational(self.nu)
        z = sympy.sqrt(2 * nu) * epsilon * r
        # Unevaluated, so integer orders do not expand to log((nu - 1)!).
        loggamma = sympy.loggamma(nu, evaluate=False)
        scale = sympy.exp((1 - nu) * sympy.log(2) - loggamma)
        return scale * z**nu * sympy.besselk(nu, z)

    def _value_at_zero(self, which: str) -> float:
        """Known limits at r = 0; z^nu K_nu(z) evaluates to nan there."""
        nu, epsilon = self.nu, self.shape_parameter
        if which == "phi":
            return 1.0
        if which == "dphi":
            if nu > 0.5:
                return 0.0
            return -epsilon if nu == 0.5 else -np.inf
        # g and d2phi share the limit -nu / (nu - 1) epsilon^2.
        if nu > 1:
            return -(epsilon**2) * nu / (nu - 1)
        return -np.inf


# Closed forms for half-integer orders ========================================
class Matern12Kernel(RadialSymmetricKernel):
    r"""Matérn kernel of order 1/2,
    :math:`\phi(r) = \exp(-\varepsilon r)`.
    """

    _name = "Matérn 1/2"

    @property
    def order(self) -> int:
        return 0

    def _profile(self, r, epsilon):
        return sympy.exp(-epsilon * r)


class Matern32Kernel(RadialSymmetricKernel):
    r"""Matérn kernel of order 3/2,
    :math:`\phi(r) = (1 + \sqrt{3}s)\exp(-\sqrt{3}s)`,
    :math:`s = \varepsilon r`.
    """

    _name = "Matérn 3/2"

    @property
    def order(self) -> int:
        return 0

    def _profile(self, r, epsilon):
        s = sympy.sqrt(3) * epsilon * r
        return (1 + s) * sympy.exp(-s)


class Matern52Kernel(RadialSymmetricKernel):
    r"""Matérn kernel of order 5/2,
    :math:`\phi(r) = (1 + \sqrt{5}s + \frac{5}{3}s^2)\exp(-\sqrt{5}s)`,
    :math:`s = \varepsilon r`.
    """

    _name = "Matérn 5/2"

    @property
    def order(self) -> int:
        return 0

    def _profile(self, r, epsilon):
        s = sympy.sqrt(5) * epsilon * r
        return (1 + s + s**2 / 3) * sympy.exp(-s)


class Matern72Kernel(RadialSymmetricKernel):
    r"""Matérn kernel of order 7/2,
    :math:`\phi(r) = (1 + \sqrt{7}s + \frac{14}{5}s^2
    + \frac{7\sqrt{7}}{15}s^3)\exp(-\sqrt{7}s)`,
    :math:`s = \varepsilon r`.
    """

    _name = "Matérn 7/2"

    @property
    def order(self) -> int:
        return 0

    def _profile(self, r, epsilon):
        s = sympy.sqrt(7) * epsilon * r
        return (1 + s + 2 * s**2 / 5 + s**3 / 15) * sympy.exp(-s)
