# equations/_equations.py
"""Stationary and time-dependent linear PDEs written as
:math:`\\mathcal{L}u = f` or :math:`u_t + \\mathcal{L}u = f`.
"""

__all__ = [
    "EquationTemplate",
    "PoissonEquation",
    "EllipticEquation",
    "AdvectionEquation",
    "HeatEquation",
    "AdvectionDiffusionEquation",
]

import abc
import numpy as np

from .. import errors, utils
from ..nodes import NodeSet
from ..operators import EllipticOperator


class EquationTemplate(abc.ABC):
    r"""Template for linear PDEs with a differential operator
    :math:`\mathcal{L}` and a forcing term :math:`f`.

    Stationary equations read :math:`\mathcal{L}u = f(\x)`; time-dependent
    equations read :math:`u_t + \mathcal{L}u = f(\x, t)`.

    Parameters
    ----------
    f : callable
        Forcing term, called with one point (``f(x)``) for stationary
        equations and with one point and the time (``f(x, t)``) for
        time-dependent equations.
    """

    time_dependent = False

    def __init__(self, f):
        """Store the forcing term."""
        if not callable(f):
            raise TypeError("forcing term f must be callable")
        self.__f = f

    @property
    def f(self):
        """Forcing term."""
        return self.__f

    @property
    @abc.abstractmethod
    def operator(self) -> EllipticOperator:
        r"""Differential operator :math:`\mathcal{L}`."""
        raise NotImplementedError  # pragma: no cover

    def rhs(self, nodeset, t=None) -> np.ndarray:
        """Evaluate the forcing term at every node.

        Parameters
        ----------
        nodeset : NodeSet or (n, d) ndarray
            Nodes.
        t : float or None
            Time, required for time-dependent equations and ignored
            otherwise.

        Returns
        -------
        values : (n,) ndarray
        """
        if isinstance(nodeset, NodeSet):
            points = nodeset.values
        else:
            points = np.atleast_2d(np.asarray(nodeset, dtype=float))
        if self.time_dependent:
            if t is None:
                raise errors.InvalidArgumentError(
                    "time t required for time-dependent equation"
                )
            return np.array([self.f(x, t) for x in points], dtype=float)
        return np.array([self.f(x) for x in points], dtype=float)

    def __str__(self) -> str:
        """String representation: class name and operator."""
        return f"{self.__class__.__name__} with {self.operator}"

    def __repr__(self) -> str:
        """Unique ID + string representation."""
        return utils.str2repr(self)


# Stationary equations ========================================================
class PoissonEquation(EquationTemplate):
    r"""Poisson equation :math:`-\Delta u = f(\x)`."""

    @property
    def operator(self) -> EllipticOperator:
        return EllipticOperator(1)


class EllipticEquation(EquationTemplate):
    r"""General elliptic equation

    .. math::
        -\sum_{i,j=1}^d a_{ij}\partial_{ij}u + \sum_{i=1}^d b_i\partial_i u
        + cu = f(\x).

    See :class:`kernelinterp.operators.EllipticOperator` for the accepted
    coefficient types.
    """

    def __init__(self, A, b, c, f):
        """Store the operator and the forcing term."""
        EquationTemplate.__init__(self, f)
        self.__operator = EllipticOperator(A, b, c)

    @property
    def operator(self) -> EllipticOperator:
        return self.__operator


# Time-dependent equations ====================================================
class AdvectionEquation(EquationTemplate):
    r"""Advection equation :math:`u_t + \a\cdot\nabla u = f(\x, t)`.

    Parameters
    ----------
    advection_velocity : (d,) ndarray or callable
        Velocity :math:`\a`, constant or a function of one point.
    f : callable
        Forcing term ``f(x, t)``.
    """

    time_dependent = True

    def __init__(self, advection_velocity, f):
        """Store the operator and the forcing term."""
        EquationTemplate.__init__(self, f)
        self.__operator = EllipticOperator(0, advection_velocity)

    @property
    def advection_velocity(self):
        """Advection velocity."""
        return self.__operator.b

    @property
    def operator(self) -> EllipticOperator:
        return self.__operator


class HeatEquation(EquationTemplate):
    r"""Heat equation :math:`u_t - \kappa\Delta u = f(\x, t)`.

    Parameters
    ----------
    diffusivity : float
        Positive diffusivity :math:`\kappa`.
    f : callable
        Forcing term ``f(x, t)``.
    """

    time_dependent = True

    def __init__(self, diffusivity, f):
        """Store the operator and the forcing term."""
        if not diffusivity > 0:
            raise errors.InvalidArgumentError(
                f"diffusivity must be positive (got {diffusivity})"
            )
        EquationTemplate.__init__(self, f)
        self.__operator = EllipticOperator(float(diffusivity))

    @property
    def diffusivity(self) -> float:
        r"""Diffusivity :math:`\kappa`."""
        return self.__operator.A

    @property
    def operator(self) -> EllipticOperator:
        return self.__operator


class AdvectionDiffusionEquation(EquationTemplate):
    r"""Advection-diffusion equation
    :math:`u_t - \kappa\Delta u + \a\cdot\nabla u = f(\x, t)`.

    Parameters
    ----------
    diffusivity : float
        Positive diffusivity :math:`\kappa`.
    advection_velocity : (d,) ndarray or callable
        Velocity :math:`\a`.
    f : callable
        Forcing term ``f(x, t)``.
    """

    time_dependent = True

    def __init__(self, diffusivity, advection_velocity, f):
        """Store the operator and the forcing term."""
        if not diffusivity > 0:
            raise errors.InvalidArgumentError(
                f"diffusivity must be positive (got {diffusivity})"
            )
        EquationTemplate.__init__(self, f)
        self.__operator = EllipticOperator(
            float(diffusivity), advection_velocity
        )

    @property
    def diffusivity(self) -> float:
        r"""Diffusivity :math:`\kappa`."""
        return self.__operator.A

    @property
    def advection_velocity(self):
        """Advection velocity."""
        return self.__operator.b

    @property
    def operator(self) -> EllipticOperator:
        return self.__operator
