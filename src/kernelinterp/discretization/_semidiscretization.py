# discretization/_semidiscretization.py
"""Method of lines for time-dependent PDEs via kernel collocation."""

__all__ = [
    "Semidiscretization",
    "semidiscretize",
]

import warnings
import numpy as np
import scipy.integrate as spintegrate

from .. import errors, utils
from ..interpolation import (
    Interpolation,
    FactorizedSystem,
    interpolation_matrix,
    operator_matrix,
)
from ._spatial import SpatialDiscretization


class Semidiscretization:
    r"""Semidiscretization of :math:`u_t + \mathcal{L}u = f(\x, t)` with
    Dirichlet boundary conditions :math:`u = g(\x, t)`.

    The state of the resulting system of ordinary differential equations is
    the vector :math:`\u` of nodal values at the inner nodes. At time
    :math:`t`, the coefficients of the interpolant are

    .. math::
        \c(\u, t) = \A^{-1}
        \begin{pmatrix} \u \\ g(X_B, t) \\ \0 \end{pmatrix},

    where :math:`\A` is the (factorized) interpolation matrix of all
    centers, and the right-hand side of the system is

    .. math::
        \frac{\mathrm{d}\u}{\mathrm{d}t}
        = f(X_I, t) - \mathcal{L}_I\,\c(\u, t),

    with :math:`\mathcal{L}_I` the operator applied to the kernel translates
    and the monomials at the inner nodes.

    Parameters
    ----------
    spatial_discretization : SpatialDiscretization
        Discretization in space.
    initial_condition : callable
        Initial values ``u0(x)`` for one point.
    """

    def __init__(self, spatial_discretization, initial_condition):
        """Assemble and factorize the matrices of the system."""
        if not isinstance(spatial_discretization, SpatialDiscretization):
            raise TypeError(
                "spatial_discretization must be a SpatialDiscretization"
            )
        if not callable(initial_condition):
            raise TypeError("initial_condition must be callable")
        sd = spatial_discretization
        self.__sd = sd
        self.__u0 = initial_condition

        inner, centers = sd.nodeset_inner, sd.centers
        kernel, basis = sd.kernel, sd.polynomial_basis
        operator = sd.equation.operator
        self.__ninner = len(inner)
        self.__inner = inner
        self.__system = FactorizedSystem(
            interpolation_matrix(centers, kernel, basis)
        )
        self.__operator_rows = np.hstack(
            [
                operator_matrix(operator, kernel, inner, centers),
                operator.apply_basis(basis, inner.values).reshape(
                    (len(inner), len(basis))
                ),
            ]
        )
        self.__jacobian = None

    # Properties --------------------------------------------------------------
    @property
    def spatial_discretization(self) -> SpatialDiscretization:
        """Discretization in space."""
        return self.__sd

    @property
    def initial_condition(self):
        """Initial values."""
        return self.__u0

    @property
    def state_dimension(self) -> int:
        """Number of inner nodes, the size of the ODE state."""
        return self.__ninner

    @property
    def initial_state(self) -> np.ndarray:
        """Initial values at the inner nodes."""
        return np.array(
            [self.__u0(x) for x in self.__inner.values], dtype=float
        )

    @property
    def initial_coefficients(self) -> np.ndarray:
        """Coefficients of the interpolant of the initial condition at all
        centers.
        """
        centers = self.__sd.centers.values
        values = np.array([self.__u0(x) for x in centers], dtype=float)
        nzeros = self.__system.shape[0] - len(values)
        return self.__system.solve(np.concatenate([values, np.zeros(nzeros)]))

    def __str__(self) -> str:
        """String representation: size and spatial discretization."""
        return (
            f"Semidiscretization with {self.state_dimension} unknowns of\n"
            f"{self.__sd}"
        )

    def __repr__(self) -> str:
        """Unique ID + string representation."""
        return utils.str2repr(self)

    # Dynamics ----------------------------------------------------------------
    def _check_state(self, u) -> np.ndarray:
        u = np.asarray(u, dtype=float)
        if u.shape != (self.state_dimension,):
            raise errors.DimensionMismatchError(
                f"state has shape {u.shape}, "
                f"expected ({self.state_dimension},)"
            )
        return u

    def coefficients(self, u, t) -> np.ndarray:
        """Coefficients of the interpolant with values ``u`` at the inner
        nodes and the boundary values at time ``t``.
        """
        u = self._check_state(u)
        boundary = self.__sd.boundary_values(t)
        nzeros = self.__system.shape[0] - len(u) - len(boundary)
        return self.__system.solve(
            np.concatenate([u, boundary, np.zeros(nzeros)])
        )

    def interpolation(self, u, t) -> Interpolation:
        """Interpolant of the state ``u`` at time ``t``."""
        sd = self.__sd
        return Interpolation(
            sd.kernel,
            sd.centers,
            self.coefficients(u, t),
            self.__system,
            sd.polynomial_basis,
        )

    def rhs(self, t, u) -> np.ndarray:
        """Right-hand side of the ODE system, ``du/dt = rhs(t, u)``."""
        forcing = self.__sd.equation.rhs(self.__inner, t)
        return forcing - self.__operator_rows @ self.coefficients(u, t)

    def jacobian(self, t, u) -> np.ndarray:
        """Constant Jacobian ``d rhs / du`` of the ODE system."""
        if self.__jacobian is None:
            selector = np.eye(self.__system.shape[0], self.state_dimension)
            self.__jacobian = -self.__operator_rows @ self.__system.solve(
                selector
            )
        return self.__jacobian

    def predict(self, t, **options) -> np.ndarray:
        """Integrate the system from the initial state.
        This method wraps :func:`scipy.integrate.solve_ivp()`.

        Parameters
        ----------
        t : (nt,) ndarray
            Time domain over which to integrate the system.
        options
            Arguments for :func:`scipy.integrate.solve_ivp()`, e.g.,
            ``method`` (``"RK45"`` by default; the Jacobian is passed for
            ``"BDF"``, ``"Radau"``, and ``"LSODA"``), ``rtol``, ``atol``.

        Returns
        -------
        states : (n_I, nt) ndarray
            Values at the inner nodes over the time domain ``t``.
            A more detailed report on the integration results is stored as
            the ``predict_result_`` attribute; use :meth:`interpolation()`
            to evaluate the solution elsewhere.
        """
        t = np.asarray(t, dtype=float)
        if t.ndim != 1:
            raise ValueError("time 't' must be one-dimensional")

        if "method" in options and options["method"] in (
            # These methods use the Jacobian.
            "BDF",
            "Radau",
            "LSODA",
        ):
            options["jac"] = self.jacobian

        out = spintegrate.solve_ivp(
            self.rhs,  # Integrate this function
            [t[0], t[-1]],  # over this time interval
            self.initial_state,  # from this initial condition
            t_eval=t,  # evaluated at these points
            **options,  # using these solver options.
        )

        # Warn if the integration failed.
        if not out.success:  # pragma: no cover
            warnings.warn(out.message, spintegrate.IntegrationWarning)

        self.predict_result_ = out
        return out.y


def semidiscretize(spatial_discretization, initial_condition, tspan) -> dict:
    """Set up the ODE system of a semidiscretized PDE for
    :func:`scipy.integrate.solve_ivp()`.

    Parameters
    ----------
    spatial_discretization : SpatialDiscretization
        Discretization in space.
    initial_condition : callable
        Initial values ``u0(x)``.
    tspan : (2,) array_like
        Initial and final time.

    Returns
    -------
    problem : dict
        Keyword arguments ``fun``, ``t_span``, ``y0``, and ``jac``, e.g.,
        ``scipy.integrate.solve_ivp(**problem, method="BDF")``.

    Examples
    --------
    >>> problem = semidiscretize(sd, u0, (0.0, 1.0))
    >>> sol = scipy.integrate.solve_ivp(**problem, method="Radau")
    """
    tspan = tuple(float(s) for s in tspan)
    if len(tspan) != 2:
        raise errors.InvalidArgumentError(
            f"tspan must contain the initial and final time (got {tspan})"
        )
    semi = Semidiscretization(spatial_discretization, initial_condition)
    return dict(
        fun=semi.rhs,
        t_span=tspan,
        y0=semi.initial_state,
        jac=semi.jacobian,
    )
