# discretization/_spatial.py
"""Spatial collocation of linear PDEs with Dirichlet boundary conditions."""

__all__ = [
    "SpatialDiscretization",
    "solve_stationary",
]

import numpy as np

from .. import errors, utils
from ..nodes import NodeSet, merge
from ..kernels import KernelTemplate, GaussKernel
from ..equations import EquationTemplate
from ..interpolation import (
    Interpolation,
    PolynomialBasis,
    FactorizedSystem,
    pde_boundary_matrix,
)


class SpatialDiscretization:
    r"""Kernel collocation of a PDE :math:`\mathcal{L}u = f` in a domain
    :math:`\Omega` with Dirichlet boundary conditions :math:`u = g` on
    :math:`\partial\Omega`.

    The trial space is spanned by the kernel translates centered at the
    inner nodes followed by the boundary nodes, plus the monomials of order
    ``kernel.order``. The PDE is collocated at the inner nodes and the
    boundary condition at the boundary nodes.

    Parameters
    ----------
    equation : EquationTemplate
        PDE providing the operator and the forcing term.
    nodeset_inner : NodeSet
        Collocation nodes in the interior of the domain.
    boundary_condition : callable
        Boundary values ``g(x)``, or ``g(x, t)`` for time-dependent
        equations.
    nodeset_boundary : NodeSet
        Nodes on the boundary of the domain.
    kernel : KernelTemplate or None
        Kernel of the trial space. Defaults to ``GaussKernel(dim)``.
    """

    def __init__(
        self,
        equation,
        nodeset_inner,
        boundary_condition,
        nodeset_boundary,
        kernel=None,
    ):
        """Validate and store the ingredients of the discretization."""
        if not isinstance(equation, EquationTemplate):
            raise TypeError("equation must be an EquationTemplate instance")
        if not callable(boundary_condition):
            raise TypeError("boundary_condition must be callable")
        for nodeset in (nodeset_inner, nodeset_boundary):
            if not isinstance(nodeset, NodeSet):
                raise TypeError("node sets must be NodeSet instances")
        if nodeset_inner.dim != nodeset_boundary.dim:
            raise errors.DimensionMismatchError(
                f"inner nodes have dimension {nodeset_inner.dim}, "
                f"boundary nodes have dimension {nodeset_boundary.dim}"
            )
        dim = nodeset_inner.dim
        if kernel is None:
            kernel = GaussKernel(dim)
        if not isinstance(kernel, KernelTemplate):
            raise TypeError("kernel must be a KernelTemplate instance")
        if kernel.dim != dim:
            raise errors.DimensionMismatchError(
                f"kernel has dimension {kernel.dim}, "
                f"node sets have dimension {dim}"
            )

        self.__equation = equation
        self.__inner = nodeset_inner.copy()
        self.__boundary = nodeset_boundary.copy()
        self.__g = boundary_condition
        self.__kernel = kernel
        self.__centers = merge(self.__inner, self.__boundary)
        self.__basis = PolynomialBasis(dim, kernel.order)

    # Properties --------------------------------------------------------------
    @property
    def equation(self) -> EquationTemplate:
        """PDE being discretized."""
        return self.__equation

    @property
    def nodeset_inner(self) -> NodeSet:
        """Collocation nodes in the interior (a copy)."""
        return self.__inner.copy()

    @property
    def nodeset_boundary(self) -> NodeSet:
        """Nodes on the boundary (a copy)."""
        return self.__boundary.copy()

    @property
    def centers(self) -> NodeSet:
        """All centers: inner nodes followed by boundary nodes (a copy)."""
        return self.__centers.copy()

    @property
    def boundary_condition(self):
        """Dirichlet boundary values."""
        return self.__g

    @property
    def kernel(self) -> KernelTemplate:
        """Kernel of the trial space."""
        return self.__kernel

    @property
    def polynomial_basis(self) -> PolynomialBasis:
        """Polynomial part of the trial space."""
        return self.__basis

    @property
    def dim(self) -> int:
        """Spatial dimension."""
        return self.__centers.dim

    def __str__(self) -> str:
        """String representation: equation, kernel, and node counts."""
        return "\n".join(
            [
                f"SpatialDiscretization of {self.equation}",
                f"  kernel: {self.kernel}",
                f"  {len(self.__inner)} inner nodes, "
                f"{len(self.__boundary)} boundary nodes, "
                f"polynomial order {self.__basis.order}",
            ]
        )

    def __repr__(self) -> str:
        """Unique ID + string representation."""
        return utils.str2repr(self)

    # Evaluation --------------------------------------------------------------
    def boundary_values(self, t=None) -> np.ndarray:
        """Evaluate the boundary condition at every boundary node.

        Parameters
        ----------
        t : float or None
            Time, required for time-dependent equations.

        Returns
        -------
        values : (n_B,) ndarray
        """
        points = self.__boundary.values
        if self.equation.time_dependent:
            if t is None:
                raise errors.InvalidArgumentError(
                    "time t required for time-dependent equation"
                )
            return np.array([self.__g(x, t) for x in points], dtype=float)
        return np.array([self.__g(x) for x in points], dtype=float)

    def system_matrix(self) -> np.ndarray:
        """Assemble the collocation matrix, see
        :func:`kernelinterp.interpolation.pde_boundary_matrix()`.
        """
        return pde_boundary_matrix(
            self.equation,
            self.kernel,
            self.__inner,
            self.__boundary,
            self.__basis,
        )

    def right_hand_side(self, t=None) -> np.ndarray:
        """Right-hand side ``[f(X_I); g(X_B); 0]`` of the collocation system.
        """
        return np.concatenate(
            [
                self.equation.rhs(self.__inner, t),
                self.boundary_values(t),
                np.zeros(len(self.__basis)),
            ]
        )


def solve_stationary(spatial_discretization) -> Interpolation:
    r"""Solve a stationary PDE by kernel collocation.

    Parameters
    ----------
    spatial_discretization : SpatialDiscretization
        Discretization of a stationary equation.

    Returns
    -------
    itp : kernelinterp.interpolation.Interpolation
        Approximate solution, with the centers of the discretization and the
        factorized collocation matrix.
    """
    sd = spatial_discretization
    if sd.equation.time_dependent:
        raise errors.InvalidArgumentError(
            "equation is time dependent, use Semidiscretization"
        )
    with utils.TimedBlock("stationary collocation solve", verbose=False):
        system = FactorizedSystem(sd.system_matrix())
        coefficients = system.solve(sd.right_hand_side())
    return Interpolation(
        sd.kernel, sd.centers, coefficients, system, sd.polynomial_basis
    )
