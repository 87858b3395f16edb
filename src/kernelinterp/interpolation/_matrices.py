# interpolation/_matrices.py
"""Assembly and factorization of dense kernel and collocation matrices."""

__all__ = [
    "kernel_matrix",
    "polynomial_matrix",
    "operator_matrix",
    "interpolation_matrix",
    "pde_boundary_matrix",
    "FactorizedSystem",
]

import warnings
import numpy as np
import scipy.linalg as la

from .. import errors, utils
from ..nodes import merge


def _check_dimensions(kernel, *nodesets):
    for nodeset in nodesets:
        if nodeset.dim != kernel.dim:
            raise errors.DimensionMismatchError(
                f"kernel has dimension {kernel.dim}, "
                f"node set has dimension {nodeset.dim}"
            )


def _check_unisolvent(P, basis):
    """Raise a SingularSystemError if the nodes cannot determine the
    polynomial part, i.e., if a nonzero polynomial of the basis vanishes at
    all nodes.
    """
    q = P.shape[1]
    if q == 0:
        return
    rank = np.linalg.matrix_rank(P)
    if rank < q:
        raise errors.SingularSystemError(
            f"polynomial basis of order {basis.order} is not unisolvent "
            f"on the nodes (rank {rank} < {q})"
        )


# Matrix assembly =============================================================
def kernel_matrix(kernel, nodeset1, nodeset2=None) -> np.ndarray:
    """Matrix of kernel evaluations ``A[i, j] = K(nodeset1[i], nodeset2[j])``.

    Parameters
    ----------
    kernel : KernelTemplate
        Kernel.
    nodeset1 : NodeSet
        Nodes for the rows.
    nodeset2 : NodeSet or None
        Nodes for the columns. Defaults to ``nodeset1``.

    Returns
    -------
    A : (n1, n2) ndarray
    """
    if nodeset2 is None:
        nodeset2 = nodeset1
    _check_dimensions(kernel, nodeset1, nodeset2)
    with utils.TimedBlock("kernel matrix assembly", verbose=False):
        X, Y = nodeset1.values, nodeset2.values
        return kernel._evaluate(X[:, np.newaxis, :], Y[np.newaxis, :, :])


def polynomial_matrix(nodeset, basis) -> np.ndarray:
    """Matrix of monomial evaluations ``P[i, j] = p_j(nodeset[i])``.

    Parameters
    ----------
    nodeset : NodeSet
        Nodes for the rows.
    basis : PolynomialBasis
        Monomials for the columns.

    Returns
    -------
    P : (n, q) ndarray
    """
    if nodeset.dim != basis.dim:
        raise errors.DimensionMismatchError(
            f"polynomial basis has dimension {basis.dim}, "
            f"node set has dimension {nodeset.dim}"
        )
    return basis.evaluate(nodeset.values)


def operator_matrix(operator, kernel, nodeset1, nodeset2=None) -> np.ndarray:
    r"""Matrix of a differential operator applied to the kernel,
    ``L[i, j] = (L K(., nodeset2[j]))(nodeset1[i])``.

    Parameters
    ----------
    operator : DifferentialOperatorTemplate
        Operator acting on the first argument of the kernel.
    kernel : KernelTemplate
        Kernel.
    nodeset1 : NodeSet
        Nodes for the rows (evaluation points).
    nodeset2 : NodeSet or None
        Nodes for the columns (centers). Defaults to ``nodeset1``.

    Returns
    -------
    L : (n1, n2) ndarray
        For vector-valued operators such as the gradient, the shape is
        ``(n1, n2, d)``.
    """
    if nodeset2 is None:
        nodeset2 = nodeset1
    _check_dimensions(kernel, nodeset1, nodeset2)
    with utils.TimedBlock("operator matrix assembly", verbose=False):
        X, Y = nodeset1.values, nodeset2.values
        return operator(kernel, X[:, np.newaxis, :], Y[np.newaxis, :, :])


def interpolation_matrix(nodeset, kernel, basis) -> np.ndarray:
    r"""Symmetric saddle point matrix of kernel interpolation,

    .. math::
        \begin{pmatrix} \A & \P \\ \P^\trp & \0 \end{pmatrix},
        \qquad a_{ij} = K(\x_i, \x_j), \qquad p_{ij} = p_j(\x_i).

    Parameters
    ----------
    nodeset : NodeSet
        Interpolation nodes.
    kernel : KernelTemplate
        Kernel.
    basis : PolynomialBasis
        Polynomial basis with ``q`` monomials (possibly empty).

    Returns
    -------
    M : (n + q, n + q) ndarray

    Raises
    ------
    kernelinterp.errors.SingularSystemError
        If the nodes do not determine the polynomial part, e.g., collinear
        nodes in two dimensions with a quadratic basis.
    """
    A = kernel_matrix(kernel, nodeset)
    P = polynomial_matrix(nodeset, basis)
    _check_unisolvent(P, basis)
    q = P.shape[1]
    return np.block([[A, P], [P.T, np.zeros((q, q))]])


def pde_boundary_matrix(
    equation, kernel, nodeset_inner, nodeset_boundary, basis
) -> np.ndarray:
    r"""Collocation matrix of a PDE with Dirichlet boundary conditions,

    .. math::
        \begin{pmatrix}
            \mathcal{L}\A_I & \mathcal{L}\P_I \\
            \A_B & \P_B \\
            \P^\trp & \0
        \end{pmatrix},

    where the centers are the inner nodes followed by the boundary nodes,
    the rows of :math:`\mathcal{L}\A_I` apply the operator of the equation
    to the kernel at the inner nodes, and the rows of :math:`\A_B` evaluate
    the kernel at the boundary nodes.

    Parameters
    ----------
    equation : EquationTemplate
        Equation providing the differential operator.
    kernel : KernelTemplate
        Kernel.
    nodeset_inner : NodeSet
        Collocation nodes in the interior of the domain.
    nodeset_boundary : NodeSet
        Nodes on the boundary of the domain.
    basis : PolynomialBasis
        Polynomial basis with ``q`` monomials (possibly empty).

    Returns
    -------
    M : (n + q, n + q) ndarray
        ``n = len(nodeset_inner) + len(nodeset_boundary)``.

    Raises
    ------
    kernelinterp.errors.SingularSystemError
        If the centers do not determine the polynomial part.
    """
    centers = merge(nodeset_inner, nodeset_boundary)
    operator = equation.operator
    LA_I = operator_matrix(operator, kernel, nodeset_inner, centers)
    LP_I = operator.apply_basis(basis, nodeset_inner.values)
    A_B = kernel_matrix(kernel, nodeset_boundary, centers)
    P_B = polynomial_matrix(nodeset_boundary, basis)
    P = polynomial_matrix(centers, basis)
    _check_unisolvent(P, basis)
    q = P.shape[1]
    return np.block(
        [
            [LA_I, LP_I.reshape((len(nodeset_inner), q))],
            [A_B, P_B],
            [P.T, np.zeros((q, q))],
        ]
    )


# Factorization ===============================================================
class FactorizedSystem:
    """LU factorization of a dense square system matrix.

    Parameters
    ----------
    matrix : (N, N) ndarray
        System matrix. A copy is stored and exposed read-only.

    Raises
    ------
    kernelinterp.errors.SingularSystemError
        If the matrix has non-finite entries, is exactly singular, or its
        estimated reciprocal condition number is below machine precision.
    """

    def __init__(self, matrix):
        """Factorize the matrix."""
        matrix = np.array(matrix, dtype=float)
        if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
            raise errors.DimensionMismatchError(
                f"system matrix must be square (got shape {matrix.shape})"
            )
        if not np.all(np.isfinite(matrix)):
            raise errors.SingularSystemError(
                "system matrix contains non-finite entries"
            )
        with utils.TimedBlock("LU factorization", verbose=False):
            with warnings.catch_warnings():
                warnings.simplefilter("error", la.LinAlgWarning)
                try:
                    self.__lu = la.lu_factor(matrix, check_finite=False)
                except (la.LinAlgWarning, la.LinAlgError) as ex:
                    raise errors.SingularSystemError(
                        "system matrix is singular "
                        "(degenerate nodes for this kernel and order?)"
                    ) from ex
            self.__rcond = 1.0
            if matrix.size:
                anorm = np.linalg.norm(matrix, 1)
                self.__rcond, _ = la.lapack.dgecon(
                    self.__lu[0], anorm, norm="1"
                )
        if self.__rcond < np.finfo(float).eps:
            raise errors.SingularSystemError(
                "system matrix is numerically singular "
                f"(reciprocal condition number {self.__rcond:.2e})"
            )
        matrix.flags.writeable = False
        self.__matrix = matrix

    @property
    def matrix(self) -> np.ndarray:
        """The (read-only) system matrix."""
        return self.__matrix

    @property
    def rcond(self) -> float:
        """Estimate of the reciprocal 1-norm condition number."""
        return float(self.__rcond)

    @property
    def shape(self) -> tuple:
        """Shape of the system matrix."""
        return self.__matrix.shape

    def __str__(self) -> str:
        """String representation: size of the system."""
        return f"LU-factorized system of size {self.shape[0]}"

    def __repr__(self) -> str:
        """Unique ID + string representation."""
        return utils.str2repr(self)

    def solve(self, rhs) -> np.ndarray:
        """Solve the linear system for one or several right-hand sides.

        Parameters
        ----------
        rhs : (N,) or (N, k) ndarray
            Right-hand side(s).

        Returns
        -------
        solution : (N,) or (N, k) ndarray
        """
        rhs = np.asarray(rhs, dtype=float)
        if rhs.shape[0] != self.shape[0]:
            raise errors.DimensionMismatchError(
                f"right-hand side has length {rhs.shape[0]}, "
                f"system has size {self.shape[0]}"
            )
        solution = la.lu_solve(self.__lu, rhs, check_finite=False)
        if not np.all(np.isfinite(solution)):
            raise errors.SingularSystemError(
                "linear solve produced non-finite values"
            )
        return solution

    def cond(self) -> float:
        """2-norm condition number of the system matrix."""
        return float(np.linalg.cond(self.__matrix))
