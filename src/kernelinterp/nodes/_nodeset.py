# nodes/_nodeset.py
"""Sets of interpolation nodes with a cached separation distance."""

__all__ = [
    "NodeSet",
    "empty_nodeset",
    "merge",
    "separation_distance",
    "distance_matrix",
]

import numpy as np
import scipy.spatial as spatial
import scipy.spatial.distance as spdistance

from .. import errors, utils


def separation_distance(points) -> float:
    r"""Half of the minimum distance between two different nodes,

    .. math::
        q_X = \frac{1}{2}\min_{i \neq j}\|\x_i - \x_j\|_2.

    Parameters
    ----------
    points : (n, d) ndarray or NodeSet
        Coordinates of the nodes, one node per row.

    Returns
    -------
    q : float
        Separation distance. Exact duplicates give ``0``; fewer than two
        nodes give ``inf``.
    """
    if isinstance(points, NodeSet):
        return points.separation_distance
    points = np.asarray(points, dtype=float)
    n = points.shape[0]
    if n < 2:
        return np.inf
    if n <= NodeSet.bruteforce_threshold:
        return 0.5 * float(np.min(spdistance.pdist(points)))
    # Nearest neighbor of each node other than itself.
    distances, _ = spatial.KDTree(points).query(points, k=2)
    return 0.5 * float(np.min(distances[:, 1]))


def _as_point_array(x, dim: int):
    """Interpret ``x`` as an array of points of dimension ``dim``.

    Scalars and arrays whose last axis is not of length ``dim`` are accepted
    only if ``dim = 1`` (each entry is then a point).

    Returns
    -------
    points : (..., dim) ndarray
    """
    if isinstance(x, NodeSet):
        if x.dim != dim:
            raise errors.DimensionMismatchError(
                f"points have dimension {x.dim}, expected {dim}"
            )
        return x.values
    x = np.asarray(x, dtype=float)
    if x.ndim == 0 or x.shape[-1] != dim:
        if dim != 1:
            raise errors.DimensionMismatchError(
                f"points have dimension "
                f"{x.shape[-1] if x.ndim else 1}, expected {dim}"
            )
        x = x[..., np.newaxis]
    return x


class NodeSet:
    r"""Ordered set of interpolation nodes :math:`X = \{\x_1,\ldots,\x_n\}`
    of equal dimension.

    The separation distance :math:`q_X` is cached and recomputed by every
    operation that may change it. The node coordinates are never exposed for
    writing: item access returns copies and :attr:`values` is a read-only
    view.

    Parameters
    ----------
    nodes : (n, d) ndarray, sequence of points, sequence of scalars, NodeSet
        Coordinates of the nodes. A one-dimensional sequence of scalars is
        interpreted as ``n`` one-dimensional nodes.

    Examples
    --------
    >>> ns = NodeSet([[0.0, 0.0], [1.0, 0.0], [0.0, 0.5]])
    >>> ns.separation_distance
    0.25
    >>> ns.append([0.0, 0.1])
    >>> ns.separation_distance
    0.05
    """

    bruteforce_threshold = 2000  # Above this size, use a KD-tree.

    def __init__(self, nodes):
        """Validate and store the nodes."""
        if isinstance(nodes, NodeSet):
            data = nodes.values.copy()
        else:
            if len(nodes) == 0:
                raise errors.DimensionMismatchError(
                    "cannot infer the dimension of an empty set of nodes"
                )
            if all(np.ndim(node) == 0 for node in nodes):
                data = np.array(nodes, dtype=float).reshape((-1, 1))
            else:
                lengths = {np.size(node) for node in nodes}
                if len(lengths) != 1:
                    raise errors.DimensionMismatchError(
                        "all nodes must have the same dimension "
                        f"(got dimensions {sorted(lengths)})"
                    )
                data = np.array(
                    [np.ravel(node) for node in nodes], dtype=float
                )
            if data.shape[1] == 0:
                raise errors.DimensionMismatchError(
                    "nodes must have at least one coordinate"
                )
        self.__nodes = data
        self._update_separation_distance()

    @classmethod
    def _from_array(cls, data: np.ndarray):
        """Wrap an (n, d) array without copying or validating it."""
        nodeset = cls.__new__(cls)
        nodeset.__nodes = data
        nodeset._update_separation_distance()
        return nodeset

    def _update_separation_distance(self):
        """Recompute the cached separation distance."""
        self.__q = separation_distance(self.__nodes)

    def _check_point(self, point) -> np.ndarray:
        """Return ``point`` as a (d,) array or raise an error."""
        point = np.asarray(point, dtype=float)
        if point.ndim == 0:
            point = point.reshape(1)
        if point.shape != (self.dim,):
            raise errors.DimensionMismatchError(
                f"point has shape {point.shape}, "
                f"expected ({self.dim},) for node set of dimension {self.dim}"
            )
        return point

    # Properties --------------------------------------------------------------
    @property
    def dim(self) -> int:
        """Dimension of each node."""
        return self.__nodes.shape[1]

    @property
    def shape(self) -> tuple:
        """Number of nodes and dimension, ``(n, d)``."""
        return self.__nodes.shape

    @property
    def separation_distance(self) -> float:
        r"""Separation distance
        :math:`q_X = \frac{1}{2}\min_{i \neq j}\|\x_i - \x_j\|_2`."""
        return self.__q

    @property
    def values(self) -> np.ndarray:
        """Read-only (n, d) view of the node coordinates."""
        view = self.__nodes.view()
        view.flags.writeable = False
        return view

    def values_along_dim(self, i: int) -> np.ndarray:
        """Return the ``i``-th coordinate of every node as an (n,) array.

        Parameters
        ----------
        i : int
            Coordinate index, ``0 <= i < dim``.
        """
        if not 0 <= i < self.dim:
            raise errors.DimensionMismatchError(
                f"cannot extract coordinate {i} "
                f"from node set of dimension {self.dim}"
            )
        return self.__nodes[:, i].copy()

    # Sequence behavior -------------------------------------------------------
    def __len__(self) -> int:
        return self.__nodes.shape[0]

    def __iter__(self):
        for node in self.__nodes:
            yield node.copy()

    def __getitem__(self, key):
        """Copy of a single node, or a new NodeSet for slices / index arrays.
        """
        if isinstance(key, (int, np.integer)):
            return self.__nodes[key].copy()
        return NodeSet._from_array(
            self.__nodes[key].reshape((-1, self.dim)).copy()
        )

    def __setitem__(self, i: int, point):
        self.__nodes[i] = self._check_point(point)
        self._update_separation_distance()

    def __delitem__(self, key):
        self.delete(key)

    def __contains__(self, point) -> bool:
        point = self._check_point(point)
        return bool(np.any(np.all(self.__nodes == point, axis=1)))

    def __eq__(self, other) -> bool:
        if not isinstance(other, NodeSet):
            return NotImplemented
        return self.shape == other.shape and np.array_equal(
            self.__nodes, other.values
        )

    def __str__(self) -> str:
        """String representation: dimension, separation distance, size."""
        out = [
            f"NodeSet of dimension {self.dim} with separation distance "
            f"q = {self.separation_distance} and {len(self)} nodes"
        ]
        maxnodes = 20
        for node in self.__nodes[:maxnodes]:
            out.append(f"  {node}")
        if len(self) > maxnodes:
            out.append("  ...")
        return "\n".join(out)

    def __repr__(self) -> str:
        """Unique ID + string representation."""
        return utils.str2repr(self)

    def copy(self):
        """Make a copy of the node set."""
        return NodeSet(self)

    # Mutation ----------------------------------------------------------------
    def append(self, point) -> None:
        """Add a node at the end of the set."""
        point = self._check_point(point)
        self.__nodes = np.vstack([self.__nodes, point])
        self._update_separation_distance()

    def pop(self, index: int = -1) -> np.ndarray:
        """Remove and return the node at position ``index`` (default last).
        """
        if len(self) == 0:
            raise IndexError("pop from empty NodeSet")
        point = self.__nodes[index].copy()
        self.__nodes = np.delete(self.__nodes, index, axis=0)
        self._update_separation_distance()
        return point

    def delete(self, indices) -> None:
        """Remove the node(s) at the given position(s).

        Parameters
        ----------
        indices : int, slice, or sequence of ints
            Positions of the nodes to remove.
        """
        self.__nodes = np.delete(self.__nodes, indices, axis=0)
        self._update_separation_distance()

    def extend(self, *others) -> None:
        """Append the nodes of other node sets in place. The separation
        distance is recomputed once.
        """
        for other in others:
            if other.dim != self.dim:
                raise errors.DimensionMismatchError(
                    f"cannot merge node set of dimension {other.dim} "
                    f"into node set of dimension {self.dim}"
                )
        self.__nodes = np.vstack(
            [self.__nodes] + [other.values for other in others]
        )
        self._update_separation_distance()

    # Set operations ----------------------------------------------------------
    def unique(self):
        """Return a new node set without exact duplicates, keeping the first
        occurrence of every node in the original order.
        """
        _, first = np.unique(self.__nodes, axis=0, return_index=True)
        return NodeSet._from_array(self.__nodes[np.sort(first)])

    def difference(self, other, tol: float = 0.0):
        """Return a new node set with the nodes of ``self`` that do not
        coincide with any node of ``other``.

        Parameters
        ----------
        other : NodeSet
            Nodes to remove.
        tol : float
            Two nodes coincide if their distance is at most ``tol``.
            The default ``0`` means exact equality.
        """
        if other.dim != self.dim:
            raise errors.DimensionMismatchError(
                f"cannot compare node sets of dimension {self.dim} "
                f"and {other.dim}"
            )
        if len(other) == 0 or len(self) == 0:
            return NodeSet._from_array(self.__nodes.copy())
        distances, _ = spatial.KDTree(other.values).query(self.__nodes, k=1)
        keep = distances > tol
        return NodeSet._from_array(self.__nodes[keep])


def empty_nodeset(dim: int) -> NodeSet:
    """Create a node set of dimension ``dim`` without any nodes, e.g., to be
    filled with :meth:`NodeSet.append()`.
    """
    if dim < 1:
        raise errors.InvalidArgumentError(
            f"dimension must be positive (got {dim})"
        )
    return NodeSet._from_array(np.empty((0, dim)))


def merge(*nodesets) -> NodeSet:
    """Concatenate node sets of the same dimension into a new node set.

    Parameters
    ----------
    nodesets : NodeSet
        At least one node set. All must have the same dimension.

    Returns
    -------
    merged : NodeSet
        Nodes of all inputs, in order.
    """
    if not nodesets:
        raise errors.InvalidArgumentError("at least one node set required")
    merged = nodesets[0].copy()
    merged.extend(*nodesets[1:])
    return merged


def distance_matrix(nodeset1, nodeset2=None) -> np.ndarray:
    """Matrix of pairwise Euclidean distances between the nodes of two node
    sets.

    Parameters
    ----------
    nodeset1 : NodeSet
        Rows of the matrix.
    nodeset2 : NodeSet or None
        Columns of the matrix. Defaults to ``nodeset1``.

    Returns
    -------
    D : (n1, n2) ndarray
        ``D[i, j] = ||nodeset1[i] - nodeset2[j]||``.
    """
    if nodeset2 is None:
        nodeset2 = nodeset1
    if nodeset1.dim != nodeset2.dim:
        raise errors.DimensionMismatchError(
            f"node sets of dimension {nodeset1.dim} and {nodeset2.dim} "
            "not aligned"
        )
    return spdistance.cdist(nodeset1.values, nodeset2.values)
