# nodes/_generators.py
"""Factories for node sets in hypercubes and hyperspheres."""

__all__ = [
    "random_in_hypercube",
    "random_on_hypercube_boundary",
    "grid_in_hypercube",
    "grid_on_hypercube_boundary",
    "random_in_hypersphere",
    "random_on_hypersphere_boundary",
]

import warnings
import numpy as np

from .. import errors
from ._nodeset import NodeSet


# Input validation ============================================================
def _check_count(n: int, dim: int, minimum: int = 1):
    """Validate the number of nodes and the dimension."""
    if dim < 1:
        raise errors.InvalidArgumentError(
            f"dimension must be positive (got {dim})"
        )
    if n < minimum:
        raise errors.InvalidArgumentError(
            f"number of nodes must be at least {minimum} (got {n})"
        )


def _bounds(x_min, x_max, dim: int):
    """Broadcast the hypercube bounds to (dim,) arrays."""
    bounds = []
    for label, value in (("x_min", x_min), ("x_max", x_max)):
        value = np.asarray(value, dtype=float)
        if value.ndim == 0:
            value = np.full(dim, float(value))
        if value.shape != (dim,):
            raise errors.DimensionMismatchError(
                f"{label} must be a scalar or have length {dim} "
                f"(got shape {value.shape})"
            )
        bounds.append(value)
    return bounds


def _sphere(r, center, dim: int):
    """Validate the hypersphere radius and center."""
    if r <= 0:
        raise errors.InvalidArgumentError(f"radius must be positive (got {r})")
    center = np.zeros(dim) if center is None else np.asarray(center, float)
    if center.shape != (dim,):
        raise errors.DimensionMismatchError(
            f"center must have length {dim} (got shape {center.shape})"
        )
    return center


def _warn_two_points(shape: str):
    warnings.warn(
        f"for one dimension the boundary of the {shape} "
        "consists only of 2 points",
        errors.KernelInterpolationWarning,
    )


# Hypercubes ==================================================================
def random_in_hypercube(n, dim, x_min=0.0, x_max=1.0, rng=None) -> NodeSet:
    """Create a node set with ``n`` uniformly distributed random nodes inside
    the hypercube ``[x_min, x_max]``.

    Parameters
    ----------
    n : int
        Number of nodes.
    dim : int
        Dimension of the nodes.
    x_min, x_max : float or (dim,) array_like
        Lower and upper bounds of the hypercube. Scalars are applied in
        every dimension.
    rng : int, numpy.random.Generator, or None
        Seed or random number generator.
    """
    _check_count(n, dim)
    x_min, x_max = _bounds(x_min, x_max, dim)
    rng = np.random.default_rng(rng)
    return NodeSet._from_array(x_min + (x_max - x_min) * rng.random((n, dim)))


def random_on_hypercube_boundary(
    n, dim, x_min=0.0, x_max=1.0, rng=None
) -> NodeSet:
    """Create a node set with ``n`` random nodes on the boundary of the
    hypercube ``[x_min, x_max]``.

    Random nodes are drawn inside the hypercube; then one random coordinate
    of each node is moved to the lower or the upper bound.
    In one dimension, the boundary consists of the two end points only; they
    are returned (with a warning) regardless of ``n``.

    Parameters
    ----------
    n : int
        Number of nodes.
    dim : int
        Dimension of the nodes.
    x_min, x_max : float or (dim,) array_like
        Lower and upper bounds of the hypercube.
    rng : int, numpy.random.Generator, or None
        Seed or random number generator.
    """
    _check_count(n, dim)
    x_min, x_max = _bounds(x_min, x_max, dim)
    if dim == 1:
        _warn_two_points("hypercube")
        return NodeSet._from_array(np.array([x_min, x_max]))

    rng = np.random.default_rng(rng)
    nodes = x_min + (x_max - x_min) * rng.random((n, dim))
    axes = rng.integers(dim, size=n)
    upper = rng.integers(2, size=n).astype(bool)
    rows = np.arange(n)
    nodes[rows, axes] = np.where(upper, x_max[axes], x_min[axes])
    return NodeSet._from_array(nodes)


def _grid(n, x_min, x_max) -> np.ndarray:
    """Tensor-product grid with ``n`` nodes per axis, shape (n**d, d)."""
    axes = [np.linspace(lo, hi, n) for lo, hi in zip(x_min, x_max)]
    mesh = np.meshgrid(*axes, indexing="ij")
    return np.stack(mesh, axis=-1).reshape((-1, len(axes)))


def grid_in_hypercube(n, dim, x_min=0.0, x_max=1.0) -> NodeSet:
    """Create a node set of ``n**dim`` equispaced nodes, ``n`` per axis,
    filling the hypercube ``[x_min, x_max]`` (bounds included).

    Parameters
    ----------
    n : int
        Number of nodes per axis, at least 2.
    dim : int
        Dimension of the nodes.
    x_min, x_max : float or (dim,) array_like
        Lower and upper bounds of the hypercube.
    """
    _check_count(n, dim, minimum=2)
    x_min, x_max = _bounds(x_min, x_max, dim)
    return NodeSet._from_array(_grid(n, x_min, x_max))


def _grid_boundary(n, x_min, x_max) -> np.ndarray:
    """Equispaced nodes on the boundary of a hypercube, built facet-wise.

    The two facets orthogonal to the first axis are full (d-1)-dimensional
    grids; every interior slab along the first axis carries the boundary of
    the (d-1)-dimensional hypercube. The base case d = 1 is the two end
    points. The number of nodes is 2 n^(d-1) + (n-2) count(n, d-1).
    """
    dim = len(x_min)
    if dim == 1:
        return np.array([x_min, x_max])

    def slab(x0, others):
        return np.column_stack([np.full(len(others), x0), others])

    face = _grid(n, x_min[1:], x_max[1:])
    ring = _grid_boundary(n, x_min[1:], x_max[1:])
    x0s = np.linspace(x_min[0], x_max[0], n)
    blocks = [slab(x0s[0], face)]
    blocks.extend(slab(x0, ring) for x0 in x0s[1:-1])
    blocks.append(slab(x0s[-1], face))
    return np.vstack(blocks)


def grid_on_hypercube_boundary(n, dim, x_min=0.0, x_max=1.0) -> NodeSet:
    """Create a node set of equispaced nodes on the boundary of the
    hypercube ``[x_min, x_max]``, i.e., the nodes of
    :func:`grid_in_hypercube` that lie on the boundary.

    In one dimension, the two end points are returned (with a warning)
    regardless of ``n``.

    Parameters
    ----------
    n : int
        Number of nodes per axis, at least 2.
    dim : int
        Dimension of the nodes.
    x_min, x_max : float or (dim,) array_like
        Lower and upper bounds of the hypercube.
    """
    _check_count(n, dim, minimum=2)
    x_min, x_max = _bounds(x_min, x_max, dim)
    if dim == 1:
        _warn_two_points("hypercube")
    return NodeSet._from_array(_grid_boundary(n, x_min, x_max))


# Hyperspheres ================================================================
def random_in_hypersphere(n, dim, r=1.0, center=None, rng=None) -> NodeSet:
    """Create a node set with ``n`` uniformly distributed random nodes inside
    the ball of radius ``r`` around ``center``.

    Parameters
    ----------
    n : int
        Number of nodes.
    dim : int
        Dimension of the nodes.
    r : float
        Radius of the hypersphere.
    center : (dim,) array_like or None
        Center of the hypersphere (default the origin).
    rng : int, numpy.random.Generator, or None
        Seed or random number generator.
    """
    _check_count(n, dim)
    center = _sphere(r, center, dim)
    rng = np.random.default_rng(rng)
    directions = rng.standard_normal((n, dim))
    directions /= np.linalg.norm(directions, axis=1, keepdims=True)
    radii = r * rng.random((n, 1)) ** (1 / dim)
    return NodeSet._from_array(center + radii * directions)


def random_on_hypersphere_boundary(
    n, dim, r=1.0, center=None, rng=None
) -> NodeSet:
    """Create a node set with ``n`` uniformly distributed random nodes on the
    sphere of radius ``r`` around ``center``.

    In one dimension, the two points ``center - r`` and ``center + r`` are
    returned (with a warning) regardless of ``n``.

    Parameters
    ----------
    n : int
        Number of nodes.
    dim : int
        Dimension of the nodes.
    r : float
        Radius of the hypersphere.
    center : (dim,) array_like or None
        Center of the hypersphere (default the origin).
    rng : int, numpy.random.Generator, or None
        Seed or random number generator.
    """
    _check_count(n, dim)
    center = _sphere(r, center, dim)
    if dim == 1:
        _warn_two_points("hypersphere")
        return NodeSet._from_array(np.array([center - r, center + r]))

    rng = np.random.default_rng(rng)
    directions = rng.standard_normal((n, dim))
    directions /= np.linalg.norm(directions, axis=1, keepdims=True)
    return NodeSet._from_array(center + r * directions)
