# visualization.py
"""Plots of kernels, node sets, and interpolants with matplotlib.

Plotting is not critical: dimensions a plot cannot show are logged as an
error and the functions return ``None`` instead of raising.
"""

__all__ = [
    "plot_kernel",
    "plot_nodeset",
    "plot_interpolation",
    "plot_values",
]

import logging
import numpy as np
import matplotlib.pyplot as plt

from . import errors
from .nodes import NodeSet


def _unsupported(what: str, maxdim: int, dim: int):
    """Log an unsupported plotting dimension."""
    error = errors.UnsupportedDimensionError(
        f"plotting {what} is only supported for dimension up to {maxdim}, "
        f"but the set has dimension {dim}"
    )
    logging.error(f"({error.__class__.__name__}) {error}")
    return None


def _axes(ax, projection=None):
    """Return ``ax`` or new Axes, in 3D if requested."""
    if ax is not None:
        return ax
    if projection is None:
        return plt.figure().add_subplot(111)
    return plt.figure().add_subplot(111, projection=projection)


def plot_kernel(kernel, x=None, ax=None, **kwargs):
    """Plot a kernel :math:`K(\\cdot, 0)`.

    Parameters
    ----------
    kernel : KernelTemplate
        Kernel to plot.
    x : (m,) ndarray, NodeSet, or None
        Radii / one-dimensional points, or a node set of dimension 1 or 2
        to evaluate the kernel at. Defaults to 201 points in [-1, 1].
    ax : plt.Axes or None
        Matplotlib Axes to plot on.
        If ``None`` (default), a new figure is created.
    kwargs : dict
        Other keyword arguments to pass to ``ax.plot()`` / ``ax.scatter()``.

    Returns
    -------
    ax : plt.Axes or None
        Matplotlib Axes for the plot, or ``None`` if the dimension is not
        supported.
    """
    if x is None:
        x = np.linspace(-1, 1, 201)
    if not isinstance(x, NodeSet):
        x = np.sort(np.ravel(x))
        origin = np.zeros(kernel.dim)
        points = np.zeros((x.size, kernel.dim))
        points[:, 0] = np.abs(x)
        ax = _axes(ax)
        ax.plot(x, kernel(points, origin), **kwargs)
        ax.set_xlabel("r")
        ax.set_title(kernel.name)
        return ax

    origin = np.zeros(x.dim)
    if x.dim == 1:
        order = np.argsort(x.values_along_dim(0))
        ax = _axes(ax)
        ax.plot(
            x.values_along_dim(0)[order],
            kernel(x.values, origin)[order],
            **kwargs,
        )
        ax.set_title(kernel.name)
        return ax
    if x.dim == 2:
        ax = _axes(ax, "3d")
        kwargs.setdefault("label", "nodes")
        ax.scatter(
            x.values_along_dim(0),
            x.values_along_dim(1),
            kernel(x.values, origin),
            **kwargs,
        )
        ax.set_title(kernel.name)
        return ax
    return _unsupported("a kernel", 2, x.dim)


def plot_nodeset(nodeset, ax=None, **kwargs):
    """Scatter plot of the nodes of a node set of dimension 1, 2, or 3.

    Parameters
    ----------
    nodeset : NodeSet
        Nodes to plot.
    ax : plt.Axes or None
        Matplotlib Axes to plot on.
        If ``None`` (default), a new figure is created.
    kwargs : dict
        Other keyword arguments to pass to ``ax.scatter()``.

    Returns
    -------
    ax : plt.Axes or None
    """
    kwargs.setdefault("label", "nodes")
    if nodeset.dim == 1:
        x = nodeset.values_along_dim(0)
        ax = _axes(ax)
        ax.scatter(x, np.zeros_like(x), **kwargs)
        ax.set_ylim(-0.1, 0.1)
        ax.set_yticks([])
        return ax
    if nodeset.dim == 2:
        ax = _axes(ax)
        ax.scatter(
            nodeset.values_along_dim(0), nodeset.values_along_dim(1), **kwargs
        )
        ax.set_aspect("equal")
        return ax
    if nodeset.dim == 3:
        ax = _axes(ax, "3d")
        ax.scatter(*[nodeset.values_along_dim(i) for i in range(3)], **kwargs)
        return ax
    return _unsupported("a NodeSet", 3, nodeset.dim)


def plot_values(nodeset, values, ax=None, **kwargs):
    """Plot values given at the nodes of a node set of dimension 1 or 2.

    Parameters
    ----------
    nodeset : NodeSet
        Nodes.
    values : (n,) ndarray
        Values at the nodes.
    ax : plt.Axes or None
        Matplotlib Axes to plot on.
        If ``None`` (default), a new figure is created.
    kwargs : dict
        Other keyword arguments to pass to ``ax.plot()`` / ``ax.scatter()``.

    Returns
    -------
    ax : plt.Axes or None
    """
    values = np.asarray(values, dtype=float)
    if values.shape != (len(nodeset),):
        raise errors.DimensionMismatchError(
            f"{len(nodeset)} nodes but values have shape {values.shape}"
        )
    if nodeset.dim == 1:
        x = nodeset.values_along_dim(0)
        order = np.argsort(x)
        ax = _axes(ax)
        ax.plot(x[order], values[order], **kwargs)
        ax.set_xlabel("x")
        ax.set_ylabel("f")
        return ax
    if nodeset.dim == 2:
        ax = _axes(ax, "3d")
        ax.scatter(
            nodeset.values_along_dim(0),
            nodeset.values_along_dim(1),
            values,
            **kwargs,
        )
        ax.set_xlabel("x")
        ax.set_ylabel("y")
        ax.set_zlabel("f")
        return ax
    return _unsupported("values", 2, nodeset.dim)


def plot_interpolation(nodeset, itp, training_nodes=True, ax=None, **kwargs):
    """Plot an interpolant evaluated at the nodes of a node set.

    Parameters
    ----------
    nodeset : NodeSet
        Evaluation nodes of dimension 1 or 2.
    itp : Interpolation
        Interpolant to plot.
    training_nodes : bool
        If ``True`` (default), mark the centers of the interpolant.
    ax : plt.Axes or None
        Matplotlib Axes to plot on.
        If ``None`` (default), a new figure is created.
    kwargs : dict
        Other keyword arguments to pass to :func:`plot_values()`.

    Returns
    -------
    ax : plt.Axes or None
    """
    if nodeset.dim not in (1, 2):
        return _unsupported("an interpolation", 2, nodeset.dim)
    kwargs.setdefault("label", "interpolation")
    ax = plot_values(nodeset, itp(nodeset), ax=ax, **kwargs)
    if training_nodes:
        centers = itp.nodeset
        coordinates = [centers.values_along_dim(i) for i in range(centers.dim)]
        ax.scatter(
            *coordinates, itp(centers), marker="*", label="training nodes"
        )
    return ax
