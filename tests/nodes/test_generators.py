# nodes/test_generators.py
"""Tests for nodes._generators."""

import pytest
import numpy as np

import kernelinterp


_module = kernelinterp.nodes._generators


def _on_hypercube_boundary(points, x_min, x_max, tol=1e-12):
    """Check that every node has at least one coordinate at a bound."""
    at_bound = np.isclose(points, x_min, atol=tol) | np.isclose(
        points, x_max, atol=tol
    )
    return bool(np.all(np.any(at_bound, axis=1)))


def test_validation():
    """Test the input checks shared by the generators."""
    with pytest.raises(kernelinterp.errors.InvalidArgumentError) as ex:
        _module.random_in_hypercube(10, 0)
    assert ex.value.args[0] == "dimension must be positive (got 0)"

    with pytest.raises(kernelinterp.errors.InvalidArgumentError) as ex:
        _module.random_in_hypercube(0, 2)
    assert ex.value.args[0] == "number of nodes must be at least 1 (got 0)"

    with pytest.raises(kernelinterp.errors.InvalidArgumentError) as ex:
        _module.grid_in_hypercube(1, 2)
    assert ex.value.args[0] == "number of nodes must be at least 2 (got 1)"

    with pytest.raises(kernelinterp.errors.DimensionMismatchError) as ex:
        _module.random_in_hypercube(10, 2, x_min=[0, 0, 0])
    assert ex.value.args[0] == (
        "x_min must be a scalar or have length 2 (got shape (3,))"
    )

    with pytest.raises(kernelinterp.errors.InvalidArgumentError) as ex:
        _module.random_in_hypersphere(10, 2, r=0)
    assert ex.value.args[0] == "radius must be positive (got 0)"

    with pytest.raises(kernelinterp.errors.DimensionMismatchError) as ex:
        _module.random_on_hypersphere_boundary(10, 3, center=[0, 0])
    assert ex.value.args[0] == "center must have length 3 (got shape (2,))"


def test_random_in_hypercube(n=200):
    """Test _generators.random_in_hypercube()."""
    for dim in (1, 2, 3):
        ns = _module.random_in_hypercube(n, dim, rng=4)
        assert isinstance(ns, kernelinterp.NodeSet)
        assert ns.shape == (n, dim)
        assert np.all(ns.values >= 0) and np.all(ns.values <= 1)

    x_min, x_max = np.array([-1.0, 2.0]), np.array([0.0, 5.0])
    ns = _module.random_in_hypercube(n, 2, x_min, x_max)
    assert np.all(ns.values >= x_min) and np.all(ns.values <= x_max)

    # Seeds are reproducible.
    ns1 = _module.random_in_hypercube(10, 2, rng=42)
    ns2 = _module.random_in_hypercube(10, 2, rng=42)
    assert ns1 == ns2


def test_random_on_hypercube_boundary(n=100):
    """Test _generators.random_on_hypercube_boundary()."""
    for dim in (2, 3, 4):
        ns = _module.random_on_hypercube_boundary(n, dim, -1.0, 2.0, rng=3)
        assert ns.shape == (n, dim)
        assert _on_hypercube_boundary(ns.values, -1.0, 2.0)
        assert np.all(ns.values >= -1.0) and np.all(ns.values <= 2.0)

    with pytest.warns(kernelinterp.errors.KernelInterpolationWarning) as wn:
        ns = _module.random_on_hypercube_boundary(n, 1, -1.0, 2.0)
    assert len(wn) == 1
    assert wn[0].message.args[0] == (
        "for one dimension the boundary of the hypercube "
        "consists only of 2 points"
    )
    assert ns == kernelinterp.NodeSet([-1.0, 2.0])


def test_grid_in_hypercube():
    """Test _generators.grid_in_hypercube()."""
    for n, dim in ((5, 1), (4, 2), (3, 3)):
        ns = _module.grid_in_hypercube(n, dim, -1.0, 1.0)
        assert ns.shape == (n**dim, dim)
        assert np.isclose(ns.separation_distance, 1 / (n - 1))
        assert np.isclose(ns.values.min(), -1.0)
        assert np.isclose(ns.values.max(), 1.0)
        assert len(ns.unique()) == n**dim

    ns = _module.grid_in_hypercube(3, 2, x_min=[0, 0], x_max=[1, 2])
    assert [1.0, 2.0] in ns
    assert [0.5, 1.0] in ns
    assert np.allclose(np.unique(ns.values_along_dim(1)), [0, 1, 2])


def test_grid_on_hypercube_boundary():
    """Test _generators.grid_on_hypercube_boundary()."""
    for n, dim in ((4, 2), (5, 2), (3, 3), (4, 3), (3, 4)):
        ns = _module.grid_on_hypercube_boundary(n, dim)
        assert ns.shape == (n**dim - (n - 2) ** dim, dim)
        assert _on_hypercube_boundary(ns.values, 0.0, 1.0)
        assert len(ns.unique()) == len(ns)

        # Exactly the boundary nodes of the full grid.
        grid = _module.grid_in_hypercube(n, dim)
        inner = grid.difference(ns, tol=1e-12)
        assert len(inner) == (n - 2) ** dim
        assert not _on_hypercube_boundary(inner.values, 0.0, 1.0)

    with pytest.warns(kernelinterp.errors.KernelInterpolationWarning) as wn:
        ns = _module.grid_on_hypercube_boundary(10, 1, 0.5, 1.5)
    assert len(wn) == 1
    assert ns == kernelinterp.NodeSet([0.5, 1.5])


def test_lshape():
    """Build an L-shaped domain from grids and check the node counts."""
    square = _module.grid_in_hypercube(5, 2, 0.0, 1.0)
    corner = _module.grid_in_hypercube(3, 2, 0.5, 1.0)
    lshape = square.difference(corner, tol=1e-12)
    assert len(lshape) == 25 - 9
    assert np.isclose(lshape.separation_distance, 0.125)
    assert [0.75, 0.75] not in lshape

    # Merging the corner back recovers the square up to order.
    recovered = kernelinterp.merge(lshape, corner).unique()
    assert len(recovered) == 25


def test_random_in_hypersphere(n=300):
    """Test _generators.random_in_hypersphere()."""
    for dim in (1, 2, 3):
        ns = _module.random_in_hypersphere(n, dim, r=2.0, rng=8)
        assert ns.shape == (n, dim)
        assert np.all(np.linalg.norm(ns.values, axis=1) <= 2.0)

    center = np.array([1.0, -1.0])
    ns = _module.random_in_hypersphere(n, 2, r=0.5, center=center, rng=8)
    assert np.all(np.linalg.norm(ns.values - center, axis=1) <= 0.5)


def test_random_on_hypersphere_boundary(n=50):
    """Test _generators.random_on_hypersphere_boundary()."""
    center = np.array([0.5, 0.5, 0.5])
    ns = _module.random_on_hypersphere_boundary(n, 3, 2.0, center, rng=1)
    assert ns.shape == (n, 3)
    assert np.allclose(np.linalg.norm(ns.values - center, axis=1), 2.0)

    with pytest.warns(kernelinterp.errors.KernelInterpolationWarning) as wn:
        ns = _module.random_on_hypersphere_boundary(n, 1, 1.0, [3.0])
    assert wn[0].message.args[0] == (
        "for one dimension the boundary of the hypersphere "
        "consists only of 2 points"
    )
    assert ns == kernelinterp.NodeSet([2.0, 4.0])


if __name__ == "__main__":
    pytest.main([__file__])
