# kernels/test_compact.py
"""Tests for kernels._compact."""

import pytest
import numpy as np

import kernelinterp


_module = kernelinterp.kernels._compact


def _finite_difference_hessian(kernel, x, y, h=1e-5):
    dim = len(x)
    H = np.empty((dim, dim))
    for i in range(dim):
        e = np.zeros(dim)
        e[i] = h
        forward = kernel.gradient(x + e, y)
        backward = kernel.gradient(x - e, y)
        H[i] = (forward - backward) / (2 * h)
    return H


class TestWendlandKernel:
    """Test kernels.WendlandKernel."""

    Kernel = _module.WendlandKernel

    def test_init(self):
        """Test __init__() and properties."""
        kernel = self.Kernel(3, k=2, shape_parameter=0.5)
        assert kernel.k == 2
        assert kernel.order == 0
        assert kernel.name == "Wendland"
        assert str(kernel) == "WendlandKernel(dim=3, k=2, shape_parameter=0.5)"

        for k in (-1, 4, 1.5):
            with pytest.raises(kernelinterp.errors.InvalidArgumentError) as ex:
                self.Kernel(2, k=k)
            assert ex.value.args[0] == f"k must be 0, 1, 2, or 3 (got {k})"

    def test_profiles(self):
        """Compare with the closed forms of the lowest smoothness indices."""
        s = np.linspace(0, 1.5, 16)
        positive = np.maximum(1 - s, 0)
        closed_forms = {
            (1, 0): positive,
            (2, 0): positive**2,
            (3, 1): positive**4 * (4 * s + 1),
            (3, 2): positive**6 * (35 * s**2 + 18 * s + 3) / 3,
        }
        for (dim, k), expected in closed_forms.items():
            kernel = self.Kernel(dim, k=k, shape_parameter=2.0)
            assert np.allclose(kernel.phi(s / 2), expected)

        for dim in (1, 2, 3):
            for k in range(4):
                kernel = self.Kernel(dim, k=k, shape_parameter=3.0)
                assert np.isclose(kernel.phi(0.0), 1)
                assert np.all(kernel.phi([1 / 3, 0.5, 2.0]) == 0)

    def test_derivatives(self, eps=0.7):
        """Test derivatives inside and outside of the support."""
        for k in (1, 2, 3):
            kernel = self.Kernel(3, k=k, shape_parameter=eps)
            x, y = np.array([0.2, -0.1, 0.4]), np.array([-0.3, 0.2, 0.1])
            assert np.allclose(
                kernel.hessian(x, y),
                _finite_difference_hessian(kernel, x, y),
                atol=1e-7,
            )
            far = y + 2 / eps
            assert np.allclose(kernel.gradient(far, y), 0)
            assert np.allclose(kernel.hessian(far, y), 0)

        # Laplacians at the origin from the Taylor expansions of phi.
        origin = np.zeros(3)
        kernel = self.Kernel(3, k=1, shape_parameter=eps)
        assert np.isclose(kernel.laplacian(origin, origin), -60 * eps**2)
        assert np.allclose(kernel.gradient(origin, origin), 0)
        kernel = self.Kernel(3, k=2, shape_parameter=eps)
        assert np.isclose(kernel.laplacian(origin, origin), -56 * eps**2)


class TestWuKernel:
    """Test kernels.WuKernel."""

    Kernel = _module.WuKernel

    def test_init(self):
        """Test __init__() and properties."""
        kernel = self.Kernel(3, l=2, k=1)
        assert kernel.l == 2
        assert kernel.k == 1
        assert kernel.order == 0
        assert str(kernel) == "WuKernel(dim=3, l=2, k=1, shape_parameter=1.0)"

        with pytest.raises(kernelinterp.errors.InvalidArgumentError) as ex:
            self.Kernel(1, l=-1, k=0)
        assert ex.value.args[0] == "l must be a nonnegative integer (got -1)"

        with pytest.raises(kernelinterp.errors.InvalidArgumentError) as ex:
            self.Kernel(1, l=1, k=0.5)
        assert ex.value.args[0] == "k must be a nonnegative integer (got 0.5)"

        with pytest.raises(kernelinterp.errors.InvalidArgumentError) as ex:
            self.Kernel(1, l=1, k=2)
        assert ex.value.args[0] == "k must not exceed l (got k = 2, l = 1)"

        with pytest.raises(kernelinterp.errors.InvalidArgumentError) as ex:
            self.Kernel(2, l=1, k=0)
        assert ex.value.args[0] == (
            "Wu kernel with k = 0 is positive definite only for dim <= 1 "
            "(got dim = 2)"
        )

    def test_profiles(self):
        """Compare with the normalized closed forms of small indices."""
        s = np.linspace(0, 1.5, 16)
        positive = np.maximum(1 - s, 0)
        closed_forms = {
            (1, 0, 0): positive,
            (1, 1, 0): positive**3 * (1 + 3 * s + s**2),
            (3, 1, 1): positive**2 * (1 + s / 2),
        }
        for (dim, l, k), expected in closed_forms.items():
            kernel = self.Kernel(dim, l, k, shape_parameter=2.0)
            assert np.allclose(kernel.phi(s / 2), expected)

        kernel = self.Kernel(3, 2, 1, shape_parameter=1.0)
        assert np.isclose(kernel.phi(0.0), 1)
        assert np.isclose(kernel.phi(1.0), 0)
        assert kernel.phi(1.5) == 0
        x, y = np.array([0.1, 0.3, 0.0]), np.array([0.2, 0.0, -0.1])
        assert np.allclose(
            kernel.hessian(x, y),
            _finite_difference_hessian(kernel, x, y),
            atol=1e-7,
        )


if __name__ == "__main__":
    pytest.main([__file__])
