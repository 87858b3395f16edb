# kernels/test_combinators.py
"""Tests for kernels._combinators."""

import pytest
import numpy as np

import kernelinterp


_module = kernelinterp.kernels._combinators
Gauss = kernelinterp.kernels.GaussKernel


def _same_kernel(kernel1, kernel2, x, y):
    """Compare values and all derivatives of two kernels."""
    assert np.allclose(kernel1(x, y), kernel2(x, y))
    assert np.allclose(kernel1.gradient(x, y), kernel2.gradient(x, y))
    assert np.allclose(kernel1.hessian(x, y), kernel2.hessian(x, y))
    assert np.allclose(kernel1.laplacian(x, y), kernel2.laplacian(x, y))


class TestSumKernel:
    """Test kernels.SumKernel."""

    Kernel = _module.SumKernel

    def test_init(self):
        """Test __init__(), properties, and __add__()."""
        phs = kernelinterp.PolyharmonicSplineKernel(2, 3)
        kernel = self.Kernel(Gauss(2), phs)
        assert kernel.dim == 2
        assert kernel.kernels[1] is phs
        assert kernel.order == 2
        assert kernel.name == "Gauss + Polyharmonic spline"
        assert str(kernel) == (
            "SumKernel(GaussKernel(dim=2, shape_parameter=1.0) + "
            "PolyharmonicSplineKernel(dim=2, k=3))"
        )
        assert isinstance(Gauss(2) + phs, self.Kernel)

        with pytest.raises(kernelinterp.errors.InvalidArgumentError) as ex:
            self.Kernel(Gauss(2))
        assert ex.value.args[0] == "at least two kernels required"

        with pytest.raises(TypeError) as ex:
            self.Kernel(Gauss(2), 3)
        assert ex.value.args[0] == "kernels must be KernelTemplate instances"

        with pytest.raises(kernelinterp.errors.DimensionMismatchError) as ex:
            self.Kernel(Gauss(1), Gauss(2))
        assert ex.value.args[0] == (
            "kernels must have the same dimension (got [1, 2])"
        )

        with pytest.raises(TypeError):
            Gauss(2) + 3

    def test_evaluate(self):
        """A sum of equal kernels is a scaled kernel."""
        rng = np.random.default_rng(0)
        x, y = rng.random((7, 2)), rng.random(2)
        kernel = self.Kernel(Gauss(2, 0.5), Gauss(2, 0.5), Gauss(2, 0.5))
        scaled = _module.TransformationKernel(Gauss(2, 0.5), output_scale=3)
        _same_kernel(kernel, scaled, x, y)

        kernel = Gauss(2) + kernelinterp.ThinPlateSplineKernel(2)
        values = kernel(x, y)
        assert np.allclose(
            values,
            Gauss(2)(x, y) + kernelinterp.ThinPlateSplineKernel(2)(x, y),
        )


class TestProductKernel:
    """Test kernels.ProductKernel."""

    Kernel = _module.ProductKernel

    def test_init(self):
        """Test __init__(), properties, and __mul__()."""
        phs = kernelinterp.PolyharmonicSplineKernel(3, 1)
        kernel = Gauss(3) * phs
        assert isinstance(kernel, self.Kernel)
        assert kernel.order == 1
        assert self.Kernel(phs, phs, phs).order == 3
        assert kernel.name == "Gauss * Polyharmonic spline"
        assert str(kernel).startswith("ProductKernel(GaussKernel(dim=3")

    def test_evaluate(self):
        """Products of Gaussians are Gaussians."""
        rng = np.random.default_rng(1)
        x, y = rng.random((6, 3)), rng.random(3)
        kernel = self.Kernel(Gauss(3), Gauss(3))
        _same_kernel(kernel, Gauss(3, np.sqrt(2)), x, y)

        kernel = self.Kernel(Gauss(3, 0.3), Gauss(3, 0.4), Gauss(3, 1.2))
        _same_kernel(kernel, Gauss(3, 1.3), x, y)

        # Product rule with a kernel of a different type.
        imq = kernelinterp.InverseMultiquadricKernel(3, beta=1.0)
        kernel = self.Kernel(Gauss(3), imq)
        xi, yi = x[0], y
        f, g = Gauss(3)(xi, yi), imq(xi, yi)
        df, dg = Gauss(3).gradient(xi, yi), imq.gradient(xi, yi)
        assert np.isclose(kernel(xi, yi), f * g)
        assert np.allclose(kernel.gradient(xi, yi), f * dg + g * df)
        assert np.isclose(
            kernel.laplacian(xi, yi),
            f * imq.laplacian(xi, yi)
            + g * Gauss(3).laplacian(xi, yi)
            + 2 * df @ dg,
        )


class TestTransformationKernel:
    """Test kernels.TransformationKernel."""

    Kernel = _module.TransformationKernel

    def test_init(self):
        """Test __init__() and properties."""
        kernel = self.Kernel(Gauss(2), matrix=2.0, output_scale=0.5)
        assert kernel.dim == 2
        assert np.all(kernel.matrix == 2 * np.eye(2))
        assert np.all(kernel.offset == 0)
        assert kernel.output_scale == 0.5
        assert kernel.order == 0
        assert kernel.name == "Transformed Gauss"
        assert str(kernel) == (
            "TransformationKernel(GaussKernel(dim=2, shape_parameter=1.0), "
            "dim=2, output_scale=0.5)"
        )

        kernel = 2 * Gauss(2)
        assert isinstance(kernel, self.Kernel)
        assert kernel.output_scale == 2
        assert isinstance(Gauss(2) * 3.0, self.Kernel)

        with pytest.raises(TypeError) as ex:
            self.Kernel(np.eye(2))
        assert ex.value.args[0] == "kernel must be a KernelTemplate instance"

        with pytest.raises(kernelinterp.errors.DimensionMismatchError) as ex:
            self.Kernel(Gauss(2), matrix=np.eye(3))
        assert ex.value.args[0] == "matrix must have 2 rows (got shape (3, 3))"

        with pytest.raises(kernelinterp.errors.DimensionMismatchError) as ex:
            self.Kernel(Gauss(2), offset=[1.0, 2.0, 3.0])
        assert ex.value.args[0] == "offset must have length 2 (got shape (3,))"

        with pytest.raises(kernelinterp.errors.InvalidArgumentError) as ex:
            self.Kernel(Gauss(2), output_scale=-1)
        assert ex.value.args[0] == "output scale must be positive (got -1)"

    def test_evaluate(self):
        """Isotropic scaling changes the shape parameter."""
        rng = np.random.default_rng(2)
        x, y = rng.random((5, 2)), rng.random(2)
        kernel = self.Kernel(Gauss(2), matrix=3.0)
        _same_kernel(kernel, Gauss(2, 3.0), x, y)

        # Offsets cancel in radial kernels.
        kernel = self.Kernel(Gauss(2), offset=[1.0, -4.0], output_scale=2.0)
        _same_kernel(kernel, 2 * Gauss(2), x, y)
        assert np.allclose(kernel(x, y), 2 * Gauss(2)(x, y))

    def test_projection(self):
        """A (1, 2) matrix gives a kernel in 2D depending on one coordinate.
        """
        kernel = self.Kernel(Gauss(1), matrix=[[1.0, 0.0]])
        assert kernel.dim == 2
        x, y = np.array([0.5, 7.0]), np.array([0.0, -3.0])
        assert np.isclose(kernel(x, y), np.exp(-0.25))
        assert np.allclose(kernel.gradient(x, y), [-np.exp(-0.25), 0.0])
        H = kernel.hessian(x, y)
        assert np.isclose(H[0, 0], (-2 + 4 * 0.25) * np.exp(-0.25))
        assert np.allclose([H[0, 1], H[1, 0], H[1, 1]], 0)
        assert np.isclose(kernel.laplacian(x, y), H[0, 0])


if __name__ == "__main__":
    pytest.main([__file__])
