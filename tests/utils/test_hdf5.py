# utils/test_hdf5.py
"""Tests for utils._hdf5."""

import os
import h5py
import pytest
import warnings
import numpy as np

import kernelinterp


def test_hdf5_filehandle():
    """Test utils._hdf5._hdf5_filehandle()."""
    subject = kernelinterp.utils._hdf5._hdf5_filehandle

    # Clean up after old tests.
    target = "_hdf5handletest.h5"
    if os.path.isfile(target):  # pragma: no cover
        os.remove(target)

    # Input file is already an open h5py handle.
    h5file = h5py.File(target, "a")
    with subject(h5file, "load", False) as hf:
        assert hf is h5file
        assert bool(hf)
        assert hf.mode == "r+"
    assert bool(hf)  # check the file is still open.
    hf.close()
    os.remove(target)

    # Save mode without .h5 extension.
    with pytest.warns(kernelinterp.errors.KernelInterpolationWarning) as wn:
        with subject(target[:-3], "save", True):
            pass
    assert len(wn) == 1
    assert wn[0].message.args[0] == "expected file with extension '.h5'"
    os.remove(target[:-3])

    # Save mode with .h5 extension.
    with subject(target, "save", True) as hf:
        assert isinstance(hf, h5py.File)
        assert bool(hf)
        assert hf.mode == "r+"
    assert os.path.isfile(target)
    assert not bool(hf)  # check the file is closed.

    # Try to overwrite but with overwrite=False.
    with pytest.raises(FileExistsError) as ex:
        with subject(target, "save", overwrite=False):
            pass
    assert ex.value.args[0] == f"{target} (overwrite=True to ignore)"

    # Loading.
    with subject(target, "load", False) as hf:
        assert isinstance(hf, h5py.File)
        assert hf.mode == "r"
    assert not bool(hf)
    os.remove(target)

    # Try loading a nonexistent file.
    with pytest.raises(FileNotFoundError) as ex:
        with subject(target, "load", overwrite=False):
            pass
    assert ex.value.args[0] == target

    # Invalid mode.
    with pytest.raises(ValueError) as ex:
        with subject(target, "moose", None):
            pass
    assert ex.value.args[0] == "invalid mode 'moose'"

    # Exception happens within block.
    with pytest.raises(RuntimeError) as ex:
        with subject(target, "save", overwrite=True) as hf:
            raise RuntimeError("error within block")
    assert ex.value.args[0] == "error within block"
    assert not bool(hf)
    os.remove(target)


def test_hdf5_savehandle():
    """Test utils._hdf5.hdf5_savehandle()."""
    subject = kernelinterp.utils.hdf5_savehandle

    target = "_hdf5savehandletest.h5"
    if os.path.isfile(target):  # pragma: no cover
        os.remove(target)

    with subject(target, True) as hf:
        hf.create_dataset("points", data=np.zeros((3, 2)))
    assert not bool(hf)
    assert os.path.isfile(target)

    with pytest.raises(FileExistsError) as ex:
        with subject(target, overwrite=False):
            pass
    assert ex.value.args[0] == f"{target} (overwrite=True to ignore)"

    # Overwriting replaces the old contents.
    with subject(target, overwrite=True) as hf:
        pass
    with h5py.File(target, "r") as hf:
        assert "points" not in hf
    os.remove(target)


def test_hdf5_loadhandle():
    """Test utils._hdf5.hdf5_loadhandle()."""
    subject = kernelinterp.utils.hdf5_loadhandle

    target = "_hdf5loadhandletest.h5"
    if os.path.isfile(target):  # pragma: no cover
        os.remove(target)

    with h5py.File(target, "w"):
        pass

    # Loading.
    with subject(target) as hf:
        assert isinstance(hf, h5py.File)
        assert bool(hf)
        assert hf.mode == "r"
    assert not bool(hf)

    # Exception within block is wrapped as LoadfileFormatError.
    with pytest.raises(kernelinterp.errors.LoadfileFormatError) as ex:
        with subject(target) as hf:
            raise RuntimeError("error within block")
    assert ex.value.args[0] == "error within block"

    with pytest.raises(kernelinterp.errors.LoadfileFormatError) as ex:
        with subject(target) as hf:
            raise kernelinterp.errors.LoadfileFormatError("error2")
    assert ex.value.args[0] == "error2"

    class DummyWarning(Warning):
        pass

    # Warning within block is passed on.
    with pytest.warns(DummyWarning) as wn:
        with subject(target) as hf:
            warnings.warn("my dummy warning", DummyWarning)
    assert wn[0].message.args[0] == "my dummy warning"

    # Required keys are checked on entry.
    with pytest.raises(kernelinterp.errors.LoadfileFormatError) as ex:
        with subject(target, "meta", "nodes"):
            pass
    assert ex.value.args[0] == "invalid save format ('meta' not found)"
    with h5py.File(target, "w") as hf:  # the handle was closed.
        hf.create_group("nodes")
    with subject(target, "nodes") as hf:
        assert "nodes" in hf

    # Try loading a nonexistent file.
    os.remove(target)
    with pytest.raises(FileNotFoundError) as ex:
        with subject(target):
            pass
    assert ex.value.args[0] == target


def test_check_hdf5_keys(target="_checkhdf5keystest.h5"):
    """Test utils._hdf5.check_hdf5_keys()."""
    if os.path.isfile(target):  # pragma: no cover
        os.remove(target)

    with h5py.File(target, "w") as hf:
        hf.create_dataset("points", data=np.ones(4))
        hf.create_group("fields")

    with h5py.File(target, "r") as hf:
        kernelinterp.utils.check_hdf5_keys(hf, "points", "fields")
        with pytest.raises(kernelinterp.errors.LoadfileFormatError) as ex:
            kernelinterp.utils.check_hdf5_keys(hf, "points", "meta")
        assert ex.value.args[0] == "invalid save format ('meta' not found)"
    os.remove(target)


def test_save_load_points(target="_pointstest.h5"):
    """Test utils._hdf5.save_points() and utils._hdf5.load_points()."""
    if os.path.isfile(target):  # pragma: no cover
        os.remove(target)

    points = np.random.random((7, 3))
    with kernelinterp.utils.hdf5_savehandle(target, True) as hf:
        kernelinterp.utils.save_points(hf.create_group("full"), points)
        kernelinterp.utils.save_points(
            hf.create_group("empty"), np.empty((0, 2))
        )
        with pytest.raises(ValueError) as ex:
            kernelinterp.utils.save_points(hf.create_group("bad"), points[0])
        assert ex.value.args[0] == (
            "points must be a two-dimensional array (got 1-D)"
        )

    with kernelinterp.utils.hdf5_loadhandle(target, "full", "empty") as hf:
        loaded = kernelinterp.utils.load_points(hf["full"])
        assert loaded.shape == (7, 3)
        assert np.all(loaded == points)
        assert kernelinterp.utils.load_points(hf["empty"]).shape == (0, 2)

    # Groups without the expected layout.
    with h5py.File(target, "w") as hf:
        hf.create_group("missing")
        hf.create_group("nodim").create_dataset("points", data=points)
        group = hf.create_group("wrongdim")
        group.create_dataset("points", data=points)
        group.attrs["dim"] = 2

    with h5py.File(target, "r") as hf:
        with pytest.raises(kernelinterp.errors.LoadfileFormatError) as ex:
            kernelinterp.utils.load_points(hf["missing"])
        assert ex.value.args[0] == "invalid save format ('points' not found)"

        with pytest.raises(kernelinterp.errors.LoadfileFormatError) as ex:
            kernelinterp.utils.load_points(hf["nodim"])
        assert ex.value.args[0] == (
            "invalid save format ('dim' attribute not found)"
        )

        with pytest.raises(kernelinterp.errors.LoadfileFormatError) as ex:
            kernelinterp.utils.load_points(hf["wrongdim"])
        assert ex.value.args[0] == (
            "invalid save format (points have shape (7, 3), "
            "expected dimension 2)"
        )
    os.remove(target)


if __name__ == "__main__":
    pytest.main([__file__])
