# test_io.py
"""Tests for io.py."""

import os
import h5py
import pytest
import numpy as np

import kernelinterp


_module = kernelinterp.io


def test_hdf5_save_read():
    """Save and load node sets with field values."""
    target = "_iotest.h5"
    if os.path.isfile(target):  # pragma: no cover
        os.remove(target)

    nodeset = kernelinterp.grid_in_hypercube(4, 2)
    values = np.sum(nodeset.values, axis=1)
    vectors = nodeset.values * 2
    itp = kernelinterp.interpolate(nodeset, values)

    _module.hdf5_save(
        target, nodeset, values, vectors, itp, keys=["u", "grad", "itp"]
    )
    assert os.path.isfile(target)
    with h5py.File(target, "r") as hf:
        assert list(hf) == ["fields", "meta", "nodes"]
        assert hf["meta"].dtype == np.float64
        assert list(hf["meta"].attrs["keys"]) == ["u", "grad", "itp"]
        assert hf["nodes"].attrs["dim"] == 2

    loaded, fields = _module.hdf5_read(target)
    assert isinstance(loaded, kernelinterp.NodeSet)
    assert loaded == nodeset
    assert loaded.separation_distance == nodeset.separation_distance
    assert list(fields) == ["u", "grad", "itp"]
    assert np.all(fields["u"] == values)
    assert np.all(fields["grad"] == vectors)
    assert np.allclose(fields["itp"], values)

    with pytest.raises(FileExistsError):
        _module.hdf5_save(target, nodeset, values)

    # Default keys.
    _module.hdf5_save(target, nodeset, values, values, overwrite=True)
    _, fields = _module.hdf5_read(target)
    assert list(fields) == ["value_1", "value_2"]

    # No fields, one-dimensional nodes.
    nodeset = kernelinterp.NodeSet([0.0, 0.5, 1.0])
    _module.hdf5_save(target, nodeset, overwrite=True)
    loaded, fields = _module.hdf5_read(target)
    assert loaded.dim == 1
    assert loaded == nodeset
    assert fields == {}
    os.remove(target)


def test_hdf5_save_errors():
    """Test the input checks of io.hdf5_save()."""
    target = "_ioerrortest.h5"
    nodeset = kernelinterp.grid_in_hypercube(3, 2)
    values = np.zeros(9)

    with pytest.raises(kernelinterp.errors.InvalidArgumentError) as ex:
        _module.hdf5_save(target, nodeset, values, keys=["u", "v"])
    assert ex.value.args[0] == "1 data arrays but 2 keys"

    with pytest.raises(kernelinterp.errors.InvalidArgumentError) as ex:
        _module.hdf5_save(target, nodeset, values, values, keys=["u", "u"])
    assert ex.value.args[0] == "keys must be unique"

    with pytest.raises(kernelinterp.errors.DimensionMismatchError) as ex:
        _module.hdf5_save(target, nodeset, values[:-1], keys=["u"])
    assert ex.value.args[0] == "field 'u' has shape (8,), expected 9 values"

    with pytest.raises(kernelinterp.errors.DimensionMismatchError) as ex:
        _module.hdf5_save(target, nodeset, 1.0)
    assert ex.value.args[0] == (
        "field 'value_1' has shape (), expected 9 values"
    )

    # Nothing is written if the data is invalid.
    assert not os.path.isfile(target)


def test_hdf5_read_errors():
    """Test io.hdf5_read() with files of the wrong format."""
    target = "_ioreadtest.h5"
    if os.path.isfile(target):  # pragma: no cover
        os.remove(target)

    with pytest.raises(FileNotFoundError):
        _module.hdf5_read(target)

    with h5py.File(target, "w") as hf:
        hf.create_dataset("points", data=np.zeros((3, 2)))
    with pytest.raises(kernelinterp.errors.LoadfileFormatError) as ex:
        _module.hdf5_read(target)
    assert ex.value.args[0] == "invalid save format ('meta' not found)"

    nodeset = kernelinterp.grid_in_hypercube(3, 2)
    _module.hdf5_save(target, nodeset, np.zeros(9), overwrite=True)
    with h5py.File(target, "a") as hf:
        del hf["fields"]["value_1"]
    with pytest.raises(kernelinterp.errors.LoadfileFormatError) as ex:
        _module.hdf5_read(target)
    assert ex.value.args[0] == "invalid save format ('value_1' not found)"

    # Field lengths must match the number of nodes.
    _module.hdf5_save(target, nodeset, np.zeros(9), overwrite=True)
    with h5py.File(target, "a") as hf:
        del hf["fields"]["value_1"]
        hf["fields"].create_dataset("value_1", data=np.zeros(7))
    with pytest.raises(kernelinterp.errors.LoadfileFormatError) as ex:
        _module.hdf5_read(target)
    assert ex.value.args[0] == (
        "invalid save format (field 'value_1' has shape (7,), "
        "expected 9 values)"
    )

    # Missing node coordinates.
    with h5py.File(target, "a") as hf:
        del hf["nodes"]
    with pytest.raises(kernelinterp.errors.LoadfileFormatError) as ex:
        _module.hdf5_read(target)
    assert ex.value.args[0] == "invalid save format ('nodes' not found)"
    os.remove(target)


if __name__ == "__main__":
    pytest.main([__file__])
