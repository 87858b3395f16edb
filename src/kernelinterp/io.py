# io.py
"""Persistence of node sets and nodal field values in HDF5 files."""

__all__ = [
    "hdf5_save",
    "hdf5_read",
]

import numpy as np

from . import errors, utils
from .nodes import NodeSet


def hdf5_save(savefile, nodeset, *data, keys=None, overwrite=False):
    """Save the nodes of a node set and field values at the nodes.

    Parameters
    ----------
    savefile : str or h5py File/Group handle
        Path of the file to save to (extension ``.h5``).
    nodeset : NodeSet
        Nodes.
    data : (n,) or (n, k) ndarray, or callable
        Field values at the nodes, or functions evaluated at every node,
        e.g., an :class:`kernelinterp.interpolation.Interpolation`.
    keys : list(str) or None
        Names of the fields. Defaults to ``value_1``, ``value_2``, ....
    overwrite : bool
        If ``True``, overwrite the file if it already exists.
        If ``False`` (default), raise a ``FileExistsError`` if the file
        already exists.
    """
    if keys is None:
        keys = [f"value_{i + 1}" for i in range(len(data))]
    keys = list(keys)
    if len(keys) != len(data):
        raise errors.InvalidArgumentError(
            f"{len(data)} data arrays but {len(keys)} keys"
        )
    if len(set(keys)) != len(keys):
        raise errors.InvalidArgumentError("keys must be unique")

    fields = []
    for key, datum in zip(keys, data):
        if callable(datum):
            datum = [datum(x) for x in nodeset.values]
        datum = np.asarray(datum, dtype=float)
        if datum.ndim == 0 or datum.shape[0] != len(nodeset):
            raise errors.DimensionMismatchError(
                f"field '{key}' has shape {datum.shape}, "
                f"expected {len(nodeset)} values"
            )
        fields.append(datum)

    with utils.hdf5_savehandle(savefile, overwrite) as hf:
        meta = hf.create_dataset("meta", shape=(0,), dtype=float)
        meta.attrs["keys"] = keys
        utils.save_points(hf.create_group("nodes"), nodeset.values)
        group = hf.create_group("fields")
        for key, datum in zip(keys, fields):
            group.create_dataset(key, data=datum)


def hdf5_read(loadfile):
    """Load nodes and field values saved with :func:`hdf5_save()`.

    Parameters
    ----------
    loadfile : str or h5py File/Group handle
        Path of the file to read from.

    Returns
    -------
    nodeset : NodeSet
        Nodes.
    fields : dict(str -> ndarray)
        Field values at the nodes, in the order they were saved.
    """
    with utils.hdf5_loadhandle(loadfile, "meta", "nodes", "fields") as hf:
        keys = [str(key) for key in hf["meta"].attrs["keys"]]
        utils.check_hdf5_keys(hf["fields"], *keys)
        points = utils.load_points(hf["nodes"])
        fields = {key: hf["fields"][key][:] for key in keys}

    for key, field in fields.items():
        if field.ndim == 0 or field.shape[0] != points.shape[0]:
            raise errors.LoadfileFormatError(
                f"invalid save format (field '{key}' has shape "
                f"{field.shape}, expected {points.shape[0]} values)"
            )

    return NodeSet._from_array(points), fields
