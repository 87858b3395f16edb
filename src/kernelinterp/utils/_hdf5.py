# utils/_hdf5.py
"""Utilities for HDF5 file interaction."""

__all__ = [
    "hdf5_savehandle",
    "hdf5_loadhandle",
    "check_hdf5_keys",
    "save_points",
    "load_points",
]

import os
import h5py
import warnings
import numpy as np

from .. import errors


# File handle classes =========================================================
class _hdf5_filehandle:
    """Get a handle to an open HDF5 file to read or write to.

    Parameters
    ----------
    filename : str or h5py File/Group handle
        * str : Name of the file to interact with.
        * h5py File/Group handle : handle to part of an already open HDF5 file.
    mode : str
        Type of interaction for the HDF5 file.
        * "save" : Open the file for writing only.
        * "load" : Open the file for reading only.
    overwrite : bool
        If True, overwrite the file if it already exists. If False,
        raise a FileExistsError if the file already exists.
        Only applies when ``mode = "save"``.
    """

    def __init__(self, filename, mode, overwrite=False):
        """Open the file handle."""
        if isinstance(filename, h5py.HLObject):
            # `filename` is already an open HDF5 file.
            self.file_handle = filename
            self.close_when_done = False

        elif mode == "save":
            # `filename` is the name of a file to create for writing.
            if not filename.endswith(".h5"):
                warnings.warn(
                    "expected file with extension '.h5'",
                    errors.KernelInterpolationWarning,
                )
            if os.path.isfile(filename) and not overwrite:
                raise FileExistsError(f"{filename} (overwrite=True to ignore)")
            self.file_handle = h5py.File(filename, "w")
            self.close_when_done = True

        elif mode == "load":
            # `filename` is the name of an existing file to read from.
            if not os.path.isfile(filename):
                raise FileNotFoundError(filename)
            self.file_handle = h5py.File(filename, "r")
            self.close_when_done = True

        else:
            raise ValueError(f"invalid mode '{mode}'")

    def __enter__(self):
        """Return the handle to the open HDF5 file."""
        return self.file_handle

    def __exit__(self, exc_type, exc_value, exc_traceback):
        """Close the file if needed."""
        if self.close_when_done:
            self.file_handle.close()
        if exc_type:
            raise


class hdf5_savehandle(_hdf5_filehandle):
    """Get a handle to an open HDF5 file to write to.

    Parameters
    ----------
    savefile : str or h5py File/Group handle
        * str : Name of the file to save to.
        * h5py File/Group handle : handle to part of an already open HDF5 file
          to save data to.
    overwrite : bool
        If ``True``, overwrite the file if it already exists.
        If ``False``, raise a ``FileExistsError`` if the file already exists.

    Examples
    --------
    >>> with hdf5_savehandle("nodes.h5", False) as hf:
    ...     hf.create_dataset("points", data=nodeset.values)
    """

    def __init__(self, savefile, overwrite):
        return _hdf5_filehandle.__init__(self, savefile, "save", overwrite)


class hdf5_loadhandle(_hdf5_filehandle):
    """Get a handle to an open HDF5 file to read from.

    Any error raised while the file is open is reported as a
    :class:`kernelinterp.errors.LoadfileFormatError`.

    Parameters
    ----------
    loadfile : str or h5py File/Group handle
        * str : Name of the file to read from.
        * h5py File/Group handle : handle to part of an already open HDF5 file
          to read data from.
    keys : str
        Names of datasets / groups that must be present in the file. They
        are checked when the block is entered, see :func:`check_hdf5_keys()`.

    Examples
    --------
    >>> with hdf5_loadhandle("nodes.h5", "nodes") as hf:
    ...    points = load_points(hf["nodes"])
    """

    def __init__(self, loadfile, *keys):
        self.__keys = keys
        return _hdf5_filehandle.__init__(self, loadfile, "load")

    def __enter__(self):
        """Return the handle to the open HDF5 file after checking its keys."""
        try:
            check_hdf5_keys(self.file_handle, *self.__keys)
        except errors.LoadfileFormatError:
            if self.close_when_done:
                self.file_handle.close()
            raise
        return self.file_handle

    def __exit__(self, exc_type, exc_value, exc_traceback):
        """Close the file if needed. Raise a LoadfileFormatError if needed."""
        try:
            _hdf5_filehandle.__exit__(self, exc_type, exc_value, exc_traceback)
        except errors.LoadfileFormatError:
            raise
        except Exception as ex:
            raise errors.LoadfileFormatError(ex.args[0]) from ex


# Other tools =================================================================
def check_hdf5_keys(group: h5py.Group, *keys: str) -> None:
    """Raise a :class:`kernelinterp.errors.LoadfileFormatError` if any of the
    ``keys`` is missing from the HDF5 ``group``.

    Parameters
    ----------
    group : h5py.Group
        Open HDF5 file or group.
    keys : str
        Names of the datasets / groups that must be present.
    """
    for key in keys:
        if key not in group:
            raise errors.LoadfileFormatError(
                f"invalid save format ('{key}' not found)"
            )


def save_points(group: h5py.Group, points: np.ndarray) -> None:
    """Save an (n, d) array of node coordinates in an HDF5 group.

    The dimension is stored as an attribute so that empty node sets keep
    their dimension. See :func:`load_points()`.

    Parameters
    ----------
    group : h5py.Group
        HDF5 group to save the coordinates to.
    points : (n, d) ndarray
        Node coordinates.

    Examples
    --------
    >>> with hdf5_savehandle("nodes.h5", False) as hf:
    ...     save_points(hf.create_group("nodes"), nodeset.values)
    """
    points = np.asarray(points, dtype=float)
    if points.ndim != 2:
        raise ValueError(
            f"points must be a two-dimensional array (got {points.ndim}-D)"
        )
    group.create_dataset("points", data=points)
    group.attrs["dim"] = points.shape[1]


def load_points(group: h5py.Group) -> np.ndarray:
    """Load node coordinates saved with :func:`save_points()`.

    Parameters
    ----------
    group : h5py.Group
        HDF5 group the coordinates were saved to.

    Returns
    -------
    points : (n, d) ndarray
        Node coordinates.

    Raises
    ------
    kernelinterp.errors.LoadfileFormatError
        If the group does not have the layout written by
        :func:`save_points()`.
    """
    check_hdf5_keys(group, "points")
    if "dim" not in group.attrs:
        raise errors.LoadfileFormatError(
            "invalid save format ('dim' attribute not found)"
        )
    dim = int(group.attrs["dim"])
    points = group["points"][:]
    if points.ndim != 2 or points.shape[1] != dim:
        raise errors.LoadfileFormatError(
            f"invalid save format (points have shape {points.shape}, "
            f"expected dimension {dim})"
        )
    return points
