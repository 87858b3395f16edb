# errors.py
"""Custom exception and warning classes."""

import numpy as np


class DimensionMismatchError(ValueError):  # pragma: no cover
    """Dimensions of points, vectors, or kernels are not aligned."""

    pass


class InvalidArgumentError(ValueError):  # pragma: no cover
    """Argument outside of its admissible range, e.g., a nonpositive shape
    parameter or a negative number of points.
    """

    pass


class SingularSystemError(np.linalg.LinAlgError):  # pragma: no cover
    """Factorization of a system matrix failed."""

    pass


class UnsupportedDimensionError(ValueError):  # pragma: no cover
    """Plotting routine does not support the dimension of the data.

    Only used to label log records; plotting is never fatal.
    """

    pass


class LoadfileFormatError(Exception):  # pragma: no cover
    """File format inconsistent with a loading routine."""

    pass


class KernelInterpolationWarning(UserWarning):  # pragma: no cover
    """Generic warning for package usage."""

    pass
