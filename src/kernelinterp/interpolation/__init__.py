# interpolation/__init__.py
r"""Kernel interpolation: polynomial bases, system matrices, interpolants."""

from ._polynomials import *
from ._matrices import *
from ._interpolation import *
