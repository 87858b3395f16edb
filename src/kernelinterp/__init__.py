# __init__.py
"""Kernel interpolation with radial basis functions and kernel collocation of
linear partial differential equations on scattered nodes.
"""

__version__ = "0.1.0"

from . import (
    errors,
    utils,
    nodes,
    kernels,
    operators,
    equations,
    interpolation,
    discretization,
    io,
    visualization,
)

from .nodes import *
from .kernels import *
from .operators import *
from .equations import *
from .interpolation import *
from .discretization import *
