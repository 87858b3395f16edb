# kernels/__init__.py
r"""Radial basis function kernels and kernel combinators."""

from ._base import *
from ._radial import *
from ._compact import *
from ._matern import *
from ._combinators import *
