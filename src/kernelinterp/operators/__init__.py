# operators/__init__.py
r"""Linear differential operators acting on kernels and polynomials."""

from ._base import *
from ._differential import *
