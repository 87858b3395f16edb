# discretization/__init__.py
r"""Collocation of linear PDEs: stationary solves and semidiscretization."""

from ._spatial import *
from ._semidiscretization import *
