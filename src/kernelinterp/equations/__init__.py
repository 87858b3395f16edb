# equations/__init__.py
r"""Linear partial differential equations for collocation."""

from ._equations import *
