# nodes/__init__.py
"""Node sets and node generators."""

from ._nodeset import *
from ._generators import *
