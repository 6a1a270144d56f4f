# minitiff/__init__.py

from .minitiff import *
from .minitiff import __all__, __doc__, __version__, main

# constants are repeated for documentation

__version__ = __version__
"""Minitiff version string."""
