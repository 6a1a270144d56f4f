# minitiff/__main__.py

"""Minitiff package command line script."""

import sys

from .minitiff import main

sys.exit(main())
