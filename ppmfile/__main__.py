# ppmfile/__main__.py

"""Ppmfile package command line script."""

import sys

from .ppmfile import main

sys.exit(main())
