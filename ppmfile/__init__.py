# ppmfile/__init__.py

from .ppmfile import __doc__, __all__, __version__

from .ppmfile import *
