"""Core types shared across permission-gate."""

from .exceptions import *  # noqa: F401,F403
from .exceptions import __all__
