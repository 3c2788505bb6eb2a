"""Confirmator - automatic acceptance of pending account confirmations."""

__version__ = "0.1.0"

from confirmator import core, session

__all__ = [
    "__version__",
    "core",
    "session",
]
