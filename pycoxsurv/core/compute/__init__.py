"""
Shared compute infrastructure for pycoxsurv.

Submodules:
    timing: Execution timing utilities
"""

from pycoxsurv.core.compute.timing import Timer, timed

__all__ = [
    "Timer",
    "timed",
]
