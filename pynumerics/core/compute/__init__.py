"""
Shared compute infrastructure for PyNumerics.

Timing, precision constants and tolerance tiers shared by every storage
class and factorization backend.

Submodules:
    timing: Execution timing utilities
    precision: Machine epsilon, closeness and rank tolerance
    tolerances: Tolerance tiers per scalar precision
    linalg: QR kernels on raw ndarrays
"""

from pynumerics.core.compute.timing import Timer, timed
from pynumerics.core.compute.tolerances import ToleranceTier, select_tolerance

__all__ = [
    # Timing
    "Timer",
    "timed",
    # Tolerances
    "ToleranceTier",
    "select_tolerance",
]
