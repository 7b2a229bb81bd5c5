"""
Compute utilities shared by the inference and survival subpackages.
"""

from kmcurves.core.compute.timing import Timer

__all__ = ["Timer"]
