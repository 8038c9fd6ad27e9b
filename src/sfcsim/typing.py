"""
Type aliases for sfcsim.

All time series are one-dimensional float arrays indexed by period
(discrete engine) or by solver sample time (continuous engine).
"""

from typing import TypeAlias

import numpy as np
from numpy.typing import NDArray

Float1D: TypeAlias = NDArray[np.float64]

__all__ = ["Float1D"]
