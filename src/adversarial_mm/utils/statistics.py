"""
Summary Statistics for Simulation Reports

Author: Yunian Pan
Email: yp1170@nyu.edu
"""

import numpy as np
from typing import NamedTuple, Sequence, Tuple


def mean_var(values: Sequence[float]) -> Tuple[float, float]:
    """
    Sample mean and population variance (ddof=0).

    Raises:
        ValueError: If values is empty
    """
    values = np.asarray(values, dtype=float)
    if values.size == 0:
        raise ValueError("mean_var of an empty sequence")

    return float(np.mean(values)), float(np.var(values))


def median_quantiles(values: Sequence[float]) -> Tuple[float, float, float]:
    """
    Lower quartile, median and upper quartile (order of input irrelevant).

    Returns:
        (q25, median, q75)
    """
    values = np.asarray(values, dtype=float)
    if values.size == 0:
        raise ValueError("median_quantiles of an empty sequence")

    q25, median, q75 = np.percentile(values, [25, 50, 75])
    return float(q25), float(median), float(q75)


class Estimate(NamedTuple):
    """Point estimate with its dispersion, printed as 'mean ± stddev'."""
    mean: float
    stddev: float

    @classmethod
    def from_values(cls, values: Sequence[float]) -> 'Estimate':
        mean, var = mean_var(values)
        return cls(mean, float(np.sqrt(var)))

    def __str__(self) -> str:
        return f"{self.mean} ± {self.stddev}"
