"""
Utility modules for reporting helpers.
"""

from .statistics import mean_var, median_quantiles, Estimate

__all__ = [
    'mean_var',
    'median_quantiles',
    'Estimate',
]
