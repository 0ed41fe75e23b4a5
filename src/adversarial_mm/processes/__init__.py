"""
Stochastic Market Models

Provides the stochastic ingredients of the Avellaneda-Stoikov market:
- Arithmetic Brownian motion (driftless / controllable drift)
- Ornstein-Uhlenbeck mean reversion (to zero / to a drift target)
- Poisson order arrivals with offset-dependent intensity

Author: Yunian Pan
Email: yp1170@nyu.edu
"""

from .base import (
    PriceProcess,
    ExecutionModel,
)

from .brownian import BrownianMotion, BrownianMotionWithDrift
from .ornstein_uhlenbeck import OrnsteinUhlenbeck, OrnsteinUhlenbeckWithDrift

# Execution
from .poisson_orders import PoissonRate

__all__ = [
    # Base classes
    'PriceProcess',
    'ExecutionModel',

    # Price processes
    'BrownianMotion',
    'BrownianMotionWithDrift',
    'OrnsteinUhlenbeck',
    'OrnsteinUhlenbeckWithDrift',

    # Execution
    'PoissonRate',
]
