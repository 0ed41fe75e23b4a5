"""
Preset Market Configurations

Default parameterisation of the Avellaneda-Stoikov experiments (unit horizon,
200 steps, S_0 = 100, sigma = 2, A = 140, kappa = 1.5) and factory functions
building fresh dynamics engines from it.

Author: Yunian Pan
Email: yp1170@nyu.edu
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..processes import BrownianMotion, BrownianMotionWithDrift, PoissonRate
from .dynamics import MarketDynamics


@dataclass
class DynamicsConfig:
    """Parameters shared by every preset market."""
    dt: float = 0.005
    initial_price: float = 100.0
    volatility: float = 2.0
    drift: float = 0.0
    fill_scale: float = 140.0
    fill_decay: float = 1.5

    def make_execution_model(self) -> PoissonRate:
        return PoissonRate(self.dt, scale=self.fill_scale, decay=self.fill_decay)


def _resolve_rng(
    seed: Optional[int],
    rng: Optional[np.random.Generator],
) -> np.random.Generator:
    if rng is not None:
        if seed is not None:
            raise ValueError("pass either seed or rng, not both")
        return rng

    return np.random.default_rng(seed)


def make_dynamics(
    config: Optional[DynamicsConfig] = None,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
) -> MarketDynamics:
    """
    Driftless Brownian market with Poisson fills.

    Args:
        config: Market parameters (defaults to DynamicsConfig())
        seed: Seed for a fresh Generator
        rng: Existing Generator to hand over to the engine

    Returns:
        MarketDynamics at time 0
    """
    config = config or DynamicsConfig()

    return MarketDynamics(
        dt=config.dt,
        price=config.initial_price,
        price_process=BrownianMotion(config.dt, volatility=config.volatility),
        execution_model=config.make_execution_model(),
        rng=_resolve_rng(seed, rng),
    )


def make_drift_dynamics(
    drift: Optional[float] = None,
    config: Optional[DynamicsConfig] = None,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
) -> MarketDynamics:
    """
    Brownian market with a controllable drift and Poisson fills.

    Args:
        drift: Initial drift (defaults to config.drift)
        config: Market parameters (defaults to DynamicsConfig())
        seed: Seed for a fresh Generator
        rng: Existing Generator to hand over to the engine

    Returns:
        MarketDynamics whose price_process is a BrownianMotionWithDrift
    """
    config = config or DynamicsConfig()
    drift = config.drift if drift is None else drift

    return MarketDynamics(
        dt=config.dt,
        price=config.initial_price,
        price_process=BrownianMotionWithDrift(
            config.dt, drift=drift, volatility=config.volatility,
        ),
        execution_model=config.make_execution_model(),
        rng=_resolve_rng(seed, rng),
    )
