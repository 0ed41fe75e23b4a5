"""
Market Making Domains Module

Avellaneda-Stoikov market making MDPs for adversarial reinforcement learning:
- Trader: market maker quotes (δ_ask, δ_bid) against a Brownian mid-price
- Adversary: drift controller playing against a fixed market maker
- ZeroSum: market maker and drift controller acting simultaneously
- Closed-form baseline strategies (linear / terminal penalty / exponential)
- Multi-path PnL simulator and Gymnasium adapter

Author: Yunian Pan
Email: yp1170@nyu.edu
"""

from .dynamics import MarketDynamics
from .config import DynamicsConfig, make_dynamics, make_drift_dynamics
from .strategies import (
    QuoteStrategy,
    LinearUtilityStrategy,
    LinearUtilityTerminalPenaltyStrategy,
    ExponentialUtilityStrategy,
)
from .domain import (
    INV_BOUNDS,
    Observation,
    Transition,
    MarketMakingDomain,
)
from .trader import TraderDomain, make_trader_domain
from .adversary import AdversaryDomain, make_adversary_domain
from .zero_sum import ZeroSumDomain, make_zero_sum_domain
from .market_making_env import MarketMakingEnv, make_trader_env, make_adversary_env
from .pnl_simulator import (
    PnLSimulator,
    SimulationResult,
    sweep_risk_aversion,
    write_csv,
)

__all__ = [
    # Dynamics
    'MarketDynamics',
    'DynamicsConfig',
    'make_dynamics',
    'make_drift_dynamics',
    # Strategies
    'QuoteStrategy',
    'LinearUtilityStrategy',
    'LinearUtilityTerminalPenaltyStrategy',
    'ExponentialUtilityStrategy',
    # Domains
    'INV_BOUNDS',
    'Observation',
    'Transition',
    'MarketMakingDomain',
    'TraderDomain',
    'make_trader_domain',
    'AdversaryDomain',
    'make_adversary_domain',
    'ZeroSumDomain',
    'make_zero_sum_domain',
    # Environment
    'MarketMakingEnv',
    'make_trader_env',
    'make_adversary_env',
    # Simulator
    'PnLSimulator',
    'SimulationResult',
    'sweep_risk_aversion',
    'write_csv',
]
