"""
Trader Domain - Single Agent Market Making

The agent quotes (δ_ask, δ_bid) around the reference price each step:
- Reward: q_t dS_t + filled offsets (mark-to-market + captured spread)
- Terminal: liquidate at mid, penalise -η q_T^2

Author: Yunian Pan
Email: yp1170@nyu.edu
"""

from typing import Optional, Sequence

import numpy as np
from gymnasium import spaces

from .config import DynamicsConfig, make_dynamics
from .domain import MarketMakingDomain, Transition
from .dynamics import MarketDynamics


class TraderDomain(MarketMakingDomain):
    """
    Market maker MDP with a continuous 2-D action.

    Action Space:
        (delta_ask, delta_bid) in R^2, unclamped. Negative offsets quote
        through the mid-price and simply raise the fill probability.

    Dynamics (per step):
        1. Post quotes at the current price: ask = S + δ_ask, bid = S - δ_bid
        2. Innovate the price: S += dS
        3. reward = q dS (before this step's fills)
        4. Ask fill (if q > -50): q -= 1, reward += offset, wealth += ask
        5. Bid fill (if q < 50):  q += 1, reward += offset, wealth -= bid
        6. If t >= 1: wealth += S q, reward -= η q^2, q_T = q, q = 0

    Example:
        domain = make_trader_domain(eta=0.01, seed=42)

        while not domain.is_terminal():
            transition = domain.step((0.7, 0.7))

        print(domain.wealth, domain.inv_terminal)
    """

    def __init__(self, dynamics: MarketDynamics, eta: float = 0.0):
        """
        Args:
            dynamics: Fresh MarketDynamics for this episode
            eta: Quadratic terminal inventory penalty
        """
        super().__init__(dynamics)
        self.eta = float(eta)

    def _update_state(self, ask_offset: float, bid_offset: float):
        ask_price = self.dynamics.price + ask_offset
        bid_price = self.dynamics.price - bid_offset

        self.reward = self.inv * self.dynamics.innovate()

        self._do_executions(ask_price, bid_price)

        if self.is_terminal():
            self.reward -= self.eta * self.inv**2
            self._liquidate()

    def step(self, action: Sequence[float]) -> Transition:
        """
        Quote, advance one step and book fills.

        Args:
            action: (delta_ask, delta_bid)

        Returns:
            Transition with the last-step reward
        """
        from_obs = self.observe()
        ask_offset, bid_offset = (float(a) for a in np.ravel(action))

        self._update_state(ask_offset, bid_offset)

        return Transition(
            previous_observation=from_obs,
            action=action,
            reward=self.reward,
            next_observation=self.observe(),
        )

    def action_space(self) -> spaces.Box:
        return spaces.Box(low=-np.inf, high=np.inf, shape=(2,), dtype=np.float64)


def make_trader_domain(
    eta: float = 0.0,
    config: Optional[DynamicsConfig] = None,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
) -> TraderDomain:
    """
    Factory for a trader domain on the default driftless Brownian market.

    Args:
        eta: Terminal inventory penalty
        config: Market parameters (defaults to DynamicsConfig())
        seed: Seed for the episode's Generator
        rng: Existing Generator (alternative to seed)
    """
    return TraderDomain(make_dynamics(config, seed=seed, rng=rng), eta=eta)
