"""
Zero-Sum Domain - Market Maker vs Drift Adversary

Both players act every step:
- Trader: (δ_ask, δ_bid), clipped to be non-negative
- Adversary: a in [0, 1] -> drift w = 10 (2a - 1)

A single reward is emitted from the trader's point of view; the driver hands
its negation to the adversary.

Author: Yunian Pan
Email: yp1170@nyu.edu
"""

from typing import Optional, Sequence, Tuple

import numpy as np
from gymnasium import spaces

from .adversary import check_drift_control, drift_from_action
from .config import DynamicsConfig, make_drift_dynamics
from .domain import MarketMakingDomain, Transition
from .dynamics import MarketDynamics

MAX_DRIFT = 10.0


class ZeroSumDomain(MarketMakingDomain):
    """
    Two-player market making game.

    Dynamics (per step):
        1. w = 10 (2a - 1) assigned to the price process, S += dS
        2. reward = q dS
        3. Trader quotes placed around the new price:
           ask = S + δ_ask, bid = S - δ_bid
        4. Fills as in TraderDomain (offsets added to reward)
        5. If t >= 1: wealth += S q, q_T = q, q = 0 (no penalty)

    Action:
        ((delta_ask, delta_bid), a)
    """

    def __init__(self, dynamics: MarketDynamics):
        """
        Args:
            dynamics: Fresh MarketDynamics with a BrownianMotionWithDrift process
        """
        check_drift_control(dynamics)
        super().__init__(dynamics)

    def _update_state(self, trader_action: Tuple[float, float], drift: float):
        self.dynamics.price_process.drift = drift
        self.reward = self.inv * self.dynamics.innovate()

        ask_price = self.dynamics.price + trader_action[0]
        bid_price = self.dynamics.price - trader_action[1]

        self._do_executions(ask_price, bid_price)

        if self.is_terminal():
            self._liquidate()

    def step(self, action: Tuple[Sequence[float], float]) -> Transition:
        """
        Advance one step of the game.

        Args:
            action: (trader_action, adversary_action)

        Returns:
            Transition carrying the raw joint action and the trader's reward
        """
        from_obs = self.observe()
        trader_raw, adversary_raw = action

        trader_action = tuple(max(float(a), 0.0) for a in np.ravel(trader_raw))
        adversary_action = min(max(float(np.squeeze(adversary_raw)), 0.0), 1.0)

        self._update_state(trader_action, drift_from_action(adversary_action, MAX_DRIFT))

        return Transition(
            previous_observation=from_obs,
            action=action,
            reward=self.reward,
            next_observation=self.observe(),
        )

    def action_space(self) -> spaces.Tuple:
        return spaces.Tuple((
            spaces.Box(low=-np.inf, high=np.inf, shape=(2,), dtype=np.float64),
            spaces.Box(low=0.0, high=1.0, shape=(1,), dtype=np.float64),
        ))


def make_zero_sum_domain(
    config: Optional[DynamicsConfig] = None,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
) -> ZeroSumDomain:
    """
    Factory for a zero-sum domain on the default drift-controlled market.

    Args:
        config: Market parameters (defaults to DynamicsConfig())
        seed: Seed for the episode's Generator
        rng: Existing Generator (alternative to seed)
    """
    return ZeroSumDomain(make_drift_dynamics(config=config, seed=seed, rng=rng))
