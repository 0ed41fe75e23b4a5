"""
Adversary Domain - Single Agent Drift Control

The agent does not quote: it picks the drift of the reference price while a
fixed terminal-penalty market maker quotes against it.

- Action: a in [0, 1] -> drift w = 5 (2a - 1)
- Reward: -(q dS) minus the spread captured by the market maker
- Terminal: inventory liquidated at mid, no penalty on reward

Author: Yunian Pan
Email: yp1170@nyu.edu
"""

from typing import Optional

import numpy as np
from gymnasium import spaces

from ..processes import BrownianMotionWithDrift
from .config import DynamicsConfig, make_drift_dynamics
from .domain import MarketMakingDomain, Transition
from .dynamics import MarketDynamics
from .strategies import LinearUtilityTerminalPenaltyStrategy

MAX_DRIFT = 5.0


def drift_from_action(action: float, max_drift: float) -> float:
    """Map a in [0, 1] linearly onto [-max_drift, max_drift]."""
    return max_drift * (2.0 * action - 1.0)


def check_drift_control(dynamics: MarketDynamics):
    if not isinstance(dynamics.price_process, BrownianMotionWithDrift):
        raise TypeError(
            "drift control needs a BrownianMotionWithDrift price process, "
            f"got {dynamics.price_process!r}"
        )


class AdversaryDomain(MarketMakingDomain):
    """
    Adversarial MDP: the agent perturbs the market against a passive MM.

    The market maker quotes with LinearUtilityTerminalPenaltyStrategy
    (κ taken from the execution model, η from construction) evaluated on the
    pre-innovation (t, S, q).

    Dynamics (per step):
        1. a = clip(a, 0, 1), w = 5 (2a - 1) assigned to the price process
        2. MM quotes computed, S += dS
        3. reward = -(q dS)
        4. Fills as in TraderDomain, each filled offset subtracted from reward
        5. If t >= 1: wealth += S q, q_T = q, q = 0 (reward untouched)
    """

    def __init__(self, dynamics: MarketDynamics, eta: float = 0.0):
        """
        Args:
            dynamics: Fresh MarketDynamics with a BrownianMotionWithDrift process
            eta: Terminal penalty of the internal market maker strategy
        """
        check_drift_control(dynamics)
        super().__init__(dynamics)

        self.inv_strategy = LinearUtilityTerminalPenaltyStrategy(
            dynamics.execution_model.decay, eta,
        )

    def _update_state(self, action: float):
        ask_offset, bid_offset = self.inv_strategy.compute(
            self.dynamics.time,
            self.dynamics.price,
            self.inv,
        )

        ask_price = self.dynamics.price + ask_offset
        bid_price = self.dynamics.price - bid_offset

        self.dynamics.price_process.drift = drift_from_action(action, MAX_DRIFT)
        self.reward = -(self.inv * self.dynamics.innovate())

        self._do_executions(ask_price, bid_price, sign=-1.0)

        if self.is_terminal():
            self._liquidate()

    def step(self, action: float) -> Transition:
        """
        Set the drift, advance one step and book the MM's fills.

        Args:
            action: Scalar (or 1-element array) drift control, clipped to [0, 1]
        """
        from_obs = self.observe()
        action = min(max(float(np.squeeze(action)), 0.0), 1.0)

        self._update_state(action)

        return Transition(
            previous_observation=from_obs,
            action=action,
            reward=self.reward,
            next_observation=self.observe(),
        )

    def action_space(self) -> spaces.Box:
        return spaces.Box(low=0.0, high=1.0, shape=(1,), dtype=np.float64)


def make_adversary_domain(
    eta: float = 0.0,
    config: Optional[DynamicsConfig] = None,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
) -> AdversaryDomain:
    """
    Factory for an adversary domain on the default drift-controlled market.

    Args:
        eta: Terminal penalty of the internal market maker
        config: Market parameters (defaults to DynamicsConfig())
        seed: Seed for the episode's Generator
        rng: Existing Generator (alternative to seed)
    """
    return AdversaryDomain(make_drift_dynamics(config=config, seed=seed, rng=rng), eta=eta)
