"""
Market Making Domains - Shared Bookkeeping

Common state and transition machinery of the trader, adversary and zero-sum
market making MDPs:
- State: (t, q) with inventory bounded to [-50, 50]
- Fills: ask then bid, skipped on the side that would breach the bound
- Terminal: t >= 1, inventory liquidated at the reference price

Author: Yunian Pan
Email: yp1170@nyu.edu
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, NamedTuple

import numpy as np
from gymnasium import spaces

from .dynamics import MarketDynamics

logger = logging.getLogger(__name__)

INV_BOUNDS = (-50.0, 50.0)
TIME_HORIZON = 1.0


class Observation(NamedTuple):
    """Emitted state: [t, clip(q, -50, 50)] plus the terminal flag."""
    state: np.ndarray
    terminal: bool


@dataclass
class Transition:
    """One MDP transition as consumed by an external learner."""
    previous_observation: Observation
    action: Any
    reward: float
    next_observation: Observation

    @property
    def terminated(self) -> bool:
        return self.next_observation.terminal


class MarketMakingDomain(ABC):
    """
    Base class for market making MDPs.

    A domain owns one MarketDynamics for a single episode and is mutated
    only through step(). Build a new domain for every episode.

    Attributes:
        dynamics: Price/fill engine (exclusively owned)
        inv: Signed inventory (integer valued)
        inv_terminal: Inventory at the last terminal step, before liquidation
        reward: Reward of the last step (not cumulative)
        wealth: Cash position
        n_fills: Number of executions so far (both sides)
    """

    def __init__(self, dynamics: MarketDynamics):
        self.dynamics = dynamics

        self.inv = 0.0
        self.inv_terminal = 0.0

        self.reward = 0.0
        self.wealth = 0.0
        self.n_fills = 0

        logger.debug(f"Created {type(self).__name__} on {dynamics!r}")

    def is_terminal(self) -> bool:
        return self.dynamics.time >= TIME_HORIZON

    def observe(self) -> Observation:
        """Current (state, terminal) pair."""
        state = np.array([
            self.dynamics.time,
            min(max(self.inv, INV_BOUNDS[0]), INV_BOUNDS[1]),
        ])

        return Observation(state, self.is_terminal())

    def state_space(self) -> spaces.Box:
        """time in [0, 1] x inventory in [-50, 50]"""
        return spaces.Box(
            low=np.array([0.0, INV_BOUNDS[0]]),
            high=np.array([TIME_HORIZON, INV_BOUNDS[1]]),
            dtype=np.float64,
        )

    @abstractmethod
    def action_space(self) -> spaces.Space:
        pass

    @abstractmethod
    def step(self, action) -> Transition:
        pass

    def _do_executions(self, ask_price: float, bid_price: float, sign: float = 1.0):
        """
        Attempt the ask fill, then the bid fill, and book them.

        Filled offsets are added to the reward with the given sign; a side is
        not attempted at all when a fill would push inventory out of bounds.
        """
        if self.inv > INV_BOUNDS[0]:
            ask_offset = self.dynamics.try_execute_ask(ask_price)

            if ask_offset is not None:
                self.inv -= 1.0
                self.n_fills += 1
                self.reward += sign * ask_offset
                self.wealth += ask_price

        if self.inv < INV_BOUNDS[1]:
            bid_offset = self.dynamics.try_execute_bid(bid_price)

            if bid_offset is not None:
                self.inv += 1.0
                self.n_fills += 1
                self.reward += sign * bid_offset
                self.wealth -= bid_price

    def _liquidate(self):
        """Market order for the remaining inventory, favourably at mid."""
        self.wealth += self.dynamics.price * self.inv

        self.inv_terminal = self.inv
        self.inv = 0.0

        logger.debug(
            f"{type(self).__name__} terminal: q={self.inv_terminal:+.0f}, "
            f"S={self.dynamics.price:.4f}, wealth={self.wealth:.4f}"
        )

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(t={self.dynamics.time:.4f}, "
                f"q={self.inv:+.0f}, wealth={self.wealth:.4f})")
