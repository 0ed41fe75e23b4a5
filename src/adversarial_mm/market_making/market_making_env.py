"""
Market Making Environment - Gymnasium Adapter

Exposes the single-agent market making domains through the Gymnasium API so
that off-the-shelf RL libraries can drive them:
- reset(seed) builds a fresh domain for the episode from the env's np_random
- step(action) forwards to domain.step and unpacks the transition

Author: Yunian Pan
Email: yp1170@nyu.edu
"""

from typing import Any, Callable, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd
import gymnasium as gym
from gymnasium import spaces

from .adversary import AdversaryDomain, make_adversary_domain
from .config import DynamicsConfig
from .domain import MarketMakingDomain, Observation
from .trader import TraderDomain, make_trader_domain

DomainFactory = Callable[[np.random.Generator], MarketMakingDomain]


class MarketMakingEnv(gym.Env):
    """
    Gymnasium view of a TraderDomain or AdversaryDomain.

    Observation Space:
        Box [t, q] with t in [0, 1] and q in [-50, 50] (float32)

    Action Space:
        The domain's action space (float32)

    Reward:
        The domain's last-step reward

    Episode:
        terminated once t >= 1; never truncated

    Example:
        env = make_trader_env(eta=0.01)
        obs, info = env.reset(seed=42)

        terminated = False
        while not terminated:
            obs, reward, terminated, truncated, info = env.step(np.array([0.7, 0.7]))

        print(f"Final wealth: {info['wealth']:.2f}")
        print(f"Terminal inventory: {info['inventory_terminal']:+.0f}")
    """

    metadata = {'render_modes': ['human'], 'render_fps': 60}

    def __init__(
        self,
        domain_factory: DomainFactory,
        render_mode: Optional[str] = None,
    ):
        """
        Initialize market making environment.

        Args:
            domain_factory: Builds a fresh domain around the given Generator
            render_mode: 'human' for console output
        """
        super().__init__()

        self.domain_factory = domain_factory
        self.render_mode = render_mode
        self.domain: Optional[MarketMakingDomain] = None

        # History
        self.history: Dict[str, List] = {
            'time': [],
            'mid_price': [],
            'inventory': [],
            'wealth': [],
            'reward': [],
        }

        # Spaces are read off a throwaway domain
        probe = domain_factory(np.random.default_rng(0))
        self.observation_space = _as_float32(probe.state_space())
        self.action_space = _as_float32(probe.action_space())

    def reset(
        self,
        seed: Optional[int] = None,
        options: Optional[Dict] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Start a new episode on a fresh domain.

        Args:
            seed: Random seed for reproducibility
            options: Unused

        Returns:
            observation: Initial [t, q]
            info: Additional info
        """
        super().reset(seed=seed)

        self.domain = self.domain_factory(self.np_random)

        self.history = {k: [] for k in self.history.keys()}
        self._record_state()

        return self._get_observation(self.domain.observe()), self._get_info()

    def step(
        self,
        action: np.ndarray,
    ) -> Tuple[np.ndarray, float, bool, bool, Dict[str, Any]]:
        """
        Execute one timestep.

        Returns:
            observation: New [t, q]
            reward: Last-step reward of the domain
            terminated: t >= 1
            truncated: Always False
            info: Additional information
        """
        if self.domain is None:
            raise RuntimeError("Must call reset() before step()")
        if self.domain.is_terminal():
            raise RuntimeError("Episode is over, call reset()")

        transition = self.domain.step(action)
        self._record_state()

        if self.render_mode == 'human':
            self.render()

        return (
            self._get_observation(transition.next_observation),
            float(transition.reward),
            transition.terminated,
            False,
            self._get_info(),
        )

    def _get_observation(self, observation: Observation) -> np.ndarray:
        return observation.state.astype(np.float32)

    def _get_info(self) -> Dict[str, Any]:
        return {
            'time': self.domain.dynamics.time,
            'mid_price': self.domain.dynamics.price,
            'inventory': self.domain.inv,
            'inventory_terminal': self.domain.inv_terminal,
            'wealth': self.domain.wealth,
        }

    def _record_state(self):
        self.history['time'].append(self.domain.dynamics.time)
        self.history['mid_price'].append(self.domain.dynamics.price)
        self.history['inventory'].append(self.domain.inv)
        self.history['wealth'].append(self.domain.wealth)
        self.history['reward'].append(self.domain.reward)

    def render(self):
        """Render environment state."""
        if self.render_mode == 'human':
            d = self.domain
            print(f"[t={d.dynamics.time:6.3f}] S={d.dynamics.price:8.3f} | "
                  f"q={d.inv:+3.0f} | wealth={d.wealth:10.3f} | reward={d.reward:+.4f}")

    def get_history_df(self):
        """Get history as pandas DataFrame."""
        return pd.DataFrame(self.history)


def _as_float32(space: spaces.Space) -> spaces.Space:
    if isinstance(space, spaces.Box):
        return spaces.Box(
            low=space.low.astype(np.float32),
            high=space.high.astype(np.float32),
            dtype=np.float32,
        )
    return space


def make_trader_env(
    eta: float = 0.0,
    config: Optional[DynamicsConfig] = None,
    **kwargs
) -> MarketMakingEnv:
    """
    Factory function for the trader environment.

    Args:
        eta: Terminal inventory penalty
        config: Market parameters
        **kwargs: Additional arguments to MarketMakingEnv
    """
    def factory(rng: np.random.Generator) -> TraderDomain:
        return make_trader_domain(eta=eta, config=config, rng=rng)

    return MarketMakingEnv(factory, **kwargs)


def make_adversary_env(
    eta: float = 0.0,
    config: Optional[DynamicsConfig] = None,
    **kwargs
) -> MarketMakingEnv:
    """
    Factory function for the adversary environment.

    Args:
        eta: Terminal penalty of the internal market maker
        config: Market parameters
        **kwargs: Additional arguments to MarketMakingEnv
    """
    def factory(rng: np.random.Generator) -> AdversaryDomain:
        return make_adversary_domain(eta=eta, config=config, rng=rng)

    return MarketMakingEnv(factory, **kwargs)
