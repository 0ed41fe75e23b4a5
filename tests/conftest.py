"""Shared fixtures for the market making test suite."""

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from adversarial_mm.market_making import DynamicsConfig, MarketDynamics


class RecordingDynamics(MarketDynamics):
    """MarketDynamics that remembers the last innovation and fill attempts."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.last_increment = None
        self.ask_attempts = []
        self.bid_attempts = []

    def innovate(self):
        self.ask_attempts = []
        self.bid_attempts = []
        self.last_increment = super().innovate()
        return self.last_increment

    def try_execute_ask(self, order_price):
        result = super().try_execute_ask(order_price)
        self.ask_attempts.append((order_price, self.price, result))
        return result

    def try_execute_bid(self, order_price):
        result = super().try_execute_bid(order_price)
        self.bid_attempts.append((order_price, self.price, result))
        return result

    def filled_offsets(self):
        return [r for _, _, r in self.ask_attempts + self.bid_attempts if r is not None]


@pytest.fixture
def rng():
    return np.random.default_rng(12345)


@pytest.fixture
def config():
    return DynamicsConfig()


@pytest.fixture
def no_fill_config():
    return DynamicsConfig(fill_scale=0.0)


def run_episode(domain, action, max_steps=1000):
    """Step `domain` with a constant action until terminal, return transitions."""
    transitions = []
    while not domain.is_terminal():
        assert len(transitions) < max_steps, "episode did not terminate"
        transitions.append(domain.step(action))
    return transitions


@pytest.fixture
def recording_dynamics():
    """Factory for RecordingDynamics on a (drift) Brownian market."""
    from adversarial_mm.processes import BrownianMotion, BrownianMotionWithDrift

    def build(config=None, seed=0, with_drift=False, execution_model=None):
        config = config or DynamicsConfig()
        if with_drift:
            process = BrownianMotionWithDrift(config.dt, drift=config.drift, volatility=config.volatility)
        else:
            process = BrownianMotion(config.dt, volatility=config.volatility)

        return RecordingDynamics(
            dt=config.dt,
            price=config.initial_price,
            price_process=process,
            execution_model=execution_model or config.make_execution_model(),
            rng=np.random.default_rng(seed),
        )

    return build


@pytest.fixture
def episode():
    return run_episode
