"""
Avellaneda-Stoikov Market Dynamics

Couples a reference price process with an execution model, a clock and a
single random source:
- innovate(): advance time by dt and move the price by one sampled increment
- try_execute_ask/bid(): Bernoulli fill of a resting quote at the current price

Author: Yunian Pan
Email: yp1170@nyu.edu
"""

import warnings
from typing import Optional

import numpy as np

from ..processes.base import PriceProcess, ExecutionModel, check_time_step


class MarketDynamics:
    """
    Stochastic price-and-fill engine driven by a market making domain.

    Each step the owning domain calls innovate() first and then attempts the
    ask and the bid fill. Both attempts see the post-innovation price and are
    independent draws, so both sides can fill in the same step.

    Attributes:
        dt: Time step size
        time: Elapsed time (starts at 0)
        price: Current reference price
        price_initial: Reference price at time 0
        price_process: PriceProcess producing the increments
        execution_model: ExecutionModel producing fill probabilities
        rng: numpy Generator shared by price and fill sampling

    Example:
        dynamics = MarketDynamics(
            dt=0.005,
            price=100.0,
            price_process=BrownianMotion(0.005, volatility=2.0),
            execution_model=PoissonRate(0.005, scale=140.0, decay=1.5),
            rng=np.random.default_rng(42),
        )

        dS = dynamics.innovate()
        offset = dynamics.try_execute_ask(dynamics.price + 0.5)  # 0.5 or None
    """

    def __init__(
        self,
        dt: float,
        price: float,
        price_process: PriceProcess,
        execution_model: ExecutionModel,
        rng: Optional[np.random.Generator] = None,
    ):
        """
        Initialize market dynamics.

        Args:
            dt: Time step size (must be positive, otherwise episodes never end)
            price: Initial reference price
            price_process: Price increment model
            execution_model: Fill probability model
            rng: Random source, owned by this engine for the episode.
                 A fresh unseeded Generator is created if None.
        """
        self.dt = check_time_step(dt)
        self.time = 0.0
        self.price = float(price)
        self.price_initial = self.price

        self.price_process = price_process
        self.execution_model = execution_model
        self.rng = rng if rng is not None else np.random.default_rng()

        for component in (price_process, execution_model):
            if not np.isclose(component.dt, self.dt):
                warnings.warn(
                    f"{component!r} uses dt={component.dt} but the dynamics step "
                    f"with dt={self.dt}"
                )

    def innovate(self) -> float:
        """
        Advance the clock by dt and the price by one sampled increment.

        Returns:
            The price increment dS
        """
        price_inc = self.price_process.sample_increment(self.rng, self.price)

        self.time += self.dt
        self.price += price_inc

        return price_inc

    def _try_execute(self, offset: float) -> Optional[float]:
        match_prob = self.execution_model.match_probability(offset)

        if self.rng.random() < match_prob:
            return offset

        return None

    def try_execute_ask(self, order_price: float) -> Optional[float]:
        """
        Attempt to fill a sell quote resting at `order_price`.

        Returns:
            The realised offset (order_price - price) if filled, else None
        """
        return self._try_execute(order_price - self.price)

    def try_execute_bid(self, order_price: float) -> Optional[float]:
        """
        Attempt to fill a buy quote resting at `order_price`.

        Returns:
            The realised offset (price - order_price) if filled, else None
        """
        return self._try_execute(self.price - order_price)

    def __repr__(self) -> str:
        return (f"MarketDynamics(t={self.time:.4f}, price={self.price:.4f}, "
                f"price_process={self.price_process!r}, "
                f"execution_model={self.execution_model!r})")
