"""
Poisson Order Arrival Model for Market Making

Probability that a resting limit order is hit within one time step, with
arrival intensity depending on the quote's distance from the mid-price.
Follows Avellaneda-Stoikov framework: λ(δ) = A * exp(-κ * δ)

Author: Yunian Pan
Email: yp1170@nyu.edu
"""

import numpy as np

from .base import ExecutionModel


class PoissonRate(ExecutionModel):
    """
    Fill probability via Poisson arrivals with offset-dependent intensity.

    Order arrival intensity: λ(δ) = A * exp(-κ * δ)
    Match probability per step: P(δ) = clip(λ(δ) * dt, 0, 1)

    where:
        δ: offset (distance of the quote from the reference price, signed)
        A: base arrival intensity (`scale`)
        κ: offset sensitivity (`decay`)

    Usage:
        fills = PoissonRate(dt=0.005, scale=140.0, decay=1.5)
        fills.match_probability(0.5)   # 140 * exp(-0.75) * 0.005 ≈ 0.33

    Notes:
        - At δ=0: probability = clip(A * dt, 0, 1)
        - δ<0 (quote through the mid) raises the probability, capped at 1
        - The first-order approximation λ*dt is used rather than
          1 - exp(-λ*dt), matching the discrete-time AS setup
    """

    def __init__(
        self,
        dt: float,
        scale: float = 140.0,    # Base intensity (orders/time unit)
        decay: float = 1.5,      # Offset sensitivity
    ):
        """
        Initialize fill model.

        Args:
            dt: Time step size
            scale: Base arrival intensity A (A >= 0, A=0 disables fills)
            decay: Offset sensitivity κ (κ >= 0)
        """
        super().__init__(dt)
        if scale < 0:
            raise ValueError(f"scale must be non-negative, got {scale}")
        if decay < 0:
            raise ValueError(f"decay must be non-negative, got {decay}")

        self.scale = float(scale)
        self.decay = float(decay)

    def intensity(self, offset: float) -> float:
        """
        Compute arrival intensity for given offset.

        Returns:
            Arrival intensity λ(δ) = A * exp(-κ * δ)
        """
        return self.scale * np.exp(-self.decay * offset)

    def match_probability(self, offset: float) -> float:
        """
        Probability that a quote at `offset` is filled within one step.

        Args:
            offset: Signed distance from the reference price

        Returns:
            clip(λ(δ) * dt, 0, 1)
        """
        if self.scale == 0.0:
            # avoids 0 * inf for deep negative offsets
            return 0.0

        return float(min(max(self.intensity(offset) * self.dt, 0.0), 1.0))

    def expected_fills(self, ask_offset: float, bid_offset: float) -> tuple:
        """
        Expected number of fills per side over one step (for analysis/testing).

        Returns:
            (expected_ask_fills, expected_bid_fills)
        """
        return self.match_probability(ask_offset), self.match_probability(bid_offset)

    def __repr__(self) -> str:
        return f"PoissonRate(dt={self.dt}, scale={self.scale}, decay={self.decay})"
