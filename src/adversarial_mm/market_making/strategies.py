"""
Closed-Form Market Making Strategies

Baseline quoting rules from the Avellaneda-Stoikov utility maximisation
problem:
- Linear utility: constant spread 1/κ on both sides
- Linear utility with terminal inventory penalty η
- Exponential (CARA) utility: reservation price + optimal spread

All strategies map (t, S_t, q_t) to (δ_ask, δ_bid), both measured as
positive distances from the reference price.

Author: Yunian Pan
Email: yp1170@nyu.edu
"""

import numpy as np
from typing import Tuple
from abc import ABC, abstractmethod


# ============================================================================
# Base Strategy Class
# ============================================================================

class QuoteStrategy(ABC):
    """Base class for market maker quoting strategies."""

    @abstractmethod
    def compute(self, time: float, price: float, inventory: float) -> Tuple[float, float]:
        """
        Compute MM's ask/bid offsets.

        Args:
            time: Elapsed fraction of the (unit) horizon
            price: Current reference price S_t
            inventory: Current signed inventory q_t

        Returns:
            (delta_ask, delta_bid): ask = S + delta_ask, bid = S - delta_bid
        """
        pass

    @staticmethod
    def _offsets(price: float, reservation: float, spread: float) -> Tuple[float, float]:
        # quotes symmetric around the reservation price, relative to S
        return reservation + spread / 2.0 - price, price - (reservation - spread / 2.0)


def _check_positive(name: str, value: float) -> float:
    if not value > 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return float(value)


# ============================================================================
# Linear Utility
# ============================================================================

class LinearUtilityStrategy(QuoteStrategy):
    """
    Risk-neutral market maker.

    Maximising expected terminal wealth gives the state independent
    half-spread δ* = 1/κ on both sides.
    """

    def __init__(self, k: float):
        """
        Args:
            k: Order intensity decay κ of the execution model
        """
        self.k = _check_positive("k", k)

    def compute(self, time: float, price: float, inventory: float) -> Tuple[float, float]:
        return 1.0 / self.k, 1.0 / self.k

    def __repr__(self) -> str:
        return f"LinearUtilityStrategy(k={self.k})"


class LinearUtilityTerminalPenaltyStrategy(QuoteStrategy):
    """
    Risk-neutral market maker with a quadratic terminal inventory penalty.

        r = S - 2ηq           [Reservation price]
        s = 2/κ + η           [Total spread]

    With η = 0 this is exactly LinearUtilityStrategy.
    """

    def __init__(self, k: float, eta: float):
        """
        Args:
            k: Order intensity decay κ
            eta: Terminal inventory penalty η
        """
        self.k = _check_positive("k", k)
        self.eta = float(eta)

    def compute(self, time: float, price: float, inventory: float) -> Tuple[float, float]:
        rp = price - 2.0 * inventory * self.eta
        sp = 2.0 / self.k + self.eta

        return self._offsets(price, rp, sp)

    def __repr__(self) -> str:
        return f"LinearUtilityTerminalPenaltyStrategy(k={self.k}, eta={self.eta})"


# ============================================================================
# Exponential Utility
# ============================================================================

class ExponentialUtilityStrategy(QuoteStrategy):
    """
    Avellaneda-Stoikov optimal quotes for CARA utility -exp(-γW).

        r = S - qγσ²(T - t)                       [Reservation price]
        s = γσ²(T - t) + (2/γ)ln(1 + γ/κ)         [Optimal spread]

    with T = 1. Beyond the horizon (t > 1) the formulas are still evaluated
    but no longer meaningful.
    """

    def __init__(self, k: float, gamma: float, volatility: float):
        """
        Args:
            k: Order intensity decay κ
            gamma: Risk aversion γ
            volatility: Price volatility σ
        """
        self.k = _check_positive("k", k)
        self.gamma = _check_positive("gamma", gamma)
        self.volatility = float(volatility)

        # Monopoly rent (doesn't depend on state)
        self.monopoly_rent = (2.0 / self.gamma) * np.log(1.0 + self.gamma / self.k)

    def compute(self, time: float, price: float, inventory: float) -> Tuple[float, float]:
        gss = self.gamma * self.volatility * self.volatility

        rp = price - inventory * gss * (1.0 - time)
        sp = gss * (1.0 - time) + self.monopoly_rent

        return self._offsets(price, rp, sp)

    def __repr__(self) -> str:
        return (f"ExponentialUtilityStrategy(k={self.k}, gamma={self.gamma}, "
                f"volatility={self.volatility})")
