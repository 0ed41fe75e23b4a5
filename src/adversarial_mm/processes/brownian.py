"""
Arithmetic Brownian Motion

Additive reference price dynamics used by the Avellaneda-Stoikov model

author: Yunian Pan
email: yp1170@nyu.edu
"""
from .base import PriceProcess


class BrownianMotion(PriceProcess):
    """
    Driftless arithmetic Brownian motion

    dS_t = sigma dW_t

    The mid-price model of the original Avellaneda-Stoikov paper.
    """

    def __init__(self, dt: float, volatility: float = 2.0, name: str = "BrownianMotion"):
        """
        Initialize Brownian motion

        Args:
            dt: Time step size
            volatility: Absolute volatility sigma (price units per sqrt(time))
            name: Model name
        """
        super().__init__(dt, volatility, name=name)

    def drift_term(self, x: float) -> float:
        return 0.0

    def expectation(self, x0: float, t: float) -> float:
        """E[S_t | S_0] = S_0"""
        return float(x0)

    def variance(self, t: float) -> float:
        """Var[S_t | S_0] = sigma^2 * t"""
        return self.volatility**2 * t


class BrownianMotionWithDrift(BrownianMotion):
    """
    Arithmetic Brownian motion with a controllable drift

    dS_t = w dt + sigma dW_t

    The drift w is a plain attribute so that an adversary can reassign it
    before every innovation.
    """

    def __init__(
        self,
        dt: float,
        drift: float = 0.0,
        volatility: float = 2.0,
        name: str = "BrownianMotionWithDrift"
    ):
        """
        Initialize Brownian motion with drift

        Args:
            dt: Time step size
            drift: Drift w (price units per unit time)
            volatility: Absolute volatility sigma
            name: Model name
        """
        super().__init__(dt, volatility, name=name)
        self.drift = float(drift)

    def drift_term(self, x: float) -> float:
        return self.drift

    def expectation(self, x0: float, t: float) -> float:
        """E[S_t | S_0] = S_0 + w * t"""
        return float(x0) + self.drift * t

    def __repr__(self) -> str:
        # drift is reassigned between steps, so read it live
        return (f"{self.name}(dt = {self.dt}, drift = {self.drift}, "
                f"volatility = {self.volatility})")
