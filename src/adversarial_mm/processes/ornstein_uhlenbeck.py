"""
Ornstein-Uhlenbeck Process

Mean-reverting reference price dynamics

author: Yunian Pan
email: yp1170@nyu.edu
"""
import numpy as np
from .base import PriceProcess


class OrnsteinUhlenbeck(PriceProcess):
    """
    Ornstein-Uhlenbeck (OU) Process reverting to zero

    dX_t = -theta * X_t dt + sigma * dW_t

    where:
        - theta: mean reversion rate (`rate`)
        - sigma: volatility

    Properties:
        - Gaussian, can go negative
        - Stationary distribution: N(0, sigma^2 / (2*theta))
        - Half-life of mean reversion: ln(2) / theta
    """

    def __init__(
        self,
        dt: float,
        rate: float = 1.0,
        volatility: float = 1.0,
        name: str = "OrnsteinUhlenbeck"
    ):
        """
        Initialize Ornstein-Uhlenbeck process

        Args:
            dt: Time step size
            rate: Mean reversion speed
            volatility: Volatility (sigma >= 0)
            name: Model name
        """
        super().__init__(dt, volatility, name=name)
        self.rate = float(rate)
        self.params['rate'] = self.rate

    @property
    def target(self) -> float:
        """Long-term mean the process reverts to."""
        return 0.0

    def drift_term(self, x: float) -> float:
        return -self.rate * x

    @property
    def half_life(self) -> float:
        return np.log(2) / self.rate

    def expectation(self, x0: float, t: float) -> float:
        """
        Expected value E[X_t | X_0]

        E[X_t] = X_0 * exp(-theta*t) + mu * (1 - exp(-theta*t))
        """
        exp_theta_t = np.exp(-self.rate * t)
        return x0 * exp_theta_t + self.target * (1.0 - exp_theta_t)

    def variance(self, t: float) -> float:
        """
        Variance Var[X_t]

        Var[X_t] = (sigma^2 / (2*theta)) * (1 - exp(-2*theta*t))

        As t -> infinity: Var[X_t] -> sigma^2 / (2*theta) (stationary variance)
        """
        return (self.volatility**2 / (2 * self.rate)) * (1.0 - np.exp(-2 * self.rate * t))

    def stationary_distribution(self) -> tuple:
        """
        Stationary distribution as t -> infinity

        X_t ~ N(mu, sigma^2 / (2*theta))

        Returns:
            Tuple of (mean, variance)
        """
        if self.rate <= 0:
            raise ValueError(f"no stationary distribution for rate={self.rate}")

        return (self.target, self.volatility**2 / (2 * self.rate))


class OrnsteinUhlenbeckWithDrift(OrnsteinUhlenbeck):
    """
    Ornstein-Uhlenbeck Process with a drift target

    dX_t = theta * (mu - X_t) dt + sigma * dW_t

    `drift` is the long-term mean mu.
    """

    def __init__(
        self,
        dt: float,
        rate: float = 1.0,
        drift: float = 0.0,
        volatility: float = 1.0,
        name: str = "OrnsteinUhlenbeckWithDrift"
    ):
        """
        Args:
            dt: Time step size
            rate: Mean reversion speed
            drift: Long-term mean
            volatility: Volatility (sigma >= 0)
            name: Model name
        """
        super().__init__(dt, rate, volatility, name=name)
        self.drift = float(drift)
        self.params['drift'] = self.drift

    @property
    def target(self) -> float:
        return self.drift

    def drift_term(self, x: float) -> float:
        return self.rate * (self.drift - x)
