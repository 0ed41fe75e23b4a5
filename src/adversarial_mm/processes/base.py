"""
Base classes for the single-step market models

This module provides abstract base classes for the two stochastic ingredients
of the Avellaneda-Stoikov market: the reference price process and the
execution (fill) model.

author: Yunian Pan
email: yp1170@nyu.edu
"""

from abc import ABC, abstractmethod
import numpy as np


def check_time_step(dt: float) -> float:
    """Validate a time step size and return it as a float."""
    dt = float(dt)
    if not dt > 0:
        raise ValueError(f"dt must be positive, got {dt}")
    return dt


class PriceProcess(ABC):
    """
    Abstract base class for reference price processes.

    Every process is an SDE of the form:
        dX_t = mu(X_t) dt + sigma dW_t

    discretised with a single Euler-Maruyama step of size dt. Processes hold
    only parameters; the evolving price lives in the dynamics engine.

    Attributes:
        dt: Time step size
        name: Model name
        params: Parameter dict (for repr / reporting)
    """

    def __init__(self, dt: float, volatility: float, name: str = "PriceProcess"):
        self.dt = check_time_step(dt)
        if volatility < 0:
            raise ValueError(f"volatility must be non-negative, got {volatility}")

        self.volatility = float(volatility)
        self.name = name
        self.params = {'dt': self.dt, 'volatility': self.volatility}

    @abstractmethod
    def drift_term(self, x: float) -> float:
        """
        drift term of:
            dX_t = mu(X_t) dt + sigma dW_t
        return drift coefficient at the current price x
        """
        pass

    def diffusion_term(self, x: float) -> float:
        """Diffusion term sigma (constant for every model here)."""
        return self.volatility

    def sample_increment(self, rng: np.random.Generator, x: float) -> float:
        """
        Sample the price increment over one time step.

            dX = mu(x) dt + sigma sqrt(dt) Z

        Args:
            rng: Random source (exactly one normal draw is consumed)
            x: Current price

        Returns:
            Price increment (time is not advanced here)
        """
        z = rng.standard_normal()

        return self.drift_term(x) * self.dt + self.diffusion_term(x) * np.sqrt(self.dt) * z

    def expectation(self, x0: float, t: float) -> float:
        """
        Analytical solution for E[X_t | X_0]

        Override in subclasses where solution exists
        """
        raise NotImplementedError(
            f"analytical solution not available for {self.name}"
        )

    def variance(self, t: float) -> float:
        """
        Analytical variance Var[X_t | X_0] if available.

        Override in subclasses where analytical solution exists.
        """
        raise NotImplementedError(
            f"analytical variance not available for {self.name}"
        )

    def __repr__(self) -> str:
        params_str = ", ".join(f"{k} = {v}" for k, v in self.params.items())
        return f"{self.name}({params_str})"


class ExecutionModel(ABC):
    """
    Abstract base class for execution dynamics.

    Maps the signed distance between a resting order and the reference
    price to the probability that the order is matched within one step.
    """

    def __init__(self, dt: float):
        self.dt = check_time_step(dt)

    @abstractmethod
    def match_probability(self, offset: float) -> float:
        """
        Probability that an order `offset` away from the reference price is
        filled within dt. Always in [0, 1].
        """
        pass
