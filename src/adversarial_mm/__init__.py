"""
Adversarial Avellaneda-Stoikov Market Making

Simulation core for (adversarial) reinforcement learning of market making:
- processes: reference price processes and the Poisson fill model
- market_making: dynamics engine, baseline strategies, MDP domains
- utils: summary statistics for reports

Author: Yunian Pan
Email: yp1170@nyu.edu
"""

__version__ = "0.1.0"
