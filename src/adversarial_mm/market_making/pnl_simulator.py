"""
Multi-Path PnL Simulator for Baseline Quoting Strategies

Plays closed-form strategies on independent trader episodes and generates:
- Terminal wealth / terminal inventory / average spread per path
- Summary statistics (mean, std, quartiles)
- PnL histograms and risk-aversion sweeps (CSV via pandas)

Author: Yunian Pan
Email: yp1170@nyu.edu
"""

import logging
from dataclasses import dataclass, asdict
from typing import Callable, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt

from ..utils.statistics import Estimate, median_quantiles
from .config import DynamicsConfig
from .strategies import QuoteStrategy, ExponentialUtilityStrategy
from .trader import TraderDomain, make_trader_domain

logger = logging.getLogger(__name__)

TraderFactory = Callable[[int], TraderDomain]


@dataclass
class SimulationResult:
    """Results from a single simulation run."""
    strategy_name: str
    seed: int
    final_wealth: float
    terminal_inventory: float
    average_spread: float
    total_reward: float
    n_steps: int
    n_fills: int
    wealth_path: np.ndarray
    inventory_path: np.ndarray


class PnLSimulator:
    """
    Multi-path PnL simulator for strategy comparison.

    Every path builds a fresh TraderDomain from its seed, so two strategies
    evaluated with the same seed see the same random stream.

    Usage:
        simulator = PnLSimulator(eta=0.0, n_paths=1000)

        strategies = {
            'linear': LinearUtilityStrategy(k=1.5),
            'exponential': ExponentialUtilityStrategy(k=1.5, gamma=0.1, volatility=2.0),
        }

        results = simulator.run(strategies)
        simulator.print_statistics(results)
        simulator.plot_histograms(results, save_path='pnl.png')
    """

    def __init__(
        self,
        eta: float = 0.0,
        config: Optional[DynamicsConfig] = None,
        n_paths: int = 1000,
        domain_factory: Optional[TraderFactory] = None,
        max_steps: int = 100_000,
    ):
        """
        Initialize PnL simulator.

        Args:
            eta: Terminal inventory penalty of the trader domain
            config: Market parameters (defaults to DynamicsConfig())
            n_paths: Number of Monte Carlo paths per strategy
            domain_factory: seed -> TraderDomain, overrides eta/config
            max_steps: Guard against episodes that never terminate
        """
        self.config = config or DynamicsConfig()
        self.eta = eta
        self.n_paths = n_paths
        self.max_steps = max_steps

        if domain_factory is None:
            def domain_factory(seed: int) -> TraderDomain:
                return make_trader_domain(eta=self.eta, config=self.config, seed=seed)

        self.domain_factory = domain_factory

    def run_single_path(
        self,
        strategy: QuoteStrategy,
        seed: int,
        name: Optional[str] = None,
    ) -> SimulationResult:
        """
        Run single episode quoting with `strategy`.

        The strategy is evaluated on (t, S, q) before every step.

        Args:
            strategy: Quoting strategy to use
            seed: Random seed
            name: Label stored in the result (defaults to repr(strategy))

        Returns:
            SimulationResult with episode statistics
        """
        domain = self.domain_factory(seed)

        wealth_path = [domain.wealth]
        inventory_path = [domain.inv]
        spread_sum = 0.0
        total_reward = 0.0
        n_steps = 0

        while not domain.is_terminal():
            if n_steps >= self.max_steps:
                raise RuntimeError(f"episode did not terminate within {self.max_steps} steps")

            ask_offset, bid_offset = strategy.compute(
                domain.dynamics.time,
                domain.dynamics.price,
                domain.inv,
            )
            spread_sum += ask_offset + bid_offset

            transition = domain.step((ask_offset, bid_offset))

            n_steps += 1
            total_reward += transition.reward

            wealth_path.append(domain.wealth)
            inventory_path.append(domain.inv_terminal if transition.terminated else domain.inv)

        return SimulationResult(
            strategy_name=name or repr(strategy),
            seed=seed,
            final_wealth=domain.wealth,
            terminal_inventory=domain.inv_terminal,
            average_spread=spread_sum / n_steps,
            total_reward=total_reward,
            n_steps=n_steps,
            n_fills=domain.n_fills,
            wealth_path=np.array(wealth_path),
            inventory_path=np.array(inventory_path),
        )

    def run(
        self,
        strategies: Dict[str, QuoteStrategy],
        seeds: Optional[Sequence[int]] = None,
    ) -> Dict[str, List[SimulationResult]]:
        """
        Run Monte Carlo simulation for all strategies.

        Args:
            strategies: Mapping of display name to strategy
            seeds: List of random seeds (if None, uses range(n_paths))

        Returns:
            Dict mapping strategy name to list of SimulationResults
        """
        if seeds is None:
            seeds = list(range(self.n_paths))
        else:
            self.n_paths = len(seeds)

        results = {name: [] for name in strategies}

        for i, seed in enumerate(seeds):
            if i % 100 == 0 or i == self.n_paths - 1:
                logger.info(f"Simulating path {i+1}/{self.n_paths}...")

            for name, strategy in strategies.items():
                results[name].append(self.run_single_path(strategy, seed, name=name))

        return results

    def compute_statistics(
        self,
        results: Dict[str, List[SimulationResult]]
    ) -> Dict[str, Dict]:
        """
        Compute summary statistics for each strategy.

        Args:
            results: Dict from run()

        Returns:
            Dict mapping strategy name to statistics dict
        """
        stats = {}

        for name, strategy_results in results.items():
            wealths = [r.final_wealth for r in strategy_results]
            inventories = [r.terminal_inventory for r in strategy_results]
            spreads = [r.average_spread for r in strategy_results]

            wealth_est = Estimate.from_values(wealths)
            inv_est = Estimate.from_values(inventories)
            spread_est = Estimate.from_values(spreads)
            q25, median, q75 = median_quantiles(wealths)

            stats[name] = {
                'wealth_mean': wealth_est.mean,
                'wealth_stddev': wealth_est.stddev,
                'wealth_q25': q25,
                'wealth_median': median,
                'wealth_q75': q75,
                'inv_mean': inv_est.mean,
                'inv_stddev': inv_est.stddev,
                'spread_mean': spread_est.mean,
                'spread_stddev': spread_est.stddev,
                'win_rate': float(np.mean(np.array(wealths) > 0)),
            }

        return stats

    def to_dataframe(self, results: Dict[str, List[SimulationResult]]) -> pd.DataFrame:
        """One row per (strategy, path), without the path arrays."""
        rows = []
        for strategy_results in results.values():
            for r in strategy_results:
                row = asdict(r)
                row.pop('wealth_path')
                row.pop('inventory_path')
                rows.append(row)

        return pd.DataFrame(rows)

    def print_statistics(
        self,
        results: Dict[str, List[SimulationResult]],
        stats: Optional[Dict] = None,
    ):
        """
        Print formatted statistics table.

        Args:
            results: Dict from run()
            stats: Pre-computed statistics (if None, computes)
        """
        if stats is None:
            stats = self.compute_statistics(results)

        print("\n" + "=" * 100)
        print(f"STRATEGY COMPARISON ({self.n_paths} paths)")
        print("=" * 100)
        print(f"{'Strategy':<30} | {'Mean PnL':>10} | {'Std PnL':>9} | "
              f"{'Q25':>9} | {'Median':>9} | {'Q75':>9} | {'Inv q_T':>14}")
        print("-" * 100)

        for name, s in stats.items():
            inv = f"{s['inv_mean']:+.2f} ± {s['inv_stddev']:.2f}"
            print(f"{name:<30} | {s['wealth_mean']:10.3f} | "
                  f"{s['wealth_stddev']:9.3f} | {s['wealth_q25']:9.3f} | "
                  f"{s['wealth_median']:9.3f} | {s['wealth_q75']:9.3f} | {inv:>14}")

        print("=" * 100)

    def plot_histograms(
        self,
        results: Dict[str, List[SimulationResult]],
        stats: Optional[Dict] = None,
        save_path: Optional[str] = None,
    ):
        """
        Plot terminal wealth histogram comparison.

        Args:
            results: Dict from run()
            stats: Pre-computed statistics
            save_path: Path to save figure (if None, just returns it)
        """
        if stats is None:
            stats = self.compute_statistics(results)

        n_strategies = len(results)
        fig, axes = plt.subplots(n_strategies, 1, figsize=(12, 4*n_strategies))

        if n_strategies == 1:
            axes = [axes]

        colors = plt.cm.Set2(np.linspace(0, 1, n_strategies))

        for idx, (name, strategy_results) in enumerate(results.items()):
            ax = axes[idx]
            wealths = np.array([r.final_wealth for r in strategy_results])

            ax.hist(wealths, bins=50, alpha=0.7, color=colors[idx], edgecolor='black')

            s = stats[name]
            ax.axvline(s['wealth_mean'], color='red', linestyle='--', linewidth=2,
                       label=f"Mean: {s['wealth_mean']:.2f}")
            ax.axvline(s['wealth_median'], color='orange', linestyle='--', linewidth=2,
                       label=f"Median: {s['wealth_median']:.2f}")
            ax.axvline(0, color='black', linestyle='-', linewidth=1, alpha=0.5)

            ax.set_xlabel('Terminal wealth')
            ax.set_ylabel('Frequency')
            ax.set_title(f"{name} | Std: {s['wealth_stddev']:.2f} | "
                         f"Spread: {s['spread_mean']:.3f}", fontweight='bold')
            ax.legend(loc='upper left')
            ax.grid(True, alpha=0.3)

        plt.suptitle(f'PnL Distribution Comparison ({self.n_paths} paths)',
                     fontsize=14, fontweight='bold')
        plt.tight_layout()

        if save_path:
            plt.savefig(save_path, dpi=150, bbox_inches='tight')
            logger.info(f"Saved histogram: {save_path}")

        return fig


DEFAULT_RISK_AVERSIONS = tuple(0.01 * i for i in range(1, 101)) + (0.001,)


def sweep_risk_aversion(
    gammas: Sequence[float] = DEFAULT_RISK_AVERSIONS,
    n_paths: int = 1000,
    config: Optional[DynamicsConfig] = None,
    seeds: Optional[Sequence[int]] = None,
) -> pd.DataFrame:
    """
    Evaluate the exponential utility strategy over a grid of risk aversions.

    For each γ the strategy ExponentialUtilityStrategy(κ, γ, σ) quotes on
    penalty-free trader episodes built from `config`.

    Args:
        gammas: Risk aversion grid
        n_paths: Number of paths per γ (ignored if seeds is given)
        config: Market parameters
        seeds: Explicit seeds shared by every γ

    Returns:
        DataFrame with columns eta, wealth_mean, wealth_stddev, inv_mean,
        inv_stddev, spread_mean, spread_stddev, sorted by eta
    """
    simulator = PnLSimulator(eta=0.0, config=config, n_paths=n_paths)
    config = simulator.config

    records = []
    for gamma in gammas:
        strategy = ExponentialUtilityStrategy(
            k=config.fill_decay, gamma=gamma, volatility=config.volatility,
        )
        results = simulator.run({'exp': strategy}, seeds=seeds)
        stats = simulator.compute_statistics(results)['exp']

        logger.info(f"gamma={gamma:.3f}: wealth {stats['wealth_mean']:.3f} ± {stats['wealth_stddev']:.3f}")

        records.append({
            'eta': gamma,
            'wealth_mean': stats['wealth_mean'],
            'wealth_stddev': stats['wealth_stddev'],
            'inv_mean': stats['inv_mean'],
            'inv_stddev': stats['inv_stddev'],
            'spread_mean': stats['spread_mean'],
            'spread_stddev': stats['spread_stddev'],
        })

    return pd.DataFrame(records).sort_values('eta').reset_index(drop=True)


def write_csv(df: pd.DataFrame, path: str):
    """Persist a sweep (or to_dataframe output) as CSV without the index."""
    df.to_csv(path, index=False)
    logger.info(f"Saved {len(df)} rows to {path}")
