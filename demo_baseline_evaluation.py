"""
Demo: Baseline Strategy Evaluation

Evaluates the closed-form Avellaneda-Stoikov quoting rules on the trader
domain:
1. Linear utility (constant 1/κ spread)
2. Linear utility with terminal inventory penalty
3. Exponential utility (reservation price + optimal spread)

Then sweeps the exponential strategy's risk aversion and writes the summary
to CSV.

Generates:
- Statistical comparison table
- PnL histograms (baseline_pnl.png)
- Risk aversion sweep (risk_aversion_sweep.csv)

Author: Yunian Pan
"""

import logging

from adversarial_mm.market_making import (
    DynamicsConfig,
    PnLSimulator,
    LinearUtilityStrategy,
    LinearUtilityTerminalPenaltyStrategy,
    ExponentialUtilityStrategy,
    sweep_risk_aversion,
    write_csv,
)

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

print("=" * 80)
print("BASELINE STRATEGY EVALUATION: Avellaneda-Stoikov trader domain")
print("=" * 80)

# ============================================================================
# Configuration
# ============================================================================

config = DynamicsConfig(dt=0.005, initial_price=100.0, volatility=2.0,
                        fill_scale=140.0, fill_decay=1.5)
eta = 0.01
n_paths = 1000

# ============================================================================
# Strategies
# ============================================================================

strategies = {
    'Linear utility': LinearUtilityStrategy(k=config.fill_decay),
    'Terminal penalty (eta=0.01)': LinearUtilityTerminalPenaltyStrategy(k=config.fill_decay, eta=eta),
    'Exponential (gamma=0.1)': ExponentialUtilityStrategy(
        k=config.fill_decay, gamma=0.1, volatility=config.volatility,
    ),
}

simulator = PnLSimulator(eta=eta, config=config, n_paths=n_paths)
results = simulator.run(strategies)

stats = simulator.compute_statistics(results)
simulator.print_statistics(results, stats)
simulator.plot_histograms(results, stats, save_path='baseline_pnl.png')

# ============================================================================
# Risk aversion sweep
# ============================================================================

print("\nSweeping exponential utility risk aversion...")
sweep = sweep_risk_aversion(n_paths=200, config=config)
write_csv(sweep, 'risk_aversion_sweep.csv')

print(sweep.head(10).to_string(index=False))
