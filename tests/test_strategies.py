import numpy as np
import pytest

from adversarial_mm.market_making import (
    LinearUtilityStrategy,
    LinearUtilityTerminalPenaltyStrategy,
    ExponentialUtilityStrategy,
)

STATES = [
    (0.0, 100.0, 0.0),
    (0.3, 101.7, 5.0),
    (0.75, 98.2, -12.0),
    (1.0, 100.0, 50.0),
]


def test_linear_utility_is_constant():
    strategy = LinearUtilityStrategy(k=1.5)

    for state in STATES:
        assert strategy.compute(*state) == pytest.approx((2.0 / 3.0, 2.0 / 3.0))


def test_terminal_penalty_reference_values():
    strategy = LinearUtilityTerminalPenaltyStrategy(k=1.5, eta=0.1)

    ask, bid = strategy.compute(0.5, 100.0, 10.0)

    # rp = 98, sp = 2/1.5 + 0.1
    sp = 2.0 / 1.5 + 0.1
    assert ask == pytest.approx(98.0 + sp / 2 - 100.0)
    assert bid == pytest.approx(100.0 - (98.0 - sp / 2))


@pytest.mark.parametrize("state", STATES)
def test_terminal_penalty_without_penalty_is_linear_utility(state):
    linear = LinearUtilityStrategy(k=1.5)
    penalised = LinearUtilityTerminalPenaltyStrategy(k=1.5, eta=0.0)

    assert penalised.compute(*state) == pytest.approx(linear.compute(*state))


@pytest.mark.parametrize("state", STATES)
def test_terminal_penalty_skews_against_inventory(state):
    eta = 0.05
    strategy = LinearUtilityTerminalPenaltyStrategy(k=1.5, eta=eta)
    _, _, inventory = state

    ask, bid = strategy.compute(*state)

    assert ask + bid == pytest.approx(2.0 / 1.5 + eta)
    assert (bid - ask) / 2.0 == pytest.approx(2.0 * inventory * eta)


def test_exponential_reference_values():
    strategy = ExponentialUtilityStrategy(k=1.5, gamma=0.1, volatility=2.0)

    ask, bid = strategy.compute(0.5, 100.0, 10.0)

    gss = 0.1 * 4.0
    rp = 100.0 - 10.0 * gss * 0.5
    sp = gss * 0.5 + 20.0 * np.log(1.0 + 0.1 / 1.5)

    assert ask == pytest.approx(rp + sp / 2 - 100.0)
    assert bid == pytest.approx(100.0 - rp + sp / 2)


@pytest.mark.parametrize("state", STATES)
def test_exponential_spread_and_skew(state):
    gamma, sigma, k = 0.2, 2.0, 1.5
    strategy = ExponentialUtilityStrategy(k=k, gamma=gamma, volatility=sigma)
    time, _, inventory = state
    gss = gamma * sigma**2

    ask, bid = strategy.compute(*state)

    assert ask + bid == pytest.approx(gss * (1 - time) + (2 / gamma) * np.log(1 + gamma / k))
    assert (bid - ask) / 2.0 == pytest.approx(inventory * gss * (1 - time))


def test_exponential_flat_inventory_is_symmetric():
    strategy = ExponentialUtilityStrategy(k=1.5, gamma=0.5, volatility=2.0)

    ask, bid = strategy.compute(0.2, 123.4, 0.0)

    assert ask == pytest.approx(bid)


def test_exponential_spread_shrinks_to_monopoly_rent_at_horizon():
    strategy = ExponentialUtilityStrategy(k=1.5, gamma=0.5, volatility=2.0)

    ask, bid = strategy.compute(1.0, 100.0, 30.0)

    assert ask == pytest.approx(bid)
    assert ask + bid == pytest.approx(strategy.monopoly_rent)


def test_offsets_do_not_depend_on_price_level():
    strategy = ExponentialUtilityStrategy(k=1.5, gamma=0.1, volatility=2.0)

    assert strategy.compute(0.4, 50.0, 3.0) == pytest.approx(strategy.compute(0.4, 150.0, 3.0))


@pytest.mark.parametrize("build", [
    lambda: LinearUtilityStrategy(k=0.0),
    lambda: LinearUtilityTerminalPenaltyStrategy(k=-1.0, eta=0.1),
    lambda: ExponentialUtilityStrategy(k=1.5, gamma=0.0, volatility=2.0),
])
def test_invalid_parameters_are_rejected(build):
    with pytest.raises(ValueError):
        build()


def test_repr_names_parameters():
    assert repr(ExponentialUtilityStrategy(k=1.5, gamma=0.1, volatility=2.0)) == \
        "ExponentialUtilityStrategy(k=1.5, gamma=0.1, volatility=2.0)"
