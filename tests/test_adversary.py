import numpy as np
import pytest

from adversarial_mm.market_making import (
    AdversaryDomain,
    DynamicsConfig,
    LinearUtilityTerminalPenaltyStrategy,
    make_adversary_domain,
)
from adversarial_mm.market_making.adversary import drift_from_action


@pytest.mark.parametrize("action, drift", [
    (0.0, -5.0),
    (0.5, 0.0),
    (1.0, 5.0),
    (0.25, -2.5),
])
def test_drift_mapping(action, drift):
    domain = make_adversary_domain(seed=0)

    domain.step(action)

    assert domain.dynamics.price_process.drift == pytest.approx(drift)
    assert drift_from_action(action, 5.0) == pytest.approx(drift)


@pytest.mark.parametrize("raw, clamped", [(2.0, 1.0), (-3.0, 0.0), (np.array([0.75]), 0.75)])
def test_action_is_clamped_and_recorded(raw, clamped):
    domain = make_adversary_domain(seed=0)

    transition = domain.step(raw)

    assert transition.action == clamped
    assert domain.dynamics.price_process.drift == pytest.approx(5.0 * (2 * clamped - 1))


def test_market_maker_uses_terminal_penalty_strategy():
    domain = make_adversary_domain(eta=0.2, config=DynamicsConfig(fill_decay=2.0), seed=0)

    assert isinstance(domain.inv_strategy, LinearUtilityTerminalPenaltyStrategy)
    assert domain.inv_strategy.k == 2.0
    assert domain.inv_strategy.eta == 0.2


def test_reward_is_negated_market_maker_reward(recording_dynamics):
    dynamics = recording_dynamics(seed=13, with_drift=True)
    domain = AdversaryDomain(dynamics, eta=0.05)
    strategy = LinearUtilityTerminalPenaltyStrategy(1.5, 0.05)

    for i in range(150):
        inv_before = domain.inv
        price_before = dynamics.price
        ask_offset, bid_offset = strategy.compute(dynamics.time, price_before, inv_before)

        transition = domain.step((i % 5) / 4)

        expected = -(inv_before * dynamics.last_increment) - sum(dynamics.filled_offsets())
        assert transition.reward == pytest.approx(expected)

        # quotes come from the pre-innovation state
        assert dynamics.ask_attempts[0][0] == pytest.approx(price_before + ask_offset)
        assert dynamics.bid_attempts[0][0] == pytest.approx(price_before - bid_offset)


def test_terminal_step_has_no_penalty(recording_dynamics):
    dynamics = recording_dynamics(seed=21, with_drift=True)
    domain = AdversaryDomain(dynamics, eta=0.5)

    while True:
        inv_before = domain.inv
        transition = domain.step(1.0)
        if transition.terminated:
            break

    expected = -(inv_before * dynamics.last_increment) - sum(dynamics.filled_offsets())
    assert transition.reward == pytest.approx(expected)
    assert domain.inv == 0.0
    assert transition.next_observation.state[1] == 0.0


def test_upward_drift_moves_price_up(episode):
    domain = make_adversary_domain(
        config=DynamicsConfig(volatility=0.0, fill_scale=0.0), seed=0,
    )

    transitions = episode(domain, 1.0)

    assert domain.dynamics.price == pytest.approx(100.0 + 5.0 * 0.005 * len(transitions))
    assert all(t.reward == 0.0 for t in transitions)
    assert domain.wealth == 0.0


def test_requires_drift_controlled_process(recording_dynamics):
    with pytest.raises(TypeError):
        AdversaryDomain(recording_dynamics(with_drift=False))


def test_spaces():
    domain = make_adversary_domain(seed=0)

    assert domain.action_space().shape == (1,)
    assert domain.action_space().contains(np.array([0.3]))
    assert domain.state_space().contains(domain.observe().state)


def test_same_seed_replays_identically():
    def play(seed):
        domain = make_adversary_domain(eta=0.01, seed=seed)
        rewards = [domain.step(0.8).reward for _ in range(150)]
        return rewards, domain.wealth

    assert play(8) == play(8)
