import numpy as np
import pytest

from adversarial_mm.market_making import DynamicsConfig, make_adversary_env, make_trader_env


def _run(env, action, seed):
    obs, info = env.reset(seed=seed)
    rewards = []
    terminated = False
    while not terminated:
        obs, reward, terminated, truncated, info = env.step(action)
        assert not truncated
        rewards.append(reward)
    return obs, rewards, info


def test_reset_returns_initial_state():
    env = make_trader_env(eta=0.01)

    obs, info = env.reset(seed=0)

    assert obs.dtype == np.float32
    assert obs.tolist() == [0.0, 0.0]
    assert env.observation_space.contains(obs)
    assert info['mid_price'] == 100.0
    assert info['wealth'] == 0.0


def test_trader_episode_terminates_and_liquidates():
    env = make_trader_env(eta=0.01)

    obs, rewards, info = _run(env, np.array([0.7, 0.7]), seed=42)

    assert len(rewards) in (200, 201)
    assert obs[0] >= 1.0
    assert info['inventory'] == 0.0
    assert info['wealth'] == env.domain.wealth
    assert info['inventory_terminal'] == env.domain.inv_terminal


def test_step_before_reset_raises():
    env = make_trader_env()

    with pytest.raises(RuntimeError):
        env.step(np.array([0.7, 0.7]))


def test_step_after_terminal_raises():
    env = make_trader_env()
    _run(env, np.array([0.7, 0.7]), seed=1)

    with pytest.raises(RuntimeError):
        env.step(np.array([0.7, 0.7]))


def test_same_seed_same_episode():
    env = make_trader_env(eta=0.01)

    _, rewards_a, info_a = _run(env, np.array([0.5, 0.9]), seed=7)
    _, rewards_b, info_b = _run(env, np.array([0.5, 0.9]), seed=7)

    assert rewards_a == rewards_b
    assert info_a['wealth'] == info_b['wealth']


def test_reset_starts_a_fresh_domain():
    env = make_trader_env()
    env.reset(seed=3)
    first = env.domain
    env.step(np.array([0.7, 0.7]))

    obs, _ = env.reset(seed=3)

    assert env.domain is not first
    assert obs.tolist() == [0.0, 0.0]
    assert len(env.history['time']) == 1


def test_history_dataframe():
    env = make_trader_env()
    _, rewards, _ = _run(env, np.array([0.7, 0.7]), seed=5)

    df = env.get_history_df()

    assert list(df.columns) == ['time', 'mid_price', 'inventory', 'wealth', 'reward']
    assert len(df) == len(rewards) + 1
    assert df['reward'].iloc[1:].tolist() == rewards


def test_adversary_env_spaces():
    env = make_adversary_env(eta=0.01, config=DynamicsConfig())

    assert env.action_space.shape == (1,)
    assert env.action_space.dtype == np.float32
    assert env.observation_space.shape == (2,)

    obs, rewards, info = _run(env, np.array([1.0], dtype=np.float32), seed=0)

    assert len(rewards) in (200, 201)
    assert env.domain.dynamics.price_process.drift == pytest.approx(5.0)


def test_human_render_prints(capsys):
    env = make_trader_env(render_mode='human')
    env.reset(seed=0)

    env.step(np.array([0.7, 0.7]))

    assert "wealth=" in capsys.readouterr().out
