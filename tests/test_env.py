from dataclasses import replace

import numpy as np
import pytest

from gridsnake.config import UP, DOWN, LEFT, RIGHT, Settings
from gridsnake.env import SnakeEnv, left_of, right_of, wrapped_delta, observe
from gridsnake.policies import POLICIES, policy_greedy


def test_rotations():
    assert left_of(RIGHT) is UP
    assert right_of(RIGHT) is DOWN
    assert left_of(UP) is LEFT
    assert right_of(LEFT) is UP


@pytest.mark.parametrize("a,b,size,expected", [
    (0, 3, 15, 3),
    (0, 14, 15, -1),
    (14, 0, 15, 1),
    (5, 5, 15, 0),
])
def test_wrapped_delta(a, b, size, expected):
    assert wrapped_delta(a, b, size) == expected


def test_reset_returns_observation_and_starts_running():
    env = SnakeEnv(settings=Settings(grid_size="small"), seed_value=0)
    obs = env.reset()
    assert obs.shape == env.observation_space_shape
    assert obs.dtype == np.float32
    assert env.state.is_running
    # heading right, nothing to hit on a one-cell snake
    assert obs[4:].tolist() == [1.0, 0.0, 0.0, 0.0, 0.0]


def test_step_before_reset_fails():
    with pytest.raises(RuntimeError):
        SnakeEnv().step(0)


def test_invalid_action_fails():
    env = SnakeEnv()
    env.reset()
    with pytest.raises(ValueError):
        env.step(7)


def test_reverse_action_is_ignored_by_engine():
    env = SnakeEnv(settings=Settings(grid_size="small"), seed_value=1)
    env.reset()
    head = env.state.head
    _, _, done, info = env.step(2)  # LEFT while heading RIGHT
    assert not done
    assert env.state.direction is RIGHT
    assert env.state.head == ((head[0] + 1) % 15, head[1])
    assert info["length"] >= 1


def test_observation_flags_body_ahead():
    env = SnakeEnv(settings=Settings(grid_size="small"))
    env.reset()
    state = replace(env.state, snake=((5, 5), (5, 6), (6, 6), (6, 5), (7, 5)), direction=RIGHT)
    obs = observe(state)
    assert obs[6] == 1.0   # ahead (6, 5)
    assert obs[7] == 0.0   # left (5, 4)
    assert obs[8] == 1.0   # right (5, 6)


def test_greedy_policy_finds_food():
    env = SnakeEnv(settings=Settings(grid_size="small"), seed_value=3)
    obs = env.reset()
    score = 0
    for _ in range(200):
        obs, reward, done, info = env.step(policy_greedy(obs, env))
        score = info["score"]
        if score > 0 or done:
            break
    assert score >= 10


@pytest.mark.parametrize("name", sorted(POLICIES))
def test_policies_return_valid_actions(name):
    env = SnakeEnv(seed_value=4)
    obs = env.reset()
    for _ in range(20):
        action = POLICIES[name](obs, env, 0.5)
        assert 0 <= action < env.action_space_n
        obs, _, done, _ = env.step(action)
        if done:
            obs = env.reset()


def test_speed_reported_in_info():
    env = SnakeEnv(settings=Settings(difficulty="easy"))
    env.reset()
    _, _, _, info = env.step(3)
    assert info["tick_interval_ms"] == 200
