# policies/random.py
import numpy as np # type: ignore


def policy_random(obs: np.ndarray, env, epsilon: float = 0.0) -> int:
    """
    Random policy: pick a uniformly random action.
    Reversals are picked too; the engine ignores them.
    """
    return int(env.np_rng.integers(env.action_space_n))
