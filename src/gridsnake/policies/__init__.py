# policies/__init__.py
"""Autoplay policies for the headless environment."""

from .random import policy_random
from .greedy import policy_greedy
from .eps_greedy import policy_eps_greedy

POLICIES = {
    "random": policy_random,
    "greedy": policy_greedy,
    "eps-greedy": policy_eps_greedy,
}

__all__ = ["POLICIES", "policy_random", "policy_greedy", "policy_eps_greedy"]
