"""
Episode evaluation for any policy callable.

Works for the wall-follower baseline and for trained models alike, so the
two can be compared on the same mazes.
"""
from typing import Any, Callable, Dict, Optional

import numpy as np

from .maze_env import MazeNavigationEnv

PolicyFn = Callable[[np.ndarray], int]


def evaluate_policy_fn(
    env: MazeNavigationEnv,
    policy_fn: PolicyFn,
    n_episodes: int = 10,
    seed: Optional[int] = None,
    on_reset: Optional[Callable[[], None]] = None,
) -> Dict[str, Any]:
    """
    Run n_episodes and collect reward, length and success statistics.

    Args:
        env: Environment to run
        policy_fn: Maps an observation to an action
        n_episodes: Number of episodes
        seed: Seed for the first reset (later resets continue the sequence)
        on_reset: Called after each reset, e.g. to reset a stateful policy

    Returns:
        Dict with mean_reward, std_reward, mean_length, success_rate
    """
    rewards = []
    lengths = []
    successes = 0

    for episode in range(n_episodes):
        obs, _ = env.reset(seed=seed if episode == 0 else None)
        if on_reset is not None:
            on_reset()

        done = False
        episode_reward = 0.0
        episode_length = 0
        info: Dict[str, Any] = {}

        while not done:
            action = policy_fn(obs)
            obs, reward, terminated, truncated, info = env.step(action)
            done = terminated or truncated
            episode_reward += reward
            episode_length += 1

        rewards.append(episode_reward)
        lengths.append(episode_length)
        if info.get("is_success"):
            successes += 1

    return {
        "mean_reward": float(np.mean(rewards)),
        "std_reward": float(np.std(rewards)),
        "mean_length": float(np.mean(lengths)),
        "success_rate": successes / n_episodes,
        "n_episodes": n_episodes,
    }
