"""
Gym environment for discrete maze navigation.

The policy moves one cell per step using only what the wall follower sees:
which of the four neighbouring cells are open, plus its own normalised grid
position. WallFollowerPolicy is the baseline policy for this environment.
"""
import logging
import random
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import gymnasium as gym
from gymnasium import spaces
import numpy as np

from mazerunner.config import MazeConfig
from mazerunner.navigation import DIRECTION_ORDER
from mazerunner.world import MazeGenerator, MazeLayout

logger = logging.getLogger(__name__)

OBSERVATION_DIM = 6  # open N, E, S, W + x, y


@dataclass
class MazeEnvConfig:
    """Episode and reward settings for MazeNavigationEnv."""
    maze_size: int = 11
    maze_seed: Optional[int] = None   # Fixed maze for every episode if set
    max_steps_per_episode: int = 500

    exit_bonus: float = 10.0          # Reward for stepping onto the exit
    time_penalty: float = -0.01       # Small penalty each step to encourage speed
    collision_penalty: float = -0.1   # Penalty for walking into a wall


class MazeNavigationEnv(gym.Env):
    """
    Environment for learning to walk from the entrance to the exit.

    Episode structure:
    - Episode starts: a maze is generated, agent placed on the entrance
    - Episode step: agent moves one cell (or bumps a wall), gets reward
    - Episode ends: agent on the exit cell, or max steps reached

    Action space: Discrete(4) - NORTH, EAST, SOUTH, WEST
    Observation space: Box(6,) - neighbour openness + normalised position
    """

    metadata = {"render_modes": ["ansi"]}

    def __init__(
        self,
        config: Optional[MazeEnvConfig] = None,
        seed: Optional[int] = None,
        render_mode: Optional[str] = None,
    ):
        super().__init__()

        self.config = config or MazeEnvConfig()
        self._maze_config = MazeConfig(maze_size=self.config.maze_size)
        self._rng = random.Random(seed)
        self.render_mode = render_mode

        self._layout: Optional[MazeLayout] = None
        self._cell: Optional[Tuple[int, int]] = None
        self._visited: List[Tuple[int, int]] = []
        self._current_step = 0

        self.action_space = spaces.Discrete(len(DIRECTION_ORDER))
        self.observation_space = spaces.Box(
            low=0.0,
            high=1.0,
            shape=(OBSERVATION_DIM,),
            dtype=np.float32,
        )

    @property
    def layout(self) -> Optional[MazeLayout]:
        return self._layout

    @property
    def cell(self) -> Optional[Tuple[int, int]]:
        return self._cell

    def reset(
        self,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment with a freshly generated maze.

        Args:
            seed: Random seed
            options: Optional 'maze_seed' overriding the configured one

        Returns:
            observation: Initial observation
            info: Additional info dict
        """
        super().reset(seed=seed)
        if seed is not None:
            self._rng = random.Random(seed)

        maze_seed = self.config.maze_seed
        if options and "maze_seed" in options:
            maze_seed = options["maze_seed"]
        if maze_seed is None:
            maze_seed = self._rng.randint(0, 1_000_000)

        generator = MazeGenerator(self._maze_config, seed=maze_seed)
        self._layout = generator.generate().require_endpoints()
        self._cell = self._layout.entrance
        self._visited = [self._cell]
        self._current_step = 0

        logger.debug("Episode reset with maze seed %d", maze_seed)
        return self._get_observation(), self._get_info(maze_seed=maze_seed)

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, float, bool, bool, Dict[str, Any]]:
        """
        Execute one step in the environment.

        Args:
            action: Action ID (0-3: NORTH, EAST, SOUTH, WEST)

        Returns:
            observation, reward, terminated, truncated, info
        """
        if self._layout is None:
            raise RuntimeError("Environment not initialized. Call reset() first.")

        direction = DIRECTION_ORDER[int(action)]
        target = direction.step(self._cell)
        reward = self.config.time_penalty

        collided = not self._layout.grid.is_path(*target)
        if collided:
            reward += self.config.collision_penalty
        else:
            self._cell = target
            self._visited.append(target)

        self._current_step += 1

        terminated = self._cell == self._layout.exit
        if terminated:
            reward += self.config.exit_bonus
        truncated = not terminated and self._current_step >= self.config.max_steps_per_episode

        info = self._get_info(collided=collided)
        return self._get_observation(), float(reward), terminated, truncated, info

    def _get_observation(self) -> np.ndarray:
        grid = self._layout.grid
        x, y = self._cell
        scale = grid.size - 1

        obs = np.zeros(OBSERVATION_DIM, dtype=np.float32)
        for i, direction in enumerate(DIRECTION_ORDER):
            obs[i] = 1.0 if grid.is_path(*direction.step(self._cell)) else 0.0
        obs[4] = x / scale
        obs[5] = y / scale
        return obs

    def _get_info(self, **extra: Any) -> Dict[str, Any]:
        info = {
            "cell": self._cell,
            "exit": self._layout.exit,
            "step": self._current_step,
            "is_success": self._cell == self._layout.exit,
        }
        info.update(extra)
        return info

    def render(self) -> Optional[str]:
        """Render the maze with visited cells as ASCII."""
        if self._layout is None:
            return None
        return self._layout.grid.to_ascii(
            trail=self._visited,
            agent=self._cell,
            entrance=self._layout.entrance,
            exit_cell=self._layout.exit,
        )

    def close(self) -> None:
        self._layout = None
