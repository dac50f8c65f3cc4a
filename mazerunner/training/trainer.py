"""
PPO training on MazeNavigationEnv with stable-baselines3.

Needs the "train" extra. Checkpoints land in TrainerConfig.save_dir.
"""
import os
from collections import deque
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Deque, Dict, List, Optional

from stable_baselines3 import PPO
from stable_baselines3.common.callbacks import BaseCallback, CheckpointCallback
from stable_baselines3.common.monitor import Monitor
from stable_baselines3.common.utils import set_random_seed
from stable_baselines3.common.vec_env import DummyVecEnv

from .evaluation import evaluate_policy_fn
from .maze_env import MazeEnvConfig, MazeNavigationEnv

EVAL_SEED_OFFSET = 9999  # Evaluation mazes never overlap the training seeds


@dataclass
class TrainerConfig:
    """PPO hyperparameters plus run settings."""
    total_timesteps: int = 100_000
    learning_rate: float = 3e-4
    n_steps: int = 2048          # Rollout length per env
    batch_size: int = 64
    n_epochs: int = 10
    gamma: float = 0.99
    gae_lambda: float = 0.95
    clip_range: float = 0.2
    ent_coef: float = 0.01       # Keeps early exploration of dead ends

    n_envs: int = 4
    env_config: Optional[MazeEnvConfig] = None

    save_dir: str = "models"
    save_freq: int = 10_000      # Timesteps between checkpoints (0 disables)

    seed: int = 42


def make_env_fn(env_config: MazeEnvConfig, seed: int) -> Callable[[], Monitor]:
    """Factory for DummyVecEnv: one Monitor-wrapped maze env per seed."""
    def _init() -> Monitor:
        return Monitor(MazeNavigationEnv(config=env_config, seed=seed))
    return _init


class MazeProgressCallback(BaseCallback):
    """
    Collects finished-episode rewards, lengths and exits found.

    Monitor puts an "episode" entry into the info dict when an episode ends;
    the env's own "is_success" flag tells whether it ended on the exit.
    """

    def __init__(self, report_every: int = 20, verbose: int = 0):
        super().__init__(verbose)
        self.report_every = report_every
        self.rewards: List[float] = []
        self.lengths: List[int] = []
        self.successes: List[bool] = []
        self._recent: Deque[bool] = deque(maxlen=report_every)

    def _on_step(self) -> bool:
        for info in self.locals.get("infos", []):
            episode = info.get("episode")
            if episode is None:
                continue

            solved = bool(info.get("is_success", False))
            self.rewards.append(float(episode["r"]))
            self.lengths.append(int(episode["l"]))
            self.successes.append(solved)
            self._recent.append(solved)

            if self.verbose and len(self.rewards) % self.report_every == 0:
                n = self.report_every
                print(f"Episodes: {len(self.rewards)}, "
                      f"exits found (last {n}): {sum(self._recent)}/{len(self._recent)}, "
                      f"mean reward: {sum(self.rewards[-n:]) / n:.2f}, "
                      f"mean length: {sum(self.lengths[-n:]) / n:.1f}")
        return True

    def get_stats(self) -> Dict[str, Any]:
        return {
            "episode_rewards": self.rewards,
            "episode_lengths": self.lengths,
            "episode_successes": self.successes,
        }


class Trainer:
    """
    Trains a PPO policy to walk generated mazes.

    Example:
        trainer = Trainer(TrainerConfig(total_timesteps=50_000))
        trainer.train()
        path = trainer.save("ppo_maze")

        trainer.load(path)
        action = trainer.predict(obs)
    """

    def __init__(self, config: Optional[TrainerConfig] = None):
        self.config = config or TrainerConfig()
        self.model: Optional[PPO] = None
        self.vec_env: Optional[DummyVecEnv] = None
        self.callback: Optional[MazeProgressCallback] = None

        Path(self.config.save_dir).mkdir(parents=True, exist_ok=True)

    @property
    def env_config(self) -> MazeEnvConfig:
        return self.config.env_config or MazeEnvConfig()

    def _require_model(self, action: str) -> PPO:
        if self.model is None:
            raise RuntimeError(f"Cannot {action}: no model. Train or load one first.")
        return self.model

    def setup(self) -> None:
        """Build the vectorised maze envs and a fresh PPO model."""
        cfg = self.config
        set_random_seed(cfg.seed)

        self.vec_env = DummyVecEnv([
            make_env_fn(self.env_config, cfg.seed + rank) for rank in range(cfg.n_envs)
        ])
        self.model = PPO(
            "MlpPolicy",
            self.vec_env,
            learning_rate=cfg.learning_rate,
            n_steps=cfg.n_steps,
            batch_size=cfg.batch_size,
            n_epochs=cfg.n_epochs,
            gamma=cfg.gamma,
            gae_lambda=cfg.gae_lambda,
            clip_range=cfg.clip_range,
            ent_coef=cfg.ent_coef,
            seed=cfg.seed,
            verbose=0,
        )

        n_params = sum(p.numel() for p in self.model.policy.parameters() if p.requires_grad)
        print(f"PPO ready: {cfg.n_envs} envs, {self.env_config.maze_size}x"
              f"{self.env_config.maze_size} mazes, {n_params} parameters")

    def train(self, progress_bar: bool = False) -> Dict[str, Any]:
        """Run PPO for total_timesteps; returns per-episode statistics."""
        if self.model is None:
            self.setup()

        cfg = self.config
        self.callback = MazeProgressCallback(verbose=1)
        callbacks: List[BaseCallback] = [self.callback]
        if cfg.save_freq > 0:
            # CheckpointCallback counts calls, one per vectorised step
            callbacks.append(CheckpointCallback(
                save_freq=max(cfg.save_freq // cfg.n_envs, 1),
                save_path=cfg.save_dir,
                name_prefix="ppo_maze",
            ))

        print(f"Training for {cfg.total_timesteps} timesteps...")
        self.model.learn(
            total_timesteps=cfg.total_timesteps,
            callback=callbacks,
            progress_bar=progress_bar,
        )
        return self.callback.get_stats()

    def save(self, name: str) -> str:
        model = self._require_model("save")
        path = os.path.join(self.config.save_dir, name)
        model.save(path)
        print(f"Saved model to {path}.zip")
        return path

    def load(self, path: str) -> None:
        self.model = PPO.load(path)
        print(f"Loaded model from {path}")

    def predict(self, observation, deterministic: bool = True) -> int:
        """Action index (0-3, N/E/S/W) for one observation."""
        action, _ = self._require_model("predict").predict(
            observation, deterministic=deterministic
        )
        return int(action)

    def evaluate(self, n_episodes: int = 10) -> Dict[str, Any]:
        """Success rate and mean episode length on held-out mazes."""
        self._require_model("evaluate")

        env = MazeNavigationEnv(config=self.env_config)
        try:
            return evaluate_policy_fn(
                env, self.predict,
                n_episodes=n_episodes,
                seed=self.config.seed + EVAL_SEED_OFFSET,
            )
        finally:
            env.close()

    def close(self) -> None:
        if self.vec_env is not None:
            self.vec_env.close()
            self.vec_env = None
