"""
Smoke test for the PPO trainer. Needs the "train" extra (stable-baselines3).
"""
import os

import pytest

pytest.importorskip("stable_baselines3")

from mazerunner.training import MazeEnvConfig, MazeNavigationEnv
from mazerunner.training.trainer import Trainer, TrainerConfig


def _tiny_config(save_dir) -> TrainerConfig:
    return TrainerConfig(
        total_timesteps=128,
        n_steps=64,
        batch_size=32,
        n_epochs=1,
        n_envs=2,
        save_freq=0,
        save_dir=str(save_dir),
        env_config=MazeEnvConfig(maze_size=5, max_steps_per_episode=50),
    )


def test_untrained_trainer_refuses_to_act(tmp_path):
    trainer = Trainer(_tiny_config(tmp_path))
    with pytest.raises(RuntimeError):
        trainer.predict([0.0] * 6)
    with pytest.raises(RuntimeError):
        trainer.save("nothing")
    with pytest.raises(RuntimeError):
        trainer.evaluate()


def test_short_training_run(tmp_path):
    trainer = Trainer(_tiny_config(tmp_path))
    stats = trainer.train()

    assert "episode_rewards" in stats
    assert "episode_lengths" in stats

    env = MazeNavigationEnv(trainer.env_config, seed=0)
    obs, _ = env.reset(seed=0)
    action = trainer.predict(obs)
    assert action in (0, 1, 2, 3)

    results = trainer.evaluate(n_episodes=2)
    print(f"Tiny PPO: {results}")
    assert 0.0 <= results["success_rate"] <= 1.0
    assert results["n_episodes"] == 2

    path = trainer.save("tiny")
    assert os.path.exists(path + ".zip")

    trainer.close()
    env.close()


def test_load_round_trip(tmp_path):
    trainer = Trainer(_tiny_config(tmp_path))
    trainer.train()
    path = trainer.save("tiny")
    trainer.close()

    restored = Trainer(_tiny_config(tmp_path))
    restored.load(path)

    env = MazeNavigationEnv(restored.env_config, seed=1)
    obs, _ = env.reset(seed=1)
    assert restored.predict(obs) in (0, 1, 2, 3)


if __name__ == "__main__":
    pytest.main([__file__, "-v", "-s"])
