#!/usr/bin/env python3
"""
Train a PPO maze walker and compare it to the wall-follower baseline.

Requires the "train" extra (stable-baselines3).
Run from project root: python train_maze.py --timesteps 50000
"""
import argparse
import logging

from mazerunner.navigation import WallFollowerPolicy
from mazerunner.training import MazeNavigationEnv, MazeEnvConfig, evaluate_policy_fn
from mazerunner.training.trainer import Trainer, TrainerConfig


def print_results(label: str, results: dict) -> None:
    print(f"{label}:")
    print(f"  Mean reward: {results['mean_reward']:.2f} (+/- {results['std_reward']:.2f})")
    print(f"  Mean episode length: {results['mean_length']:.1f}")
    print(f"  Success rate: {results['success_rate']:.0%}")


def main():
    parser = argparse.ArgumentParser(description="Train a maze agent with PPO")
    parser.add_argument(
        "--timesteps", type=int, default=100_000,
        help="Total training timesteps"
    )
    parser.add_argument(
        "--n-envs", type=int, default=4,
        help="Number of environments"
    )
    parser.add_argument(
        "--maze-size", type=int, default=11,
        help="Maze side length (odd, >= 5)"
    )
    parser.add_argument(
        "--maze-seed", type=int, default=None,
        help="Train on a single fixed maze"
    )
    parser.add_argument(
        "--save-dir", type=str, default="models",
        help="Directory to save models"
    )
    parser.add_argument(
        "--seed", type=int, default=42,
        help="Random seed"
    )
    parser.add_argument(
        "--eval-only", action="store_true",
        help="Only evaluate an existing model"
    )
    parser.add_argument(
        "--model-path", type=str, default=None,
        help="Path to model to load (for eval or continued training)"
    )
    parser.add_argument(
        "--verbose", action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    env_config = MazeEnvConfig(maze_size=args.maze_size, maze_seed=args.maze_seed)
    trainer_config = TrainerConfig(
        total_timesteps=args.timesteps,
        n_envs=args.n_envs,
        save_dir=args.save_dir,
        seed=args.seed,
        env_config=env_config,
    )
    trainer = Trainer(config=trainer_config)

    if args.model_path:
        trainer.load(args.model_path)

    if args.eval_only and not args.model_path:
        print("Error: --model-path required for --eval-only")
        return

    if not args.eval_only:
        print("\n=== Training Configuration ===")
        print(f"Timesteps: {args.timesteps}")
        print(f"Environments: {args.n_envs}")
        print(f"Maze size: {args.maze_size}")
        print(f"Seed: {args.seed}")
        print()

        stats = trainer.train()
        trainer.save("ppo_maze_final")

        if stats["episode_rewards"]:
            print(f"\nTraining episodes completed: {len(stats['episode_rewards'])}")
            last_rewards = stats["episode_rewards"][-100:]
            print(f"Average reward (last 100): {sum(last_rewards)/len(last_rewards):.2f}")

    print("\n=== Evaluation ===")
    print_results("PPO", trainer.evaluate(n_episodes=20))

    baseline = WallFollowerPolicy()
    baseline_env = MazeNavigationEnv(config=env_config)
    baseline_results = evaluate_policy_fn(
        baseline_env, baseline.act, n_episodes=20,
        seed=args.seed + 9999, on_reset=baseline.reset,
    )
    print_results("Wall follower", baseline_results)

    trainer.close()
    print("\nDone!")


if __name__ == "__main__":
    main()
