from .maze_env import MazeNavigationEnv, MazeEnvConfig
from .evaluation import evaluate_policy_fn

# Trainer needs stable-baselines3 (the "train" extra):
#     from mazerunner.training.trainer import Trainer, TrainerConfig
