"""
Navigation for maze agents.

- right_hand_rule: the local wall-following decision
- NavigationAgent: tick-driven agent with continuous motion and a trail
- WallFollowerPolicy: the same rule as a baseline policy for MazeNavigationEnv

Example usage:
    from mazerunner.navigation import NavigationAgent

    agent = NavigationAgent(grid, entrance, exit_cell)
    while not agent.has_reached_exit:
        agent.update()
"""
from .directions import Direction, DIRECTION_DELTAS
from .wall_follower import (
    DIRECTION_ORDER,
    WallFollowDecision,
    WallFollowerPolicy,
    right_hand_rule,
)
from .agent import NavigationAgent, EXIT_BY_DECISION, EXIT_BY_ARRIVAL

__all__ = [
    "Direction",
    "DIRECTION_DELTAS",
    "DIRECTION_ORDER",
    "WallFollowDecision",
    "WallFollowerPolicy",
    "right_hand_rule",
    "NavigationAgent",
    "EXIT_BY_DECISION",
    "EXIT_BY_ARRIVAL",
]
