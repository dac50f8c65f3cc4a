"""Tests for the right-hand rule and the NavigationAgent state machine."""
import pytest

from mazerunner import MazeConfig
from mazerunner.navigation import (
    Direction,
    NavigationAgent,
    right_hand_rule,
    EXIT_BY_DECISION,
    EXIT_BY_ARRIVAL,
)
from mazerunner.world import Grid, MazeGenerator

STRAIGHT_CORRIDOR = [
    "#.###",
    "#.###",
    "#.###",
    "#.###",
    "#.###",
]

L_CORRIDOR = [
    "#.#####",
    "#.#####",
    "#.....#",
    "#####.#",
    "#####.#",
    "#####.#",
    "#####.#",
]

# Two openings in the last row; the known exit is the right one
TWO_OPENINGS = [
    "#.#####",
    "#.#####",
    "#.....#",
    "#.###.#",
    "#.###.#",
    "#.###.#",
    "#.###.#",
]


def _run(agent: NavigationAgent, max_ticks: int) -> int:
    ticks = 0
    while not agent.has_reached_exit and ticks < max_ticks:
        agent.update()
        ticks += 1
    return ticks


def test_direction_turns():
    assert Direction.NORTH.right == Direction.EAST
    assert Direction.EAST.right == Direction.SOUTH
    assert Direction.SOUTH.right == Direction.WEST
    assert Direction.WEST.right == Direction.NORTH

    for d in Direction:
        assert d.right.left == d
        assert d.left.right == d
        assert d.right.right.right.right == d

    assert Direction.NORTH.left == Direction.WEST
    assert Direction.SOUTH.step((3, 3)) == (3, 4)
    assert Direction.WEST.step((3, 3)) == (2, 3)


def test_rule_prefers_right():
    decision = right_hand_rule(Direction.SOUTH, (5, 5), lambda x, y: True)
    assert decision.direction == Direction.WEST
    assert decision.target == (4, 5)
    assert decision.moves


def test_rule_goes_straight_when_right_closed():
    open_cells = {(5, 6)}
    decision = right_hand_rule(Direction.SOUTH, (5, 5), lambda x, y: (x, y) in open_cells)
    assert decision.direction == Direction.SOUTH
    assert decision.target == (5, 6)


def test_rule_turns_left_in_place_when_blocked():
    decision = right_hand_rule(Direction.SOUTH, (5, 5), lambda x, y: False)
    assert decision.direction == Direction.EAST
    assert decision.target is None
    assert not decision.moves


def test_rule_only_probes_right_then_ahead():
    probed = []

    def is_open(x, y):
        probed.append((x, y))
        return False

    right_hand_rule(Direction.NORTH, (2, 2), is_open)
    assert probed == [(3, 2), (2, 1)]


def test_agent_starts_on_entrance():
    grid = Grid.from_rows(STRAIGHT_CORRIDOR)
    agent = NavigationAgent(grid, (1, 0), (1, 4))
    config = grid.config

    start = grid.cell_to_world(1, 0)
    assert agent.position.x == pytest.approx(start.x)
    assert agent.position.z == pytest.approx(start.z)
    assert agent.position.y == pytest.approx(config.agent_height_offset)
    assert agent.current_cell == (1, 0)
    assert agent.direction == Direction.SOUTH
    assert agent.trail == []
    assert agent.target_position is None
    assert not agent.has_reached_exit
    assert agent.size["width"] == pytest.approx(config.cell_size * 0.6)


def test_straight_corridor_reaches_exit():
    grid = Grid.from_rows(STRAIGHT_CORRIDOR)
    agent = NavigationAgent(grid, (1, 0), (1, 4))

    ticks = 0
    while not agent.has_reached_exit:
        agent.update()
        ticks += 1
        assert ticks <= 200, "agent did not reach the exit"
        if agent.target_cell is not None:
            assert grid.is_path(*agent.target_cell)

    # 3 cells at 40 / 2 = 20 ticks each, then the exit is seen on the next decision
    assert ticks == 61
    assert agent.exit_detected_by == EXIT_BY_DECISION
    assert agent.last_chosen_cell == (1, 4)
    assert agent.current_cell == (1, 3)
    assert agent.direction == Direction.SOUTH


def test_decision_tick_still_moves():
    grid = Grid.from_rows(STRAIGHT_CORRIDOR)
    agent = NavigationAgent(grid, (1, 0), (1, 4))
    _run(agent, 200)

    last = agent.trail[-1]
    snapped = grid.cell_to_world(1, 3)
    assert last.z - snapped.z == pytest.approx(agent.speed)


def test_agent_turns_at_corner():
    grid = Grid.from_rows(L_CORRIDOR)
    agent = NavigationAgent(grid, (1, 0), (5, 6))

    headings = []
    stalls = 0
    for _ in range(1000):
        if agent.has_reached_exit:
            break
        trail_before = len(agent.trail)
        cell_before = agent.current_cell
        agent.update()
        if (
            agent.target_position is None
            and len(agent.trail) == trail_before
            and agent.current_cell == cell_before
        ):
            stalls += 1
        if not headings or headings[-1] != agent.direction:
            headings.append(agent.direction)

    assert agent.has_reached_exit
    assert headings == [Direction.SOUTH, Direction.EAST, Direction.SOUTH]
    # Blocked at (1, 2) heading south: one tick spent turning left
    assert stalls == 1
    assert agent.last_chosen_cell == (5, 6)


def test_dead_end_reversal_takes_two_left_turns():
    grid = Grid.from_rows([
        "#.###",
        "#.###",
        "#####",
        "#####",
        "###.#",
    ])
    agent = NavigationAgent(grid, (1, 0), (3, 4))

    # Walk into (1, 1), then face the dead end
    for _ in range(20):
        agent.update()
    assert agent.current_cell == (1, 1)

    agent.update()
    assert agent.direction == Direction.EAST
    assert agent.target_position is None
    agent.update()
    assert agent.direction == Direction.NORTH
    assert agent.target_position is None
    agent.update()
    assert agent.target_cell == (1, 0)


def test_exit_flag_is_monotonic_and_freezes_motion():
    grid = Grid.from_rows(L_CORRIDOR)
    agent = NavigationAgent(grid, (1, 0), (5, 6))
    _run(agent, 1000)
    assert agent.has_reached_exit

    position = agent.position.copy()
    trail_length = len(agent.trail)
    ticks = agent.ticks
    for _ in range(50):
        agent.update()
        assert agent.has_reached_exit
        assert agent.position == position
        assert len(agent.trail) == trail_length
        assert agent.target_position is None
    assert agent.ticks == ticks


def test_is_exit_cell_has_no_side_effect():
    grid = Grid.from_rows(STRAIGHT_CORRIDOR)
    agent = NavigationAgent(grid, (1, 0), (1, 4))

    assert agent.is_exit_cell(1, 4)
    assert not agent.is_exit_cell(1, 3)
    assert not agent.has_reached_exit


def test_is_valid_move_flags_exit():
    grid = Grid.from_rows(STRAIGHT_CORRIDOR)
    agent = NavigationAgent(grid, (1, 0), (1, 4))

    assert agent.is_valid_move(1, 2)
    assert not agent.is_valid_move(0, 2)
    assert not agent.has_reached_exit

    assert agent.is_valid_move(1, 4)
    assert agent.has_reached_exit
    assert agent.exit_detected_by == EXIT_BY_DECISION


def test_is_valid_move_guards_bounds():
    grid = Grid.from_rows(STRAIGHT_CORRIDOR)
    agent = NavigationAgent(grid, (1, 0), (1, 4))

    assert not agent.is_valid_move(1, -1)
    assert not agent.is_valid_move(-1, 0)
    assert not agent.is_valid_move(5, 2)
    assert not agent.is_valid_move(2, 99)


def test_arrival_check_can_disagree_with_exit_coordinate():
    grid = Grid.from_rows(TWO_OPENINGS)
    agent = NavigationAgent(grid, (1, 0), (5, 6))
    assert not agent.arrived_at_exit_row()

    _run(agent, 1000)

    # The agent walks straight down the left column into the other opening
    assert agent.has_reached_exit
    assert agent.exit_detected_by == EXIT_BY_ARRIVAL
    assert agent.current_cell == (1, 6)
    assert agent.arrived_at_exit_row()
    assert not agent.is_exit_cell(*agent.current_cell)


def test_arrival_check_without_last_row_opening():
    grid = Grid.from_rows([
        "#.###",
        "#.###",
        "#.###",
        "#.###",
        "#####",
    ])
    agent = NavigationAgent(grid, (1, 0), (3, 4))
    agent.current_cell = (1, 4)
    assert not agent.arrived_at_exit_row()


def _generated_agent(size, seed):
    layout = MazeGenerator(MazeConfig(maze_size=size), seed=seed).generate().require_endpoints()
    agent = NavigationAgent(layout.grid, layout.entrance, layout.exit, direction=Direction.SOUTH)
    return layout, agent


@pytest.mark.parametrize("seed", [0, 7, 42])
def test_full_maze_run_reaches_exit(seed):
    layout, agent = _generated_agent(21, seed)

    _run(agent, 50_000)

    assert agent.has_reached_exit
    assert agent.last_chosen_cell == layout.exit
    assert agent.exit_detected_by == EXIT_BY_DECISION
    assert len(agent.trail) > 0
    print(f"seed={seed}: exit after {agent.ticks} ticks, "
          f"{len(agent.trail_cells())} cells on the trail")


def test_trail_continuity():
    layout, agent = _generated_agent(11, 3)
    speed = agent.speed

    for _ in range(20_000):
        if agent.has_reached_exit:
            break
        before = agent.position.copy()
        trail_before = len(agent.trail)
        agent.update()

        grown = len(agent.trail) - trail_before
        assert grown in (0, 1)
        if grown:
            assert agent.trail[-1].distance_to(before) <= speed + 1e-9
        # Never farther than one step from where it was, snaps included
        assert agent.position.distance_to(before) <= speed + 1e-9

    assert agent.has_reached_exit


def test_trail_stays_on_path_cells():
    layout, agent = _generated_agent(15, 11)
    _run(agent, 50_000)

    for cell in agent.trail_cells():
        assert layout.grid.is_path(*cell)


def test_agent_never_touches_discovered_flags():
    layout, agent = _generated_agent(11, 5)
    _run(agent, 20_000)

    size = layout.grid.size
    assert not any(
        layout.grid.is_discovered(x, y) for y in range(size) for x in range(size)
    )


def test_get_state_snapshot():
    grid = Grid.from_rows(STRAIGHT_CORRIDOR)
    agent = NavigationAgent(grid, (1, 0), (1, 4))
    agent.update()

    state = agent.get_state()
    assert state["current_cell"] == [1, 0]
    assert state["target_cell"] == [1, 1]
    assert state["direction"] == "south"
    assert state["trail_length"] == 1
    assert state["has_reached_exit"] is False
    assert state["ticks"] == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v", "-s"])
