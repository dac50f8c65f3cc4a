#!/usr/bin/env python3
"""
Generate a maze and let the wall follower walk it.
Run from project root: python demo_maze.py --seed 42
"""
import argparse
import json
import logging
import time

from mazerunner import MazeConfig, Simulation, SimulationConfig, MazeError


def print_frame(sim: Simulation) -> None:
    agent = sim.agent
    print("\n" * 2)
    print(sim.render_ascii())
    print(f"Tick {sim.tick:5d} | cell {agent.current_cell} | heading {agent.direction.value:5s} "
          f"| trail {len(agent.trail)}")


def main():
    parser = argparse.ArgumentParser(description="Maze generation and wall-following demo")
    parser.add_argument(
        "--size", type=int, default=21,
        help="Maze side length (odd, >= 5)"
    )
    parser.add_argument(
        "--seed", type=int, default=None,
        help="Random seed"
    )
    parser.add_argument(
        "--speed", type=float, default=2.0,
        help="Agent speed in world units per tick"
    )
    parser.add_argument(
        "--max-ticks", type=int, default=50_000,
        help="Stop the run after this many ticks"
    )
    parser.add_argument(
        "--animate", action="store_true",
        help="Print the maze every time the agent reaches a cell"
    )
    parser.add_argument(
        "--delay", type=float, default=0.05,
        help="Seconds between animation frames"
    )
    parser.add_argument(
        "--json", action="store_true",
        help="Print the final state as JSON"
    )
    parser.add_argument(
        "--verbose", action="store_true",
        help="Enable info logging"
    )

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = MazeConfig(maze_size=args.size, agent_speed=args.speed)
        sim = Simulation(config, SimulationConfig(seed=args.seed, max_ticks=args.max_ticks))
    except MazeError as e:
        parser.error(str(e))

    print("=== Maze Demo ===")
    print(f"Entrance: {sim.layout.entrance}  Exit: {sim.layout.exit}")
    print(sim.layout.grid.to_ascii(entrance=sim.layout.entrance, exit_cell=sim.layout.exit))

    if args.animate:
        while not sim.agent.has_reached_exit and sim.tick < args.max_ticks:
            result = sim.step()
            if any(e.event_type.name == "CELL_REACHED" for e in result.events):
                print_frame(sim)
                time.sleep(args.delay)
        summary = sim.run(max_ticks=0)
    else:
        summary = sim.run(max_ticks=args.max_ticks)
        print_frame(sim)

    print("\n=== Run Summary ===")
    print(f"Reached exit: {summary.reached_exit}")
    print(f"Ticks: {summary.ticks}")
    print(f"Cells visited: {summary.cells_visited}")
    print(f"Trail points: {summary.trail_length}")
    print(f"Exit detected by: {summary.exit_detected_by}")

    if args.json:
        state = sim.get_state()
        state.pop("trail")
        state["maze"].pop("grid")
        print(json.dumps(state, indent=2))


if __name__ == "__main__":
    main()
