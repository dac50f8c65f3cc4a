from .events import Event, EventType, EventQueue
from .simulation import Simulation, SimulationConfig, StepResult, RunSummary

__all__ = [
    "Event",
    "EventType",
    "EventQueue",
    "Simulation",
    "SimulationConfig",
    "StepResult",
    "RunSummary",
]
