import logging
from collections import deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Deque, Dict, List, Optional

logger = logging.getLogger(__name__)


class EventType(Enum):
    # Host requests, handled at the start of a tick
    REGENERATE = auto()

    # Emitted by the simulation
    MAZE_GENERATED = auto()
    TURNED = auto()          # Left turn in place, no motion this tick
    CELL_REACHED = auto()    # Snapped onto a new cell
    EXIT_REACHED = auto()


@dataclass
class Event:
    """Something that happened at a tick, or a host request for one."""
    event_type: EventType
    tick: int
    data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_type": self.event_type.name.lower(),
            "tick": self.tick,
            "data": dict(self.data),
        }


class EventQueue:
    """
    Buffers host requests between ticks.

    Bounded: when full, the oldest pending request is dropped. Requests the
    simulation has acted on are kept in a processed history.
    """

    def __init__(self, max_size: int = 100):
        self.max_size = max_size
        self._pending: Deque[Event] = deque(maxlen=max_size)
        self._processed: List[Event] = []

    def push(self, event: Event) -> None:
        if len(self._pending) == self.max_size:
            dropped = self._pending[0]
            logger.warning("Event queue full, dropping %s from tick %d",
                           dropped.event_type.name, dropped.tick)
        self._pending.append(event)

    def push_regenerate(self, tick: int, seed: Optional[int] = None) -> None:
        """Ask for a new maze (and agent) before the next tick runs."""
        self.push(Event(EventType.REGENERATE, tick, {"seed": seed}))

    def pop_all(self) -> List[Event]:
        """Drain pending events, oldest first."""
        events = []
        while self._pending:
            events.append(self._pending.popleft())
        return events

    def record_processed(self, event: Event) -> None:
        self._processed.append(event)

    def get_processed_history(self) -> List[Dict[str, Any]]:
        return [e.to_dict() for e in self._processed]

    def clear_history(self) -> None:
        self._processed.clear()

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    @property
    def history_count(self) -> int:
        return len(self._processed)
