"""CPU selection policies."""

from collections import deque
from enum import Enum
from typing import Dict, List, Optional

from ..models.process import Process, ProcessState


class Algorithm(Enum):
    """Scheduling algorithms accepted by the engine."""
    ROUND_ROBIN = "round-robin"
    STATIC_PRIORITY = "static-priority"
    AI_BOOST = "ai-boost-dynamic-priority"

    @classmethod
    def from_name(cls, name) -> "Algorithm":
        """Resolve a canonical name or short alias.

        Raises:
            ValueError: If the name is unknown
        """
        if isinstance(name, cls):
            return name
        key = str(name).strip().lower()
        resolved = _ALIASES.get(key)
        if resolved is None:
            try:
                resolved = cls(key)
            except ValueError:
                choices = sorted([a.value for a in cls] + list(_ALIASES))
                raise ValueError(
                    f"Unknown algorithm: {name!r} (expected one of {', '.join(choices)})"
                ) from None
        return resolved

    @property
    def uses_starvation_heuristic(self) -> bool:
        return self is Algorithm.AI_BOOST


_ALIASES = {
    'rr': Algorithm.ROUND_ROBIN,
    'priority': Algorithm.STATIC_PRIORITY,
    'ai-boost': Algorithm.AI_BOOST,
}


class SchedulingPolicy:
    """Base policy: pick the process that should hold the CPU this tick."""

    name = "base"

    def select(self, processes: List[Process]) -> Optional[Process]:
        """Choose among ready/running processes.

        Args:
            processes: Whole process set, in pid order

        Returns:
            Winner, or None if there are no candidates
        """
        raise NotImplementedError

    def reset(self) -> None:
        """Forget per-run state."""


class PriorityPolicy(SchedulingPolicy):
    """Highest current priority wins; ties go to the earliest process."""

    name = "priority"

    def select(self, processes: List[Process]) -> Optional[Process]:
        candidates = [p for p in processes if p.is_candidate]
        if not candidates:
            return None
        # max() keeps the first of equal keys
        return max(candidates, key=lambda p: p.priority)


class RoundRobinPolicy(SchedulingPolicy):
    """FIFO rotation with a fixed quantum measured in ticks."""

    name = "round_robin"

    def __init__(self, quantum: int = 2):
        """Initialize round-robin policy.

        Args:
            quantum: Ticks a process may run before yielding
        """
        if quantum < 1:
            raise ValueError("Round-robin quantum must be at least 1 tick")
        self.quantum = quantum
        self._queue = deque()
        self._slice_used = 0

    def reset(self) -> None:
        self._queue.clear()
        self._slice_used = 0

    def select(self, processes: List[Process]) -> Optional[Process]:
        by_pid: Dict[int, Process] = {p.pid: p for p in processes if p.is_candidate}
        if not by_pid:
            self.reset()
            return None

        # Drop finished pids, enqueue newly ready ones at the back
        self._queue = deque(pid for pid in self._queue if pid in by_pid)
        for pid in by_pid:
            if pid not in self._queue:
                self._queue.append(pid)

        current = next((p for p in by_pid.values()
                        if p.state == ProcessState.RUNNING), None)

        if current is not None and self._slice_used < self.quantum:
            self._slice_used += 1
            return current

        if current is not None:
            self._queue.remove(current.pid)
            self._queue.append(current.pid)

        self._slice_used = 1
        return by_pid[self._queue[0]]


def create_policy(algorithm: Algorithm, config: Optional[Dict] = None) -> SchedulingPolicy:
    """Build the selection policy for an algorithm.

    Args:
        algorithm: Scheduling algorithm
        config: Scheduler configuration

    Returns:
        Policy instance
    """
    config = config or {}
    if algorithm is Algorithm.ROUND_ROBIN:
        return RoundRobinPolicy(config.get('time_quantum', 2))
    return PriorityPolicy()
