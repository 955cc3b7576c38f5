"""Process record and its state machine."""

from dataclasses import dataclass
from enum import Enum

from dataclasses_json import dataclass_json, LetterCase


class ProcessState(Enum):
    """States of a simulated process."""
    READY = "ready"
    RUNNING = "running"
    WAITING = "waiting"
    TERMINATED = "terminated"


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class Process:
    """A schedulable unit.

    ``pid``, ``name``, ``base_priority`` and ``color`` are fixed for the
    lifetime of the identity; everything else is reset on respawn.
    """
    pid: int
    name: str
    priority: int
    base_priority: int
    arrival_time: int
    burst_time: int
    remaining_time: int
    color: str
    state: ProcessState = ProcessState.READY

    # Counters
    wait_time: int = 0
    cpu_usage: int = 0
    turnaround_time: int = 0

    # Heuristic flags
    is_starving: bool = False
    boosted: bool = False

    @property
    def is_active(self) -> bool:
        """Check if process is not terminated."""
        return self.state != ProcessState.TERMINATED

    @property
    def is_candidate(self) -> bool:
        """Check if process can be selected for the CPU."""
        return self.state in (ProcessState.READY, ProcessState.RUNNING)

    @property
    def wait_ratio(self) -> float:
        """Share of observed ticks spent waiting, damped by one."""
        return self.wait_time / (self.cpu_usage + self.wait_time + 1)

    def run_for_tick(self) -> bool:
        """Consume one tick of service.

        Returns:
            True if the process terminated on this tick
        """
        self.remaining_time = max(0, self.remaining_time - 1)
        self.cpu_usage += 1
        if self.remaining_time == 0:
            self.terminate()
            return True
        return False

    def terminate(self) -> None:
        """Move process to the terminated state."""
        self.remaining_time = 0
        self.state = ProcessState.TERMINATED
        self.turnaround_time = self.wait_time + self.cpu_usage

    def clear_boost(self) -> None:
        """Drop heuristic flags and restore base priority."""
        self.boosted = False
        self.is_starving = False
        self.priority = self.base_priority

    def __repr__(self) -> str:
        return (f"Process(pid={self.pid}, state={self.state.value}, "
                f"prio={self.priority}, remaining={self.remaining_time})")
