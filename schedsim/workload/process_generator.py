"""Synthetic process generation for simulation runs."""

from typing import Dict, List, Optional

from ..models.process import Process, ProcessState
from ..utils.random_source import RandomSource
from ..utils.logger import setup_logger


class ProcessGenerator:
    """Seed and respawn synthetic processes.

    Priorities are drawn once per identity and shared by ``priority`` and
    ``base_priority``. Burst times are drawn once per life and shared by
    ``burst_time`` and ``remaining_time``.
    """

    def __init__(self, config: Dict, random_source: Optional[RandomSource] = None):
        """Initialize process generator.

        Args:
            config: Workload configuration
            random_source: Source of random draws
        """
        self.config = config
        self.random = random_source or RandomSource()
        self.logger = setup_logger(self.__class__.__name__)

        self.pid_base = config.get('pid_base', 1000)

        # Inclusive priority range
        self.min_priority = config.get('min_priority', 1)
        self.max_priority = config.get('max_priority', 10)

        # Half-open burst range [min, max)
        self.min_burst = config.get('min_burst', 5)
        self.max_burst = config.get('max_burst', 25)

        if self.min_priority > self.max_priority:
            raise ValueError("min_priority must not exceed max_priority")
        if not 0 < self.min_burst < self.max_burst:
            raise ValueError("Burst range must satisfy 0 < min_burst < max_burst")

    def generate(self, count: int, timestamp: int) -> List[Process]:
        """Create a fresh batch of ready processes.

        Args:
            count: Number of processes
            timestamp: Arrival timestamp in epoch ms

        Returns:
            Processes in pid order
        """
        processes = [self._create_process(self.pid_base + i, timestamp)
                     for i in range(count)]
        self.logger.debug(f"Generated {len(processes)} processes")
        return processes

    def respawn(self, process: Process, timestamp: int) -> Process:
        """Reset a terminated process in place for a new life.

        Identity fields (pid, name, base priority, color) are kept.

        Args:
            process: Process to reset
            timestamp: Respawn timestamp in epoch ms

        Returns:
            The same process object
        """
        burst = self.draw_burst()
        process.state = ProcessState.READY
        process.arrival_time = timestamp
        process.burst_time = burst
        process.remaining_time = burst
        process.wait_time = 0
        process.cpu_usage = 0
        process.turnaround_time = 0
        process.clear_boost()
        return process

    def draw_burst(self) -> int:
        return self.random.randint(self.min_burst, self.max_burst)

    def _create_process(self, pid: int, timestamp: int) -> Process:
        priority = self.random.randint(self.min_priority, self.max_priority + 1)
        burst = self.draw_burst()
        return Process(
            pid=pid,
            name=f"Process-{pid}",
            priority=priority,
            base_priority=priority,
            arrival_time=timestamp,
            burst_time=burst,
            remaining_time=burst,
            color=f"hsl({self.random.hue():.0f}, 70%, 50%)",
        )
