"""Scheduler engine driving the live simulation."""

import copy
import threading
import time
from typing import Any, Callable, Dict, List, Optional

from .broadcaster import Broadcaster, StreamEvent, Subscriber
from .event_queue import Event
from .metrics_collector import MetricsCollector
from .params import SimulationParams
from .task_scheduler import TaskScheduler, ThreadedTaskScheduler
from ..models.process import Process, ProcessState
from ..models.telemetry import SimulationMetrics
from ..scheduling.policies import SchedulingPolicy, create_policy
from ..scheduling.starvation import StarvationDetector
from ..workload.process_generator import ProcessGenerator
from ..utils.random_source import RandomSource
from ..utils.logger import setup_logger


class SchedulerEngine:
    """Owns the process set and runs the periodic tick.

    Each tick is one transaction over the whole set:
    - select the process holding the CPU
    - advance the running process and age the ready ones
    - run starvation boost/normalize (AI mode only)
    - compute metrics and broadcast state

    Every mutation (start, stop, tick, respawn) runs under one lock. Timer
    callbacks carry the generation of the run that scheduled them and are
    ignored once that run has been stopped or replaced.
    """

    def __init__(self, config: Optional[Dict] = None,
                 task_scheduler: Optional[TaskScheduler] = None,
                 random_source: Optional[RandomSource] = None,
                 clock: Optional[Callable[[], float]] = None):
        """Initialize engine.

        Args:
            config: Configuration dictionary
            task_scheduler: Timer driver, a wall-clock thread by default
            random_source: Source of all random draws
            clock: Wall clock in seconds used for timestamps
        """
        self.config = config or {}
        self.logger = setup_logger(self.__class__.__name__)

        engine_config = self.config.get('engine', {})
        self.tick_base_ms = engine_config.get('tick_base_ms', 1000)
        self.min_tick_ms = engine_config.get('min_tick_ms', 100)
        self.respawn_delay_ms = engine_config.get('respawn_delay_ms', 2000)

        if random_source is None:
            seed = self.config.get('simulation', {}).get('random_seed')
            random_source = RandomSource(seed)
        self.random = random_source
        self.clock = clock or time.time
        self.task_scheduler = task_scheduler or ThreadedTaskScheduler()

        # Components
        self.broadcaster = Broadcaster()
        self.generator = ProcessGenerator(self.config.get('workload', {}), self.random)
        self.detector = StarvationDetector(self.config.get('heuristic', {}))
        self.metrics_collector = MetricsCollector(self.config.get('metrics', {}), self.random)

        # Run state
        self._lock = threading.RLock()
        self._processes: Dict[int, Process] = {}
        self._running = False
        self._generation = 0
        self._tick_handle: Optional[Event] = None
        self._respawn_handles: Dict[int, Event] = {}

        self.params: Optional[SimulationParams] = None
        self.policy: Optional[SchedulingPolicy] = None
        self.simulation_id: Optional[str] = None
        self.tick_count = 0

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def processes(self) -> List[Process]:
        """Copies of the current processes in pid order."""
        with self._lock:
            return [copy.copy(p) for p in self._processes.values()]

    @property
    def metrics(self) -> SimulationMetrics:
        return self.metrics_collector.latest

    def subscribe(self, subscriber: Subscriber) -> Callable[[], None]:
        """Register an event subscriber; returns its unsubscribe function."""
        return self.broadcaster.subscribe(subscriber)

    def tick_interval(self, speed_multiplier: float) -> float:
        """Tick period in seconds for a speed multiplier."""
        return max(self.min_tick_ms, self.tick_base_ms / speed_multiplier) / 1000.0

    def start(self, process_count: int = 10, algorithm: Any = "ai-boost-dynamic-priority",
              speed_multiplier: float = 1.0) -> str:
        """Start a new run, replacing any current one.

        Args:
            process_count: Number of processes (1-20)
            algorithm: Algorithm name or alias
            speed_multiplier: Tick rate multiplier (0.1-5.0)

        Returns:
            Simulation id

        Raises:
            pydantic.ValidationError: If parameters are invalid; nothing changes
        """
        params = SimulationParams(
            process_count=process_count,
            algorithm=algorithm,
            speed_multiplier=speed_multiplier,
        )

        with self._lock:
            if self._running:
                self.stop()

            self._cancel_timers()
            self._generation += 1
            now = self._timestamp()

            self.params = params
            self.policy = create_policy(params.algorithm, self.config.get('scheduler', {}))
            self.metrics_collector.reset()
            self.tick_count = 0
            self._processes = {
                p.pid: p for p in self.generator.generate(params.process_count, now)
            }

            interval = self.tick_interval(params.speed_multiplier)
            self._running = True
            self._tick_handle = self.task_scheduler.call_every(
                interval, self._on_tick, self._generation
            )
            self.simulation_id = f"sim-{now}"

            self.logger.info(
                f"Started {self.simulation_id}: {params.process_count} processes, "
                f"algorithm={params.algorithm.value}, tick={interval * 1000:.0f}ms"
            )
            self._publish(StreamEvent.STATE_UPDATE, self._snapshot())
            return self.simulation_id

    def stop(self) -> None:
        """Halt ticking and pending respawns, then emit the end event.

        Calling it on a stopped engine only re-emits the end event.
        """
        with self._lock:
            self._cancel_timers()
            if self._running:
                self.logger.info(
                    f"Stopped {self.simulation_id} after {self.tick_count} ticks"
                )
            self._running = False
            self._publish(StreamEvent.SIMULATION_END, {})

    def tick(self, generation: Optional[int] = None) -> Optional[SimulationMetrics]:
        """Execute one tick transaction.

        Args:
            generation: Run the tick was scheduled for, None for the current run

        Returns:
            Metrics of this tick, or None when the engine is stopped or the
            run has been replaced
        """
        with self._lock:
            if not self._running:
                return None
            if generation is not None and generation != self._generation:
                return None

            self.tick_count += 1
            now = self._timestamp()
            processes = list(self._processes.values())

            self._clamp(processes)
            self._select(processes)
            self._advance(processes)

            if self.params.algorithm.uses_starvation_heuristic:
                for decision in self.detector.evaluate(processes, now):
                    self.metrics_collector.record_decision(decision.action.value)
                    self._publish(StreamEvent.AI_DECISION, decision.to_dict(encode_json=True))

            metrics = self.metrics_collector.sample(processes, self.tick_count, now)

            self._publish(StreamEvent.STATE_UPDATE, self._snapshot())
            self._publish(StreamEvent.METRICS_UPDATE, metrics.to_dict(encode_json=True))
            return metrics

    def snapshot(self) -> List[Dict]:
        """Current process set as wire dicts."""
        with self._lock:
            return self._snapshot()

    def state(self) -> Dict:
        """Run summary for status queries."""
        with self._lock:
            return {
                'running': self._running,
                'simulationId': self.simulation_id,
                'algorithm': self.params.algorithm.value if self.params else None,
                'tick': self.tick_count,
                'processes': self._snapshot(),
                'metrics': self.metrics_collector.latest.to_dict(encode_json=True),
            }

    def shutdown(self) -> None:
        """Stop the run and release the timer driver."""
        if self._running:
            self.stop()
        self.task_scheduler.shutdown()

    def _on_tick(self, generation: int) -> None:
        self.tick(generation)

    def _clamp(self, processes: List[Process]) -> None:
        for process in processes:
            if process.remaining_time < 0:
                self.logger.warning(f"{process.name} had negative remaining time, clamping")
                process.remaining_time = 0
            if process.is_active and process.remaining_time == 0:
                process.terminate()
                self._schedule_respawn(process.pid)

    def _select(self, processes: List[Process]) -> None:
        winner = self.policy.select(processes)
        if winner is None:
            return
        for process in processes:
            if process.state == ProcessState.RUNNING and process is not winner:
                process.state = ProcessState.READY
                self.logger.debug(f"{process.name} preempted by {winner.name}")
        winner.state = ProcessState.RUNNING

    def _advance(self, processes: List[Process]) -> None:
        for process in processes:
            if process.state == ProcessState.RUNNING:
                if process.run_for_tick():
                    self.logger.debug(
                        f"{process.name} terminated (turnaround {process.turnaround_time} ticks)"
                    )
                    self._schedule_respawn(process.pid)
            elif process.state == ProcessState.READY:
                process.wait_time += 1

    def _schedule_respawn(self, pid: int) -> None:
        previous = self._respawn_handles.pop(pid, None)
        if previous is not None:
            previous.cancel()
        self._respawn_handles[pid] = self.task_scheduler.call_later(
            self.respawn_delay_ms / 1000.0, self._respawn, pid, self._generation
        )

    def _respawn(self, pid: int, generation: int) -> None:
        with self._lock:
            if generation != self._generation or not self._running:
                return
            self._respawn_handles.pop(pid, None)
            process = self._processes.get(pid)
            if process is None or process.state != ProcessState.TERMINATED:
                return
            self.generator.respawn(process, self._timestamp())
            self.logger.debug(f"{process.name} respawned with burst {process.burst_time}")

    def _cancel_timers(self) -> None:
        if self._tick_handle is not None:
            self._tick_handle.cancel()
            self._tick_handle = None
        for handle in self._respawn_handles.values():
            handle.cancel()
        self._respawn_handles.clear()

    def _snapshot(self) -> List[Dict]:
        return [p.to_dict(encode_json=True) for p in self._processes.values()]

    def _publish(self, event: StreamEvent, payload: Any) -> None:
        self.broadcaster.publish(event, payload)

    def _timestamp(self) -> int:
        return int(self.clock() * 1000)
