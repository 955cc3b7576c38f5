"""Core simulation components."""

from .engine import SchedulerEngine
from .event_queue import Event, EventType, EventQueue
from .broadcaster import Broadcaster, StreamEvent
from .metrics_collector import MetricsCollector
from .params import SimulationParams
from .task_scheduler import TaskScheduler, ThreadedTaskScheduler, VirtualTaskScheduler

__all__ = [
    "SchedulerEngine",
    "Event",
    "EventType",
    "EventQueue",
    "Broadcaster",
    "StreamEvent",
    "MetricsCollector",
    "SimulationParams",
    "TaskScheduler",
    "ThreadedTaskScheduler",
    "VirtualTaskScheduler",
]
