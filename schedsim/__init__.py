"""schedsim: starvation-aware CPU scheduler simulator."""

from .core.engine import SchedulerEngine
from .core.event_queue import Event, EventType, EventQueue
from .core.broadcaster import StreamEvent
from .core.metrics_collector import MetricsCollector
from .core.task_scheduler import ThreadedTaskScheduler, VirtualTaskScheduler
from .scheduling.policies import Algorithm
from .utils.logger import setup_logger

__version__ = "0.1.0"
__all__ = [
    "SchedulerEngine",
    "Event",
    "EventType",
    "EventQueue",
    "StreamEvent",
    "MetricsCollector",
    "ThreadedTaskScheduler",
    "VirtualTaskScheduler",
    "Algorithm",
    "setup_logger",
]
