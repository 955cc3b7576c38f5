"""Process selection and starvation handling."""

from .policies import Algorithm, SchedulingPolicy, PriorityPolicy, RoundRobinPolicy, create_policy
from .starvation import StarvationDetector

__all__ = [
    "Algorithm",
    "SchedulingPolicy",
    "PriorityPolicy",
    "RoundRobinPolicy",
    "create_policy",
    "StarvationDetector",
]
