"""Records emitted by the engine besides process snapshots."""

from dataclasses import dataclass
from enum import Enum

from dataclasses_json import dataclass_json, LetterCase


class DecisionAction(Enum):
    """Heuristic actions."""
    BOOST = "boost"
    NORMALIZE = "normalize"
    # Reserved, never produced by the current heuristic
    MONITOR = "monitor"


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass(frozen=True)
class DecisionFeatures:
    """Feature values that triggered a decision."""
    wait_ratio: float
    queue_position: int = 0
    age: int = 0


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass(frozen=True)
class AiDecisionLog:
    """Immutable record of one boost or normalize action."""
    id: str
    timestamp: int
    pid: int
    process_name: str
    action: DecisionAction
    reason: str
    confidence: float
    features: DecisionFeatures


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class SimulationMetrics:
    """Point-in-time aggregate over the process set."""
    timestamp: int = 0
    cpu_utilization: float = 0.0
    throughput: float = 0.0
    average_wait_time: float = 0.0
    active_processes: int = 0
    starvation_count: int = 0
