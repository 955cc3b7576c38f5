"""Data model of the simulation."""

from .process import Process, ProcessState
from .telemetry import AiDecisionLog, DecisionAction, DecisionFeatures, SimulationMetrics

__all__ = [
    "Process",
    "ProcessState",
    "AiDecisionLog",
    "DecisionAction",
    "DecisionFeatures",
    "SimulationMetrics",
]
