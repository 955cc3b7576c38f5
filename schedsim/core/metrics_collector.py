"""Metrics computation and aggregation."""

import numpy as np
from collections import deque
from typing import Dict, List, Optional

from ..models.process import Process
from ..models.telemetry import SimulationMetrics
from ..utils.random_source import RandomSource
from ..utils.logger import setup_logger


class MetricsCollector:
    """Compute per-tick metrics and keep a bounded timeline.

    ``cpu_utilization`` is sampled noise in a fixed band whenever any process
    is alive, and ``throughput`` is the tick counter scaled down; neither is
    derived from actual run state.
    """

    def __init__(self, config: Dict, random_source: Optional[RandomSource] = None):
        """Initialize metrics collector.

        Args:
            config: Metrics configuration
            random_source: Source of utilization noise
        """
        self.config = config
        self.random = random_source or RandomSource()
        self.logger = setup_logger(self.__class__.__name__)

        self.throughput_divisor = config.get('throughput_divisor', 10)
        self.min_utilization = config.get('min_utilization', 70.0)
        self.max_utilization = config.get('max_utilization', 90.0)

        # Time-series of recent samples
        self.history_size = config.get('history_size', 600)
        self.history = deque(maxlen=self.history_size)
        self.decision_counts = {'boost': 0, 'normalize': 0}

        self.latest = SimulationMetrics()

    def reset(self) -> None:
        """Drop collected samples."""
        self.history.clear()
        self.decision_counts = {'boost': 0, 'normalize': 0}
        self.latest = SimulationMetrics()

    def sample(self, processes: List[Process], tick_count: int,
               timestamp: int) -> SimulationMetrics:
        """Compute the metrics snapshot for the current tick.

        Args:
            processes: Whole process set
            tick_count: Ticks executed so far in this run
            timestamp: Sample timestamp in epoch ms

        Returns:
            Metrics snapshot (also appended to history)
        """
        active = [p for p in processes if p.is_active]
        starving = [p for p in active if p.is_starving]

        if active:
            cpu_utilization = self.random.uniform(self.min_utilization, self.max_utilization)
        else:
            cpu_utilization = 0.0

        metrics = SimulationMetrics(
            timestamp=timestamp,
            cpu_utilization=cpu_utilization,
            throughput=tick_count / self.throughput_divisor,
            average_wait_time=sum(p.wait_time for p in active) / max(1, len(active)),
            active_processes=len(active),
            starvation_count=len(starving),
        )

        self.latest = metrics
        self.history.append(metrics)
        return metrics

    def record_decision(self, action: str) -> None:
        """Count a heuristic decision by action name."""
        self.decision_counts[action] = self.decision_counts.get(action, 0) + 1

    def compute_summary(self) -> Dict:
        """Aggregate the retained timeline.

        Returns:
            Dictionary of summary statistics
        """
        results = {
            'samples': len(self.history),
            'boost_decisions': self.decision_counts.get('boost', 0),
            'normalize_decisions': self.decision_counts.get('normalize', 0),
        }
        if not self.history:
            return results

        fields = {
            'cpu_utilization': [m.cpu_utilization for m in self.history],
            'average_wait_time': [m.average_wait_time for m in self.history],
            'active_processes': [m.active_processes for m in self.history],
            'starvation_count': [m.starvation_count for m in self.history],
        }
        for name, values in fields.items():
            results[f'mean_{name}'] = float(np.mean(values))
            results[f'max_{name}'] = float(np.max(values))
            results[f'min_{name}'] = float(np.min(values))

        results['final_throughput'] = self.history[-1].throughput
        return results
