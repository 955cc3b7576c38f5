"""Starvation detection with priority boost and normalize."""

from typing import Dict, List

from ..models.process import Process
from ..models.telemetry import AiDecisionLog, DecisionAction, DecisionFeatures
from ..utils.logger import setup_logger


class StarvationDetector:
    """Fixed-threshold heuristic over each process's wait ratio.

    ``wait_ratio = wait_time / (cpu_usage + wait_time + 1)``. A process that
    waits most of the time gets a one-off priority boost; once its ratio
    falls back, the boost is removed and its base priority restored.
    """

    BOOST_REASON = "High wait ratio detected (Starvation)"
    NORMALIZE_REASON = "Wait ratio stabilized"

    def __init__(self, config: Dict):
        """Initialize starvation detector.

        Args:
            config: Heuristic configuration
        """
        self.config = config
        self.logger = setup_logger(self.__class__.__name__)

        self.boost_threshold = config.get('boost_threshold', 0.8)
        self.normalize_threshold = config.get('normalize_threshold', 0.3)
        self.boost_amount = config.get('boost_amount', 5)
        self.priority_ceiling = config.get('priority_ceiling', 15)
        self.boost_confidence = config.get('boost_confidence', 0.95)
        self.normalize_confidence = config.get('normalize_confidence', 0.88)

        if self.normalize_threshold >= self.boost_threshold:
            raise ValueError("normalize_threshold must be below boost_threshold")

        # Statistics
        self.total_boosts = 0
        self.total_normalizations = 0

    def evaluate(self, processes: List[Process], timestamp: int) -> List[AiDecisionLog]:
        """Apply boost/normalize to every active process.

        Args:
            processes: Whole process set
            timestamp: Decision timestamp in epoch ms

        Returns:
            Decisions taken this tick, in process order
        """
        decisions = []
        for process in processes:
            if not process.is_active:
                continue

            wait_ratio = process.wait_ratio

            if (wait_ratio > self.boost_threshold
                    and process.priority < self.priority_ceiling
                    and not process.boosted):
                process.is_starving = True
                process.boosted = True
                process.priority += self.boost_amount
                self.total_boosts += 1
                self.logger.info(
                    f"Boosted {process.name} to priority {process.priority} "
                    f"(wait ratio {wait_ratio:.2f})"
                )
                decisions.append(self._decision(
                    process, DecisionAction.BOOST, self.BOOST_REASON,
                    self.boost_confidence, wait_ratio, timestamp
                ))

            elif process.boosted and wait_ratio < self.normalize_threshold:
                process.clear_boost()
                self.total_normalizations += 1
                self.logger.info(
                    f"Normalized {process.name} to priority {process.priority} "
                    f"(wait ratio {wait_ratio:.2f})"
                )
                decisions.append(self._decision(
                    process, DecisionAction.NORMALIZE, self.NORMALIZE_REASON,
                    self.normalize_confidence, wait_ratio, timestamp
                ))

        return decisions

    def _decision(self, process: Process, action: DecisionAction, reason: str,
                  confidence: float, wait_ratio: float, timestamp: int) -> AiDecisionLog:
        return AiDecisionLog(
            id=f"dec-{timestamp}-{process.pid}",
            timestamp=timestamp,
            pid=process.pid,
            process_name=process.name,
            action=action,
            reason=reason,
            confidence=confidence,
            features=DecisionFeatures(
                wait_ratio=round(wait_ratio, 2),
                queue_position=0,
                age=process.wait_time,
            ),
        )
