"""Headless entry point: run the scheduler on virtual time and write a report."""

import argparse
import sys
import time
from typing import Dict, List, Optional, Tuple

from tqdm import tqdm

from schedsim.core.broadcaster import StreamEvent
from schedsim.core.engine import SchedulerEngine
from schedsim.core.task_scheduler import VirtualTaskScheduler
from schedsim.models.telemetry import SimulationMetrics
from schedsim.reports.report_writer import ReportWriter
from schedsim.utils.logger import setup_logger
from configs import load_default_config


def parse_args(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="schedsim: starvation-aware CPU scheduler simulator (headless run)"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="YAML file overriding the bundled defaults",
    )
    parser.add_argument(
        "--processes",
        type=int,
        default=None,
        help="Number of processes (1-20)",
    )
    parser.add_argument(
        "--algorithm",
        type=str,
        default=None,
        help="round-robin, static-priority or ai-boost-dynamic-priority",
    )
    parser.add_argument(
        "--speed",
        type=float,
        default=None,
        help="Speed multiplier (0.1-5.0)",
    )
    parser.add_argument(
        "--duration",
        type=float,
        default=60.0,
        help="Simulated wall-clock seconds to run",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default="results",
        help="Directory to save results",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable the progress bar",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser.parse_args(argv)


def run_headless(config: Dict, process_count: int, algorithm: str, speed: float,
                 duration: float, show_progress: bool = False
                 ) -> Tuple[Dict, List[SimulationMetrics], List[Dict]]:
    """Run one simulation on a virtual clock.

    Args:
        config: Configuration dictionary
        process_count: Number of processes
        algorithm: Algorithm name or alias
        speed: Speed multiplier
        duration: Simulated seconds
        show_progress: Show a tqdm progress bar

    Returns:
        Tuple of (results, metrics history, decision logs)
    """
    scheduler = VirtualTaskScheduler()
    epoch = time.time()
    engine = SchedulerEngine(config, task_scheduler=scheduler,
                             clock=lambda: epoch + scheduler.now())

    decisions: List[Dict] = []

    def collect(event: StreamEvent, payload) -> None:
        if event is StreamEvent.AI_DECISION:
            decisions.append(payload)

    engine.subscribe(collect)
    engine.start(process_count=process_count, algorithm=algorithm,
                 speed_multiplier=speed)

    interval = engine.tick_interval(engine.params.speed_multiplier)
    steps = int(duration / interval)
    for _ in tqdm(range(steps), desc="Simulating", unit="tick", disable=not show_progress):
        scheduler.advance(interval)

    engine.stop()
    engine.shutdown()

    results = {
        'algorithm': engine.params.algorithm.value,
        'process_count': engine.params.process_count,
        'speed_multiplier': engine.params.speed_multiplier,
        'ticks': engine.tick_count,
        'duration_s': steps * interval,
        **engine.metrics_collector.compute_summary(),
    }
    return results, list(engine.metrics_collector.history), decisions


def main(argv: Optional[List[str]] = None):
    """Main function."""
    args = parse_args(argv)

    log_level = "DEBUG" if args.verbose else "INFO"
    logger = setup_logger("schedsim", level=log_level)

    try:
        config = load_default_config(args.config)
        if args.seed is not None:
            config.setdefault('simulation', {})['random_seed'] = args.seed

        defaults = config.get('defaults', {})
        process_count = args.processes or defaults.get('process_count', 10)
        algorithm = args.algorithm or defaults.get('algorithm', 'ai-boost-dynamic-priority')
        speed = args.speed or defaults.get('speed', 1.0)

        logger.info(f"Running {algorithm} with {process_count} processes "
                    f"for {args.duration:.0f}s at x{speed}")

        results, history, decisions = run_headless(
            config, process_count, algorithm, speed, args.duration,
            show_progress=not args.no_progress,
        )

        writer = ReportWriter()
        paths = writer.write(args.output_dir, results, history, decisions)
        print("\n" + writer.generate_summary(results))
        logger.info(f"Results saved to {paths['results']}")
        return 0

    except Exception as e:
        logger.error(f"Simulation failed: {str(e)}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
