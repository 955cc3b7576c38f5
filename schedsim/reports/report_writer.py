"""
Report writer for headless runs - summaries and result files.
"""
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd
import yaml

from ..models.telemetry import SimulationMetrics
from ..utils.io import save_json


class ReportWriter:
    """Generates human-readable summaries and on-disk result bundles."""

    def generate_summary(self, results: Dict[str, Any]) -> str:
        """Generate human-readable summary from results."""
        lines = []

        lines.append("=" * 60)
        lines.append("   SCHEDULER SIMULATION REPORT")
        lines.append(f"   Algorithm: {results.get('algorithm', 'N/A')}")
        lines.append(f"   Processes: {results.get('process_count', 'N/A')}, "
                     f"speed x{results.get('speed_multiplier', 1.0)}")
        lines.append("=" * 60)
        lines.append("")

        if not results.get('samples'):
            lines.append("NO TICKS EXECUTED")
            return "\n".join(lines)

        lines.append("RUN")
        lines.append("━" * 60)
        lines.append(f"Ticks:              {results.get('ticks', 0)}")
        lines.append(f"Simulated time:     {results.get('duration_s', 0):.1f} s")
        lines.append(f"Throughput (proxy): {results.get('final_throughput', 0):.1f}")
        lines.append("")

        lines.append("METRICS")
        lines.append("━" * 60)
        lines.append(f"CPU Utilization:    {results['mean_cpu_utilization']:.1f}% mean")
        lines.append(f"Avg Wait Time:      {results['mean_average_wait_time']:.2f} ticks mean, "
                     f"{results['max_average_wait_time']:.2f} max")
        lines.append(f"Active Processes:   {results['mean_active_processes']:.1f} mean")
        lines.append(f"Starving Processes: {results['max_starvation_count']:.0f} peak")
        lines.append("")

        lines.append("HEURISTIC")
        lines.append("━" * 60)
        lines.append(f"Boosts:             {results.get('boost_decisions', 0)}")
        lines.append(f"Normalizations:     {results.get('normalize_decisions', 0)}")
        lines.append("")

        return "\n".join(lines)

    def metrics_frame(self, history: List[SimulationMetrics]) -> pd.DataFrame:
        """Metrics timeline as a DataFrame with camelCase columns."""
        columns = ['timestamp', 'cpuUtilization', 'throughput', 'averageWaitTime',
                   'activeProcesses', 'starvationCount']
        return pd.DataFrame([m.to_dict(encode_json=True) for m in history], columns=columns)

    def write(self, output_dir: str, results: Dict[str, Any],
              history: List[SimulationMetrics], decisions: List[Dict]) -> Dict[str, str]:
        """Write results.yaml, metrics.csv, decisions.json and summary.txt.

        Returns:
            Mapping of artifact name to written path
        """
        out = Path(output_dir)
        out.mkdir(parents=True, exist_ok=True)

        paths = {
            'results': str(out / "results.yaml"),
            'metrics': str(out / "metrics.csv"),
            'decisions': str(out / "decisions.json"),
            'summary': str(out / "summary.txt"),
        }

        with open(paths['results'], 'w') as f:
            yaml.safe_dump(results, f, default_flow_style=False)

        self.metrics_frame(history).to_csv(paths['metrics'], index=False)
        save_json(decisions, paths['decisions'])

        with open(paths['summary'], 'w') as f:
            f.write(self.generate_summary(results))

        return paths
