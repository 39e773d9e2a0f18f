"""
Output management for run results.

Provides structured directory output with:
- results.json: Full run results
- config.json: Echoed input config
- summary.md: Human-readable summary
- summary.csv: Rough cut efficiency table
- projection.csv: Rough cut hours saved across projects
- plots/: Generated visualizations (if matplotlib available)
"""

import csv
from pathlib import Path
from typing import Any, Dict, List, TYPE_CHECKING
import json

from .report import format_run_summary

if TYPE_CHECKING:
    from .runner import RunResult


SUMMARY_COLUMNS = [
    'name',
    'rough_cut_reduction_pct',
    'hours_per_deliverable',
    'hours_saved_per_deliverable',
    'hours_saved_per_project',
    'total_time_saved_per_project',
    'rough_cut_contribution_pct',
    'other_stage_contribution_pct',
]


class OutputWriter:
    """
    Write run results to structured directory.

    Output structure:
        output_dir/
            results.json
            config.json
            summary.md
            summary.csv
            projection.csv
            plots/
                dashboard.png
                stage_comparison.png
                savings_breakdown.png
                time_distribution.png
                projection.png
    """

    def __init__(self, output_dir: str | Path):
        """
        Initialize writer.

        Args:
            output_dir: Path to output directory (will be created if needed)
        """
        self.output_dir = Path(output_dir)

    def write(self, result: 'RunResult', generate_plots: bool = True) -> None:
        """
        Write all output files.

        Args:
            result: RunResult to write
            generate_plots: Whether to generate plots (requires matplotlib)
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)
        data = result.to_dict()

        self._write_json('results.json', data)
        self._write_json('config.json', data['config'])
        with open(self.output_dir / 'summary.md', 'w') as f:
            f.write(format_run_summary(result))
        self._write_summary_csv(data['results']['summary'])
        self._write_projection_csv(data['results']['projection'])

        if generate_plots:
            self._write_plots(result)

    def _write_json(self, filename: str, payload: Dict[str, Any]) -> None:
        with open(self.output_dir / filename, 'w') as f:
            json.dump(payload, f, indent=2, default=str)

    def _write_summary_csv(self, summary: List[Dict[str, Any]]) -> None:
        """Write the efficiency table as CSV."""
        with open(self.output_dir / 'summary.csv', 'w', newline='') as f:
            writer = csv.DictWriter(f, fieldnames=SUMMARY_COLUMNS, extrasaction='ignore')
            writer.writeheader()
            writer.writerows(summary)

    def _write_projection_csv(self, projection: List[Dict[str, Any]]) -> None:
        """Write the projection series as CSV, one column per scenario."""
        if not projection:
            return
        with open(self.output_dir / 'projection.csv', 'w', newline='') as f:
            writer = csv.DictWriter(f, fieldnames=list(projection[0].keys()))
            writer.writeheader()
            writer.writerows(projection)

    def _write_plots(self, result: 'RunResult') -> None:
        """Generate and save plots."""
        from .plot import (
            HAS_MATPLOTLIB,
            plot_result,
            plot_stage_comparison,
            plot_savings_breakdown,
            plot_time_distribution,
            plot_project_projection,
        )
        if not HAS_MATPLOTLIB:
            return

        import matplotlib.pyplot as plt

        plots_dir = self.output_dir / 'plots'
        plots_dir.mkdir(exist_ok=True)

        for filename, plot_fn in [
            ('dashboard.png', plot_result),
            ('stage_comparison.png', plot_stage_comparison),
            ('savings_breakdown.png', plot_savings_breakdown),
            ('time_distribution.png', plot_time_distribution),
            ('projection.png', plot_project_projection),
        ]:
            fig = plot_fn(result, save_path=str(plots_dir / filename), show=False)
            plt.close(fig)


def load_output(output_dir: str | Path) -> Dict[str, Any]:
    """
    Load results from output directory.

    Args:
        output_dir: Output directory path

    Returns:
        Dict containing the results
    """
    results_path = Path(output_dir) / 'results.json'
    with open(results_path, 'r') as f:
        return json.load(f)
