"""
Experiment runner for executing configs and producing results.

Orchestrates config -> model evaluation -> structured output.
"""

from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Dict, Any, List
import json

from .config import ExperimentConfig, validate_config
from .model import RoughCutModel, ScenarioMetrics, BASELINE_NAME


VERSION = "1.0.0"


def _format_timestamp() -> str:
    """Return ISO 8601 timestamp in UTC."""
    return datetime.now(timezone.utc).isoformat()


@dataclass
class DashboardResult:
    """All tables and chart series produced for one config."""
    summary: List[dict]                     # ScenarioMetrics rows
    stage_comparison: List[dict]
    savings_breakdown: List[dict]
    projection: List[dict]
    distributions: Dict[str, List[dict]]    # Baseline + comparison scenario
    total_saved_across_projects: Dict[str, float]
    workweeks_saved: Dict[str, float]
    max_projects: int

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class RunResult:
    """
    Complete result from running an experiment.

    Contains metadata, echoed config, and results.
    """
    meta: Dict[str, Any]
    config: dict
    results: DashboardResult

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "meta": self.meta,
            "config": self.config,
            "results": self.results.to_dict(),
        }


def results_as_dict(result) -> Dict[str, Any]:
    """
    Return the 'results' section of a RunResult or a loaded result dict.

    Lets the plotting and output layers accept either form.
    """
    if isinstance(result, RunResult):
        return result.results.to_dict()
    if isinstance(result, dict):
        if 'results' not in result:
            raise ValueError("Dict must contain 'results' key")
        return result['results']
    raise ValueError("Expected RunResult or dict with results")


class Runner:
    """
    Experiment runner that executes configs and produces structured results.

    Example:
        config = load_config("configs/reference.json")
        runner = Runner(config)
        result = runner.run()
        save_result(result, "results/reference_2026-01-08.json")
    """

    def __init__(self, config: ExperimentConfig, config_path: Optional[str] = None):
        """
        Initialize runner with experiment config.

        Args:
            config: Experiment configuration
            config_path: Optional path to config file (for metadata)
        """
        self.config = config
        self.config_path = config_path

        errors = validate_config(config)
        if errors:
            raise ValueError(f"Invalid config: {'; '.join(errors)}")

    def build_model(self) -> RoughCutModel:
        """Build the calculator from config."""
        cfg = self.config
        return RoughCutModel(
            cfg.baseline.to_baseline(),
            [spec.to_scenario() for spec in cfg.scenarios],
        )

    def _compute(self, model: RoughCutModel) -> DashboardResult:
        cfg = self.config
        projects = cfg.projection.max_projects
        summary: List[ScenarioMetrics] = model.summarize()

        distributions = {BASELINE_NAME: model.time_distribution()}
        if cfg.distribution_scenario:
            distributions[cfg.distribution_scenario] = model.time_distribution(
                cfg.distribution_scenario
            )

        # Total (all-stage) savings across the projection horizon
        total_across = {
            s.name: s.total_time_saved_per_project * projects for s in model.scenarios
        }
        workweeks = {
            name: hours / cfg.projection.hours_per_workweek
            for name, hours in total_across.items()
        }

        return DashboardResult(
            summary=[asdict(m) for m in summary],
            stage_comparison=model.stage_comparison(),
            savings_breakdown=model.savings_breakdown(),
            projection=model.project_projection(projects),
            distributions=distributions,
            total_saved_across_projects=total_across,
            workweeks_saved=workweeks,
            max_projects=projects,
        )

    def run(self) -> RunResult:
        """
        Execute the experiment and return results.

        Returns:
            RunResult containing metadata, config echo, and results
        """
        meta = {
            "timestamp": _format_timestamp(),
            "version": VERSION,
            "config_file": self.config_path,
            "experiment_name": self.config.name,
        }

        results = self._compute(self.build_model())
        return RunResult(
            meta=meta,
            config=self.config.to_dict(),
            results=results,
        )


def save_result(result: RunResult, path: str | Path) -> None:
    """
    Save a run result to JSON file.

    Args:
        result: RunResult to save
        path: Output file path
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        json.dump(result.to_dict(), f, indent=2)


def load_result(path: str | Path) -> dict:
    """
    Load a previous run result from JSON file.

    Args:
        path: Path to result file

    Returns:
        Dict containing the result data
    """
    path = Path(path)
    with open(path, 'r') as f:
        return json.load(f)


def generate_output_filename(config: ExperimentConfig, timestamp: Optional[str] = None) -> str:
    """
    Generate a default output filename for a config.

    Format: {name}_{timestamp}.json

    Args:
        config: Experiment config
        timestamp: Optional timestamp string (uses current time if not provided)

    Returns:
        Filename string (not full path)
    """
    if timestamp is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    else:
        # Clean up ISO timestamp for filename
        timestamp = timestamp.replace(":", "").replace("-", "")[:15]

    safe_name = config.name.replace(" ", "_").replace("/", "_")
    return f"{safe_name}_{timestamp}.json"
