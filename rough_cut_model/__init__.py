"""
Rough Cut Optimization Time-Savings Model

Estimates the editing time saved when the rough-cut stage of a video
project gets faster, under a handful of named improvement scenarios.

Example usage (programmatic):
    from rough_cut_model import Baseline, Scenario, RoughCutModel

    baseline = Baseline(deliverables=12, rough_cut_hours=4,
                        feedback_hours=2, qc_hours=1)
    model = RoughCutModel(baseline, [
        Scenario("Average", 1, 1, 0.5, total_time_saved_per_project=63),
    ])
    for row in model.summarize():
        print(row.name, row.hours_saved_per_project)

Example usage (JSON config):
    from rough_cut_model import load_config, Runner, save_result

    config = load_config("configs/reference.json")
    result = Runner(config).run()
    save_result(result, "results/reference.json")

CLI usage:
    python -m rough_cut_model configs/reference.json
"""

from .model import (
    Baseline,
    Scenario,
    ScenarioMetrics,
    RoughCutModel,
    InvalidInputError,
    round_half_up,
    STAGE_NAMES,
    BASELINE_NAME,
    RESERVED_NAMES,
)

from .config import (
    ExperimentConfig,
    BaselineSpec,
    ScenarioSpec,
    ProjectionSpec,
    default_config,
    default_scenarios,
    load_config,
    save_config,
    validate_config,
)

from .runner import (
    Runner,
    RunResult,
    DashboardResult,
    save_result,
    load_result,
)

from .output import OutputWriter
from .report import format_run_summary

# Plotting (functions raise ImportError when matplotlib is missing)
from .plot import (
    plot_stage_comparison,
    plot_savings_breakdown,
    plot_time_distribution,
    plot_project_projection,
    plot_result,
)

__all__ = [
    # Core model
    'Baseline',
    'Scenario',
    'ScenarioMetrics',
    'RoughCutModel',
    'InvalidInputError',
    'round_half_up',
    'STAGE_NAMES',
    'BASELINE_NAME',
    'RESERVED_NAMES',
    # Config
    'ExperimentConfig',
    'BaselineSpec',
    'ScenarioSpec',
    'ProjectionSpec',
    'default_config',
    'default_scenarios',
    'load_config',
    'save_config',
    'validate_config',
    # Runner
    'Runner',
    'RunResult',
    'DashboardResult',
    'save_result',
    'load_result',
    # Output
    'OutputWriter',
    'format_run_summary',
    # Plotting (raise ImportError without matplotlib)
    'plot_stage_comparison',
    'plot_savings_breakdown',
    'plot_time_distribution',
    'plot_project_projection',
    'plot_result',
]

__version__ = '0.1.0'
