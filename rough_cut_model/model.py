"""
Rough Cut Optimization Time-Savings Model

This module provides the core calculator for estimating how much editing time
a faster rough-cut stage saves on a video project:
- A baseline describing hours per deliverable at each pipeline stage
- Named scenarios overriding those hours with an assumed improvement level

Every derived figure is a pure function of (baseline, scenario). Nothing is
cached; each call recomputes from the inputs.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence
import math


STAGE_ROUGH_CUT = 'Rough Cut'
STAGE_FEEDBACK = 'Feedback'
STAGE_QC = 'QC & Rendering'
STAGE_NAMES = (STAGE_ROUGH_CUT, STAGE_FEEDBACK, STAGE_QC)

BASELINE_NAME = 'Baseline'
PROJECTS_KEY = 'projects'

# Names already used as row keys in the chart series
RESERVED_NAMES = (BASELINE_NAME, PROJECTS_KEY)


class InvalidInputError(ValueError):
    """Raised when the calculator is given inputs it cannot evaluate."""


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer with ties going toward positive infinity.

    Python's built-in round() uses banker's rounding (round(0.5) == 0), which
    would change reported percentages on exact halves.

    Example:
        round_half_up(2.5) -> 3
        round_half_up(-2.5) -> -2
    """
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class Baseline:
    """Current per-deliverable effort before any rough-cut improvement."""
    deliverables: int         # Deliverables per project
    rough_cut_hours: float    # Hours per deliverable, rough-cut editing
    feedback_hours: float     # Hours per deliverable, review/revisions
    qc_hours: float           # Hours per deliverable, QC and rendering

    @property
    def other_stage_hours(self) -> float:
        """Feedback plus QC hours per deliverable."""
        return self.feedback_hours + self.qc_hours

    @property
    def total_hours_per_deliverable(self) -> float:
        return self.rough_cut_hours + self.feedback_hours + self.qc_hours

    @property
    def total_hours_per_project(self) -> float:
        return self.total_hours_per_deliverable * self.deliverables


@dataclass(frozen=True)
class Scenario:
    """
    A named improvement level overriding the baseline stage hours.

    total_time_saved_per_project is supplied alongside the stage hours rather
    than derived from them: it is a broader estimate that may include indirect
    productivity effects, so it is reported as given.
    """
    name: str
    rough_cut_hours: float
    feedback_hours: float
    qc_hours: float
    total_time_saved_per_project: float

    @property
    def other_stage_hours(self) -> float:
        return self.feedback_hours + self.qc_hours


@dataclass(frozen=True)
class ScenarioMetrics:
    """Derived rough-cut metrics for one scenario (one summary table row)."""
    name: str
    rough_cut_reduction_pct: int
    hours_per_deliverable: float
    hours_saved_per_deliverable: float
    hours_saved_per_project: float
    total_time_saved_per_project: float
    # None when the scenario reports zero total time saved
    rough_cut_contribution_pct: Optional[int]
    other_stage_contribution_pct: Optional[int]

    def hours_saved_across(self, projects: int) -> float:
        """Rough-cut hours saved over a number of projects (linear)."""
        return self.hours_saved_per_project * projects


class RoughCutModel:
    """
    Scenario metrics calculator for rough-cut time savings.

    Produces the efficiency summary table plus the chart-ready series
    (stage comparison, savings breakdown, time distribution and multi-project
    projection). Row dicts use the same keys across all series so they can be
    handed to any plotting or tabulating layer directly.

    Example:
        model = RoughCutModel(baseline, scenarios)
        for row in model.summarize():
            print(row.name, row.hours_saved_per_project)
    """

    def __init__(self, baseline: Baseline, scenarios: Sequence[Scenario]):
        if baseline.rough_cut_hours <= 0:
            raise InvalidInputError(
                f"Baseline rough_cut_hours must be positive, got {baseline.rough_cut_hours}"
            )
        if not scenarios:
            raise InvalidInputError("At least one scenario is required")

        seen = set()
        for scenario in scenarios:
            if scenario.name in RESERVED_NAMES:
                raise InvalidInputError(f"Reserved scenario name: {scenario.name}")
            if scenario.name in seen:
                raise InvalidInputError(f"Duplicate scenario name: {scenario.name}")
            seen.add(scenario.name)

        self.baseline = baseline
        self.scenarios = tuple(scenarios)

    @property
    def scenario_names(self) -> List[str]:
        return [s.name for s in self.scenarios]

    def get_scenario(self, name: str) -> Scenario:
        """Look up a scenario by name."""
        for scenario in self.scenarios:
            if scenario.name == name:
                return scenario
        raise KeyError(f"Unknown scenario: {name}. Available: {self.scenario_names}")

    def rough_cut_saved_per_project(self, scenario: Scenario) -> float:
        """Rough-cut hours saved on one project under a scenario."""
        b = self.baseline
        return (b.rough_cut_hours - scenario.rough_cut_hours) * b.deliverables

    def evaluate_scenario(self, scenario: Scenario) -> ScenarioMetrics:
        """Compute the summary metrics for a single scenario."""
        b = self.baseline

        reduction_pct = round_half_up(
            (1 - scenario.rough_cut_hours / b.rough_cut_hours) * 100
        )
        saved_per_deliverable = b.rough_cut_hours - scenario.rough_cut_hours
        saved_per_project = self.rough_cut_saved_per_project(scenario)

        total_saved = scenario.total_time_saved_per_project
        if total_saved:
            rough_cut_pct = round_half_up(saved_per_project / total_saved * 100)
            other_pct = round_half_up((total_saved - saved_per_project) / total_saved * 100)
        else:
            rough_cut_pct = None
            other_pct = None

        return ScenarioMetrics(
            name=scenario.name,
            rough_cut_reduction_pct=reduction_pct,
            hours_per_deliverable=scenario.rough_cut_hours,
            hours_saved_per_deliverable=saved_per_deliverable,
            hours_saved_per_project=saved_per_project,
            total_time_saved_per_project=total_saved,
            rough_cut_contribution_pct=rough_cut_pct,
            other_stage_contribution_pct=other_pct,
        )

    def summarize(self) -> List[ScenarioMetrics]:
        """Evaluate every scenario, preserving scenario order."""
        return [self.evaluate_scenario(s) for s in self.scenarios]

    def stage_comparison(self) -> List[Dict[str, float]]:
        """
        Rough-cut vs other-stage hours per project, baseline first.

        Returns:
            List of {'name', 'rough_cut', 'other_stages'} rows
        """
        b = self.baseline
        rows = [{
            'name': BASELINE_NAME,
            'rough_cut': b.rough_cut_hours * b.deliverables,
            'other_stages': b.other_stage_hours * b.deliverables,
        }]
        for scenario in self.scenarios:
            rows.append({
                'name': scenario.name,
                'rough_cut': scenario.rough_cut_hours * b.deliverables,
                'other_stages': scenario.other_stage_hours * b.deliverables,
            })
        return rows

    def savings_breakdown(self) -> List[Dict[str, float]]:
        """
        Split each scenario's total time saved into rough-cut and other stages.

        other_savings is whatever part of the supplied total is not explained
        by the rough-cut reduction, so it can be negative when the supplied
        total is smaller than the rough-cut saving.

        Returns:
            List of {'name', 'rough_cut_savings', 'other_savings',
            'total_saved', 'rough_cut_pct'} rows
        """
        rows = []
        for metrics in self.summarize():
            rows.append({
                'name': metrics.name,
                'rough_cut_savings': metrics.hours_saved_per_project,
                'other_savings': (metrics.total_time_saved_per_project
                                  - metrics.hours_saved_per_project),
                'total_saved': metrics.total_time_saved_per_project,
                'rough_cut_pct': metrics.rough_cut_contribution_pct,
            })
        return rows

    def project_projection(self, max_projects: int = 4) -> List[Dict[str, float]]:
        """
        Cumulative rough-cut hours saved for 1..max_projects projects.

        Returns:
            One row per project count: {'projects': p, <scenario name>: hours}
        """
        if max_projects < 1:
            raise InvalidInputError(f"max_projects must be >= 1, got {max_projects}")

        per_project = {s.name: self.rough_cut_saved_per_project(s) for s in self.scenarios}
        rows = []
        for projects in range(1, max_projects + 1):
            row = {PROJECTS_KEY: projects}
            for name, saved in per_project.items():
                row[name] = saved * projects
            rows.append(row)
        return rows

    def time_distribution(self, name: Optional[str] = None) -> List[Dict[str, float]]:
        """
        Hours per project spent in each stage.

        Args:
            name: Scenario name, or None (or 'Baseline') for the baseline

        Returns:
            List of {'name': stage, 'value': hours} rows, in pipeline order
        """
        if name is None or name == BASELINE_NAME:
            source = self.baseline
        else:
            source = self.get_scenario(name)

        deliverables = self.baseline.deliverables
        stage_hours = (source.rough_cut_hours, source.feedback_hours, source.qc_hours)
        return [
            {'name': stage, 'value': hours * deliverables}
            for stage, hours in zip(STAGE_NAMES, stage_hours)
        ]
