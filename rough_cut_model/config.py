"""
Configuration loading and serialization for rough-cut experiment configs.

Provides JSON-serializable config structures, the built-in reference data,
and conversion to model objects.
"""

from dataclasses import dataclass, field, asdict
from typing import Optional, List, Dict
import json
from pathlib import Path

try:
    import json5
    _HAS_JSON5 = True
except ImportError:
    _HAS_JSON5 = False

from .model import Baseline, Scenario, RESERVED_NAMES


# --- Config Dataclasses ---

@dataclass
class BaselineSpec:
    """Specification for the current (pre-improvement) workflow.

    Args:
        deliverables: Video deliverables per project
        rough_cut_hours: Rough-cut editing hours per deliverable
        feedback_hours: Feedback/revision hours per deliverable
        qc_hours: QC and rendering hours per deliverable
    """
    deliverables: int = 12
    rough_cut_hours: float = 4.0
    feedback_hours: float = 2.0
    qc_hours: float = 1.0

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "BaselineSpec":
        return cls(
            deliverables=data.get("deliverables", 12),
            rough_cut_hours=data.get("rough_cut_hours", 4.0),
            feedback_hours=data.get("feedback_hours", 2.0),
            qc_hours=data.get("qc_hours", 1.0),
        )

    def to_baseline(self) -> Baseline:
        return Baseline(
            deliverables=self.deliverables,
            rough_cut_hours=self.rough_cut_hours,
            feedback_hours=self.feedback_hours,
            qc_hours=self.qc_hours,
        )


@dataclass
class ScenarioSpec:
    """Specification for one improvement scenario."""
    name: str
    rough_cut_hours: float
    feedback_hours: float
    qc_hours: float
    total_time_saved_per_project: float

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "ScenarioSpec":
        return cls(
            name=data["name"],
            rough_cut_hours=data["rough_cut_hours"],
            feedback_hours=data.get("feedback_hours", 0.0),
            qc_hours=data.get("qc_hours", 0.0),
            total_time_saved_per_project=data["total_time_saved_per_project"],
        )

    def to_scenario(self) -> Scenario:
        return Scenario(
            name=self.name,
            rough_cut_hours=self.rough_cut_hours,
            feedback_hours=self.feedback_hours,
            qc_hours=self.qc_hours,
            total_time_saved_per_project=self.total_time_saved_per_project,
        )


def default_scenarios() -> List[ScenarioSpec]:
    """Reference scenarios: 50%, 75% and 90% faster rough cuts."""
    return [
        ScenarioSpec("Conservative", rough_cut_hours=2.0, feedback_hours=1.5,
                     qc_hours=0.75, total_time_saved_per_project=42.0),
        ScenarioSpec("Average", rough_cut_hours=1.0, feedback_hours=1.0,
                     qc_hours=0.5, total_time_saved_per_project=63.0),
        ScenarioSpec("Best Case", rough_cut_hours=0.4, feedback_hours=0.5,
                     qc_hours=0.25, total_time_saved_per_project=73.0),
    ]


@dataclass
class ProjectionSpec:
    """Multi-project projection settings."""
    max_projects: int = 4
    hours_per_workweek: float = 40.0

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "ProjectionSpec":
        return cls(
            max_projects=data.get("max_projects", 4),
            hours_per_workweek=data.get("hours_per_workweek", 40.0),
        )


@dataclass
class ExperimentConfig:
    """
    Complete experiment configuration.

    This is the top-level config that gets serialized to/from JSON.
    """
    name: str
    description: str = ""
    baseline: BaselineSpec = field(default_factory=BaselineSpec)
    scenarios: List[ScenarioSpec] = field(default_factory=default_scenarios)
    projection: ProjectionSpec = field(default_factory=ProjectionSpec)
    # Scenario shown next to the baseline in the time distribution
    distribution_scenario: Optional[str] = "Average"

    def to_dict(self) -> dict:
        """Convert config to JSON-serializable dict."""
        return {
            "name": self.name,
            "description": self.description,
            "baseline": self.baseline.to_dict(),
            "scenarios": [s.to_dict() for s in self.scenarios],
            "projection": self.projection.to_dict(),
            "distribution_scenario": self.distribution_scenario,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ExperimentConfig":
        """Create config from dict (e.g., from JSON).

        A missing or empty 'scenarios' list falls back to the reference scenarios.
        """
        scenario_data = data.get("scenarios")
        if scenario_data:
            scenarios = [ScenarioSpec.from_dict(s) for s in scenario_data]
        else:
            scenarios = default_scenarios()

        # Without an explicit choice, prefer "Average" and fall back to the first
        names = [s.name for s in scenarios]
        fallback = "Average" if "Average" in names else names[0]

        return cls(
            name=data.get("name", "unnamed"),
            description=data.get("description", ""),
            baseline=BaselineSpec.from_dict(data.get("baseline", {})),
            scenarios=scenarios,
            projection=ProjectionSpec.from_dict(data.get("projection", {})),
            distribution_scenario=data.get("distribution_scenario", fallback),
        )

    def get_scenario(self, name: str) -> ScenarioSpec:
        """Get a scenario spec by name."""
        for spec in self.scenarios:
            if spec.name == name:
                return spec
        raise KeyError(f"Unknown scenario: {name}. "
                       f"Available: {[s.name for s in self.scenarios]}")


def default_config() -> ExperimentConfig:
    """Config holding the built-in reference data."""
    return ExperimentConfig(
        name="rough_cut_optimization",
        description="Focus on eliminating rough cut editing time across "
                    "12 deliverables per project",
    )


def load_config(path: str | Path) -> ExperimentConfig:
    """
    Load an experiment configuration from a JSON file.

    Supports JSON with comments (JSONC) if json5 is installed.

    Args:
        path: Path to JSON config file

    Returns:
        ExperimentConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        json.JSONDecodeError: If JSON is invalid
        KeyError: If a scenario is missing a required field
        TypeError, AttributeError: If a section has the wrong JSON type
    """
    path = Path(path)
    with open(path, 'r') as f:
        if _HAS_JSON5:
            data = json5.load(f)
        else:
            data = json.load(f)
    return ExperimentConfig.from_dict(data)


def save_config(config: ExperimentConfig, path: str | Path) -> None:
    """
    Save an experiment configuration to a JSON file.

    Args:
        config: ExperimentConfig to save
        path: Path to output file
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        json.dump(config.to_dict(), f, indent=2)


def validate_config(config: ExperimentConfig) -> List[str]:
    """
    Validate a configuration and return list of error messages.

    Returns empty list if config is valid.
    """
    errors = []

    if not config.name or not config.name.strip():
        errors.append("Config must have a non-empty 'name'")

    base = config.baseline
    if base.deliverables <= 0:
        errors.append(f"deliverables must be positive, got {base.deliverables}")
    if base.rough_cut_hours <= 0:
        errors.append(f"baseline rough_cut_hours must be positive, got {base.rough_cut_hours}")
    if base.feedback_hours < 0:
        errors.append(f"baseline feedback_hours must be non-negative, got {base.feedback_hours}")
    if base.qc_hours < 0:
        errors.append(f"baseline qc_hours must be non-negative, got {base.qc_hours}")

    if not config.scenarios:
        errors.append("At least one scenario is required")

    names: Dict[str, int] = {}
    for spec in config.scenarios:
        if not spec.name or not spec.name.strip():
            errors.append("Scenario names must be non-empty")
            continue
        if spec.name in RESERVED_NAMES:
            errors.append(f"Scenario name '{spec.name}' is reserved")
        names[spec.name] = names.get(spec.name, 0) + 1
        for attr in ("rough_cut_hours", "feedback_hours", "qc_hours"):
            if getattr(spec, attr) < 0:
                errors.append(f"Scenario '{spec.name}' {attr} must be non-negative")

    for name, count in names.items():
        if count > 1:
            errors.append(f"Duplicate scenario name: '{name}'")

    if config.projection.max_projects < 1:
        errors.append(f"max_projects must be >= 1, got {config.projection.max_projects}")
    if config.projection.hours_per_workweek <= 0:
        errors.append(f"hours_per_workweek must be positive, "
                      f"got {config.projection.hours_per_workweek}")

    if config.distribution_scenario is not None and config.distribution_scenario not in names:
        errors.append(f"distribution_scenario '{config.distribution_scenario}' "
                      f"does not name a scenario. Valid: {list(names)}")

    return errors
