"""
Human-readable summaries of run results.

Builds plain text from formatter primitives; the CLI colorizes it when the
terminal supports it.
"""

from typing import List

from . import formatter as fmt
from .formatter import Column
from .runner import results_as_dict


EFFICIENCY_COLUMNS = [
    Column("name", "Scenario"),
    Column("rough_cut_reduction_pct", "Rough Cut Reduction", "percent"),
    Column("hours_per_deliverable", "Hours per Deliverable", "hours"),
    Column("hours_saved_per_project", "Rough Cut Hours Saved", "hours", "hrs/project"),
    Column("rough_cut_contribution_pct", "% of Total Time Saved", "percent"),
]

SAVINGS_COLUMNS = [
    Column("name", "Scenario"),
    Column("rough_cut_savings", "Rough Cut Savings", "hours"),
    Column("other_savings", "Other Stages Savings", "hours"),
    Column("total_saved", "Total Saved", "hours"),
]


def _baseline_block(config: dict) -> str:
    base = config.get("baseline", {})
    deliverables = base.get("deliverables", 0)
    stage_total = (base.get("rough_cut_hours", 0) + base.get("feedback_hours", 0)
                   + base.get("qc_hours", 0))
    return fmt.leaders([
        ("Deliverables per project", str(deliverables)),
        ("Rough cut", fmt.hours(base.get("rough_cut_hours", 0), "hrs/deliverable")),
        ("Feedback", fmt.hours(base.get("feedback_hours", 0), "hrs/deliverable")),
        ("QC & rendering", fmt.hours(base.get("qc_hours", 0), "hrs/deliverable")),
        ("Total per project", fmt.hours(stage_total * deliverables)),
    ])


def format_efficiency_table(summary: List[dict]) -> str:
    """Rough cut efficiency summary, one row per scenario."""
    return fmt.table(EFFICIENCY_COLUMNS, summary)


def format_savings_table(breakdown: List[dict]) -> str:
    return fmt.table(SAVINGS_COLUMNS, breakdown)


def format_projection_table(projection: List[dict]) -> str:
    if not projection:
        return ""
    names = [k for k in projection[0] if k != "projects"]
    columns = [Column("projects", "Projects", "count")]
    columns += [Column(name, name, "hours") for name in names]
    return fmt.table(columns, projection)


def format_run_summary(result) -> str:
    """
    Format a full text summary of a run.

    Args:
        result: RunResult or dict loaded from a saved result

    Returns:
        Plain text (no ANSI codes)
    """
    if isinstance(result, dict):
        meta = result.get("meta", {})
        config = result.get("config", {})
    else:
        meta = result.meta
        config = result.config
    res = results_as_dict(result)

    lines = [fmt.banner(f"Rough Cut Optimization: {meta.get('experiment_name', '')}")]
    if config.get("description"):
        lines.append(f"  {config['description']}")
    lines.append("")

    lines.append(fmt.section("Baseline", _baseline_block(config)))
    lines.append("")
    lines.append(fmt.section("Rough Cut Efficiency Summary",
                             format_efficiency_table(res["summary"])))
    lines.append("")
    lines.append(fmt.section("Contribution of Rough Cut Savings (per project)",
                             format_savings_table(res["savings_breakdown"])))
    lines.append("")
    lines.append(fmt.section("Rough Cut Hours Saved Across Projects",
                             format_projection_table(res["projection"])))
    lines.append("")

    projects = res["max_projects"]
    lines.append(fmt.section(f"Total Time Saved Over {projects} Projects"))
    for name, total in res["total_saved_across_projects"].items():
        weeks = fmt.workweeks(res["workweeks_saved"][name])
        lines.append(fmt.highlight(name, f"{fmt.hours(total)} ({weeks})"))
    lines.append("")

    lines.append(fmt.footnotes([
        "Total time saved per project is a supplied estimate, not derived from stage hours",
        "Percentages are rounded half-up to whole numbers",
    ]))

    return "\n".join(lines)
