import sys
sys.path.insert(0, '..')

from rough_cut_model import Baseline, Scenario, RoughCutModel, default_config, Runner, plot_result
import numpy as np
import matplotlib.pyplot as plt


def compute_rough_cut_sweep(
    baseline: Baseline,
    hours_min: float = 0.2,
    hours_max: float = 4.0,
    step: float = 0.2,
):
    """
    Rough-cut hours saved per project as the tool-assisted rough cut gets slower.

    total_time_saved_per_project is unknown for these synthetic points, so only
    the rough-cut figures are meaningful here.

    Returns:
        dict with 'hours', 'reduction_pct', 'saved_per_project'
    """
    hours = np.arange(hours_min, hours_max + step / 2, step)
    scenarios = [
        Scenario(f"{h:.1f}h", rough_cut_hours=float(h), feedback_hours=baseline.feedback_hours,
                 qc_hours=baseline.qc_hours, total_time_saved_per_project=0.0)
        for h in hours
    ]
    summary = RoughCutModel(baseline, scenarios).summarize()

    return {
        'hours': hours,
        'reduction_pct': np.array([m.rough_cut_reduction_pct for m in summary]),
        'saved_per_project': np.array([m.hours_saved_per_project for m in summary]),
    }


def plot_rough_cut_sweep(sweep_result, deliverables):
    """Plot reduction % and hours saved per project vs rough-cut hours per deliverable."""
    hours = sweep_result['hours']

    fig, axes = plt.subplots(1, 2, figsize=(14, 5))

    ax1 = axes[0]
    ax1.plot(hours, sweep_result['reduction_pct'], 'b-o', linewidth=2, markersize=6)
    ax1.set_xlabel('Rough Cut Hours per Deliverable', fontsize=12)
    ax1.set_ylabel('Rough Cut Reduction (%)', fontsize=12)
    ax1.set_title('Reduction vs Tool-Assisted Rough Cut Time', fontsize=14)
    ax1.grid(True, alpha=0.3)
    ax1.set_ylim(bottom=0)

    ax2 = axes[1]
    ax2.plot(hours, sweep_result['saved_per_project'], 'g-o', linewidth=2, markersize=6)
    ax2.set_xlabel('Rough Cut Hours per Deliverable', fontsize=12)
    ax2.set_ylabel('Hours Saved per Project', fontsize=12)
    ax2.set_title(f'Rough Cut Hours Saved ({deliverables} deliverables)', fontsize=14)
    ax2.grid(True, alpha=0.3)
    ax2.set_ylim(bottom=0)

    plt.tight_layout()
    plt.show()

    return fig


config = default_config()
baseline = config.baseline.to_baseline()

sweep = compute_rough_cut_sweep(baseline)

print("Rough Cut Sweep")
print("=" * 50)
print(f"{'Hours':<8} {'Reduction %':<14} {'Saved/Project':<14}")
print("-" * 50)
for i, h in enumerate(sweep['hours']):
    print(f"{h:<8.1f} {sweep['reduction_pct'][i]:<14} {sweep['saved_per_project'][i]:<14.1f}")

plot_rough_cut_sweep(sweep, baseline.deliverables)

# Reference scenarios as a full dashboard
plot_result(Runner(config).run())
