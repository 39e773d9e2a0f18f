"""
Plotting utilities for visualizing rough cut optimization results.

Requires the 'plot' optional dependency: pip install -e ".[plot]"

Usage:
    from rough_cut_model import Runner, default_config
    from rough_cut_model.plot import plot_result, plot_project_projection

    result = Runner(default_config()).run()

    # Full dashboard
    plot_result(result)

    # Or a single chart
    plot_project_projection(result, save_path="projection.png", show=False)

Every function accepts a RunResult or a dict loaded with load_result(), and
an optional matplotlib Axes so charts can be composed into larger figures.
"""

from dataclasses import dataclass
from typing import Optional, Union, Dict, Any, Tuple, List, Sequence
from pathlib import Path

try:
    import matplotlib.pyplot as plt
    import numpy as np
    HAS_MATPLOTLIB = True
except ImportError:
    HAS_MATPLOTLIB = False

from .runner import results_as_dict


COLORS = {
    'rough_cut': '#8884d8',
    'other_stages': '#82ca9d',
    'feedback': '#82ca9d',
    'qc': '#ffc658',
    'neutral': '#7f8c8d',
}

# Line colors cycle through this palette in scenario order
SCENARIO_PALETTE = ['#8884d8', '#82ca9d', '#ffc658', '#ff7f50', '#a4de6c', '#d0ed57']

STAGE_COLORS = [COLORS['rough_cut'], COLORS['feedback'], COLORS['qc']]


@dataclass
class PlotStyle:
    """Centralized style configuration for all plots.

    Override individual fields to customize: ``PlotStyle(dpi=150)``.
    """

    # Bar properties
    bar_width: float = 0.35
    bar_alpha: float = 0.9
    bar_edgecolor: str = 'black'
    bar_linewidth: float = 0.5

    # Line plot properties
    line_width: float = 2.0
    marker_size: int = 6

    # Grid
    grid: bool = True
    grid_axis: str = 'y'
    grid_alpha: float = 0.3
    grid_linestyle: str = '--'
    grid_color: str = '#cccccc'

    # Figure
    dpi: int = 150
    facecolor: str = 'white'

    # Font sizes
    title_fontsize: int = 13
    axis_label_fontsize: int = 11
    tick_fontsize: int = 10
    annotation_fontsize: int = 9
    legend_fontsize: int = 10

    # Spines
    hide_top_spine: bool = True
    hide_right_spine: bool = True
    spine_color: str = '#cccccc'


DEFAULT_STYLE = PlotStyle()


def _check_matplotlib():
    """Raise helpful error if matplotlib is not installed."""
    if not HAS_MATPLOTLIB:
        raise ImportError(
            "Plotting requires matplotlib. Install with: pip install -e '.[plot]'"
        )


def _apply_common_style(ax, style: PlotStyle):
    """Apply shared style settings (grid, spines, background) to an axes."""
    ax.set_facecolor(style.facecolor)
    if style.grid:
        ax.grid(True, axis=style.grid_axis, alpha=style.grid_alpha,
                linestyle=style.grid_linestyle, color=style.grid_color)
        ax.set_axisbelow(True)
    if style.hide_top_spine:
        ax.spines['top'].set_visible(False)
    if style.hide_right_spine:
        ax.spines['right'].set_visible(False)
    ax.spines['left'].set_color(style.spine_color)
    ax.spines['bottom'].set_color(style.spine_color)


def _hours_label(value: float) -> str:
    text = f"{value:.1f}"
    return text[:-2] if text.endswith('.0') else text


def _finish(fig, save_path, show: bool, style: PlotStyle):
    """Lay out, save and/or show a figure this module created."""
    plt.tight_layout()
    if save_path:
        plt.savefig(save_path, dpi=style.dpi, bbox_inches='tight',
                    facecolor=style.facecolor)
    if show:
        plt.show()
    return fig


def plot_stage_comparison(
    result,
    ax=None,
    save_path: Optional[Union[str, Path]] = None,
    figsize: Tuple[float, float] = (9, 5),
    show: bool = True,
    title: Optional[str] = None,
    style: Optional[PlotStyle] = None,
) -> Optional[Any]:
    """
    Grouped bars of rough-cut vs other-stage hours per project, baseline first.

    Args:
        result: RunResult or result dict
        ax: Optional Axes to draw into (no save/show when given)
        save_path: Optional path to save the figure
        figsize: Figure size (width, height) in inches
        show: Whether to display the plot (default True)
        title: Optional custom title
        style: Optional PlotStyle

    Returns:
        matplotlib Figure object
    """
    _check_matplotlib()
    style = style or DEFAULT_STYLE
    rows = results_as_dict(result)['stage_comparison']

    own_fig = ax is None
    if own_fig:
        fig, ax = plt.subplots(figsize=figsize)
        fig.patch.set_facecolor(style.facecolor)
    else:
        fig = ax.figure

    x = np.arange(len(rows))
    width = style.bar_width
    rough = [r['rough_cut'] for r in rows]
    other = [r['other_stages'] for r in rows]

    bars = [
        ax.bar(x - width / 2, rough, width, label='Rough Cut Hours',
               color=COLORS['rough_cut'], edgecolor=style.bar_edgecolor,
               linewidth=style.bar_linewidth, alpha=style.bar_alpha),
        ax.bar(x + width / 2, other, width, label='Other Stages Hours',
               color=COLORS['other_stages'], edgecolor=style.bar_edgecolor,
               linewidth=style.bar_linewidth, alpha=style.bar_alpha),
    ]
    for group in bars:
        for bar in group:
            ax.annotate(_hours_label(bar.get_height()),
                        xy=(bar.get_x() + bar.get_width() / 2, bar.get_height()),
                        xytext=(0, 3), textcoords='offset points',
                        ha='center', va='bottom', fontsize=style.annotation_fontsize)

    ax.set_xticks(x)
    ax.set_xticklabels([r['name'] for r in rows], fontsize=style.tick_fontsize)
    ax.set_ylabel('Hours Per Project', fontsize=style.axis_label_fontsize)
    ax.set_title(title or 'Rough Cut Hours: Baseline vs Tool-Assisted Scenarios',
                 fontsize=style.title_fontsize, fontweight='bold', color='#333333')
    ax.legend(frameon=False, fontsize=style.legend_fontsize)
    _apply_common_style(ax, style)

    if own_fig:
        return _finish(fig, save_path, show, style)
    return fig


def plot_savings_breakdown(
    result,
    ax=None,
    save_path: Optional[Union[str, Path]] = None,
    figsize: Tuple[float, float] = (8, 5),
    show: bool = True,
    title: Optional[str] = None,
    style: Optional[PlotStyle] = None,
) -> Optional[Any]:
    """
    Stacked bars splitting each scenario's time saved into rough cut vs other stages.

    The rough-cut share is annotated inside the lower segment.
    """
    _check_matplotlib()
    style = style or DEFAULT_STYLE
    rows = results_as_dict(result)['savings_breakdown']

    own_fig = ax is None
    if own_fig:
        fig, ax = plt.subplots(figsize=figsize)
        fig.patch.set_facecolor(style.facecolor)
    else:
        fig = ax.figure

    x = np.arange(len(rows))
    width = style.bar_width * 2
    rough = [r['rough_cut_savings'] for r in rows]
    other = [r['other_savings'] for r in rows]

    ax.bar(x, rough, width, label='Rough Cut Savings', color=COLORS['rough_cut'],
           edgecolor=style.bar_edgecolor, linewidth=style.bar_linewidth,
           alpha=style.bar_alpha)
    ax.bar(x, other, width, bottom=rough, label='Other Stages Savings',
           color=COLORS['other_stages'], edgecolor=style.bar_edgecolor,
           linewidth=style.bar_linewidth, alpha=style.bar_alpha)

    for i, row in enumerate(rows):
        if row['rough_cut_pct'] is not None and row['rough_cut_savings'] > 0:
            ax.text(i, row['rough_cut_savings'] / 2, f"{row['rough_cut_pct']}%",
                    ha='center', va='center', color='white', fontweight='medium',
                    fontsize=style.annotation_fontsize)
        ax.text(i, row['total_saved'], f"{_hours_label(row['total_saved'])} h",
                ha='center', va='bottom', fontsize=style.annotation_fontsize,
                fontweight='bold', color='#333333')

    ax.set_xticks(x)
    ax.set_xticklabels([r['name'] for r in rows], fontsize=style.tick_fontsize)
    ax.set_ylabel('Hours Saved', fontsize=style.axis_label_fontsize)
    ax.set_title(title or 'Contribution of Rough Cut Savings to Total Time Saved',
                 fontsize=style.title_fontsize, fontweight='bold', color='#333333')
    ax.legend(frameon=False, fontsize=style.legend_fontsize)
    _apply_common_style(ax, style)

    if own_fig:
        return _finish(fig, save_path, show, style)
    return fig


def _draw_pie(ax, rows: List[dict], label: str, style: PlotStyle):
    values = [r['value'] for r in rows]
    names = [r['name'] for r in rows]
    if not any(values):
        ax.text(0.5, 0.5, 'No hours', ha='center', va='center',
                transform=ax.transAxes, color=COLORS['neutral'])
        ax.set_axis_off()
    else:
        ax.pie(values, labels=None, colors=STAGE_COLORS[:len(values)],
               autopct='%1.0f%%', startangle=90,
               textprops={'color': 'white', 'fontsize': style.annotation_fontsize},
               wedgeprops={'edgecolor': 'white'})
        ax.axis('equal')
    ax.set_title(f"{label} ({_hours_label(sum(values))} h)",
                 fontsize=style.axis_label_fontsize, fontweight='medium')
    return names


def plot_time_distribution(
    result,
    axes: Optional[Sequence[Any]] = None,
    save_path: Optional[Union[str, Path]] = None,
    figsize: Tuple[float, float] = (10, 5),
    show: bool = True,
    title: Optional[str] = None,
    style: Optional[PlotStyle] = None,
) -> Optional[Any]:
    """
    Side-by-side pies of hours per stage: baseline vs comparison scenario.

    Args:
        axes: Optional pair of Axes to draw into
    """
    _check_matplotlib()
    style = style or DEFAULT_STYLE
    distributions: Dict[str, List[dict]] = results_as_dict(result)['distributions']

    own_fig = axes is None
    if own_fig:
        fig, axes = plt.subplots(1, len(distributions), figsize=figsize, squeeze=False)
        axes = list(axes[0])
        fig.patch.set_facecolor(style.facecolor)
    else:
        fig = axes[0].figure

    names: List[str] = []
    for ax, (label, rows) in zip(axes, distributions.items()):
        names = _draw_pie(ax, rows, label, style)

    handles = [plt.Rectangle((0, 0), 1, 1, color=c) for c in STAGE_COLORS[:len(names)]]
    axes[-1].legend(handles, names, loc='center left', bbox_to_anchor=(1.0, 0.5),
                    frameon=False, fontsize=style.legend_fontsize)

    heading = title or 'Time Distribution: ' + ' vs '.join(distributions)
    if own_fig:
        fig.suptitle(heading, fontsize=style.title_fontsize, fontweight='bold',
                     color='#333333')
        return _finish(fig, save_path, show, style)
    return fig


def plot_project_projection(
    result,
    ax=None,
    save_path: Optional[Union[str, Path]] = None,
    figsize: Tuple[float, float] = (9, 5),
    show: bool = True,
    title: Optional[str] = None,
    style: Optional[PlotStyle] = None,
) -> Optional[Any]:
    """Lines of cumulative rough-cut hours saved vs number of projects."""
    _check_matplotlib()
    style = style or DEFAULT_STYLE
    rows = results_as_dict(result)['projection']

    own_fig = ax is None
    if own_fig:
        fig, ax = plt.subplots(figsize=figsize)
        fig.patch.set_facecolor(style.facecolor)
    else:
        fig = ax.figure

    projects = [r['projects'] for r in rows]
    names = [k for k in rows[0] if k != 'projects'] if rows else []
    for i, name in enumerate(names):
        ax.plot(projects, [r[name] for r in rows], 'o-',
                color=SCENARIO_PALETTE[i % len(SCENARIO_PALETTE)],
                linewidth=style.line_width, markersize=style.marker_size, label=name)

    ax.set_xticks(projects)
    ax.set_xlabel('Number of Projects', fontsize=style.axis_label_fontsize)
    ax.set_ylabel('Rough Cut Hours Saved', fontsize=style.axis_label_fontsize)
    ax.set_title(title or 'Rough Cut Hours Saved Across Projects',
                 fontsize=style.title_fontsize, fontweight='bold', color='#333333')
    ax.legend(loc='best', frameon=False, fontsize=style.legend_fontsize)
    _apply_common_style(ax, style)

    if own_fig:
        return _finish(fig, save_path, show, style)
    return fig


def plot_result(
    result,
    save_path: Optional[Union[str, Path]] = None,
    show: bool = True,
    figsize: Tuple[float, float] = (16, 14),
    style: Optional[PlotStyle] = None,
) -> Optional[Any]:
    """
    Plot the full dashboard: stage comparison, savings breakdown,
    time distribution pies and the multi-project projection.

    Args:
        result: RunResult object or dict
        save_path: Optional path to save the figure
        show: Whether to display the plot

    Returns:
        matplotlib Figure object
    """
    _check_matplotlib()
    style = style or DEFAULT_STYLE

    fig = plt.figure(figsize=figsize)
    fig.patch.set_facecolor(style.facecolor)
    grid = fig.add_gridspec(3, 2)

    plot_stage_comparison(result, ax=fig.add_subplot(grid[0, 0]), style=style)
    plot_savings_breakdown(result, ax=fig.add_subplot(grid[0, 1]), style=style)
    plot_time_distribution(
        result,
        axes=[fig.add_subplot(grid[1, 0]), fig.add_subplot(grid[1, 1])],
        style=style,
    )
    plot_project_projection(result, ax=fig.add_subplot(grid[2, :]), style=style)

    if isinstance(result, dict):
        name = result.get('meta', {}).get('experiment_name', '')
    else:
        name = result.meta.get('experiment_name', '')
    fig.suptitle(f"Rough Cut Optimization Analysis: {name}",
                 fontsize=style.title_fontsize + 3, fontweight='bold', color='#333333')

    return _finish(fig, save_path, show, style)
