"""Visualization utilities for traveller timelines."""

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.patches import Patch
import seaborn as sns
from pathlib import Path
from typing import Dict, List

from ..models.activity import TravellerActivity

sns.set_style("whitegrid")

# Stable colour per activity, in workflow order
ACTIVITY_COLORS = dict(zip(
    [activity.value for activity in TravellerActivity],
    sns.color_palette("husl", len(TravellerActivity)),
))


def plot_results(results: Dict, travellers: List[Dict], output_dir: Path) -> None:
    """Generate all visualization plots.

    Args:
        results: Results dictionary from simulation
        travellers: Traveller timelines
        output_dir: Directory to save plots
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    plot_gantt_chart(travellers, output_dir / "gantt_chart.png",
                     title=f"Deliveries ({results.get('delivered_boxes', 0)} boxes)")
    plot_activity_breakdown(results, output_dir / "activity_breakdown.png")


def plot_gantt_chart(travellers: List[Dict], output_path: Path,
                     title: str = "Traveller Activity") -> None:
    """Plot one horizontal bar row per traveller, coloured by activity.

    Args:
        travellers: Traveller info dicts with closed (or substituted) end times
        output_path: Output file path
        title: Chart title
    """
    fig, ax = plt.subplots(figsize=(12, max(2.0, 0.6 * len(travellers) + 1.5)))

    for row, info in enumerate(travellers):
        for segment in info['timeline']:
            duration = segment['end_time'] - segment['start_time']
            if duration <= 0:
                continue
            ax.barh(row, duration, left=segment['start_time'], height=0.6,
                    color=ACTIVITY_COLORS[segment['activity']], edgecolor='white')

    ax.set_yticks(range(len(travellers)))
    ax.set_yticklabels([f"{info['name']} (#{info['id']})" for info in travellers])
    ax.invert_yaxis()
    ax.set_xlabel('Simulation time (s)')
    ax.set_title(title)
    ax.grid(axis='y', alpha=0.0)

    handles = [Patch(color=color, label=activity) for activity, color in ACTIVITY_COLORS.items()]
    ax.legend(handles=handles, loc='upper center', bbox_to_anchor=(0.5, -0.15),
              ncol=4, frameon=False)

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)


def plot_activity_breakdown(results: Dict, output_path: Path) -> None:
    """Plot total time spent per activity.

    Args:
        results: Results dictionary containing ``total_<Activity>`` entries
        output_path: Output file path
    """
    labels = []
    values = []
    for activity in TravellerActivity:
        key = f"total_{activity.value}"
        if key in results:
            labels.append(activity.value)
            values.append(results[key])

    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(12, 5))

    if values:
        ax1.bar(labels, values, color=[ACTIVITY_COLORS[label] for label in labels])
        ax1.set_ylabel('Time (s)')
        ax1.set_title('Time per Activity')
        ax1.tick_params(axis='x', rotation=45)
        ax1.grid(axis='y', alpha=0.3)

    summary_text = [
        f"Delivered: {results.get('delivered_boxes', 0)}/{results.get('total_boxes', 0)}",
        f"Makespan: {results.get('makespan', 0):.1f}s",
        f"Throughput: {results.get('throughput', 0):.3f} boxes/s",
        f"Mean Utilization: {results.get('mean_utilization', 0):.1%}",
        f"Travellers: {results.get('num_travellers', 0)}",
    ]

    ax2.text(0.1, 0.5, '\n'.join(summary_text), fontsize=12,
             verticalalignment='center', family='monospace')
    ax2.axis('off')
    ax2.set_title('Summary Metrics')

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)
