"""Utility functions and helpers."""

from .logger import setup_logger
from .io import save_json, load_json, timelines_to_dataframe, export_timeline_csv
from .visualization import plot_results, plot_gantt_chart, plot_activity_breakdown

__all__ = [
    "setup_logger",
    "save_json",
    "load_json",
    "timelines_to_dataframe",
    "export_timeline_csv",
    "plot_results",
    "plot_gantt_chart",
    "plot_activity_breakdown",
]
