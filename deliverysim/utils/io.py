"""IO helpers: JSON results and timeline export."""

import json
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd

TIMELINE_COLUMNS = [
    "traveller_id", "traveller_name", "activity", "start_time", "end_time", "duration",
]


def timelines_to_dataframe(travellers: List[Dict]) -> pd.DataFrame:
    """Flatten traveller timelines into one row per segment.

    Args:
        travellers: Traveller info dicts from ``Simulator.get_traveller_timelines``

    Returns:
        DataFrame with TIMELINE_COLUMNS, ordered by traveller then start time
    """
    rows = []
    for info in travellers:
        for segment in info['timeline']:
            rows.append({
                'traveller_id': info['id'],
                'traveller_name': info['name'],
                'activity': segment['activity'],
                'start_time': segment['start_time'],
                'end_time': segment['end_time'],
            })

    df = pd.DataFrame(rows, columns=TIMELINE_COLUMNS[:-1])
    df['duration'] = df['end_time'] - df['start_time']
    return df.sort_values(['traveller_id', 'start_time'], kind='stable').reset_index(drop=True)


def export_timeline_csv(travellers: List[Dict], file_path: str) -> Path:
    """Write traveller timelines to CSV.

    Args:
        travellers: Traveller info dicts
        file_path: Output CSV path

    Returns:
        Path of the written file
    """
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    timelines_to_dataframe(travellers).to_csv(path, index=False, float_format="%.3f")
    return path


def save_json(obj: Any, file_path: str, indent: int = 2):
    """Save object as JSON."""
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w') as f:
        json.dump(obj, f, indent=indent)


def load_json(file_path: str) -> Any:
    """Load JSON file."""
    with open(file_path, 'r') as f:
        return json.load(f)
