"""Metrics collection and aggregation."""

import numpy as np
from typing import Dict, List, Optional
from collections import defaultdict

from ..utils.logger import setup_logger

# Activities counted as productive work for utilization
BUSY_ACTIVITIES = ('MovingToPickup', 'PickingUp', 'MovingToDelivery', 'Delivering', 'Returning')


class MetricsCollector:
    """Collect and aggregate delivery metrics.

    Tracks delivery completions as they happen and derives per-activity and
    per-traveller statistics from the recorded timelines.
    """

    def __init__(self, config: Dict):
        """Initialize metrics collector.

        Args:
            config: Configuration dictionary
        """
        self.config = config
        self.logger = setup_logger(self.__class__.__name__)

        self.delivery_times: List[float] = []
        self.deliveries_by_traveller: Dict[int, int] = defaultdict(int)

        self.percentiles = config.get('metrics', {}).get('percentiles', [50, 90, 99])

    def reset(self) -> None:
        """Drop everything recorded so far."""
        self.delivery_times = []
        self.deliveries_by_traveller = defaultdict(int)

    def record_delivery(self, timestamp: float, traveller_id: int) -> None:
        """Record a completed delivery.

        Args:
            timestamp: Simulation time of the delivery
            traveller_id: Traveller that delivered the box
        """
        self.delivery_times.append(timestamp)
        self.deliveries_by_traveller[traveller_id] += 1

    def compute_metrics(self, travellers: List[Dict], end_time: float) -> Dict:
        """Compute aggregate metrics.

        Args:
            travellers: Traveller info dicts as returned by the simulator
            end_time: Time that closes open segments and bounds throughput

        Returns:
            Dictionary of computed metrics
        """
        results = {
            'boxes_delivered': len(self.delivery_times),
            'makespan': float(end_time),
        }

        if self.delivery_times and end_time > 0:
            results['throughput'] = len(self.delivery_times) / end_time  # boxes per second

        if self.deliveries_by_traveller:
            counts = list(self.deliveries_by_traveller.values())
            results['deliveries_per_traveller'] = dict(self.deliveries_by_traveller)
            results['min_deliveries_per_traveller'] = int(np.min(counts))
            results['max_deliveries_per_traveller'] = int(np.max(counts))

        if len(self.delivery_times) > 1:
            intervals = np.diff(np.asarray(self.delivery_times))
            results.update(self._compute_distribution_metrics('delivery_interval', intervals))

        durations = defaultdict(list)
        busy_fractions = []
        for info in travellers:
            busy = 0.0
            span = 0.0
            for segment in info['timeline']:
                end = segment['end_time'] if segment['end_time'] is not None else end_time
                duration = end - segment['start_time']
                durations[segment['activity']].append(duration)
                span += duration
                if segment['activity'] in BUSY_ACTIVITIES:
                    busy += duration
            if span > 0:
                busy_fractions.append(busy / span)

        for activity, values in durations.items():
            values = np.asarray(values)
            results[f'total_{activity}'] = float(np.sum(values))
            results[f'mean_{activity}'] = float(np.mean(values))

        if busy_fractions:
            results['mean_utilization'] = float(np.mean(busy_fractions))
            results['min_utilization'] = float(np.min(busy_fractions))

        return results

    def _compute_distribution_metrics(self, name: str, values: np.ndarray) -> Dict:
        """Compute distribution statistics for a metric.

        Args:
            name: Metric name
            values: Array of values

        Returns:
            Dictionary with mean, median and percentiles
        """
        if len(values) == 0:
            return {}

        results = {
            f'mean_{name}': float(np.mean(values)),
            f'median_{name}': float(np.median(values)),
            f'std_{name}': float(np.std(values)),
        }

        for p in self.percentiles:
            results[f'p{p}_{name}'] = float(np.percentile(values, p))

        return results
