"""
Metric data point as accepted by the OpenTSDB put endpoint.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Any, Optional, Union

import pytz

MetricValue = Union[int, float, str]


@dataclass(frozen=True)
class Metric:
    """A single time-series data point."""
    timestamp: int
    metric: str
    value: MetricValue
    tags: Optional[Dict[str, str]]

    @classmethod
    def now(cls, metric: str, value: MetricValue, tags: Optional[Dict[str, str]]) -> 'Metric':
        """
        Create a metric stamped with the current UTC time.

        Args:
            metric (str): Metric name
            value (int | float | str): Metric value
            tags (dict): Tag key/value pairs

        Returns:
            Metric: The new metric
        """
        return cls(
            timestamp=int(datetime.now(pytz.UTC).timestamp()),
            metric=metric,
            value=value,
            tags=tags
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Format the metric for the wire.

        Returns:
            dict: The metric in put-endpoint format
        """
        return {
            'timestamp': self.timestamp,
            'metric': self.metric,
            'value': self.value,
            'tags': self.tags
        }
