"""
Metrics SDK for pushing time-series data points to OpenTSDB.
"""
from .errors import (
    MetricsClientError,
    ConfigError,
    ValidationError,
    TransportError,
    ServerError
)
from .metric import Metric
from .options import ClientConfig, with_auth, with_batch_size, with_timeout
from .metrics_sdk import MetricsClient, create_client

__all__ = [
    'Metric',
    'MetricsClient',
    'ClientConfig',
    'create_client',
    'with_auth',
    'with_batch_size',
    'with_timeout',
    'MetricsClientError',
    'ConfigError',
    'ValidationError',
    'TransportError',
    'ServerError',
]
