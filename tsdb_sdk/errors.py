"""
Exceptions raised by the metrics client.
"""
from typing import Optional


class MetricsClientError(Exception):
    """Base class for all metrics client errors."""


class ConfigError(MetricsClientError, ValueError):
    """Raised when a construction option rejects its value."""


class ValidationError(MetricsClientError, ValueError):
    """Raised when a metric is missing required fields."""


class TransportError(MetricsClientError):
    """Raised when a request could not be completed."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class ServerError(MetricsClientError):
    """
    Raised when the server answers with a status code >= 400.

    Attributes:
        status_code (int): HTTP status code
        status (str): Status line, e.g. "500 Internal Server Error"
        body (str): Response body text
    """

    def __init__(self, status_code: int, status: str, body: str):
        super().__init__(f"{status}: {body}")
        self.status_code = status_code
        self.status = status
        self.body = body
