"""
Metrics SDK for pushing data points to an OpenTSDB server.

The client has two ways to send metrics:
- enqueue() adds metrics to a buffer that is sent once batch_size metrics
  are collected. push() forces the current buffer out.
- send() transmits a single metric immediately, bypassing the buffer.

Call close() (or use the client as a context manager) before shutting down
so an unfilled buffer is not lost.
"""
import json
import logging
from typing import List, Optional

import requests
from requests.auth import HTTPBasicAuth

from . import config
from .errors import MetricsClientError, ConfigError, ValidationError, TransportError, ServerError
from .metric import Metric
from .options import ClientConfig, Option, with_auth, with_batch_size, with_timeout

logger = logging.getLogger(__name__)


class MetricsClient:
    """Client for sending metrics to an OpenTSDB server."""

    def __init__(self, server_url: str, *options: Option):
        """
        Initialize the metrics client.

        Args:
            server_url (str): Base URL of the OpenTSDB server
            *options: Construction options, applied in order

        Raises:
            ConfigError: If any option rejects its value
        """
        cfg = ClientConfig()
        for option in options:
            try:
                option(cfg)
            except ConfigError as e:
                raise ConfigError(f"failed to construct opentsdb client: {e}") from e

        self.server_url = server_url
        self.auth_username = cfg.auth_username
        self.auth_password = cfg.auth_password
        self.batch_size = cfg.batch_size
        self.request_timeout = cfg.timeout

        self.buffer: List[Metric] = []

    def enqueue(self, metric: Metric) -> None:
        """
        Add a metric to the buffer. The buffer is sent and cleared when it
        reaches batch_size metrics.

        Args:
            metric (Metric): The metric to buffer

        Raises:
            ValidationError: If the metric has no tags
            TransportError: If a triggered flush could not be sent
            ServerError: If the server rejected a triggered flush
        """
        self._validate(metric)
        self.buffer.append(metric)
        logger.debug(f"Buffered metric {metric.metric} ({len(self.buffer)}/{self.batch_size})")

        if len(self.buffer) >= self.batch_size:
            self._flush()

    def send(self, metric: Metric) -> None:
        """
        Send a single metric immediately. The buffer is not touched.

        Args:
            metric (Metric): The metric to send

        Raises:
            ValidationError: If the metric has no tags
            TransportError: If the request could not be sent
            ServerError: If the server rejected the metric
        """
        self._validate(metric)
        self._send([metric])

    def push(self) -> None:
        """
        Send the buffered metrics and clear the buffer. Does nothing when the
        buffer is empty.

        Raises:
            TransportError: If the request could not be sent
            ServerError: If the server rejected the batch
        """
        if not self.buffer:
            return
        self._flush()

    def close(self) -> None:
        """
        Send whatever is left in the buffer, even if it is empty. Should be
        the last call before the service goes down.

        Raises:
            TransportError: If the request could not be sent
            ServerError: If the server rejected the batch
        """
        self._flush()

    def buffered_count(self) -> int:
        """
        Get the number of buffered metrics.

        Returns:
            int: Number of buffered metrics
        """
        return len(self.buffer)

    def __len__(self) -> int:
        """
        Get the number of buffered metrics.

        Returns:
            int: Number of buffered metrics
        """
        return len(self.buffer)

    def __enter__(self) -> 'MetricsClient':
        """
        Use the client as a context manager. The buffer is sent on exit.

        Returns:
            MetricsClient: This client
        """
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        """
        Close the client. If the block is already raising, a failed close is
        logged and the original exception propagates.

        Raises:
            TransportError: If the request could not be sent
            ServerError: If the server rejected the batch
        """
        if exc_type is None:
            self.close()
            return

        try:
            self.close()
        except MetricsClientError as e:
            logger.error(f"Failed to send buffered metrics on close: {str(e)}")

    @staticmethod
    def _validate(metric: Metric) -> None:
        if metric.tags is None:
            raise ValidationError("tags can not be None")

    def _flush(self) -> None:
        """Send the whole buffer, then clear it whatever the outcome."""
        try:
            self._send(self.buffer)
        finally:
            self.buffer = []

    def _send(self, metrics: List[Metric]) -> None:
        """
        PUT a batch of metrics to the server.

        Args:
            metrics (list): Metrics to send, in order

        Raises:
            TransportError: If the payload could not be encoded or the
                request did not complete
            ServerError: If the server answered with status >= 400
        """
        url = f"{self.server_url.rstrip('/')}{config.PUT_PATH}"

        try:
            payload = json.dumps([m.to_dict() for m in metrics], allow_nan=False)
        except (TypeError, ValueError) as e:
            raise TransportError(f"Failed to encode metrics: {str(e)}", cause=e) from e

        headers = {'Content-Type': 'application/json'}
        auth = HTTPBasicAuth(self.auth_username, self.auth_password) if self.auth_username else None

        try:
            response = requests.request(
                'put',
                url,
                data=payload,
                headers=headers,
                auth=auth,
                timeout=self.request_timeout
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Failed to send {len(metrics)} metrics: {str(e)}")
            raise TransportError(f"Failed to send metrics: {str(e)}", cause=e) from e

        if response.status_code >= 400:
            status = f"{response.status_code} {response.reason}"
            logger.error(f"Server rejected {len(metrics)} metrics: {status}")
            raise ServerError(response.status_code, status, response.text)

        logger.info(f"Successfully sent {len(metrics)} metrics")


def _parse_setting(env_name: str, raw, cast):
    """
    Parse a numeric setting from config.

    Args:
        env_name (str): Environment variable the value came from
        raw: Raw value, usually a string
        cast: int or float

    Returns:
        The parsed value, or None when the setting is unset

    Raises:
        ConfigError: If the value can not be parsed
    """
    if raw is None or raw == '':
        return None
    try:
        return cast(raw)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"invalid {env_name} value {raw!r}: {str(e)}") from e


def create_client(
    server_url: Optional[str] = None,
    username: Optional[str] = None,
    password: Optional[str] = None,
    batch_size: Optional[int] = None,
    request_timeout: Optional[float] = None
) -> MetricsClient:
    """
    Create a client, falling back to the environment settings in config
    for every argument left as None.

    Args:
        server_url (str, optional): Defaults to config.SERVER_URL.
        username (str, optional): Defaults to config.AUTH_USERNAME. An empty
            string disables auth.
        password (str, optional): Defaults to config.AUTH_PASSWORD.
        batch_size (int, optional): Defaults to config.BATCH_SIZE.
        request_timeout (float, optional): Defaults to config.REQUEST_TIMEOUT.

    Returns:
        MetricsClient: The configured client

    Raises:
        ConfigError: If any setting is invalid
    """
    if batch_size is None:
        batch_size = _parse_setting('OPENTSDB_BATCH_SIZE', config.BATCH_SIZE, int)
        if batch_size is None:
            batch_size = config.DEFAULT_BATCH_SIZE
    if request_timeout is None:
        request_timeout = _parse_setting('OPENTSDB_REQUEST_TIMEOUT', config.REQUEST_TIMEOUT, float)

    options = [
        with_auth(
            username if username is not None else config.AUTH_USERNAME,
            password if password is not None else config.AUTH_PASSWORD
        ),
        with_batch_size(batch_size),
    ]
    if request_timeout is not None:
        options.append(with_timeout(request_timeout))

    return MetricsClient(server_url if server_url is not None else config.SERVER_URL, *options)
