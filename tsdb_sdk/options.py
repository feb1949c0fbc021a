"""
Construction options for the metrics client.

Each option is a callable that receives the ClientConfig being built and
either updates it or raises ConfigError.
"""
from dataclasses import dataclass
from typing import Callable, Optional

from . import config
from .errors import ConfigError


@dataclass
class ClientConfig:
    """Settings collected from options before a client is created."""
    auth_username: str = ''
    auth_password: str = ''
    batch_size: int = config.DEFAULT_BATCH_SIZE
    timeout: Optional[float] = None


Option = Callable[[ClientConfig], None]


def with_auth(username: str, password: str) -> Option:
    """
    Use HTTP basic auth for every request. An empty username disables auth.

    Args:
        username (str): Basic auth username
        password (str): Basic auth password
    """
    def apply(cfg: ClientConfig) -> None:
        cfg.auth_username = username
        cfg.auth_password = password
    return apply


def with_batch_size(n: int) -> Option:
    """
    Change the number of buffered metrics that triggers a flush.

    Args:
        n (int): Batch size, between 1 and 1024

    Raises:
        ConfigError: If n is out of range
    """
    def apply(cfg: ClientConfig) -> None:
        if n < config.MIN_BATCH_SIZE or n > config.MAX_BATCH_SIZE:
            raise ConfigError(
                f"batch size should be between {config.MIN_BATCH_SIZE} and {config.MAX_BATCH_SIZE}"
            )
        cfg.batch_size = n
    return apply


def with_timeout(seconds: float) -> Option:
    """
    Set a per-request timeout.

    Args:
        seconds (float): Timeout passed to requests

    Raises:
        ConfigError: If seconds is not positive
    """
    def apply(cfg: ClientConfig) -> None:
        if seconds <= 0:
            raise ConfigError("timeout should be greater than 0")
        cfg.timeout = seconds
    return apply
