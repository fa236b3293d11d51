"""Retry with exponential backoff for flaky page fetches."""

import logging
import time
from functools import wraps
from typing import Any, Callable

import requests

logger = logging.getLogger(__name__)


class TransientHTTPError(requests.exceptions.HTTPError):
    """An HTTP response worth retrying (429 or any 5xx status)."""


def is_transient_status(status_code: int) -> bool:
    return status_code == 429 or status_code >= 500


RETRYABLE_ERRORS = (
    requests.exceptions.ConnectionError,
    requests.exceptions.ChunkedEncodingError,
    requests.exceptions.ReadTimeout,
    ConnectionResetError,
    TransientHTTPError,
)


def retry_on_connection_error(
    max_retries: int = 4, initial_delay: float = 0.5
) -> Callable:
    """Retry the wrapped call on network failures and transient responses.

    The delay doubles after every failed attempt: 0.5s, 1s, 2s with the
    defaults. The error from the last attempt is re-raised.

    Args:
        max_retries: Total number of attempts, including the first
        initial_delay: Sleep before the second attempt in seconds

    Example:
        @retry_on_connection_error(max_retries=2)
        def fetch(url):
            return requests.get(url, timeout=10)
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            delay = initial_delay
            attempt = 1
            while True:
                try:
                    return func(*args, **kwargs)
                except RETRYABLE_ERRORS as e:
                    if attempt >= max_retries:
                        logger.error(f"Giving up after {attempt} attempts: {e}")
                        raise
                    logger.warning(
                        f"Attempt {attempt}/{max_retries} failed: {e}. "
                        f"Retrying in {delay}s..."
                    )
                    time.sleep(delay)
                    delay *= 2
                    attempt += 1

        return wrapper

    return decorator
