import logging
from typing import Optional

import httpx

from config import settings

logger = logging.getLogger(__name__)


def create_http_client(timeout: Optional[float] = None, connect_timeout: Optional[float] = None) -> httpx.Client:
    """Build the shared HTTP client used for book API calls.

    Connection limits and timeouts come from the settings; nothing here
    retries a failed request.
    """
    limits = httpx.Limits(
        max_keepalive_connections=5,
        max_connections=10,
        keepalive_expiry=30.0
    )

    read_timeout = settings.http_timeout if timeout is None else timeout
    timeout_config = httpx.Timeout(
        timeout=read_timeout,
        connect=settings.connect_timeout if connect_timeout is None else connect_timeout,
    )

    return httpx.Client(
        limits=limits,
        timeout=timeout_config,
        follow_redirects=True,
        headers={"Accept": "application/json"},
        event_hooks={"request": [_log_request], "response": [_log_response]},
    )


def _log_request(request: httpx.Request) -> None:
    logger.debug("%s %s", request.method, request.url)


def _log_response(response: httpx.Response) -> None:
    request = response.request
    logger.debug("%s %s -> %s", request.method, request.url, response.status_code)


# Global HTTP client instance
_global_client: Optional[httpx.Client] = None


def get_http_client() -> httpx.Client:
    """Get or create the global HTTP client."""
    global _global_client
    if _global_client is None or _global_client.is_closed:
        _global_client = create_http_client()
    return _global_client


def close_http_client() -> None:
    """Close the global HTTP client."""
    global _global_client
    if _global_client:
        _global_client.close()
        _global_client = None
