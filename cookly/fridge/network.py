"""HTTP helpers shared by the OpenAI and Pexels clients."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

import httpx

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60.0


class NetworkError(str, Enum):
    NO_INTERNET = "NO_INTERNET"
    REQUEST_TIMEOUT = "REQUEST_TIMEOUT"
    UNAUTHORIZED = "UNAUTHORIZED"
    CONFLICT = "CONFLICT"
    PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"
    TOO_MANY_REQUESTS = "TOO_MANY_REQUESTS"
    SERVER_ERROR = "SERVER_ERROR"
    SERIALIZATION = "SERIALIZATION"
    UNKNOWN = "UNKNOWN"


_STATUS_ERRORS: dict[int, NetworkError] = {
    401: NetworkError.UNAUTHORIZED,
    408: NetworkError.REQUEST_TIMEOUT,
    409: NetworkError.CONFLICT,
    413: NetworkError.PAYLOAD_TOO_LARGE,
    429: NetworkError.TOO_MANY_REQUESTS,
}


class ApiError(Exception):
    """A remote API call failed."""

    def __init__(self, error: NetworkError, status_code: int | None = None) -> None:
        self.error = error
        self.status_code = status_code
        detail = f" (HTTP {status_code})" if status_code is not None else ""
        super().__init__(f"{error.value}{detail}")


def error_for_status(status_code: int) -> NetworkError | None:
    """Map an HTTP status code to a NetworkError, or None for 2xx."""
    if 200 <= status_code <= 299:
        return None
    if status_code in _STATUS_ERRORS:
        return _STATUS_ERRORS[status_code]
    if 500 <= status_code <= 599:
        return NetworkError.SERVER_ERROR
    return NetworkError.UNKNOWN


async def request_json(
    client: httpx.AsyncClient, method: str, url: str, **kwargs: Any
) -> Any:
    """Send a request and return the decoded JSON body.

    Raises:
        ApiError: On transport failures, non-2xx responses or a body that
            isn't JSON. No retries are attempted.
    """
    try:
        response = await client.request(method, url, **kwargs)
    except httpx.ConnectError as e:
        logger.warning("%s %s: connection failed: %s", method, url, e)
        raise ApiError(NetworkError.NO_INTERNET) from e
    except httpx.TimeoutException as e:
        logger.warning("%s %s: timed out", method, url)
        raise ApiError(NetworkError.REQUEST_TIMEOUT) from e
    except httpx.HTTPError as e:
        logger.warning("%s %s: request error: %s", method, url, e)
        raise ApiError(NetworkError.UNKNOWN) from e

    error = error_for_status(response.status_code)
    if error is not None:
        logger.warning("%s %s: HTTP %d", method, url, response.status_code)
        raise ApiError(error, response.status_code)

    try:
        return response.json()
    except ValueError as e:
        raise ApiError(NetworkError.SERIALIZATION, response.status_code) from e
