"""
Shared HTTP plumbing for the upstream clients.

- fetch_json: one bounded-timeout GET, with requests exceptions mapped onto
  the UpstreamError family
- with_retries: fixed number of attempts with linear backoff (backoff * attempt)

Timeouts are enforced by requests itself: a timed-out call raises, so its
response can never be applied after the fact.
"""

import logging
import time
from typing import Any, Callable, Optional, TypeVar

import requests

from skyboard.ingestion.errors import (
    NetworkError,
    UpstreamError,
    UpstreamHttpError,
    UpstreamMalformed,
    UpstreamTimeout,
)

logger = logging.getLogger(__name__)

T = TypeVar('T')

USER_AGENT = 'SkyBoard/1.0 (Educational)'


def fetch_json(
    session: requests.Session,
    url: str,
    *,
    upstream: str,
    timeout: float,
    params: Optional[dict] = None,
    headers: Optional[dict] = None,
    auth: Any = None,
) -> Any:
    """
    GET `url` and decode the JSON body.

    Raises:
        UpstreamTimeout, UpstreamHttpError, NetworkError, UpstreamMalformed
    """
    request_headers = {
        'User-Agent': USER_AGENT,
        'Accept': 'application/json',
    }
    if headers:
        request_headers.update(headers)

    logger.debug(f'Fetching {upstream}: {url} params={params}')

    try:
        response = session.get(
            url,
            params=params,
            headers=request_headers,
            auth=auth,
            timeout=timeout,
        )
        response.raise_for_status()

    except requests.exceptions.Timeout as e:
        raise UpstreamTimeout(f'{upstream} timed out after {timeout}s', upstream) from e
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code if e.response is not None else 0
        if status == 429:
            logger.warning(f'{upstream} rate limit exceeded')
        reason = e.response.reason if e.response is not None else ''
        raise UpstreamHttpError(f'{upstream} HTTP {status}: {reason}', status, upstream) from e
    except requests.exceptions.RequestException as e:
        raise NetworkError(f'{upstream} request failed: {e}', upstream) from e

    try:
        return response.json()
    except ValueError as e:
        raise UpstreamMalformed(f'{upstream} returned a non-JSON body', upstream) from e


def with_retries(
    operation: Callable[[], T],
    *,
    attempts: int,
    backoff_seconds: float,
    sleep: Callable[[float], None] = time.sleep,
    label: str = 'upstream',
) -> T:
    """
    Run `operation` up to `attempts` times.

    Only UpstreamError is retried; between attempts we sleep
    `backoff_seconds * attempt`. When every attempt fails the last error is
    re-raised.
    """
    last_error: Optional[UpstreamError] = None

    for attempt in range(1, attempts + 1):
        try:
            logger.info(f'[{label}] Attempt {attempt}/{attempts}')
            return operation()
        except UpstreamError as e:
            last_error = e
            logger.warning(f'[{label}] Attempt {attempt} failed ({e.kind.value}): {e}')

            if attempt < attempts:
                sleep(backoff_seconds * attempt)

    if last_error is None:
        raise ValueError(f'attempts must be >= 1, got {attempts}')
    raise last_error
