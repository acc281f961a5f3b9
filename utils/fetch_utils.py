import asyncio
import re
from typing import Any, Dict, Optional

import aiohttp

from errors.resolution_errors import FetchError
from utils.logger_utils import get_logger

logger = get_logger("Fetch Utils")

DEFAULT_TIMEOUT_SECONDS = 30

_API_KEY_RE = re.compile(r"(apikey=)[^&]*", re.IGNORECASE)


def redact_url(url: str) -> str:
    """Hides api keys embedded in a query string so urls can be logged and kept in error context."""
    return _API_KEY_RE.sub(r"\1***", url) if url else url


async def fetch_json(
    url: str,
    session: Optional[aiohttp.ClientSession] = None,
    headers: Optional[Dict[str, str]] = None,
    timeout: int = DEFAULT_TIMEOUT_SECONDS,
) -> Any:
    """
    Performs a single GET request and decodes the JSON body.

    One attempt only: retry, backoff and caching are left to the caller.
    If no session is given a short-lived one is opened for this call.

    Raises:
        FetchError: with `status` set for non-2xx responses, or `status=None`
            for connection failures and undecodable bodies.
    """
    if session is None:
        client_timeout = aiohttp.ClientTimeout(total=timeout)
        async with aiohttp.ClientSession(timeout=client_timeout) as owned_session:
            return await _get_json(owned_session, url, headers)
    return await _get_json(session, url, headers)


async def _get_json(session: aiohttp.ClientSession, url: str, headers: Optional[Dict[str, str]]) -> Any:
    safe_url = redact_url(url)
    logger.debug(f"GET {safe_url}")
    try:
        async with session.get(url, headers=headers) as response:
            if response.status < 200 or response.status >= 300:
                raise FetchError(
                    f"HTTP {response.status} {response.reason or ''}".strip(),
                    url=safe_url,
                    status=response.status,
                )
            try:
                return await response.json(content_type=None)
            except ValueError as e:
                raise FetchError(f"Invalid JSON response: {e}", url=safe_url, cause=e) from e
    except FetchError:
        raise
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        raise FetchError(f"Request failed: {e!r}", url=safe_url, cause=e) from e
