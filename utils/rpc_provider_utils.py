from urllib.parse import urlparse

import aiohttp
from web3 import AsyncHTTPProvider, AsyncWeb3

from utils.logger_utils import get_logger

logger = get_logger("RPC Provider Utils")


def get_async_provider_from_uri(uri_string: str, timeout: int = 60) -> AsyncHTTPProvider:
    """
    Creates an asynchronous Web3 provider based on the URI scheme.
    Currently supports HTTP/HTTPS.
    """
    uri = urlparse(uri_string)

    if uri.scheme == "http" or uri.scheme == "https":
        request_kwargs = {"timeout": aiohttp.ClientTimeout(total=timeout)}
        return AsyncHTTPProvider(uri_string, request_kwargs=request_kwargs)
    else:
        raise ValueError(f"Unknown uri schema {uri_string}. Supported: http, https")


def get_async_web3(uri_string: str, timeout: int = 60) -> AsyncWeb3:
    # Only the host is logged, node urls often embed an api key in the path
    logger.debug(f"Connecting AsyncWeb3 to {urlparse(uri_string).netloc}")
    return AsyncWeb3(get_async_provider_from_uri(uri_string, timeout=timeout))
