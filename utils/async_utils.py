import aiohttp

from utils.logger_utils import get_logger

logger = get_logger(__name__)


def create_async_session(limit: int = 100, timeout: int = 30) -> aiohttp.ClientSession:
    """
    Creates an aiohttp ClientSession to share between loaders for connection pooling.
    The caller owns it and must close it (use it as `async with`).
    """
    logger.debug(f"Creating aiohttp ClientSession with limit={limit}, timeout={timeout}s")
    timeout_obj = aiohttp.ClientTimeout(total=timeout)
    connector = aiohttp.TCPConnector(limit=limit, enable_cleanup_closed=True)
    return aiohttp.ClientSession(connector=connector, timeout=timeout_obj)
