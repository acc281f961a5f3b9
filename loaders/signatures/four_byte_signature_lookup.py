from typing import List, Optional
from urllib.parse import urlencode

import aiohttp

from errors.resolution_errors import FourByteSignatureLookupError
from utils.fetch_utils import fetch_json
from utils.logger_utils import get_logger

logger = get_logger("4byte Signature Lookup")

DEFAULT_FOUR_BYTE_BASE_URL = "https://www.4byte.directory/api/v1"


class FourByteSignatureLookup(object):
    """https://www.4byte.directory/"""

    def __init__(self, base_url: Optional[str] = None, session: Optional[aiohttp.ClientSession] = None):
        self.base_url = (base_url or DEFAULT_FOUR_BYTE_BASE_URL).rstrip("/")
        self.session = session

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base_url={self.base_url!r})"

    async def _load(self, url: str) -> List[str]:
        try:
            payload = await fetch_json(url, session=self.session)
            results = payload.get("results")
            if results is None:
                return []
            return [item["text_signature"] for item in results]
        except Exception as e:
            if getattr(e, "status", None) == 404:
                logger.debug(f"No 4byte entry at {url}")
                return []
            raise FourByteSignatureLookupError(
                f"FourByteSignatureLookup load error: {e}", context={"url": url}, cause=e
            ) from e

    async def load_functions(self, selector: str) -> List[str]:
        return await self._load(f"{self.base_url}/signatures/?{urlencode({'hex_signature': selector})}")

    async def load_events(self, hash: str) -> List[str]:
        return await self._load(f"{self.base_url}/event-signatures/?{urlencode({'hex_signature': hash})}")
