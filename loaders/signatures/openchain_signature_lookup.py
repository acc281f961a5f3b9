import json
from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

import aiohttp

from errors.resolution_errors import OpenChainSignatureLookupError
from utils.fetch_utils import fetch_json
from utils.logger_utils import get_logger

logger = get_logger("OpenChain Signature Lookup")

DEFAULT_OPENCHAIN_BASE_URL = "https://api.openchain.xyz/signature-database/v1"


class OpenChainSignatureLookup(object):
    """openchain.xyz signature database, formerly sig.eth.samczsun.com"""

    def __init__(self, base_url: Optional[str] = None, session: Optional[aiohttp.ClientSession] = None):
        self.base_url = (base_url or DEFAULT_OPENCHAIN_BASE_URL).rstrip("/")
        self.session = session

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base_url={self.base_url!r})"

    async def _load(self, url: str) -> Optional[Dict[str, Any]]:
        """Returns the response body, or None when the endpoint answered 404."""
        try:
            payload = await fetch_json(url, session=self.session)
            if not isinstance(payload, dict) or not payload.get("ok"):
                raise ValueError(f"OpenChain API bad response: {json.dumps(payload)}")
            return payload
        except Exception as e:
            if getattr(e, "status", None) == 404:
                logger.debug(f"No OpenChain entry at {url}")
                return None
            raise OpenChainSignatureLookupError(
                f"OpenChainSignatureLookup load error: {e}", context={"url": url}, cause=e
            ) from e

    async def _lookup(self, kind: str, key: str) -> List[str]:
        url = f"{self.base_url}/lookup?{urlencode({kind: key})}"
        payload = await self._load(url)
        if payload is None:
            return []
        entries = ((payload.get("result") or {}).get(kind) or {}).get(key) or []
        return [item["name"] for item in entries]

    async def load_functions(self, selector: str) -> List[str]:
        return await self._lookup("function", selector)

    async def load_events(self, hash: str) -> List[str]:
        return await self._lookup("event", hash)


class SamczunSignatureLookup(OpenChainSignatureLookup):
    """Old name of OpenChainSignatureLookup, kept so existing call sites keep working."""
