from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

import aiohttp

from errors.resolution_errors import BlockscoutABILoaderError
from loaders.models.contract_result import ContractResult, ContractSource, ContractSources, empty_contract_result
from utils.fetch_utils import fetch_json, redact_url
from utils.logger_utils import get_logger

logger = get_logger("Blockscout ABI Loader")

DEFAULT_BLOCKSCOUT_BASE_URL = "https://eth.blockscout.com/api/v2"


def is_blockscout_not_found(error: BaseException) -> bool:
    return getattr(error, "status", None) == 404


def blockscout_sources(payload: Dict[str, Any]) -> ContractSources:
    sources: ContractSources = []
    if payload.get("source_code"):
        sources.append(ContractSource(path=payload.get("file_path") or None, content=payload["source_code"]))
    for extra in payload.get("additional_sources") or []:
        sources.append(ContractSource(path=extra.get("file_path"), content=extra.get("source_code") or ""))
    return sources


class BlockscoutABILoader(object):
    """Blockscout explorer, smart-contracts endpoint of the v2 REST API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.api_key = api_key
        self.base_url = (base_url or DEFAULT_BLOCKSCOUT_BASE_URL).rstrip("/")
        self.session = session

    @property
    def name(self) -> str:
        return type(self).__name__

    def __repr__(self) -> str:
        return f"{self.name}(base_url={self.base_url!r})"

    def _build_url(self, address: str) -> str:
        url = f"{self.base_url}/smart-contracts/{address}"
        if self.api_key:
            url += "?" + urlencode({"apikey": self.api_key})
        return url

    async def get_contract(self, address: str) -> ContractResult:
        url = self._build_url(address)

        try:
            payload = await fetch_json(url, session=self.session)
            abi = payload.get("abi")
            if not isinstance(abi, list) or not abi:
                # Unverified contracts come back without an abi
                return empty_contract_result()

            result = ContractResult(
                abi=abi,
                name=payload.get("name") or None,
                evm_version=payload.get("evm_version") or "",
                compiler_version=payload.get("compiler_version") or "",
                runs=payload.get("optimization_runs") or 0,
                ok=True,
                loader_name=self.name,
                loader_result=payload,
            )
        except Exception as e:
            if is_blockscout_not_found(e):
                logger.debug(f"{address} not found on {self.base_url}")
                return empty_contract_result()
            raise BlockscoutABILoaderError(
                f"BlockscoutABILoader get_contract error: {e}",
                context={"url": redact_url(url), "address": address},
                cause=e,
            ) from e

        async def get_sources() -> ContractSources:
            return blockscout_sources(payload)

        result.get_sources = get_sources
        return result

    async def load_abi(self, address: str) -> List[Any]:
        result = await self.get_contract(address)
        return result.abi
