import json
from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

import aiohttp

from errors.resolution_errors import EtherscanABILoaderError
from loaders.models.contract_result import ContractResult, ContractSource, ContractSources, empty_contract_result
from utils.fetch_utils import fetch_json, redact_url
from utils.logger_utils import get_logger

logger = get_logger("Etherscan ABI Loader")

DEFAULT_ETHERSCAN_BASE_URL = "https://api.etherscan.io/api"

# Sentinel text Etherscan puts in `result` when the address has no verified source
ETHERSCAN_NOT_VERIFIED = "Contract source code not verified"


def is_etherscan_not_verified(payload: Dict[str, Any]) -> bool:
    return payload.get("status") == "0" and payload.get("result") == ETHERSCAN_NOT_VERIFIED


def decode_etherscan_sources(source_code: str) -> ContractSources:
    """
    Converts Etherscan's SourceCode field into a list of sources.

    Flattened contracts come back as plain solidity. Multi-file contracts come back as
    standard-json input wrapped in an extra pair of braces: {{"sources": {"a.sol": {"content": ...}}}}.
    """
    if not source_code.startswith("{{"):
        return [ContractSource(content=source_code)]

    decoded = json.loads(source_code[1:-1])
    sources = decoded.get("sources") or {}
    return [ContractSource(path=path, content=source.get("content", "")) for path, source in sources.items()]


class EtherscanABILoader(object):
    """Etherscan-style explorer API (also works for the many *scan forks sharing its response shape)."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        chain_id: Optional[int] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.api_key = api_key
        self.base_url = (base_url or DEFAULT_ETHERSCAN_BASE_URL).rstrip("/")
        self.chain_id = chain_id
        self.session = session

    @property
    def name(self) -> str:
        return type(self).__name__

    def __repr__(self) -> str:
        return f"{self.name}(base_url={self.base_url!r})"

    def _build_url(self, action: str, address: str) -> str:
        params = {"module": "contract", "action": action, "address": address}
        if self.chain_id is not None:
            params["chainid"] = self.chain_id
        if self.api_key:
            params["apikey"] = self.api_key
        return f"{self.base_url}?{urlencode(params)}"

    async def get_contract(self, address: str) -> ContractResult:
        url = self._build_url("getsourcecode", address)
        context = {"url": redact_url(url), "address": address}

        try:
            payload = await fetch_json(url, session=self.session)
            if is_etherscan_not_verified(payload):
                logger.debug(f"{address} is not verified on {self.base_url}")
                return empty_contract_result()
            if payload.get("status") == "0":
                raise ValueError(str(payload.get("result") or payload.get("message") or "unknown error"))

            result = payload["result"][0]
            abi = json.loads(result["ABI"])
            runs = int(result.get("Runs") or 0)
        except Exception as e:
            raise EtherscanABILoaderError(
                f"EtherscanABILoader get_contract error: {e}", context=context, cause=e
            ) from e

        async def get_sources() -> ContractSources:
            try:
                return decode_etherscan_sources(result.get("SourceCode") or "")
            except Exception as e:
                raise EtherscanABILoaderError(
                    f"EtherscanABILoader get_contract get_sources error: {e}", context=context, cause=e
                ) from e

        return ContractResult(
            abi=abi,
            name=result.get("ContractName") or None,
            evm_version=result.get("EVMVersion") or "",
            compiler_version=result.get("CompilerVersion") or "",
            runs=runs,
            ok=True,
            loader_name=self.name,
            loader_result=result,
            get_sources=get_sources,
        )

    async def load_abi(self, address: str) -> List[Any]:
        url = self._build_url("getabi", address)

        try:
            payload = await fetch_json(url, session=self.session)
            if is_etherscan_not_verified(payload):
                return []
            if payload.get("status") == "0":
                raise ValueError(str(payload.get("result") or payload.get("message") or "unknown error"))
            return json.loads(payload["result"])
        except Exception as e:
            raise EtherscanABILoaderError(
                f"EtherscanABILoader load_abi error: {e}",
                context={"url": redact_url(url), "address": address},
                cause=e,
            ) from e
