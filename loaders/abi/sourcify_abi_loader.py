import json
import re
from typing import Any, Dict, List, Optional

import aiohttp

from errors.resolution_errors import SourcifyABILoaderError
from loaders.models.contract_result import ContractResult, ContractSource, ContractSources, empty_contract_result
from utils.fetch_utils import fetch_json
from utils.formatter_utils import to_checksummed_address
from utils.logger_utils import get_logger

logger = get_logger("Sourcify ABI Loader")

DEFAULT_SOURCIFY_BASE_URL = "https://sourcify.dev/server"
DEFAULT_SOURCIFY_REPO_URL = "https://repo.sourcify.dev"

# Message some transports report when a browser-style CORS rejection hides the real response.
# Sourcify only answers without CORS headers when there is no result.
MASKED_FETCH_FAILURE = "Failed to fetch"

_PATH_PREFIX_RE = re.compile(r"^/contracts/(full|partial)_match/\d*/\w*/(sources/)?")


def is_sourcify_not_found(error: BaseException) -> bool:
    return getattr(error, "status", None) == 404 or str(error) == MASKED_FETCH_FAILURE


class SourcifyABILoader(object):
    """
    Sourcify verification repository.

    Lookups go to the full match index first (exact compiler settings), then to the
    partial match index. Addresses are checksummed because Sourcify rejects anything else.
    """

    def __init__(
        self,
        chain_id: Optional[int] = None,
        base_url: Optional[str] = None,
        repo_url: Optional[str] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.chain_id = chain_id if chain_id is not None else 1
        self.base_url = (base_url or DEFAULT_SOURCIFY_BASE_URL).rstrip("/")
        self.repo_url = (repo_url or DEFAULT_SOURCIFY_REPO_URL).rstrip("/")
        self.session = session

    @property
    def name(self) -> str:
        return type(self).__name__

    def __repr__(self) -> str:
        return f"{self.name}(chain_id={self.chain_id})"

    @staticmethod
    def strip_path_prefix(path: str) -> str:
        """
        Turns a repository path into the path the source had in its project, e.g.
        /contracts/full_match/1/0xAbc.../sources/contracts/Foo.sol -> contracts/Foo.sol
        """
        return _PATH_PREFIX_RE.sub("", path, count=1)

    async def _load_contract(self, url: str, address: str) -> ContractResult:
        try:
            payload = await fetch_json(url, session=self.session)
            files: List[Dict[str, Any]] = payload.get("files", payload) if isinstance(payload, dict) else payload

            metadata_file = next((f for f in files if f.get("name") == "metadata.json"), None)
            if metadata_file is None:
                raise SourcifyABILoaderError("metadata.json not found", context={"url": url, "address": address})

            # metadata.json sometimes embeds the sources but not always, so sources come from the file list
            metadata = json.loads(metadata_file["content"])
            output = metadata.get("output") or {}
            settings = metadata.get("settings") or {}

            result = ContractResult(
                abi=output.get("abi") or [],
                name=_contract_name(metadata),
                evm_version=settings.get("evmVersion") or "",
                compiler_version=(metadata.get("compiler") or {}).get("version") or "",
                runs=(settings.get("optimizer") or {}).get("runs") or 0,
                ok=True,
                loader_name=self.name,
                loader_result=metadata,
            )
        except Exception as e:
            if is_sourcify_not_found(e):
                return empty_contract_result()
            if isinstance(e, SourcifyABILoaderError):
                raise
            raise SourcifyABILoaderError(
                f"SourcifyABILoader load contract error: {e}",
                context={"url": url, "address": address},
                cause=e,
            ) from e

        async def get_sources() -> ContractSources:
            return [ContractSource(path=f.get("path"), content=f.get("content", "")) for f in files]

        result.get_sources = get_sources
        return result

    async def get_contract(self, address: str) -> ContractResult:
        address = to_checksummed_address(address)

        # Full match: verified with exactly matching settings
        result = await self._load_contract(f"{self.base_url}/files/{self.chain_id}/{address}", address)
        if result.ok:
            return result

        # Partial match: verified, but settings/metadata didn't match exactly
        result = await self._load_contract(f"{self.base_url}/files/any/{self.chain_id}/{address}", address)
        if result.ok:
            return result

        logger.debug(f"{address} not found on Sourcify (chain {self.chain_id})")
        return empty_contract_result()

    async def load_abi(self, address: str) -> List[Any]:
        address = to_checksummed_address(address)

        for match in ("full_match", "partial_match"):
            url = f"{self.repo_url}/contracts/{match}/{self.chain_id}/{address}/metadata.json"
            try:
                metadata = await fetch_json(url, session=self.session)
                return metadata["output"]["abi"]
            except Exception as e:
                if is_sourcify_not_found(e):
                    continue
                raise SourcifyABILoaderError(
                    f"SourcifyABILoader load_abi error: {e}",
                    context={"url": url, "address": address},
                    cause=e,
                ) from e

        return []


def _contract_name(metadata: Dict[str, Any]) -> Optional[str]:
    # Natspec @title when present, otherwise the compilation target's contract name
    devdoc = (metadata.get("output") or {}).get("devdoc") or {}
    if devdoc.get("title"):
        return devdoc["title"]
    target = (metadata.get("settings") or {}).get("compilationTarget") or {}
    for contract_name in target.values():
        return contract_name
    return None
