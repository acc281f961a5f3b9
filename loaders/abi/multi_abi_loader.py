from typing import Any, List, Sequence

from errors.resolution_errors import MultiABILoaderError, is_not_found
from loaders.abi.abi_loader import ABILoader
from loaders.models.contract_result import ContractResult, empty_contract_result
from utils.logger_utils import get_logger

logger = get_logger("Multi ABI Loader")


class MultiABILoader(object):
    """
    Tries each loader in order and returns the first non-empty result.

    Loaders are queried one at a time so providers later in the list are only hit when
    needed. A 404-style miss moves on to the next loader in get_contract; any other
    error aborts the whole chain, since it usually means the network or configuration
    is broken and falling through would hide it.
    """

    def __init__(self, loaders: Sequence[ABILoader]):
        self.loaders = tuple(loaders)

    @property
    def name(self) -> str:
        return type(self).__name__

    def __repr__(self) -> str:
        return f"{self.name}({list(self.loaders)!r})"

    async def get_contract(self, address: str) -> ContractResult:
        for loader in self.loaders:
            try:
                result = await loader.get_contract(address)
            except Exception as e:
                if is_not_found(e):
                    logger.debug(f"{loader!r} has no contract for {address}, trying next loader")
                    continue
                logger.warning(f"{loader!r} failed for {address}: {e}")
                raise MultiABILoaderError(
                    f"MultiABILoader get_contract error: {e}",
                    context={"loader": loader, "address": address},
                    cause=e,
                ) from e

            if result and result.abi:
                return result

        return empty_contract_result()

    async def load_abi(self, address: str) -> List[Any]:
        # TODO: decide whether load_abi should also skip 404s like get_contract does
        for loader in self.loaders:
            try:
                abi = await loader.load_abi(address)
            except Exception as e:
                logger.warning(f"{loader!r} failed for {address}: {e}")
                raise MultiABILoaderError(
                    f"MultiABILoader load_abi error: {e}",
                    context={"loader": loader, "address": address},
                    cause=e,
                ) from e

            if abi:
                return abi

        return []
