from typing import Any, List, Protocol, runtime_checkable

from loaders.models.contract_result import ContractResult


@runtime_checkable
class ABILoader(Protocol):
    async def load_abi(self, address: str) -> List[Any]:
        ...

    async def get_contract(self, address: str) -> ContractResult:
        ...
