from typing import List, Protocol, runtime_checkable


@runtime_checkable
class SignatureLookup(Protocol):
    async def load_functions(self, selector: str) -> List[str]:
        ...

    async def load_events(self, hash: str) -> List[str]:
        ...
