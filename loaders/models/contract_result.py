from typing import Any, Awaitable, Callable, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ContractSource(BaseModel):
    """One source file. `path` is None when the source was flattened into a single file."""

    model_config = ConfigDict(frozen=True)

    path: str | None = None
    content: str


ContractSources = List[ContractSource]

SourcesGetter = Callable[[], Awaitable[ContractSources]]


class ContractResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True, arbitrary_types_allowed=True)

    abi: List[Any] = Field(default_factory=list)
    name: str | None = None
    evm_version: str = ""
    compiler_version: str = ""
    runs: int = 0

    # False if no result is found
    ok: bool = False

    # Which adapter produced the result and the raw payload it was normalised from
    loader_name: str | None = None
    loader_result: Any = Field(default=None, exclude=True, repr=False)

    # Lazy: calling it may trigger more requests. None means the provider cannot serve sources.
    get_sources: Optional[SourcesGetter] = Field(default=None, exclude=True, repr=False)

    @model_validator(mode="after")
    def _check_ok_implies_abi(self) -> "ContractResult":
        if not self.ok and self.abi:
            raise ValueError("ContractResult with ok=False must have an empty abi")
        return self


def empty_contract_result() -> ContractResult:
    return ContractResult(ok=False, abi=[], name=None, evm_version="", compiler_version="", runs=0)
