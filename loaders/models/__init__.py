from loaders.models.contract_result import (
    ContractResult,
    ContractSource,
    ContractSources,
    SourcesGetter,
    empty_contract_result,
)
