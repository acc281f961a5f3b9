from errors.resolution_errors import (
    BlockscoutABILoaderError,
    EtherscanABILoaderError,
    FetchError,
    FourByteSignatureLookupError,
    LoaderError,
    MultiABILoaderError,
    OpenChainSignatureLookupError,
    ProxyNotImplementedError,
    ProxyResolverError,
    ResolutionError,
    SourcifyABILoaderError,
    is_not_found,
)

__all__ = [
    "BlockscoutABILoaderError",
    "EtherscanABILoaderError",
    "FetchError",
    "FourByteSignatureLookupError",
    "LoaderError",
    "MultiABILoaderError",
    "OpenChainSignatureLookupError",
    "ProxyNotImplementedError",
    "ProxyResolverError",
    "ResolutionError",
    "SourcifyABILoaderError",
    "is_not_found",
]
