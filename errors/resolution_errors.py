from typing import Any, Dict, Optional


class ResolutionError(Exception):
    """
    Base error for every loader, lookup and proxy resolver failure.

    Carries a human readable message, a context dict describing where the failure
    happened (loader/resolver instance, address, request url, ...) and the
    underlying cause, which is also chained as __cause__.
    """

    _status: Optional[int] = None

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.message = message
        self.context = dict(context or {})
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    @property
    def status(self) -> Optional[int]:
        """HTTP status of this error, or of the nearest error in its cause chain."""
        if self._status is not None:
            return self._status
        cause = self.cause
        seen = set()
        while cause is not None and id(cause) not in seen:
            seen.add(id(cause))
            status = getattr(cause, "status", None)
            if isinstance(status, int):
                return status
            cause = getattr(cause, "cause", None) or cause.__cause__
        return None

    def __str__(self) -> str:
        return self.message


class FetchError(ResolutionError):
    """Transport failure: non-2xx response, connection problem or undecodable body."""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status: Optional[int] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message, context={"url": url, "status": status}, cause=cause)
        self.url = url
        self._status = status


class LoaderError(ResolutionError):
    pass


class MultiABILoaderError(LoaderError):
    pass


class EtherscanABILoaderError(LoaderError):
    pass


class SourcifyABILoaderError(LoaderError):
    pass


class BlockscoutABILoaderError(LoaderError):
    pass


class FourByteSignatureLookupError(LoaderError):
    pass


class OpenChainSignatureLookupError(LoaderError):
    pass


class ProxyResolverError(ResolutionError):
    pass


class ProxyNotImplementedError(ProxyResolverError):
    """Raised by placeholder resolvers for proxy patterns that are recognised but not handled yet."""

    def __init__(self, pattern_name: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(f"NotImplemented: {pattern_name}", context=context)
        self.pattern_name = pattern_name


def is_not_found(error: BaseException) -> bool:
    # Only a 404 counts as a soft miss, anything else means the provider is unhealthy.
    return getattr(error, "status", None) == 404
