from typing import List, Sequence

from loaders.signatures.signature_lookup import SignatureLookup


class MultiSignatureLookup(object):
    """
    Returns the first non-empty answer from an ordered list of lookups.

    Unlike MultiABILoader there is no error classification here: whatever a lookup
    raises propagates as is and the remaining lookups are not consulted.
    """

    def __init__(self, lookups: Sequence[SignatureLookup]):
        self.lookups = tuple(lookups)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self.lookups)!r})"

    async def load_functions(self, selector: str) -> List[str]:
        for lookup in self.lookups:
            result = await lookup.load_functions(selector)
            if result:
                return result
        return []

    async def load_events(self, hash: str) -> List[str]:
        for lookup in self.lookups:
            result = await lookup.load_events(hash)
            if result:
                return result
        return []
