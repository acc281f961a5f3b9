# MIT License
#
# Copyright (c) 2018 Evgeny Medvedev, evge.medvedev@gmail.com
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

from types import MappingProxyType
from typing import Mapping, Optional, Protocol, Union

from constants.proxy_slot_constants import (
    EIP1967_BEACON_SLOT,
    EIP1967_IMPL_SLOT,
    GNOSIS_SAFE_SELECTOR,
    PROXIABLE_SLOT,
    ZEPPELINOS_IMPL_SLOT,
)
from errors.resolution_errors import ProxyNotImplementedError
from proxies.storage_provider import StorageProvider
from utils.formatter_utils import normalize_slot
from utils.logger_utils import get_logger

logger = get_logger("Proxy Resolvers")


class ProxyResolver(Protocol):
    name: str

    async def resolve(self, provider: StorageProvider, address: str) -> str:
        """Returns the raw storage word that holds the implementation address."""
        ...


class SlotProxyResolver(object):
    """Reads the implementation pointer from one fixed storage slot."""

    def __init__(self, name: str, slot: Union[int, str]):
        self.name = name
        self.slot = slot

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, slot={self.slot!r})"

    async def resolve(self, provider: StorageProvider, address: str) -> str:
        logger.debug(f"Resolving {self.name} implementation of {address}")
        return await provider.get_storage_at(address, self.slot)


class SequenceWalletProxyResolver(object):
    """
    Sequence wallets store the implementation in a slot keyed by the wallet's own address.
    https://github.com/0xsequence/wallet-contracts/blob/master/contracts/Wallet.sol
    """

    name = "SequenceWalletProxy"

    def __str__(self) -> str:
        return self.name

    async def resolve(self, provider: StorageProvider, address: str) -> str:
        word = await provider.get_storage_at(address, address.lower()[2:])
        # 12 zero bytes of padding, the address is the trailing 20 bytes
        return "0x" + word[-40:]


class NotImplementedProxyResolver(object):
    """Placeholder for a recognised proxy pattern that cannot be resolved yet."""

    def __init__(self, name: str):
        self.name = name

    def __str__(self) -> str:
        return self.name

    async def resolve(self, provider: StorageProvider, address: str) -> str:
        raise ProxyNotImplementedError(self.name, context={"resolver": self, "address": address})


EIP1967ProxyResolver = SlotProxyResolver("EIP1967Proxy", EIP1967_IMPL_SLOT)
ZeppelinOSProxyResolver = SlotProxyResolver("ZeppelinOSProxy", ZEPPELINOS_IMPL_SLOT)
PROXIABLEProxyResolver = SlotProxyResolver("PROXIABLEProxy", PROXIABLE_SLOT)
# masterCopy() is always the first slot, whatever constant matched the bytecode
GnosisSafeProxyResolver = SlotProxyResolver("GnosisSafeProxy", 0)
SequenceWalletResolver = SequenceWalletProxyResolver()

SLOT_RESOLVERS: Mapping[str, ProxyResolver] = MappingProxyType(
    {
        EIP1967_IMPL_SLOT: EIP1967ProxyResolver,
        EIP1967_BEACON_SLOT: NotImplementedProxyResolver("eip1967.proxy.beacon"),
        ZEPPELINOS_IMPL_SLOT: ZeppelinOSProxyResolver,
        PROXIABLE_SLOT: PROXIABLEProxyResolver,
        GNOSIS_SAFE_SELECTOR: GnosisSafeProxyResolver,
    }
)


def get_slot_resolver(slot: Union[int, str]) -> Optional[ProxyResolver]:
    """Looks up the resolver registered for a slot constant, in any hex casing, or None."""
    try:
        key = normalize_slot(slot)
    except ValueError:
        return None
    return SLOT_RESOLVERS.get(key)
