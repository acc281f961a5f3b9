import pytest
from eth_utils import to_checksum_address
from unittest.mock import AsyncMock, MagicMock

from constants.proxy_slot_constants import EIP1967_IMPL_SLOT
from proxies.proxy_resolvers import EIP1967ProxyResolver
from proxies.storage_provider import StorageProvider, Web3StorageProvider
from utils.formatter_utils import storage_word_to_address

PROXY = "0x43506849d7c04f9138d1a2050bbf3a0c054402dd"
IMPLEMENTATION = bytes.fromhex("a2327a938febf5fec13bacfb16ae10ecbc4cbdcf")


@pytest.fixture
def w3():
    w3 = MagicMock()
    w3.eth.get_storage_at = AsyncMock(return_value=b"\x00" * 12 + IMPLEMENTATION)
    return w3


@pytest.mark.asyncio
async def test_get_storage_at_defaults_to_latest(w3):
    word = await Web3StorageProvider(w3).get_storage_at(PROXY, EIP1967_IMPL_SLOT)

    assert word == "0x" + "0" * 24 + IMPLEMENTATION.hex()
    address, position, block = w3.eth.get_storage_at.await_args.args
    assert address == to_checksum_address(PROXY)
    assert position == int(EIP1967_IMPL_SLOT, 16)
    assert block == "latest"


@pytest.mark.asyncio
async def test_get_storage_at_pads_short_words(w3):
    w3.eth.get_storage_at.return_value = b""

    word = await Web3StorageProvider(w3).get_storage_at(PROXY, 0, block=17000000)

    assert word == "0x" + "0" * 64
    assert w3.eth.get_storage_at.await_args.args[2] == 17000000


@pytest.mark.asyncio
async def test_resolves_eip1967_implementation_end_to_end(w3):
    provider = Web3StorageProvider(w3)

    word = await EIP1967ProxyResolver.resolve(provider, PROXY)

    assert isinstance(provider, StorageProvider)
    assert storage_word_to_address(word).lower() == "0x" + IMPLEMENTATION.hex()
