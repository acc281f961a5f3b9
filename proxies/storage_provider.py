from typing import Optional, Protocol, Union, runtime_checkable

from web3 import AsyncWeb3

from utils.formatter_utils import slot_to_int, to_checksummed_address
from utils.logger_utils import get_logger

logger = get_logger("Storage Provider")

BlockIdentifier = Union[str, int]


@runtime_checkable
class StorageProvider(Protocol):
    async def get_storage_at(
        self, address: str, slot: Union[int, str], block: Optional[BlockIdentifier] = None
    ) -> str:
        """Returns the 32 byte word at `slot` as 0x-prefixed hex. `block` defaults to latest."""
        ...


class Web3StorageProvider(object):
    """StorageProvider backed by an AsyncWeb3 instance."""

    def __init__(self, w3: AsyncWeb3):
        self._w3 = w3

    async def get_storage_at(
        self, address: str, slot: Union[int, str], block: Optional[BlockIdentifier] = None
    ) -> str:
        block_identifier = block if block is not None else "latest"
        position = slot_to_int(slot)
        logger.debug(f"eth_getStorageAt {address} slot={hex(position)} block={block_identifier}")

        word = await self._w3.eth.get_storage_at(to_checksummed_address(address), position, block_identifier)
        return "0x" + bytes(word).hex().zfill(64)
