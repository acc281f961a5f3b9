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

from typing import Optional, Union

from eth_utils import is_hex, to_checksum_address

from utils.logger_utils import get_logger

logger = get_logger("Formatter Utils")

WORD_HEX_LENGTH = 64
ADDRESS_HEX_LENGTH = 40


def to_checksummed_address(address: str) -> str:
    """
    Mixed-case checksum form of an address (EIP-55).
    Raises ValueError for anything that is not a 20 byte hex address.
    """
    if not isinstance(address, str):
        raise ValueError(f"Address must be a string, got {type(address).__name__}")
    return to_checksum_address(address)


def strip_hex_prefix(value: str) -> str:
    if value.startswith(("0x", "0X")):
        return value[2:]
    return value


def normalize_slot(slot: Union[int, str]) -> str:
    """
    Canonical form of a storage slot / registry key: lowercase, 0x-prefixed, 32 bytes.
    Accepts ints, 0x-prefixed hex and bare hex (the Sequence Wallet slot is a bare address).
    """
    if isinstance(slot, bool):
        raise ValueError("Slot must be an int or a hex string")
    if isinstance(slot, int):
        if slot < 0:
            raise ValueError(f"Slot must be non-negative, got {slot}")
        return "0x" + format(slot, "x").zfill(WORD_HEX_LENGTH)
    if not isinstance(slot, str):
        raise ValueError("Slot must be an int or a hex string")

    body = strip_hex_prefix(slot.strip()).lower()
    if not body or not is_hex("0x" + body) or len(body) > WORD_HEX_LENGTH:
        raise ValueError(f"Invalid storage slot: {slot}")
    return "0x" + body.zfill(WORD_HEX_LENGTH)


def slot_to_int(slot: Union[int, str]) -> int:
    return int(normalize_slot(slot), 16)


def storage_word_to_address(word: Optional[str]) -> Optional[str]:
    """
    Extracts the address held in the trailing 20 bytes of a storage word.
    Returns None for empty or all-zero words (no implementation set).
    """
    if not word or not isinstance(word, str):
        return None

    body = strip_hex_prefix(word.strip())
    if not body or not is_hex("0x" + body):
        logger.warning(f"Ignoring non-hex storage word: {word}")
        return None

    body = body.zfill(ADDRESS_HEX_LENGTH)
    if int(body, 16) == 0:
        return None
    return to_checksum_address("0x" + body[-ADDRESS_HEX_LENGTH:])
