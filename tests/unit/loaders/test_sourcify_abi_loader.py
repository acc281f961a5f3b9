import json

import pytest
from unittest.mock import AsyncMock, patch

from eth_utils import to_checksum_address

from errors.resolution_errors import FetchError, SourcifyABILoaderError
from loaders.abi.sourcify_abi_loader import SourcifyABILoader, is_sourcify_not_found

ADDRESS = "0x1f98431c8ad98523631ae4a59f267346ea31f984"
CHECKSUMMED = to_checksum_address(ADDRESS)
ABI = [{"type": "function", "name": "owner", "inputs": [], "outputs": [{"type": "address"}]}]

METADATA = {
    "compiler": {"version": "0.7.6+commit.7338295f"},
    "language": "Solidity",
    "output": {"abi": ABI, "devdoc": {"kind": "dev", "methods": {}}},
    "settings": {
        "compilationTarget": {"contracts/UniswapV3Factory.sol": "UniswapV3Factory"},
        "evmVersion": "istanbul",
        "optimizer": {"enabled": True, "runs": 800},
    },
}


def files_payload(metadata=None, status="full"):
    prefix = f"/contracts/{status}_match/1/{CHECKSUMMED}"
    files = [
        {"name": "UniswapV3Factory.sol", "path": f"{prefix}/sources/contracts/UniswapV3Factory.sol", "content": "pragma solidity =0.7.6;"},
    ]
    if metadata is not None:
        files.append({"name": "metadata.json", "path": f"{prefix}/metadata.json", "content": json.dumps(metadata)})
    return {"status": status, "files": files}


@pytest.fixture
def mock_fetch_json():
    with patch("loaders.abi.sourcify_abi_loader.fetch_json", new_callable=AsyncMock) as mock:
        yield mock


@pytest.mark.asyncio
async def test_get_contract_full_match(mock_fetch_json):
    mock_fetch_json.return_value = files_payload(METADATA)

    result = await SourcifyABILoader().get_contract(ADDRESS)

    assert result.ok is True
    assert result.abi == ABI
    assert result.name == "UniswapV3Factory"
    assert result.evm_version == "istanbul"
    assert result.compiler_version == "0.7.6+commit.7338295f"
    assert result.runs == 800
    assert result.loader_name == "SourcifyABILoader"
    mock_fetch_json.assert_awaited_once()
    assert mock_fetch_json.call_args[0][0] == f"https://sourcify.dev/server/files/1/{CHECKSUMMED}"


@pytest.mark.asyncio
async def test_get_contract_prefers_devdoc_title():
    metadata = dict(METADATA, output={"abi": ABI, "devdoc": {"title": "Canonical Uniswap V3 factory"}})
    with patch("loaders.abi.sourcify_abi_loader.fetch_json", new=AsyncMock(return_value=files_payload(metadata))):
        result = await SourcifyABILoader().get_contract(ADDRESS)

    assert result.name == "Canonical Uniswap V3 factory"


@pytest.mark.asyncio
async def test_get_contract_falls_back_to_partial_match(mock_fetch_json):
    mock_fetch_json.side_effect = [
        FetchError("HTTP 404 Not Found", status=404),
        files_payload(METADATA, status="partial"),
    ]

    result = await SourcifyABILoader(chain_id=10).get_contract(ADDRESS)

    assert result.ok is True
    urls = [c[0][0] for c in mock_fetch_json.call_args_list]
    assert urls == [
        f"https://sourcify.dev/server/files/10/{CHECKSUMMED}",
        f"https://sourcify.dev/server/files/any/10/{CHECKSUMMED}",
    ]


@pytest.mark.asyncio
async def test_get_contract_masked_fetch_failure_is_not_found(mock_fetch_json):
    mock_fetch_json.side_effect = [FetchError("Failed to fetch"), FetchError("Failed to fetch")]

    result = await SourcifyABILoader().get_contract(ADDRESS)

    assert result.ok is False
    assert result.abi == []


@pytest.mark.asyncio
async def test_get_contract_missing_metadata_is_error(mock_fetch_json):
    mock_fetch_json.return_value = files_payload(metadata=None)

    with pytest.raises(SourcifyABILoaderError, match="metadata.json not found"):
        await SourcifyABILoader().get_contract(ADDRESS)


@pytest.mark.asyncio
async def test_get_contract_server_error_is_wrapped(mock_fetch_json):
    mock_fetch_json.side_effect = FetchError("HTTP 502 Bad Gateway", status=502)

    with pytest.raises(SourcifyABILoaderError) as exc_info:
        await SourcifyABILoader().get_contract(ADDRESS)

    assert exc_info.value.status == 502


@pytest.mark.asyncio
async def test_get_sources_returns_every_file(mock_fetch_json):
    mock_fetch_json.return_value = files_payload(METADATA)

    result = await SourcifyABILoader().get_contract(ADDRESS)
    sources = await result.get_sources()

    assert len(sources) == 2
    assert SourcifyABILoader.strip_path_prefix(sources[0].path) == "contracts/UniswapV3Factory.sol"
    assert sources[0].content == "pragma solidity =0.7.6;"


@pytest.mark.asyncio
async def test_load_abi_tries_partial_match(mock_fetch_json):
    mock_fetch_json.side_effect = [FetchError("HTTP 404 Not Found", status=404), METADATA]

    abi = await SourcifyABILoader().load_abi(ADDRESS)

    assert abi == ABI
    urls = [c[0][0] for c in mock_fetch_json.call_args_list]
    assert urls[0] == f"https://repo.sourcify.dev/contracts/full_match/1/{CHECKSUMMED}/metadata.json"
    assert urls[1] == f"https://repo.sourcify.dev/contracts/partial_match/1/{CHECKSUMMED}/metadata.json"


@pytest.mark.asyncio
async def test_load_abi_not_found_anywhere(mock_fetch_json):
    mock_fetch_json.side_effect = FetchError("HTTP 404 Not Found", status=404)

    assert await SourcifyABILoader().load_abi(ADDRESS) == []


@pytest.mark.asyncio
async def test_invalid_address_is_rejected(mock_fetch_json):
    with pytest.raises(ValueError):
        await SourcifyABILoader().get_contract("0x1234")

    mock_fetch_json.assert_not_called()


@pytest.mark.parametrize(
    "path, expected",
    [
        ("/contracts/full_match/1/0x1F98431c8aD98523631AE4a59f267346ea31F984/sources/contracts/interfaces/IERC20Minimal.sol",
         "contracts/interfaces/IERC20Minimal.sol"),
        ("/contracts/partial_match/10/0xAbC/sources/@openzeppelin/contracts/proxy/Proxy.sol",
         "@openzeppelin/contracts/proxy/Proxy.sol"),
        ("/contracts/full_match/1/0xAbC/metadata.json", "metadata.json"),
        ("contracts/Foo.sol", "contracts/Foo.sol"),
    ],
)
def test_strip_path_prefix(path, expected):
    assert SourcifyABILoader.strip_path_prefix(path) == expected


def test_is_sourcify_not_found():
    assert is_sourcify_not_found(FetchError("HTTP 404", status=404))
    assert is_sourcify_not_found(FetchError("Failed to fetch"))
    assert not is_sourcify_not_found(FetchError("HTTP 500", status=500))
