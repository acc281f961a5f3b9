from config.settings import LoaderSettings
from loaders.abi.blockscout_abi_loader import BlockscoutABILoader
from loaders.abi.etherscan_abi_loader import EtherscanABILoader
from loaders.abi.multi_abi_loader import MultiABILoader
from loaders.abi.sourcify_abi_loader import SourcifyABILoader
from loaders.defaults import default_abi_loader, default_signature_lookup, defaults_with_env
from loaders.signatures.four_byte_signature_lookup import FourByteSignatureLookup
from loaders.signatures.openchain_signature_lookup import OpenChainSignatureLookup


def test_default_abi_loader_order():
    loader = default_abi_loader()

    assert isinstance(loader, MultiABILoader)
    assert [type(l) for l in loader.loaders] == [SourcifyABILoader, EtherscanABILoader]


def test_default_signature_lookup_order():
    lookup = default_signature_lookup()

    assert [type(l) for l in lookup.lookups] == [OpenChainSignatureLookup, FourByteSignatureLookup]


def test_defaults_with_env_mapping():
    defaults = defaults_with_env(
        {
            "SOURCIFY_CHAIN_ID": 42161,
            "ETHERSCAN_API_KEY": "KEY",
            "ETHERSCAN_BASE_URL": "https://api.arbiscan.io/api",
            "UNRELATED": "ignored",
        }
    )

    sourcify, etherscan = defaults["abi_loader"].loaders
    assert sourcify.chain_id == 42161
    assert etherscan.api_key == "KEY"
    assert etherscan.base_url == "https://api.arbiscan.io/api"
    assert isinstance(defaults["signature_lookup"].lookups[0], OpenChainSignatureLookup)


def test_defaults_with_env_blank_values_use_defaults():
    defaults = defaults_with_env({"SOURCIFY_CHAIN_ID": "", "ETHERSCAN_API_KEY": None})

    sourcify, etherscan = defaults["abi_loader"].loaders
    assert sourcify.chain_id == 1
    assert etherscan.api_key is None
    assert etherscan.base_url == "https://api.etherscan.io/api"


def test_defaults_with_env_adds_blockscout_when_configured():
    env = LoaderSettings.model_validate({"BLOCKSCOUT_BASE_URL": "https://base.blockscout.com/api/v2"})

    loaders = defaults_with_env(env)["abi_loader"].loaders

    assert isinstance(loaders[-1], BlockscoutABILoader)
    assert loaders[-1].base_url == "https://base.blockscout.com/api/v2"
