from typing import Any, Dict, List, Mapping, Optional, Union

import aiohttp

from config.settings import LoaderSettings
from loaders.abi.abi_loader import ABILoader
from loaders.abi.blockscout_abi_loader import BlockscoutABILoader
from loaders.abi.etherscan_abi_loader import EtherscanABILoader
from loaders.abi.multi_abi_loader import MultiABILoader
from loaders.abi.sourcify_abi_loader import SourcifyABILoader
from loaders.signatures.four_byte_signature_lookup import FourByteSignatureLookup
from loaders.signatures.multi_signature_lookup import MultiSignatureLookup
from loaders.signatures.openchain_signature_lookup import OpenChainSignatureLookup


def default_abi_loader(session: Optional[aiohttp.ClientSession] = None) -> MultiABILoader:
    return MultiABILoader([SourcifyABILoader(session=session), EtherscanABILoader(session=session)])


def default_signature_lookup(session: Optional[aiohttp.ClientSession] = None) -> MultiSignatureLookup:
    return MultiSignatureLookup([OpenChainSignatureLookup(session=session), FourByteSignatureLookup(session=session)])


def defaults_with_env(
    env: Union[LoaderSettings, Mapping[str, Any]],
    session: Optional[aiohttp.ClientSession] = None,
) -> Dict[str, Any]:
    """
    Builds the default loader and lookup from configuration.

    `env` is either a LoaderSettings instance or a plain mapping of environment-style
    keys (ETHERSCAN_API_KEY, ETHERSCAN_BASE_URL, SOURCIFY_CHAIN_ID, ...), e.g. os.environ.

    Example:
        defaults_with_env({"SOURCIFY_CHAIN_ID": 42161, "ETHERSCAN_BASE_URL": "https://api.arbiscan.io/api"})
    """
    if not isinstance(env, LoaderSettings):
        env = LoaderSettings.model_validate({k: v for k, v in env.items() if v not in (None, "")})

    loaders: List[ABILoader] = [
        SourcifyABILoader(chain_id=env.sourcify_chain_id, session=session),
        EtherscanABILoader(
            api_key=env.etherscan_api_key,
            base_url=env.etherscan_base_url,
            chain_id=env.etherscan_chain_id,
            session=session,
        ),
    ]
    if env.blockscout_api_key or env.blockscout_base_url:
        loaders.append(
            BlockscoutABILoader(api_key=env.blockscout_api_key, base_url=env.blockscout_base_url, session=session)
        )

    return {
        "abi_loader": MultiABILoader(loaders),
        "signature_lookup": default_signature_lookup(session=session),
    }
