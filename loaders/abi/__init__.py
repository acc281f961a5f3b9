from loaders.abi.abi_loader import ABILoader
from loaders.abi.blockscout_abi_loader import BlockscoutABILoader
from loaders.abi.etherscan_abi_loader import EtherscanABILoader
from loaders.abi.multi_abi_loader import MultiABILoader
from loaders.abi.sourcify_abi_loader import SourcifyABILoader
