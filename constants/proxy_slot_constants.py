from types import MappingProxyType

# EIP-1967: Proxy Storage Slots
# bytes32(uint256(keccak256('eip1967.proxy.implementation')) - 1)
EIP1967_IMPL_SLOT = "0x360894a13ba1a3210667c828492db98dca3e2076cc3735a920a3ca505d382bbc"

# EIP-1967 beacon, used when the implementation slot is empty.
# bytes32(uint256(keccak256('eip1967.proxy.beacon')) - 1)
# The beacon exposes one of: implementation(), childImplementation(),
# masterCopy() (Gnosis Safe), comptrollerImplementation() (Compound)
EIP1967_BEACON_SLOT = "0xa3f0ad74e5423aebfd80d3ef4346578335a9a72aeaee59ff6cb3582b35133d50"

# OpenZeppelin labs UpgradeabilityProxy
# bytes32(uint256(keccak256("org.zeppelinos.proxy.implementation")))
ZEPPELINOS_IMPL_SLOT = "0x7050c9e0f4ca769c69bd3a8ef740bc37934f8e2c036e5a723fd8ee048ed3f8c3"

# ERC-1822: Universal Upgradeable Proxy Standard (UUPS)
# bytes32(uint256(keccak256("PROXIABLE")))
PROXIABLE_SLOT = "0xc5f16f0fcc639fa48a6947836d9850f504798523bf8c9a3a87d5876cf622bcf7"

# Gnosis Safe Proxy Factory 1.1.1
# Not a slot: the proxy bytecode PUSH32es the masterCopy() selector (0xa619486e).
# masterCopy itself lives in slot 0.
GNOSIS_SAFE_SELECTOR = "0xa619486e00000000000000000000000000000000000000000000000000000000"

# EIP-1167 minimal proxies carry the implementation in bytecode, no slot involved.

PROXY_SLOTS = MappingProxyType(
    {
        "EIP1967_IMPL": EIP1967_IMPL_SLOT,
        "EIP1967_BEACON": EIP1967_BEACON_SLOT,
        "ZEPPELINOS_IMPL": ZEPPELINOS_IMPL_SLOT,
        "PROXIABLE": PROXIABLE_SLOT,
        "GNOSIS_SAFE_SELECTOR": GNOSIS_SAFE_SELECTOR,
    }
)
