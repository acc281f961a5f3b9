from proxies.proxy_resolvers import (
    SLOT_RESOLVERS,
    EIP1967ProxyResolver,
    GnosisSafeProxyResolver,
    NotImplementedProxyResolver,
    PROXIABLEProxyResolver,
    ProxyResolver,
    SequenceWalletProxyResolver,
    SequenceWalletResolver,
    SlotProxyResolver,
    ZeppelinOSProxyResolver,
    get_slot_resolver,
)
from proxies.storage_provider import StorageProvider, Web3StorageProvider
