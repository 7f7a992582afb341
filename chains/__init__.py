"""
chains - Network access for the teleport demo.

- providers.py: async JSON-RPC provider (httpx)
- abi.py: calldata encoding (eth-abi)
- signer.py: transaction signing and inclusion wait (eth-account)
"""

from chains.providers import RPCProvider, RPCResponse, RPCStats
from chains.signer import TransactionSigner

__all__ = [
    "RPCProvider",
    "RPCResponse",
    "RPCStats",
    "TransactionSigner",
]
