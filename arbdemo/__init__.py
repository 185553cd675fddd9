"""
Arbitrum Bridge Demos
Helpers for moving ETH and messages between L1 and an Arbitrum rollup
"""

from .bridge import Bridge
from .config import NetworkConfig, load_network_config
from .errors import (
    BridgeError, SequenceNumberNotFound, TransactionReverted, UnsupportedNetwork
)

__version__ = "0.1.0"

__all__ = [
    'Bridge', 'NetworkConfig', 'load_network_config',
    'BridgeError', 'SequenceNumberNotFound', 'TransactionReverted', 'UnsupportedNetwork',
]
