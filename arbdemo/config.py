"""
Network configuration

Presets live in arbdemo/data/networks.json; environment variables
(optionally from a .env file) override them:

    L1_RPC, L2_RPC       RPC endpoints
    DEVNET_PRIVKEY       wallet private key
    INBOX_ADDR           L1 Inbox contract address
    L2_TX_TIMEOUT        seconds to wait for an L2 transaction
    ALCHEMY_API_KEY      filled into rpc_url_template presets
    ARB_NETWORK          preset used when no network is given
    ARB_PROTOCOL         rollup protocol when no preset names one
                         (default: classic)
"""

import os
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .errors import UnsupportedNetwork

load_dotenv()

CONFIG_PATH = Path(__file__).resolve().parent / "data" / "networks.json"

DEFAULT_NETWORK = "local"

# Submission price queries and L2 hash prediction use the classic retryable API
CLASSIC = "classic"
SUPPORTED_PROTOCOLS = (CLASSIC,)

# The sequencer normally picks up an L1 message in under 10 minutes
DEFAULT_L2_TX_TIMEOUT = 60 * 12


@dataclass
class NetworkConfig:
    """Endpoints and wallet settings for one L1/L2 pair"""
    name: str
    l1_rpc: Optional[str]
    l2_rpc: Optional[str]
    private_key: Optional[str] = None
    inbox_address: Optional[str] = None
    l2_tx_timeout: int = DEFAULT_L2_TX_TIMEOUT
    protocol: str = CLASSIC

    _ENV_NAMES = {
        'l1_rpc': 'L1_RPC',
        'l2_rpc': 'L2_RPC',
        'private_key': 'DEVNET_PRIVKEY',
        'inbox_address': 'INBOX_ADDR',
    }

    def require(self, field: str) -> str:
        """Return a configured value or raise naming the variable that sets it"""
        value = getattr(self, field)
        if not value:
            raise ValueError(f"{self._ENV_NAMES.get(field, field)} not set")
        return value

    def check_protocol(self):
        """Raise UnsupportedNetwork unless the rollup speaks the classic retryable API"""
        if self.protocol not in SUPPORTED_PROTOCOLS:
            raise UnsupportedNetwork(self.name, self.protocol)


def build_rpc_url(chain_config: dict) -> Optional[str]:
    """Resolve a chain entry's rpc_url, filling in the Alchemy key for templates"""
    if "rpc_url" in chain_config:
        return chain_config["rpc_url"]
    if "rpc_url_template" in chain_config:
        api_key = os.getenv("ALCHEMY_API_KEY", "")
        if not api_key:
            return None
        return chain_config["rpc_url_template"].replace("{ALCHEMY_API_KEY}", api_key)
    return None


def load_presets(config_path: Path = CONFIG_PATH) -> dict:
    if not config_path.exists():
        return {}
    with open(config_path) as f:
        return json.load(f)["networks"]


def load_network_config(network: Optional[str] = None,
                        config_path: Path = CONFIG_PATH) -> NetworkConfig:
    """Load a network preset and apply environment overrides"""
    network = network or os.getenv("ARB_NETWORK") or DEFAULT_NETWORK
    presets = load_presets(config_path)
    preset = presets.get(network)

    l1_rpc = os.getenv("L1_RPC")
    l2_rpc = os.getenv("L2_RPC")

    if preset is None and not (l1_rpc and l2_rpc):
        available = ', '.join(presets.keys()) or "none"
        raise ValueError(f"Unknown network: {network} (available: {available})")

    preset = preset or {}

    timeout = os.getenv("L2_TX_TIMEOUT")

    return NetworkConfig(
        name=preset.get("name", network),
        l1_rpc=l1_rpc or build_rpc_url(preset.get("l1", {})),
        l2_rpc=l2_rpc or build_rpc_url(preset.get("l2", {})),
        private_key=os.getenv("DEVNET_PRIVKEY"),
        inbox_address=os.getenv("INBOX_ADDR") or preset.get("inbox_address"),
        l2_tx_timeout=int(timeout) if timeout else DEFAULT_L2_TX_TIMEOUT,
        protocol=preset.get("protocol") or os.getenv("ARB_PROTOCOL") or CLASSIC,
    )
