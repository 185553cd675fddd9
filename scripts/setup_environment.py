#!/usr/bin/env python3
"""
Environment Setup Check

Validates the .env configuration, connectivity to both chains, wallet
balances and contract compilation. Run this before the other scripts.
"""

import sys
from pathlib import Path

from web3 import Web3

from arbdemo.bridge import connect
from arbdemo.config import NetworkConfig, load_network_config
from arbdemo.contracts import compile_contract
from arbdemo.errors import UnsupportedNetwork
from arbdemo.runner import build_parser

CONTRACTS = ["GreeterL1", "GreeterL2"]

# Enough for the default deposit and withdrawal amounts plus gas
MIN_BALANCE_ETH = 0.001


def check_env_file():
    """Check if .env file exists"""
    if not Path(".env").exists():
        print("[WARN] .env file not found")
        print("       Create a .env file with:")
        print("       DEVNET_PRIVKEY=your_private_key")
        print("       L1_RPC=your_l1_rpc_url")
        print("       L2_RPC=your_l2_rpc_url")
        return False
    print("[OK] .env file found")
    return True


def check_private_key(config: NetworkConfig):
    """Check the wallet private key is set and well formed"""
    private_key = config.private_key
    if not private_key:
        print("[ERROR] DEVNET_PRIVKEY not set")
        return False

    expected_length = 66 if private_key.startswith("0x") else 64
    if len(private_key) != expected_length:
        print("[ERROR] DEVNET_PRIVKEY has invalid length")
        return False

    print("[OK] DEVNET_PRIVKEY is configured")
    return True


def check_inbox_address(config: NetworkConfig):
    if not config.inbox_address:
        print("[WARN] INBOX_ADDR not set - needed by deposit_via_inbox.py and greeter.py")
        return False
    if not Web3.is_address(config.inbox_address):
        print(f"[ERROR] INBOX_ADDR is not a valid address: {config.inbox_address}")
        return False
    print(f"[OK] Inbox: {config.inbox_address}")
    return True


def check_protocol(config: NetworkConfig):
    """Check the network runs the classic rollup the bridge client targets"""
    try:
        config.check_protocol()
    except UnsupportedNetwork as e:
        print(f"[ERROR] {e}")
        return False
    print(f"[OK] {config.name} runs Arbitrum {config.protocol}")
    return True


def check_connectivity(label: str, rpc_url: str):
    """Connect to one chain and report its id and head block"""
    if not rpc_url:
        print(f"[ERROR] No RPC URL configured for {label}")
        return None

    print(f"Testing connection to {label}...")
    try:
        w3 = connect(rpc_url, label)
    except ConnectionError as e:
        print(f"[ERROR] {e}")
        return None

    print(f"[OK] Connected to {label}")
    print(f"     Chain ID: {w3.eth.chain_id}")
    print(f"     Block: {w3.eth.block_number:,}")
    return w3


def check_balance(label: str, w3: Web3, address: str):
    balance_eth = w3.from_wei(w3.eth.get_balance(address), 'ether')
    print(f"{label} balance: {balance_eth:.6f} ETH")

    if balance_eth < MIN_BALANCE_ETH:
        print(f"[WARN] Low {label} balance! Recommended minimum: {MIN_BALANCE_ETH} ETH")
        return False
    return True


def check_contract_compilation():
    """Verify the greeter contracts compile"""
    ok = True
    for name in CONTRACTS:
        try:
            bytecode, abi = compile_contract(name)
        except Exception as e:
            print(f"[ERROR] {name} failed to compile: {e}")
            ok = False
            continue

        func_count = len([x for x in abi if x['type'] == 'function'])
        print(f"[OK] {name} compiles ({len(bytecode):,} hex chars, {func_count} functions)")
    return ok


def main(argv=None):
    """Run all environment checks"""
    args = build_parser(__doc__).parse_args(argv)

    print("=" * 50)
    print("Arbitrum Bridge Demos - Environment Check")
    print("=" * 50)
    print()

    try:
        config = load_network_config(args.network)
    except ValueError as e:
        print(f"[ERROR] {e}")
        return 1

    results = {
        "env_file": check_env_file(),
        "protocol": check_protocol(config),
        "private_key": check_private_key(config),
        "inbox": check_inbox_address(config),
        "contracts": check_contract_compilation(),
    }

    print()
    l1_w3 = check_connectivity("L1", config.l1_rpc)
    l2_w3 = check_connectivity("L2", config.l2_rpc)
    results["connectivity"] = l1_w3 is not None and l2_w3 is not None

    if results["connectivity"] and results["private_key"]:
        print()
        address = l1_w3.eth.account.from_key(config.private_key).address
        print(f"Wallet: {address}")
        results["l1_balance"] = check_balance("L1", l1_w3, address)
        results["l2_balance"] = check_balance("L2", l2_w3, address)

    print()
    print("=" * 50)
    print("Summary")
    print("=" * 50)

    for check, passed in results.items():
        status = "[OK]" if passed else "[FAIL]"
        print(f"  {status} {check}")

    print()
    if all(results.values()):
        print("Environment is ready!")
        print(f"Run: python scripts/deposit_via_lib.py {args.network or ''}".rstrip())
        return 0

    print("Some checks failed. Please fix the issues above.")
    return 1


if __name__ == "__main__":
    sys.exit(main())
