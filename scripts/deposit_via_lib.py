#!/usr/bin/env python3
"""
Deposit ETH via the bridge helpers

Bridge.deposit_eth quotes the retryable submission price itself and forwards
the deposit through the Inbox.
"""

import sys

from web3 import Web3

from arbdemo import Bridge, load_network_config
from arbdemo.errors import SequenceNumberNotFound
from arbdemo.runner import build_parser, parse_ether, run

DEPOSIT_AMOUNT = "0.0001"


def main(argv=None):
    args = build_parser(__doc__, DEPOSIT_AMOUNT).parse_args(argv)
    amount = parse_ether(args.amount)

    print("💸 Deposit ETH via the bridge helpers")

    config = load_network_config(args.network)
    bridge = Bridge.init(config)

    l2_initial_balance = bridge.get_l2_eth_balance()

    receipt = bridge.deposit_eth(amount)
    l1_tx_hash = Web3.to_hex(receipt.transactionHash)
    print(f"✅ Deposit L1 receipt is: {l1_tx_hash}")

    seq_nums = bridge.get_inbox_seq_nums(receipt)
    if not seq_nums:
        raise SequenceNumberNotFound(l1_tx_hash)
    print("🔢 Inbox sequence number is found!")

    l2_tx_hash = bridge.calculate_l2_transaction_hash(seq_nums[0])
    print(f"🔮 L2 tx hash is {l2_tx_hash}")

    print("⏳ Waiting for L2 transaction...")
    l2_receipt = bridge.wait_for_l2_transaction(l2_tx_hash, timeout=config.l2_tx_timeout)
    print(f"✅ L2 transaction found! {Web3.to_hex(l2_receipt.transactionHash)}")

    l2_updated_balance = bridge.get_l2_eth_balance()
    print(f"💰 Your L2 balance is updated from {l2_initial_balance} to {l2_updated_balance}")


if __name__ == "__main__":
    sys.exit(run(main))
