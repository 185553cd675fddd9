#!/usr/bin/env python3
"""
Withdraw ETH via the bridge helpers

Bridge.withdraw_eth sends the withdrawal to the wallet's own L1 address.
"""

import sys

from web3 import Web3

from arbdemo import Bridge, load_network_config
from arbdemo.runner import build_parser, parse_ether, run

WITHDRAW_AMOUNT = "0.000001"


def main(argv=None):
    args = build_parser(__doc__, WITHDRAW_AMOUNT).parse_args(argv)
    amount = parse_ether(args.amount)

    print("🏧 Withdraw ETH via the bridge helpers")

    config = load_network_config(args.network)
    bridge = Bridge.init(config)

    l2_initial_balance = bridge.get_l2_eth_balance()
    if l2_initial_balance < amount:
        print(f"Oops - not enough ether; fund your L2 wallet {bridge.address} "
              f"with at least {args.amount} ether")
        sys.exit(1)
    print("Wallet properly funded: initiating withdrawal now")

    receipt = bridge.withdraw_eth(amount)
    withdrawals = bridge.get_withdrawals_in_l2_transaction(receipt)

    print(f"🥳 Ether withdrawal initiated! {Web3.to_hex(receipt.transactionHash)}")
    print(f"Withdrawal data: {withdrawals[0] if withdrawals else None}")
    print("To claim funds (after the dispute period), execute the withdrawal on the L1 Outbox ✌️")


if __name__ == "__main__":
    sys.exit(run(main))
