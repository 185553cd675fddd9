#!/usr/bin/env python3
"""
Withdraw ETH via ArbSys

Talks to the L2 only: calls withdrawEth on the ArbSys precompile and prints
the resulting withdrawal event. Funds are claimable on L1 through the Outbox
once the dispute period has passed.
"""

import sys

from web3 import Web3

from arbdemo import load_network_config
from arbdemo.abis import ARB_SYS_ABI, ARB_SYS_ADDRESS
from arbdemo.bridge import connect, get_withdrawals_in_l2_transaction
from arbdemo.contracts import send_transaction
from arbdemo.runner import build_parser, parse_ether, run

WITHDRAW_AMOUNT = "0.001"


def main(argv=None):
    args = build_parser(__doc__, WITHDRAW_AMOUNT).parse_args(argv)
    amount = parse_ether(args.amount)

    print("🏧 Withdraw ETH via ArbSys")

    config = load_network_config(args.network)
    config.check_protocol()
    l2_w3 = connect(config.require('l2_rpc'), "L2")
    l2_wallet = l2_w3.eth.account.from_key(config.require('private_key'))

    l2_initial_balance = l2_w3.eth.get_balance(l2_wallet.address)
    if l2_initial_balance < amount:
        print(f"Oops - not enough ether; fund your L2 wallet {l2_wallet.address} "
              f"with at least {args.amount} ether")
        sys.exit(1)
    print("Wallet properly funded: initiating withdrawal now")

    arb_sys = l2_w3.eth.contract(address=Web3.to_checksum_address(ARB_SYS_ADDRESS), abi=ARB_SYS_ABI)

    # Same as sendTxToL1(destination, b"") with the amount attached
    receipt = send_transaction(
        l2_w3, l2_wallet, arb_sys.functions.withdrawEth(l2_wallet.address), value=amount
    )

    withdrawals = get_withdrawals_in_l2_transaction(l2_w3, receipt, ARB_SYS_ADDRESS)

    print(f"🥳 Ether withdrawal initiated! {Web3.to_hex(receipt.transactionHash)}")
    print(f"Withdrawal data: {withdrawals[0] if withdrawals else None}")
    print("To claim funds (after the dispute period), execute the withdrawal on the L1 Outbox ✌️")

    l2_updated_balance = l2_w3.eth.get_balance(l2_wallet.address)
    print(f"💰 Your L2 balance is updated from {l2_initial_balance} to {l2_updated_balance}")


if __name__ == "__main__":
    sys.exit(run(main))
