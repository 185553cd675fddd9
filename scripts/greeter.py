#!/usr/bin/env python3
"""
Cross-chain Greeter

Deploys GreeterL1 to L1 and GreeterL2 to L2, links them, then updates the L2
greeting by sending a retryable ticket from L1.
"""

import sys
import time
from datetime import datetime

from web3 import Web3

from arbdemo import Bridge, load_network_config
from arbdemo.errors import SequenceNumberNotFound
from arbdemo.fees import DEFAULT_MAX_GAS, calldata_length, estimate_retryable_fees
from arbdemo.runner import build_parser, run

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

NEW_GREETING = "Greeting from far, far away"


def deploy_greeters(bridge: Bridge):
    """Deploy both greeters and point each at its counterpart"""
    print("👋 Deploying L1 Greeter")
    l1_greeter = bridge.deploy_l1(
        "GreeterL1", "Hello world in L1", ZERO_ADDRESS, Web3.to_checksum_address(bridge.inbox_address)
    )
    print(f"📍 GreeterL1 deployed to {l1_greeter.address}")

    print("👋👋 Deploying L2 Greeter")
    l2_greeter = bridge.deploy_l2("GreeterL2", "Hello world in L2", ZERO_ADDRESS)
    print(f"📍 GreeterL2 deployed to {l2_greeter.address}")

    bridge.send_l1_transaction(l1_greeter.functions.updateL2Target(l2_greeter.address))
    bridge.send_l2_transaction(l2_greeter.functions.updateL1Target(l1_greeter.address))
    print("👍 Counterpart contract addresses set in both greeters")

    return l1_greeter, l2_greeter


def send_greeting_to_l2(bridge: Bridge, l1_greeter, greeting: str, max_gas: int = DEFAULT_MAX_GAS):
    """
    Send `greeting` to L2 as a retryable ticket, paying submission and execution fees.

    Returns the L1 receipt and the fees used.
    """
    # The submission price depends on the size of setGreeting(string) calldata
    calldata_size = calldata_length(['string'], [greeting])
    fees = estimate_retryable_fees(bridge, calldata_size, max_gas=max_gas)

    print(f"Retryable base submission price (x5): {fees.submission_price}")
    if fees.next_update_timestamp:
        print(f"Time in seconds till price updates: {fees.next_update_timestamp - int(time.time())}")
    print(f"L2 gas price: {fees.gas_price_bid}")
    print(f"📨 Sending greeting to L2 with {fees.call_value} callValue for L2 fees")

    receipt = bridge.send_l1_transaction(
        l1_greeter.functions.setGreetingInL2(
            greeting, fees.submission_price, fees.max_gas, fees.gas_price_bid
        ),
        value=fees.call_value,
    )
    return receipt, fees


def main(argv=None):
    parser = build_parser(__doc__)
    parser.add_argument("--greeting", default=NEW_GREETING, help="Greeting to send to L2")
    args = parser.parse_args(argv)

    print("🌉 Cross-chain Greeter")

    config = load_network_config(args.network)
    config.require('inbox_address')
    bridge = Bridge.init(config)

    l1_greeter, l2_greeter = deploy_greeters(bridge)

    print(f'Current L2 greeting: "{l2_greeter.functions.greet().call()}"')
    print("Updating greeting from L1 to L2:")

    receipt, _ = send_greeting_to_l2(bridge, l1_greeter, args.greeting)
    l1_tx_hash = Web3.to_hex(receipt.transactionHash)
    print(f"🙌 Greeting txn confirmed on L1! {l1_tx_hash}")

    seq_nums = bridge.get_inbox_seq_nums(receipt)
    if not seq_nums:
        raise SequenceNumberNotFound(l1_tx_hash)

    retryable_tx_hash = bridge.calculate_l2_retryable_transaction_hash(seq_nums[0])

    print(f"🕐 Waiting for L2 txn {retryable_tx_hash} "
          f"(should take < 10 minutes, current time: {datetime.now().strftime('%H:%M:%S')})")
    l2_receipt = bridge.wait_for_l2_transaction(retryable_tx_hash, timeout=config.l2_tx_timeout)
    print(f"🥳 L2 retryable txn executed {Web3.to_hex(l2_receipt.transactionHash)}")

    # GreeterL2 accepts the call because the retryable runs from GreeterL1's L2 alias
    print(f'Updated L2 greeting: "{l2_greeter.functions.greet().call()}"')
    print("✌️")


if __name__ == "__main__":
    sys.exit(run(main))
