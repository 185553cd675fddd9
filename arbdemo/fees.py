"""
Retryable ticket fee arithmetic

A retryable ticket prepays two costs from L1: the base submission cost, which
depends on the calldata length, and the L2 execution cost (gas price bid times
gas limit). All values are integer wei.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from eth_abi import encode

# Leaves headroom over the quoted price; any excess is refunded on L2
RETRYABLE_SUBMISSION_MULTIPLIER = 5

# Matches the multiplier above when expressed as a percent increase
DEFAULT_SUBMISSION_PERCENT_INCREASE = 400

DEFAULT_MAX_GAS = 100000

FUNCTION_SELECTOR_LENGTH = 4


def calldata_length(abi_types: Sequence[str], values: Sequence) -> int:
    """Length in bytes of a call's ABI-encoded arguments plus its selector"""
    return len(encode(list(abi_types), list(values))) + FUNCTION_SELECTOR_LENGTH


def adjust_submission_price(price: int, multiplier: int = RETRYABLE_SUBMISSION_MULTIPLIER) -> int:
    return price * multiplier


def percent_increase(value: int, increase: int) -> int:
    return value + value * increase // 100


def retryable_call_value(submission_price: int, gas_price_bid: int, max_gas: int) -> int:
    """Total L1 callvalue needed to fund a retryable ticket"""
    return submission_price + gas_price_bid * max_gas


@dataclass
class RetryableFees:
    """Fee parameters passed along with a retryable ticket"""
    submission_price: int
    gas_price_bid: int
    max_gas: int
    next_update_timestamp: Optional[int] = None

    @property
    def call_value(self) -> int:
        return retryable_call_value(self.submission_price, self.gas_price_bid, self.max_gas)


def estimate_retryable_fees(bridge, calldata_size: int, max_gas: int = DEFAULT_MAX_GAS,
                            multiplier: int = RETRYABLE_SUBMISSION_MULTIPLIER) -> RetryableFees:
    """Query current L2 prices and build the fees for a ticket of `calldata_size` bytes"""
    base_price, next_update_timestamp = bridge.get_txn_submission_price(calldata_size)
    gas_price_bid = bridge.get_l2_gas_price()

    return RetryableFees(
        submission_price=adjust_submission_price(base_price, multiplier),
        gas_price_bid=gas_price_bid,
        max_gas=max_gas,
        next_update_timestamp=next_update_timestamp,
    )
