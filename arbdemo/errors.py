"""Exceptions raised by the bridge helpers"""

from web3 import Web3


class BridgeError(Exception):
    """Base class for bridge failures"""


class SequenceNumberNotFound(BridgeError):
    """No inbox message was delivered by an L1 transaction"""

    def __init__(self, tx_hash: str):
        self.tx_hash = tx_hash
        super().__init__(f"Sequence number not found in transaction {tx_hash}")


class TransactionReverted(BridgeError):
    """A mined transaction came back with status 0"""

    def __init__(self, receipt):
        self.receipt = receipt
        super().__init__(f"Transaction reverted: {Web3.to_hex(receipt['transactionHash'])}")


class UnsupportedNetwork(BridgeError):
    """The rollup does not expose the classic retryable API the client relies on"""

    def __init__(self, network: str, protocol: str):
        self.network = network
        self.protocol = protocol
        super().__init__(
            f"{network} runs Arbitrum {protocol}; only classic rollups are supported "
            f"(ArbRetryableTx.getSubmissionPrice and classic L2 hash prediction)"
        )
