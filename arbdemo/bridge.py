"""
L1 <-> L2 bridge client

A thin web3.py wrapper over the Arbitrum Inbox (L1) and the ArbSys /
ArbRetryableTx precompiles (L2): deposits, withdrawals, submission price
queries, inbox sequence numbers and L2 transaction hash prediction.
"""

from typing import List, Optional, Tuple

from web3 import Web3
from web3.logs import DISCARD

from .abis import (
    ARB_RETRYABLE_TX_ABI, ARB_RETRYABLE_TX_ADDRESS, ARB_SYS_ABI, ARB_SYS_ADDRESS,
    INBOX_ABI,
)
from .contracts import Account, account_address, deploy_contract, send_transaction
from .fees import DEFAULT_SUBMISSION_PERCENT_INCREASE, percent_increase

# Set on an inbox sequence number to derive its L2 request id
SEQ_NUM_BIT_FLIP = 1 << 255


def connect(rpc_url: str, label: str = "network") -> Web3:
    """Connect to an RPC endpoint, raising ConnectionError if unreachable"""
    w3 = Web3(Web3.HTTPProvider(rpc_url, request_kwargs={'timeout': 30}))
    if not w3.is_connected():
        raise ConnectionError(f"Cannot connect to {label} at {rpc_url}")
    return w3


def get_inbox_seq_nums(w3: Web3, receipt, inbox_address: str) -> Optional[List[int]]:
    """
    Sequence numbers of the inbox messages delivered by an L1 transaction.

    Returns None when the transaction delivered no message.
    """
    inbox = w3.eth.contract(address=Web3.to_checksum_address(inbox_address), abi=INBOX_ABI)

    events = list(inbox.events.InboxMessageDelivered().process_receipt(receipt, errors=DISCARD))
    events += inbox.events.InboxMessageDeliveredFromOrigin().process_receipt(receipt, errors=DISCARD)
    events = [e for e in events if Web3.to_checksum_address(e['address']) == inbox.address]
    if not events:
        return None

    events.sort(key=lambda e: e['logIndex'])
    return [e['args']['messageNum'] for e in events]


def _request_id(seq_num: int, l2_chain_id: int) -> bytes:
    return Web3.solidity_keccak(
        ['uint256', 'uint256'], [l2_chain_id, seq_num | SEQ_NUM_BIT_FLIP]
    )


def calculate_l2_transaction_hash(seq_num: int, l2_chain_id: int) -> str:
    """Hash of the L2 transaction (request id) created for an inbox message"""
    return Web3.to_hex(_request_id(seq_num, l2_chain_id))


def _retryable_hash(seq_num: int, l2_chain_id: int, index: int) -> str:
    request_id = _request_id(seq_num, l2_chain_id)
    return Web3.to_hex(Web3.solidity_keccak(['bytes32', 'uint256'], [request_id, index]))


def calculate_l2_retryable_transaction_hash(seq_num: int, l2_chain_id: int) -> str:
    """Hash of the L2 execution of a retryable ticket"""
    return _retryable_hash(seq_num, l2_chain_id, 0)


def calculate_retryable_auto_redeem_hash(seq_num: int, l2_chain_id: int) -> str:
    """Hash of the automatic redeem attempt of a retryable ticket"""
    return _retryable_hash(seq_num, l2_chain_id, 1)


def get_withdrawals_in_l2_transaction(w3: Web3, receipt,
                                      arb_sys_address: str = ARB_SYS_ADDRESS) -> List[dict]:
    """Decode the L2-to-L1 withdrawal events emitted by ArbSys in an L2 receipt"""
    arb_sys = w3.eth.contract(address=Web3.to_checksum_address(arb_sys_address), abi=ARB_SYS_ABI)
    events = arb_sys.events.L2ToL1Transaction().process_receipt(receipt, errors=DISCARD)
    return [
        dict(e['args']) for e in events
        if Web3.to_checksum_address(e['address']) == arb_sys.address
    ]


class Bridge:
    """Wallet context spanning an L1 and an L2 chain"""

    def __init__(self, l1_w3: Web3, l2_w3: Web3, account: Account,
                 inbox_address: Optional[str] = None,
                 arb_sys_address: str = ARB_SYS_ADDRESS,
                 arb_retryable_tx_address: str = ARB_RETRYABLE_TX_ADDRESS):
        self.l1_w3 = l1_w3
        self.l2_w3 = l2_w3
        self.account = account
        self.address = account_address(account)
        self.inbox_address = inbox_address
        self.arb_sys_address = Web3.to_checksum_address(arb_sys_address)
        self.arb_retryable_tx_address = Web3.to_checksum_address(arb_retryable_tx_address)
        self._l2_chain_id = None

    @classmethod
    def init(cls, config, **kwargs) -> "Bridge":
        """Connect to both chains of a NetworkConfig and load its wallet"""
        config.check_protocol()
        l1_w3 = connect(config.require('l1_rpc'), "L1")
        l2_w3 = connect(config.require('l2_rpc'), "L2")
        account = l1_w3.eth.account.from_key(config.require('private_key'))
        return cls(l1_w3, l2_w3, account, inbox_address=config.inbox_address, **kwargs)

    @property
    def l2_chain_id(self) -> int:
        if self._l2_chain_id is None:
            self._l2_chain_id = self.l2_w3.eth.chain_id
        return self._l2_chain_id

    @property
    def inbox(self):
        if not self.inbox_address:
            raise ValueError("INBOX_ADDR not set")
        return self.l1_w3.eth.contract(
            address=Web3.to_checksum_address(self.inbox_address), abi=INBOX_ABI
        )

    @property
    def arb_sys(self):
        return self.l2_w3.eth.contract(address=self.arb_sys_address, abi=ARB_SYS_ABI)

    @property
    def arb_retryable_tx(self):
        return self.l2_w3.eth.contract(
            address=self.arb_retryable_tx_address, abi=ARB_RETRYABLE_TX_ABI
        )

    # Balances and prices

    def get_l1_eth_balance(self) -> int:
        return self.l1_w3.eth.get_balance(self.address)

    def get_l2_eth_balance(self) -> int:
        return self.l2_w3.eth.get_balance(self.address)

    def get_l2_gas_price(self) -> int:
        return self.l2_w3.eth.gas_price

    def get_txn_submission_price(self, calldata_size: int) -> Tuple[int, int]:
        """Current retryable submission price and the time it next updates"""
        price, next_update_timestamp = self.arb_retryable_tx.functions.getSubmissionPrice(
            calldata_size
        ).call()
        return price, next_update_timestamp

    # Transactions

    def send_l1_transaction(self, func, value: int = 0, gas: int = None):
        return send_transaction(self.l1_w3, self.account, func, value=value, gas=gas)

    def send_l2_transaction(self, func, value: int = 0, gas: int = None):
        return send_transaction(self.l2_w3, self.account, func, value=value, gas=gas)

    def deploy_l1(self, name: str, *args):
        return deploy_contract(self.l1_w3, self.account, name, *args)

    def deploy_l2(self, name: str, *args):
        return deploy_contract(self.l2_w3, self.account, name, *args)

    def deposit_eth(self, amount: int, max_submission_cost: Optional[int] = None):
        """Deposit `amount` wei to the wallet's L2 address through the Inbox"""
        if max_submission_cost is None:
            base_price, _ = self.get_txn_submission_price(0)
            max_submission_cost = percent_increase(base_price, DEFAULT_SUBMISSION_PERCENT_INCREASE)

        return self.send_l1_transaction(
            self.inbox.functions.depositEth(max_submission_cost), value=amount
        )

    def withdraw_eth(self, amount: int, destination: Optional[str] = None):
        """Start a withdrawal of `amount` wei from L2; claimable on L1 after the dispute window"""
        destination = Web3.to_checksum_address(destination or self.address)
        return self.send_l2_transaction(
            self.arb_sys.functions.withdrawEth(destination), value=amount
        )

    # Message tracking

    def _chain_id_or_default(self, l2_chain_id: Optional[int]) -> int:
        return l2_chain_id if l2_chain_id is not None else self.l2_chain_id

    def get_inbox_seq_nums(self, receipt) -> Optional[List[int]]:
        if not self.inbox_address:
            raise ValueError("INBOX_ADDR not set")
        return get_inbox_seq_nums(self.l1_w3, receipt, self.inbox_address)

    def calculate_l2_transaction_hash(self, seq_num: int, l2_chain_id: int = None) -> str:
        return calculate_l2_transaction_hash(seq_num, self._chain_id_or_default(l2_chain_id))

    def calculate_l2_retryable_transaction_hash(self, seq_num: int, l2_chain_id: int = None) -> str:
        return calculate_l2_retryable_transaction_hash(seq_num, self._chain_id_or_default(l2_chain_id))

    def calculate_retryable_auto_redeem_hash(self, seq_num: int, l2_chain_id: int = None) -> str:
        return calculate_retryable_auto_redeem_hash(seq_num, self._chain_id_or_default(l2_chain_id))

    def wait_for_l2_transaction(self, tx_hash: str, timeout: float = 120, poll_latency: float = 5):
        """Block until `tx_hash` is mined on L2; raises TimeExhausted on timeout"""
        return self.l2_w3.eth.wait_for_transaction_receipt(
            tx_hash, timeout=timeout, poll_latency=poll_latency
        )

    def get_withdrawals_in_l2_transaction(self, receipt) -> List[dict]:
        return get_withdrawals_in_l2_transaction(self.l2_w3, receipt, self.arb_sys_address)
