"""
Shared pytest fixtures for the bridge demos.

Provides an in-memory chain standing in for both L1 and L2, the mock Arbitrum
system contracts, deployed greeters, and doubles for script-level tests.
"""

import os
from pathlib import Path

import pytest
from eth_tester import EthereumTester, PyEVMBackend
from hexbytes import HexBytes
from web3 import Web3
from web3.datastructures import AttributeDict

from arbdemo.bridge import Bridge
from arbdemo.config import NetworkConfig
from arbdemo.contracts import deploy_contract, undo_l1_to_l2_alias

MOCKS_DIR = Path(__file__).parent / "contracts"

ZERO_ADDRESS = "0x" + "0" * 40

# Quote returned by MockArbRetryableTx: BASE_PRICE + calldataSize * PRICE_PER_BYTE
BASE_PRICE = 100000
PRICE_PER_BYTE = 1000


@pytest.fixture
def eth_tester():
    """Create a fresh EthereumTester for each test"""
    return EthereumTester(backend=PyEVMBackend())


@pytest.fixture
def w3(eth_tester):
    """Create Web3 instance connected to EthereumTester"""
    from web3.providers.eth_tester import EthereumTesterProvider
    return Web3(EthereumTesterProvider(eth_tester))


@pytest.fixture
def accounts(w3):
    """Get test accounts from Web3"""
    return w3.eth.accounts


@pytest.fixture
def owner(accounts):
    """Wallet used by the bridge (deployer)"""
    return accounts[0]


@pytest.fixture
def relayer(accounts):
    """Account standing in for GreeterL1's aliased sender on L2"""
    return accounts[1]


@pytest.fixture
def unauthorized_user(accounts):
    return accounts[2]


@pytest.fixture
def mock_inbox(w3, owner):
    return deploy_contract(w3, owner, "MockInbox", contracts_dir=MOCKS_DIR)


@pytest.fixture
def mock_arb_sys(w3, owner):
    return deploy_contract(w3, owner, "MockArbSys", contracts_dir=MOCKS_DIR)


@pytest.fixture
def mock_retryable_tx(w3, owner):
    return deploy_contract(
        w3, owner, "MockArbRetryableTx", BASE_PRICE, PRICE_PER_BYTE, contracts_dir=MOCKS_DIR
    )


@pytest.fixture
def bridge(w3, owner, mock_inbox, mock_arb_sys, mock_retryable_tx):
    """Bridge whose L1 and L2 are the same in-memory chain"""
    return Bridge(
        w3, w3, owner,
        inbox_address=mock_inbox.address,
        arb_sys_address=mock_arb_sys.address,
        arb_retryable_tx_address=mock_retryable_tx.address,
    )


@pytest.fixture
def l2_greeter(w3, owner, relayer):
    """GreeterL2 whose L1 target aliases to the relayer account"""
    return deploy_contract(w3, owner, "GreeterL2", "Hello world in L2", undo_l1_to_l2_alias(relayer))


@pytest.fixture
def l1_greeter(w3, owner, mock_inbox, l2_greeter):
    return deploy_contract(w3, owner, "GreeterL1", "Hello world in L1", l2_greeter.address, mock_inbox.address)


# Script-level doubles

def _make_receipt(tx_hash: str = "0x" + "ab" * 32, status: int = 1) -> AttributeDict:
    return AttributeDict({'transactionHash': HexBytes(tx_hash), 'status': status, 'logs': []})


@pytest.fixture
def make_receipt():
    """Factory for minimal receipts with the fields the scripts read"""
    return _make_receipt


@pytest.fixture
def network_config():
    return NetworkConfig(
        name="test",
        l1_rpc="http://127.0.0.1:8545",
        l2_rpc="http://127.0.0.1:8547",
        private_key="0x" + os.urandom(32).hex(),
        inbox_address="0x" + "12" * 20,
        l2_tx_timeout=720,
    )
