"""
Contract compilation and transaction helpers

Contracts are Vyper sources shipped under arbdemo/data/contracts/, compiled on demand.
"""

from functools import lru_cache
from pathlib import Path
from typing import Tuple, Union

from eth_account.signers.local import LocalAccount
from vyper import compile_code
from web3 import Web3

from .errors import TransactionReverted

CONTRACTS_DIR = Path(__file__).resolve().parent / "data" / "contracts"

# Arbitrum rewrites the sender of an L1-to-L2 message from a contract to this offset alias
L1_TO_L2_ALIAS_OFFSET = 0x1111000000000000000000000000000000001111

ADDRESS_SPACE = 2 ** 160

Account = Union[LocalAccount, str]


@lru_cache(maxsize=None)
def _compile_source(source_code: str) -> Tuple[str, tuple]:
    compiled = compile_code(source_code, output_formats=['bytecode', 'abi'])
    return compiled['bytecode'], tuple(compiled['abi'])


def compile_contract(name: str, contracts_dir: Path = CONTRACTS_DIR) -> Tuple[str, list]:
    """Compile contracts/<name>.vy and return (bytecode, abi)"""
    contract_path = Path(contracts_dir) / f"{name}.vy"
    if not contract_path.exists():
        raise FileNotFoundError(f"Contract not found: {contract_path}")

    with open(contract_path, 'r') as f:
        source_code = f.read()

    bytecode, abi = _compile_source(source_code)
    return bytecode, list(abi)


def apply_l1_to_l2_alias(l1_address: str) -> str:
    """Address an L1 contract appears as when its message executes on L2"""
    value = (int(l1_address, 16) + L1_TO_L2_ALIAS_OFFSET) % ADDRESS_SPACE
    return Web3.to_checksum_address(value.to_bytes(20, 'big'))


def undo_l1_to_l2_alias(l2_address: str) -> str:
    value = (int(l2_address, 16) - L1_TO_L2_ALIAS_OFFSET) % ADDRESS_SPACE
    return Web3.to_checksum_address(value.to_bytes(20, 'big'))


def account_address(account: Account) -> str:
    if isinstance(account, str):
        return Web3.to_checksum_address(account)
    return account.address


def send_transaction(w3: Web3, account: Account, func, value: int = 0, gas: int = None):
    """
    Send a contract function call (or constructor) and wait for its receipt.

    A LocalAccount signs locally; a plain address is treated as an unlocked
    node account.
    """
    params = {'from': account_address(account)}
    if value:
        params['value'] = value
    if gas is not None:
        params['gas'] = gas

    if isinstance(account, str):
        tx_hash = func.transact(params)
    else:
        params['nonce'] = w3.eth.get_transaction_count(account.address)
        tx = func.build_transaction(params)
        signed = account.sign_transaction(tx)
        tx_hash = w3.eth.send_raw_transaction(signed.raw_transaction)

    receipt = w3.eth.wait_for_transaction_receipt(tx_hash)
    if receipt.status != 1:
        raise TransactionReverted(receipt)
    return receipt


def deploy_contract(w3: Web3, account: Account, name: str, *args,
                    contracts_dir: Path = CONTRACTS_DIR):
    """Compile and deploy a contract, returning the bound instance"""
    bytecode, abi = compile_contract(name, contracts_dir)
    factory = w3.eth.contract(abi=abi, bytecode=bytecode)
    receipt = send_transaction(w3, account, factory.constructor(*args))
    return w3.eth.contract(address=receipt.contractAddress, abi=abi)
