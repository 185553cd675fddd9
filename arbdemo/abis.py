"""Minimal ABIs for the Arbitrum system contracts the demos touch"""

# Precompiles live at the same address on every Arbitrum chain
ARB_SYS_ADDRESS = "0x0000000000000000000000000000000000000064"
ARB_RETRYABLE_TX_ADDRESS = "0x000000000000000000000000000000000000006E"


def _event_input(name, abi_type, indexed=False):
    return {'name': name, 'type': abi_type, 'indexed': indexed}


def _input(name, abi_type):
    return {'name': name, 'type': abi_type}


INBOX_ABI = [
    {
        'type': 'function',
        'name': 'depositEth',
        'stateMutability': 'payable',
        'inputs': [_input('maxSubmissionCost', 'uint256')],
        'outputs': [_input('', 'uint256')],
    },
    {
        'type': 'function',
        'name': 'createRetryableTicket',
        'stateMutability': 'payable',
        'inputs': [
            _input('destAddr', 'address'),
            _input('l2CallValue', 'uint256'),
            _input('maxSubmissionCost', 'uint256'),
            _input('excessFeeRefundAddress', 'address'),
            _input('callValueRefundAddress', 'address'),
            _input('maxGas', 'uint256'),
            _input('gasPriceBid', 'uint256'),
            _input('data', 'bytes'),
        ],
        'outputs': [_input('', 'uint256')],
    },
    {
        'type': 'event',
        'name': 'InboxMessageDelivered',
        'anonymous': False,
        'inputs': [
            _event_input('messageNum', 'uint256', indexed=True),
            _event_input('data', 'bytes'),
        ],
    },
    {
        'type': 'event',
        'name': 'InboxMessageDeliveredFromOrigin',
        'anonymous': False,
        'inputs': [_event_input('messageNum', 'uint256', indexed=True)],
    },
]

ARB_SYS_ABI = [
    {
        'type': 'function',
        'name': 'withdrawEth',
        'stateMutability': 'payable',
        'inputs': [_input('destination', 'address')],
        'outputs': [_input('', 'uint256')],
    },
    {
        'type': 'function',
        'name': 'sendTxToL1',
        'stateMutability': 'payable',
        'inputs': [_input('destination', 'address'), _input('calldataForL1', 'bytes')],
        'outputs': [_input('', 'uint256')],
    },
    {
        'type': 'event',
        'name': 'L2ToL1Transaction',
        'anonymous': False,
        'inputs': [
            _event_input('caller', 'address'),
            _event_input('destination', 'address', indexed=True),
            _event_input('uniqueId', 'uint256', indexed=True),
            _event_input('batchNumber', 'uint256', indexed=True),
            _event_input('indexInBatch', 'uint256'),
            _event_input('arbBlockNum', 'uint256'),
            _event_input('ethBlockNum', 'uint256'),
            _event_input('timestamp', 'uint256'),
            _event_input('callvalue', 'uint256'),
            _event_input('data', 'bytes'),
        ],
    },
]

ARB_RETRYABLE_TX_ABI = [
    {
        'type': 'function',
        'name': 'getSubmissionPrice',
        'stateMutability': 'view',
        'inputs': [_input('calldataSize', 'uint256')],
        'outputs': [_input('', 'uint256'), _input('', 'uint256')],
    },
]
