"""Entry point helpers shared by the scripts"""

import os
import sys
import argparse
import traceback
from decimal import Decimal
from typing import Callable, List, Optional

from web3 import Web3


def build_parser(description: str, default_amount: Optional[str] = None) -> argparse.ArgumentParser:
    """Argument parser with the network positional and an optional --amount in ether"""
    parser = argparse.ArgumentParser(
        description=description, formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument("network", nargs="?", default=None,
                        help="Network preset from arbdemo/data/networks.json")
    if default_amount is not None:
        parser.add_argument("--amount", default=default_amount,
                            help=f"Amount in ether (default: {default_amount})")
    return parser


def parse_ether(amount: str) -> int:
    """Convert a decimal ether string to wei"""
    return Web3.to_wei(Decimal(amount), 'ether')


def run(main: Callable, argv: Optional[List[str]] = None) -> int:
    """
    Run a script's main function and map the outcome to an exit status.

    Any exception is reported on stderr and yields 1. A SystemExit raised by
    the script itself passes through untouched.
    """
    try:
        main(argv)
    except Exception as e:
        if os.environ.get('DEBUG') == '1':
            traceback.print_exc()
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1
    return 0
