"""
UserOperation data model and call data helpers for smart accounts
"""

import logging
from dataclasses import dataclass
from typing import Optional

from eth_abi import encode
from web3 import Web3

logger = logging.getLogger(__name__)

# Function selector for execute(address,uint256,bytes)
EXECUTE_SELECTOR = Web3.keccak(text="execute(address,uint256,bytes)")[:4]


@dataclass
class UserOperation:
    """Fully resolved EntryPoint v0.6 UserOperation"""
    sender: str
    nonce: int
    init_code: bytes
    call_data: bytes
    call_gas_limit: int
    verification_gas_limit: int
    pre_verification_gas: int
    max_fee_per_gas: int
    max_priority_fee_per_gas: int
    paymaster_and_data: bytes
    signature: bytes


@dataclass
class PartialUserOperation:
    """UserOperation request where every field but call_data may be left unset.

    A field is considered missing only when it is None; zero and empty byte
    strings are kept as given.
    """
    call_data: bytes
    sender: Optional[str] = None
    nonce: Optional[int] = None
    init_code: Optional[bytes] = None
    call_gas_limit: Optional[int] = None
    verification_gas_limit: Optional[int] = None
    pre_verification_gas: Optional[int] = None
    max_fee_per_gas: Optional[int] = None
    max_priority_fee_per_gas: Optional[int] = None
    paymaster_and_data: Optional[bytes] = None
    signature: Optional[bytes] = None


def encode_execute_call_data(to_address: str, value_wei: int, data: bytes = b'') -> bytes:
    """Encode a SimpleAccount execute(address,uint256,bytes) call"""
    encoded_params = encode(
        ['address', 'uint256', 'bytes'],
        [Web3.to_checksum_address(to_address), value_wei, data]
    )
    logger.debug(f"Encoded execute call: {value_wei} wei to {to_address}")
    return EXECUTE_SELECTOR + encoded_params
