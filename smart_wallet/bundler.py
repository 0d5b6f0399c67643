"""
Pimlico bundler and paymaster JSON-RPC integration for smart accounts
"""

import logging
from typing import Any, Dict, List, Optional

import requests
from hexbytes import HexBytes

from smart_wallet.config import SmartAccountConfig
from smart_wallet.exceptions import BundlerError
from smart_wallet.user_operations import UserOperation

logger = logging.getLogger(__name__)


def _to_hex_bytes(value: bytes) -> str:
    return "0x" + bytes(HexBytes(value)).hex() if value else "0x"


def convert_user_operation_to_rpc_format(user_op: UserOperation) -> Dict[str, str]:
    """Convert a UserOperation to the bundler JSON-RPC format (EntryPoint v0.6)"""
    return {
        "sender": user_op.sender,
        "nonce": hex(user_op.nonce),
        "initCode": _to_hex_bytes(user_op.init_code),
        "callData": _to_hex_bytes(user_op.call_data),
        "callGasLimit": hex(user_op.call_gas_limit),
        "verificationGasLimit": hex(user_op.verification_gas_limit),
        "preVerificationGas": hex(user_op.pre_verification_gas),
        "maxFeePerGas": hex(user_op.max_fee_per_gas),
        "maxPriorityFeePerGas": hex(user_op.max_priority_fee_per_gas),
        "paymasterAndData": _to_hex_bytes(user_op.paymaster_and_data),
        "signature": _to_hex_bytes(user_op.signature),
    }


class BundlerClient:
    """Client for interacting with ERC-4337 bundlers and paymasters (Pimlico)"""

    def __init__(self, config: SmartAccountConfig):
        self.config = config

    def estimate_user_operation_gas(self, user_operation: UserOperation) -> Dict:
        """Estimate gas limits for a UserOperation"""
        user_op_dict = convert_user_operation_to_rpc_format(user_operation)
        return self._make_bundler_request(
            "eth_estimateUserOperationGas", [user_op_dict, self.config.entry_point_address]
        )

    def get_user_operation_gas_price(self) -> Dict:
        """Get current gas prices from Pimlico"""
        return self._make_bundler_request("pimlico_getUserOperationGasPrice", [])

    def sponsor_user_operation(self, user_operation: UserOperation,
                               sponsorship_policy_id: Optional[str] = None) -> Dict:
        """Ask the paymaster to sponsor a UserOperation"""
        user_op_dict = convert_user_operation_to_rpc_format(user_operation)
        params = [user_op_dict, self.config.entry_point_address]
        if sponsorship_policy_id:
            params.append({"sponsorshipPolicyId": sponsorship_policy_id})

        logger.info(f"Requesting sponsorship for {user_operation.sender}")
        return self._make_bundler_request("pm_sponsorUserOperation", params)

    def supported_entry_points(self) -> List[str]:
        return self._make_bundler_request("eth_supportedEntryPoints", [])

    def _make_bundler_request(self, method: str, params: List) -> Any:
        """Make JSON-RPC request to bundler"""
        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params,
            "id": 1
        }

        try:
            response = requests.post(
                self.config.bundler_url,
                json=payload,
                headers={'Content-Type': 'application/json'},
                timeout=self.config.request_timeout
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Bundler request {method} failed: {e}")
            raise BundlerError(f"{method} request failed: {e}") from e

        try:
            result = response.json()
        except ValueError as e:
            logger.error(f"Bundler returned invalid JSON for {method}: {e}")
            raise BundlerError(f"{method} returned invalid JSON") from e
        if not isinstance(result, dict):
            raise BundlerError(f"{method} returned a non-object response")

        if 'error' in result:
            error = result['error']
            message = error.get('message', 'Unknown error')
            logger.error(f"Bundler error on {method}: {message}")
            raise BundlerError(f"{method} failed: {message}", code=error.get('code'))
        if 'result' not in result:
            raise BundlerError(f"{method} returned no result")

        return result['result']
