"""
Sponsorship resolution: paymaster data and gas limits for a draft UserOperation
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Dict, Optional, Protocol

from hexbytes import HexBytes

from smart_wallet.accounts import SmartAccount
from smart_wallet.bundler import BundlerClient
from smart_wallet.exceptions import BundlerError
from smart_wallet.user_operations import UserOperation

logger = logging.getLogger(__name__)


@dataclass
class SponsorUserOperationResult:
    """Gas payment fields returned by a sponsor"""
    paymaster_and_data: bytes
    call_gas_limit: int
    verification_gas_limit: int
    pre_verification_gas: int

    @classmethod
    def from_rpc(cls, result: Dict) -> "SponsorUserOperationResult":
        if not isinstance(result, dict):
            raise BundlerError(f"Invalid sponsorship response: {result}")
        try:
            return cls(
                paymaster_and_data=bytes(HexBytes(result.get('paymasterAndData') or '0x')),
                call_gas_limit=int(result['callGasLimit'], 16),
                verification_gas_limit=int(result['verificationGasLimit'], 16),
                pre_verification_gas=int(result['preVerificationGas'], 16),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise BundlerError(f"Invalid sponsorship response: {result}") from e


class SponsorResolver(Protocol):
    async def sponsor_user_operation(
        self, user_operation: UserOperation, account: SmartAccount
    ) -> SponsorUserOperationResult:
        ...


class PimlicoSponsor:
    """Sponsors UserOperations through Pimlico's pm_sponsorUserOperation"""

    def __init__(self, bundler_client: BundlerClient, sponsorship_policy_id: Optional[str] = None):
        self.bundler_client = bundler_client
        self.sponsorship_policy_id = sponsorship_policy_id

    async def sponsor_user_operation(
        self, user_operation: UserOperation, account: SmartAccount
    ) -> SponsorUserOperationResult:
        result = await asyncio.to_thread(
            self.bundler_client.sponsor_user_operation,
            user_operation,
            self.sponsorship_policy_id,
        )
        sponsored = SponsorUserOperationResult.from_rpc(result)
        logger.info(f"Paymaster sponsored UserOperation for {account.address}")
        return sponsored


class SelfFundedSponsor:
    """No paymaster: the account pays for its own gas.

    Gas limits come from the bundler's eth_estimateUserOperationGas and the
    verification limit is scaled by ``verification_gas_buffer``.
    """

    def __init__(self, bundler_client: BundlerClient, verification_gas_buffer: float = 1.0):
        self.bundler_client = bundler_client
        self.verification_gas_buffer = verification_gas_buffer

    async def sponsor_user_operation(
        self, user_operation: UserOperation, account: SmartAccount
    ) -> SponsorUserOperationResult:
        gas_estimates = await asyncio.to_thread(
            self.bundler_client.estimate_user_operation_gas, user_operation
        )
        estimated = SponsorUserOperationResult.from_rpc(gas_estimates)
        # Estimates are for an operation without a paymaster
        estimated.paymaster_and_data = b''
        estimated.verification_gas_limit = int(estimated.verification_gas_limit * self.verification_gas_buffer)

        logger.info(f"Estimated gas for {account.address}: call={estimated.call_gas_limit} "
                    f"verification={estimated.verification_gas_limit} "
                    f"pre_verification={estimated.pre_verification_gas}")
        return estimated
