"""
Gas fee estimation for UserOperations
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol

from web3 import AsyncWeb3

from smart_wallet.bundler import BundlerClient
from smart_wallet.config import DEFAULT_BASE_FEE_PERCENT
from smart_wallet.exceptions import FeeEstimationError

logger = logging.getLogger(__name__)


@dataclass
class FeesPerGas:
    max_fee_per_gas: int
    max_priority_fee_per_gas: int


class FeeEstimator(Protocol):
    async def estimate_fees_per_gas(self, client: AsyncWeb3) -> FeesPerGas:
        ...


class Web3FeeEstimator:
    """EIP-1559 fee estimation from the latest block.

    The max fee is the base fee padded by ``base_fee_percent`` (rounded up)
    plus the node's suggested priority fee.
    """

    def __init__(self, base_fee_percent: int = DEFAULT_BASE_FEE_PERCENT):
        if base_fee_percent < 100:
            raise ValueError("base_fee_percent must be at least 100")
        self.base_fee_percent = base_fee_percent

    async def estimate_fees_per_gas(self, client: AsyncWeb3) -> FeesPerGas:
        latest_block = await client.eth.get_block("latest")
        if "baseFeePerGas" not in latest_block:
            raise FeeEstimationError("Chain does not support EIP-1559 fees")

        base_fee = latest_block["baseFeePerGas"]
        max_priority_fee_per_gas = await client.eth.max_priority_fee
        padded_base_fee = -(-base_fee * self.base_fee_percent // 100)

        fees = FeesPerGas(
            max_fee_per_gas=padded_base_fee + max_priority_fee_per_gas,
            max_priority_fee_per_gas=max_priority_fee_per_gas,
        )
        logger.info(f"Estimated fees: base={base_fee} max={fees.max_fee_per_gas} "
                    f"priority={fees.max_priority_fee_per_gas}")
        return fees


class PimlicoFeeEstimator:
    """Fees from the bundler's pimlico_getUserOperationGasPrice tiers"""

    def __init__(self, bundler_client: BundlerClient, speed: str = "fast"):
        self.bundler_client = bundler_client
        self.speed = speed

    async def estimate_fees_per_gas(self, client: AsyncWeb3) -> FeesPerGas:
        gas_prices = await asyncio.to_thread(self.bundler_client.get_user_operation_gas_price)
        if not gas_prices or self.speed not in gas_prices:
            raise FeeEstimationError(f"Bundler returned no '{self.speed}' gas price tier")

        tier = gas_prices[self.speed]
        try:
            return FeesPerGas(
                max_fee_per_gas=int(tier['maxFeePerGas'], 16),
                max_priority_fee_per_gas=int(tier['maxPriorityFeePerGas'], 16),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise FeeEstimationError(f"Invalid gas price tier from bundler: {tier}") from e
