"""
Smart account client: default account plus fee and sponsorship services
"""

import logging
from typing import Optional

from web3 import AsyncWeb3

from smart_wallet.accounts import SimpleSmartAccount, SmartAccount
from smart_wallet.bundler import BundlerClient
from smart_wallet.config import SmartAccountConfig
from smart_wallet.fees import FeeEstimator, Web3FeeEstimator
from smart_wallet.prepare import prepare_user_operation_request
from smart_wallet.sponsor import PimlicoSponsor, SelfFundedSponsor, SponsorResolver
from smart_wallet.user_operations import PartialUserOperation, UserOperation

logger = logging.getLogger(__name__)


class SmartAccountClient:
    """Context for preparing UserOperations on behalf of smart accounts"""

    def __init__(
        self,
        config: SmartAccountConfig,
        account: Optional[SmartAccount] = None,
        fee_estimator: Optional[FeeEstimator] = None,
        sponsor: Optional[SponsorResolver] = None,
    ):
        self.config = config
        self.account = account
        self.bundler_client = BundlerClient(config)
        self.fee_estimator = fee_estimator or Web3FeeEstimator(config.base_fee_percent)
        self.sponsor = sponsor or self._default_sponsor()

        logger.info(f"Smart account client initialized for "
                    f"{account.address if account else 'no default account'}")

    async def prepare_user_operation_request(
        self,
        user_operation: PartialUserOperation,
        account: Optional[SmartAccount] = None,
    ) -> UserOperation:
        """Fill in every missing field of ``user_operation``"""
        return await prepare_user_operation_request(self, user_operation, account=account)

    def _default_sponsor(self) -> SponsorResolver:
        if self.config.sponsorship_enabled:
            return PimlicoSponsor(self.bundler_client, self.config.sponsorship_policy_id)
        return SelfFundedSponsor(self.bundler_client, self.config.verification_gas_buffer)


def create_simple_smart_account(
    config: SmartAccountConfig,
    address: str,
    factory_address: Optional[str] = None,
    owner_address: Optional[str] = None,
    index: int = 0,
) -> SimpleSmartAccount:
    """Create a SimpleAccount bound to the configured network"""
    web3 = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(config.rpc_url))
    return SimpleSmartAccount(
        client=web3,
        address=address,
        entry_point_address=config.entry_point_address,
        factory_address=factory_address,
        owner_address=owner_address,
        index=index,
    )


def create_smart_account_client(account: Optional[SmartAccount] = None) -> SmartAccountClient:
    """Create a smart account client with default configuration"""
    return SmartAccountClient(SmartAccountConfig(), account=account)
