"""
Smart account UserOperation preparation

Fills in the fields a caller leaves out of an ERC-4337 UserOperation using
smart account lookups, network fee estimation and a paymaster, producing a
request ready for signing and submission.
"""

# Main client
from smart_wallet.smart_account import (
    SmartAccountClient,
    create_simple_smart_account,
    create_smart_account_client,
)
from smart_wallet.prepare import prepare_user_operation_request

# Configuration
from smart_wallet.config import SmartAccountConfig

# Individual components for advanced usage
from smart_wallet.accounts import SimpleSmartAccount, SmartAccount
from smart_wallet.bundler import BundlerClient, convert_user_operation_to_rpc_format
from smart_wallet.exceptions import (
    AccountNotFoundError,
    BundlerError,
    FeeEstimationError,
    MissingCallDataError,
    SmartAccountError,
    SmartWalletError,
)
from smart_wallet.fees import FeesPerGas, PimlicoFeeEstimator, Web3FeeEstimator
from smart_wallet.sponsor import PimlicoSponsor, SelfFundedSponsor, SponsorUserOperationResult
from smart_wallet.user_operations import PartialUserOperation, UserOperation, encode_execute_call_data

__version__ = "1.0.0"

__all__ = [
    "SmartAccountClient",
    "create_simple_smart_account",
    "create_smart_account_client",
    "prepare_user_operation_request",
    "SmartAccountConfig",
    "SmartAccount",
    "SimpleSmartAccount",
    "BundlerClient",
    "convert_user_operation_to_rpc_format",
    "FeesPerGas",
    "Web3FeeEstimator",
    "PimlicoFeeEstimator",
    "SponsorUserOperationResult",
    "PimlicoSponsor",
    "SelfFundedSponsor",
    "UserOperation",
    "PartialUserOperation",
    "encode_execute_call_data",
    "SmartWalletError",
    "AccountNotFoundError",
    "MissingCallDataError",
    "SmartAccountError",
    "FeeEstimationError",
    "BundlerError",
]
