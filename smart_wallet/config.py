"""
Configuration for smart account UserOperation preparation
"""

import os
from dataclasses import dataclass
from typing import Optional

# Network constants
ENTRYPOINT_V06 = "0x5FF137D4b0FDCD49DcA30c7CF57E578a026d2789"
SIMPLE_ACCOUNT_FACTORY_V06 = "0x9406Cc6185a346906296840746125a0E44976454"

# Fee estimation defaults
DEFAULT_BASE_FEE_PERCENT = 120


@dataclass(eq=False)
class SmartAccountConfig:
    """Configuration for smart account operations"""

    def __init__(
        self,
        rpc_url: Optional[str] = None,
        chain_id: Optional[int] = None,
        entry_point_address: Optional[str] = None,
        bundler_url: Optional[str] = None,
        sponsorship_policy_id: Optional[str] = None,
        sponsorship_enabled: Optional[bool] = None,
        base_fee_percent: int = DEFAULT_BASE_FEE_PERCENT,
        verification_gas_buffer: float = 1.0,
        request_timeout: int = 30,
    ):
        # Network configuration
        self.rpc_url = rpc_url or os.environ.get('RPC_URL', 'https://sepolia.base.org')
        self.chain_id = chain_id if chain_id is not None else int(os.environ.get('CHAIN_ID', 84532))
        self.entry_point_address = entry_point_address or os.environ.get('ENTRY_POINT_ADDRESS', ENTRYPOINT_V06)

        # Bundler / paymaster configuration
        self.bundler_url = bundler_url or os.environ.get('BUNDLER_URL') or self._pimlico_url()
        if not self.bundler_url:
            raise ValueError("BUNDLER_URL or PIMLICO_API_KEY environment variable is required")

        self.sponsorship_policy_id = sponsorship_policy_id or os.environ.get('SPONSORSHIP_POLICY_ID')
        if sponsorship_enabled is None:
            sponsorship_enabled = os.environ.get('SPONSORSHIP_ENABLED', 'true').lower() in ('1', 'true', 'yes')
        self.sponsorship_enabled = sponsorship_enabled

        # Gas settings
        self.base_fee_percent = base_fee_percent
        self.verification_gas_buffer = verification_gas_buffer
        self.request_timeout = request_timeout

    def _pimlico_url(self) -> Optional[str]:
        pimlico_api_key = os.environ.get('PIMLICO_API_KEY')
        if not pimlico_api_key:
            return None
        network = os.environ.get('PIMLICO_NETWORK', 'base-sepolia')
        return f"https://api.pimlico.io/v1/{network}/rpc?apikey={pimlico_api_key}"
