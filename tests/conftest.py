import pytest

from smart_wallet.accounts import SmartAccount
from smart_wallet.config import SmartAccountConfig
from smart_wallet.fees import FeesPerGas
from smart_wallet.sponsor import SponsorUserOperationResult

SENDER = "0x0000000000000000000000000000000000000001"


class StubAccount(SmartAccount):
    def __init__(self, address=SENDER, nonce=5, init_code=b"", dummy_signature=b"\xff",
                 nonce_error=None):
        self._address = address
        self._nonce = nonce
        self._init_code = init_code
        self._dummy_signature = dummy_signature
        self._nonce_error = nonce_error
        self.network_client = object()
        self.calls = []

    @property
    def address(self):
        return self._address

    @property
    def client(self):
        return self.network_client

    async def get_nonce(self):
        self.calls.append("get_nonce")
        if self._nonce_error:
            raise self._nonce_error
        return self._nonce

    async def get_init_code(self):
        self.calls.append("get_init_code")
        return self._init_code

    async def get_dummy_signature(self):
        self.calls.append("get_dummy_signature")
        return self._dummy_signature


class StubFeeEstimator:
    def __init__(self, fees=None, error=None):
        self.fees = fees or FeesPerGas(max_fee_per_gas=30, max_priority_fee_per_gas=3)
        self.error = error
        self.clients = []

    async def estimate_fees_per_gas(self, client):
        self.clients.append(client)
        if self.error:
            raise self.error
        return self.fees


class StubSponsor:
    """Returns a fixed result, or echoes the draft's own fields when result is None"""

    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.drafts = []
        self.accounts = []

    async def sponsor_user_operation(self, user_operation, account):
        self.drafts.append(user_operation)
        self.accounts.append(account)
        if self.error:
            raise self.error
        if self.result is None:
            return SponsorUserOperationResult(
                paymaster_and_data=user_operation.paymaster_and_data,
                call_gas_limit=user_operation.call_gas_limit,
                verification_gas_limit=user_operation.verification_gas_limit,
                pre_verification_gas=user_operation.pre_verification_gas,
            )
        return self.result


class StubClient:
    def __init__(self, account=None, fee_estimator=None, sponsor=None):
        self.account = account
        self.fee_estimator = fee_estimator or StubFeeEstimator()
        self.sponsor = sponsor or StubSponsor()


@pytest.fixture
def account():
    return StubAccount()


@pytest.fixture
def fee_estimator():
    return StubFeeEstimator()


@pytest.fixture
def sponsor():
    return StubSponsor(result=SponsorUserOperationResult(
        paymaster_and_data=bytes.fromhex("cd"),
        call_gas_limit=100,
        verification_gas_limit=200,
        pre_verification_gas=50,
    ))


@pytest.fixture
def client(account, fee_estimator, sponsor):
    return StubClient(account=account, fee_estimator=fee_estimator, sponsor=sponsor)


@pytest.fixture
def config():
    return SmartAccountConfig(
        rpc_url="http://localhost:8545",
        chain_id=84532,
        bundler_url="https://bundler.test/rpc",
        sponsorship_enabled=True,
    )
