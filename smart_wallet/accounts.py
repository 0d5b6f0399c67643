"""
Smart account implementations that resolve UserOperation defaults
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from eth_abi import encode
from hexbytes import HexBytes
from web3 import AsyncWeb3, Web3

from smart_wallet.exceptions import SmartAccountError

logger = logging.getLogger(__name__)

GET_NONCE_ABI = [{
    "inputs": [{"name": "sender", "type": "address"}, {"name": "key", "type": "uint192"}],
    "name": "getNonce",
    "outputs": [{"name": "", "type": "uint256"}],
    "stateMutability": "view",
    "type": "function"
}]

# Function selector for createAccount(address,uint256) on SimpleAccountFactory
CREATE_ACCOUNT_SELECTOR = Web3.keccak(text="createAccount(address,uint256)")[:4]

# Placeholder ECDSA signature with the right length for gas estimation
DUMMY_ECDSA_SIGNATURE = HexBytes(
    "0xfffffffffffffffffffffffffffffff0000000000000000000000000000000007"
    "aaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaa1c"
)


class SmartAccount(ABC):
    """Capabilities a smart account exposes while a UserOperation is prepared"""

    @property
    @abstractmethod
    def address(self) -> str:
        ...

    @property
    @abstractmethod
    def client(self) -> AsyncWeb3:
        """Network client used for fee estimation"""

    @abstractmethod
    async def get_nonce(self) -> int:
        ...

    @abstractmethod
    async def get_init_code(self) -> bytes:
        ...

    @abstractmethod
    async def get_dummy_signature(self) -> bytes:
        ...


class SimpleSmartAccount(SmartAccount):
    """eth-infinitism SimpleAccount deployed through SimpleAccountFactory"""

    def __init__(
        self,
        client: AsyncWeb3,
        address: str,
        entry_point_address: str,
        factory_address: Optional[str] = None,
        owner_address: Optional[str] = None,
        index: int = 0,
    ):
        self._client = client
        self._address = Web3.to_checksum_address(address)
        self.entry_point_address = Web3.to_checksum_address(entry_point_address)
        self.factory_address = Web3.to_checksum_address(factory_address) if factory_address else None
        self.owner_address = Web3.to_checksum_address(owner_address) if owner_address else None
        self.index = index

    @property
    def address(self) -> str:
        return self._address

    @property
    def client(self) -> AsyncWeb3:
        return self._client

    async def get_nonce(self) -> int:
        """Get current nonce for smart account from EntryPoint"""
        entry_point_contract = self._client.eth.contract(
            address=self.entry_point_address,
            abi=GET_NONCE_ABI
        )

        nonce = await entry_point_contract.functions.getNonce(
            self._address,
            0  # Default key
        ).call()

        logger.info(f"Current nonce for {self._address}: {nonce}")
        return nonce

    async def get_init_code(self) -> bytes:
        """Factory call that deploys the account, empty once it is deployed"""
        code = await self._client.eth.get_code(self._address)
        if len(code):
            return b''

        if not self.factory_address or not self.owner_address:
            raise SmartAccountError(
                f"Account {self._address} is not deployed and no factory or owner is configured"
            )

        logger.info(f"Account {self._address} not deployed, using factory {self.factory_address}")
        create_account_call = CREATE_ACCOUNT_SELECTOR + encode(
            ['address', 'uint256'], [self.owner_address, self.index]
        )
        return bytes(HexBytes(self.factory_address)) + create_account_call

    async def get_dummy_signature(self) -> bytes:
        return bytes(DUMMY_ECDSA_SIGNATURE)
