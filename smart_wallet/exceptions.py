"""
Errors raised while preparing UserOperations
"""

from typing import Optional


class SmartWalletError(Exception):
    """Base class for smart wallet errors"""


class AccountNotFoundError(SmartWalletError):
    """No smart account was passed and the client has no default account"""

    def __init__(self, message: str = "Could not find an account. Pass an account or attach one to the client."):
        super().__init__(message)


class MissingCallDataError(SmartWalletError, ValueError):
    """The UserOperation request has no call data"""

    def __init__(self, message: str = "call_data is required to prepare a UserOperation"):
        super().__init__(message)


class SmartAccountError(SmartWalletError):
    """The smart account could not resolve one of its fields"""


class FeeEstimationError(SmartWalletError):
    """Gas fees could not be estimated from the network"""


class BundlerError(SmartWalletError):
    """The bundler or paymaster rejected a JSON-RPC request"""

    def __init__(self, message: str, code: Optional[int] = None):
        super().__init__(message)
        self.code = code
