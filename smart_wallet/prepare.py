"""
Fill in the missing fields of a UserOperation request
"""

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Optional

from smart_wallet.accounts import SmartAccount
from smart_wallet.exceptions import AccountNotFoundError, MissingCallDataError
from smart_wallet.user_operations import PartialUserOperation, UserOperation

if TYPE_CHECKING:
    from smart_wallet.smart_account import SmartAccountClient

logger = logging.getLogger(__name__)


async def _given(value: Any) -> Any:
    return value


async def prepare_user_operation_request(
    client: "SmartAccountClient",
    user_operation: PartialUserOperation,
    account: Optional[SmartAccount] = None,
) -> UserOperation:
    """Resolve a partial request into a complete, sponsored UserOperation.

    ``client`` supplies the default ``account``, the ``fee_estimator`` and the
    ``sponsor``. Caller values win over account lookups and fee estimates,
    which win over zero. Paymaster data and gas limits always come from the
    sponsor. Collaborator errors propagate unchanged.
    """
    if account is None:
        account = client.account
    if account is None:
        raise AccountNotFoundError()
    if user_operation.call_data is None:
        raise MissingCallDataError()

    needs_fee_estimate = user_operation.max_fee_per_gas is None or user_operation.max_priority_fee_per_gas is None

    sender, nonce, init_code, signature, fees = await asyncio.gather(
        _given(user_operation.sender if user_operation.sender is not None else account.address),
        _given(user_operation.nonce) if user_operation.nonce is not None else account.get_nonce(),
        _given(user_operation.init_code) if user_operation.init_code is not None else account.get_init_code(),
        _given(user_operation.signature) if user_operation.signature is not None else account.get_dummy_signature(),
        client.fee_estimator.estimate_fees_per_gas(account.client) if needs_fee_estimate else _given(None),
    )

    draft = UserOperation(
        sender=sender,
        nonce=nonce,
        init_code=init_code,
        call_data=user_operation.call_data,
        call_gas_limit=_first_set(user_operation.call_gas_limit),
        verification_gas_limit=_first_set(user_operation.verification_gas_limit),
        pre_verification_gas=_first_set(user_operation.pre_verification_gas),
        max_fee_per_gas=_first_set(user_operation.max_fee_per_gas, fees.max_fee_per_gas if fees else None),
        max_priority_fee_per_gas=_first_set(user_operation.max_priority_fee_per_gas,
                                            fees.max_priority_fee_per_gas if fees else None),
        paymaster_and_data=b'',
        signature=signature,
    )
    logger.info(f"Draft UserOperation for {sender} with nonce {nonce}")

    sponsored = await client.sponsor.sponsor_user_operation(draft, account)

    draft.paymaster_and_data = sponsored.paymaster_and_data
    draft.call_gas_limit = sponsored.call_gas_limit
    draft.verification_gas_limit = sponsored.verification_gas_limit
    draft.pre_verification_gas = sponsored.pre_verification_gas

    return draft


def _first_set(*values: Optional[int]) -> int:
    for value in values:
        if value is not None:
            return value
    return 0
