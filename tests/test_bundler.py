from unittest.mock import MagicMock, patch

import pytest
import requests

from smart_wallet.bundler import BundlerClient, convert_user_operation_to_rpc_format
from smart_wallet.config import ENTRYPOINT_V06
from smart_wallet.exceptions import BundlerError
from smart_wallet.user_operations import UserOperation


@pytest.fixture
def user_op():
    return UserOperation(
        sender="0x0000000000000000000000000000000000000001",
        nonce=5,
        init_code=b"",
        call_data=bytes.fromhex("ab"),
        call_gas_limit=0,
        verification_gas_limit=0,
        pre_verification_gas=0,
        max_fee_per_gas=10,
        max_priority_fee_per_gas=1,
        paymaster_and_data=b"",
        signature=bytes.fromhex("ff"),
    )


def rpc_response(body, status_code=200):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = body
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Error")
    return response


def test_converts_user_op_to_rpc_format(user_op):
    assert convert_user_operation_to_rpc_format(user_op) == {
        "sender": "0x0000000000000000000000000000000000000001",
        "nonce": "0x5",
        "initCode": "0x",
        "callData": "0xab",
        "callGasLimit": "0x0",
        "verificationGasLimit": "0x0",
        "preVerificationGas": "0x0",
        "maxFeePerGas": "0xa",
        "maxPriorityFeePerGas": "0x1",
        "paymasterAndData": "0x",
        "signature": "0xff",
    }


def test_sponsor_request_includes_policy(config, user_op):
    with patch("smart_wallet.bundler.requests.post") as post:
        post.return_value = rpc_response({"jsonrpc": "2.0", "id": 1, "result": {"paymasterAndData": "0xcd"}})

        result = BundlerClient(config).sponsor_user_operation(user_op, "sp_test")

    assert result == {"paymasterAndData": "0xcd"}
    payload = post.call_args.kwargs["json"]
    assert post.call_args.args[0] == "https://bundler.test/rpc"
    assert payload["method"] == "pm_sponsorUserOperation"
    assert payload["params"][1] == ENTRYPOINT_V06
    assert payload["params"][2] == {"sponsorshipPolicyId": "sp_test"}


def test_sponsor_request_without_policy(config, user_op):
    with patch("smart_wallet.bundler.requests.post") as post:
        post.return_value = rpc_response({"jsonrpc": "2.0", "id": 1, "result": {}})

        BundlerClient(config).sponsor_user_operation(user_op)

    assert len(post.call_args.kwargs["json"]["params"]) == 2


def test_estimate_gas_request(config, user_op):
    with patch("smart_wallet.bundler.requests.post") as post:
        post.return_value = rpc_response({"jsonrpc": "2.0", "id": 1, "result": {"callGasLimit": "0x64"}})

        result = BundlerClient(config).estimate_user_operation_gas(user_op)

    assert result == {"callGasLimit": "0x64"}
    payload = post.call_args.kwargs["json"]
    assert payload["method"] == "eth_estimateUserOperationGas"
    assert payload["params"][0]["callData"] == "0xab"


def test_json_rpc_error_raises(config):
    with patch("smart_wallet.bundler.requests.post") as post:
        post.return_value = rpc_response(
            {"jsonrpc": "2.0", "id": 1, "error": {"code": -32602, "message": "invalid params"}}
        )

        with pytest.raises(BundlerError, match="invalid params") as exc_info:
            BundlerClient(config).get_user_operation_gas_price()

    assert exc_info.value.code == -32602


def test_http_error_raises(config):
    with patch("smart_wallet.bundler.requests.post") as post:
        post.return_value = rpc_response({}, status_code=502)

        with pytest.raises(BundlerError, match="pimlico_getUserOperationGasPrice"):
            BundlerClient(config).get_user_operation_gas_price()


def test_connection_error_raises(config):
    with patch("smart_wallet.bundler.requests.post", side_effect=requests.ConnectionError("refused")):
        with pytest.raises(BundlerError, match="refused"):
            BundlerClient(config).supported_entry_points()


def test_non_json_response_raises(config):
    with patch("smart_wallet.bundler.requests.post") as post:
        response = rpc_response(None)
        response.json.side_effect = ValueError("Expecting value: line 1 column 1 (char 0)")
        post.return_value = response

        with pytest.raises(BundlerError, match="returned invalid JSON"):
            BundlerClient(config).get_user_operation_gas_price()


def test_non_object_response_raises(config):
    with patch("smart_wallet.bundler.requests.post") as post:
        post.return_value = rpc_response(["not", "an", "object"])

        with pytest.raises(BundlerError, match="non-object"):
            BundlerClient(config).get_user_operation_gas_price()
