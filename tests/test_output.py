from __future__ import annotations

import pytest

from move_toolkit.errors import OutputParseError
from move_toolkit.services.tools.output import (
    parse_account_list,
    parse_build_output,
    parse_json_output,
    parse_publish_output,
    parse_test_output,
)

BUILD_STDOUT = """\
BUILDING hello_blockchain
{
  "Result": [
    "c4bd2e8a::message"
  ]
}
""".splitlines()

TEST_STDOUT = """\
Running Move unit tests
[ PASS    ] 0xc4bd::message::sender_can_set_message
[ FAIL    ] 0xc4bd::message::other_test
Test result: FAILED. Total tests: 2; passed: 1; failed: 1
""".splitlines()

PUBLISH_STDOUT = """\
Transaction submitted: https://explorer.aptoslabs.com/txn/0xabc?network=devnet
{
  "Result": {
    "transaction_hash": "0xabc",
    "gas_used": "1234",
    "success": true,
    "vm_status": "Executed successfully"
  }
}
""".splitlines()


def test_parse_build_output() -> None:
    summary = parse_build_output(BUILD_STDOUT)
    assert summary.packages == ["hello_blockchain"]
    assert summary.modules == ["c4bd2e8a::message"]
    assert summary.error is None


def test_parse_build_output_without_json() -> None:
    summary = parse_build_output(["Compiling module Foo", "Built successfully"])
    assert summary.modules == ["Foo"]
    assert summary.packages == []


def test_parse_test_output() -> None:
    summary = parse_test_output(TEST_STDOUT)
    assert summary.passed == ["0xc4bd::message::sender_can_set_message"]
    assert summary.failed == ["0xc4bd::message::other_test"]
    assert summary.total == 2
    assert summary.ok is False


def test_parse_test_output_without_result_line() -> None:
    summary = parse_test_output(["[ PASS    ] 0x1::a::t"])
    assert summary.total == 1
    assert summary.ok is True


def test_parse_publish_output() -> None:
    summary = parse_publish_output(PUBLISH_STDOUT)
    assert summary.transaction_hash == "0xabc"
    assert summary.success is True
    assert summary.gas_used == 1234


def test_parse_publish_output_rejects_non_numeric_gas() -> None:
    lines = ['{"Result": {"transaction_hash": "0xabc", "success": true, "gas_used": "n/a"}}']
    with pytest.raises(OutputParseError, match="gas_used"):
        parse_publish_output(lines)


def test_parse_account_list() -> None:
    lines = ['{"Result": [{"0x1::account::Account": {"sequence_number": "3"}}]}']
    assert parse_account_list(lines) == [{"0x1::account::Account": {"sequence_number": "3"}}]


def test_parse_account_list_error_payload() -> None:
    with pytest.raises(OutputParseError, match="profile not found"):
        parse_account_list(['{"Error": "profile not found"}'])


def test_malformed_json_raises() -> None:
    with pytest.raises(OutputParseError):
        parse_json_output(["{", '  "Result": [', "}"])
    with pytest.raises(OutputParseError):
        parse_json_output(["no json here"])
    assert parse_json_output(["no json here"], required=False) is None
