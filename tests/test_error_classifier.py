from __future__ import annotations

import pytest

from move_toolkit.services.diagnostics.error_classifier import classify_tool_failure

from conftest import make_result


@pytest.mark.parametrize(
    ("kwargs", "expected"),
    [
        ({"return_code": None, "failure_reason": "timeout"}, "timeout"),
        ({"return_code": None, "failure_reason": "process-spawn-error"}, "process-spawn-error"),
        ({"return_code": 127, "stderr": "sh: aptos: command not found"}, "tool-not-found"),
        ({"return_code": 1, "stdout": "Test was aborted with code 1"}, "tool-runtime-error"),
        ({"return_code": 1, "stderr": "error[E04003]: type mismatch"}, "tool-compilation-error"),
        ({"return_code": 2, "stderr": "something odd"}, "tool-non-zero-exit"),
        ({"return_code": 0}, "unknown-error"),
    ],
)
def test_classify_tool_failure(kwargs: dict, expected: str) -> None:
    assert classify_tool_failure(make_result(**kwargs)) == expected


def test_parse_errors_are_reported() -> None:
    result = make_result(return_code=1, stdout="{not json")
    result.parsing_error = "Malformed JSON in CLI output"
    assert classify_tool_failure(result) == "tool-output-parse-error"
