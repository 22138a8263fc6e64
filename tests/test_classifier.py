from __future__ import annotations

from collections import Counter

from move_toolkit.models import Category, Severity
from move_toolkit.services.diagnostics.classifier import (
    classify_line,
    classify_lines,
    classify_text,
    extract_position,
)

SAMPLE_STDERR = [
    "Compiling, may take a little while to download git dependencies...",
    "INCLUDING DEPENDENCY AptosFramework",
    "BUILDING hello_blockchain",
    "error[E04003]: type mismatch in sources/hello.move:14:9",
    "   ┌─ sources/hello.move:14:9",
    "warning[W09002]: unused variable 'x'",
    "error[E03002]: unbound module '0x1::coinz' at 3:9",
    "error: expected ';' but found 'let' at 12:5",
    "{",
    '  "Error": "Move compilation failed"',
    "}",
]


def test_expected_semicolon_is_located_syntax_error() -> None:
    result = classify_lines(["error: expected ';' but found 'let' at 12:5"])

    assert len(result) == 1
    diag = result.diagnostics[0]
    assert (diag.line, diag.column) == (11, 4)
    assert diag.severity is Severity.ERROR
    assert diag.category is Category.SYNTAX
    assert diag.located is True
    assert diag.source == "move_compiler"


def test_warning_without_position_is_unlocated() -> None:
    result = classify_lines(["warning: unused variable 'x'"])

    assert len(result) == 1
    diag = result.diagnostics[0]
    assert (diag.line, diag.column) == (0, 0)
    assert diag.located is False
    assert diag.severity is Severity.WARN
    assert diag.category is Category.COMPILATION
    assert diag.position_label() is None


def test_empty_input() -> None:
    result = classify_lines([])
    assert result.diagnostics == ()
    assert dict(result.counts) == {}


def test_non_diagnostic_chatter_is_dropped() -> None:
    result = classify_lines(["Compiling module Foo", "Built successfully", "", "   "])
    assert len(result) == 0


def test_output_never_longer_than_input_and_keeps_order() -> None:
    result = classify_lines(SAMPLE_STDERR)

    assert len(result) <= len(SAMPLE_STDERR)
    assert [d.category for d in result] == [
        Category.TYPE,
        Category.COMPILATION,
        Category.MODULE,
        Category.SYNTAX,
        Category.COMPILATION,
    ]
    # The JSON error line is classified too, but has no position.
    assert result.diagnostics[-1].located is False


def test_counts_match_diagnostics() -> None:
    result = classify_lines(SAMPLE_STDERR)
    assert dict(result.counts) == dict(Counter(d.category for d in result.diagnostics))
    assert sum(result.counts.values()) == len(result)


def test_classification_is_idempotent() -> None:
    assert classify_lines(SAMPLE_STDERR) == classify_lines(list(SAMPLE_STDERR))


def test_positions_round_trip_to_cli_numbers() -> None:
    for row, col in [(1, 1), (12, 5), (300, 41)]:
        diag = classify_line(f"error: type mismatch at {row}:{col}")
        assert diag is not None
        assert (diag.line + 1, diag.column + 1) == (row, col)
        assert diag.position_label() == f"{row}:{col}"


def test_first_position_token_wins() -> None:
    assert extract_position("error: a.move:3:4 then 10:20") == (2, 3)


def test_zero_position_counts_as_unlocated() -> None:
    diag = classify_line("error: type mismatch at 0:5")
    assert diag is not None
    assert diag.located is False
    assert (diag.line, diag.column) == (0, 0)


def test_zero_position_token_is_skipped_for_a_later_one() -> None:
    assert extract_position("error: 0:0 in a.move at 7:2") == (6, 1)

    diag = classify_line("error: type mismatch near 3:0, see 7:2")
    assert diag is not None
    assert diag.located is True
    assert (diag.line, diag.column) == (6, 1)


def test_trailing_newlines_are_stripped_from_message() -> None:
    diag = classify_line("  error: parse error near 'fun' 2:3\r\n")
    assert diag is not None
    assert diag.message == "error: parse error near 'fun' 2:3"


def test_classify_text_splits_lines() -> None:
    result = classify_text("Built\nwarning: unused alias\nnote: defined here 4:2\n")
    assert [d.severity for d in result] == [Severity.WARN, Severity.INFO]
    assert classify_text(None).diagnostics == ()


def test_result_views() -> None:
    result = classify_lines(SAMPLE_STDERR)
    assert result.has_errors
    assert len(result.located()) + len(result.unlocated()) == len(result)
    assert all(d.category is Category.COMPILATION for d in result.by_category(Category.COMPILATION))


def test_to_editor_shape() -> None:
    diag = classify_lines(["error: expected ';' but found 'let' at 12:5"]).diagnostics[0]
    assert diag.to_editor() == {
        "lnum": 11,
        "col": 4,
        "severity": 1,
        "message": "error: expected ';' but found 'let' at 12:5",
        "source": "move_compiler",
        "user_data": {"category": "syntax", "located": True},
    }
