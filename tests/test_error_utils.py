"""Tests for ISIN error types and formatting."""
from error_utils import CheckDigitError, LengthError, RuleError, describe_error
from isin_utils import parse

APPLE = parse("US0378331005")


class TestErrorTypes:

    def test_length_error(self):
        error = LengthError(13)
        assert error.length == 13
        assert str(error) == "expected 12 alphanumeric chars, got 13"

    def test_check_digit_format_error(self):
        error = CheckDigitError(-1, -1, found="A")
        assert error.is_format_error
        assert "got 'A'" in str(error)

    def test_check_digit_mismatch(self):
        error = CheckDigitError(6, 5)
        assert not error.is_format_error
        assert str(error) == "wrong check digit"

    def test_rule_error(self):
        error = RuleError(APPLE, "not allowed")
        assert error.isin is APPLE
        assert error.reason == "not allowed"
        assert str(error) == "ISIN US0378331005 rejected: not allowed"

    def test_equality(self):
        assert LengthError(3) == LengthError(3)
        assert LengthError(3) != LengthError(4)
        assert CheckDigitError(-1, -1, found="A") == CheckDigitError(-1, -1, found="B")


class TestDescribeError:
    """Tests for the human readable error report."""

    def test_message_only(self):
        assert describe_error(RuleError(APPLE, "no"), suggestions=[]) == \
            "Invalid ISIN: ISIN US0378331005 rejected: no"

    def test_context_in_report(self):
        report = describe_error(LengthError(0), context="Apple Inc")
        assert "Context: Apple Inc" in report

    def test_default_suggestions_for_length(self):
        report = describe_error(LengthError(10))
        assert "  1. An ISIN has exactly 12 letters and digits" in report
        assert "  2. Check for missing or extra characters" in report

    def test_default_suggestions_for_format_error(self):
        report = describe_error(CheckDigitError(-1, -1, found="X"))
        assert "must be a digit" in report

    def test_default_suggestions_for_mismatch(self):
        report = describe_error(CheckDigitError(6, 5))
        assert "typos or transposed characters" in report

    def test_custom_suggestions(self):
        report = describe_error(CheckDigitError(6, 5), suggestions=["Ask your broker"])
        assert report.endswith("Suggestions:\n  1. Ask your broker")

    def test_no_suggestions_for_rule_error(self):
        report = describe_error(RuleError(APPLE, "no"))
        assert "Suggestions" not in report
