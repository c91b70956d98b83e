from typing import TYPE_CHECKING, Optional, List

if TYPE_CHECKING:
    from isin_utils import ISIN

ISIN_LENGTH = 12


class IsinError(ValueError):
    """Base class for all ISIN validation errors."""


class LengthError(IsinError):
    """
    The sanitized ISIN does not have exactly 12 characters.

    Args:
        length: The observed length after sanitizing
    """

    def __init__(self, length: int):
        self.length = length
        super().__init__(f"expected {ISIN_LENGTH} alphanumeric chars, got {length}")

    def __eq__(self, other):
        return isinstance(other, LengthError) and other.length == self.length

    def __hash__(self):
        return hash((LengthError, self.length))


class CheckDigitError(IsinError):
    """
    The check digit is not a digit, or does not match the checksum.

    given == computed == -1 means the last character was not a digit at all.
    Otherwise both are digits 0-9 and differ.

    Args:
        given: The check digit found in the input (-1 if not a digit)
        computed: The check digit computed from the payload (-1 if not computed)
        found: The offending last character, only used in the message
    """

    def __init__(self, given: int, computed: int, found: Optional[str] = None):
        self.given = given
        self.computed = computed
        self.found = found
        super().__init__(self._message())

    @property
    def is_format_error(self) -> bool:
        return self.given < 0 or self.given > 9

    def _message(self) -> str:
        if self.is_format_error:
            return f"expected digit as last char, got {self.found!r}"
        # The mistake is most likely somewhere in the NSIN, so the digits are left out
        return "wrong check digit"

    def __eq__(self, other):
        return (
            isinstance(other, CheckDigitError)
            and other.given == self.given
            and other.computed == self.computed
        )

    def __hash__(self):
        return hash((CheckDigitError, self.given, self.computed))


class RuleError(IsinError):
    """
    Raised by validation rules to reject an otherwise valid ISIN.

    Args:
        isin: The ISIN that was rejected
        reason: Why it was rejected
    """

    def __init__(self, isin: "ISIN", reason: str):
        self.isin = isin
        self.reason = reason
        super().__init__(f"ISIN {isin} rejected: {reason}")


def describe_error(error: Exception,
                   context: str = "",
                   suggestions: Optional[List[str]] = None) -> str:
    """
    Build a formatted, multi-line description of an ISIN error.

    Args:
        error: The error raised while parsing or validating
        context: Optional context about what was being validated (e.g., "Apple Inc")
        suggestions: Optional list of suggestions for fixing the error;
            defaults to hints based on the error kind

    Returns:
        The formatted description
    """
    lines = [f"Invalid ISIN: {error}"]

    if context:
        lines.append(f"Context: {context}")

    if suggestions is None:
        suggestions = default_suggestions(error)

    if suggestions:
        lines.append("")
        lines.append("Suggestions:")
        for i, suggestion in enumerate(suggestions, 1):
            lines.append(f"  {i}. {suggestion}")

    return "\n".join(lines)


def default_suggestions(error: Exception) -> List[str]:
    if isinstance(error, LengthError):
        return [
            f"An ISIN has exactly {ISIN_LENGTH} letters and digits",
            "Check for missing or extra characters",
        ]
    if isinstance(error, CheckDigitError):
        if error.is_format_error:
            return ["The last character of an ISIN must be a digit"]
        return [
            "Check the national identifier for typos or transposed characters",
            "Verify the ISIN against the issuer or your broker statement",
        ]
    return []
