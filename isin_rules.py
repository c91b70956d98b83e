"""Reusable validation rules for isin_utils.parse()."""
import re

from error_utils import RuleError
from isin_utils import ISIN, Rule


def allowed_countries(*codes: str) -> Rule:
    """
    Only accept ISINs issued in one of the given countries.

    Args:
        codes: ISO 3166-1 alpha-2 country codes (case-insensitive)

    Returns:
        A rule for parse()
    """
    allowed = frozenset(code.upper() for code in codes)

    def rule(isin: ISIN) -> None:
        if isin.country_code not in allowed:
            raise RuleError(isin, f"country {isin.country_code} is not one of {', '.join(sorted(allowed))}")

    return rule


def excluded_countries(*codes: str) -> Rule:
    """
    Reject ISINs issued in any of the given countries.

    Args:
        codes: ISO 3166-1 alpha-2 country codes (case-insensitive)

    Returns:
        A rule for parse()
    """
    excluded = frozenset(code.upper() for code in codes)

    def rule(isin: ISIN) -> None:
        if isin.country_code in excluded:
            raise RuleError(isin, f"country {isin.country_code} is excluded")

    return rule


def alphabetic_country_code() -> Rule:
    # parse() accepts digits in the country code, real country codes are letters only
    def rule(isin: ISIN) -> None:
        if not isin.country_code.isalpha():
            raise RuleError(isin, f"country code {isin.country_code!r} must be 2 letters")

    return rule


def nsin_matches(pattern: str) -> Rule:
    """
    Require the NSIN to fully match a regular expression.

    Args:
        pattern: Regular expression, e.g. r"\\d{9}" for numeric-only NSINs

    Returns:
        A rule for parse()
    """
    compiled = re.compile(pattern)

    def rule(isin: ISIN) -> None:
        if not compiled.fullmatch(isin.nsin):
            raise RuleError(isin, f"NSIN {isin.nsin} does not match {pattern}")

    return rule
