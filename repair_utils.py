import warnings
from typing import Iterable

from error_utils import ISIN_LENGTH, CheckDigitError, LengthError
from isin_utils import COUNTRY_CODE_LENGTH, ISIN, Rule, compute_check_digit, parse, sanitize


def repair_check_digit(raw: str, rules: Iterable[Rule] = ()) -> ISIN:
    """
    Parse an ISIN, replacing a wrong check digit with the computed one.

    This is only safe when the payload is known to be correct, since a
    checksum mismatch usually means a typo elsewhere in the NSIN.

    Args:
        raw: The ISIN to parse
        rules: Additional rules, applied to the repaired ISIN

    Returns:
        The validated (possibly repaired) ISIN

    Raises:
        LengthError: If the sanitized input is not 12 characters long
        CheckDigitError: If the last character is not a digit
    """
    rules = list(rules)
    try:
        return parse(raw, rules)
    except CheckDigitError as e:
        if e.is_format_error:
            raise
        clean = sanitize(raw)
        repaired = f"{clean[:-1]}{e.computed}"
        warnings.warn(
            f"Replaced check digit of ISIN {clean}: {e.given} -> {e.computed} ({repaired})",
            stacklevel=2,
        )
        return parse(repaired, rules)


def with_check_digit(payload: str) -> str:
    """
    Append the check digit to an ISIN without one.

    Args:
        payload: Country code and NSIN, e.g. "US037833100"

    Returns:
        The complete 12 character ISIN

    Raises:
        LengthError: If the sanitized payload is not 11 characters long
    """
    clean = sanitize(payload)
    if len(clean) != ISIN_LENGTH - 1:
        # Report the length the full ISIN would have had
        raise LengthError(len(clean) + 1)
    digit = compute_check_digit(clean[:COUNTRY_CODE_LENGTH], clean[COUNTRY_CODE_LENGTH:])
    return f"{clean}{digit}"
