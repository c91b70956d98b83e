import re
from dataclasses import dataclass
from typing import Callable, Iterable, Tuple

from error_utils import ISIN_LENGTH, CheckDigitError, IsinError, LengthError

COUNTRY_CODE_LENGTH = 2
NSIN_LENGTH = 9

_NON_ALPHANUMERIC = re.compile(r"[^0-9A-Za-z]")
_UPPERCASE_ALPHANUMERIC = re.compile(r"[0-9A-Z]*")


@dataclass(frozen=True)
class ISIN:
    """
    International Securities Identification Number.

    ISIN format: 12 characters
    - 2 letters: Country code (ISO 3166-1 alpha-2)
    - 9 characters: National Securities Identifying Number (alphanumeric)
    - 1 digit: Check digit (Luhn algorithm over the expanded payload)

    Use parse() to read an ISIN from user input. Direct construction takes
    already sanitized fields and raises the same errors as parse() when
    they do not form a valid ISIN.
    """
    country_code: str
    nsin: str
    check_digit: int

    def __post_init__(self):
        if (not isinstance(self.check_digit, int) or isinstance(self.check_digit, bool)
                or not 0 <= self.check_digit <= 9):
            raise CheckDigitError(-1, -1, found=str(self.check_digit))
        if not isinstance(self.country_code, str) or not isinstance(self.nsin, str):
            raise IsinError("country code and NSIN must be strings")
        if len(self.country_code) != COUNTRY_CODE_LENGTH or len(self.nsin) != NSIN_LENGTH:
            raise LengthError(len(self.country_code) + len(self.nsin) + 1)
        if not _UPPERCASE_ALPHANUMERIC.fullmatch(self.country_code + self.nsin):
            raise IsinError(
                f"{self.country_code + self.nsin!r} must only contain uppercase ASCII letters and digits"
            )

        computed = compute_check_digit(self.country_code, self.nsin)
        if computed != self.check_digit:
            raise CheckDigitError(self.check_digit, computed)

    def __str__(self) -> str:
        return f"{self.country_code}{self.nsin}{self.check_digit}"


# A rule rejects an ISIN by raising, usually a RuleError
Rule = Callable[[ISIN], None]


def sanitize(raw: str) -> str:
    """
    Remove everything that is not an ASCII letter or digit and convert to uppercase.

    Args:
        raw: Any string, e.g. "us 0378-3310-05"

    Returns:
        The cleaned candidate, possibly empty
    """
    return _NON_ALPHANUMERIC.sub("", raw).upper()


def parse(raw: str, rules: Iterable[Rule] = ()) -> ISIN:
    """
    Sanitize, parse and validate an ISIN.

    Args:
        raw: The ISIN to parse; case and punctuation are ignored
        rules: Additional rules applied in order after the checksum passed

    Returns:
        The validated ISIN

    Raises:
        LengthError: If the sanitized input is not 12 characters long
        CheckDigitError: If the last character is not a digit or the checksum does not match
        Exception: Whatever the first failing rule raised
    """
    isin = _parse_structure(sanitize(raw))

    for rule in rules:
        rule(isin)

    return isin


def is_valid(raw: str, rules: Iterable[Rule] = ()) -> bool:
    try:
        parse(raw, rules)
    except IsinError:
        return False
    return True


def _parse_structure(clean: str) -> ISIN:
    if len(clean) != ISIN_LENGTH:
        raise LengthError(len(clean))

    last = clean[-1]
    if last not in "0123456789":
        raise CheckDigitError(-1, -1, found=last)

    # The constructor verifies the check digit
    return ISIN(
        country_code=clean[:COUNTRY_CODE_LENGTH],
        nsin=clean[COUNTRY_CODE_LENGTH:COUNTRY_CODE_LENGTH + NSIN_LENGTH],
        check_digit=int(last),
    )


def compute_check_digit(country_code: str, nsin: str) -> int:
    """
    Compute the ISIN check digit for a country code and NSIN.

    Both parts are read right to left, NSIN first. Letters are expanded
    to two digits (A=10, ..., Z=35) which are fed ones digit first, and
    every other digit is doubled starting with the rightmost one. The
    doubling keeps alternating across the NSIN/country code boundary.

    Args:
        country_code: Country code, letters in either case
        nsin: National identifier, letters in either case

    Returns:
        The check digit, 0-9

    Raises:
        IsinError: If either part contains anything but ASCII letters and digits
    """
    # Checked before upper() since "ß".upper() == "SS"
    if _NON_ALPHANUMERIC.search(country_code + nsin):
        raise IsinError(f"{country_code + nsin!r} must only contain ASCII letters and digits")
    country_code = country_code.upper()
    nsin = nsin.upper()

    nsin_sum, double = _luhn_sum(nsin, True)
    country_sum, _ = _luhn_sum(country_code, double)
    total = nsin_sum + country_sum
    return (10 - (total % 10)) % 10


def _luhn_sum(chars: str, double: bool) -> Tuple[int, bool]:
    total = 0
    for char in reversed(chars):
        if char in "0123456789":
            digits = [int(char)]
        else:
            value = ord(char) - ord("A") + 10
            digits = [value % 10, value // 10]

        for d in digits:
            if double:
                d *= 2
                if d > 9:
                    d -= 9
            total += d
            double = not double

    return total, double
