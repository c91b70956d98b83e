import warnings
from typing import Iterable, Literal

import pandas as pd

from error_utils import IsinError
from isin_utils import Rule, parse


def validate_isin_column(df: pd.DataFrame,
                         column: str,
                         rules: Iterable[Rule] = (),
                         errors: Literal["raise", "coerce", "warn"] = "raise") -> pd.DataFrame:
    """
    Validate an ISIN column in a pandas DataFrame.

    Valid values are replaced by their canonical form, missing values are left alone
    and values that are not strings are invalid.

    Args:
        df: The DataFrame containing the ISIN column
        column: Name of the column to validate
        rules: Additional rules passed on to parse()
        errors: What to do with invalid values:
            "raise" raises the first error with the row in its message,
            "coerce" sets them to None and records the reason in "<column>_error",
            "warn" does the same as "coerce" and also emits a warning

    Returns:
        A copy of the DataFrame with the validated column
    """
    if column not in df.columns:
        raise KeyError(f"Column '{column}' not found in DataFrame")
    if errors not in ("raise", "coerce", "warn"):
        raise ValueError(f"errors must be 'raise', 'coerce' or 'warn', got {errors!r}")

    rules = list(rules)
    df = df.copy()
    values = []
    messages = []
    for idx, value in df[column].items():
        if not isinstance(value, str) and pd.api.types.is_scalar(value) and pd.isna(value):
            values.append(value)
            messages.append(None)
            continue

        try:
            if not isinstance(value, str):
                raise IsinError(f"expected a string, got {type(value).__name__}")
            values.append(str(parse(value, rules)))
            messages.append(None)
        except IsinError as e:
            if errors == "raise":
                raise IsinError(f"Invalid ISIN {value!r} at row {idx}: {e}") from e
            values.append(None)
            messages.append(str(e))

    df[column] = pd.Series(values, index=df.index, dtype=object)
    if errors != "raise":
        df[f"{column}_error"] = pd.Series(messages, index=df.index, dtype=object)

    invalid = sum(message is not None for message in messages)
    if errors == "warn" and invalid:
        warnings.warn(f"{invalid} invalid ISIN(s) in column '{column}'", stacklevel=2)

    return df
