"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

MAX_PLACES = 2


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "€123.45"
    - "-123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Sign is preserved; rejecting negative amounts is the ledger's job.

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Remove currency symbols and thousands separators
    amount_str = re.sub(r"[$€£¥]", "", amount_str).replace(",", "").strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if not amount.is_finite():
        raise ValueError(f"Amount must be a finite number, got '{amount_str}'")
    return -amount if is_negative else amount


def to_decimal(value) -> Decimal:
    """Coerce an int, float, Decimal or numeric string into a Decimal.

    Floats go through ``str`` so that 0.1 becomes Decimal("0.1"), not its
    binary expansion.

    Amounts are stored with two decimal places, so anything finer is
    rejected rather than rounded.

    Raises:
        ValueError: If the value is not a finite number or has more than two
            decimal places
    """
    if isinstance(value, bool):
        raise ValueError(f"Not a monetary amount: {value!r}")
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        amount = Decimal(str(value))
    elif isinstance(value, str):
        amount = parse_amount(value)
    else:
        raise ValueError(f"Not a monetary amount: {value!r}")
    if not amount.is_finite():
        raise ValueError(f"Amount must be a finite number, got {value!r}")
    if amount.normalize().as_tuple().exponent < -MAX_PLACES:
        raise ValueError(f"Amount {value!r} has more than {MAX_PLACES} decimal places")
    return amount
