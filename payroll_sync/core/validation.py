"""Input Validation — explicit checks for business keys and contribution fields.

Invariants:
    - Every function returns the normalized value or raises InputValidationError
    - Pure functions: no I/O, no framework imports
    - Pydantic schemas call these from field_validators (schemas/)

Design Decisions:
    - Explicit functions over decorator metadata: the same rules are usable from
      routes, services and tests without instantiating a model
"""

import re
from decimal import Decimal, InvalidOperation

from payroll_sync.core.domain_types import Matricule, Period, RssbNumber
from payroll_sync.core.errors import InputValidationError

BUSINESS_KEY_MAX_LENGTH = 50
NAME_MAX_LENGTH = 255
AMOUNT_MAX_DIGITS = 12
AMOUNT_SCALE = 2

_PERIOD_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


def validate_rssb_number(value: str) -> RssbNumber:
    return RssbNumber(_validate_business_key(value, "rssbNumber"))


def validate_matricule(value: str) -> Matricule:
    return Matricule(_validate_business_key(value, "matricule"))


def validate_period(value: str) -> Period:
    """Period must be a calendar month, YYYY-MM."""
    value = (value or "").strip()
    if not _PERIOD_RE.match(value):
        raise InputValidationError(
            f"period must match YYYY-MM, got '{value}'", "period",
        )
    return Period(value)


def validate_amount(value: Decimal | int | float | str) -> Decimal:
    """Amount is a non-negative fixed-point value with at most 2 decimals."""
    try:
        # str() first so floats keep their printed value instead of binary noise
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise InputValidationError(f"amount is not a number: {value!r}", "amount") from e
    if not amount.is_finite():
        raise InputValidationError("amount must be finite", "amount")
    if amount < 0:
        raise InputValidationError("amount must be >= 0", "amount")
    exponent = amount.as_tuple().exponent
    if isinstance(exponent, int) and -exponent > AMOUNT_SCALE:
        raise InputValidationError(
            f"amount supports at most {AMOUNT_SCALE} decimal places", "amount",
        )
    integer_digits = len(amount.quantize(Decimal(1)).as_tuple().digits)
    if integer_digits > AMOUNT_MAX_DIGITS - AMOUNT_SCALE:
        raise InputValidationError("amount is too large", "amount")
    return amount.quantize(Decimal(1).scaleb(-AMOUNT_SCALE))


def validate_name(value: str, field: str) -> str:
    value = (value or "").strip()
    if not value:
        raise InputValidationError(f"{field} cannot be empty", field)
    if len(value) > NAME_MAX_LENGTH:
        raise InputValidationError(
            f"{field} exceeds {NAME_MAX_LENGTH} characters", field,
        )
    return value


def _validate_business_key(value: str, field: str) -> str:
    value = (value or "").strip()
    if not value:
        raise InputValidationError(f"{field} cannot be empty", field)
    if len(value) > BUSINESS_KEY_MAX_LENGTH:
        raise InputValidationError(
            f"{field} exceeds {BUSINESS_KEY_MAX_LENGTH} characters", field,
        )
    return value
