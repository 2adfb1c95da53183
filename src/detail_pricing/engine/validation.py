"""
Input validation for the pricing engine.

Every check runs before any arithmetic; the first failure aborts the whole
calculation with a ValidationError.
"""
import math
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Optional

from ..config.settings import PricingConstants
from ..errors import ValidationError
from .models import CustomPrice, Frequency, JobType, PackagePrice, PricingInput

# Amounts at or above this would need more digits than the decimal context carries
MAX_AMOUNT = Decimal(10) ** 12


@dataclass(frozen=True)
class ValidatedJob:
    """PricingInput normalized to Decimal and enum values."""
    base_price: Decimal
    size_multiplier: Decimal
    condition_multiplier: Decimal
    job_type: JobType
    frequency: Optional[Frequency]
    add_on_amounts: tuple[Decimal, ...]


def parse_decimal(value) -> Optional[Decimal]:
    """Parse a number into a finite Decimal, or None if it isn't one."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        # repr gives the shortest string that round-trips, e.g. 1.2 -> "1.2"
        value = repr(value)
    try:
        number = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        return None
    if not number.is_finite():
        return None
    return number


def _base_price(source, constants: PricingConstants) -> Decimal:
    if not isinstance(source, (PackagePrice, CustomPrice)):
        raise ValidationError("invalid base price")

    amount = parse_decimal(source.amount)
    if amount is None or amount <= 0 or amount >= MAX_AMOUNT:
        raise ValidationError("invalid base price")

    if isinstance(source, PackagePrice) and amount not in constants.package_prices:
        raise ValidationError("unknown package amount")
    return amount


def _multiplier(value, allowed: tuple, reason: str) -> Decimal:
    number = parse_decimal(value)
    if number is None or number not in allowed:
        raise ValidationError(reason)
    return number


def _job_type(value) -> JobType:
    try:
        return JobType(value)
    except ValueError:
        raise ValidationError("invalid job type")


def _frequency(job_type: JobType, value) -> Optional[Frequency]:
    if job_type is JobType.ONE_TIME:
        if value is not None:
            raise ValidationError("unexpected frequency")
        return None

    if value is None:
        raise ValidationError("missing frequency")
    try:
        return Frequency(value)
    except ValueError:
        raise ValidationError("unrecognized frequency")


def _add_ons(amounts) -> tuple[Decimal, ...]:
    if amounts is None:
        return ()
    if isinstance(amounts, (str, bytes)):
        raise ValidationError("invalid add-on amount")

    parsed = []
    for amount in amounts:
        number = parse_decimal(amount)
        if number is None or number >= MAX_AMOUNT:
            raise ValidationError("invalid add-on amount")
        if number < 0:
            raise ValidationError("negative add-on amount")
        parsed.append(number)

    if sum(parsed, Decimal(0)) >= MAX_AMOUNT:
        raise ValidationError("invalid add-on amount")
    return tuple(parsed)


def validate_input(pricing_input: PricingInput, constants: PricingConstants) -> ValidatedJob:
    """
    Validate and normalize a PricingInput.

    Raises:
        ValidationError: with the reason of the first failed check
    """
    base_price = _base_price(pricing_input.base_price_source, constants)
    size = _multiplier(pricing_input.size_multiplier, constants.size_multipliers, "invalid size multiplier")
    condition = _multiplier(
        pricing_input.condition_multiplier, constants.condition_multipliers, "invalid condition multiplier"
    )
    job_type = _job_type(pricing_input.job_type)
    frequency = _frequency(job_type, pricing_input.frequency)
    add_ons = _add_ons(pricing_input.add_on_amounts)

    return ValidatedJob(
        base_price=base_price,
        size_multiplier=size,
        condition_multiplier=condition,
        job_type=job_type,
        frequency=frequency,
        add_on_amounts=add_ons,
    )
