"""
Pricing Engine - client price, time estimate and revenue split for a detail job.

Calculation order:
1. Resolve frequency multipliers (one-time jobs use 1 / 1)
2. Sum add-ons
3. Client price from base × size × condition × price multiplier + add-ons
4. Estimated hours from the package base time (0.5h floor)
5. Employee / supplies / company split (company takes the remainder)
6. Employee hourly rate against the minimum target
7. Suggested client price that would meet the target

All arithmetic runs on Decimal and every rounding is half away from zero,
so results never depend on binary float ties.
"""
import logging
from decimal import Decimal, ROUND_CEILING, ROUND_HALF_UP
from typing import Optional

from ..config.settings import PricingConstants, get_settings
from ..errors import PricingConfigurationError
from .models import FrequencyProfile, JobType, PricingInput, PricingResult
from .validation import validate_input

logger = logging.getLogger(__name__)

WHOLE = Decimal('1')
TENTH = Decimal('0.1')


def round_half_up(value: Decimal, exp: Decimal = WHOLE) -> Decimal:
    """Round to `exp` with ties going away from zero."""
    return value.quantize(exp, rounding=ROUND_HALF_UP)


def hourly_rate_band(rate: int, constants: Optional[PricingConstants] = None) -> str:
    """
    Classify an employee hourly rate.

    Returns "healthy" at or above the healthy rate, "target" at or above the
    minimum, otherwise "below".
    """
    constants = constants or get_settings().pricing
    if rate >= constants.healthy_employee_hourly_rate:
        return "healthy"
    if rate >= constants.minimum_employee_hourly_rate:
        return "target"
    return "below"


class PricingEngine:
    """
    Stateless pricing calculator.

    Holds only the (immutable) business constants, so one instance can be
    shared by every caller.
    """

    def __init__(self, constants: Optional[PricingConstants] = None):
        self.constants = constants or get_settings().pricing

    def frequency_profile(self, frequency: str) -> FrequencyProfile:
        """Look up the price/time multipliers for a maintenance frequency."""
        price_mul, time_mul = self.constants.frequency_profiles[frequency]
        return FrequencyProfile(frequency=frequency, price_multiplier=price_mul, time_multiplier=time_mul)

    def base_time_for(self, base_price: Decimal) -> Decimal:
        """Base hours for a price; only exact package prices get their own time."""
        return self.constants.base_time_by_package.get(base_price, self.constants.default_base_time_hours)

    def calculate(self, pricing_input: PricingInput) -> PricingResult:
        """
        Calculate a pricing breakdown.

        Args:
            pricing_input: PricingInput with the job selection

        Returns:
            PricingResult with price, hours, split and hourly-rate check

        Raises:
            ValidationError: the input is rejected; nothing is computed
        """
        job = validate_input(pricing_input, self.constants)
        c = self.constants
        trace = []

        # 1. Frequency multipliers
        if job.job_type is JobType.MAINTENANCE:
            profile = self.frequency_profile(job.frequency.value)
            price_mul, time_mul = profile.price_multiplier, profile.time_multiplier
            trace.append(("Frequency", f"{job.frequency.value} maintenance", f"price ×{price_mul}, time ×{time_mul}"))
        else:
            price_mul, time_mul = WHOLE, WHOLE
            trace.append(("Frequency", "One-time job", None))

        # 2. Add-ons
        add_ons_total = sum(job.add_on_amounts, Decimal('0'))
        trace.append(("Add-Ons", f"{len(job.add_on_amounts)} add-ons", f"${add_ons_total}"))

        # 3. Client price
        raw_price = job.base_price * job.size_multiplier * job.condition_multiplier * price_mul + add_ons_total
        client_price = int(round_half_up(raw_price))
        trace.append((
            "Client Price",
            f"${job.base_price} × {job.size_multiplier} × {job.condition_multiplier} × {price_mul} + ${add_ons_total}",
            f"${client_price}",
        ))

        # 4. Estimated hours
        base_time = self.base_time_for(job.base_price)
        raw_hours = base_time * job.size_multiplier * job.condition_multiplier * time_mul
        estimated_hours = max(c.minimum_hours, round_half_up(raw_hours, TENTH))
        trace.append((
            "Estimated Time",
            f"{base_time}h × {job.size_multiplier} × {job.condition_multiplier} × {time_mul}",
            f"{estimated_hours}h",
        ))

        # 5. Split
        employee_pay = int(round_half_up(client_price * c.employee_share))
        supplies_cost = int(round_half_up(client_price * c.supplies_share))
        company_profit = client_price - employee_pay - supplies_cost
        trace.append(("Split", "Employee / Supplies / Company", f"${employee_pay} / ${supplies_cost} / ${company_profit}"))

        # 6. Hourly rate
        employee_hourly_rate = int(round_half_up(Decimal(employee_pay) / estimated_hours))
        meets_target = employee_hourly_rate >= c.minimum_employee_hourly_rate
        trace.append((
            "Hourly Rate",
            f"${employee_pay} / {estimated_hours}h vs ${c.minimum_employee_hourly_rate}/hr target",
            f"${employee_hourly_rate}/hr",
        ))

        # 7. Suggested price
        suggested = int((c.required_hourly_client_rate * estimated_hours).to_integral_value(rounding=ROUND_CEILING))
        if not meets_target and suggested <= client_price:
            raise PricingConfigurationError(
                f"suggested price ${suggested} does not raise client price ${client_price}; "
                "check minimum_employee_hourly_rate against employee_share"
            )

        result = PricingResult(
            client_price=client_price,
            estimated_hours=estimated_hours,
            employee_pay=employee_pay,
            supplies_cost=supplies_cost,
            company_profit=company_profit,
            employee_hourly_rate=employee_hourly_rate,
            meets_hourly_target=meets_target,
            suggested_client_price=None if meets_target else suggested,
            base_price=job.base_price,
            price_multiplier=price_mul,
            time_multiplier=time_mul,
            add_ons_total=add_ons_total,
            base_time_hours=base_time,
        )
        for step, desc, val in trace:
            result.add_trace(step, desc, val)
        if not meets_target:
            result.add_trace("Suggestion", f"Raise price to reach ${c.minimum_employee_hourly_rate}/hr", f"${suggested}")

        logger.debug(
            "priced job base=%s price=%s hours=%s rate=%s meets=%s",
            job.base_price, client_price, estimated_hours, employee_hourly_rate, meets_target,
        )
        return result


_default_engine: Optional[PricingEngine] = None


def calculate(pricing_input: PricingInput) -> PricingResult:
    """Calculate with the default engine built from the global settings."""
    global _default_engine
    if _default_engine is None:
        _default_engine = PricingEngine()
    return _default_engine.calculate(pricing_input)
