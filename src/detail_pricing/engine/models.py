"""
Data models for the pricing engine.

Uses dataclasses for structured, type-safe data representation.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Optional, Union


class JobType(str, Enum):
    ONE_TIME = "one_time"
    MAINTENANCE = "maintenance"


class Frequency(str, Enum):
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    OCCASIONAL = "occasional"


@dataclass(frozen=True)
class PackagePrice:
    """Base price taken from one of the stock packages."""
    amount: Decimal


@dataclass(frozen=True)
class CustomPrice:
    """Base price typed in for a job that doesn't fit a package."""
    amount: Decimal


BasePriceSource = Union[PackagePrice, CustomPrice]


@dataclass(frozen=True)
class FrequencyProfile:
    """Price/time multipliers for a maintenance frequency."""
    frequency: str
    price_multiplier: Decimal
    time_multiplier: Decimal


@dataclass(frozen=True)
class PricingInput:
    """A single calculation request."""
    base_price_source: BasePriceSource
    size_multiplier: Decimal = Decimal('1.0')
    condition_multiplier: Decimal = Decimal('1.0')
    job_type: JobType = JobType.ONE_TIME
    frequency: Optional[Frequency] = None
    add_on_amounts: tuple[Decimal, ...] = ()


@dataclass
class TraceStep:
    """A single step in the pricing calculation trace."""
    step: str
    description: str
    value: Optional[str] = None


@dataclass
class PricingResult:
    """Complete result of a pricing calculation."""
    client_price: int
    estimated_hours: Decimal
    employee_pay: int
    supplies_cost: int
    company_profit: int
    employee_hourly_rate: int
    meets_hourly_target: bool
    suggested_client_price: Optional[int] = None

    # Resolved factors behind the numbers above
    base_price: Decimal = Decimal('0')
    price_multiplier: Decimal = Decimal('1')
    time_multiplier: Decimal = Decimal('1')
    add_ons_total: Decimal = Decimal('0')
    base_time_hours: Decimal = Decimal('0')

    trace: list[TraceStep] = field(default_factory=list)

    def add_trace(self, step: str, description: str, value: str = None):
        """Add a step to the calculation trace."""
        self.trace.append(TraceStep(step=step, description=description, value=value))

    def get_trace_text(self) -> str:
        """Get human-readable trace as formatted text."""
        lines = []
        for t in self.trace:
            if t.value:
                lines.append(f"• {t.step}: {t.description} = {t.value}")
            else:
                lines.append(f"• {t.step}: {t.description}")
        return "\n".join(lines)

    def to_dict(self, include_trace: bool = False) -> dict:
        """Convert to the JSON shape served by the API (camelCase keys)."""
        data = {
            "clientPrice": self.client_price,
            "estimatedHours": float(self.estimated_hours),
            "employeePay": self.employee_pay,
            "suppliesCost": self.supplies_cost,
            "companyProfit": self.company_profit,
            "employeeHourlyRate": self.employee_hourly_rate,
            "meetsHourlyTarget": self.meets_hourly_target,
        }
        if self.suggested_client_price is not None:
            data["suggestedClientPrice"] = self.suggested_client_price

        if include_trace:
            data["breakdown"] = {
                "basePrice": float(self.base_price),
                "priceMultiplier": float(self.price_multiplier),
                "timeMultiplier": float(self.time_multiplier),
                "addOnsTotal": float(self.add_ons_total),
                "baseTimeHours": float(self.base_time_hours),
            }
            data["trace"] = [
                {"step": t.step, "description": t.description, "value": t.value}
                for t in self.trace
            ]
        return data
