"""Engine subpackage - core pricing formula and validation."""
from .pricing_engine import PricingEngine, calculate, hourly_rate_band
from .models import (
    CustomPrice, Frequency, JobType, PackagePrice, PricingInput, PricingResult,
)

__all__ = [
    'PricingEngine', 'calculate', 'hourly_rate_band',
    'CustomPrice', 'Frequency', 'JobType', 'PackagePrice', 'PricingInput', 'PricingResult',
]
