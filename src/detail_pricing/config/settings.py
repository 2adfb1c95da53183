"""
Centralized settings, paths and business constants for detail pricing.
"""

from pathlib import Path
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from pydantic import Field, PrivateAttr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..errors import PricingConfigurationError


FREQUENCIES = ('weekly', 'biweekly', 'monthly', 'occasional')


def get_package_root() -> Path:
    """Get the package directory (where data/ lives)."""
    return Path(__file__).resolve().parent.parent


def get_project_root() -> Path:
    """Get the project root directory (where scripts/ lives)."""
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / 'pyproject.toml').exists():
            return parent
    # Fallback to 3 levels up from this file
    return current.parent.parent.parent.parent


@dataclass(frozen=True)
class PricingConstants:
    """
    Fixed business constants for the pricing formula.

    Checked on construction: an inconsistent set raises
    PricingConfigurationError instead of producing odd quotes later.
    """

    employee_share: Decimal = Decimal('0.40')
    supplies_share: Decimal = Decimal('0.08')
    company_share: Decimal = Decimal('0.52')

    minimum_employee_hourly_rate: Decimal = Decimal('50')
    healthy_employee_hourly_rate: Decimal = Decimal('70')

    # Base price -> hours for the stock packages
    base_time_by_package: dict = field(default_factory=lambda: {
        Decimal('149'): Decimal('1.5'),
        Decimal('249'): Decimal('3.0'),
        Decimal('399'): Decimal('5.0'),
    })
    default_base_time_hours: Decimal = Decimal('3.0')
    minimum_hours: Decimal = Decimal('0.5')

    # frequency -> (price multiplier, time multiplier)
    frequency_profiles: dict = field(default_factory=lambda: {
        'weekly': (Decimal('0.40'), Decimal('0.50')),
        'biweekly': (Decimal('0.55'), Decimal('0.65')),
        'monthly': (Decimal('0.75'), Decimal('0.85')),
        'occasional': (Decimal('0.90'), Decimal('1.00')),
    })

    size_multipliers: tuple = (Decimal('0.9'), Decimal('1.0'), Decimal('1.2'), Decimal('1.4'))
    condition_multipliers: tuple = (Decimal('0.9'), Decimal('1.0'), Decimal('1.2'))

    def __post_init__(self):
        self.check()

    @property
    def package_prices(self) -> tuple:
        return tuple(sorted(self.base_time_by_package))

    @property
    def required_hourly_client_rate(self) -> Decimal:
        """Client revenue per hour needed for the employee to hit the minimum rate."""
        return self.minimum_employee_hourly_rate / self.employee_share

    def check(self):
        """Raise PricingConfigurationError if the constants are inconsistent."""
        for name in ('employee_share', 'supplies_share', 'company_share'):
            share = getattr(self, name)
            if not (0 < share < 1):
                raise PricingConfigurationError(f"{name} must be between 0 and 1, got {share}")

        total = self.employee_share + self.supplies_share + self.company_share
        if total != 1:
            raise PricingConfigurationError(
                f"employee, supplies and company shares must sum to 1.0, got {total}"
            )

        if self.minimum_employee_hourly_rate <= 0:
            raise PricingConfigurationError("minimum_employee_hourly_rate must be positive")

        if self.healthy_employee_hourly_rate < self.minimum_employee_hourly_rate:
            raise PricingConfigurationError(
                "healthy_employee_hourly_rate cannot be below minimum_employee_hourly_rate"
            )

        if self.minimum_hours <= 0:
            raise PricingConfigurationError("minimum_hours must be positive")

        if self.default_base_time_hours <= 0:
            raise PricingConfigurationError("default_base_time_hours must be positive")

        for price, hours in self.base_time_by_package.items():
            if price <= 0 or hours <= 0:
                raise PricingConfigurationError(f"invalid package base time {price} -> {hours}")

        if set(self.frequency_profiles) != set(FREQUENCIES):
            raise PricingConfigurationError(
                f"frequency profiles must cover exactly {', '.join(FREQUENCIES)}"
            )
        for freq, (price_mul, time_mul) in self.frequency_profiles.items():
            if price_mul <= 0 or time_mul <= 0:
                raise PricingConfigurationError(f"frequency '{freq}' multipliers must be positive")


class Settings(BaseSettings):
    """
    Application settings with sensible defaults.

    Overridable from the environment (or a .env file) with the
    DETAIL_PRICING_ prefix, e.g. DETAIL_PRICING_DATA_DIR, DETAIL_PRICING_LOG_LEVEL.
    """

    model_config = SettingsConfigDict(
        env_prefix="DETAIL_PRICING_",
        env_file=".env",
        extra="ignore",
    )

    # Project paths
    project_root: Path = Field(default_factory=get_project_root)
    data_dir: Path = Field(default_factory=lambda: get_package_root() / 'data')

    log_level: str = 'INFO'
    cors_origins: list[str] = ['*']

    _pricing: PricingConstants = PrivateAttr(default_factory=PricingConstants)

    @field_validator('log_level', mode='before')
    @classmethod
    def _upper_level(cls, value):
        return str(value).strip().upper()

    @property
    def pricing(self) -> PricingConstants:
        return self._pricing

    # Catalog files
    @property
    def packages_csv(self) -> Path:
        return self.data_dir / 'packages.csv'

    @property
    def add_ons_csv(self) -> Path:
        return self.data_dir / 'add_ons.csv'

    @property
    def vehicle_options_csv(self) -> Path:
        return self.data_dir / 'vehicle_options.csv'

    @classmethod
    def load(cls, data_dir: Optional[Path] = None) -> 'Settings':
        """Load settings from the environment; an explicit data_dir wins."""
        if data_dir is not None:
            return cls(data_dir=data_dir)
        return cls()


# Default settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings
