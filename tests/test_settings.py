import os
import sys
from decimal import Decimal

import pytest

# Add src to path for internal imports
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from pydantic_settings import BaseSettings

from detail_pricing.config.settings import PricingConstants, Settings, get_settings
from detail_pricing.errors import PricingConfigurationError


def test_default_constants():
    c = PricingConstants()
    assert c.employee_share + c.supplies_share + c.company_share == 1
    assert c.required_hourly_client_rate == Decimal('125')
    assert c.package_prices == (Decimal('149'), Decimal('249'), Decimal('399'))


@pytest.mark.parametrize("overrides", [
    {"company_share": Decimal('0.50')},
    {"employee_share": Decimal('0'), "company_share": Decimal('0.92')},
    {"supplies_share": Decimal('1.08'), "company_share": Decimal('-0.48')},
    {"minimum_employee_hourly_rate": Decimal('0'), "healthy_employee_hourly_rate": Decimal('0')},
    {"healthy_employee_hourly_rate": Decimal('40')},
    {"minimum_hours": Decimal('0')},
    {"default_base_time_hours": Decimal('-1')},
    {"base_time_by_package": {Decimal('149'): Decimal('0')}},
    {"frequency_profiles": {
        'weekly': (Decimal('0.40'), Decimal('0.50')),
        'monthly': (Decimal('0.75'), Decimal('0.85')),
    }},
    {"frequency_profiles": {
        'weekly': (Decimal('0.40'), Decimal('0.50')),
        'biweekly': (Decimal('0.55'), Decimal('0.65')),
        'monthly': (Decimal('0'), Decimal('0.85')),
        'occasional': (Decimal('0.90'), Decimal('1.00')),
    }},
])
def test_inconsistent_constants_fail_at_startup(overrides):
    with pytest.raises(PricingConfigurationError):
        PricingConstants(**overrides)


def test_settings_paths(tmp_path):
    settings = Settings.load(data_dir=tmp_path)
    assert settings.packages_csv == tmp_path / 'packages.csv'
    assert settings.add_ons_csv == tmp_path / 'add_ons.csv'
    assert settings.vehicle_options_csv == tmp_path / 'vehicle_options.csv'


def test_default_data_dir_ships_catalog():
    settings = Settings.load()
    assert settings.packages_csv.exists()
    assert settings.add_ons_csv.exists()
    assert settings.vehicle_options_csv.exists()


def test_log_level_from_environment(monkeypatch):
    monkeypatch.setenv('DETAIL_PRICING_LOG_LEVEL', 'debug')
    assert Settings.load().log_level == 'DEBUG'


def test_get_settings_is_cached():
    assert get_settings() is get_settings()


def test_settings_is_env_driven():
    settings = Settings()
    assert isinstance(settings, BaseSettings)
    assert isinstance(settings.pricing, PricingConstants)
    assert settings.cors_origins == ['*']


def test_data_dir_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv('DETAIL_PRICING_DATA_DIR', str(tmp_path))
    settings = Settings()
    assert settings.data_dir == tmp_path
    assert settings.packages_csv == tmp_path / 'packages.csv'


def test_explicit_data_dir_beats_environment(monkeypatch, tmp_path):
    monkeypatch.setenv('DETAIL_PRICING_DATA_DIR', str(tmp_path / 'elsewhere'))
    assert Settings.load(data_dir=tmp_path).data_dir == tmp_path


def test_cors_origins_from_environment(monkeypatch):
    monkeypatch.setenv('DETAIL_PRICING_CORS_ORIGINS', '["http://localhost:3000"]')
    assert Settings().cors_origins == ['http://localhost:3000']
