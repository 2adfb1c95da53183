"""
Shared engine and catalog instances for the API routers.
"""
from ..catalog import ServiceCatalog
from ..config.settings import get_settings
from ..engine import PricingEngine

settings = get_settings()
engine = PricingEngine(settings.pricing)
catalog = ServiceCatalog(settings)
