"""Catalog subpackage - packages, vehicle options and add-ons."""
from .service_catalog import QuoteSelection, ServiceCatalog

__all__ = ['QuoteSelection', 'ServiceCatalog']
