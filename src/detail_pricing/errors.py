"""
Exception types raised by the pricing engine and its collaborators.
"""


class ValidationError(ValueError):
    """Pricing input rejected before any computation."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class CatalogError(ValueError):
    """A catalog code (package, size, condition, add-on) is not known."""


class PricingConfigurationError(RuntimeError):
    """Business constants are inconsistent with each other."""
