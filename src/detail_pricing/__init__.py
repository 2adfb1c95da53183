"""
Detail Pricing Package

Pricing engine for a vehicle-detailing service.
Turns a package / size / condition / frequency / add-on selection into a client
price, time estimate, revenue split and employee hourly-rate check.
"""

__version__ = "1.0.0"
