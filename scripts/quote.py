#!/usr/bin/env python
"""
Price a detail job from the command line and print the calculation trace.

Usage:
    python scripts/quote.py --package works --size suv --job-type maintenance --frequency monthly --add-on wax
    python scripts/quote.py --custom 500 --condition excellent
"""
import argparse
import sys
from pathlib import Path

# Add src to path
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from detail_pricing.catalog import QuoteSelection, ServiceCatalog
from detail_pricing.engine import PricingEngine, hourly_rate_band
from detail_pricing.errors import CatalogError, ValidationError


def main():
    parser = argparse.ArgumentParser(description="Price a detail job")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--package", help="package code (base, standard, works)")
    source.add_argument("--custom", type=float, help="custom base price")
    parser.add_argument("--size", default="sedan")
    parser.add_argument("--condition", default="normal")
    parser.add_argument("--job-type", default="one_time", choices=["one_time", "maintenance"])
    parser.add_argument("--frequency")
    parser.add_argument("--add-on", action="append", default=[], dest="add_ons")
    parser.add_argument("--vehicle", default="Unnamed Vehicle")
    args = parser.parse_args()

    catalog = ServiceCatalog()
    engine = PricingEngine()

    selection = QuoteSelection(
        package=args.package,
        custom_amount=args.custom,
        size=args.size,
        condition=args.condition,
        job_type=args.job_type,
        frequency=args.frequency,
        add_ons=args.add_ons,
        vehicle=args.vehicle,
    )

    try:
        result = engine.calculate(catalog.build_input(selection))
    except (ValidationError, CatalogError) as e:
        print(f"❌ {e}")
        sys.exit(1)

    print("=" * 60)
    print(args.vehicle)
    print("=" * 60)
    print(result.get_trace_text())
    print()
    print(f"Client Price:    ${result.client_price}")
    print(f"Estimated Time:  {result.estimated_hours} hrs")
    print(f"Employee Pay:    ${result.employee_pay}")
    print(f"Supplies:        ${result.supplies_cost}")
    print(f"Company Profit:  ${result.company_profit}")
    print(f"Employee Hourly: ${result.employee_hourly_rate}/hr ({hourly_rate_band(result.employee_hourly_rate, engine.constants)})")
    if result.meets_hourly_target:
        print("✅ Healthy job")
    else:
        print(f"⚠️  Suggested price: ${result.suggested_client_price}")


if __name__ == "__main__":
    main()
