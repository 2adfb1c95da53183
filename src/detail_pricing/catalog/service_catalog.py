"""
Service Catalog - packages, vehicle options and add-ons offered to clients.

Loads the catalog CSVs and resolves a name-based quote selection into the
numeric PricingInput the engine works on. The engine itself never reads
the catalog.
"""
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

import pandas as pd

from ..config.settings import Settings, get_settings
from ..engine.models import CustomPrice, PackagePrice, PricingInput
from ..errors import CatalogError

logger = logging.getLogger(__name__)


@dataclass
class QuoteSelection:
    """A quote described with catalog codes instead of amounts."""
    package: Optional[str] = None  # package code, or None for custom pricing
    custom_amount: Optional[float] = None
    size: str = "sedan"
    condition: str = "normal"
    job_type: str = "one_time"
    frequency: Optional[str] = None
    add_ons: list[str] = field(default_factory=list)
    vehicle: Optional[str] = None


class ServiceCatalog:
    """Read-only view over packages.csv, vehicle_options.csv and add_ons.csv."""

    def __init__(self, settings: Optional[Settings] = None):
        """Load all catalog files."""
        self.settings = settings or get_settings()

        self._packages = self._load_csv(self.settings.packages_csv, ['code', 'name', 'price'])
        self._add_ons = self._load_csv(self.settings.add_ons_csv, ['code', 'name', 'price'])
        options = self._load_csv(self.settings.vehicle_options_csv, ['kind', 'code', 'label', 'multiplier'])

        self._sizes = options[options['kind'] == 'size'].drop(columns='kind')
        self._conditions = options[options['kind'] == 'condition'].drop(columns='kind')

        logger.info(
            "Loaded catalog: %d packages, %d sizes, %d conditions, %d add-ons",
            len(self._packages), len(self._sizes), len(self._conditions), len(self._add_ons),
        )

    @staticmethod
    def _load_csv(path, columns: list[str]) -> pd.DataFrame:
        if not path.exists():
            raise FileNotFoundError(f"Catalog file not found at {path}.")

        df = pd.read_csv(path, dtype=str).fillna('')
        df.columns = [c.strip() for c in df.columns]
        missing = [c for c in columns if c not in df.columns]
        if missing:
            raise CatalogError(f"{path.name} is missing columns: {', '.join(missing)}")

        for col in df.columns:
            df[col] = df[col].astype(str).str.strip()

        # Handle duplicate codes by keeping the first entry
        df = df.drop_duplicates(subset='code', keep='first')
        return df.set_index('code', drop=False)

    def reload_data(self):
        """Reload all catalog files from disk."""
        self.__init__(self.settings)

    # Display tables

    def packages(self) -> pd.DataFrame:
        return self._packages.reset_index(drop=True)

    def add_ons(self) -> pd.DataFrame:
        return self._add_ons.reset_index(drop=True)

    def sizes(self) -> pd.DataFrame:
        return self._sizes.reset_index(drop=True)

    def conditions(self) -> pd.DataFrame:
        return self._conditions.reset_index(drop=True)

    # Lookups

    @staticmethod
    def _lookup(df: pd.DataFrame, code: str, column: str, kind: str) -> Decimal:
        code = str(code).strip()
        if code not in df.index:
            raise CatalogError(f"Unknown {kind} '{code}'")
        return Decimal(df.loc[code, column])

    def package_price(self, code: str) -> Decimal:
        return self._lookup(self._packages, code, 'price', 'package')

    def add_on_price(self, code: str) -> Decimal:
        return self._lookup(self._add_ons, code, 'price', 'add-on')

    def size_multiplier(self, code: str) -> Decimal:
        return self._lookup(self._sizes, code, 'multiplier', 'vehicle size')

    def condition_multiplier(self, code: str) -> Decimal:
        return self._lookup(self._conditions, code, 'multiplier', 'condition')

    def build_input(self, selection: QuoteSelection) -> PricingInput:
        """
        Resolve a code-based selection into a PricingInput.

        A package code wins over a custom amount. Amount validation is left
        to the engine so the same error reasons apply to every caller.
        """
        if selection.package:
            source = PackagePrice(amount=self.package_price(selection.package))
        else:
            source = CustomPrice(amount=selection.custom_amount)

        return PricingInput(
            base_price_source=source,
            size_multiplier=self.size_multiplier(selection.size),
            condition_multiplier=self.condition_multiplier(selection.condition),
            job_type=selection.job_type,
            frequency=selection.frequency,
            add_on_amounts=tuple(self.add_on_price(code) for code in selection.add_ons),
        )

    def to_dict(self) -> dict:
        """Catalog contents as plain JSON-friendly records."""
        def records(df: pd.DataFrame, value_col: str) -> list[dict]:
            out = []
            for row in df.to_dict(orient='records'):
                row[value_col] = float(row[value_col])
                out.append(row)
            return out

        return {
            "packages": records(self.packages(), 'price'),
            "sizes": records(self.sizes(), 'multiplier'),
            "conditions": records(self.conditions(), 'multiplier'),
            "addOns": records(self.add_ons(), 'price'),
        }
