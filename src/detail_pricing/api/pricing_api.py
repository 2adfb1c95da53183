"""
Pricing API - FastAPI router for price calculations and the service catalog.
"""
import logging
from typing import Optional, Union

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt

from ..catalog import QuoteSelection
from ..engine import CustomPrice, PackagePrice, PricingInput, hourly_rate_band
from ..errors import CatalogError, ValidationError
from .state import catalog, engine

logger = logging.getLogger(__name__)

# JSON booleans must not pass as 1 / 0
Number = Union[StrictInt, StrictFloat]

router = APIRouter(tags=["pricing"])

DEFAULT_VEHICLE_NAME = "Unnamed Vehicle"


# Pydantic models for API
class BasePriceSourceModel(BaseModel):
    """Package or custom base price."""
    type: str
    amount: Number


class CalcRequest(BaseModel):
    """Request model for a direct calculation."""
    model_config = ConfigDict(populate_by_name=True)

    base_price_source: BasePriceSourceModel = Field(alias="basePriceSource")
    size_multiplier: Number = Field(1.0, alias="sizeMultiplier")
    condition_multiplier: Number = Field(1.0, alias="conditionMultiplier")
    job_type: str = Field("one_time", alias="jobType")
    frequency: Optional[str] = None
    add_on_amounts: list[Number] = Field(default_factory=list, alias="addOnAmounts")

    def to_input(self) -> PricingInput:
        kind = self.base_price_source.type
        if kind == "package":
            source = PackagePrice(amount=self.base_price_source.amount)
        elif kind == "custom":
            source = CustomPrice(amount=self.base_price_source.amount)
        else:
            raise ValidationError("invalid base price")

        return PricingInput(
            base_price_source=source,
            size_multiplier=self.size_multiplier,
            condition_multiplier=self.condition_multiplier,
            job_type=self.job_type,
            frequency=self.frequency,
            add_on_amounts=tuple(self.add_on_amounts),
        )


class QuoteRequest(BaseModel):
    """Request model for a catalog-driven quote."""
    model_config = ConfigDict(populate_by_name=True)

    vehicle: Optional[str] = None
    package: Optional[str] = None
    custom_amount: Optional[Number] = Field(None, alias="customAmount")
    size: str = "sedan"
    condition: str = "normal"
    job_type: str = Field("one_time", alias="jobType")
    frequency: Optional[str] = None
    add_ons: list[str] = Field(default_factory=list, alias="addOns")


def _error(message: str) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": message})


# Endpoints

@router.post("/pricing/calculate")
async def calculate_price(req: CalcRequest, trace: bool = False):
    """Price a job from raw amounts and multipliers."""
    try:
        result = engine.calculate(req.to_input())
    except ValidationError as e:
        logger.info("Rejected calculation: %s", e.reason)
        return _error(e.reason)
    return result.to_dict(include_trace=trace)


@router.post("/pricing/quote")
async def quote(req: QuoteRequest, trace: bool = False):
    """Price a job described with catalog codes."""
    selection = QuoteSelection(
        package=req.package,
        custom_amount=req.custom_amount,
        size=req.size,
        condition=req.condition,
        job_type=req.job_type,
        frequency=req.frequency,
        add_ons=req.add_ons,
        vehicle=req.vehicle,
    )
    try:
        result = engine.calculate(catalog.build_input(selection))
    except ValidationError as e:
        logger.info("Rejected quote: %s", e.reason)
        return _error(e.reason)
    except CatalogError as e:
        logger.info("Rejected quote: %s", e)
        return _error(str(e))

    return {
        "vehicle": (req.vehicle or "").strip() or DEFAULT_VEHICLE_NAME,
        "result": result.to_dict(include_trace=trace),
        "hourlyBand": hourly_rate_band(result.employee_hourly_rate, engine.constants),
    }


@router.get("/catalog")
async def get_catalog():
    """List packages, vehicle sizes, conditions and add-ons."""
    return catalog.to_dict()
