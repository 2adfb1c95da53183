import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from detail_pricing import __version__
from detail_pricing.config.settings import get_settings
from detail_pricing.api.pricing_api import router as pricing_router

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Detail Pricing API",
    description="Pricing calculator backend for the detailing admin console",
    version=__version__
)

# The calculator is called from the admin console's browser pages
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type"],
)

app.include_router(pricing_router)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # Malformed bodies get the same 400 {"error": ...} shape as engine rejections
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    else:
        message = "invalid request"
    logger.info("Rejected request to %s: %s", request.url.path, message)
    return JSONResponse(status_code=400, content={"error": message})


@app.get("/")
async def root():
    return {"status": "online", "message": "Detail Pricing API Active"}
