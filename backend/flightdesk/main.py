"""
FlightDesk - Backend Main Application
FastAPI entry point

Endpoints (all under /api/v1):
    /health           - Health check
    /locations        - Airport keyword search
    /airports         - Airport details by IATA code
    /airlines         - Carrier names by code
    /flights          - Flight offer search
    /flights/confirm  - Price a selected offer
    /traveler         - Traveler preview
    /bookings/order   - Place an order
"""

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from flightdesk.api.v1.booking_routes import router as booking_router
from flightdesk.api.v1.flight_routes import router as flight_router
from flightdesk.api.v1.location_routes import router as location_router
from flightdesk.core.config import load_settings
from flightdesk.services.flight.airport_cache import AirportCache
from flightdesk.services.flight.service import FlightService
from flightdesk.services.integration.amadeus.client import AmadeusClient
from flightdesk.services.integration.common.errors import ErrorResponse, ProviderError

load_dotenv()

# ═══════════════════════════════════════════════════════════════════
# LOGGING
# ═══════════════════════════════════════════════════════════════════

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger("FlightDesk-Backend")


# ═══════════════════════════════════════════════════════════════════
# LIFESPAN (Startup & Shutdown)
# ═══════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown events"""

    # ─────────── STARTUP ───────────
    logger.info("🚀 Starting FlightDesk Backend...")

    # Missing credentials raise ConfigurationError here and abort startup
    settings = load_settings()

    client = AmadeusClient.from_settings(settings)
    airport_cache = AirportCache(client.resolve_airport)
    app.state.flight_service = FlightService(client, airport_cache)

    logger.info(f"✅ FlightDesk Backend started | provider={settings.amadeus_hostname}")

    yield

    # ─────────── SHUTDOWN ───────────
    logger.info("🛑 Shutting down FlightDesk Backend...")
    try:
        await client.aclose()
    except Exception as e:
        logger.warning(f"⚠️ Provider client close error: {e}")
    logger.info("👋 FlightDesk Backend stopped")


# ═══════════════════════════════════════════════════════════════════
# FASTAPI APP
# ═══════════════════════════════════════════════════════════════════

app = FastAPI(
    title="FlightDesk",
    description="Flight search, pricing and booking on top of the Amadeus Self-Service APIs",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ═══════════════════════════════════════════════════════════════════
# ROUTERS
# ═══════════════════════════════════════════════════════════════════

app.include_router(location_router, prefix="/api/v1")  # /api/v1/locations, /airports, /airlines
app.include_router(flight_router, prefix="/api/v1")    # /api/v1/flights/...
app.include_router(booking_router, prefix="/api/v1")   # /api/v1/traveler, /bookings/order


@app.get("/api/v1/health")
async def health_check():
    return {"status": "ok"}


# ═══════════════════════════════════════════════════════════════════
# ERROR HANDLERS
# ═══════════════════════════════════════════════════════════════════

@app.exception_handler(ProviderError)
async def provider_exception_handler(request: Request, exc: ProviderError):
    logger.warning(f"Provider error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(
            error="Provider rejected the request",
            details=exc.message,
            category=exc.status_category,
        ).model_dump(exclude_none=True),
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(error="Internal server error", details=str(exc)).model_dump(exclude_none=True),
    )


# ═══════════════════════════════════════════════════════════════════
# RUN (for development)
# ═══════════════════════════════════════════════════════════════════

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "flightdesk.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
