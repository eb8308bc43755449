"""
FastAPI Main Application

Tu Casa en Subasta REST API.
"""
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session

from config.settings import settings
from src.subasta import __version__
from src.subasta.api.dependencies import get_db
from src.subasta.api.routers import admin_sync, auctions, properties
from src.subasta.api.schemas import HealthCheck
from src.subasta.exceptions import ConfigurationError, SyncInProgressError
from src.subasta.utils.logger import get_logger, setup_logging

setup_logging()
logger = get_logger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Tu Casa en Subasta API",
    description="Auction calendars, discounted foreclosure listings and ATTOM data sync",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auctions.router)
app.include_router(properties.router)
app.include_router(admin_sync.router)


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    logger.error("configuration_error", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=503, content={"detail": str(exc)})


@app.exception_handler(SyncInProgressError)
async def sync_in_progress_handler(request: Request, exc: SyncInProgressError):
    return JSONResponse(status_code=409, content={"detail": str(exc)})


@app.get("/health", response_model=HealthCheck, tags=["health"])
def health_check(db: Session = Depends(get_db)):
    """
    Health check endpoint.

    Returns:
        Health status with database connectivity check
    """
    try:
        db.execute(text("SELECT 1"))
        database_status = "connected"
    except Exception as e:
        database_status = f"error: {str(e)}"

    return HealthCheck(
        status="healthy" if database_status == "connected" else "degraded",
        version=__version__,
        database=database_status,
        timestamp=datetime.now(timezone.utc),
    )


@app.get("/", tags=["root"])
def root():
    """
    Root endpoint.

    Returns:
        API information
    """
    return {
        "name": "Tu Casa en Subasta API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
        "features": [
            "Monthly Auction Calendar",
            "Auction Property Rosters",
            "ATTOM Foreclosure Sync",
            "Street View Imagery",
        ]
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.subasta.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
