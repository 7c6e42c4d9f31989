"""
FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from poultry_dashboard.config import settings
from poultry_dashboard.api.v1.routers import dashboard, finance, flocks, inventory, reports, security, session
from poultry_dashboard.infrastructure.clock import Clock, SystemClock
from poultry_dashboard.infrastructure.seed_data import build_seeded_store
from poultry_dashboard.middleware.error_handler import ErrorHandlerMiddleware
from poultry_dashboard.services.domain.report_store import ReportStore

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def create_app(
    store: Optional[ReportStore] = None,
    clock: Optional[Clock] = None,
    rate_limit: Optional[str] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        store: Record store to serve; built from settings at startup when omitted
        clock: Farm clock; a system clock in the configured timezone when omitted
        rate_limit: slowapi limit string overriding the configured requests/minute

    Returns:
        FastAPI application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan context manager.

        Creates the one store and clock the application serves from.
        """
        # Startup
        logger.info(f"Starting {settings.app_name} v{settings.app_version}")
        logger.info(f"Log level: {settings.log_level}")
        app_clock = clock or SystemClock(settings.farm_timezone)
        app_store = store
        if app_store is None:
            if settings.seed_on_startup:
                app_store = build_seeded_store(app_clock, reject_unknown_flocks=settings.reject_unknown_flocks)
            else:
                app_store = ReportStore(clock=app_clock, reject_unknown_flocks=settings.reject_unknown_flocks)
        app.state.clock = app_clock
        app.state.store = app_store
        logger.info(f"Farm calendar: {settings.farm_timezone}, today is {app_clock.today().isoformat()}")
        logger.info(f"Loaded {len(app_store.list_flocks())} flocks")
        logger.info(f"Rate limit: {settings.rate_limit_requests} requests/minute "
                    f"({'enabled' if settings.rate_limit_enabled else 'disabled'})")

        yield

        # Shutdown
        logger.info("Shutdown complete")

    application = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        description="""
    Operations API for a layer poultry farm

    Records daily flock reports and farm-wide records, and serves the
    dashboard and report figures derived from them.

    ## Features

    - **Daily Reports**: Feed & water, mortality, medicine and egg production
      per flock, individually or as one daily entry
    - **Flock Ledger**: Live bird count and cumulative mortality, feed and eggs
      kept in step with every submission
    - **Dashboard Metrics**: Today's totals, 7-day egg and feed trends,
      low-stock alerts, production percentage and cash balances
    - **Role Policy**: Pages and actions available to Admin, Manager, Worker,
      Accountant and Security Guard

    Mutating requests state the caller's role in the `X-Farm-Role` header.

    ## Egg Counting

    Eggs are counted in cases (360 eggs), trays (30 eggs) and loose eggs.
    """,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Rate limiter
    limiter = Limiter(
        key_func=get_remote_address,
        default_limits=[rate_limit or f"{settings.rate_limit_requests}/minute"],
        enabled=settings.rate_limit_enabled or rate_limit is not None,
    )
    application.state.limiter = limiter
    application.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    application.add_middleware(SlowAPIMiddleware)

    # Add CORS middleware with configurable origins
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add global error handling middleware
    application.add_middleware(ErrorHandlerMiddleware)

    # Include routers
    for module in (session, flocks, reports, finance, inventory, security, dashboard):
        application.include_router(module.router, prefix="/api/v1")

    @application.get("/", tags=["health"])
    async def root():
        """
        Root endpoint for health check.

        Returns:
            Status message
        """
        return {
            "status": "healthy",
            "service": settings.app_name,
            "version": settings.app_version,
        }

    @application.get("/health", tags=["health"])
    async def health_check():
        """
        Health check endpoint.

        Returns:
            Health status
        """
        return {
            "status": "healthy",
            "service": settings.app_name,
        }

    return application


# Create FastAPI application
app = create_app()
