"""FastAPI application entry point."""
from typing import Optional
from fastapi import FastAPI, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from medgate.core.logging_config import logger
from medgate.api.v1.router import api_router
from medgate.services.authorization import AuthorizationEvaluator
from medgate.services.cache import ReferenceDataCache
from medgate.services.projections import CapabilityProjector
from medgate.services.reference_data import ReferenceDataService
from medgate.services.transport import ApiTransport

SERVICE_NAME = "Medical Records Access Gateway"
VERSION = "1.0.0"

# CORS (enable for local dev UI)
origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]


def create_app(
    transport: Optional[ApiTransport] = None,
    cache: Optional[ReferenceDataCache] = None,
    evaluator: Optional[AuthorizationEvaluator] = None,
) -> FastAPI:
    """Build the application with its collaborators wired onto ``app.state``."""
    logger.info(f"Starting {SERVICE_NAME}")

    app = FastAPI(
        title=SERVICE_NAME,
        description="Advisory authorization decisions and cached reference data for the records UI",
        version=VERSION
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.transport = transport or ApiTransport()
    app.state.reference_cache = cache or ReferenceDataCache()
    app.state.evaluator = evaluator or AuthorizationEvaluator()
    app.state.reference_data = ReferenceDataService(app.state.transport, app.state.reference_cache)
    app.state.projector = CapabilityProjector(app.state.evaluator)

    app.include_router(api_router)
    logger.info("API routes registered successfully")

    @app.on_event("startup")
    async def startup_event():
        logger.info(f"Application startup complete (cache TTL {app.state.reference_cache.ttl}s)")

    @app.on_event("shutdown")
    async def shutdown_event():
        """Close the upstream connection pool."""
        await app.state.transport.aclose()
        logger.info("Application shutting down")

    @app.get("/", tags=["Health"])
    def read_root():
        """Basic health check endpoint."""
        return {"status": f"{SERVICE_NAME} is Operational", "docs": "/docs"}

    @app.get("/health", tags=["Health"], status_code=status.HTTP_200_OK)
    def health_check():
        """Detailed health check endpoint with cache status."""
        health_status = {
            "status": "healthy",
            "service": SERVICE_NAME,
            "version": VERSION,
            "checks": {}
        }

        try:
            cache = app.state.reference_cache
            health_status["checks"]["cache"] = {
                "status": "healthy",
                "message": "Cache operational",
                "cached_keys": cache.keys(),
                "stats": cache.stats(),
            }
        except Exception as e:
            health_status["status"] = "degraded"
            health_status["checks"]["cache"] = {
                "status": "unhealthy",
                "message": f"Cache check failed: {str(e)}"
            }
            logger.error(f"Cache health check failed: {e}")

        health_status["checks"]["upstream"] = {
            "status": "configured",
            "base_url": app.state.transport.base_url,
        }

        status_code = status.HTTP_200_OK
        if health_status["status"] == "degraded":
            status_code = status.HTTP_503_SERVICE_UNAVAILABLE

        return JSONResponse(content=health_status, status_code=status_code)

    return app


app = create_app()
