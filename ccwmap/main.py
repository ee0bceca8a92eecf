"""FastAPI application entry point."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ccwmap import __version__
from ccwmap.core.config import get_settings
from ccwmap.core.logging import configure_logging
from ccwmap.reciprocity.service import get_engine

from ccwmap.laws.router import router as states_router
from ccwmap.reciprocity import router as reciprocity_router
from ccwmap.comparison import router as compare_router

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    settings = get_settings()
    logger.info("application_starting", app_name=settings.app_name, data_dir=str(settings.data_dir))

    # Load and validate both tables; a ReciprocityDataError aborts startup
    engine = get_engine()
    logger.info("tables_validated", states=len(engine.law_table))

    yield

    logger.info("application_shutdown")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Concealed carry permit reciprocity and state law comparison",
        version=__version__,
        lifespan=lifespan,
    )

    cors_origins = settings.cors_origins.split(",") if settings.cors_origins != "*" else ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(states_router)        # /states
    app.include_router(reciprocity_router)   # /reciprocity
    app.include_router(compare_router)       # /compare

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "name": settings.app_name,
            "version": __version__,
            "endpoints": {
                "states": "/states - State law records and national overview",
                "reciprocity": "/reciprocity/* - Permit status, reach statistics, map colors",
                "compare": "/compare/{a}/{b} - Side-by-side law comparison with travel warnings",
            },
        }

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
