"""
Fact Fusion store service - FastAPI Application.

REST API acting as the remote system of record for facts.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from factfusion.config import get_settings
from factfusion.database import init_db
from factfusion.routes import facts_router


settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    logger.info("Starting Fact Fusion store...")
    init_db(seed=settings.seed_sample_facts)
    logger.info("Database initialized")

    yield

    # Shutdown
    logger.info("Shutting down Fact Fusion store...")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="System of record for community-submitted facts and their vote counters.",
    version=settings.app_version,
    lifespan=lifespan,
)

# Configure CORS
origins = [o.strip() for o in settings.allowed_origins.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Include routers
app.include_router(facts_router, prefix="/api")


# Root endpoint
@app.get("/")
def root():
    """Service name, version and where the facts live."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "facts_url": "/api/facts/",
    }


# Health check at root level too
@app.get("/health")
def root_health():
    """Quick health check."""
    return {"status": "ok", "version": settings.app_version}


def main():
    """Run the store with uvicorn."""
    import uvicorn
    uvicorn.run(
        "factfusion.app:app",
        host="0.0.0.0",
        port=8001,
        reload=settings.debug
    )


if __name__ == "__main__":
    main()
