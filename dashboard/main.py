import logging.config
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dashboard.api.router import api_router
from dashboard.config import get_settings
from dashboard.logging_config import configure_logging
from dashboard.middleware import RequestLoggingMiddleware

# Configure logging
logging.config.dictConfig(configure_logging())
logger = logging.getLogger("dashboard.main")

# Get settings
settings = get_settings()

# Initialize FastAPI application
app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    debug=settings.DEBUG,
)

# Set up CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add custom middleware
app.add_middleware(RequestLoggingMiddleware)

# Include API router
app.include_router(api_router, prefix=settings.API_V1_STR)


@app.on_event("startup")
async def on_startup():
    """Startup tasks for the application."""
    logger.info(f"Starting {settings.PROJECT_NAME} against {settings.SUPABASE_URL}")
    if not settings.SUPABASE_ANON_KEY:
        logger.warning("SUPABASE_ANON_KEY is not set; every store request will be rejected")


@app.on_event("shutdown")
async def on_shutdown():
    """Shutdown tasks for the application."""
    logger.info(f"Shutting down {settings.PROJECT_NAME}")


@app.get("/", tags=["Health"])
async def health_check():
    """Root endpoint for health checks."""
    return {"status": "healthy", "message": f"{settings.PROJECT_NAME} is running"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "dashboard.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
