"""FastAPI application entry point."""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from screenshot_api.api.router import api_router
from screenshot_api.core.config import settings
from screenshot_scraper import ScraperController
from screenshot_scraper.logger import get_logger, setup_logging

setup_logging(settings.log_level)
logger = get_logger(__name__)

BANNER = (
    "Steam Screenshots API is running. "
    "Use /screenshots/:steamID to fetch ALL screenshots in highest quality."
)

app = FastAPI(
    title=settings.app_name,
    version=settings.api_version,
    debug=settings.debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/", response_class=PlainTextResponse)
async def root():
    """Service banner."""
    return BANNER


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler to log all errors."""
    logger.exception("ERROR: %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"error": str(exc), "type": type(exc).__name__}
    )


app.include_router(api_router)


@app.on_event("startup")
async def startup_event():
    """Run on application startup."""
    app.state.controller = ScraperController(settings.scraper_config())
    logger.info("%s v%s", settings.app_name, settings.api_version)
    logger.info("CORS origins: %s", settings.cors_origins_list)
    logger.info("Crawl timeout: %.0fs, batch size: %d", settings.request_timeout_seconds, settings.batch_size)
    logger.info("Application is READY at: http://%s:%s", settings.host, settings.port)


@app.on_event("shutdown")
async def shutdown_event():
    """Run on application shutdown."""
    logger.info("Shutting down...")
    controller = getattr(app.state, "controller", None)
    if controller is not None:
        await controller.close()
    logger.info("Stopped")

