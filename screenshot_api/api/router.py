"""Main API router - aggregates all route modules."""
from fastapi import APIRouter, Depends

from screenshot_api.api.deps import get_controller
from screenshot_api.api.routes import screenshots
from screenshot_api.core.config import settings
from screenshot_scraper import ScraperController

api_router = APIRouter()

api_router.include_router(screenshots.router)


@api_router.get("/api/health")
async def health_check(controller: ScraperController = Depends(get_controller)):
    """Health check endpoint with the crawler's pacing state."""
    return {
        "status": "healthy",
        "version": settings.api_version,
        "rateLimit": controller.rate_limiter.get_stats(),
        "retry": controller.retry_handler.get_stats(),
    }
