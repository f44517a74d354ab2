"""API dependencies."""
from fastapi import Request

from screenshot_api.core.config import settings
from screenshot_scraper import ScraperController


def get_controller(request: Request) -> ScraperController:
    """Controller owned by the app; created on startup and closed on shutdown."""
    controller = getattr(request.app.state, "controller", None)
    if controller is None:
        raise RuntimeError("Scraper controller is not initialized; application startup has not run")
    return controller


__all__ = ["get_controller", "settings"]
