"""Pydantic schemas."""
from screenshot_api.schemas.screenshot import (
    ScreenshotResponse,
    SingleScreenshotResponse,
    ErrorResponse,
)

__all__ = [
    "ScreenshotResponse",
    "SingleScreenshotResponse",
    "ErrorResponse",
]
