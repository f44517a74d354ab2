"""Screenshot routes."""
import asyncio
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from screenshot_api.api.deps import get_controller, settings
from screenshot_api.schemas import ErrorResponse, ScreenshotResponse, SingleScreenshotResponse
from screenshot_scraper import CrawlState, ScraperController
from screenshot_scraper.logger import get_logger
from screenshot_scraper.models import STATUS_TIMEOUT, CrawlResult
from screenshot_scraper.scraper_controller import apply_quality_to_records
from screenshot_scraper.utils import is_numeric_id

logger = get_logger(__name__)

router = APIRouter(tags=["screenshots"])

NOT_FOUND_MESSAGE = "No screenshots found. Profile might be private or the Steam ID might be incorrect."


def error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def crawl_with_timeout(controller: ScraperController, steam_id: str, timeout: float) -> CrawlResult:
    """
    Run a crawl under an end-to-end timeout.

    On timeout the records accumulated so far are returned.
    """
    state = CrawlState(steam_id=steam_id)
    try:
        return await asyncio.wait_for(controller.crawl(steam_id, state), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning(
            "Crawl for %s timed out after %.0fs, returning %d partial results",
            steam_id, timeout, len(state.records),
        )
        return CrawlResult.from_state(state, STATUS_TIMEOUT, timeout)


@router.get("/screenshots", include_in_schema=False)
@router.get("/screenshots/", include_in_schema=False)
async def screenshots_missing_id():
    return error(400, "Steam ID is required")


@router.get(
    "/screenshots/{steam_id}",
    response_model=list[ScreenshotResponse],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_screenshots(
    steam_id: str,
    quality: Optional[str] = Query(None, description="original, high, medium or low"),
    controller: ScraperController = Depends(get_controller),
):
    """Fetch every screenshot of a profile."""
    steam_id = steam_id.strip()
    if not steam_id:
        return error(400, "Steam ID is required")
    if not is_numeric_id(steam_id):
        return error(400, "Steam ID must be numeric")

    logger.info(
        "Fetching ALL screenshots for Steam ID: %s with quality preference: %s",
        steam_id, quality or "highest available",
    )
    result = await crawl_with_timeout(controller, steam_id, settings.request_timeout_seconds)

    if not result.records:
        return error(404, NOT_FOUND_MESSAGE)

    records = apply_quality_to_records(result.records, quality)
    logger.info(
        "Returning %d screenshots to client (status=%s, skipped=%s)",
        len(records), result.status, result.skipped,
    )
    return [ScreenshotResponse.from_record(r) for r in records]


@router.get(
    "/screenshot/{item_id}",
    response_model=SingleScreenshotResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_screenshot(
    item_id: str,
    quality: Optional[str] = Query(None, description="original, high, medium or low"),
    controller: ScraperController = Depends(get_controller),
):
    """Fetch a single screenshot by its id."""
    item_id = item_id.strip()
    if not is_numeric_id(item_id):
        return error(400, "Screenshot ID must be numeric")

    record = await controller.fetch_screenshot(item_id, quality)
    if record is None:
        return error(404, "Screenshot not found")
    return SingleScreenshotResponse.from_record(record, item_id)
