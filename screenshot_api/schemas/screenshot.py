"""Screenshot schemas."""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from screenshot_scraper.models import MediaRecord


class ScreenshotResponse(BaseModel):
    """One screenshot with its direct image URL."""
    model_config = ConfigDict(populate_by_name=True)

    page_url: str = Field(alias="pageUrl")
    image_url: str = Field(alias="imageUrl")
    title: Optional[str] = None
    game_name: Optional[str] = Field(default=None, alias="gameName")
    quality_estimate: Optional[str] = Field(default=None, alias="qualityEstimate")

    @classmethod
    def from_record(cls, record: MediaRecord) -> "ScreenshotResponse":
        return cls(
            page_url=record.page_url,
            image_url=record.image_url,
            title=record.title,
            game_name=record.game_name,
            quality_estimate=record.quality_estimate,
        )


class SingleScreenshotResponse(ScreenshotResponse):
    """A screenshot looked up by its id."""
    id: str

    @classmethod
    def from_record(cls, record: MediaRecord, item_id: str = "") -> "SingleScreenshotResponse":
        return cls(
            id=item_id,
            page_url=record.page_url,
            image_url=record.image_url,
            title=record.title,
            game_name=record.game_name,
            quality_estimate=record.quality_estimate,
        )


class ErrorResponse(BaseModel):
    """Error body."""
    error: str
