from pydantic import BaseModel

from tubefinder.models.channels import VideoCategory
from tubefinder.models.videos import VideoRecord


class BrowseState(BaseModel):
    region: str | None = None
    category: str | None = None
    categories: list[VideoCategory] = []
    trending: list[VideoRecord] = []
    categories_error: str | None = None
    trending_error: str | None = None

    model_config = {"frozen": True}


class RegionSelection(BaseModel):
    region: str | None = None


class CategorySelection(BaseModel):
    category: str | None = None
