from typing import Annotated, Literal

from pydantic import BaseModel, Field

DurationClass = Literal["all", "short", "long"]
Period = Literal["all", "1month", "2months", "6months", "1year"]
RatioBucket = Annotated[int, Field(ge=1, le=5)]


class VideoRecord(BaseModel):
    id: str
    title: str
    published_at: str
    view_count: int = 0
    like_count: int = 0
    channel_id: str
    channel_title: str
    channel_country: str | None = None
    duration: str = "00:00"
    duration_seconds: int = 0
    subscriber_count: int = 0
    view_subscriber_ratio: float = 0.0
    description: str = ""
    tags: list[str] | None = None
    thumbnail: str = ""
    transcript: str | None = None


class FilterCriteria(BaseModel):
    duration: DurationClass = "all"
    period: Period = "all"
    view_subscriber_ratio: frozenset[RatioBucket] = frozenset()

    model_config = {"frozen": True}


class SearchRequest(BaseModel):
    query: str
    criteria: FilterCriteria = FilterCriteria()


class SearchResponse(BaseModel):
    query: str
    criteria: FilterCriteria
    result_count: int
    videos: list[VideoRecord]


class VideoStatistics(BaseModel):
    view_count: int = 0
    like_count: int = 0
    comment_count: int = 0
    duration: str = ""


class VideoAnalysisData(BaseModel):
    video_id: str
    title: str
    channel_title: str
    published_at: str
    description: str = ""
    statistics: VideoStatistics
    transcript: str = ""
    tags: list[str] = []
    thumbnail: str = ""


class VideoAnalysis(BaseModel):
    video_id: str
    title: str
    channel_title: str
    analysis_prompt: str = ""
    data: VideoAnalysisData | None = None
