from typing import Literal

from pydantic import BaseModel

ChannelSort = Literal["date", "viewCount", "rating"]


class VideoCategory(BaseModel):
    id: str
    title: str


class ChannelStats(BaseModel):
    channel_id: str
    title: str
    description: str = ""
    created_at: str = ""
    subscriber_count: int = 0
    video_count: int = 0
    view_count: int = 0
    thumbnail_url: str = ""


class ChannelAverages(BaseModel):
    view_count: float = 0
    like_count: float = 0
    comment_count: float = 0


class ChannelVideoSummary(BaseModel):
    video_id: str
    title: str | None = None
    published_at: str | None = None
    duration: str | None = None
    duration_seconds: int = 0
    view_count: int = 0
    like_count: int = 0
    comment_count: int = 0


class ChannelVideoAnalysis(BaseModel):
    channel_id: str
    video_count: int = 0
    averages: ChannelAverages
    videos: list[ChannelVideoSummary] = []
