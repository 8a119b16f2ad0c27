from typing import Literal

from pydantic import BaseModel

CommentOrder = Literal["time", "relevance"]


class CommentReply(BaseModel):
    id: str
    author: str
    text: str
    like_count: int = 0
    published_at: str = ""


class VideoComment(BaseModel):
    id: str
    author: str
    author_channel_id: str | None = None
    text: str
    like_count: int = 0
    published_at: str = ""
    updated_at: str | None = None
    replies: list[CommentReply] = []


class VideoCommentsPage(BaseModel):
    video_id: str
    total_results: int = 0
    comments: list[VideoComment] = []
    next_page_token: str | None = None
    results_per_page: int | None = None
