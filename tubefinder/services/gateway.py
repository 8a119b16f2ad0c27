"""Typed wrappers around the YouTube gateway's HTTP endpoints.

Every endpoint takes a JSON body via POST and answers with JSON. Decoding is
lenient: fields the gateway leaves out fall back to empty values instead of
failing the call.
"""

import logging
import math
from collections.abc import Callable
from typing import Any

import httpx

from tubefinder.config import get_settings
from tubefinder.exceptions import NetworkFailure, RemoteFailure
from tubefinder.http_client import get_client
from tubefinder.models.channels import (
    ChannelAverages,
    ChannelSort,
    ChannelStats,
    ChannelVideoAnalysis,
    ChannelVideoSummary,
    VideoCategory,
)
from tubefinder.models.comments import CommentOrder, CommentReply, VideoComment, VideoCommentsPage
from tubefinder.models.transcripts import (
    EnhancedTranscript,
    KeyMoments,
    SegmentedTranscript,
    TranscriptFormat,
    TranscriptSegment,
    VideoTranscript,
)
from tubefinder.models.videos import VideoAnalysis, VideoAnalysisData, VideoRecord, VideoStatistics
from tubefinder.services.duration import format_milliseconds, format_seconds, parse_duration

logger = logging.getLogger(__name__)

# Decoded values are coerced field by field: the gateway may omit a key, send
# null, or send a value of the wrong type, and none of those fail a call.


def _int(value, default: int = 0) -> int:
    if isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return default


def _float(value, default: float = 0.0) -> float:
    if isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


def _str(value, default: str = "") -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return default


def _opt_str(value) -> str | None:
    return _str(value) or None


def _str_list(value) -> list[str] | None:
    if not isinstance(value, list):
        return None
    return [item for item in value if isinstance(item, str)]


def _dict(value) -> dict:
    return value if isinstance(value, dict) else {}


def _dicts(value) -> list[dict]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _upstream_message(resp: httpx.Response) -> str | None:
    try:
        data = resp.json()
    except ValueError:
        text = resp.text.strip()
        return text[:500] or None
    if isinstance(data, dict):
        for key in ("error", "message", "detail"):
            value = data.get(key)
            if isinstance(value, str) and value:
                return value
            if isinstance(value, dict) and value.get("message"):
                return str(value["message"])
    return None


def _handle_response(resp: httpx.Response, endpoint: str) -> dict:
    if not resp.is_success:
        message = _upstream_message(resp) or f"HTTP {resp.status_code} {resp.reason_phrase}".strip()
        raise RemoteFailure(message, status=resp.status_code, endpoint=endpoint)
    if not resp.content:
        return {}
    try:
        data = resp.json()
    except ValueError as e:
        raise NetworkFailure(f"Gateway returned invalid JSON for {endpoint}", endpoint=endpoint) from e
    if not isinstance(data, dict):
        raise NetworkFailure(f"Gateway returned unexpected payload for {endpoint}", endpoint=endpoint)
    return data


def _parse_video(item: dict) -> VideoRecord:
    raw_duration = item.get("duration")
    seconds = item.get("durationSeconds")
    if seconds is None:
        seconds = parse_duration(raw_duration) if isinstance(raw_duration, str) else _int(raw_duration)
    seconds = max(_int(seconds), 0)
    if isinstance(raw_duration, str) and raw_duration and not raw_duration.startswith("P"):
        display = raw_duration
    else:
        display = format_seconds(seconds)
    return VideoRecord(
        id=_str(item.get("id")),
        title=_str(item.get("title")),
        published_at=_str(item.get("publishedAt")),
        view_count=_int(item.get("viewCount")),
        like_count=_int(item.get("likeCount")),
        channel_id=_str(item.get("channelId")),
        channel_title=_str(item.get("channelTitle")),
        channel_country=_opt_str(item.get("channelCountry")),
        duration=display,
        duration_seconds=seconds,
        subscriber_count=_int(item.get("subscriberCount")),
        view_subscriber_ratio=_float(item.get("viewSubscriberRatio")),
        description=_str(item.get("description")),
        tags=_str_list(item.get("tags")),
        thumbnail=_str(item.get("thumbnail")),
        transcript=_opt_str(item.get("transcript")),
    )


def _parse_videos(data: dict) -> list[VideoRecord]:
    return [_parse_video(item) for item in _dicts(data.get("items"))]


def _parse_categories(data: dict) -> list[VideoCategory]:
    return [
        VideoCategory(id=_str(item.get("id")), title=_str(item.get("title")))
        for item in _dicts(data.get("categories"))
    ]


def _parse_analysis(data: dict, video_id: str) -> VideoAnalysis:
    raw = data.get("data")
    detail = None
    if isinstance(raw, dict):
        stats = _dict(raw.get("statistics"))
        detail = VideoAnalysisData(
            video_id=_str(raw.get("videoId"), video_id),
            title=_str(raw.get("title")),
            channel_title=_str(raw.get("channelTitle")),
            published_at=_str(raw.get("publishedAt")),
            description=_str(raw.get("description")),
            statistics=VideoStatistics(
                view_count=_int(stats.get("viewCount")),
                like_count=_int(stats.get("likeCount")),
                comment_count=_int(stats.get("commentCount")),
                duration=_str(stats.get("duration")),
            ),
            transcript=_str(raw.get("transcript")),
            tags=_str_list(raw.get("tags")) or [],
            thumbnail=_str(raw.get("thumbnail")),
        )
    return VideoAnalysis(
        video_id=_str(data.get("videoId"), video_id),
        title=_str(data.get("title")),
        channel_title=_str(data.get("channelTitle")),
        analysis_prompt=_str(data.get("analysisPrompt")),
        data=detail,
    )


def _parse_channel_stats(data: dict, channel_id: str) -> ChannelStats:
    return ChannelStats(
        channel_id=_str(data.get("channelId"), channel_id),
        title=_str(data.get("title")),
        description=_str(data.get("description")),
        created_at=_str(data.get("createdAt")),
        subscriber_count=_int(data.get("subscriberCount")),
        video_count=_int(data.get("videoCount")),
        view_count=_int(data.get("viewCount")),
        thumbnail_url=_str(data.get("thumbnailUrl")),
    )


def _parse_channel_analysis(data: dict, channel_id: str) -> ChannelVideoAnalysis:
    averages = _dict(data.get("averages"))
    videos = []
    for item in _dicts(data.get("videos")):
        duration = _opt_str(item.get("duration"))
        videos.append(ChannelVideoSummary(
            video_id=_str(item.get("videoId")),
            title=_opt_str(item.get("title")),
            published_at=_opt_str(item.get("publishedAt")),
            duration=duration,
            duration_seconds=parse_duration(duration),
            view_count=_int(item.get("viewCount")),
            like_count=_int(item.get("likeCount")),
            comment_count=_int(item.get("commentCount")),
        ))
    return ChannelVideoAnalysis(
        channel_id=_str(data.get("channelId"), channel_id),
        video_count=_int(data.get("videoCount"), len(videos)),
        averages=ChannelAverages(
            view_count=_float(averages.get("viewCount")),
            like_count=_float(averages.get("likeCount")),
            comment_count=_float(averages.get("commentCount")),
        ),
        videos=videos,
    )


def _parse_transcript(data: dict, video_id: str) -> VideoTranscript:
    segments = []
    for seg in _dicts(data.get("segments")):
        offset = _int(seg.get("offset"))
        segments.append(TranscriptSegment(
            text=_str(seg.get("text")),
            offset=offset,
            duration=_int(seg.get("duration")),
            timestamp=format_milliseconds(offset),
        ))
    return VideoTranscript(
        video_id=_str(data.get("videoId"), video_id),
        transcript=_str(data.get("transcript")),
        segments=segments,
    )


def _parse_key_moments(data: dict, video_id: str) -> KeyMoments:
    return KeyMoments(
        video_id=_str(data.get("videoId"), video_id),
        text=_str(data.get("text")),
        metadata=data.get("metadata"),
    )


def _parse_segmented(data: dict, video_id: str) -> SegmentedTranscript:
    return SegmentedTranscript(
        video_id=_str(data.get("videoId"), video_id),
        text=_str(data.get("text")),
        metadata=data.get("metadata"),
    )


def _parse_comment(item: dict) -> VideoComment:
    return VideoComment(
        id=_str(item.get("id")),
        author=_str(item.get("author")),
        author_channel_id=_opt_str(item.get("authorChannelId")),
        text=_str(item.get("text")),
        like_count=_int(item.get("likeCount")),
        published_at=_str(item.get("publishedAt")),
        updated_at=_opt_str(item.get("updatedAt")),
        replies=[
            CommentReply(
                id=_str(reply.get("id")),
                author=_str(reply.get("author")),
                text=_str(reply.get("text")),
                like_count=_int(reply.get("likeCount")),
                published_at=_str(reply.get("publishedAt")),
            )
            for reply in _dicts(item.get("replies"))
        ],
    )


def _parse_comments(data: dict, video_id: str) -> VideoCommentsPage:
    page_info = _dict(data.get("pageInfo"))
    comments = [_parse_comment(item) for item in _dicts(data.get("comments"))]
    per_page = page_info.get("resultsPerPage")
    return VideoCommentsPage(
        video_id=_str(data.get("videoId"), video_id),
        total_results=_int(data.get("totalResults"), _int(page_info.get("totalResults"), len(comments))),
        comments=comments,
        next_page_token=_opt_str(data.get("nextPageToken")),
        results_per_page=_int(per_page) if per_page is not None else None,
    )


class GatewayClient:
    """Async client for the YouTube gateway.

    Failures surface as NetworkFailure (transport or undecodable payload) or
    RemoteFailure (non-2xx). Nothing is retried here.
    """

    def __init__(self, base_url: str | None = None, client: httpx.AsyncClient | None = None):
        self.base_url = (base_url or get_settings().gateway_url).rstrip("/")
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client or get_client()

    async def _post(self, endpoint: str, body: dict) -> dict:
        payload = {key: value for key, value in body.items() if value is not None}
        url = f"{self.base_url}/api/{endpoint}"
        logger.debug("POST %s %s", url, payload)
        try:
            resp = await self.client.post(url, json=payload)
        except httpx.HTTPError as e:
            raise NetworkFailure(f"Gateway request to {endpoint} failed: {e}", endpoint=endpoint) from e
        return _handle_response(resp, endpoint)

    async def _call(self, endpoint: str, body: dict, parse: Callable[[dict], Any]):
        data = await self._post(endpoint, body)
        try:
            return parse(data)
        except (ValueError, TypeError, AttributeError) as e:
            raise NetworkFailure(f"Gateway returned a malformed {endpoint} payload: {e}", endpoint=endpoint) from e

    async def search_videos(self, params: dict) -> list[VideoRecord]:
        """Run a search with a body built by filters.build_search_params."""
        return await self._call("search-videos", params, _parse_videos)

    async def analyze_video(self, video_id: str) -> VideoAnalysis:
        return await self._call(
            "video-analysis", {"videoId": video_id},
            lambda data: _parse_analysis(data, video_id),
        )

    async def get_trending_videos(
        self,
        region_code: str = "US",
        category_id: str | None = None,
        max_results: int = 10,
    ) -> list[VideoRecord]:
        return await self._call("get-trending-videos", {
            "regionCode": region_code,
            "categoryId": category_id,
            "maxResults": max_results,
        }, _parse_videos)

    async def get_video_categories(self, region_code: str = "US") -> list[VideoCategory]:
        return await self._call("get-video-categories", {"regionCode": region_code}, _parse_categories)

    async def get_channel_stats(self, channel_id: str) -> ChannelStats:
        return await self._call(
            "get-channel-stats", {"channelId": channel_id},
            lambda data: _parse_channel_stats(data, channel_id),
        )

    async def analyze_channel_videos(
        self,
        channel_id: str,
        max_results: int = 10,
        sort_by: ChannelSort = "date",
    ) -> ChannelVideoAnalysis:
        return await self._call("analyze-channel-videos", {
            "channelId": channel_id,
            "maxResults": max_results,
            "sortBy": sort_by,
        }, lambda data: _parse_channel_analysis(data, channel_id))

    async def get_video_transcript(self, video_id: str, language: str | None = None) -> VideoTranscript:
        return await self._call(
            "get-video-transcript", {"videoId": video_id, "language": language},
            lambda data: _parse_transcript(data, video_id),
        )

    async def get_enhanced_transcript(
        self,
        video_ids: list[str],
        language: str | None = None,
        format: TranscriptFormat = "timestamped",
        include_metadata: bool = True,
        filters: dict | None = None,
    ) -> EnhancedTranscript:
        """Fetch the enhanced transcript; its shape varies with the options, so it is kept as-is."""
        return await self._call("enhanced-transcript", {
            "videoIds": list(video_ids),
            "language": language,
            "format": format,
            "includeMetadata": include_metadata,
            "filters": filters,
        }, lambda data: EnhancedTranscript(video_ids=list(video_ids), payload=data))

    async def get_key_moments(self, video_id: str, max_moments: int = 5) -> KeyMoments:
        return await self._call(
            "get-key-moments", {"videoId": video_id, "maxMoments": max_moments},
            lambda data: _parse_key_moments(data, video_id),
        )

    async def get_segmented_transcript(self, video_id: str, segment_count: int = 4) -> SegmentedTranscript:
        return await self._call(
            "get-segmented-transcript", {"videoId": video_id, "segmentCount": segment_count},
            lambda data: _parse_segmented(data, video_id),
        )

    async def get_video_comments(
        self,
        video_id: str,
        max_results: int = 20,
        order: CommentOrder = "relevance",
        include_replies: bool = False,
        page_token: str | None = None,
    ) -> VideoCommentsPage:
        return await self._call("get-video-comments", {
            "videoId": video_id,
            "maxResults": max_results,
            "order": order,
            "includeReplies": include_replies,
            "pageToken": page_token,
        }, lambda data: _parse_comments(data, video_id))


def get_gateway() -> GatewayClient:
    return GatewayClient()
