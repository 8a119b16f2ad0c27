from fastmcp import FastMCP

from tubefinder.config import get_settings
from tubefinder.exceptions import NetworkFailure, NoContentAvailable, RemoteFailure, TubefinderError
from tubefinder.models.videos import FilterCriteria
from tubefinder.services import enrichment as enrichment_service
from tubefinder.services import gateway as gateway_service
from tubefinder.services import search as search_service

mcp = FastMCP("Tubefinder")


def _handle_mcp_error(e: Exception) -> dict:
    """Convert exceptions to agent-friendly error dicts."""
    if isinstance(e, NetworkFailure):
        return {"error": "network_error", "message": str(e), "action": "Check that the gateway is running, then retry"}
    if isinstance(e, RemoteFailure):
        return {"error": "remote_error", "message": str(e), "upstream_status": e.status, "action": "Retry the same call"}
    if isinstance(e, NoContentAvailable):
        return {"error": "no_content", "message": str(e)}
    return {"error": "unknown_error", "message": str(e)}


# --- Video tools ---

@mcp.tool
async def search_videos(
    query: str,
    duration: str = "all",
    period: str = "all",
    ratio_buckets: list[int] | None = None,
) -> dict:
    """Search YouTube videos through the gateway, sorted by views.
    duration: all, short (<60s) or long (>=60s). period: all, 1month, 2months, 6months, 1year.
    ratio_buckets: any of 1-5 (views/subscribers: 1 <0.2, 2 <0.6, 3 <1.4, 4 <3.0, 5 >=3.0); empty keeps all."""
    try:
        criteria = FilterCriteria(duration=duration, period=period, view_subscriber_ratio=ratio_buckets or [])
    except ValueError as e:
        return {"error": "invalid_criteria", "message": str(e)}
    try:
        videos = await search_service.search(gateway_service.get_gateway(), query, criteria)
        return {"videos": [v.model_dump() for v in videos], "count": len(videos)}
    except TubefinderError as e:
        return _handle_mcp_error(e)


@mcp.tool
async def video_enrichment(video_id: str) -> dict:
    """Get every available transcript facet of a video: basic transcript, enhanced transcript,
    key moments and a segmented transcript. Missing facets are listed under 'unavailable'."""
    try:
        bundle = await enrichment_service.fetch_enrichment(gateway_service.get_gateway(), video_id)
        return {**bundle.model_dump(), "unavailable": bundle.unavailable}
    except TubefinderError as e:
        return _handle_mcp_error(e)


@mcp.tool
async def video_analysis(video_id: str) -> dict:
    """Get a video's details, statistics and transcript bundled with an analysis prompt."""
    try:
        return (await gateway_service.get_gateway().analyze_video(video_id)).model_dump()
    except TubefinderError as e:
        return _handle_mcp_error(e)


@mcp.tool
async def video_comments(video_id: str, max_results: int = 20, order: str = "relevance", include_replies: bool = False) -> dict:
    """List top-level comments on a video. order: relevance or time."""
    try:
        page = await gateway_service.get_gateway().get_video_comments(video_id, max_results, order, include_replies)
        return page.model_dump()
    except TubefinderError as e:
        return _handle_mcp_error(e)


# --- Channel tools ---

@mcp.tool
async def channel_stats(channel_id: str) -> dict:
    """Get a channel's subscriber, video and view counts."""
    try:
        return (await gateway_service.get_gateway().get_channel_stats(channel_id)).model_dump()
    except TubefinderError as e:
        return _handle_mcp_error(e)


@mcp.tool
async def channel_videos(channel_id: str, max_results: int = 10, sort_by: str = "date") -> dict:
    """Analyze a channel's recent videos with per-video and average counts. sort_by: date, viewCount or rating."""
    try:
        return (await gateway_service.get_gateway().analyze_channel_videos(channel_id, max_results, sort_by)).model_dump()
    except TubefinderError as e:
        return _handle_mcp_error(e)


# --- Trending tools ---

@mcp.tool
async def trending_videos(region_code: str, category_id: str | None = None, max_results: int = 10) -> dict:
    """Get trending videos for a region (e.g. 'US', 'KR'), optionally within a category id."""
    try:
        videos = await gateway_service.get_gateway().get_trending_videos(region_code, category_id, max_results)
        return {"videos": [v.model_dump() for v in videos], "count": len(videos)}
    except TubefinderError as e:
        return _handle_mcp_error(e)


@mcp.tool
async def video_categories(region_code: str | None = None) -> dict:
    """List the video categories available in a region."""
    region = region_code or get_settings().default_region
    try:
        categories = await gateway_service.get_gateway().get_video_categories(region)
        return {"region_code": region, "categories": [c.model_dump() for c in categories]}
    except TubefinderError as e:
        return _handle_mcp_error(e)
