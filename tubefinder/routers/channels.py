from fastapi import APIRouter

from tubefinder.models.channels import ChannelSort, ChannelStats, ChannelVideoAnalysis
from tubefinder.services import gateway as gateway_service

router = APIRouter(prefix="/api/channels", tags=["channels"])


@router.get("/{channel_id}")
async def channel_stats(channel_id: str) -> ChannelStats:
    return await gateway_service.get_gateway().get_channel_stats(channel_id)


@router.get("/{channel_id}/videos")
async def channel_videos(channel_id: str, max_results: int = 10, sort_by: ChannelSort = "date") -> ChannelVideoAnalysis:
    return await gateway_service.get_gateway().analyze_channel_videos(channel_id, max_results, sort_by)
