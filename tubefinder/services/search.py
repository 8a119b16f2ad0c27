import logging
from datetime import datetime

from tubefinder.config import get_settings
from tubefinder.models.videos import FilterCriteria, VideoRecord
from tubefinder.services.filters import apply_local_filters, build_search_params
from tubefinder.services.gateway import GatewayClient

logger = logging.getLogger(__name__)


async def search(
    gateway: GatewayClient,
    query: str,
    criteria: FilterCriteria,
    max_results: int | None = None,
    now: datetime | None = None,
) -> list[VideoRecord]:
    """Search the gateway and re-filter the fresh results against the criteria."""
    if not query.strip():
        return []
    if max_results is None:
        max_results = get_settings().search_max_results
    params = build_search_params(query, criteria, max_results=max_results, now=now)
    raw = await gateway.search_videos(params)
    videos = apply_local_filters(raw, criteria)
    logger.info("Search %r returned %d videos, %d after local filters", query, len(raw), len(videos))
    return videos
