import logging

from tubefinder.exceptions import NoContentAvailable
from tubefinder.models.transcripts import FACETS, EnrichmentBundle
from tubefinder.services.gateway import GatewayClient
from tubefinder.services.settle import all_failed, failures, settle_all, successes

logger = logging.getLogger(__name__)

KEY_MOMENTS_COUNT = 5
SEGMENT_COUNT = 4


async def fetch_enrichment(gateway: GatewayClient, video_id: str) -> EnrichmentBundle:
    """Fetch all transcript facets of a video concurrently.

    Facets that fail are left empty and logged. Only when every facet fails
    is NoContentAvailable raised.
    """
    outcomes = await settle_all({
        "transcript": gateway.get_video_transcript(video_id),
        "enhanced": gateway.get_enhanced_transcript([video_id], format="timestamped", include_metadata=True),
        "key_moments": gateway.get_key_moments(video_id, KEY_MOMENTS_COUNT),
        "segmented": gateway.get_segmented_transcript(video_id, SEGMENT_COUNT),
    })

    if all_failed(outcomes):
        for facet, error in failures(outcomes).items():
            logger.info("Facet %s unavailable for %s: %s", facet, video_id, error)
        raise NoContentAvailable(f"No captions available for video {video_id}")

    for facet, error in failures(outcomes).items():
        logger.warning("Facet %s failed for %s: %s", facet, video_id, error)

    found = successes(outcomes)
    return EnrichmentBundle(
        video_id=video_id,
        available=[facet for facet in FACETS if facet in found],
        **found,
    )
