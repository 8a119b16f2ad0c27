from fastapi import APIRouter

from tubefinder.models.comments import CommentOrder, VideoCommentsPage
from tubefinder.models.transcripts import EnrichmentBundle
from tubefinder.models.videos import SearchRequest, SearchResponse, VideoAnalysis
from tubefinder.services import enrichment as enrichment_service
from tubefinder.services import gateway as gateway_service
from tubefinder.services import search as search_service

router = APIRouter(prefix="/api", tags=["videos"])


@router.post("/search")
async def search_videos(request: SearchRequest, max_results: int | None = None) -> SearchResponse:
    videos = await search_service.search(
        gateway_service.get_gateway(), request.query, request.criteria, max_results=max_results,
    )
    return SearchResponse(query=request.query, criteria=request.criteria, result_count=len(videos), videos=videos)


@router.get("/videos/{video_id}/analysis")
async def analyze_video(video_id: str) -> VideoAnalysis:
    return await gateway_service.get_gateway().analyze_video(video_id)


@router.get("/videos/{video_id}/enrichment")
async def video_enrichment(video_id: str) -> EnrichmentBundle:
    return await enrichment_service.fetch_enrichment(gateway_service.get_gateway(), video_id)


@router.get("/videos/{video_id}/comments")
async def video_comments(
    video_id: str,
    max_results: int = 20,
    order: CommentOrder = "relevance",
    include_replies: bool = False,
    page_token: str | None = None,
) -> VideoCommentsPage:
    return await gateway_service.get_gateway().get_video_comments(
        video_id, max_results, order, include_replies, page_token,
    )
