from fastapi import APIRouter

from tubefinder.config import get_settings
from tubefinder.models.browse import BrowseState, CategorySelection, RegionSelection
from tubefinder.models.channels import VideoCategory
from tubefinder.models.videos import VideoRecord
from tubefinder.services import gateway as gateway_service
from tubefinder.services.browse import BrowseSession

router = APIRouter(prefix="/api", tags=["browse"])

_session: BrowseSession | None = None


def get_browse_session() -> BrowseSession:
    """One browse session per process; the server is a single-user localhost tool."""
    global _session
    if _session is None:
        settings = get_settings()
        _session = BrowseSession(
            gateway_service.get_gateway(),
            default_region=settings.default_region,
            trending_max_results=settings.trending_max_results,
        )
    return _session


@router.get("/categories")
async def video_categories(region_code: str | None = None) -> list[VideoCategory]:
    region = region_code or get_settings().default_region
    return await gateway_service.get_gateway().get_video_categories(region)


@router.get("/trending")
async def trending_videos(
    region_code: str | None = None,
    category_id: str | None = None,
    max_results: int | None = None,
) -> list[VideoRecord]:
    if not region_code:
        return []
    if max_results is None:
        max_results = get_settings().trending_max_results
    return await gateway_service.get_gateway().get_trending_videos(region_code, category_id, max_results)


@router.get("/browse")
def browse_state() -> BrowseState:
    return get_browse_session().state


@router.post("/browse/region")
async def set_region(selection: RegionSelection) -> BrowseState:
    return await get_browse_session().set_region(selection.region)


@router.post("/browse/category")
async def set_category(selection: CategorySelection) -> BrowseState:
    return await get_browse_session().set_category(selection.category)


@router.post("/browse/reload")
async def reload_browse() -> BrowseState:
    return await get_browse_session().reload()
