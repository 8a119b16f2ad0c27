"""Region/category cascade behind the trending panel.

State changes are pure functions on a frozen BrowseState. Each change
triggers refetches of the category list and the trending list. Every refetch
carries a fence token taken when it was triggered, and its result is written
only if no newer refetch for the same slot has been triggered since.
"""

import asyncio
import logging
from collections import defaultdict

from tubefinder.exceptions import RemoteError
from tubefinder.models.browse import BrowseState
from tubefinder.services.gateway import GatewayClient

logger = logging.getLogger(__name__)

CATEGORIES = "categories"
TRENDING = "trending"


def select_region(state: BrowseState, region: str | None) -> BrowseState:
    """A category only makes sense within its region, so it is always cleared."""
    return state.model_copy(update={"region": region or None, "category": None})


def select_category(state: BrowseState, category: str | None) -> BrowseState:
    return state.model_copy(update={"category": category or None})


class RequestFence:
    """Monotonic per-slot tokens; only the most recently issued one is current."""

    def __init__(self):
        self._latest: dict[str, int] = defaultdict(int)

    def issue(self, slot: str) -> int:
        self._latest[slot] += 1
        return self._latest[slot]

    def is_current(self, slot: str, token: int) -> bool:
        return self._latest[slot] == token


class BrowseSession:
    def __init__(
        self,
        gateway: GatewayClient,
        default_region: str = "US",
        trending_max_results: int = 10,
    ):
        self._gateway = gateway
        self._default_region = default_region
        self._trending_max_results = trending_max_results
        self._fence = RequestFence()
        self.state = BrowseState()

    async def set_region(self, region: str | None) -> BrowseState:
        self.state = select_region(self.state, region)
        await self._refresh(categories=True)
        return self.state

    async def set_category(self, category: str | None) -> BrowseState:
        self.state = select_category(self.state, category)
        await self._refresh(categories=False)
        return self.state

    async def reload(self) -> BrowseState:
        """Re-issue both refetches for the current selection."""
        await self._refresh(categories=True)
        return self.state

    async def _refresh(self, categories: bool) -> None:
        # Parameters and tokens are captured before the first await so a later
        # transition cannot leak into this round of fetches.
        jobs = []
        if categories:
            jobs.append(self._load_categories(
                self._fence.issue(CATEGORIES),
                self.state.region or self._default_region,
            ))
        jobs.append(self._load_trending(
            self._fence.issue(TRENDING),
            self.state.region,
            self.state.category,
        ))
        await asyncio.gather(*jobs)

    def _apply(self, slot: str, token: int, update: dict) -> None:
        if not self._fence.is_current(slot, token):
            logger.debug("Discarding stale %s result (token %d)", slot, token)
            return
        self.state = self.state.model_copy(update=update)

    async def _load_categories(self, token: int, region: str) -> None:
        try:
            categories = await self._gateway.get_video_categories(region)
        except RemoteError as e:
            logger.warning("Failed to load categories for %s: %s", region, e)
            self._apply(CATEGORIES, token, {"categories": [], "categories_error": str(e)})
            return
        except Exception as e:
            logger.exception("Undecodable categories for %s", region)
            self._apply(CATEGORIES, token, {"categories": [], "categories_error": str(e) or type(e).__name__})
            return
        self._apply(CATEGORIES, token, {"categories": categories, "categories_error": None})

    async def _load_trending(self, token: int, region: str | None, category: str | None) -> None:
        if not region:
            self._apply(TRENDING, token, {"trending": [], "trending_error": None})
            return
        try:
            videos = await self._gateway.get_trending_videos(region, category, self._trending_max_results)
        except RemoteError as e:
            logger.warning("Failed to load trending videos for %s/%s: %s", region, category, e)
            self._apply(TRENDING, token, {"trending": [], "trending_error": str(e)})
            return
        except Exception as e:
            logger.exception("Undecodable trending videos for %s/%s", region, category)
            self._apply(TRENDING, token, {"trending": [], "trending_error": str(e) or type(e).__name__})
            return
        self._apply(TRENDING, token, {"trending": videos, "trending_error": None})
