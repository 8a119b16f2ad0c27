"""Translate FilterCriteria into gateway parameters and local predicates.

The gateway only understands coarse duration classes (YouTube's ``short`` is
under four minutes, ``long`` over twenty), so the remote hint merely narrows
the result set. The local predicates below are what decide membership.
"""

from collections.abc import Callable, Iterable
from datetime import datetime, timedelta, timezone

from tubefinder.models.videos import DurationClass, FilterCriteria, Period, VideoRecord
from tubefinder.services.ratio import in_buckets

SHORT_VIDEO_MAX_SECONDS = 60

PERIOD_DAYS: dict[str, int] = {
    "1month": 30,
    "2months": 60,
    "6months": 180,
    "1year": 365,
}


def published_after(period: Period, now: datetime | None = None) -> str | None:
    days = PERIOD_DAYS.get(period)
    if days is None:
        return None
    now = now or datetime.now(timezone.utc)
    cutoff = (now - timedelta(days=days)).astimezone(timezone.utc)
    return cutoff.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def remote_duration_hint(duration: DurationClass) -> str | None:
    if duration in ("short", "long"):
        return duration
    return None


def build_search_params(
    query: str,
    criteria: FilterCriteria,
    max_results: int = 50,
    now: datetime | None = None,
) -> dict:
    """Build the JSON body for the search-videos endpoint.

    Ratio buckets are never sent; they only exist as a local predicate.
    """
    params = {
        "query": query,
        "maxResults": max_results,
        "order": "viewCount",
        "type": "video",
    }
    hint = remote_duration_hint(criteria.duration)
    if hint:
        params["videoDuration"] = hint
    after = published_after(criteria.period, now=now)
    if after:
        params["publishedAfter"] = after
    return params


def matches_duration(record: VideoRecord, duration: DurationClass) -> bool:
    if duration == "short":
        return record.duration_seconds < SHORT_VIDEO_MAX_SECONDS
    if duration == "long":
        return record.duration_seconds >= SHORT_VIDEO_MAX_SECONDS
    return True


def matches_ratio(record: VideoRecord, buckets: Iterable[int]) -> bool:
    buckets = set(buckets)
    if not buckets:
        return True
    return in_buckets(record.view_subscriber_ratio, buckets)


def local_predicate(criteria: FilterCriteria) -> Callable[[VideoRecord], bool]:
    """Combine the duration and ratio predicates with AND."""
    duration = criteria.duration
    buckets = frozenset(criteria.view_subscriber_ratio)

    def predicate(record: VideoRecord) -> bool:
        return matches_duration(record, duration) and matches_ratio(record, buckets)

    return predicate


def apply_local_filters(records: Iterable[VideoRecord], criteria: FilterCriteria) -> list[VideoRecord]:
    predicate = local_predicate(criteria)
    return [record for record in records if predicate(record)]
