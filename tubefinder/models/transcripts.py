from typing import Any, Literal

from pydantic import BaseModel

TranscriptFormat = Literal["raw", "timestamped", "merged"]
FACETS = ("transcript", "enhanced", "key_moments", "segmented")


class TranscriptSegment(BaseModel):
    text: str
    offset: int = 0
    duration: int = 0
    timestamp: str = ""


class VideoTranscript(BaseModel):
    video_id: str
    transcript: str = ""
    segments: list[TranscriptSegment] = []


class EnhancedTranscript(BaseModel):
    video_ids: list[str]
    payload: dict[str, Any] = {}


class KeyMoments(BaseModel):
    video_id: str
    text: str = ""
    metadata: Any = None


class SegmentedTranscript(BaseModel):
    video_id: str
    text: str = ""
    metadata: Any = None


class EnrichmentBundle(BaseModel):
    video_id: str
    transcript: VideoTranscript | None = None
    enhanced: EnhancedTranscript | None = None
    key_moments: KeyMoments | None = None
    segmented: SegmentedTranscript | None = None
    available: list[str] = []

    @property
    def unavailable(self) -> list[str]:
        return [facet for facet in FACETS if facet not in self.available]
