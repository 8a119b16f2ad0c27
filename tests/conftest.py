import json

import httpx
import pytest
from fastapi.testclient import TestClient

from tubefinder.services.gateway import GatewayClient

GATEWAY_URL = "http://gateway.test"


# --- Canned gateway responses ---

VIDEO_ITEM = {
    "id": "vid123",
    "title": "How to brew coffee",
    "publishedAt": "2025-01-01T00:00:00Z",
    "viewCount": 1500,
    "likeCount": 120,
    "channelId": "chan456",
    "channelTitle": "Coffee Corner",
    "channelCountry": "KR",
    "duration": "01:30",
    "durationSeconds": 90,
    "subscriberCount": 10000,
    "viewSubscriberRatio": 0.15,
    "description": "Pour-over basics",
    "tags": ["coffee", "brewing"],
    "thumbnail": "https://i.ytimg.com/vi/vid123/hqdefault.jpg",
}

SEARCH_RESPONSE = {"items": [VIDEO_ITEM]}

CATEGORIES_RESPONSE = {
    "categories": [
        {"id": "10", "title": "Music"},
        {"id": "20", "title": "Gaming"},
    ],
}

CHANNEL_STATS_RESPONSE = {
    "channelId": "chan456",
    "title": "Coffee Corner",
    "description": "All about coffee",
    "createdAt": "2015-06-01T00:00:00Z",
    "subscriberCount": 10000,
    "videoCount": 250,
    "viewCount": 3000000,
    "thumbnailUrl": "https://yt3.ggpht.com/chan456.jpg",
}

CHANNEL_ANALYSIS_RESPONSE = {
    "channelId": "chan456",
    "videoCount": 2,
    "averages": {"viewCount": 1250.5, "likeCount": 100, "commentCount": 12},
    "videos": [
        {"videoId": "v1", "title": "First", "publishedAt": "2025-01-01T00:00:00Z", "duration": "PT4M5S",
         "viewCount": 1000, "likeCount": 80, "commentCount": 10},
        {"videoId": "v2", "title": None, "publishedAt": None, "duration": None,
         "viewCount": 1501, "likeCount": 120, "commentCount": 14},
    ],
}

TRANSCRIPT_RESPONSE = {
    "videoId": "vid123",
    "transcript": "hello world",
    "segments": [
        {"text": "hello", "offset": 0, "duration": 1500},
        {"text": "world", "offset": 61500, "duration": 1200},
    ],
}

ENHANCED_RESPONSE = {"videos": [{"videoId": "vid123", "text": "[00:00] hello"}]}

KEY_MOMENTS_RESPONSE = {"videoId": "vid123", "text": "1. Intro at 00:00", "metadata": {"count": 1}}

SEGMENTED_RESPONSE = {"videoId": "vid123", "text": "Part 1: hello", "metadata": {"segments": 4}}

COMMENTS_RESPONSE = {
    "videoId": "vid123",
    "totalResults": 1,
    "comments": [
        {
            "id": "c1",
            "author": "alice",
            "authorChannelId": "chanA",
            "text": "Great video",
            "likeCount": 3,
            "publishedAt": "2025-01-02T00:00:00Z",
            "replies": [
                {"id": "r1", "author": "bob", "text": "Agreed", "likeCount": 1, "publishedAt": "2025-01-03T00:00:00Z"},
            ],
        },
    ],
    "nextPageToken": "page2",
    "pageInfo": {"totalResults": 1, "resultsPerPage": 20},
}

ANALYSIS_RESPONSE = {
    "videoId": "vid123",
    "title": "How to brew coffee",
    "channelTitle": "Coffee Corner",
    "analysisPrompt": "Analyze this video",
    "data": {
        "videoId": "vid123",
        "title": "How to brew coffee",
        "channelTitle": "Coffee Corner",
        "publishedAt": "2025-01-01T00:00:00Z",
        "description": "Pour-over basics",
        "statistics": {"viewCount": 1500, "likeCount": 120, "commentCount": 9, "duration": "PT1M30S"},
        "transcript": "hello world",
        "tags": ["coffee"],
        "thumbnail": "https://i.ytimg.com/vi/vid123/hqdefault.jpg",
    },
}


def video_item(**overrides) -> dict:
    return {**VIDEO_ITEM, **overrides}


class GatewayRecorder:
    """Routes gateway endpoints to canned payloads and records every request body."""

    def __init__(self, routes: dict):
        self.routes = routes
        self.calls: list[tuple[str, dict]] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        endpoint = request.url.path.removeprefix("/api/")
        body = json.loads(request.content) if request.content else {}
        self.calls.append((endpoint, body))
        result = self.routes.get(endpoint)
        if result is None:
            return httpx.Response(404, json={"error": f"Unknown endpoint {endpoint}"})
        if isinstance(result, Exception):
            raise result
        if isinstance(result, httpx.Response):
            return result
        return httpx.Response(200, json=result)

    def bodies(self, endpoint: str) -> list[dict]:
        return [body for name, body in self.calls if name == endpoint]


@pytest.fixture
def make_gateway():
    """Build a GatewayClient whose transport answers from a route table."""

    def factory(routes: dict) -> tuple[GatewayClient, GatewayRecorder]:
        recorder = GatewayRecorder(routes)
        client = httpx.AsyncClient(transport=httpx.MockTransport(recorder))
        return GatewayClient(GATEWAY_URL, client=client), recorder

    return factory


@pytest.fixture
def api_client():
    """FastAPI TestClient for router tests."""
    from tubefinder.main import api
    return TestClient(api)
