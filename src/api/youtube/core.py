"""
YouTube Core Service - fetches the uploads of a channel from the YouTube
Data API and maps them into YouTubeVideoItem models.

QUOTA: channels.list, playlistItems.list and videos.list cost 1 unit each,
so a page costs page + 2 units. No retries are done here.
"""

from typing import Any

from googleapiclient.errors import HttpError

from api.youtube.auth import Auth
from api.youtube.models import YouTubeThumbnail, YouTubeVideoItem
from contracts.errors import ProviderError
from utils.get_logger import get_logger

logger = get_logger(__name__)

MAX_PAGE_SIZE = 50
DEFAULT_PAGE_SIZE = 10


def _to_int(value: Any) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class YouTubeService(Auth):
    """YouTube Data API client for the uploads of one channel."""

    provider = "youtube"

    def _execute(self, request: Any, what: str) -> dict:
        try:
            response = request.execute()
        except HttpError as e:
            status = getattr(e.resp, "status", None)
            logger.error(f"YouTube API error during {what}: {e}")
            raise ProviderError(
                f"YouTube API error: {status} during {what}",
                status_code=_to_int(status),
                provider=self.provider,
            ) from e
        except OSError as e:
            raise ProviderError(f"YouTube request failed during {what}: {e}", provider=self.provider) from e

        if not response or "items" not in response:
            raise ProviderError(f"YouTube API returned an empty body for {what}", provider=self.provider)
        return response

    def _uploads_playlist_id(self, channel_id: str) -> str:
        response = self._execute(
            self.youtube.channels().list(part="contentDetails", id=channel_id),
            "channels.list",
        )
        items = response.get("items") or []
        playlist_id = (
            items[0].get("contentDetails", {}).get("relatedPlaylists", {}).get("uploads")
            if items
            else None
        )
        if not playlist_id:
            raise ProviderError(
                f"Could not find uploads playlist for channel {channel_id}",
                status_code=404,
                provider=self.provider,
            )
        return playlist_id

    def _process_playlist_item(self, item: dict) -> YouTubeVideoItem:
        snippet = item.get("snippet", {})
        thumbnails = {
            quality: YouTubeThumbnail(**data)
            for quality, data in (snippet.get("thumbnails") or {}).items()
            if isinstance(data, dict)
        }
        video_id = (snippet.get("resourceId") or {}).get("videoId") or (
            item.get("contentDetails") or {}
        ).get("videoId")

        return YouTubeVideoItem(
            video_id=video_id,
            title=snippet.get("title"),
            description=snippet.get("description"),
            published_at=snippet.get("publishedAt"),
            channel_title=snippet.get("channelTitle"),
            thumbnails=thumbnails,
        )

    def _enrich(self, videos: list[YouTubeVideoItem]) -> None:
        """Add duration, view count and tags from videos.list, matched by video id."""
        ids = [v.video_id for v in videos if v.video_id]
        if not ids:
            return

        response = self._execute(
            self.youtube.videos().list(part="snippet,contentDetails,statistics", id=",".join(ids)),
            "videos.list",
        )
        details = {item.get("id"): item for item in response.get("items", [])}
        for video in videos:
            detail = details.get(video.video_id)
            if not detail:
                continue
            video.duration = (detail.get("contentDetails") or {}).get("duration")
            video.view_count = _to_int((detail.get("statistics") or {}).get("viewCount"))
            video.tags = (detail.get("snippet") or {}).get("tags") or []

    async def fetch_page(
        self, channel_id: str, page_size: int = DEFAULT_PAGE_SIZE, page: int = 1
    ) -> list[YouTubeVideoItem]:
        """
        Fetch one page of a channel's uploads, newest first.

        Args:
            channel_id: YouTube channel id
            page_size: Items per page (1-50)
            page: 1-based page number; earlier pages are walked via page tokens

        Returns:
            List of YouTubeVideoItem, empty when the channel has fewer pages
        """
        if not 1 <= page_size <= MAX_PAGE_SIZE:
            raise ValueError(f"page_size must be between 1 and {MAX_PAGE_SIZE}, got {page_size}")
        if page < 1:
            raise ValueError(f"page must be >= 1, got {page}")

        # Fail fast on a missing key before any request is built
        _ = self.youtube_api_key

        logger.info(f"Fetching YouTube uploads for channel {channel_id}: page={page}, size={page_size}")
        playlist_id = self._uploads_playlist_id(channel_id)

        page_token: str | None = None
        response: dict = {}
        for current in range(1, page + 1):
            params: dict[str, Any] = {
                "part": "snippet,contentDetails",
                "playlistId": playlist_id,
                "maxResults": page_size,
            }
            if page_token:
                params["pageToken"] = page_token
            response = self._execute(
                self.youtube.playlistItems().list(**params), "playlistItems.list"
            )
            if current < page:
                page_token = response.get("nextPageToken")
                if not page_token:
                    logger.info(f"Channel {channel_id} has fewer than {page} pages")
                    return []

        videos = [self._process_playlist_item(item) for item in response.get("items", [])]
        self._enrich(videos)

        logger.info(f"Fetched {len(videos)} videos from channel {channel_id}")
        return videos

    async def probe(self, channel_id: str) -> int:
        """Number of videos in the first page of the channel's uploads. Writes nothing."""
        videos = await self.fetch_page(channel_id, page_size=MAX_PAGE_SIZE, page=1)
        return len(videos)
