"""
Unit tests for YouTube Core Service.
Tests fetching a page of channel uploads through a mocked discovery client.
"""

from unittest.mock import MagicMock, patch

import pytest
from googleapiclient.errors import HttpError

from api.youtube.core import MAX_PAGE_SIZE, YouTubeService
from contracts.errors import ConfigurationError, ProviderError

pytestmark = pytest.mark.unit

CHANNEL_ID = "UCq8xW3kYH6uWnK0ZzR1bT0g"


def _http_error(status: int) -> HttpError:
    resp = MagicMock()
    resp.status = status
    resp.reason = "Forbidden"
    return HttpError(resp, b'{"error": {"message": "quotaExceeded"}}')


class TestYouTubeService:
    """Tests for service initialization."""

    @patch("api.youtube.auth.build")
    def test_client_built_lazily_with_key(self, mock_build, mock_youtube_api_key):
        service = YouTubeService(mock_youtube_api_key)
        mock_build.assert_not_called()

        _ = service.youtube

        mock_build.assert_called_once()
        assert mock_build.call_args.kwargs["developerKey"] == mock_youtube_api_key

    @patch("api.youtube.auth.build")
    def test_missing_key_raises_configuration_error(self, mock_build):
        service = YouTubeService(None)

        with pytest.raises(ConfigurationError, match="YOUTUBE_API_KEY"):
            _ = service.youtube

        mock_build.assert_not_called()


class TestFetchPage:
    """Tests for fetch_page."""

    @pytest.mark.asyncio
    async def test_first_page(self, mock_youtube_api_key, mock_youtube_client):
        service = YouTubeService(mock_youtube_api_key, client=mock_youtube_client)

        videos = await service.fetch_page(CHANNEL_ID, page_size=3, page=1)

        assert [v.video_id for v in videos] == ["1aBcDeFgHiJ", "2bCdEfGhIjK", "3cDeFgHiJkL"]
        mock_youtube_client.playlistItems.return_value.list.assert_called_once_with(
            part="snippet,contentDetails",
            playlistId="UUq8xW3kYH6uWnK0ZzR1bT0g",
            maxResults=3,
        )

    @pytest.mark.asyncio
    async def test_enrichment_matched_by_video_id(self, mock_youtube_api_key, mock_youtube_client):
        service = YouTubeService(mock_youtube_api_key, client=mock_youtube_client)

        videos = {v.video_id: v for v in await service.fetch_page(CHANNEL_ID, page_size=3)}

        # videos.list answers out of order and without the third video
        assert videos["1aBcDeFgHiJ"].duration == "PT45S"
        assert videos["1aBcDeFgHiJ"].view_count == 892
        assert videos["2bCdEfGhIjK"].duration == "PT14M32S"
        assert videos["2bCdEfGhIjK"].tags == ["travel", "nepal", "kathmandu"]
        assert videos["3cDeFgHiJkL"].duration is None
        assert videos["3cDeFgHiJkL"].view_count is None

    @pytest.mark.asyncio
    async def test_later_page_walks_page_tokens(self, mock_youtube_api_key, mock_youtube_client):
        service = YouTubeService(mock_youtube_api_key, client=mock_youtube_client)

        videos = await service.fetch_page(CHANNEL_ID, page_size=3, page=2)

        assert [v.video_id for v in videos] == ["4dEfGhIjKlM"]
        calls = mock_youtube_client.playlistItems.return_value.list.call_args_list
        assert len(calls) == 2
        assert calls[1].kwargs["pageToken"] == "EAAaBlBUOkNBSQ"

    @pytest.mark.asyncio
    async def test_page_past_the_end_is_empty(self, mock_youtube_api_key, mock_youtube_client):
        service = YouTubeService(mock_youtube_api_key, client=mock_youtube_client)

        assert await service.fetch_page(CHANNEL_ID, page_size=3, page=3) == []

    @pytest.mark.asyncio
    async def test_missing_key_fails_before_any_request(self, mock_youtube_client):
        service = YouTubeService(None, client=mock_youtube_client)

        with pytest.raises(ConfigurationError):
            await service.fetch_page(CHANNEL_ID)

        mock_youtube_client.channels.assert_not_called()

    @pytest.mark.asyncio
    async def test_http_error_maps_to_provider_error(self, mock_youtube_api_key, mock_youtube_client):
        mock_youtube_client.channels.return_value.list.return_value.execute.side_effect = _http_error(403)
        service = YouTubeService(mock_youtube_api_key, client=mock_youtube_client)

        with pytest.raises(ProviderError) as exc_info:
            await service.fetch_page(CHANNEL_ID)

        assert exc_info.value.upstream_status == 403
        assert exc_info.value.provider == "youtube"

    @pytest.mark.asyncio
    async def test_empty_body_raises_provider_error(self, mock_youtube_api_key, mock_youtube_client):
        mock_youtube_client.videos.return_value.list.return_value.execute.return_value = {}
        service = YouTubeService(mock_youtube_api_key, client=mock_youtube_client)

        with pytest.raises(ProviderError, match="empty body"):
            await service.fetch_page(CHANNEL_ID)

    @pytest.mark.asyncio
    async def test_unknown_channel_raises_provider_error(self, mock_youtube_api_key, mock_youtube_client):
        mock_youtube_client.channels.return_value.list.return_value.execute.return_value = {"items": []}
        service = YouTubeService(mock_youtube_api_key, client=mock_youtube_client)

        with pytest.raises(ProviderError, match="uploads playlist"):
            await service.fetch_page(CHANNEL_ID)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("page_size,page", [(0, 1), (MAX_PAGE_SIZE + 1, 1), (10, 0)])
    async def test_invalid_paging(self, mock_youtube_api_key, mock_youtube_client, page_size, page):
        service = YouTubeService(mock_youtube_api_key, client=mock_youtube_client)

        with pytest.raises(ValueError):
            await service.fetch_page(CHANNEL_ID, page_size=page_size, page=page)

    @pytest.mark.asyncio
    async def test_probe(self, mock_youtube_api_key, mock_youtube_client):
        service = YouTubeService(mock_youtube_api_key, client=mock_youtube_client)

        assert await service.probe(CHANNEL_ID) == 3
