"""
Unit tests for video category and short-form classification.
"""

import pytest

from contracts.models import Platform, VideoType, VlogCategory
from core.classify import (
    classify_category,
    classify_video_type,
    parse_duration,
    platform_for,
)

pytestmark = pytest.mark.unit


class TestClassifyCategory:
    def test_case_insensitive(self):
        assert classify_category("TECH REVIEW") == classify_category("tech review") == VlogCategory.TECH

    def test_description_is_searched(self):
        assert classify_category("Episode 4", "Cooking dal at home") == VlogCategory.FOOD

    def test_first_category_in_table_order_wins(self):
        # "travel" (Travel) and "vlog" (Daily) both match; Travel comes first
        assert classify_category("Travel vlog") == VlogCategory.TRAVEL

    def test_review_belongs_to_tech_before_entertainment(self):
        assert classify_category("Movie review") == VlogCategory.TECH

    def test_default_is_daily(self):
        assert classify_category("Untitled", None) == VlogCategory.DAILY

    @pytest.mark.parametrize(
        "title,expected",
        [
            ("Exploring Uttarakhand", VlogCategory.TRAVEL),
            ("Leg day at the gym", VlogCategory.DAILY),
            ("How to tie a tie", VlogCategory.EDUCATION),
            ("Funny cats compilation", VlogCategory.ENTERTAINMENT),
        ],
    )
    def test_keywords(self, title, expected):
        assert classify_category(title) == expected


class TestClassifyVideoType:
    def test_shorts_marker_in_title(self):
        assert classify_video_type("My Day #shorts") == VideoType.SHORT

    def test_marker_in_description(self):
        assert classify_video_type("Sunset", "#reel from the beach") == VideoType.SHORT

    def test_marker_is_case_insensitive(self):
        assert classify_video_type("Quick one #SHORTS") == VideoType.SHORT

    def test_long_without_markers(self):
        assert classify_video_type("My Full Vlog Episode 3") == VideoType.LONG

    def test_short_duration(self):
        assert classify_video_type("Sunset", duration="PT58S") == VideoType.SHORT
        assert classify_video_type("Sunset", duration="PT1M") == VideoType.SHORT

    def test_long_duration(self):
        assert classify_video_type("Sunset", duration="PT1M1S") == VideoType.LONG

    def test_unparseable_duration_is_ignored(self):
        assert classify_video_type("Sunset", duration="P0D") == VideoType.LONG
        assert classify_video_type("Sunset", duration="soon") == VideoType.LONG


class TestParseDuration:
    @pytest.mark.parametrize(
        "value,seconds",
        [("PT45S", 45), ("PT4M13S", 253), ("PT1H2M3S", 3723), ("P1DT1S", 86401), ("pt2m", 120)],
    )
    def test_valid(self, value, seconds):
        assert parse_duration(value) == seconds

    @pytest.mark.parametrize("value", [None, "", "PT", "P", "4:13", "PTXS"])
    def test_invalid(self, value):
        assert parse_duration(value) is None


def test_platform_for():
    assert platform_for(VideoType.SHORT) == Platform.YT_SHORTS
    assert platform_for(VideoType.LONG) == Platform.YOUTUBE
