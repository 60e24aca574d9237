"""
Tests for shared input validation.
"""

import pytest

from rift_profile.core.exceptions import ValidationError
from rift_profile.core.riot_api.constants import Platform
from rift_profile.core.validation import (
    normalize_riot_id,
    require_identifier,
    validate_window,
)


class TestNormalizeRiotId:
    def test_trims_and_strips_hash(self):
        assert normalize_riot_id("  Faker ", " #KR1 ") == ("Faker", "KR1")

    def test_preserves_case(self):
        assert normalize_riot_id("HideOnBush", "kr1") == ("HideOnBush", "kr1")

    @pytest.mark.parametrize(
        "game_name,tag_line",
        [("", "NA1"), ("   ", "NA1"), ("Faker", ""), (None, "NA1"), ("Faker", "#")],
    )
    def test_missing_parts_rejected(self, game_name, tag_line):
        with pytest.raises(ValidationError):
            normalize_riot_id(game_name, tag_line)

    def test_too_long_rejected(self):
        with pytest.raises(ValidationError):
            normalize_riot_id("x" * 17, "NA1")
        with pytest.raises(ValidationError):
            normalize_riot_id("Faker", "TOOLONG")


def test_require_identifier():
    assert require_identifier(" abc ", "puuid") == "abc"
    with pytest.raises(ValidationError) as exc_info:
        require_identifier("  ", "puuid")
    assert exc_info.value.context["field"] == "puuid"


@pytest.mark.parametrize("start,count", [(-1, 20), (0, 0), (0, 101)])
def test_validate_window_rejects(start, count):
    with pytest.raises(ValidationError):
        validate_window(start, count, max_count=100)


def test_validate_window_accepts_bounds():
    validate_window(0, 1, max_count=100)
    validate_window(500, 100, max_count=100)


@pytest.mark.parametrize(
    "value,expected",
    [("NA1", Platform.NA1), ("euw1", Platform.EUW1), (None, Platform.NA1), ("moon", Platform.NA1)],
)
def test_platform_parse(value, expected):
    assert Platform.parse(value) == expected
