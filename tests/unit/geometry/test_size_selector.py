"""Unit tests for preview size selection."""

import logging

import pytest

from preview_fit.errors import EmptyCandidateSetError, InvalidDimensionsError
from preview_fit.geometry.size_selector import (
    SelectionKind,
    choose_optimal_size,
    largest_by_area,
    select_preview_size,
)
from preview_fit.geometry.types import Resolution

HD_16_9 = Resolution(1920, 1080)


# ---------------------------------------------------------------------------
# Selection rules
# ---------------------------------------------------------------------------


def test_smallest_covering_size_wins():
    choices = [Resolution(1920, 1080), Resolution(1280, 720), Resolution(640, 480)]

    result = choose_optimal_size(choices, 640, 480, 1920, 1080, HD_16_9)

    # 640x480 is 4:3 and filtered out; 1280x720 is the smaller 16:9 size covering 640x480.
    assert result == Resolution(1280, 720)


def test_covering_selection_reports_kind_and_match_count():
    choices = ["1920x1080", "1280x720", "640x480"]

    selection = select_preview_size(choices, 640, 480, 1920, 1080, "1920x1080")

    assert selection.kind is SelectionKind.COVERING
    assert selection.matching == 2
    assert not selection.is_fallback


def test_largest_size_wins_when_none_covers_target():
    choices = [Resolution(640, 360), Resolution(1920, 1080), Resolution(1280, 720)]

    selection = select_preview_size(choices, 2560, 1440, 1920, 1080, HD_16_9)

    assert selection.size == Resolution(1920, 1080)
    assert selection.kind is SelectionKind.BEST_EFFORT


def test_sizes_over_the_maximum_are_excluded():
    choices = [Resolution(3840, 2160), Resolution(1920, 1080), Resolution(1280, 720)]

    result = choose_optimal_size(choices, 3000, 2000, 1920, 1080, HD_16_9)

    assert result == Resolution(1920, 1080)


def test_max_bound_applies_to_each_dimension_independently():
    choices = [Resolution(1920, 1080), Resolution(1280, 720)]

    result = choose_optimal_size(choices, 640, 360, 1920, 800, HD_16_9)

    assert result == Resolution(1280, 720)


def test_equal_areas_resolve_to_first_candidate():
    first = Resolution(1280, 720)
    second = Resolution(1280, 720)

    result = choose_optimal_size([Resolution(1920, 1080), first, second], 640, 360, 1920, 1080, HD_16_9)

    assert result is first


def test_aspect_test_uses_truncating_integer_division():
    # 1366 * 1080 // 1920 == 768, so 1366x768 counts as 16:9.
    choices = [Resolution(1366, 768), Resolution(1024, 768)]

    selection = select_preview_size(choices, 1200, 700, 1920, 1080, HD_16_9)

    assert selection.size == Resolution(1366, 768)
    assert selection.matching == 1


def test_accepts_tuples_and_strings():
    result = choose_optimal_size([(1920, 1080), "1280x720"], 1000, 600, 1920, 1080, (16, 9))

    assert result == Resolution(1280, 720)


# ---------------------------------------------------------------------------
# Degraded and error paths
# ---------------------------------------------------------------------------


def test_falls_back_to_first_choice_and_warns(caplog):
    choices = [Resolution(640, 480), Resolution(800, 600)]

    with caplog.at_level(logging.WARNING, logger="preview_fit"):
        selection = select_preview_size(choices, 640, 360, 1920, 1080, HD_16_9)

    assert selection.size == Resolution(640, 480)
    assert selection.kind is SelectionKind.FALLBACK
    assert selection.is_fallback
    assert any("Couldn't find any suitable preview size" in record.getMessage() for record in caplog.records)


def test_empty_choices_raise():
    with pytest.raises(EmptyCandidateSetError):
        choose_optimal_size([], 640, 480, 1920, 1080, HD_16_9)


@pytest.mark.parametrize(
    "args",
    [
        ([Resolution(1280, 720)], 0, 480, 1920, 1080, HD_16_9),
        ([Resolution(1280, 720)], 640, 0, 1920, 1080, HD_16_9),
        ([Resolution(1280, 720)], 640, 480, 0, 1080, HD_16_9),
        ([Resolution(1280, 720)], 640, 480, 1920, -1, HD_16_9),
        ([Resolution(1280, 720)], 640, 480, 1920, 1080, (1920, 0)),
        (["1280x0"], 640, 480, 1920, 1080, HD_16_9),
    ],
)
def test_zero_or_negative_dimensions_raise(args):
    with pytest.raises(InvalidDimensionsError):
        choose_optimal_size(*args)


def test_largest_by_area_picks_first_of_equal_sizes():
    assert largest_by_area(["640x480", "4032x3024", "3024x4032"]) == Resolution(4032, 3024)

    with pytest.raises(EmptyCandidateSetError):
        largest_by_area([])
