from itertools import product

import pytest

from fittrack.core.exceptions import FitTrackError, InvalidDurationError
from fittrack.models.records import ExerciseCategory, Intensity
from fittrack.services.analytics import CALORIE_RATES, estimate_calories, round_half_up


@pytest.mark.parametrize("category,intensity", list(product(ExerciseCategory, Intensity)))
def test_zero_duration_burns_nothing(category, intensity):
    assert estimate_calories(category, intensity, 0) == 0


@pytest.mark.parametrize(
    "category,intensity,duration,expected",
    [
        ("cardio", "moderate", 30, 240),
        ("strength", "easy", 30, 90),
        ("sports", "intense", 60, 900),
        ("flexibility", "intense", 45, 180),
    ],
)
def test_known_estimates(category, intensity, duration, expected):
    assert estimate_calories(category, intensity, duration) == expected


def test_rate_table_covers_every_category_and_intensity():
    assert set(CALORIE_RATES) == set(ExerciseCategory)
    for rates in CALORIE_RATES.values():
        assert set(rates) == set(Intensity)


def test_accepts_enum_members():
    assert estimate_calories(ExerciseCategory.CARDIO, Intensity.INTENSE, 10) == 120


def test_fractional_minutes_round_half_up():
    # 4 cal/min * 0.125 min = 0.5
    assert estimate_calories("cardio", "easy", 0.125) == 1
    # 3 cal/min * 2.5 min = 7.5
    assert estimate_calories("flexibility", "moderate", 2.5) == 8
    # 2 cal/min * 0.2 min = 0.4
    assert estimate_calories("flexibility", "easy", 0.2) == 0


def test_negative_duration_is_rejected():
    with pytest.raises(InvalidDurationError) as exc_info:
        estimate_calories("cardio", "moderate", -5)

    assert exc_info.value.duration_minutes == -5
    assert isinstance(exc_info.value, ValueError)
    assert isinstance(exc_info.value, FitTrackError)


def test_unknown_category_fails_fast():
    with pytest.raises(ValueError):
        estimate_calories("swimming", "moderate", 30)


def test_unknown_intensity_fails_fast():
    with pytest.raises(ValueError):
        estimate_calories("cardio", "extreme", 30)


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(2.49) == 2
    assert round_half_up(0) == 0
