from __future__ import annotations

import math
from datetime import timedelta

import pytest

from gost_predict.domain.entities.errors import (
    InsufficientDataError,
    NumericCoercionError,
)
from gost_predict.domain.services.rate_extrapolator import coerce_result, extrapolate
from tests.conftest import FIXED_NOW, make_observations


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (12, 12.0),
        (12.5, 12.5),
        ("12.5", 12.5),
        ("-3", -3.0),
        ("+.5", 0.5),
        ("1e3", 1000.0),
    ],
)
def test_coerce_result_accepts_numbers_and_decimal_strings(raw, expected) -> None:
    assert coerce_result(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [
        None,
        True,
        "",
        "abc",
        "NaN",
        "inf",
        "1_000",
        " 12",
        {"v": 1},
        [1],
        float("nan"),
        10**400,
        "1e400",
    ],
)
def test_coerce_result_rejects_non_numeric_values(raw) -> None:
    with pytest.raises(NumericCoercionError):
        coerce_result(raw)


def test_single_interval_rate_without_anchor() -> None:
    observations = make_observations([(0, 10), (60, 4)])

    result = extrapolate(
        observations, FIXED_NOW, now=FIXED_NOW, anchor_to_now=False
    )

    assert result.rate == pytest.approx(0.1)
    assert result.prediction == pytest.approx(10.0)


def test_prediction_from_two_observations_twenty_minutes_ahead() -> None:
    observations = make_observations([(0, 100), (10, 90)])
    target = FIXED_NOW + timedelta(minutes=20)

    result = extrapolate(observations, target, now=FIXED_NOW)

    assert result.rate == pytest.approx(1.0)
    assert result.prediction == pytest.approx(120.0)


def test_sample_newer_than_now_gets_no_anchor() -> None:
    observations = make_observations([(-5, 105), (5, 95)])

    result = extrapolate(observations, FIXED_NOW, now=FIXED_NOW)

    assert result.rate == pytest.approx(1.0)
    assert result.prediction == pytest.approx(105.0)


def test_anchor_adds_flat_interval_up_to_now() -> None:
    observations = make_observations([(10, 100), (20, 90)])
    target = FIXED_NOW + timedelta(minutes=20)

    result = extrapolate(observations, target, now=FIXED_NOW)

    # Intervals: now -> 10 min ago (flat), 10 -> 20 min ago (+1/min).
    assert result.rate == pytest.approx(0.5)
    assert result.prediction == pytest.approx(100 + 20 * 0.5)


def test_mean_is_taken_over_intervals(recent_observations) -> None:
    result = extrapolate(
        recent_observations, FIXED_NOW, now=FIXED_NOW, anchor_to_now=False
    )

    assert result.rate == pytest.approx(1.0)


def test_uneven_intervals_are_normalized_per_minute() -> None:
    observations = make_observations([(0, 30), (5, 20), (25, 0)])

    result = extrapolate(
        observations, FIXED_NOW, now=FIXED_NOW, anchor_to_now=False
    )

    assert result.rate == pytest.approx((2.0 + 1.0) / 2)


def test_deviation_is_linear_in_horizon(recent_observations) -> None:
    near = extrapolate(
        recent_observations, FIXED_NOW + timedelta(minutes=15), now=FIXED_NOW
    )
    far = extrapolate(
        recent_observations, FIXED_NOW + timedelta(minutes=30), now=FIXED_NOW
    )

    assert far.prediction - 100 == pytest.approx(2 * (near.prediction - 100))


def test_past_target_applies_negative_horizon() -> None:
    observations = make_observations([(0, 100), (10, 90)])

    result = extrapolate(
        observations,
        FIXED_NOW - timedelta(minutes=5),
        now=FIXED_NOW,
        anchor_to_now=False,
    )

    assert result.prediction == pytest.approx(95.0)


def test_sub_minute_precision_is_kept() -> None:
    observations = make_observations([(0, 1.0), (0.5, 0.0)])

    result = extrapolate(
        observations, FIXED_NOW, now=FIXED_NOW, anchor_to_now=False
    )

    assert result.rate == pytest.approx(2.0)


@pytest.mark.parametrize("count", [0, 1])
def test_fewer_than_two_observations_is_a_precondition_violation(count) -> None:
    observations = make_observations([(0, 1), (5, 2)])[:count]

    with pytest.raises(InsufficientDataError) as exc_info:
        extrapolate(observations, FIXED_NOW, now=FIXED_NOW)

    assert exc_info.value.available == count


def test_bad_result_fails_the_whole_extrapolation() -> None:
    observations = make_observations([(10, 100), (20, "n/a"), (30, 80)])

    with pytest.raises(NumericCoercionError, match="n/a"):
        extrapolate(observations, FIXED_NOW, now=FIXED_NOW)


def test_zero_length_interval_is_rejected() -> None:
    observations = make_observations([(10, 100), (10, 90)])

    with pytest.raises(NumericCoercionError):
        extrapolate(observations, FIXED_NOW, now=FIXED_NOW)


def test_result_is_finite_and_defaults_to_current_clock() -> None:
    observations = make_observations([(10, 5), (20, 4)])

    result = extrapolate(observations, FIXED_NOW)

    assert math.isfinite(result.rate)
    assert math.isfinite(result.prediction)
