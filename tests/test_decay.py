import math

import pytest

from carereach.errors import InvalidParameter
from carereach.scoring.decay import decay_curve, gaussian_weight


def test_weight_is_one_at_zero_distance() -> None:
    for sigma in [0.5, 10.0, 60.0, 500.0]:
        assert gaussian_weight(0.0, sigma) == 1.0


def test_weight_matches_gaussian_formula() -> None:
    assert gaussian_weight(15.0, 60.0) == pytest.approx(math.exp(-0.0625))
    assert gaussian_weight(45.0, 60.0) == pytest.approx(math.exp(-0.5625))
    assert gaussian_weight(60.0, 60.0) == pytest.approx(math.exp(-1.0))


def test_weight_bounded_and_strictly_decreasing_in_distance() -> None:
    sigma = 60.0
    previous = gaussian_weight(0.0, sigma)
    for d in range(1, 121):
        w = gaussian_weight(float(d), sigma)
        assert 0.0 < w <= 1.0
        assert w < previous
        previous = w


def test_weight_strictly_increasing_in_sigma() -> None:
    distance = 30.0
    previous = 0.0
    for sigma in [5.0, 10.0, 30.0, 60.0, 90.0, 120.0]:
        w = gaussian_weight(distance, sigma)
        assert w > previous
        previous = w


def test_weight_accepts_adjusted_time() -> None:
    assert gaussian_weight(24.5, 60.0) == pytest.approx(math.exp(-((24.5 / 60.0) ** 2)))


def test_tiny_sigma_drives_weight_towards_zero() -> None:
    assert gaussian_weight(10.0, 1e-3) == pytest.approx(0.0)


@pytest.mark.parametrize("sigma", [0.0, -1.0, float("inf"), float("nan")])
def test_invalid_sigma_rejected(sigma: float) -> None:
    with pytest.raises(InvalidParameter) as excinfo:
        gaussian_weight(10.0, sigma)
    assert excinfo.value.name == "scale_sigma"


def test_negative_distance_rejected() -> None:
    with pytest.raises(InvalidParameter) as excinfo:
        gaussian_weight(-1.0, 60.0)
    assert excinfo.value.name == "distance"


def test_decay_curve_covers_full_range() -> None:
    df = decay_curve(60.0)
    assert len(df) == 61
    assert df.iloc[0]["distance_min"] == 0.0
    assert df.iloc[0]["weight"] == 1.0
    assert df.iloc[-1]["distance_min"] == 120.0
    assert df.iloc[-1]["weight"] == pytest.approx(math.exp(-4.0))
    assert df["weight"].is_monotonic_decreasing


def test_decay_curve_agrees_with_scalar_weight() -> None:
    df = decay_curve(45.0, max_distance=30.0, step=5.0)
    assert list(df["distance_min"]) == [0.0, 5.0, 10.0, 15.0, 20.0, 25.0, 30.0]
    for _, row in df.iterrows():
        assert row["weight"] == pytest.approx(gaussian_weight(row["distance_min"], 45.0))


def test_decay_curve_rejects_bad_step() -> None:
    with pytest.raises(InvalidParameter):
        decay_curve(60.0, step=0.0)


def test_far_distance_underflows_to_zero_without_clamping() -> None:
    # exp(-(2000/60)^2) is below the smallest positive float64.
    assert gaussian_weight(2000.0, 60.0) == 0.0
    assert gaussian_weight(1000.0, 60.0) > 0.0
