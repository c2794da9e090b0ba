import pytest

from carereach.errors import InvalidParameter
from carereach.scoring.complexity import adjust_travel_time, compare_routes


def test_adjust_without_intersections_keeps_base_time() -> None:
    assert adjust_travel_time(15.0, 0.0, 0.15) == 15.0


def test_adjust_urban_route() -> None:
    assert adjust_travel_time(20.0, 1.5, 0.15) == pytest.approx(24.5)


def test_adjust_never_below_base_time() -> None:
    for t in [1.0, 7.5, 20.0, 90.0]:
        for d in [0.0, 0.2, 1.67, 4.0]:
            for a in [0.0, 0.05, 0.15, 1.0]:
                adjusted = adjust_travel_time(t, d, a)
                assert adjusted >= t
                if d == 0.0 or a == 0.0:
                    assert adjusted == t
                else:
                    assert adjusted > t


@pytest.mark.parametrize(
    "base, density, alpha, name",
    [
        (0.0, 1.0, 0.15, "base_travel_time"),
        (-5.0, 1.0, 0.15, "base_travel_time"),
        (15.0, -0.1, 0.15, "intersection_density"),
        (15.0, 1.0, -0.01, "complexity_coefficient"),
        (15.0, 1.0, 1.5, "complexity_coefficient"),
        (float("nan"), 1.0, 0.15, "base_travel_time"),
    ],
)
def test_adjust_rejects_invalid_inputs(base: float, density: float, alpha: float, name: str) -> None:
    with pytest.raises(InvalidParameter) as excinfo:
        adjust_travel_time(base, density, alpha)
    assert excinfo.value.name == name


def test_adjust_respects_configured_alpha_bounds() -> None:
    assert adjust_travel_time(10.0, 1.0, 1.5, alpha_bounds=(0.0, 2.0)) == pytest.approx(25.0)
    with pytest.raises(InvalidParameter):
        adjust_travel_time(10.0, 1.0, 0.5, alpha_bounds=(0.0, 0.3))


def test_compare_routes_default_rural_and_urban() -> None:
    df = compare_routes(alpha=0.15)
    assert list(df["name"]) == ["Rural Route", "Urban Route"]
    urban = df[df["name"] == "Urban Route"].iloc[0]
    assert urban["adjusted_time_min"] == pytest.approx(24.5)
    assert urban["increase_pct"] == pytest.approx(22.5)
    rural = df[df["name"] == "Rural Route"].iloc[0]
    assert rural["adjusted_time_min"] == pytest.approx(20.6)
    assert rural["increase_pct"] == pytest.approx(3.0)


def test_compare_routes_zero_alpha_has_no_increase() -> None:
    df = compare_routes(
        [{"name": "Downtown", "base_time_min": 12, "intersection_density": 3.0}],
        alpha=0.0,
    )
    assert df.iloc[0]["adjusted_time_min"] == 12.0
    assert df.iloc[0]["increase_pct"] == 0.0
