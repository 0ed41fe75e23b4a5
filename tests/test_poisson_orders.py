import numpy as np
import pytest

from adversarial_mm.processes import PoissonRate


def test_at_the_money_probability():
    fills = PoissonRate(0.005, scale=140.0, decay=1.5)

    assert fills.match_probability(0.0) == pytest.approx(0.7)


def test_probability_matches_intensity_times_dt():
    fills = PoissonRate(0.005, scale=140.0, decay=1.5)

    assert fills.intensity(1.0) == pytest.approx(140.0 * np.exp(-1.5))
    assert fills.match_probability(1.0) == pytest.approx(140.0 * np.exp(-1.5) * 0.005)


def test_probability_is_monotone_and_bounded():
    fills = PoissonRate(0.005, scale=140.0, decay=1.5)
    offsets = np.linspace(-20.0, 20.0, 401)

    probs = [fills.match_probability(o) for o in offsets]

    assert all(0.0 <= p <= 1.0 for p in probs)
    assert all(a >= b for a, b in zip(probs, probs[1:]))


def test_crossing_the_market_is_capped_at_one():
    fills = PoissonRate(0.005, scale=140.0, decay=1.5)

    assert fills.match_probability(-10.0) == 1.0
    assert fills.match_probability(-1.0) >= fills.match_probability(0.0)


def test_large_rate_is_clamped_at_the_money():
    fills = PoissonRate(1.0, scale=5.0, decay=1.5)

    assert fills.match_probability(0.0) == 1.0


def test_zero_scale_never_fills():
    fills = PoissonRate(0.005, scale=0.0, decay=1.5)

    assert fills.match_probability(0.0) == 0.0
    assert fills.match_probability(-1e4) == 0.0


def test_expected_fills_per_side():
    fills = PoissonRate(0.005, scale=140.0, decay=1.5)

    ask, bid = fills.expected_fills(0.0, 1.0)

    assert ask == pytest.approx(0.7)
    assert bid == pytest.approx(fills.match_probability(1.0))


@pytest.mark.parametrize("kwargs", [
    {'dt': 0.0},
    {'dt': -1.0},
    {'dt': 0.005, 'scale': -1.0},
    {'dt': 0.005, 'decay': -0.1},
])
def test_invalid_parameters_are_rejected(kwargs):
    with pytest.raises(ValueError):
        PoissonRate(**kwargs)
