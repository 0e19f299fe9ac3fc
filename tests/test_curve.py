import math

import numpy as np
import pytest

from hillchart.curve import HillCurve
from hillchart.model import HillOptions


def test_height_stays_between_top_and_bottom():
    curve = HillCurve()
    opts = curve.options

    for position in np.linspace(opts.domain_start, opts.domain_end, 201):
        y = curve.height_at(float(position))
        assert opts.top_y - 1e-9 <= y <= opts.bottom_y + 1e-9


def test_peak_is_at_mean_position():
    curve = HillCurve()

    assert curve.peak_position == pytest.approx(600.0)
    assert curve.height_at(600.0) == pytest.approx(180.0)
    assert curve.height_at(599.0) > 180.0
    assert curve.height_at(601.0) > 180.0


def test_custom_mean_moves_peak():
    curve = HillCurve(HillOptions(mean=0.25))

    assert curve.peak_position == pytest.approx(425.0)
    assert curve.height_at(425.0) == pytest.approx(curve.options.top_y)


def test_height_matches_gaussian_formula():
    curve = HillCurve()
    u = (320.0 - 250.0) / 700.0
    expected = 480.0 - 300.0 * math.exp(-0.5 * ((u - 0.5) / 0.15) ** 2)

    assert curve.height_at(320.0) == pytest.approx(expected)


def test_curve_is_symmetric_about_default_mean():
    curve = HillCurve()

    assert curve.height_at(320.0) == pytest.approx(curve.height_at(880.0))


def test_heights_at_agrees_with_scalar_version():
    curve = HillCurve()
    positions = [250.0, 333.3, 600.0, 949.0]

    assert np.allclose(curve.heights_at(positions), [curve.height_at(p) for p in positions])


def test_sample_path_is_evenly_spaced_and_restartable():
    curve = HillCurve()
    samples = curve.sample_path(4)

    first = list(samples)
    assert [x for x, _ in first] == pytest.approx([250.0, 425.0, 600.0, 775.0, 950.0])
    assert list(samples) == first
    assert list(curve.sample_path(4)) == first


def test_sample_path_uses_configured_default_count():
    curve = HillCurve()

    assert len(list(curve.sample_path())) == curve.options.path_samples + 1


def test_sample_path_rejects_empty_request():
    with pytest.raises(ValueError):
        curve = HillCurve()
        curve.sample_path(0)


@pytest.mark.parametrize(
    "overrides",
    [{"domain_end": 250.0}, {"std_dev": 0.0}, {"dot_radius": -1.0}, {"path_samples": 0}],
)
def test_invalid_options_are_rejected(overrides):
    with pytest.raises(ValueError):
        HillCurve(HillOptions(**overrides))
