import pytest

from camera_resolver.schemas.camera import Facing
from camera_resolver.services.zoom_policy import DEFAULT_ZOOM, ZoomPolicy
from tests._factories import TELE, ULTRA, WIDE, make_device


def test_neutral_zoom_is_used_when_present():
    device = make_device("triple", lenses=(WIDE, ULTRA, TELE), min_zoom=1.0, neutral_zoom=2.0, max_zoom=15.0)
    assert ZoomPolicy().default_zoom(device) == 2.0


@pytest.mark.parametrize("neutral", [None, 0.0])
def test_missing_or_zero_neutral_zoom_falls_back_to_one(neutral):
    device = make_device("cam", min_zoom=1.0, neutral_zoom=neutral, max_zoom=5.0)
    assert ZoomPolicy().default_zoom(device) == DEFAULT_ZOOM == 1.0


def test_minimum_policy_applies_only_to_back_dual_wide():
    policy = ZoomPolicy("minimum_for_dual_wide")
    dual_wide = make_device("dw", Facing.BACK, (WIDE, ULTRA), min_zoom=0.5, neutral_zoom=1.0, max_zoom=10.0)
    triple = make_device("t", Facing.BACK, (WIDE, ULTRA, TELE), min_zoom=0.5, neutral_zoom=1.0, max_zoom=10.0)
    front = make_device("f", Facing.FRONT, (WIDE, ULTRA), min_zoom=0.5, neutral_zoom=1.0, max_zoom=10.0)

    assert policy.default_zoom(dual_wide) == 0.5
    assert policy.default_zoom(triple) == 1.0
    assert policy.default_zoom(front) == 1.0


def test_neutral_policy_is_uniform_for_dual_wide():
    dual_wide = make_device("dw", Facing.BACK, (WIDE, ULTRA), min_zoom=0.5, neutral_zoom=1.0, max_zoom=10.0)
    assert ZoomPolicy("neutral").default_zoom(dual_wide) == dual_wide.neutral_zoom


def test_unknown_policy_is_rejected():
    with pytest.raises(ValueError):
        ZoomPolicy("maximum")
