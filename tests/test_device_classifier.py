import itertools

from camera_resolver.schemas.camera import Facing
from camera_resolver.services.device_classifier import ALL_LABELS, DeviceClassifier
from camera_resolver.services.zoom_policy import ZoomPolicy
from tests._factories import TELE, ULTRA, WIDE, make_device, make_format


def _all_lens_combinations():
    tags = (WIDE, ULTRA, TELE)
    for size in range(len(tags) + 1):
        yield from itertools.combinations(tags, size)


def test_classifier_is_total_and_deterministic():
    classifier = DeviceClassifier()
    for facing in Facing:
        for lenses in _all_lens_combinations():
            for name in ("Camera", "Front TrueDepth Camera"):
                device = make_device("id", facing, lenses, name=name)
                first = classifier.classify(device)
                assert first in ALL_LABELS
                assert classifier.classify(device) == first


def test_back_rules_follow_precedence():
    classifier = DeviceClassifier()
    cases = {
        (ULTRA, WIDE, TELE): "Back Triple Camera",
        (ULTRA, WIDE): "Back Dual Wide Camera",
        (WIDE, TELE): "Back Dual Camera",
        (TELE,): "Back Telephoto Camera",
        (ULTRA,): "Back Ultra Wide Camera",
        (WIDE,): "Back Camera",
        (): "Back Camera",
        (ULTRA, TELE): "Back Telephoto Camera",
    }
    for lenses, expected in cases.items():
        assert classifier.classify(make_device("b", Facing.BACK, lenses)) == expected


def test_front_rules():
    classifier = DeviceClassifier()
    assert classifier.classify(make_device("f", Facing.FRONT, (ULTRA, WIDE), name="Front TrueDepth")) == "Front Ultra Wide Camera"
    assert classifier.classify(make_device("f", Facing.FRONT, (WIDE,), name="Front TrueDepth Camera")) == "Front TrueDepth Camera"
    assert classifier.classify(make_device("built-in_TrueDepth:1", Facing.FRONT, (WIDE,), name="Camera")) == "Front TrueDepth Camera"
    assert classifier.classify(make_device("f", Facing.FRONT, (WIDE,), name="FaceTime HD")) == "Front Camera"


def test_custom_depth_marker_token():
    classifier = DeviceClassifier(depth_marker_token="ToF")
    assert classifier.classify(make_device("f", Facing.FRONT, (WIDE,), name="Front ToF Sensor")) == "Front TrueDepth Camera"
    assert classifier.classify(make_device("f", Facing.FRONT, (WIDE,), name="Front TrueDepth Camera")) == "Front Camera"


def test_scenario_dual_wide_back_camera_uses_neutral_zoom():
    device = make_device("dual-wide", Facing.BACK, (WIDE, ULTRA), min_zoom=1.0, neutral_zoom=2.0, max_zoom=16.0)
    assert DeviceClassifier().classify(device) == "Back Dual Wide Camera"
    assert ZoomPolicy().default_zoom(device) == device.neutral_zoom


def test_snapshot_dedup_keeps_first_occurrence_by_identity():
    first = make_device("cam-1", Facing.BACK, (WIDE, TELE))
    same_id_other_lenses = make_device("cam-1", Facing.BACK, (ULTRA,))
    other = make_device("cam-2", Facing.FRONT, (WIDE,))

    result = DeviceClassifier().classify_snapshot([first, other, same_id_other_lenses])

    assert [entry.device.id for entry in result] == ["cam-1", "cam-2"]
    assert result[0].label == "Back Dual Camera"
    assert result[0].device is first


def test_same_label_different_identity_is_not_collapsed():
    a = make_device("a", Facing.BACK, (WIDE,))
    b = make_device("b", Facing.BACK, (WIDE,))
    result = DeviceClassifier().classify_snapshot([a, b])
    assert [entry.label for entry in result] == ["Back Camera", "Back Camera"]


def test_representative_resolutions_use_area_then_frame_rate():
    device = make_device("cam", formats=[
        make_format((1920, 1080), (4032, 3024), fps=30),
        make_format((3840, 2160), None, fps=30),
        make_format((2160, 3840), (3024, 4032), fps=60),
    ])
    entry = DeviceClassifier().describe(device)
    # 3840x2160 and 2160x3840 share an area; the 60 fps format wins.
    assert entry.max_video_resolution == "2160x3840"
    assert entry.max_photo_resolution == "3024x4032"


def test_representative_photo_absent_when_no_photo_formats():
    device = make_device("video-only", formats=[make_format((1280, 720))])
    entry = DeviceClassifier().describe(device)
    assert entry.max_video_resolution == "1280x720"
    assert entry.max_photo_resolution is None
