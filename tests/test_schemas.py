import pytest
from pydantic import ValidationError

from camera_resolver.schemas.camera import CameraDevice, CameraFormat, LensTag, Resolution
from camera_resolver.schemas.capture import CaptureResult
from camera_resolver.schemas.selection import EngineError, EngineErrorKind, SelectionState
from tests._factories import make_device, make_format


@pytest.mark.parametrize("text, expected", [
    ("1920x1080", (1920, 1080)),
    (" 1280 X 720 ", (1280, 720)),
])
def test_resolution_parse(text, expected):
    resolution = Resolution.parse(text)
    assert (resolution.width, resolution.height) == expected
    assert str(resolution) == f"{expected[0]}x{expected[1]}"


@pytest.mark.parametrize("text", ["", "1920", "1920x", "x1080", "0x720", "-1x5", "1.5x2"])
def test_resolution_parse_rejects_malformed_input(text):
    assert Resolution.parse(text) is None


def test_photo_dimensions_must_be_paired():
    with pytest.raises(ValidationError):
        CameraFormat(video_width=1920, video_height=1080, photo_width=4032, field_of_view=70.0)


def test_zoom_range_is_validated():
    with pytest.raises(ValidationError):
        make_device("cam", min_zoom=2.0, neutral_zoom=None, max_zoom=1.0)
    with pytest.raises(ValidationError):
        make_device("cam", min_zoom=1.0, neutral_zoom=20.0, max_zoom=10.0)


def test_lens_tags_accept_camera_suffix():
    device = CameraDevice(
        id="cam",
        facing="back",
        physical_devices=["wide-angle-camera", "telephoto"],
        min_zoom=1.0,
        max_zoom=5.0,
    )
    assert device.physical_devices == frozenset({LensTag.WIDE_ANGLE, LensTag.TELEPHOTO})


def test_unknown_lens_tag_is_rejected():
    with pytest.raises(ValidationError):
        CameraDevice(id="cam", facing="back", physical_devices=["periscope"])


def test_devices_are_hashable_and_compare_by_value():
    a = make_device("cam", formats=[make_format((1920, 1080))])
    b = make_device("cam", formats=[make_format((1920, 1080))])
    assert a == b
    assert hash(a) == hash(b)


def test_selection_state_requires_device_for_downstream_fields():
    with pytest.raises(ValidationError):
        SelectionState(selected_format=make_format((1920, 1080)))
    with pytest.raises(ValidationError):
        SelectionState(selected_resolution_string="1920x1080")


def test_selection_state_format_must_belong_to_device():
    device = make_device("cam", formats=[make_format((1920, 1080))])
    with pytest.raises(ValidationError):
        SelectionState(selected_device=device, selected_format=make_format((1280, 720)))


def test_capture_result_requires_exactly_one_outcome():
    with pytest.raises(ValidationError):
        CaptureResult()
    with pytest.raises(ValidationError):
        CaptureResult(
            asset={"path": "/tmp/a.jpg", "width": 1, "height": 1, "byte_size": 1},
            error="both",
        )


def test_engine_error_default_message_and_detail():
    error = EngineError.of(EngineErrorKind.DEVICE_NOT_FOUND, "cam-9")
    assert error.kind.value == "DeviceNotFound"
    assert error.message.endswith("(cam-9)")
