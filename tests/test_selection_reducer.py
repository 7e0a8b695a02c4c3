from camera_resolver.schemas.camera import Facing
from camera_resolver.schemas.selection import (
    EngineErrorKind,
    SelectAspectRatio,
    SelectDevice,
    SelectionPhase,
    SelectionState,
    TogglePosition,
)
from camera_resolver.services.resolution_catalog import LANDSCAPE_16X9, LANDSCAPE_4X3, SQUARE
from camera_resolver.services.selection_reducer import default_device
from tests._factories import TELE, ULTRA, WIDE, make_device, make_format, make_reducer, phone_snapshot, standard_formats


def _discovered(reducer, devices):
    transition = reducer.discover(SelectionState(), devices)
    assert transition.ok
    return transition.state


# --- Default device rule ---

def test_default_device_prefers_back_wide_then_front_wide_then_first():
    back_tele = make_device("back-tele", Facing.BACK, (TELE,))
    back_wide = make_device("back-wide", Facing.BACK, (WIDE,))
    front_wide = make_device("front-wide", Facing.FRONT, (WIDE,))
    front_ultra = make_device("front-ultra", Facing.FRONT, (ULTRA,))

    assert default_device([back_tele, front_wide, back_wide]) is back_wide
    assert default_device([back_tele, front_wide]) is front_wide
    assert default_device([front_ultra, back_tele]) is front_ultra
    assert default_device([]) is None


# --- Discovery ---

def test_discovery_selects_default_device_and_resolves_format():
    reducer = make_reducer()
    state = _discovered(reducer, phone_snapshot())

    assert state.phase == SelectionPhase.FORMAT_RESOLVED
    assert state.selected_device.id == "back-triple"
    assert state.selected_zoom == 2.0
    # 3840x2160 exceeds the 2160x2160 ceiling; the 60 fps 1080p format wins the tie.
    assert state.selected_format.video_resolution.width == 1920
    assert state.selected_format.max_fps == 60


def test_empty_snapshot_returns_idle_and_no_device_available():
    transition = make_reducer().discover(SelectionState(), [])
    assert transition.state.phase == SelectionPhase.IDLE
    assert transition.state.selected_device is None
    assert transition.error.kind == EngineErrorKind.NO_DEVICE_AVAILABLE


def test_default_format_falls_back_to_largest_when_nothing_fits_ceiling():
    reducer = make_reducer(ceiling=(1000, 1000))
    device = make_device("cam", formats=standard_formats())
    assert reducer.default_format(device).video_resolution.width == 3840


def test_default_format_without_ceiling_is_largest_area():
    reducer = make_reducer(ceiling=None)
    device = make_device("cam", formats=standard_formats())
    assert reducer.default_format(device).video_resolution.width == 3840


def test_device_without_formats_stays_device_selected():
    reducer = make_reducer()
    transition = reducer.discover(SelectionState(), [make_device("empty", formats=())])
    assert transition.error.kind == EngineErrorKind.NO_FORMAT_AVAILABLE
    assert transition.state.phase == SelectionPhase.DEVICE_SELECTED
    assert transition.state.selected_device.id == "empty"
    assert transition.state.selected_format is None


def test_rediscovery_keeps_selection_when_identity_survives():
    reducer = make_reducer()
    devices = phone_snapshot()
    state = reducer.select_device(_discovered(reducer, devices), devices, "back-wide").state
    state = reducer.select_resolution(state, "1920x1080", LANDSCAPE_16X9).state

    refreshed = phone_snapshot()
    transition = reducer.discover(state, list(reversed(refreshed)))

    assert transition.ok
    assert transition.state.selected_device.id == "back-wide"
    assert transition.state.selected_resolution_string == "1920x1080"
    assert transition.state.selected_aspect_ratio_label == LANDSCAPE_16X9


def test_rediscovery_falls_back_to_default_when_selected_device_disappears():
    reducer = make_reducer()
    devices = phone_snapshot()
    state = reducer.select_device(_discovered(reducer, devices), devices, "front-truedepth").state
    assert state.selected_device.id == "front-truedepth"

    remaining = [d for d in devices if d.id != "front-truedepth"]
    transition = reducer.discover(state, remaining)

    assert transition.ok
    assert transition.state.selected_device.id == "back-triple"
    assert transition.state.phase == SelectionPhase.FORMAT_RESOLVED
    assert transition.state.selected_device in remaining


# --- User actions ---

def test_select_unknown_device_keeps_state():
    reducer = make_reducer()
    devices = phone_snapshot()
    state = _discovered(reducer, devices)
    transition = reducer.apply(state, devices, SelectDevice(device_id="missing"))
    assert transition.error.kind == EngineErrorKind.DEVICE_NOT_FOUND
    assert transition.state == state


def test_toggle_switches_to_first_device_facing_the_other_way():
    reducer = make_reducer()
    devices = phone_snapshot()
    state = _discovered(reducer, devices)

    front = reducer.apply(state, devices, TogglePosition()).state
    assert front.selected_device.id == "front-truedepth"
    assert front.phase == SelectionPhase.FORMAT_RESOLVED

    back = reducer.apply(front, devices, TogglePosition()).state
    assert back.selected_device.id == "back-triple"


def test_toggle_without_counterpart_leaves_selection_unchanged():
    reducer = make_reducer()
    devices = [d for d in phone_snapshot() if d.facing == Facing.BACK]
    state = _discovered(reducer, devices)

    transition = reducer.toggle_position(state, devices)

    assert transition.error.kind == EngineErrorKind.NO_COUNTERPART_DEVICE
    assert transition.state == state


def test_toggle_before_any_selection_reports_no_device():
    transition = make_reducer().toggle_position(SelectionState(), [])
    assert transition.error.kind == EngineErrorKind.NO_DEVICE_AVAILABLE


def test_select_aspect_ratio_validates_label():
    reducer = make_reducer()
    state = _discovered(reducer, phone_snapshot())

    updated = reducer.apply(state, [], SelectAspectRatio(label=LANDSCAPE_4X3))
    assert updated.ok
    assert updated.state.selected_aspect_ratio_label == LANDSCAPE_4X3

    rejected = reducer.select_aspect_ratio(state, "21x9")
    assert rejected.error.kind == EngineErrorKind.UNKNOWN_ASPECT_RATIO
    assert rejected.state == state


def test_select_resolution_resolves_format_and_records_choice():
    reducer = make_reducer()
    state = _discovered(reducer, phone_snapshot())

    transition = reducer.select_resolution(state, "3840x2160", LANDSCAPE_16X9)

    assert transition.ok
    assert transition.state.phase == SelectionPhase.FORMAT_RESOLVED
    assert transition.state.selected_resolution_string == "3840x2160"
    assert transition.state.selected_format.photo_width == 3840
    assert transition.state.selected_format in transition.state.selected_device.formats


def test_select_resolution_rejects_unparseable_input():
    reducer = make_reducer()
    state = _discovered(reducer, phone_snapshot())
    for bad in ("", "1920", "0x1080", "axb"):
        transition = reducer.select_resolution(state, bad)
        assert transition.error.kind == EngineErrorKind.UNSUPPORTED_RESOLUTION
        assert transition.state == state


def test_select_resolution_without_photo_formats_is_unsupported():
    reducer = make_reducer()
    state = _discovered(reducer, [make_device("video-only", formats=[make_format((1920, 1080))])])
    transition = reducer.select_resolution(state, "1920x1080")
    assert transition.error.kind == EngineErrorKind.UNSUPPORTED_RESOLUTION
    assert transition.state == state


def test_changing_device_keeps_aspect_label_and_clears_resolution():
    reducer = make_reducer()
    devices = phone_snapshot()
    state = reducer.select_aspect_ratio(_discovered(reducer, devices), LANDSCAPE_16X9).state
    state = reducer.select_resolution(state, "1920x1080").state

    switched = reducer.select_device(state, devices, "back-ultra").state

    assert switched.selected_aspect_ratio_label == LANDSCAPE_16X9
    assert switched.selected_resolution_string is None
    assert switched.selected_zoom == 1.0


def test_stored_label_of_another_shape_does_not_steer_resolution_choice():
    reducer = make_reducer()
    device = make_device("single", formats=[
        make_format((1920, 1440), (4032, 3024), fov=70.0),
        make_format((1920, 1080), (3840, 2160), fov=80.0),
    ])
    state = reducer.select_aspect_ratio(_discovered(reducer, [device]), SQUARE).state

    transition = reducer.select_resolution(state, "1920x1080")

    assert transition.ok
    assert (transition.state.selected_format.photo_width, transition.state.selected_format.photo_height) == (3840, 2160)
    assert transition.state.selected_aspect_ratio_label == SQUARE


def test_select_resolution_rejects_unknown_explicit_label():
    reducer = make_reducer()
    state = _discovered(reducer, phone_snapshot())

    transition = reducer.select_resolution(state, "1920x1080", "21x9")

    assert transition.error.kind == EngineErrorKind.UNKNOWN_ASPECT_RATIO
    assert transition.state == state
