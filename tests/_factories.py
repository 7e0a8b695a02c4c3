from typing import Iterable, Optional, Tuple

from camera_resolver.schemas.camera import CameraDevice, CameraFormat, Facing, LensTag
from camera_resolver.services.capability_filter import CapabilityFilter
from camera_resolver.services.device_classifier import DeviceClassifier
from camera_resolver.services.format_scorer import FormatScorer
from camera_resolver.services.resolution_catalog import ResolutionCatalog
from camera_resolver.services.selection_reducer import SelectionReducer
from camera_resolver.services.zoom_policy import ZoomPolicy

WIDE = LensTag.WIDE_ANGLE
ULTRA = LensTag.ULTRA_WIDE_ANGLE
TELE = LensTag.TELEPHOTO


def make_format(
    video: Tuple[int, int],
    photo: Optional[Tuple[int, int]] = None,
    fps: float = 30.0,
    fov: float = 75.0,
) -> CameraFormat:
    return CameraFormat(
        video_width=video[0],
        video_height=video[1],
        photo_width=photo[0] if photo else None,
        photo_height=photo[1] if photo else None,
        max_fps=fps,
        field_of_view=fov,
    )


def make_device(
    device_id: str,
    facing: Facing = Facing.BACK,
    lenses: Iterable[LensTag] = (WIDE,),
    formats: Iterable[CameraFormat] = (),
    name: str = "",
    min_zoom: float = 1.0,
    neutral_zoom: Optional[float] = 1.0,
    max_zoom: float = 10.0,
) -> CameraDevice:
    return CameraDevice(
        id=device_id,
        name=name or device_id,
        facing=facing,
        physical_devices=frozenset(lenses),
        formats=tuple(formats),
        min_zoom=min_zoom,
        neutral_zoom=neutral_zoom,
        max_zoom=max_zoom,
    )


def make_reducer(ceiling=(2160, 2160), zoom_policy: str = "neutral") -> SelectionReducer:
    catalog = ResolutionCatalog()
    return SelectionReducer(
        catalog=catalog,
        scorer=FormatScorer(),
        zoom_policy=ZoomPolicy(zoom_policy),
        default_format_ceiling=ceiling,
    )


def make_engine_parts():
    catalog = ResolutionCatalog()
    return {
        "catalog": catalog,
        "classifier": DeviceClassifier(),
        "capability_filter": CapabilityFilter(catalog=catalog),
        "reducer": SelectionReducer(catalog=catalog, scorer=FormatScorer(), zoom_policy=ZoomPolicy()),
    }


def standard_formats():
    return [
        make_format((1280, 720), (4032, 3024), fps=60),
        make_format((1920, 1080), (3840, 2160), fps=30),
        make_format((1920, 1080), (4032, 3024), fps=60),
        make_format((3840, 2160), (4032, 3024), fps=30),
    ]


def phone_snapshot():
    """Back triple camera, back ultra wide, back wide, front TrueDepth."""
    return [
        make_device("back-triple", Facing.BACK, (WIDE, ULTRA, TELE), standard_formats(),
                    name="Back Triple Camera", min_zoom=1.0, neutral_zoom=2.0, max_zoom=123.75),
        make_device("back-ultra", Facing.BACK, (ULTRA,), standard_formats()),
        make_device("back-wide", Facing.BACK, (WIDE,), standard_formats()),
        make_device("front-truedepth", Facing.FRONT, (WIDE,), standard_formats(), name="Front TrueDepth Camera"),
    ]
