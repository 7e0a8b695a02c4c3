"""
선택 상태 머신의 순수 전이 함수 모음입니다.

모든 메서드는 (현재 상태, 디바이스 스냅샷, 입력)을 받아 새 `Transition`을 반환하며
상태를 직접 변경하거나 예외로 실패를 알리지 않습니다. 렌더링 없이 모든 전이를
테스트할 수 있도록 저장소/이벤트 버스와 분리되어 있습니다.
"""

from typing import Optional, Sequence, Tuple

from camera_resolver.core.logging import logger
from camera_resolver.schemas.camera import CameraDevice, CameraFormat, Facing, LensTag, Resolution
from camera_resolver.schemas.selection import (
    DiscoverDevices,
    EngineError,
    EngineErrorKind,
    SelectAspectRatio,
    SelectDevice,
    SelectResolution,
    SelectionAction,
    SelectionPhase,
    SelectionState,
    TogglePosition,
    Transition,
)
from camera_resolver.services.device_classifier import largest_format
from camera_resolver.services.format_scorer import FormatScorer
from camera_resolver.services.resolution_catalog import ResolutionCatalog
from camera_resolver.services.zoom_policy import ZoomPolicy

ASPECT_MATCH_TOLERANCE = 0.01


def _same_aspect(a: float, b: float) -> bool:
    return abs(a - b) <= ASPECT_MATCH_TOLERANCE * max(a, b)


def default_device(devices: Sequence[CameraDevice]) -> Optional[CameraDevice]:
    """First back wide-angle device, else first front wide-angle device, else the first device."""
    for facing in (Facing.BACK, Facing.FRONT):
        for device in devices:
            if device.facing == facing and device.has_lens(LensTag.WIDE_ANGLE):
                return device
    return devices[0] if devices else None


def find_device(devices: Sequence[CameraDevice], device_id: Optional[str]) -> Optional[CameraDevice]:
    if device_id is None:
        return None
    return next((d for d in devices if d.id == device_id), None)


class SelectionReducer:
    def __init__(
        self,
        catalog: ResolutionCatalog,
        scorer: FormatScorer,
        zoom_policy: ZoomPolicy,
        default_format_ceiling: Optional[Tuple[int, int]] = (2160, 2160),
    ):
        self.catalog = catalog
        self.scorer = scorer
        self.zoom_policy = zoom_policy
        self.default_format_ceiling = default_format_ceiling

    def apply(
        self,
        state: SelectionState,
        devices: Sequence[CameraDevice],
        action: SelectionAction,
    ) -> Transition:
        """Dispatches one action. For discovery, `devices` must be the new de-duplicated snapshot."""
        if isinstance(action, DiscoverDevices):
            return self.discover(state, devices)
        if isinstance(action, SelectDevice):
            return self.select_device(state, devices, action.device_id)
        if isinstance(action, TogglePosition):
            return self.toggle_position(state, devices)
        if isinstance(action, SelectAspectRatio):
            return self.select_aspect_ratio(state, action.label)
        if isinstance(action, SelectResolution):
            return self.select_resolution(state, action.resolution, action.aspect_ratio_label)
        raise TypeError(f"Unsupported selection action: {type(action).__name__}")

    # --- Transitions ---

    def discover(self, state: SelectionState, devices: Sequence[CameraDevice]) -> Transition:
        if not devices:
            return Transition(
                state=SelectionState(phase=SelectionPhase.IDLE),
                error=EngineError.of(EngineErrorKind.NO_DEVICE_AVAILABLE),
            )

        retained = find_device(devices, state.selected_device_id)
        if retained is not None:
            # Same identity, fresh copy: keep the user's choices and re-derive.
            selected = state.model_copy(update={
                "phase": SelectionPhase.DEVICE_SELECTED,
                "selected_device": retained,
                "selected_format": None,
            })
            return self._derive(selected)

        if state.selected_device is not None:
            logger.info(f"Selected device '{state.selected_device.id}' left the snapshot; falling back to default.")

        chosen = default_device(devices)
        return self._derive(self._with_device(state, chosen))

    def select_device(
        self,
        state: SelectionState,
        devices: Sequence[CameraDevice],
        device_id: str,
    ) -> Transition:
        device = find_device(devices, device_id)
        if device is None:
            return Transition(state=state, error=EngineError.of(EngineErrorKind.DEVICE_NOT_FOUND, device_id))
        return self._derive(self._with_device(state, device))

    def toggle_position(self, state: SelectionState, devices: Sequence[CameraDevice]) -> Transition:
        current = state.selected_device
        if current is None:
            return Transition(state=state, error=EngineError.of(EngineErrorKind.NO_DEVICE_AVAILABLE))

        counterpart = next((d for d in devices if d.facing != current.facing), None)
        if counterpart is None:
            wanted = "front" if current.facing == Facing.BACK else "back"
            return Transition(
                state=state,
                error=EngineError.of(EngineErrorKind.NO_COUNTERPART_DEVICE, f"no {wanted} camera"),
            )
        return self._derive(self._with_device(state, counterpart))

    def select_aspect_ratio(self, state: SelectionState, label: str) -> Transition:
        if not self.catalog.has_label(label):
            return Transition(state=state, error=EngineError.of(EngineErrorKind.UNKNOWN_ASPECT_RATIO, label))
        return Transition(state=state.model_copy(update={"selected_aspect_ratio_label": label}))

    def select_resolution(
        self,
        state: SelectionState,
        resolution: str,
        aspect_ratio_label: Optional[str] = None,
    ) -> Transition:
        device = state.selected_device
        if device is None:
            return Transition(state=state, error=EngineError.of(EngineErrorKind.NO_DEVICE_AVAILABLE))

        target = Resolution.parse(resolution)
        if target is None:
            return Transition(
                state=state,
                error=EngineError.of(EngineErrorKind.UNSUPPORTED_RESOLUTION, f"cannot parse '{resolution}'"),
            )

        if aspect_ratio_label is not None and not self.catalog.has_label(aspect_ratio_label):
            return Transition(
                state=state,
                error=EngineError.of(EngineErrorKind.UNKNOWN_ASPECT_RATIO, aspect_ratio_label),
            )

        label = aspect_ratio_label or state.selected_aspect_ratio_label
        hint = self.catalog.aspect_ratio_for(label)
        if aspect_ratio_label is None and hint is not None and not _same_aspect(hint, target.aspect_ratio):
            # stored label describes another shape; score against the target itself
            hint = None
        fmt = self.scorer.best_format(device, target, hint)
        if fmt is None:
            return Transition(
                state=state,
                error=EngineError.of(EngineErrorKind.UNSUPPORTED_RESOLUTION, str(target)),
            )

        return Transition(state=state.model_copy(update={
            "phase": SelectionPhase.FORMAT_RESOLVED,
            "selected_format": fmt,
            "selected_resolution_string": str(target),
            "selected_aspect_ratio_label": label,
        }))

    # --- Downstream derivation ---

    def default_format(self, device: CameraDevice) -> Optional[CameraFormat]:
        """Largest video format within the ceiling (ties by frame rate); the overall largest if none fits."""
        formats = device.formats
        if self.default_format_ceiling is not None:
            max_width, max_height = self.default_format_ceiling
            within = [f for f in formats if f.video_resolution.fits_within(max_width, max_height)]
            chosen = largest_format(within, lambda f: f.video_resolution)
            if chosen is not None:
                return chosen
            if formats:
                logger.warning(
                    f"No format of '{device.id}' fits within {max_width}x{max_height}; using the largest format."
                )
        return largest_format(formats, lambda f: f.video_resolution)

    @staticmethod
    def _with_device(state: SelectionState, device: CameraDevice) -> SelectionState:
        return state.model_copy(update={
            "phase": SelectionPhase.DEVICE_SELECTED,
            "selected_device": device,
            "selected_format": None,
            "selected_resolution_string": None,
        })

    def _derive(self, state: SelectionState) -> Transition:
        device = state.selected_device
        zoom = self.zoom_policy.default_zoom(device)
        state = state.model_copy(update={"selected_zoom": zoom})

        if not device.formats:
            return Transition(
                state=state.model_copy(update={"phase": SelectionPhase.DEVICE_SELECTED}),
                error=EngineError.of(EngineErrorKind.NO_FORMAT_AVAILABLE, device.id),
            )

        if state.selected_resolution_string is not None:
            requested = self.select_resolution(state, state.selected_resolution_string)
            if requested.ok:
                return requested
            logger.info(
                f"Resolution {state.selected_resolution_string} no longer realizable on '{device.id}'; using default format."
            )

        return Transition(state=state.model_copy(update={
            "phase": SelectionPhase.FORMAT_RESOLVED,
            "selected_format": self.default_format(device),
            "selected_resolution_string": None,
        }))
