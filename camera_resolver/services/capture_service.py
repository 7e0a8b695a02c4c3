import time
from typing import Optional, Tuple

from camera_resolver.core.event_bus import EventBus
from camera_resolver.core.event_type import EventType
from camera_resolver.core.logging import logger
from camera_resolver.schemas.camera import CameraFormat, Resolution
from camera_resolver.schemas.capture import (
    CaptureConfiguration, CaptureOutcome, CaptureResult, CapturedAsset, PostProcessingPlan
)
from camera_resolver.schemas.events import CaptureCompletedPayload, CaptureFailedPayload
from camera_resolver.schemas.selection import EngineError, EngineErrorKind, SelectionPhase
from camera_resolver.services.selection_service import SelectionService
from camera_resolver.stores.application_store import ApplicationStore


def plan_post_processing(asset: CapturedAsset, target: Optional[str]) -> PostProcessingPlan:
    """
    Decides whether the external post-processor should crop/resize `asset`.
    Assets smaller than the target on either axis are returned as-is.
    """
    resolution = Resolution.parse(target) if target else None
    if resolution is None:
        return PostProcessingPlan(action="skip", asset=asset, reason="No target resolution selected.")

    if asset.width < resolution.width or asset.height < resolution.height:
        return PostProcessingPlan(
            action="skip",
            asset=asset,
            target_resolution=str(resolution),
            reason=f"Captured asset {asset.width}x{asset.height} is smaller than target {resolution}.",
        )
    return PostProcessingPlan(
        action="process",
        asset=asset,
        target_resolution=str(resolution),
        reason=f"Resize/crop {asset.width}x{asset.height} to {resolution}.",
    )


class CaptureService:
    """
    Entry point for the capture collaborator: the resolved (device, format, zoom)
    triple, user-driven format requests and captured-asset hand-off. Capture
    itself is owned by the collaborator; failures are surfaced, never retried.
    """
    def __init__(self, store: ApplicationStore, event_bus: EventBus, selection_service: SelectionService):
        self.store = store
        self.event_bus = event_bus
        self.selection_service = selection_service

    def get_configuration(self) -> Tuple[Optional[CaptureConfiguration], Optional[EngineError]]:
        state = self.store.selection.get_state()
        if state.selected_device is None:
            return None, EngineError.of(EngineErrorKind.NO_DEVICE_AVAILABLE)
        if state.phase != SelectionPhase.FORMAT_RESOLVED or state.selected_format is None:
            return None, EngineError.of(EngineErrorKind.NO_FORMAT_AVAILABLE, state.selected_device.id)
        return CaptureConfiguration(
            device=state.selected_device,
            format=state.selected_format,
            zoom=state.selected_zoom,
        ), None

    async def request_format_for(
        self,
        resolution: str,
        aspect_ratio_label: Optional[str] = None,
    ) -> Tuple[Optional[CameraFormat], Optional[EngineError]]:
        transition = await self.selection_service.select_resolution(resolution, aspect_ratio_label)
        if transition.error is not None:
            return None, transition.error
        if transition.superseded:
            return None, EngineError.of(EngineErrorKind.SUPERSEDED, resolution)
        return transition.state.selected_format, None

    async def handle_capture_result(self, result: CaptureResult) -> CaptureOutcome:
        timestamp = time.time()
        if result.error is not None:
            error = EngineError(kind=EngineErrorKind.CAPTURE_FAILED, message=result.error)
            logger.warning(f"Capture failed: {result.error}")
            await self.event_bus.publish(
                EventType.CAPTURE_FAILED,
                CaptureFailedPayload(timestamp=timestamp, error=error),
            )
            return CaptureOutcome(error=error)

        target = self.store.selection.get_state().selected_resolution_string
        plan = plan_post_processing(result.asset, target)
        logger.info(f"Capture received ({result.asset.path}): {plan.action} - {plan.reason}")
        await self.event_bus.publish(
            EventType.CAPTURE_COMPLETED,
            CaptureCompletedPayload(timestamp=timestamp, plan=plan),
        )
        return CaptureOutcome(plan=plan)
