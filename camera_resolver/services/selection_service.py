import asyncio
import time
from typing import Dict, List, Optional, Sequence, Tuple

from camera_resolver.core.event_bus import EventBus
from camera_resolver.core.event_type import EventType
from camera_resolver.core.logging import logger
from camera_resolver.schemas.camera import CameraDevice, DeviceSummary
from camera_resolver.schemas.events import (
    DevicesUpdatedPayload, EngineErrorPayload, SelectionChangedPayload
)
from camera_resolver.schemas.selection import (
    DiscoverDevices,
    SelectAspectRatio,
    SelectDevice,
    SelectResolution,
    SelectionAction,
    SelectionState,
    TogglePosition,
    Transition,
    DEVICE_CHANGE_KINDS,
    USER_ACTION_KINDS,
)
from camera_resolver.services.capability_filter import CapabilityFilter, MatchMode
from camera_resolver.services.device_classifier import DeviceClassifier
from camera_resolver.services.selection_reducer import SelectionReducer
from camera_resolver.stores.application_store import ApplicationStore

class SelectionService:
    """
    Drives the selection state machine.

    Discovery snapshots and user actions go through one ordered queue drained
    by a single worker task. Each action is stamped with a revision when it is
    submitted; a user action that already has a newer pending action of the
    same kind is reported as superseded instead of being applied. A pending
    device change (select or toggle) also supersedes older resolution requests.
    """
    def __init__(
        self,
        store: ApplicationStore,
        event_bus: EventBus,
        reducer: SelectionReducer,
        classifier: DeviceClassifier,
        capability_filter: CapabilityFilter,
    ):
        self.store = store
        self.event_bus = event_bus
        self.reducer = reducer
        self.classifier = classifier
        self.capability_filter = capability_filter
        self._queue: Optional[asyncio.Queue] = None
        self._worker: Optional[asyncio.Task] = None
        self._next_revision = store.selection.get_revision()
        self._latest_user_revision: Dict[str, int] = {}
        self._latest_device_change = 0

    @property
    def is_running(self) -> bool:
        return self._worker is not None and not self._worker.done()

    async def start(self):
        if self.is_running:
            return
        self._queue = asyncio.Queue()
        self._worker = asyncio.create_task(self._run())
        logger.info("SelectionService started; processing actions in submission order.")

    async def stop(self):
        if self._worker is None:
            return
        self._worker.cancel()
        try:
            await self._worker
        except asyncio.CancelledError:
            pass
        self._worker = None
        self._queue = None
        logger.info("SelectionService stopped.")

    # --- Submission ---

    async def submit(self, action: SelectionAction) -> Transition:
        revision = self._stamp(action)
        if not self.is_running:
            return await self._process(action, revision)

        future = asyncio.get_running_loop().create_future()
        await self._queue.put((action, revision, future))
        return await future

    async def ingest_snapshot(self, devices: Sequence[CameraDevice]) -> Transition:
        return await self.submit(DiscoverDevices(devices=tuple(devices)))

    async def select_device(self, device_id: str) -> Transition:
        return await self.submit(SelectDevice(device_id=device_id))

    async def toggle_position(self) -> Transition:
        return await self.submit(TogglePosition())

    async def select_aspect_ratio(self, label: str) -> Transition:
        return await self.submit(SelectAspectRatio(label=label))

    async def select_resolution(self, resolution: str, aspect_ratio_label: Optional[str] = None) -> Transition:
        return await self.submit(SelectResolution(resolution=resolution, aspect_ratio_label=aspect_ratio_label))

    def _stamp(self, action: SelectionAction) -> int:
        self._next_revision += 1
        revision = self._next_revision
        if action.kind in USER_ACTION_KINDS:
            self._latest_user_revision[action.kind] = revision
        if action.kind in DEVICE_CHANGE_KINDS:
            self._latest_device_change = revision
        return revision

    def _is_superseded(self, action: SelectionAction, revision: int) -> bool:
        if action.kind not in USER_ACTION_KINDS:
            return False
        if revision < self._latest_user_revision.get(action.kind, revision):
            return True
        # a resolution request targets the device current at submission
        return action.kind == "select_resolution" and revision < self._latest_device_change

    # --- Processing ---

    async def _run(self):
        while True:
            action, revision, future = await self._queue.get()
            try:
                transition = await self._process(action, revision)
                if not future.done():
                    future.set_result(transition)
            except Exception as e:
                logger.opt(exception=e).error(f"Failed to process selection action '{action.kind}': {e}")
                if not future.done():
                    future.set_exception(e)
            finally:
                self._queue.task_done()

    async def _process(self, action: SelectionAction, revision: int) -> Transition:
        if self._is_superseded(action, revision):
            logger.warning(f"Action '{action.kind}' (revision {revision}) superseded by a newer one; skipped.")
            return Transition(state=self.store.selection.get_state(), superseded=True)

        previous = self.store.selection.get_state()
        transition = self.dispatch(action, revision)
        if transition.superseded:
            return transition

        timestamp = time.time()
        if isinstance(action, DiscoverDevices):
            await self.event_bus.publish(
                EventType.DEVICES_UPDATED,
                DevicesUpdatedPayload(timestamp=timestamp, revision=revision, devices=self.store.devices.get_summaries()),
            )
        if transition.state != previous:
            await self.event_bus.publish(
                EventType.SELECTION_CHANGED,
                SelectionChangedPayload(timestamp=timestamp, revision=revision, state=transition.state),
            )
        if transition.error is not None:
            await self.event_bus.publish(
                EventType.ENGINE_ERROR,
                EngineErrorPayload(timestamp=timestamp, revision=revision, error=transition.error, action=action.kind),
            )
        return transition

    def dispatch(self, action: SelectionAction, revision: int) -> Transition:
        """Applies one action synchronously and commits the result to the store."""
        current = self.store.selection.get_state()

        if isinstance(action, DiscoverDevices):
            classified = self.classifier.classify_snapshot(action.devices)
            devices = [entry.device for entry in classified]
            transition = self.reducer.discover(current, devices)
            self.store.devices.replace_snapshot(classified, revision)
            logger.info(f"Device snapshot ingested: {len(action.devices)} reported, {len(classified)} unique.")
        else:
            transition = self.reducer.apply(current, self.store.devices.get_devices(), action)

        if not self.store.selection.commit(transition.state, revision, transition.error):
            logger.warning(f"Stale commit for '{action.kind}' (revision {revision}) refused.")
            return Transition(state=self.store.selection.get_state(), superseded=True)

        if transition.error is not None:
            logger.warning(f"Action '{action.kind}' returned {transition.error.kind.value}: {transition.error.message}")
        else:
            logger.info(
                f"Action '{action.kind}' -> phase={transition.state.phase.value}, "
                f"device={transition.state.selected_device_id}, resolution={transition.state.selected_resolution_string}"
            )
        return transition

    # --- Queries for the rendering collaborator ---

    def get_state(self) -> SelectionState:
        return self.store.selection.get_state()

    def get_devices(self) -> List[DeviceSummary]:
        return self.store.devices.get_summaries()

    def available_resolutions(self, label: str, mode: Optional[MatchMode] = None) -> List[str]:
        device = self.store.selection.get_state().selected_device
        if device is None:
            return []
        return [str(r) for r in self.capability_filter.available_resolutions(device, label, mode=mode)]

    def available_by_label(self, mode: Optional[MatchMode] = None) -> List[Tuple[str, List[str]]]:
        return [(label, self.available_resolutions(label, mode)) for label in self.capability_filter.catalog.labels()]
