import threading
import time
from typing import List, Optional

from camera_resolver.schemas.camera import CameraDevice, ClassifiedDevice, DeviceSummary

class DeviceHandler:
    """
    Holds the latest classified, de-duplicated device snapshot. Each snapshot
    replaces the previous one wholesale.
    """
    def __init__(self):
        self._lock = threading.RLock()
        self._devices: List[ClassifiedDevice] = []
        self._revision: int = 0
        self._updated_at: Optional[float] = None

    def replace_snapshot(self, devices: List[ClassifiedDevice], revision: int):
        with self._lock:
            self._devices = list(devices)
            self._revision = revision
            self._updated_at = time.time()

    def get_classified(self) -> List[ClassifiedDevice]:
        with self._lock:
            return list(self._devices)

    def get_devices(self) -> List[CameraDevice]:
        with self._lock:
            return [entry.device for entry in self._devices]

    def get_summaries(self) -> List[DeviceSummary]:
        with self._lock:
            return [DeviceSummary.from_classified(entry) for entry in self._devices]

    def get_classified_by_id(self, device_id: str) -> Optional[ClassifiedDevice]:
        with self._lock:
            return next((entry for entry in self._devices if entry.device.id == device_id), None)

    def get_status(self):
        with self._lock:
            return {
                "device_count": len(self._devices),
                "snapshot_revision": self._revision,
                "updated_at": self._updated_at,
                "labels": [entry.label for entry in self._devices],
            }

    def clear(self):
        with self._lock:
            self._devices = []
            self._revision = 0
            self._updated_at = None
