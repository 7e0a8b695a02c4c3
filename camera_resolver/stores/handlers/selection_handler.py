import threading
from typing import Any, Dict, Optional

from camera_resolver.schemas.selection import EngineError, SelectionState

class SelectionHandler:
    """
    Holds the authoritative SelectionState. Commits carry the revision of the
    action that produced them; a commit older than the last accepted one is
    refused so a slow, superseded action can never overwrite newer state.
    """
    def __init__(self):
        self._lock = threading.RLock()
        self._state = SelectionState()
        self._revision: int = 0
        self._last_error: Optional[EngineError] = None

    def get_state(self) -> SelectionState:
        with self._lock:
            return self._state

    def get_revision(self) -> int:
        with self._lock:
            return self._revision

    def commit(self, state: SelectionState, revision: int, error: Optional[EngineError] = None) -> bool:
        with self._lock:
            if revision < self._revision:
                return False
            self._state = state
            self._revision = revision
            self._last_error = error
            return True

    def get_last_error(self) -> Optional[EngineError]:
        with self._lock:
            return self._last_error

    def get_status(self) -> Dict[str, Any]:
        with self._lock:
            state = self._state
            return {
                "phase": state.phase.value,
                "revision": self._revision,
                "selected_device_id": state.selected_device_id,
                "selected_format": state.selected_format.model_dump() if state.selected_format else None,
                "selected_zoom": state.selected_zoom,
                "selected_aspect_ratio_label": state.selected_aspect_ratio_label,
                "selected_resolution_string": state.selected_resolution_string,
                "last_error": self._last_error.model_dump(mode="json") if self._last_error else None,
            }

    def clear(self):
        with self._lock:
            self._state = SelectionState()
            self._revision = 0
            self._last_error = None
