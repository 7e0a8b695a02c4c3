from typing import Any, Dict

from camera_resolver.core.config import settings
from camera_resolver.core.logging import logger
from camera_resolver.stores.handlers.device_handler import DeviceHandler
from camera_resolver.stores.handlers.selection_handler import SelectionHandler
from camera_resolver.stores.handlers.event_handler import EventHandler

class ApplicationStore:
    """
    The main store for the application. It acts as a container for the state
    handlers, each responsible for one slice of engine state.
    """
    def __init__(self):
        self.devices = DeviceHandler()      # Latest classified device snapshot
        self.selection = SelectionHandler() # Authoritative SelectionState
        self.events = EventHandler(window_size=settings.EVENT_HISTORY_SIZE)
        logger.info("ApplicationStore initialized with all handlers.")

    def get_status(self) -> Dict[str, Any]:
        """
        Aggregates status from all handlers into one snapshot of engine state.
        """
        return {
            "device_status": self.devices.get_status(),
            "selection_status": self.selection.get_status(),
            "event_status": self.events.get_status(),
        }

    def reset(self):
        self.devices.clear()
        self.selection.clear()
        self.events.clear()
