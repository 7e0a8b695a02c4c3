"""
This module defines the Pydantic models for the event payloads used by the
application's event bus. Payloads carry everything a subscriber needs so that
WebSocket streaming never has to query the store.
"""
from pydantic import BaseModel, Field
from typing import List, Optional

from camera_resolver.schemas.camera import DeviceSummary
from camera_resolver.schemas.capture import PostProcessingPlan
from camera_resolver.schemas.selection import EngineError, SelectionState

class EventPayload(BaseModel):
    """Base model for all event payloads."""
    timestamp: float = Field(..., description="The unix timestamp when the event was generated.")
    revision: int = Field(0, description="Revision of the action that produced the event.")

# --- Engine Events ---
class DevicesUpdatedPayload(EventPayload):
    """Payload for DEVICES_UPDATED event."""
    devices: List[DeviceSummary]

class SelectionChangedPayload(EventPayload):
    """Payload for SELECTION_CHANGED event."""
    state: SelectionState

class EngineErrorPayload(EventPayload):
    """Payload for ENGINE_ERROR event."""
    error: EngineError
    action: Optional[str] = None

# --- Capture Events ---
class CaptureCompletedPayload(EventPayload):
    """Payload for CAPTURE_COMPLETED event, handed to the post-processing collaborator."""
    plan: PostProcessingPlan

class CaptureFailedPayload(EventPayload):
    """Payload for CAPTURE_FAILED event."""
    error: EngineError
