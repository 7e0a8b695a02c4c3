"""기본 광학 줌 배율 결정 정책."""

from typing import Literal, Optional

from camera_resolver.schemas.camera import CameraDevice, Facing
from camera_resolver.services.device_classifier import is_dual_wide

ZoomPolicyName = Literal["neutral", "minimum_for_dual_wide"]

DEFAULT_ZOOM = 1.0


def _positive(value: Optional[float]) -> bool:
    return value is not None and value > 0


class ZoomPolicy:
    """
    `neutral` returns the device's neutral zoom (the point where a multi-lens
    device shows the primary wide field of view as 1x), else 1.0.
    `minimum_for_dual_wide` uses min_zoom for back dual-wide devices and
    behaves like `neutral` for every other device.
    """
    def __init__(self, policy: ZoomPolicyName = "neutral"):
        if policy not in ("neutral", "minimum_for_dual_wide"):
            raise ValueError(f"Unsupported zoom policy: {policy}")
        self.policy = policy

    def default_zoom(self, device: CameraDevice) -> float:
        if self.policy == "minimum_for_dual_wide" and device.facing == Facing.BACK and is_dual_wide(device):
            if _positive(device.min_zoom):
                return device.min_zoom
        if _positive(device.neutral_zoom):
            return device.neutral_zoom
        return DEFAULT_ZOOM
