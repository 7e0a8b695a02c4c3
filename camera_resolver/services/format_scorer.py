from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from camera_resolver.schemas.camera import CameraDevice, CameraFormat, LensTag, Resolution


@dataclass
class FormatScore:
    """Score breakdown for one candidate format."""
    format: CameraFormat
    index: int
    aspect_score: float
    resolution_score: float
    fov_multiplier: float
    total: float
    covers_target: bool


class FormatScorer:
    """
    Picks the capture format that best matches a requested target resolution.

    total = (aspect_score * aspect_weight + resolution_score * resolution_weight) * fov_multiplier

    Only formats with photo dimensions compete. When at least one of them covers
    the target on both axes, undersized formats are dropped before ranking.
    Ties resolve to the earliest format in the device's list.
    """
    def __init__(
        self,
        aspect_weight: float = 2.0,
        resolution_weight: float = 1.5,
        area_scale: float = 100000.0,
        wide_fov_range: Tuple[float, float] = (65.0, 95.0),
        wide_fov_boost: float = 1.5,
        off_wide_penalty: float = 0.8,
    ):
        self.aspect_weight = aspect_weight
        self.resolution_weight = resolution_weight
        self.area_scale = area_scale
        self.wide_fov_range = wide_fov_range
        self.wide_fov_boost = wide_fov_boost
        self.off_wide_penalty = off_wide_penalty

    @staticmethod
    def uses_fov_weighting(device: CameraDevice) -> bool:
        """More than one lens kind, at least one of which is not the plain wide lens."""
        tags = device.physical_devices
        return len(tags) > 1 and any(tag != LensTag.WIDE_ANGLE for tag in tags)

    def score(
        self,
        device: CameraDevice,
        target: Resolution,
        aspect_ratio_hint: Optional[float] = None,
    ) -> List[FormatScore]:
        candidates = [(i, f) for i, f in enumerate(device.formats) if f.photo_resolution is not None]
        if not candidates:
            return []

        target_ar = aspect_ratio_hint if aspect_ratio_hint and aspect_ratio_hint > 0 else target.aspect_ratio
        photo_w = np.array([f.photo_width for _, f in candidates], dtype=float)
        photo_h = np.array([f.photo_height for _, f in candidates], dtype=float)
        fov = np.array([f.field_of_view for _, f in candidates], dtype=float)

        aspect_scores = 1.0 / (1.0 + np.abs(target_ar - photo_w / photo_h))

        covers = (photo_w >= target.width) & (photo_h >= target.height)
        area_diff = np.abs(photo_w * photo_h - float(target.area))
        resolution_scores = np.where(covers, 1.0 / (1.0 + area_diff / self.area_scale), 0.0)

        if self.uses_fov_weighting(device):
            low, high = self.wide_fov_range
            in_wide = (fov >= low) & (fov <= high)
            multipliers = np.where(in_wide, self.wide_fov_boost, self.off_wide_penalty)
        else:
            multipliers = np.ones_like(fov)

        totals = (aspect_scores * self.aspect_weight + resolution_scores * self.resolution_weight) * multipliers

        return [
            FormatScore(
                format=fmt,
                index=index,
                aspect_score=float(aspect_scores[k]),
                resolution_score=float(resolution_scores[k]),
                fov_multiplier=float(multipliers[k]),
                total=float(totals[k]),
                covers_target=bool(covers[k]),
            )
            for k, (index, fmt) in enumerate(candidates)
        ]

    def best_format(
        self,
        device: CameraDevice,
        target: Resolution,
        aspect_ratio_hint: Optional[float] = None,
    ) -> Optional[CameraFormat]:
        scores = self.score(device, target, aspect_ratio_hint)
        if not scores:
            return None

        totals = np.array([s.total for s in scores], dtype=float)
        covering = np.array([s.covers_target for s in scores], dtype=bool)
        if covering.any():
            totals = np.where(covering, totals, -np.inf)

        # argmax returns the first maximum, which is the earliest-listed format.
        return scores[int(np.argmax(totals))].format
