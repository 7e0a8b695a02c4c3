import threading
from typing import List, Literal, Optional, Sequence, Tuple

from cachetools import LRUCache
from cachetools.keys import hashkey

from camera_resolver.schemas.camera import CameraDevice, Resolution
from camera_resolver.services.device_classifier import largest_format
from camera_resolver.services.resolution_catalog import ResolutionCatalog

MatchMode = Literal["video_exact", "bounding"]


class CapabilityFilter:
    """
    Narrows catalog resolutions down to the ones a device can realize.

    `video_exact` keeps entries matching some format's video dimensions exactly
    (preview/video selection). `bounding` keeps entries covered by the device's
    largest photo resolution (photo selection). The optional ceiling is applied
    before matching. Devices are immutable snapshots, so results are memoised.
    """
    def __init__(
        self,
        catalog: ResolutionCatalog,
        mode: MatchMode = "video_exact",
        ceiling: Optional[Tuple[int, int]] = (2160, 2160),
        cache_size: int = 256,
    ):
        self.catalog = catalog
        self.mode = mode
        self.ceiling = ceiling
        self._lock = threading.RLock()
        self._cache: LRUCache = LRUCache(maxsize=cache_size)

    def available_resolutions(
        self,
        device: CameraDevice,
        label: str,
        mode: Optional[MatchMode] = None,
    ) -> List[Resolution]:
        return self.filter_resolutions(device, self.catalog.resolutions_for(label), mode=mode)

    def filter_resolutions(
        self,
        device: CameraDevice,
        resolutions: Sequence[Resolution],
        mode: Optional[MatchMode] = None,
    ) -> List[Resolution]:
        mode = mode or self.mode
        candidates = tuple(resolutions)
        key = hashkey(device, candidates, mode, self.ceiling)
        with self._lock:
            cached = self._cache.get(key)
        if cached is not None:
            return list(cached)

        within_ceiling = [r for r in candidates if self._within_ceiling(r)]
        if mode == "video_exact":
            result = self._match_video_exact(device, within_ceiling)
        elif mode == "bounding":
            result = self._match_bounding(device, within_ceiling)
        else:
            raise ValueError(f"Unsupported match mode: {mode}")

        with self._lock:
            self._cache[key] = tuple(result)
        return result

    def _within_ceiling(self, resolution: Resolution) -> bool:
        if self.ceiling is None:
            return True
        max_width, max_height = self.ceiling
        return resolution.fits_within(max_width, max_height)

    @staticmethod
    def _match_video_exact(device: CameraDevice, resolutions: Sequence[Resolution]) -> List[Resolution]:
        video_sizes = {(f.video_width, f.video_height) for f in device.formats}
        return [r for r in resolutions if (r.width, r.height) in video_sizes]

    @staticmethod
    def _match_bounding(device: CameraDevice, resolutions: Sequence[Resolution]) -> List[Resolution]:
        """Entries whose rectangle fits inside the largest photo rectangle.

        Comparing both axes is the aspect envelope: a 16:9 entry on a 4:3 sensor is
        bounded by the photo width, a 9:16 entry by the photo height.
        """
        max_photo_format = largest_format(device.formats, lambda f: f.photo_resolution)
        if max_photo_format is None:
            return []
        max_photo = max_photo_format.photo_resolution
        return [r for r in resolutions if max_photo.covers(r)]

    def clear_cache(self):
        with self._lock:
            self._cache.clear()
