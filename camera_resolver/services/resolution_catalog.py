"""화면비별 표준 해상도 카탈로그 (읽기 전용 참조 데이터)."""

from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from camera_resolver.schemas.camera import Resolution

SQUARE = "Square (1:1)"
LANDSCAPE_4X3 = "4x3 Landscape (4:3)"
PORTRAIT_3X4 = "3x4 Portrait (3:4)"
LANDSCAPE_16X9 = "16x9 Landscape (16:9)"
PORTRAIT_9X16 = "9x16 Portrait (9:16)"

DEFAULT_RESOLUTIONS_BY_RATIO: Dict[str, List[str]] = {
    SQUARE: [
        "720x720", "960x960", "1080x1080", "1200x1200", "1280x1280",
        "1440x1440", "1600x1600", "1920x1920", "2048x2048",
        "2160x2160", "2560x2560", "3024x3024",
    ],
    LANDSCAPE_4X3: [
        "960x720", "1280x960", "1440x1080", "1600x1200",
        "2048x1536", "2448x1836", "2560x1920", "2880x2160", "3024x2268",
    ],
    PORTRAIT_3X4: [
        "720x960", "960x1280", "1080x1440", "1200x1600",
        "1536x2048", "1836x2448", "1920x2560", "2160x2880",
        "2268x3024", "3024x4032",
    ],
    LANDSCAPE_16X9: [
        "1280x720", "1600x900", "1920x1080", "2160x1215",
        "2560x1440", "3024x1701",
    ],
    PORTRAIT_9X16: [
        "720x1280", "900x1600", "1080x1920", "1215x2160",
        "1440x2560", "1701x3024", "2160x3840", "2268x4032",
    ],
}

DEFAULT_NOMINAL_RATIOS: Dict[str, Tuple[int, int]] = {
    SQUARE: (1, 1),
    LANDSCAPE_4X3: (4, 3),
    PORTRAIT_3X4: (3, 4),
    LANDSCAPE_16X9: (16, 9),
    PORTRAIT_9X16: (9, 16),
}


class ResolutionCatalog:
    """
    Immutable mapping of aspect-ratio label to canonical resolutions.

    Every sequence is sorted ascending by width, then height, and de-duplicated
    at construction time. Safe to share between any number of readers.
    """
    def __init__(
        self,
        resolutions_by_ratio: Optional[Mapping[str, Sequence[str]]] = None,
        nominal_ratios: Optional[Mapping[str, Tuple[int, int]]] = None,
    ):
        source = resolutions_by_ratio if resolutions_by_ratio is not None else DEFAULT_RESOLUTIONS_BY_RATIO
        ratios = nominal_ratios if nominal_ratios is not None else DEFAULT_NOMINAL_RATIOS

        entries: Dict[str, Tuple[Resolution, ...]] = {}
        for label, values in source.items():
            parsed = set()
            for value in values:
                resolution = Resolution.parse(value)
                if resolution is None:
                    raise ValueError(f"Invalid catalog resolution '{value}' under '{label}'")
                parsed.add(resolution)
            entries[label] = tuple(sorted(parsed, key=lambda r: (r.width, r.height)))

        self._entries = entries
        self._ratios = {label: ratios[label] for label in entries if label in ratios}

    def labels(self) -> List[str]:
        return list(self._entries.keys())

    def resolutions_for(self, label: str) -> Tuple[Resolution, ...]:
        return self._entries.get(label, ())

    def has_label(self, label: str) -> bool:
        return label in self._entries

    def aspect_ratio_for(self, label: Optional[str]) -> Optional[float]:
        """Nominal ratio of a label (e.g. 16/9), used as the scorer's aspect hint."""
        if label is None or label not in self._ratios:
            return None
        width, height = self._ratios[label]
        return width / height

    def as_dict(self) -> Dict[str, List[str]]:
        return {label: [str(r) for r in values] for label, values in self._entries.items()}
