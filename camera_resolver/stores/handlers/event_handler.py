import threading
import time
from typing import Dict, Any, Deque
from collections import deque, defaultdict
from datetime import datetime

class EventHandler:
    """
    Tracks event publications for monitoring and debugging: last publication
    time, total count and the recent publication rate of each event type.
    """
    def __init__(self, window_size: int = 50):
        self._lock = threading.RLock()
        self._last_event_timestamps: Dict[str, float] = {}
        self._event_timestamps_window: Dict[str, Deque[float]] = defaultdict(lambda: deque(maxlen=window_size))
        self._event_counts: Dict[str, int] = defaultdict(int)

    def record_event(self, event_name: str):
        """Records one publication of `event_name`."""
        current_time = time.time()
        with self._lock:
            self._last_event_timestamps[event_name] = current_time
            self._event_timestamps_window[event_name].append(current_time)
            self._event_counts[event_name] += 1

    def get_count(self, event_name: str) -> int:
        with self._lock:
            return self._event_counts.get(event_name, 0)

    def _rate_per_minute(self, event_name: str) -> float:
        timestamps = self._event_timestamps_window[event_name]
        if len(timestamps) < 2:
            return 0.0
        # 간격 수 = 타임스탬프 수 - 1
        time_span = timestamps[-1] - timestamps[0]
        if time_span <= 0:
            return 0.0
        return round((len(timestamps) - 1) / time_span * 60.0, 2)

    def get_status(self) -> Dict[str, Any]:
        with self._lock:
            status = {}
            for event_name, last_timestamp in self._last_event_timestamps.items():
                status[event_name] = {
                    "last_timestamp": datetime.fromtimestamp(last_timestamp).isoformat(),
                    "total_count": self._event_counts[event_name],
                    "per_minute": self._rate_per_minute(event_name),
                    "window_events": len(self._event_timestamps_window[event_name]),
                }
            return status

    def clear(self):
        with self._lock:
            self._last_event_timestamps.clear()
            self._event_timestamps_window.clear()
            self._event_counts.clear()
