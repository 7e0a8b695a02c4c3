"""REST API를 통해 카메라 선택 엔진을 점검하는 스크립트.

샘플 디바이스 스냅샷(또는 `--snapshot`으로 지정한 JSON 파일)을 `/api/devices/snapshot`에
전송한 뒤, 디바이스 목록 조회 → 화면비 선택 → 지원 해상도 조회 → 해상도별 포맷 선택 →
전/후면 전환을 차례로 호출하고 결과를 요약합니다.

실행 예:

```bash
python scripts/selection_smoke_api.py --label "16x9 Landscape (16:9)" --verbose
```
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import List, Optional, Sequence

import requests


def _fmt(video, photo=None, fps=30.0, fov=75.0) -> dict:
    fmt = {"video_width": video[0], "video_height": video[1], "max_fps": fps, "field_of_view": fov}
    if photo:
        fmt["photo_width"], fmt["photo_height"] = photo
    return fmt


SAMPLE_SNAPSHOT: List[dict] = [
    {
        "id": "com.apple.avfoundation.avcapturedevice.built-in_video:7",
        "name": "Back Triple Camera",
        "facing": "back",
        "physical_devices": ["ultra-wide-angle-camera", "wide-angle-camera", "telephoto-camera"],
        "min_zoom": 1.0,
        "neutral_zoom": 2.0,
        "max_zoom": 123.75,
        "formats": [
            _fmt((1280, 720), (4032, 3024), 60, 107.0),
            _fmt((1920, 1080), (4032, 3024), 60, 73.0),
            _fmt((1920, 1080), (3840, 2160), 30, 73.0),
            _fmt((3840, 2160), (4032, 3024), 30, 73.0),
            _fmt((1440, 1080), (4032, 3024), 30, 73.0),
        ],
    },
    {
        "id": "com.apple.avfoundation.avcapturedevice.built-in_video:1",
        "name": "Front TrueDepth Camera",
        "facing": "front",
        "physical_devices": ["wide-angle-camera"],
        "min_zoom": 1.0,
        "neutral_zoom": 1.0,
        "max_zoom": 16.0,
        "formats": [
            _fmt((1280, 720), (3088, 2316), 60, 70.0),
            _fmt((1920, 1080), (3088, 2316), 30, 70.0),
        ],
    },
]


def parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Camera selection engine API smoke test")
    parser.add_argument(
        "--base-url",
        default="http://127.0.0.1:52000",
        help="FastAPI 서버 기본 URL (프로토콜 포함)",
    )
    parser.add_argument(
        "--snapshot",
        type=Path,
        default=None,
        help="전송할 디바이스 스냅샷 JSON 파일 (생략 시 내장 샘플 사용)",
    )
    parser.add_argument(
        "--label",
        default="16x9 Landscape (16:9)",
        help="점검할 화면비 라벨",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=5.0,
        help="HTTP 요청 타임아웃(초)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="단계별 응답 전체 출력",
    )
    return parser.parse_args(argv)


def call(base_url: str, method: str, endpoint: str, timeout: float, payload: Optional[object] = None, params=None):
    url = base_url.rstrip("/") + endpoint
    try:
        response = requests.request(method, url, json=payload, params=params, timeout=timeout)
    except requests.RequestException as exc:
        raise RuntimeError(f"{method} {endpoint} 요청 실패: {exc}") from exc

    try:
        body = response.json()
    except json.JSONDecodeError as exc:
        raise RuntimeError(f"{method} {endpoint} JSON 파싱 실패: {response.text}") from exc
    return response.status_code, body


def describe_transition(step: str, body: dict) -> str:
    state = body.get("state", {})
    device = (state.get("selected_device") or {}).get("id")
    fmt = state.get("selected_format") or {}
    error = body.get("error")
    summary = (
        f"[{step}] phase={state.get('phase')} device={device} "
        f"video={fmt.get('video_width')}x{fmt.get('video_height')} zoom={state.get('selected_zoom')}"
    )
    if error:
        summary += f" -> {error['kind']}: {error['message']}"
    return summary


def main(argv: Sequence[str]) -> int:
    args = parse_args(argv)
    snapshot = json.loads(args.snapshot.read_text(encoding="utf-8")) if args.snapshot else SAMPLE_SNAPSHOT

    try:
        _, body = call(args.base_url, "POST", "/api/devices/snapshot", args.timeout, payload=snapshot)
        print(describe_transition("snapshot", body))

        _, devices = call(args.base_url, "GET", "/api/devices", args.timeout)
        print(f"\n분류된 디바이스 {len(devices)}개:")
        for device in devices:
            print(
                f"  - {device['label']} ({device['id']}) "
                f"video={device['max_video_resolution']} photo={device['max_photo_resolution']} "
                f"zoom={device['min_zoom']}x-{device['max_zoom']}x"
            )

        _, body = call(args.base_url, "POST", "/api/selection/aspect-ratio", args.timeout, payload={"label": args.label})
        print("\n" + describe_transition("aspect-ratio", body))

        status, resolutions = call(
            args.base_url, "GET", "/api/selection/resolutions", args.timeout, params={"label": args.label}
        )
        if status != 200:
            print(f"[ERROR] HTTP {status} -> {resolutions}")
            return 1
        print(f"지원 해상도 ({args.label}): {', '.join(resolutions) or '없음'}")

        for resolution in resolutions:
            _, body = call(
                args.base_url, "POST", "/api/selection/resolution", args.timeout,
                payload={"resolution": resolution, "aspect_ratio_label": args.label},
            )
            print(describe_transition(f"resolution {resolution}", body))
            if args.verbose:
                print(json.dumps(body, indent=2, ensure_ascii=False))

        _, body = call(args.base_url, "POST", "/api/selection/toggle", args.timeout)
        print(describe_transition("toggle", body))
    except RuntimeError as exc:
        print(f"[ERROR] {exc}")
        return 1

    return 0


if __name__ == "__main__":
    import sys

    raise SystemExit(main(sys.argv[1:]))
