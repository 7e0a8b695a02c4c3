"""
FastAPI 애플리케이션에 등록된 API/WebSocket 엔드포인트와 해상도 카탈로그를
'api_map.md' 파일로 정리하는 스크립트입니다. 렌더링/촬영 협력자 개발자에게
전달하는 참고 문서로 사용합니다.

프로젝트 루트 디렉토리에서 아래 명령어를 실행하세요.
`python -m scripts.generate_api_map`
"""
import os
import inspect
from collections import defaultdict
from pathlib import Path

# 'camera_resolver/config/.env' 같은 상대 경로를 찾기 위해 프로젝트 루트에서 실행합니다.
ROOT_DIR = Path(__file__).parent.parent
os.chdir(ROOT_DIR)

from camera_resolver.main import app
from camera_resolver.dependencies import get_catalog
from fastapi.routing import APIRoute, APIWebSocketRoute


def _first_line(text):
    return text.strip().splitlines()[0] if text and text.strip() else ""


def _describe_http_route(route: APIRoute) -> str:
    methods = ", ".join(sorted(route.methods))
    summary = route.summary or _first_line(inspect.getdoc(route.endpoint))
    line = f"- **`{methods}`** `{route.path}`"
    if summary:
        line += f" - {summary}"
    if route.response_model is not None:
        model_name = getattr(route.response_model, "__name__", str(route.response_model))
        line += f" (`{model_name}`)"
    return line


def generate_api_map():
    """라우트와 카탈로그를 분석하여 마크다운 파일로 저장합니다."""
    grouped = defaultdict(list)
    ws_routes = []
    for route in app.routes:
        if isinstance(route, APIRoute):
            grouped[route.tags[0] if route.tags else "Default"].append(route)
        elif isinstance(route, APIWebSocketRoute):
            ws_routes.append(route)

    lines = ["# Camera Resolver API & WebSocket Map", ""]

    lines += ["## HTTP API Endpoints", ""]
    for tag in sorted(grouped):
        lines += [f"### {tag}", ""]
        lines += [_describe_http_route(r) for r in sorted(grouped[tag], key=lambda r: r.path)]
        lines.append("")

    if ws_routes:
        lines += ["## WebSocket Endpoints", ""]
        for route in sorted(ws_routes, key=lambda r: r.path):
            lines.append(f"- **`WEBSOCKET`** `{route.path}` - {_first_line(inspect.getdoc(route.endpoint))}")
        lines.append("")

    lines += ["## Resolution Catalog", ""]
    for label, resolutions in get_catalog().as_dict().items():
        lines.append(f"- **{label}**: {', '.join(resolutions)}")

    output_path = ROOT_DIR / "api_map.md"
    output_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    print(f"API map successfully generated at: {output_path.relative_to(ROOT_DIR)}")

if __name__ == "__main__":
    generate_api_map()
