import uvicorn
import os

from camera_resolver.main import app

if __name__ == "__main__":
    # 포트 번호는 환경 변수 또는 기본값으로 설정
    port = int(os.environ.get("PORT", 52000))

    # --reload는 개발용입니다. 운영 환경에서는 RELOAD=0으로 비활성화하세요.
    reload = os.environ.get("RELOAD", "1") != "0"
    uvicorn.run("camera_resolver.main:app", host="0.0.0.0", port=port, reload=reload)
