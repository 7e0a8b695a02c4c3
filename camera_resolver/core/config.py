from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, computed_field
from pathlib import Path
from typing import Optional, Literal, Tuple

env_path = Path("camera_resolver") / "config" / ".env"

class AppSettings(BaseSettings):
    """
    pydantic-settings를 사용하여 환경 변수 및 .env 파일로부터 설정을 관리합니다.
    """
    # --- General ---
    LOG_LEVEL: str = Field(
        "INFO",
        description="전체 애플리케이션 로그 레벨 (예: DEBUG, INFO, WARNING)",
    )

    # --- Capability Filter Settings ---
    AVAILABILITY_MATCH_MODE: Literal["video_exact", "bounding"] = Field(
        "video_exact",
        description="해상도 가용성 판단 방식 (`video_exact`: 비디오 포맷 정확 일치, `bounding`: 최대 사진 해상도 이내)",
    )
    RESOLUTION_CEILING_ENABLED: bool = Field(True, description="최대 해상도 제한 적용 여부")
    RESOLUTION_CEILING_WIDTH: int = Field(2160, gt=0, description="허용되는 최대 가로 픽셀")
    RESOLUTION_CEILING_HEIGHT: int = Field(2160, gt=0, description="허용되는 최대 세로 픽셀")
    AVAILABILITY_CACHE_SIZE: int = Field(256, ge=1, description="가용 해상도 계산 결과 LRU 캐시 크기")

    # --- Classifier / Zoom Settings ---
    DEPTH_MARKER_TOKEN: str = Field("TrueDepth", description="전면 깊이 카메라를 식별하는 이름/ID 토큰")
    ZOOM_POLICY: Literal["neutral", "minimum_for_dual_wide"] = Field(
        "neutral",
        description="기본 줌 결정 정책 (`neutral`: neutralZoom 사용, `minimum_for_dual_wide`: 후면 듀얼 와이드는 minZoom 사용)",
    )

    # --- Format Scorer Settings ---
    SCORER_ASPECT_WEIGHT: float = Field(2.0, ge=0.0, description="화면비 점수 가중치")
    SCORER_RESOLUTION_WEIGHT: float = Field(1.5, ge=0.0, description="해상도 점수 가중치")
    SCORER_AREA_SCALE: float = Field(100000.0, gt=0.0, description="면적 차이를 점수로 환산할 때 나누는 값")
    SCORER_WIDE_FOV_MIN_DEG: float = Field(65.0, gt=0.0, description="기본 광각 시야각 범위 하한 (도)")
    SCORER_WIDE_FOV_MAX_DEG: float = Field(95.0, gt=0.0, description="기본 광각 시야각 범위 상한 (도)")
    SCORER_WIDE_FOV_BOOST: float = Field(1.5, gt=0.0, description="광각 범위 포맷에 곱하는 배율")
    SCORER_OFF_WIDE_PENALTY: float = Field(0.8, gt=0.0, description="광각 범위를 벗어난 포맷에 곱하는 배율")

    # --- Monitoring ---
    EVENT_HISTORY_SIZE: int = Field(50, ge=2, description="이벤트별로 유지할 최근 발행 시각 개수")

    @computed_field(return_type=Optional[Tuple[int, int]])
    @property
    def resolution_ceiling(self) -> Optional[Tuple[int, int]]:
        """제한이 활성화된 경우 (width, height)를, 아니면 None을 반환합니다."""
        if not self.RESOLUTION_CEILING_ENABLED:
            return None
        return (self.RESOLUTION_CEILING_WIDTH, self.RESOLUTION_CEILING_HEIGHT)

    @computed_field(return_type=Tuple[float, float])
    @property
    def wide_fov_range(self) -> Tuple[float, float]:
        """기본 광각으로 간주하는 시야각 범위 (min, max)."""
        low = min(self.SCORER_WIDE_FOV_MIN_DEG, self.SCORER_WIDE_FOV_MAX_DEG)
        high = max(self.SCORER_WIDE_FOV_MIN_DEG, self.SCORER_WIDE_FOV_MAX_DEG)
        return (low, high)


    # pydantic-settings 설정
    model_config = SettingsConfigDict(env_file=env_path, env_file_encoding='utf-8')

settings = AppSettings()
