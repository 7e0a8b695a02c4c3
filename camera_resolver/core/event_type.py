from enum import Enum

class EventType(Enum):
    """
    애플리케이션 전체에서 사용되는 이벤트 타입들입니다.

    카테고리별 구분:
    - ENGINE: 선택 상태 머신 관련 이벤트
    - CAPTURE: 촬영 협력자와 주고받는 이벤트
    """

    # --- ENGINE EVENTS ---
    DEVICES_UPDATED     = "DEVICES_UPDATED"     # 새 디바이스 스냅샷이 분류/중복제거되어 저장됨
    SELECTION_CHANGED   = "SELECTION_CHANGED"   # SelectionState 전이가 커밋됨
    ENGINE_ERROR        = "ENGINE_ERROR"        # 전이가 명시적 오류 결과를 반환함

    # --- CAPTURE EVENTS ---
    CAPTURE_COMPLETED   = "CAPTURE_COMPLETED"   # 촬영 결과 수신, 후처리 계획 결정됨
    CAPTURE_FAILED      = "CAPTURE_FAILED"      # 촬영 협력자가 실패를 보고함
