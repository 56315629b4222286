"""시뮬레이션 페이즈 정의"""

from enum import IntEnum


class Phase(IntEnum):
    """시뮬레이션 단계 (매년 순서대로 실행)"""
    MARKET_AGGREGATION = 0     # 유형 x 권역 가격/공실 집계
    PREPARE_EVENTS = 1         # 모형별 이벤트 생성 (연초 상태 기준)
    HANDLE_EVENTS = 2          # 모형 순서대로 이벤트 순차 적용
    FINISH_YEAR = 3            # 모형별 집계/리셋
    RECORD_STATS = 4           # 통계 기록


DEFAULT_PHASE_ORDER = list(Phase)
