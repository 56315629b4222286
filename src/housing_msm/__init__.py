"""주택시장/가구 입지 미시시뮬레이션

지역 주택 스톡, 가구, 개인을 연 단위로 진행시키는 미시시뮬레이션

주요 구성요소:
- 엔티티 레지스트리 (주택/가구/개인, 권역별 공실 인덱스)
- 시장 집계 (유형 x 권역 공실률/평균가격, 소득구간별 임대료 분포)
- 주택 탐색/이사, 전입/전출, 멸실 이벤트 모형
- 주입형 점수 전략 (효용, 선택확률, 멸실확률)
"""

from .config.schema import ScenarioConfig
from .core.errors import ConfigurationError
from .core.registry import EntityRegistry
from .geography.world import GeoData
from .scoring.strategy import DefaultScoringStrategy
from .simulation.engine import SimulationEngine

__all__ = [
    "SimulationEngine",
    "ScenarioConfig",
    "EntityRegistry",
    "GeoData",
    "DefaultScoringStrategy",
    "ConfigurationError",
]
