"""주입형 점수 전략 - 주택 효용, 선택확률, 멸실확률

전략은 설정의 "module:attribute" 경로로 시작 시 1회 로드되며,
지역/배포별로 코어 수정 없이 교체할 수 있다.
"""

import importlib
import math
from dataclasses import dataclass
from typing import Protocol

from ..core.errors import ConfigurationError
from ..core.types import HouseholdSize, HouseholdType


@dataclass(frozen=True)
class DwellingAttributes:
    """후보 주택의 효용 구성요소 (모두 0~1)"""
    size: float
    price: float
    quality: float
    auto_accessibility: float
    transit_accessibility: float
    region_vacancy: float


class ScoringStrategy(Protocol):
    def utility(self, household_type: HouseholdType, attributes: DwellingAttributes) -> float: ...

    def probability(self, utility: float) -> float: ...

    def demolition_probability(self, dwelling, year: int) -> float: ...


# 가구원수별 가중치: size, price, quality, auto, transit, vacancy
DEFAULT_WEIGHTS = {
    HouseholdSize.SIZE_1: (0.10, 0.40, 0.15, 0.10, 0.20, 0.05),
    HouseholdSize.SIZE_2: (0.15, 0.35, 0.20, 0.15, 0.10, 0.05),
    HouseholdSize.SIZE_3: (0.25, 0.35, 0.20, 0.10, 0.05, 0.05),
    HouseholdSize.SIZE_4_PLUS: (0.30, 0.35, 0.20, 0.10, 0.00, 0.05),
}

# 품질 1..4 기본 멸실률 (연)
DEFAULT_DEMOLITION_RATES = [0.01, 0.004, 0.001, 0.0005]


class DefaultScoringStrategy:
    """기본 전략: 가중합 효용 + 지수 선택확률 + 품질/연식 기반 멸실확률

    params:
        weights: {"1": [...6], "2": ..., "3": ..., "4": ...} 가구원수 구간별
        scale: 선택확률 민감도
        demolition_rates: 품질 수준별 기본 멸실률
        age_scale: 연식 가중 기준 (년)
    """

    def __init__(self, params: dict | None = None):
        params = params or {}
        self.weights = dict(DEFAULT_WEIGHTS)
        for key, values in params.get("weights", {}).items():
            if len(values) != 6:
                raise ConfigurationError(f"Utility weights for size {key} need 6 values")
            self.weights[HouseholdSize(int(key) - 1)] = tuple(float(v) for v in values)
        self.scale = float(params.get("scale", 4.0))
        self.demolition_rates = [float(r) for r in params.get("demolition_rates", DEFAULT_DEMOLITION_RATES)]
        self.age_scale = float(params.get("age_scale", 50.0))

    def utility(self, household_type: HouseholdType, attributes: DwellingAttributes) -> float:
        w = self.weights[household_type.size]
        # 공실률이 높은 시장은 덜 매력적
        return (w[0] * attributes.size + w[1] * attributes.price + w[2] * attributes.quality
                + w[3] * attributes.auto_accessibility + w[4] * attributes.transit_accessibility
                + w[5] * (1.0 - attributes.region_vacancy))

    def probability(self, utility: float) -> float:
        return min(1.0, max(0.0, math.exp(self.scale * (utility - 1.0))))

    def demolition_probability(self, dwelling, year: int) -> float:
        q = min(max(dwelling.quality, 1), len(self.demolition_rates)) - 1
        rate = self.demolition_rates[q] * (1.0 + dwelling.age(year) / self.age_scale)
        return min(1.0, max(0.0, rate))


def load_strategy(cfg) -> ScoringStrategy:
    """ScoringConfig → 전략 인스턴스"""
    module_name, _, attr = cfg.strategy.partition(":")
    if not module_name or not attr:
        raise ConfigurationError(f"Scoring strategy must be 'module:attribute', got {cfg.strategy!r}")
    try:
        module = importlib.import_module(module_name)
        factory = getattr(module, attr)
    except (ImportError, AttributeError) as e:
        raise ConfigurationError(f"Cannot load scoring strategy {cfg.strategy!r}: {e}") from e
    return factory(cfg.params)
