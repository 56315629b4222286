"""주택 탐색/이사 모형

후보 추출 → 효용 → 선택확률 → 가중 추첨.
이사 확정(move_household) 전까지 상태를 바꾸지 않는다.
"""

import logging

import numpy as np

from ..agents.classification import household_income, household_type, income_category
from ..core.types import NO_ID
from ..scoring.strategy import DwellingAttributes

logger = logging.getLogger(__name__)


class RelocationModel:
    """가구의 새 주택 탐색"""

    def __init__(self, cfg, registry, market, accessibility, strategy, rng: np.random.Generator,
                 quality_levels: int = 4):
        """
        Args:
            cfg: MovesConfig
            registry: EntityRegistry
            market: MarketAggregator
            accessibility: AccessibilityService
            strategy: ScoringStrategy
            rng: 공유 난수 생성기
        """
        self.cfg = cfg
        self.registry = registry
        self.market = market
        self.accessibility = accessibility
        self.strategy = strategy
        self.rng = rng
        self.quality_levels = quality_levels
        self.moves = 0

    def search_for_new_dwelling(self, hh) -> int | None:
        """새 주택 ID, 후보가 없거나 확률이 모두 0이면 None"""
        registry = self.registry
        ht = household_type(registry.population, hh, registry.income_brackets)
        income = household_income(registry.population, hh)

        candidates = self._draw_candidates(hh, income)
        if not candidates:
            return None

        probabilities = np.zeros(len(candidates), dtype=np.float64)
        for i, dd in enumerate(candidates):
            utility = self.strategy.utility(ht, self._attributes(dd, income))
            probabilities[i] = self.strategy.probability(utility)

        total = probabilities.sum()
        if not total > 0:
            return None
        selected = self.rng.choice(len(candidates), p=probabilities / total)
        return candidates[int(selected)].id

    def _draw_candidates(self, hh, income: float) -> list:
        """권역별 최대 samples_per_region개 공실 표본"""
        registry = self.registry
        income_cap = self.cfg.restricted_income_share * self.market.median_income
        candidates = []
        for region in registry.vacancy.regions():
            for did in registry.vacancy.sample_vacant(region, self.cfg.samples_per_region, self.rng):
                dd = registry.get_dwelling(did)
                if dd is None or dd.id == hh.dwelling_id:
                    continue
                if dd.restricted and income > income_cap:
                    continue
                candidates.append(dd)
        return candidates

    def _attributes(self, dd, income: float) -> DwellingAttributes:
        cfg = self.cfg
        registry = self.registry
        inc_cat = income_category(income, registry.income_brackets)
        largest = registry.stock.largest_bedrooms
        region = registry.region_of(dd)
        return DwellingAttributes(
            size=min(1.0, (dd.bedrooms + 1.0) / (largest + 1.0)),
            price=self.market.price_utility(dd.price, inc_cat),
            quality=dd.quality / float(self.quality_levels),
            auto_accessibility=float(np.clip(self.accessibility.auto_accessibility(dd.zone) / cfg.accessibility_scale, 0, 1)),
            transit_accessibility=float(np.clip(self.accessibility.transit_accessibility(dd.zone) / cfg.accessibility_scale, 0, 1)),
            region_vacancy=self.market.vacancy_rate(dd.type, region),
        )

    def move_household(self, hh, old_dwelling_id: int, new_dwelling_id: int):
        """이사 확정

        old_dwelling_id == -1 이면 기존 주택을 공실 처리하지 않는다
        (신규 가구 또는 멸실 예정 주택).
        """
        registry = self.registry
        if old_dwelling_id != NO_ID:
            registry.vacate_dwelling(old_dwelling_id)
        registry.occupy_dwelling(new_dwelling_id, hh.id)
        hh.dwelling_id = new_dwelling_id
        self.moves += 1
        if hh.id == registry.track_household:
            logger.debug("Household %d moved from dwelling %d to %d",
                         hh.id, old_dwelling_id, new_dwelling_id)

    def reset(self):
        self.moves = 0
