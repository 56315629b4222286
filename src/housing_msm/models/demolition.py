"""멸실 모형 - 매년 모든 주택을 확률적으로 평가"""

import logging

import numpy as np

from ..core.events import DemolitionEvent, IssueCounter
from ..core.types import NO_ID

logger = logging.getLogger(__name__)


class DemolitionModel:
    """멸실 이벤트 모형"""

    event_type = "demolition"

    def __init__(self, event_rules, registry, relocation, migration, strategy,
                 issues: IssueCounter, rng: np.random.Generator, result_file=None):
        """
        Args:
            event_rules: EventRulesConfig
            registry: EntityRegistry
            relocation: RelocationModel (거주 가구 이주)
            migration: MigrationModel (이주 실패 시 강제 전출)
            strategy: ScoringStrategy (멸실확률)
        """
        self.event_rules = event_rules
        self.registry = registry
        self.relocation = relocation
        self.migration = migration
        self.strategy = strategy
        self.issues = issues
        self.rng = rng
        self.result_file = result_file
        self.current_year = -1
        self.demolished = 0

    def prepare_year(self, year: int) -> list[DemolitionEvent]:
        self.current_year = year
        return [DemolitionEvent(type=self.event_type, year=year, dwelling_id=dd.id)
                for dd in self.registry.dwellings()]

    def handle_event(self, event: DemolitionEvent) -> bool:
        if not self.event_rules.demolition:
            return False
        dd = self.registry.get_dwelling(event.dwelling_id)
        if dd is None:
            return False
        if self.rng.random() < self.strategy.demolition_probability(dd, self.current_year):
            return self.demolish_dwelling(dd)
        return False

    def demolish_dwelling(self, dd) -> bool:
        registry = self.registry
        hh = registry.get_household(dd.resident_id) if dd.resident_id != NO_ID else None
        if hh is not None:
            self._move_out_household(dd.id, hh)
        # remove_dwelling이 공실 인덱스에서도 제거
        registry.remove_dwelling(dd.id)
        self.demolished += 1
        if dd.id == registry.track_dwelling:
            logger.debug("Dwelling %d was demolished", dd.id)
        return True

    def _move_out_household(self, dwelling_id: int, hh):
        new_dd = self.relocation.search_for_new_dwelling(hh)
        if new_dd is not None:
            # 멸실 주택은 공실 목록에 다시 넣지 않음
            self.relocation.move_household(hh, NO_ID, new_dd)
        else:
            self.migration.out_migrate_household(hh.id, override=True)
            self.issues.count_lack_of_dwelling_forced_outmigration()

    def finish_year(self, year: int) -> dict:
        stats = {'demolished': self.demolished}
        if self.result_file is not None:
            self.result_file.write(f"DemolishedDD,{self.demolished}")
        logger.info("  %d: %d dwellings demolished", year, self.demolished)
        self.demolished = 0
        return stats
