"""전입/전출 모형 - 외생 인구 통제에 따른 가구 생성/제거

인구 통제 방식 (실행 중 고정):
    migration             연도별 전입/전출 인원표
    population            연도별 목표 인구표 (현재 인구와의 차이)
    populationGrowthRate  기준연도 인구에 복리 성장률 적용한 목표 인구

가구는 분할하지 않으므로 목표를 초과(overshoot)할 수 있다.
"""

import logging

import numpy as np

from ..core.errors import ConfigurationError
from ..core.events import MigrationEvent, IssueCounter
from ..core.types import MigrationKind, Occupation, NO_ID
from ..agents.population import Household, Person

logger = logging.getLogger(__name__)

MIGRATION = "migration"
POPULATION = "population"
GROWTH_RATE = "populationgrowthrate"


class MigrationModel:
    """전입/전출 이벤트 모형"""

    event_type = "migration"

    def __init__(self, cfg, event_rules, registry, relocation, issues: IssueCounter,
                 rng: np.random.Generator, start_year: int, end_year: int,
                 migration_table: dict | None = None, population_target: dict | None = None,
                 result_file=None):
        """
        Args:
            cfg: MigrationConfig
            event_rules: EventRulesConfig
            registry: EntityRegistry
            relocation: RelocationModel
            migration_table: {year: {"inmigration": n, "outmigration": n}}
            population_target: {year: population}
        """
        self.cfg = cfg
        self.event_rules = event_rules
        self.registry = registry
        self.relocation = relocation
        self.issues = issues
        self.rng = rng
        self.result_file = result_file

        self.method = cfg.population_control.lower()
        self.migration_table: dict[int, dict] = {}
        self.population_target: dict[int, int] = {}

        if self.method == POPULATION:
            if population_target is None:
                raise ConfigurationError("population control 'population' needs a population target table")
            self.population_target = {int(y): int(v) for y, v in population_target.items()}
        elif self.method == MIGRATION:
            if migration_table is None:
                raise ConfigurationError("population control 'migration' needs a migration table")
            self.migration_table = {int(y): v for y, v in migration_table.items()}
        elif self.method == GROWTH_RATE:
            base = registry.total_population()
            rate = cfg.population_growth_rate / 100.0
            self.population_target = {
                start_year + i: int(round(base * (1 + rate) ** i))
                for i in range(end_year - start_year + 1)
            }
        else:
            logger.error("Unknown population control method %r, set to population, migration "
                         "or populationGrowthRate", cfg.population_control)
            raise ConfigurationError(f"Unknown population control method: {cfg.population_control}")

        # 전입 가구 템플릿: hh_id → [(age, gender, race, role), ...]
        self._inmigrant_templates: dict[int, list[tuple]] = {}
        self.in_migration_persons = 0
        self.out_migration_persons = 0

    # === 연간 목표 ===
    def _targets(self, year: int) -> tuple[int, int]:
        """(전입 인원, 전출 인원)"""
        if self.method == MIGRATION:
            if year not in self.migration_table:
                raise ConfigurationError(f"Migration table has no row for year {year}")
            row = self.migration_table[year]
            return int(row.get("inmigration", 0)), int(row.get("outmigration", 0))

        if year not in self.population_target:
            raise ConfigurationError(f"Population target table has no row for year {year}")
        current = self.registry.total_population()
        target = self.population_target[year]
        if target > current:
            return target - current, 0
        return 0, current - target

    def prepare_year(self, year: int) -> list[MigrationEvent]:
        logger.info("  Selecting outmigrants and creating inmigrants for the year %d", year)
        registry = self.registry
        events: list[MigrationEvent] = []
        inmigrants, outmigrants = self._targets(year)
        households = registry.households()

        # 전출: 비복원 추출
        created_out = 0
        if outmigrants > 0 and households:
            for idx in self.rng.permutation(len(households)):
                hh = households[int(idx)]
                events.append(MigrationEvent(type=self.event_type, year=year,
                                             household_id=hh.id, kind=MigrationKind.OUT))
                created_out += hh.size
                if created_out >= outmigrants:
                    break

        # 전입: 복원 추출, 기존 가구를 템플릿으로 복사
        created_in = 0
        self._inmigrant_templates = {}
        if inmigrants > 0 and households:
            while created_in < inmigrants:
                template = households[int(self.rng.integers(len(households)))]
                persons = registry.persons_of(template)
                new_id = registry.next_household_id()
                self._inmigrant_templates[new_id] = [
                    (p.age, p.gender, p.race, p.role) for p in persons
                ]
                events.append(MigrationEvent(type=self.event_type, year=year,
                                             household_id=new_id, kind=MigrationKind.IN))
                created_in += max(len(persons), 1)

        logger.info("  Migration targets %d: in=%d persons (%d drawn), out=%d persons (%d drawn)",
                    year, inmigrants, created_in, outmigrants, created_out)

        self.out_migration_persons = 0
        self.in_migration_persons = 0
        return events

    def handle_event(self, event: MigrationEvent) -> bool:
        if event.kind == MigrationKind.IN:
            return self.inmigrate_household(event.household_id)
        if event.kind == MigrationKind.OUT:
            return self.out_migrate_household(event.household_id, override=True)
        return False

    def inmigrate_household(self, household_id: int) -> bool:
        """템플릿으로 가구 생성 후 주택 탐색, 실패 시 즉시 전출"""
        registry = self.registry
        template = self._inmigrant_templates.pop(household_id, None)
        if template is None:
            logger.warning("No in-migrant template stored for household %d", household_id)
            return False

        hh = Household(id=household_id, dwelling_id=NO_ID)
        registry.add_household(hh)
        for age, gender, race, role in template:
            # 전입자는 도착 후 직장/주택을 새로 찾는다
            person = Person(id=registry.next_person_id(), age=age, gender=gender, race=race,
                            role=role, occupation=Occupation.UNEMPLOYED, workplace=NO_ID, income=0.0)
            registry.add_person(person)
            registry.add_person_to_household(person, hh)

        new_dd = self.relocation.search_for_new_dwelling(hh)
        if new_dd is not None:
            self.relocation.move_household(hh, NO_ID, new_dd)
            self.in_migration_persons += hh.size
            if household_id == registry.track_household:
                logger.debug("Household %d inmigrated", household_id)
            return True

        self.issues.count_lack_of_dwelling_failed_inmigration()
        self.out_migrate_household(household_id, override=True)
        return False

    def out_migrate_household(self, household_id: int, override: bool = False) -> bool:
        """가구 전출 (override가 아니면 이벤트 규칙을 따른다)"""
        hh = self.registry.get_household(household_id)
        if hh is None:
            return False
        if not self.event_rules.out_migration and not override:
            return False
        self.out_migration_persons += hh.size
        if household_id == self.registry.track_household:
            logger.debug("Household %d outmigrated", household_id)
        self.registry.remove_household(household_id)
        return True

    def finish_year(self, year: int) -> dict:
        stats = {'inmigrants': self.in_migration_persons, 'outmigrants': self.out_migration_persons}
        if self.result_file is not None:
            self.result_file.write(f"InmigrantsPP,{self.in_migration_persons}")
            self.result_file.write(f"OutmigrantsPP,{self.out_migration_persons}")
        logger.info("  %d: %d persons inmigrated, %d persons outmigrated",
                    year, self.in_migration_persons, self.out_migration_persons)
        self.in_migration_persons = 0
        self.out_migration_persons = 0
        return stats
