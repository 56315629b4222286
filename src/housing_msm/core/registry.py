"""엔티티 레지스트리 - 주택/가구/개인과 공실 인덱스의 단일 소유자

점유 관계는 양방향으로 유지된다:
    dwelling.resident_id == hh.id  <=>  hh.dwelling_id == dwelling.id
공실 인덱스 등재 여부는 resident_id == -1 과 일치한다.
"""

import logging

from .errors import ConfigurationError
from .types import IncomeCategory, NO_ID
from ..agents.population import Population, Household, Person
from ..housing.stock import HousingStock, Dwelling
from ..housing.vacancy import VacancyIndex

logger = logging.getLogger(__name__)


class EntityRegistry:
    """주택, 가구, 개인 레지스트리"""

    def __init__(self, geo, quality_levels: int = 4, income_brackets: list[float] | None = None,
                 track_dwelling: int = NO_ID, track_household: int = NO_ID):
        self.geo = geo
        self.stock = HousingStock(quality_levels)
        self.population = Population()
        self.vacancy = VacancyIndex(geo)
        self.income_brackets = list(income_brackets or [20000.0, 40000.0, 60000.0, 80000.0])
        if len(self.income_brackets) != len(IncomeCategory) - 1:
            raise ConfigurationError(
                f"income_brackets needs {len(IncomeCategory) - 1} upper bounds, "
                f"got {len(self.income_brackets)}")
        self.track_dwelling = track_dwelling
        self.track_household = track_household

    @classmethod
    def from_config(cls, config, geo) -> 'EntityRegistry':
        return cls(
            geo,
            quality_levels=config.real_estate.quality_levels,
            income_brackets=config.households.income_brackets,
            track_dwelling=config.simulation.track_dwelling,
            track_household=config.simulation.track_household,
        )

    # === 주택 ===
    def add_dwelling(self, dwelling: Dwelling):
        """주택 추가 (공실이면 공실 인덱스에도 등재)"""
        if dwelling.zone not in self.geo.zones:
            raise ValueError(f"Dwelling {dwelling.id} is located in unknown zone {dwelling.zone}")
        self.stock.add(dwelling)
        if dwelling.is_vacant:
            self.vacancy.add_to_vacancy(dwelling)

    def remove_dwelling(self, dwelling_id: int) -> bool:
        dwelling = self.stock.get(dwelling_id)
        if dwelling is None:
            return False
        resident = self.population.get_household(dwelling.resident_id)
        if resident is not None and resident.dwelling_id == dwelling_id:
            # 거주 가구를 먼저 이주/전출시켜야 함
            logger.warning("Cannot remove dwelling %d: household %d still lives there",
                           dwelling_id, resident.id)
            return False
        if self.vacancy.contains(dwelling):
            self.vacancy.remove_from_vacancy(dwelling)
        self.stock.remove(dwelling_id)
        self._track_dd(dwelling_id, "removed from the registry")
        return True

    def get_dwelling(self, dwelling_id: int) -> Dwelling | None:
        return self.stock.get(dwelling_id)

    def dwellings(self) -> list[Dwelling]:
        return self.stock.all()

    def next_dwelling_id(self) -> int:
        return self.stock.next_id()

    def region_of(self, dwelling: Dwelling) -> int:
        return self.geo.region_of(dwelling.zone)

    # === 가구/개인 ===
    def add_household(self, hh: Household):
        self.population.add_household(hh)

    def remove_household(self, household_id: int) -> bool:
        """가구 제거 (거주 주택은 공실 처리)"""
        hh = self.population.get_household(household_id)
        if hh is None:
            return False
        if hh.dwelling_id != NO_ID:
            dwelling = self.stock.get(hh.dwelling_id)
            if dwelling is not None and dwelling.resident_id == hh.id:
                self.vacate_dwelling(dwelling.id)
        self.population.remove_household(household_id)
        self._track_hh(household_id, "removed from the registry")
        return True

    def get_household(self, household_id: int) -> Household | None:
        return self.population.get_household(household_id)

    def households(self) -> list[Household]:
        return self.population.households()

    def next_household_id(self) -> int:
        return self.population.next_household_id()

    def add_person(self, person: Person):
        self.population.add_person(person)

    def add_person_to_household(self, person: Person, hh: Household):
        self.population.add_person_to_household(person, hh)

    def get_person(self, person_id: int) -> Person | None:
        return self.population.get_person(person_id)

    def persons_of(self, hh: Household) -> list[Person]:
        return self.population.persons_of(hh)

    def next_person_id(self) -> int:
        return self.population.next_person_id()

    def total_population(self) -> int:
        return self.population.total_population

    # === 점유 변경 ===
    def vacate_dwelling(self, dwelling_id: int):
        """resident_id를 -1로 두고 공실 목록에 추가"""
        dwelling = self.stock.get(dwelling_id)
        if dwelling is None:
            logger.warning("Cannot vacate dwelling %d: not in the registry", dwelling_id)
            return
        dwelling.resident_id = NO_ID
        self.vacancy.add_to_vacancy(dwelling)
        self._track_dd(dwelling_id, "vacated and added to the vacancy index")

    def occupy_dwelling(self, dwelling_id: int, household_id: int):
        """입주 처리 (공실 목록에서 제거)"""
        dwelling = self.stock.get(dwelling_id)
        if dwelling is None:
            raise KeyError(f"Dwelling {dwelling_id} not found")
        self.vacancy.remove_from_vacancy(dwelling)
        dwelling.resident_id = household_id
        self._track_dd(dwelling_id, f"occupied by household {household_id}")

    def seal_ids(self):
        """초기 인구 적재 종료, 이후 ID는 next_*_id 로만 발급"""
        self.stock.seal_ids()
        self.population.seal_ids()

    def identify_vacant_dwellings(self):
        """초기 공실 식별 (실행 시작 시 1회)"""
        logger.info("  Identifying vacant dwellings")
        self.vacancy.clear()
        for dwelling in self.stock.all():
            if dwelling.is_vacant:
                self.vacancy.add_to_vacancy(dwelling)

    # === 검증 ===
    def check_consistency(self) -> list[str]:
        """불변식 위반 목록 (비어 있으면 일관됨)"""
        problems = []
        for dwelling in self.stock.all():
            in_index = self.vacancy.contains(dwelling)
            if dwelling.is_vacant and not in_index:
                problems.append(f"vacant dwelling {dwelling.id} missing from the vacancy index")
            elif not dwelling.is_vacant:
                if in_index:
                    problems.append(f"occupied dwelling {dwelling.id} listed as vacant")
                hh = self.population.get_household(dwelling.resident_id)
                if hh is None:
                    problems.append(f"dwelling {dwelling.id} refers to missing household {dwelling.resident_id}")
                elif hh.dwelling_id != dwelling.id:
                    problems.append(f"dwelling {dwelling.id} has resident {hh.id} "
                                    f"living in dwelling {hh.dwelling_id}")
        for hh in self.population.households():
            if hh.dwelling_id == NO_ID:
                continue
            dwelling = self.stock.get(hh.dwelling_id)
            if dwelling is None:
                problems.append(f"household {hh.id} refers to missing dwelling {hh.dwelling_id}")
            elif dwelling.resident_id != hh.id:
                problems.append(f"household {hh.id} lives in dwelling {dwelling.id} "
                                f"whose resident is {dwelling.resident_id}")
        for region in self.vacancy.regions():
            for did in self.vacancy.list_vacant(region):
                if did not in self.stock:
                    problems.append(f"vacancy index lists removed dwelling {did}")
        return problems

    # === 추적 로그 ===
    def _track_dd(self, dwelling_id: int, message: str):
        if dwelling_id == self.track_dwelling:
            logger.debug("Dwelling %d %s", dwelling_id, message)

    def _track_hh(self, household_id: int, message: str):
        if household_id == self.track_household:
            logger.debug("Household %d %s", household_id, message)
