"""공용 테스트 픽스처 - 작은 메모리 내 지역/인구"""

from pathlib import Path

import numpy as np
import pytest

from housing_msm.agents.population import Household, Person
from housing_msm.config.schema import MovesConfig, RealEstateConfig
from housing_msm.core.registry import EntityRegistry
from housing_msm.core.types import DwellingType, Gender, Occupation, PersonRole, Race
from housing_msm.geography.accessibility import ZonalAccessibility
from housing_msm.geography.world import GeoData, Region, Zone
from housing_msm.housing.stock import Dwelling
from housing_msm.markets.aggregator import MarketAggregator
from housing_msm.models.relocation import RelocationModel
from housing_msm.scoring.strategy import DefaultScoringStrategy

PRESET_DIR = Path(__file__).parent / "src" / "housing_msm" / "presets" / "small_city"


class StubStrategy:
    """고정 효용/확률, 지정한 주택만 멸실"""

    def __init__(self, demolish_ids=()):
        self.demolish_ids = set(demolish_ids)

    def utility(self, household_type, attributes):
        return 0.5

    def probability(self, utility):
        return 1.0

    def demolition_probability(self, dwelling, year):
        return 1.0 if dwelling.id in self.demolish_ids else 0.0


def make_geo() -> GeoData:
    regions = [Region(1, "North"), Region(2, "South")]
    zones = [Zone(11, 1), Zone(12, 1), Zone(21, 2)]
    return GeoData(regions, zones)


def add_household(registry, hh_id, dwelling_id, members):
    """members: [(age, income), ...]"""
    hh = Household(id=hh_id, dwelling_id=dwelling_id)
    registry.add_household(hh)
    for age, income in members:
        role = PersonRole.CHILD if age < 18 else PersonRole.MARRIED
        person = Person(id=registry.next_person_id(), age=age, gender=Gender.FEMALE, race=Race.OTHER,
                        role=role, occupation=Occupation.EMPLOYED if income > 0 else Occupation.STUDENT,
                        income=float(income))
        registry.add_person(person)
        registry.add_person_to_household(person, hh)
    return hh


def build_small_registry(geo) -> EntityRegistry:
    """주택 8채 (공실 6, 7, 8), 가구 5, 인구 10

    권역 1: 1 SFD, 2 SFD, 3 MF5PLUS, 6 SFD(공실)
    권역 2: 4 SFD, 5 MF5PLUS, 7 MF5PLUS(공실), 8 SFD(공실, 제한)
    """
    registry = EntityRegistry(geo)
    dwellings = [
        (1, 11, DwellingType.SFD, 2, 3, 1200.0, 1, 1980, False),
        (2, 11, DwellingType.SFD, 3, 2, 900.0, 2, 1995, False),
        (3, 12, DwellingType.MF5PLUS, 1, 1, 600.0, 3, 1960, False),
        (4, 21, DwellingType.SFD, 4, 4, 2100.0, 4, 2005, False),
        (5, 21, DwellingType.MF5PLUS, 2, 2, 800.0, 5, 1975, False),
        (6, 12, DwellingType.SFD, 2, 2, 1000.0, -1, 1990, False),
        (7, 21, DwellingType.MF5PLUS, 3, 1, 700.0, -1, 2000, False),
        (8, 21, DwellingType.SFD, 1, 3, 500.0, -1, 1950, True),
    ]
    for did, zone, dtype, quality, bedrooms, price, resident, built, restricted in dwellings:
        registry.add_dwelling(Dwelling(id=did, zone=zone, type=dtype, quality=quality, bedrooms=bedrooms,
                                       price=price, resident_id=resident, year_built=built,
                                       restricted=restricted))

    add_household(registry, 1, 1, [(40, 30000), (38, 20000)])          # 50,000 MEDIUM
    add_household(registry, 2, 2, [(30, 15000)])                       # LOW
    add_household(registry, 3, 3, [(70, 18000)])                       # LOW
    add_household(registry, 4, 4, [(45, 70000), (43, 40000), (12, 0), (9, 0)])  # HIGH
    add_household(registry, 5, 5, [(25, 35000), (24, 0)])              # MEDIUM_LOW
    return registry


def build_large_registry(geo, n_households=250, household_size=4, n_vacant=100) -> EntityRegistry:
    """동일 규모 가구로 채운 레지스트리 (기본 인구 1000)"""
    registry = EntityRegistry(geo)
    zones = geo.zone_ids
    for i in range(1, n_households + n_vacant + 1):
        resident = i if i <= n_households else -1
        registry.add_dwelling(Dwelling(id=i, zone=zones[i % len(zones)], type=DwellingType(i % 5),
                                       quality=(i % 4) + 1, bedrooms=(i % 4) + 1,
                                       price=500.0 + 10.0 * (i % 100), resident_id=resident,
                                       year_built=1960 + i % 50))
    for h in range(1, n_households + 1):
        members = [(40, 20000.0 + 500.0 * (h % 80))] + [(10, 0)] * (household_size - 1)
        add_household(registry, h, h, members)
    return registry


def make_market(registry, geo) -> MarketAggregator:
    market = MarketAggregator(RealEstateConfig(), geo)
    registry.identify_vacant_dwellings()
    registry.stock.freeze_initial_quality_shares()
    market.build_rent_distribution(registry)
    market.aggregate(registry)
    return market


def make_relocation(registry, market, strategy=None, seed=7) -> RelocationModel:
    return RelocationModel(MovesConfig(), registry, market, ZonalAccessibility(),
                           strategy if strategy is not None else DefaultScoringStrategy(),
                           np.random.default_rng(seed))


@pytest.fixture
def geo():
    return make_geo()


@pytest.fixture
def registry(geo):
    return build_small_registry(geo)


@pytest.fixture
def market(registry, geo):
    return make_market(registry, geo)


@pytest.fixture
def relocation(registry, market):
    return make_relocation(registry, market)
