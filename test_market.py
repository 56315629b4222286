"""시장 집계 테스트"""

import numpy as np
import pytest

from housing_msm.agents.classification import income_category, rent_category, size_class
from housing_msm.core.types import DwellingType, HouseholdSize, IncomeCategory


BRACKETS = [20000.0, 40000.0, 60000.0, 80000.0]


def test_income_category_bounds():
    assert income_category(0.0, BRACKETS) == IncomeCategory.LOW
    assert income_category(20000.0, BRACKETS) == IncomeCategory.LOW
    assert income_category(20000.5, BRACKETS) == IncomeCategory.MEDIUM_LOW
    assert income_category(80000.0, BRACKETS) == IncomeCategory.MEDIUM_HIGH
    assert income_category(250000.0, BRACKETS) == IncomeCategory.HIGH


def test_size_class_caps_at_four():
    assert size_class(1) == HouseholdSize.SIZE_1
    assert size_class(4) == HouseholdSize.SIZE_4_PLUS
    assert size_class(7) == HouseholdSize.SIZE_4_PLUS


def test_rent_category_is_capped():
    assert rent_category(399.0, 200.0, 25) == 1
    assert rent_category(10000.0, 200.0, 25) == 25


def test_vacancy_rates_by_type_and_region(market):
    assert market.vacancy_rate(DwellingType.SFD, 1) == pytest.approx(1 / 3)
    assert market.vacancy_rate(DwellingType.MF5PLUS, 1) == 0.0
    assert market.vacancy_rate(DwellingType.SFD, 2) == pytest.approx(0.5)
    assert market.vacancy_rate(DwellingType.MF5PLUS, 2) == pytest.approx(0.5)


def test_empty_cells_are_zero(market):
    assert market.vacancy_rate(DwellingType.SFA, 1) == 0.0
    assert market.average_price(DwellingType.MH, 2) == 0.0
    assert not np.isnan(market.vacancy_rates).any()


def test_average_prices(market):
    assert market.average_price(DwellingType.SFD, 1) == pytest.approx(3100.0 / 3)
    assert market.average_price(DwellingType.SFD, 2) == pytest.approx(1300.0)
    assert market.average_price_by_type[DwellingType.MF5PLUS] == pytest.approx(700.0)


def test_median_income(market):
    assert market.median_income == pytest.approx(35000.0)


def test_rent_shares_sum_to_one(market):
    totals = market.rent_shares.sum(axis=1)
    for cat in (IncomeCategory.LOW, IncomeCategory.MEDIUM_LOW, IncomeCategory.MEDIUM, IncomeCategory.HIGH):
        assert totals[cat] == pytest.approx(1.0)
    # 가구가 없는 구간은 0
    assert totals[IncomeCategory.MEDIUM_HIGH] == 0.0


def test_top_income_can_afford_top_rent(market):
    assert market.rent_shares[IncomeCategory.HIGH, 25] > 0
    assert market.rent_shares_for(IncomeCategory.LOW)[3] == pytest.approx(0.5)


def test_price_utility(market):
    assert market.price_utility(100.0, IncomeCategory.LOW) == pytest.approx(1.0)
    assert market.price_utility(600.0, IncomeCategory.LOW) == pytest.approx(0.5)
    assert market.price_utility(900.0, IncomeCategory.LOW) == pytest.approx(0.0)


def test_aggregate_follows_registry_changes(registry, market):
    registry.remove_dwelling(6)
    market.aggregate(registry)
    assert market.vacancy_rate(DwellingType.SFD, 1) == 0.0
    assert market.dwelling_counts.sum() == 7


def test_summary_rows(registry, market):
    rows = market.summary_rows(registry)
    assert rows[0] == "QualityLevel,Dwellings,InitialShare,CurrentShare"
    assert "1,2,0.250000,0.250000" in rows
    assert "2,3,0.375000,0.375000" in rows
    assert "CountOfDD,SFD,5" in rows
    assert "CountOfDD,MF5PLUS,3" in rows
    assert "AveMonthlyPrice,MF5PLUS,700.00" in rows
    assert "Housing costs by income group" in rows


def test_summary_rows_by_type_and_region(registry, market):
    rows = market.summary_rows(registry)
    assert "VacancyByTypeRegion,SFD,1,0.333333" in rows
    assert "VacancyByTypeRegion,MF5PLUS,2,0.500000" in rows
    assert "VacancyByTypeRegion,SFA,1,0.000000" in rows
    assert "AvePriceByTypeRegion,SFD,2,1300.00" in rows
    assert "AvePriceByTypeRegion,MF5PLUS,1,600.00" in rows
    # 유형 5개 x 권역 2개
    assert sum(r.startswith("VacancyByTypeRegion,") for r in rows) == 10
    assert sum(r.startswith("AvePriceByTypeRegion,") for r in rows) == 10


def test_quality_shares_in_summary_track_demolition(registry, market):
    registry.remove_dwelling(8)
    market.aggregate(registry)
    rows = market.summary_rows(registry)
    # 초기 분포는 고정, 현재 분포는 남은 7채 기준
    assert "1,1,0.250000,0.142857" in rows
