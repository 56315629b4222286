"""가구 분류 - 소득, 소득구간, 가구 유형, 임대료 구간"""

import bisect

from ..core.types import HouseholdSize, HouseholdType, IncomeCategory


def household_income(population, hh) -> float:
    """가구 연소득 = 가구원 소득 합"""
    return float(sum(p.income for p in population.persons_of(hh)))


def income_category(income: float, brackets: list[float]) -> IncomeCategory:
    """소득구간 (상한값과 같으면 아래 구간)"""
    idx = bisect.bisect_left(brackets, income)
    return IncomeCategory(min(idx, len(IncomeCategory) - 1))


def size_class(size: int) -> HouseholdSize:
    return HouseholdSize(min(max(size, 1), 4) - 1)


def household_type(population, hh, brackets: list[float]) -> HouseholdType:
    income = household_income(population, hh)
    return HouseholdType(size=size_class(hh.size), income=income_category(income, brackets))


def rent_category(price: float, bucket_size: float, max_category: int) -> int:
    """임대료 구간 = <price / bucket_size>, 최상위 구간으로 절단"""
    return min(int(price / bucket_size), max_category)
