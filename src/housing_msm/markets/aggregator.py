"""주택시장 집계 - 유형 x 권역 공실률/평균가격, 소득구간별 임대료 분포

집계값은 주택 탐색 효용의 읽기 전용 입력이며, 가격을 직접 갱신하지 않는다.
"""

import numpy as np

from ..agents.classification import household_income, income_category, rent_category
from ..core.types import DwellingType, IncomeCategory


class MarketAggregator:
    """연간 시장 통계"""

    def __init__(self, cfg, world):
        """
        Args:
            cfg: RealEstateConfig
            world: GeoData
        """
        self.cfg = cfg
        self.world = world
        nt = len(DwellingType)
        nr = world.n

        # (n_types, n_regions)
        self.vacancy_rates = np.zeros((nt, nr), dtype=np.float64)
        self.average_prices = np.zeros((nt, nr), dtype=np.float64)
        self.dwelling_counts = np.zeros((nt, nr), dtype=np.int64)
        self.vacant_counts = np.zeros((nt, nr), dtype=np.int64)

        # 권역 전체 (n_types,)
        self.average_price_by_type = np.zeros(nt, dtype=np.float64)
        self.average_vacancy_by_type = np.zeros(nt, dtype=np.float64)

        # (n_income_categories, rent_categories + 1)
        self.rent_shares = np.zeros((len(IncomeCategory), cfg.rent_categories + 1), dtype=np.float64)
        self.median_income = 0.0

    def aggregate(self, registry):
        """유형 x 권역 공실률 및 평균가격 (연초 1회)"""
        nt = len(DwellingType)
        nr = self.world.n
        price_sum = np.zeros((nt, nr), dtype=np.float64)
        self.dwelling_counts[:] = 0
        self.vacant_counts[:] = 0

        for dd in registry.dwellings():
            t = int(dd.type)
            r = self.world.zone_region_index(dd.zone)
            self.dwelling_counts[t, r] += 1
            price_sum[t, r] += dd.price
            if dd.is_vacant:
                self.vacant_counts[t, r] += 1

        counts = self.dwelling_counts.astype(np.float64)
        occupied_cells = counts > 0
        self.vacancy_rates = np.divide(self.vacant_counts, counts,
                                       where=occupied_cells, out=np.zeros_like(counts))
        self.average_prices = np.divide(price_sum, counts,
                                        where=occupied_cells, out=np.zeros_like(counts))

        type_counts = counts.sum(axis=1)
        has_type = type_counts > 0
        self.average_price_by_type = np.divide(price_sum.sum(axis=1), type_counts,
                                               where=has_type, out=np.zeros(nt))
        self.average_vacancy_by_type = np.divide(self.vacant_counts.sum(axis=1), type_counts,
                                                 where=has_type, out=np.zeros(nt))

        incomes = [household_income(registry.population, hh) for hh in registry.households()]
        self.median_income = float(np.median(incomes)) if incomes else 0.0

    def build_rent_distribution(self, registry):
        """소득구간별 임대료 구간 점유율 (초기화 시 1회)"""
        cfg = self.cfg
        counts = np.zeros_like(self.rent_shares)
        brackets = registry.income_brackets

        for dd in registry.dwellings():
            if dd.is_vacant:
                continue
            hh = registry.get_household(dd.resident_id)
            if hh is None:
                continue
            inc_cat = income_category(household_income(registry.population, hh), brackets)
            counts[inc_cat, rent_category(dd.price, cfg.rent_bucket_size, cfg.rent_categories)] += 1

        # 최고 소득구간은 최고가 구간을 반드시 감당할 수 있어야 함
        counts[len(IncomeCategory) - 1, cfg.rent_categories] += 1

        totals = counts.sum(axis=1, keepdims=True)
        self.rent_shares = np.divide(counts, totals, where=totals > 0, out=np.zeros_like(counts))

    # === 읽기 접근자 ===
    def vacancy_rate(self, dwelling_type: DwellingType, region: int) -> float:
        return float(self.vacancy_rates[int(dwelling_type), self.world.region_index(region)])

    def average_price(self, dwelling_type: DwellingType, region: int) -> float:
        return float(self.average_prices[int(dwelling_type), self.world.region_index(region)])

    def rent_shares_for(self, inc_cat: IncomeCategory) -> np.ndarray:
        return self.rent_shares[int(inc_cat)]

    def price_utility(self, price: float, inc_cat: IncomeCategory) -> float:
        """1 - (해당 구간까지의 누적 점유율): 비쌀수록 0에 가까움"""
        bucket = rent_category(price, self.cfg.rent_bucket_size, self.cfg.rent_categories)
        cumulative = float(self.rent_shares[int(inc_cat), :bucket + 1].sum())
        return max(0.0, 1.0 - cumulative)

    def summary_rows(self, registry) -> list[str]:
        """결과 파일용 주택 요약"""
        stock = registry.stock
        current_shares = stock.current_quality_shares()
        rows = ["QualityLevel,Dwellings,InitialShare,CurrentShare"]
        for q, count in enumerate(stock.dwellings_by_quality, start=1):
            rows.append(f"{q},{int(count)},{stock.initial_quality_shares[q - 1]:f},{current_shares[q - 1]:f}")

        type_counts = self.dwelling_counts.sum(axis=1)
        for dt in DwellingType:
            rows.append(f"CountOfDD,{dt.name},{int(type_counts[dt])}")
        for dt in DwellingType:
            rows.append(f"AveMonthlyPrice,{dt.name},{self.average_price_by_type[dt]:.2f}")
        for dt in DwellingType:
            rows.append(f"AveVacancy,{dt.name},{self.average_vacancy_by_type[dt]:f}")

        # 유형 x 권역
        for dt in DwellingType:
            for r, region in enumerate(self.world.region_ids):
                rows.append(f"VacancyByTypeRegion,{dt.name},{region},{self.vacancy_rates[dt, r]:f}")
        for dt in DwellingType:
            for r, region in enumerate(self.world.region_ids):
                rows.append(f"AvePriceByTypeRegion,{dt.name},{region},{self.average_prices[dt, r]:.2f}")

        # 소득 구간(1만 단위) x 임대료 구간(250 단위) 주거비 표
        rows.append("Housing costs by income group")
        rows.append("Income," + ",".join(f"rent_{(i + 1) * 250}" for i in range(10)) + ",averageRent")
        rent_by_income = np.zeros((10, 10), dtype=np.int64)
        rent_sum = np.zeros(10, dtype=np.float64)
        for hh in registry.households():
            dd = registry.get_dwelling(hh.dwelling_id)
            if dd is None:
                continue
            inc = min(int(household_income(registry.population, hh) // 10000), 9)
            rent = min(int(dd.price // 250), 9)
            rent_by_income[inc, rent] += 1
            rent_sum[inc] += dd.price
        for i in range(10):
            line = f"{(i + 1) * 10000}," + ",".join(str(int(c)) for c in rent_by_income[i])
            count = rent_by_income[i].sum()
            if count > 0:
                line += f",{rent_sum[i] / count:.2f}"
            rows.append(line)
        return rows
