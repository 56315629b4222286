"""통계 기록"""

import numpy as np
from dataclasses import dataclass


@dataclass
class YearlyStats:
    """연간 통계"""
    year: int = 0
    dwellings: int = 0
    households: int = 0
    population: int = 0
    vacant_dwellings: int = 0

    # Events
    inmigrants: int = 0
    outmigrants: int = 0
    demolished: int = 0
    moves: int = 0
    lack_of_dwelling_failed_inmigration: int = 0
    lack_of_dwelling_forced_outmigration: int = 0

    # Market (n_types, n_regions)
    vacancy_rates: np.ndarray = None
    average_prices: np.ndarray = None

    def to_dict(self) -> dict:
        d = {}
        for k, v in self.__dict__.items():
            if isinstance(v, np.ndarray):
                d[k] = v.tolist()
            else:
                d[k] = v
        return d


class Recorder:
    """시뮬레이션 통계 기록기"""

    def __init__(self, n_regions: int):
        self.n_regions = n_regions
        self.history: list[YearlyStats] = []

    def record(self, year: int, registry, market, model_stats: dict, moves: int, issues) -> YearlyStats:
        """한 해 통계 기록"""
        stats = YearlyStats(
            year=year,
            dwellings=len(registry.stock),
            households=registry.population.n_households,
            population=registry.total_population(),
            vacant_dwellings=registry.vacancy.total_vacant(),

            inmigrants=model_stats.get('inmigrants', 0),
            outmigrants=model_stats.get('outmigrants', 0),
            demolished=model_stats.get('demolished', 0),
            moves=moves,
            lack_of_dwelling_failed_inmigration=issues.lack_of_dwelling_failed_inmigration,
            lack_of_dwelling_forced_outmigration=issues.lack_of_dwelling_forced_outmigration,

            vacancy_rates=market.vacancy_rates.copy(),
            average_prices=market.average_prices.copy(),
        )
        self.history.append(stats)
        return stats

    def get_population_series(self) -> np.ndarray:
        if not self.history:
            return np.array([])
        return np.array([s.population for s in self.history])

    def get_summary(self) -> dict:
        """최종 요약"""
        if not self.history:
            return {}
        first = self.history[0]
        last = self.history[-1]

        return {
            'years': len(self.history),
            'first_year': first.year,
            'last_year': last.year,
            'final_population': last.population,
            'final_households': last.households,
            'final_dwellings': last.dwellings,
            'final_vacancy_rate': last.vacant_dwellings / last.dwellings if last.dwellings else 0.0,
            'total_inmigrants': sum(s.inmigrants for s in self.history),
            'total_outmigrants': sum(s.outmigrants for s in self.history),
            'total_demolished': sum(s.demolished for s in self.history),
            'total_lack_of_dwelling': sum(s.lack_of_dwelling_failed_inmigration
                                          + s.lack_of_dwelling_forced_outmigration for s in self.history),
        }
