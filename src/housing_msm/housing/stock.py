"""주택 스톡 - 주택 레코드와 ID 관리"""

from dataclasses import dataclass

import numpy as np

from ..core.types import DwellingType, NO_ID


@dataclass
class Dwelling:
    """주택 한 채"""
    id: int
    zone: int
    type: DwellingType
    quality: int                  # 1..quality_levels
    bedrooms: int
    price: float                  # 월 임대료
    resident_id: int = NO_ID      # -1 = 공실
    year_built: int = 0
    restricted: bool = False      # 토지이용/임대 제한 주택

    @property
    def is_vacant(self) -> bool:
        return self.resident_id == NO_ID

    def age(self, year: int) -> int:
        return max(0, year - self.year_built)


class HousingStock:
    """주택 스톡 관리

    ID는 단조 증가하며 실행 중 재사용되지 않는다.
    초기 적재 후(seal_ids) highest_id 이하의 ID는 next_id로 발급된 것만 받는다.
    """

    def __init__(self, quality_levels: int = 4):
        self.quality_levels = quality_levels
        self._dwellings: dict[int, Dwelling] = {}
        self.highest_id = 0
        self.largest_bedrooms = 0
        self._sealed = False
        self._issued: set[int] = set()

        # 품질 수준별 주택 수
        self.dwellings_by_quality = np.zeros(quality_levels, dtype=np.int64)
        self.initial_quality_shares = np.zeros(quality_levels, dtype=np.float64)

    def __len__(self) -> int:
        return len(self._dwellings)

    def __contains__(self, dwelling_id: int) -> bool:
        return dwelling_id in self._dwellings

    def add(self, dwelling: Dwelling):
        if dwelling.id in self._dwellings:
            raise ValueError(f"Dwelling id {dwelling.id} already exists")
        if not 1 <= dwelling.quality <= self.quality_levels:
            raise ValueError(f"Dwelling {dwelling.id} has quality {dwelling.quality} "
                             f"outside 1..{self.quality_levels}")
        if dwelling.price < 0:
            raise ValueError(f"Dwelling {dwelling.id} has negative price")
        if self._sealed and dwelling.id <= self.highest_id and dwelling.id not in self._issued:
            raise ValueError(f"Dwelling id {dwelling.id} was already used in this run")
        self._issued.discard(dwelling.id)
        self._dwellings[dwelling.id] = dwelling
        self.highest_id = max(self.highest_id, dwelling.id)
        self.largest_bedrooms = max(self.largest_bedrooms, dwelling.bedrooms)
        self.dwellings_by_quality[dwelling.quality - 1] += 1

    def remove(self, dwelling_id: int) -> Dwelling | None:
        dwelling = self._dwellings.pop(dwelling_id, None)
        if dwelling is not None:
            self.dwellings_by_quality[dwelling.quality - 1] -= 1
        return dwelling

    def get(self, dwelling_id: int) -> Dwelling | None:
        return self._dwellings.get(dwelling_id)

    def all(self) -> list[Dwelling]:
        return list(self._dwellings.values())

    def next_id(self) -> int:
        self.highest_id += 1
        self._issued.add(self.highest_id)
        return self.highest_id

    def seal_ids(self):
        """초기 적재 종료: 이후 제거된 ID의 재등록 거부"""
        self._sealed = True

    def freeze_initial_quality_shares(self):
        """초기 품질 분포 고정 (초기화 시 1회)"""
        self.initial_quality_shares = self.current_quality_shares()

    def current_quality_shares(self) -> np.ndarray:
        total = self.dwellings_by_quality.sum()
        if total == 0:
            return np.zeros(self.quality_levels, dtype=np.float64)
        return self.dwellings_by_quality / float(total)

    def set_quality(self, dwelling: Dwelling, quality: int):
        """외부 개보수 모형용 품질 변경 (품질 분포 유지)"""
        if not 1 <= quality <= self.quality_levels:
            raise ValueError(f"Quality {quality} outside 1..{self.quality_levels}")
        self.dwellings_by_quality[dwelling.quality - 1] -= 1
        dwelling.quality = quality
        self.dwellings_by_quality[quality - 1] += 1
