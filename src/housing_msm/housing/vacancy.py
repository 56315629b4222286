"""공실 인덱스 - 권역별 공실 주택 집합

존 단위 공실은 표본이 너무 희소하므로 권역 단위로 묶는다.
권역 버킷은 리스트 + 위치 사전 (O(1) 추가/삭제, 복사 없는 인덱스 표본추출).
삭제는 마지막 원소를 빈 자리로 옮기므로 순서는 결정적이지만 삽입 순서는 아니다.
"""

import logging

import numpy as np

from .stock import Dwelling

logger = logging.getLogger(__name__)


class VacancyIndex:
    """권역별 공실 목록"""

    def __init__(self, geo):
        self.geo = geo
        self._by_region: dict[int, list[int]] = {rid: [] for rid in geo.region_ids}
        self._position: dict[int, int] = {}   # dwelling id → 버킷 내 위치

    def add_to_vacancy(self, dwelling: Dwelling):
        if dwelling.id in self._position:
            logger.warning("Consistency warning: dwelling %d is already in the list of vacant dwellings",
                           dwelling.id)
            return
        bucket = self._by_region.setdefault(self.geo.region_of(dwelling.zone), [])
        self._position[dwelling.id] = len(bucket)
        bucket.append(dwelling.id)

    def remove_from_vacancy(self, dwelling: Dwelling) -> bool:
        if not self.contains(dwelling):
            logger.warning("Consistency error: could not find vacant dwelling %d in the vacancy index",
                           dwelling.id)
            return False
        bucket = self._by_region[self.geo.region_of(dwelling.zone)]
        idx = self._position.pop(dwelling.id)
        last = bucket.pop()
        if last != dwelling.id:
            bucket[idx] = last
            self._position[last] = idx
        return True

    def contains(self, dwelling: Dwelling) -> bool:
        idx = self._position.get(dwelling.id)
        if idx is None:
            return False
        bucket = self._by_region.get(self.geo.region_of(dwelling.zone))
        return bucket is not None and idx < len(bucket) and bucket[idx] == dwelling.id

    def sample_vacant(self, region: int, n: int, rng: np.random.Generator) -> list[int]:
        """권역 내 공실 최대 n개 비복원 추출"""
        bucket = self._by_region.get(region)
        if not bucket:
            return []
        picks = rng.choice(len(bucket), size=min(n, len(bucket)), replace=False)
        return [bucket[int(i)] for i in picks]

    def list_vacant(self, region: int) -> list[int]:
        return list(self._by_region.get(region, []))

    def count_vacant(self, region: int) -> int:
        return len(self._by_region.get(region, []))

    def total_vacant(self) -> int:
        return len(self._position)

    def regions(self) -> list[int]:
        return list(self._by_region.keys())

    def clear(self):
        for bucket in self._by_region.values():
            bucket.clear()
        self._position.clear()
