"""접근성 서비스 - 외부에서 미리 계산된 존별 자동차/대중교통 접근성"""

from __future__ import annotations
from typing import Protocol


class AccessibilityService(Protocol):
    def auto_accessibility(self, zone: int) -> float: ...

    def transit_accessibility(self, zone: int) -> float: ...


class ZonalAccessibility:
    """존별 접근성 테이블 (읽기 전용)"""

    def __init__(self, auto: dict[int, float] | None = None, transit: dict[int, float] | None = None):
        self._auto = dict(auto or {})
        self._transit = dict(transit or {})

    def auto_accessibility(self, zone: int) -> float:
        return self._auto.get(zone, 0.0)

    def transit_accessibility(self, zone: int) -> float:
        return self._transit.get(zone, 0.0)

    @classmethod
    def from_dict(cls, data: dict) -> ZonalAccessibility:
        """world.json의 zones 항목에서 접근성 추출"""
        auto = {}
        transit = {}
        for zd in data.get("zones", []):
            zone = int(zd["id"])
            auto[zone] = float(zd.get("auto_accessibility", 0.0))
            transit[zone] = float(zd.get("transit_accessibility", 0.0))
        return cls(auto, transit)
