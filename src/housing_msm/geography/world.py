"""지역 시스템 - JSON 기반 존/권역 정의

존(zone)은 정확히 하나의 권역(region)에 속한다.
공실/가격 집계와 주택 후보 탐색은 권역 단위로 이루어진다.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass
class Region:
    """하나의 권역"""
    id: int
    name: str = ""


@dataclass
class Zone:
    """하나의 존"""
    id: int
    region: int
    name: str = ""


class GeoData:
    """존/권역 집합"""

    def __init__(self, regions: list[Region], zones: list[Zone]):
        self.regions = regions
        self.zones: dict[int, Zone] = {z.id: z for z in zones}

        # 권역 ID → 배열 index 매핑 (ID 오름차순)
        self.region_ids: list[int] = sorted(r.id for r in regions)
        self.id_to_idx: dict[int, int] = {rid: i for i, rid in enumerate(self.region_ids)}
        self.n = len(self.region_ids)

        for z in zones:
            if z.region not in self.id_to_idx:
                raise ValueError(f"Zone {z.id} refers to unknown region {z.region}")

    @property
    def zone_ids(self) -> list[int]:
        return list(self.zones.keys())

    def region_of(self, zone_id: int) -> int:
        return self.zones[zone_id].region

    def region_index(self, region_id: int) -> int:
        return self.id_to_idx[region_id]

    def zone_region_index(self, zone_id: int) -> int:
        return self.id_to_idx[self.zones[zone_id].region]

    def get_names(self) -> list[str]:
        names = {r.id: r.name for r in self.regions}
        return [names[rid] or str(rid) for rid in self.region_ids]

    @classmethod
    def from_dict(cls, data: dict) -> GeoData:
        regions = [Region(id=int(rd["id"]), name=rd.get("name", "")) for rd in data["regions"]]
        zones = [
            Zone(id=int(zd["id"]), region=int(zd["region"]), name=zd.get("name", ""))
            for zd in data["zones"]
        ]
        return cls(regions, zones)

    def to_dict(self) -> dict:
        """딕셔너리로 변환 (JSON 직렬화용)"""
        return {
            "regions": [{"id": r.id, "name": r.name} for r in self.regions],
            "zones": [{"id": z.id, "region": z.region, "name": z.name} for z in self.zones.values()],
        }
