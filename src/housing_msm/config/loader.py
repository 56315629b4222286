"""JSON → Python 설정/입력 로더"""

import json
from enum import IntEnum
from pathlib import Path

from .schema import ScenarioConfig
from ..agents.population import Household, Person
from ..core.types import DwellingType, Gender, Race, PersonRole, Occupation, NO_ID
from ..housing.stock import Dwelling


def read_json(path: Path):
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def load_scenario(preset_dir: str | Path) -> ScenarioConfig:
    """프리셋 디렉토리에서 시나리오 로드

    Args:
        preset_dir: 프리셋 디렉토리 경로 (scenario.json이 있는 곳)

    Returns:
        ScenarioConfig
    """
    preset_dir = Path(preset_dir)

    scenario_path = preset_dir / "scenario.json"
    if scenario_path.exists():
        scenario_data = read_json(scenario_path)
    else:
        scenario_data = {}

    return ScenarioConfig(**scenario_data)


def load_scenario_from_dict(data: dict) -> ScenarioConfig:
    """딕셔너리에서 직접 로드"""
    return ScenarioConfig(**data)


def load_table(path: str | Path) -> dict | None:
    """연도 인덱스 표 (migration / population target), 파일이 없으면 None"""
    path = Path(path)
    if not path.exists():
        return None
    return {int(year): value for year, value in read_json(path).items()}


def _enum(cls: type[IntEnum], value):
    if isinstance(value, str):
        return cls[value.upper()]
    return cls(int(value))


def populate_registry(registry, data: dict):
    """초기 인구 딕셔너리 → 레지스트리

    {"dwellings": [...], "households": [{"id", "dwelling", "persons": [...]}]}
    """
    for dd in data.get("dwellings", []):
        registry.add_dwelling(Dwelling(
            id=int(dd["id"]),
            zone=int(dd["zone"]),
            type=_enum(DwellingType, dd.get("type", "SFD")),
            quality=int(dd.get("quality", 1)),
            bedrooms=int(dd.get("bedrooms", 1)),
            price=float(dd.get("price", 0.0)),
            resident_id=int(dd.get("resident", NO_ID)),
            year_built=int(dd.get("year_built", 0)),
            restricted=bool(dd.get("restricted", False)),
        ))

    for hd in data.get("households", []):
        hh = Household(id=int(hd["id"]), dwelling_id=int(hd.get("dwelling", NO_ID)))
        registry.add_household(hh)
        for pd in hd.get("persons", []):
            person = Person(
                id=int(pd["id"]),
                age=int(pd["age"]),
                gender=_enum(Gender, pd.get("gender", 1)),
                race=_enum(Race, pd.get("race", "OTHER")),
                role=_enum(PersonRole, pd.get("role", "SINGLE")),
                occupation=_enum(Occupation, pd.get("occupation", "UNEMPLOYED")),
                workplace=int(pd.get("workplace", NO_ID)),
                income=float(pd.get("income", 0.0)),
            )
            registry.add_person(person)
            registry.add_person_to_household(person, hh)


def load_population(registry, path: str | Path):
    populate_registry(registry, read_json(Path(path)))
