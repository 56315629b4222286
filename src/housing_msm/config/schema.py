"""Pydantic 기반 설정 스키마 - JSON 검증 및 기본값"""

from pydantic import BaseModel, Field
from typing import Optional


class SimulationConfig(BaseModel):
    """시뮬레이션 마스터 설정"""
    name: str = "default"
    start_year: int = 2011
    end_year: int = 2040
    seed: int = 42
    world_file: str = "world.json"
    population_file: str = "population.json"
    output_dir: Optional[str] = None         # None = 결과 파일 미작성
    result_file: str = "result"
    model_order: list[str] = Field(default_factory=lambda: ["demolition", "migration"])
    validate_each_year: bool = False
    track_dwelling: int = -1                 # 추적 로그 대상 주택 (-1 = 없음)
    track_household: int = -1                # 추적 로그 대상 가구


class RealEstateConfig(BaseModel):
    """주택 스톡"""
    quality_levels: int = 4
    rent_bucket_size: float = 200.0          # 임대료 구간 폭 (월)
    rent_categories: int = 25                # 최상위 구간 번호


class HouseholdConfig(BaseModel):
    """가구 분류"""
    income_brackets: list[float] = Field(default_factory=lambda: [20000.0, 40000.0, 60000.0, 80000.0])


class MovesConfig(BaseModel):
    """이사(주택 탐색)"""
    samples_per_region: int = 20             # 지역당 후보 표본 수
    accessibility_scale: float = 100.0       # 접근성 → 효용 정규화
    restricted_income_share: float = 0.8     # 제한 주택: 중위소득 대비 상한


class MigrationConfig(BaseModel):
    """전입/전출 인구 통제"""
    population_control: str = "population"   # migration, population, populationGrowthRate
    migration_file: str = "migration.json"
    population_target_file: str = "population_target.json"
    population_growth_rate: float = 0.0      # 연 %


class EventRulesConfig(BaseModel):
    """이벤트 허용 규칙"""
    out_migration: bool = True
    demolition: bool = True


class ScoringConfig(BaseModel):
    """주입형 효용/확률 전략"""
    strategy: str = "housing_msm.scoring.strategy:DefaultScoringStrategy"
    params: dict = Field(default_factory=dict)


class ScenarioConfig(BaseModel):
    """최상위 시나리오 설정 (모든 것을 통합)"""
    simulation: SimulationConfig = Field(default_factory=SimulationConfig)
    real_estate: RealEstateConfig = Field(default_factory=RealEstateConfig)
    households: HouseholdConfig = Field(default_factory=HouseholdConfig)
    moves: MovesConfig = Field(default_factory=MovesConfig)
    migration: MigrationConfig = Field(default_factory=MigrationConfig)
    event_rules: EventRulesConfig = Field(default_factory=EventRulesConfig)
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
