"""시뮬레이션 엔진 - 모든 컴포넌트 통합

연간 흐름:
    시장 집계 → 모형별 이벤트 생성(연초 스냅샷) → 모형 순서대로 순차 적용 → 연말 집계
"""

import logging
from pathlib import Path

import numpy as np

from ..config.loader import load_scenario, load_table, populate_registry, read_json
from ..config.schema import ScenarioConfig
from ..core.errors import ConfigurationError
from ..core.events import EventBus, IssueCounter
from ..core.registry import EntityRegistry
from ..geography.accessibility import ZonalAccessibility
from ..geography.world import GeoData
from ..markets.aggregator import MarketAggregator
from ..models.demolition import DemolitionModel
from ..models.migration import MigrationModel
from ..models.relocation import RelocationModel
from ..scoring.strategy import load_strategy
from .phases import Phase, DEFAULT_PHASE_ORDER
from .recorder import Recorder
from .summary import ResultFile

logger = logging.getLogger(__name__)


class SimulationEngine:
    """주택시장/가구 입지 미시시뮬레이션 엔진"""

    def __init__(self, config: ScenarioConfig, world: GeoData, accessibility=None,
                 population: dict | None = None, migration_table: dict | None = None,
                 population_target: dict | None = None, strategy=None):
        self.config = config
        self.world = world
        sim = config.simulation
        self.rng = np.random.default_rng(sim.seed)
        self.current_year = sim.start_year

        # Registry
        self.registry = EntityRegistry.from_config(config, world)
        if population is not None:
            populate_registry(self.registry, population)

        # Injected collaborators
        self.accessibility = accessibility if accessibility is not None else ZonalAccessibility()
        self.strategy = strategy if strategy is not None else load_strategy(config.scoring)

        # Market
        self.market = MarketAggregator(config.real_estate, world)

        # Output
        result_path = None
        if sim.output_dir is not None:
            result_path = Path(sim.output_dir) / f"{sim.result_file}_{sim.name}.csv"
        self.result_file = ResultFile(result_path)
        self.issues = IssueCounter()

        # Models (같은 난수 생성기 공유)
        self.relocation = RelocationModel(
            config.moves, self.registry, self.market, self.accessibility, self.strategy,
            self.rng, quality_levels=config.real_estate.quality_levels,
        )
        self.migration = MigrationModel(
            config.migration, config.event_rules, self.registry, self.relocation, self.issues,
            self.rng, sim.start_year, sim.end_year,
            migration_table=migration_table, population_target=population_target,
            result_file=self.result_file,
        )
        self.demolition = DemolitionModel(
            config.event_rules, self.registry, self.relocation, self.migration, self.strategy,
            self.issues, self.rng, result_file=self.result_file,
        )
        self.models = self._ordered_models(sim.model_order)

        # Event bus
        self.event_bus = EventBus()
        for model in self.models:
            self.event_bus.subscribe(model.event_type, model.handle_event)

        # Recorder
        self.recorder = Recorder(world.n)

        # Phase order
        self.phase_order = DEFAULT_PHASE_ORDER
        self._year_stats: dict = {}
        self._initialized = False

    def _ordered_models(self, order: list[str]) -> list:
        available = {
            self.demolition.event_type: self.demolition,
            self.migration.event_type: self.migration,
        }
        if len(set(order)) != len(order):
            raise ConfigurationError(f"Duplicate model in model_order: {order}")
        unknown = [name for name in order if name not in available]
        if unknown:
            logger.error("Unknown event model(s) in model_order: %s", unknown)
            raise ConfigurationError(f"Unknown event model(s): {unknown}")
        return [available[name] for name in order]

    @classmethod
    def from_preset(cls, preset_dir: str | Path,
                    simulation_overrides: dict | None = None) -> 'SimulationEngine':
        """프리셋 디렉토리에서 생성

        Args:
            preset_dir: scenario.json / world.json / population.json 디렉토리
            simulation_overrides: SimulationConfig 필드 덮어쓰기 (예: {"seed": 7})
        """
        preset_dir = Path(preset_dir)
        config = load_scenario(preset_dir)
        if simulation_overrides:
            config = config.model_copy(update={
                "simulation": config.simulation.model_copy(update=simulation_overrides),
            })
        world_data = read_json(preset_dir / config.simulation.world_file)
        world = GeoData.from_dict(world_data)
        accessibility = ZonalAccessibility.from_dict(world_data)
        population = read_json(preset_dir / config.simulation.population_file)
        return cls(
            config, world,
            accessibility=accessibility,
            population=population,
            migration_table=load_table(preset_dir / config.migration.migration_file),
            population_target=load_table(preset_dir / config.migration.population_target_file),
        )

    def initialize(self):
        """시뮬레이션 초기화"""
        registry = self.registry
        registry.identify_vacant_dwellings()
        registry.seal_ids()
        registry.stock.freeze_initial_quality_shares()
        self.market.build_rent_distribution(registry)
        self.market.aggregate(registry)

        problems = registry.check_consistency()
        for problem in problems[:20]:
            logger.warning("Initial population: %s", problem)
        if len(problems) > 20:
            logger.warning("Initial population: %d more consistency problems", len(problems) - 20)

        self._initialized = True
        logger.info("  Initialized: %d dwellings, %d households, %d persons, %d regions",
                    len(registry.stock), registry.population.n_households,
                    registry.total_population(), self.world.n)

    def step(self):
        """한 해 시뮬레이션"""
        if not self._initialized:
            self.initialize()
        for phase in self.phase_order:
            self._execute_phase(phase)
        self.current_year += 1

    def _execute_phase(self, phase: Phase):
        """개별 페이즈 실행"""
        year = self.current_year

        if phase == Phase.MARKET_AGGREGATION:
            self.market.aggregate(self.registry)

        elif phase == Phase.PREPARE_EVENTS:
            # 모든 모형이 같은 연초 상태에서 이벤트를 만든 뒤 발행
            prepared = [model.prepare_year(year) for model in self.models]
            for events in prepared:
                self.event_bus.publish_all(events)

        elif phase == Phase.HANDLE_EVENTS:
            for event_type, stats in self.event_bus.process().items():
                logger.info("  %d: %s events handled=%d changed=%d",
                            year, event_type, stats.handled, stats.changed)

        elif phase == Phase.FINISH_YEAR:
            self.result_file.write(f"Year,{year}")
            self._year_stats = {}
            for model in self.models:
                self._year_stats.update(model.finish_year(year))
            self.result_file.write_all(self.market.summary_rows(self.registry))
            self.result_file.flush()
            self.issues.log_issues(year)
            if self.config.simulation.validate_each_year:
                for problem in self.registry.check_consistency():
                    logger.warning("%d: %s", year, problem)

        elif phase == Phase.RECORD_STATS:
            self.recorder.record(year, self.registry, self.market, self._year_stats,
                                 self.relocation.moves, self.issues)
            self.issues.reset()
            self.relocation.reset()

    def run(self, n_years: int = None, progress: bool = True) -> dict:
        """시뮬레이션 실행

        Args:
            n_years: 실행할 연수 (None이면 config 기준 end_year - start_year)
            progress: 진행 상황 출력
        """
        sim = self.config.simulation
        if n_years is None:
            n_years = sim.end_year - sim.start_year

        if progress:
            print(f"Starting simulation: {n_years} years from {self.current_year}, "
                  f"{self.registry.population.n_households:,} households, {self.world.n} regions")

        if not self._initialized:
            self.initialize()

        for _ in range(n_years):
            self.step()
            if progress:
                s = self.recorder.history[-1]
                print(f"  Year {s.year}: population={s.population:,} dwellings={s.dwellings:,} "
                      f"vacant={s.vacant_dwellings:,} in={s.inmigrants} out={s.outmigrants} "
                      f"demolished={s.demolished}")

        summary = self.recorder.get_summary()
        if progress:
            print(f"\nSimulation complete. {n_years} years elapsed.")
            print(f"  Final population: {summary.get('final_population', 0):,}")
            print(f"  Total demolished: {summary.get('total_demolished', 0):,}")
            print(f"  Lack of dwelling: {summary.get('total_lack_of_dwelling', 0):,}")

        return summary
