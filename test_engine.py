"""시뮬레이션 엔진 / 프리셋 통합 테스트"""

import json
import logging
import sys

import pytest

from housing_msm.__main__ import main
from housing_msm.config.loader import load_scenario, load_table, read_json
from housing_msm.core.errors import ConfigurationError
from housing_msm.geography.accessibility import ZonalAccessibility
from housing_msm.geography.world import GeoData
from housing_msm.scoring.strategy import DefaultScoringStrategy
from housing_msm.simulation.engine import SimulationEngine
from housing_msm.simulation.phases import Phase, DEFAULT_PHASE_ORDER
from housing_msm.simulation.summary import ResultFile

from conftest import PRESET_DIR


def test_preset_loads():
    config = load_scenario(PRESET_DIR)
    assert config.simulation.name == "small_city"
    assert config.simulation.model_order == ["demolition", "migration"]
    assert config.migration.population_control == "population"


def test_initialize_is_consistent():
    engine = SimulationEngine.from_preset(PRESET_DIR)
    engine.initialize()
    assert engine.registry.check_consistency() == []
    assert len(engine.registry.stock) == 30
    assert engine.registry.population.n_households == 22
    assert engine.registry.vacancy.total_vacant() == 8
    assert engine.registry.stock.initial_quality_shares.sum() == pytest.approx(1.0)


def test_engine_built_from_parts():
    config = load_scenario(PRESET_DIR)
    world = GeoData.from_dict(read_json(PRESET_DIR / config.simulation.world_file))
    population = read_json(PRESET_DIR / config.simulation.population_file)
    strategy = DefaultScoringStrategy()
    target = load_table(PRESET_DIR / config.migration.population_target_file)
    engine = SimulationEngine(config, world, population=population, population_target=target,
                              strategy=strategy)
    engine.initialize()
    assert engine.strategy is strategy
    assert engine.relocation.strategy is strategy
    assert isinstance(engine.accessibility, ZonalAccessibility)
    assert engine.accessibility.auto_accessibility(world.zone_ids[0]) == 0.0
    assert engine.registry.population.n_households == 22
    assert engine.registry.check_consistency() == []


def test_run_records_each_year():
    engine = SimulationEngine.from_preset(PRESET_DIR)
    summary = engine.run(n_years=3, progress=False)
    assert summary['years'] == 3
    assert summary['first_year'] == 2011
    assert summary['last_year'] == 2013
    assert engine.current_year == 2014
    assert len(engine.recorder.get_population_series()) == 3
    assert engine.registry.check_consistency() == []


def test_counters_reset_each_year():
    engine = SimulationEngine.from_preset(PRESET_DIR)
    engine.run(n_years=2, progress=False)
    assert engine.relocation.moves == 0
    assert engine.issues.to_dict() == {
        'lack_of_dwelling_failed_inmigration': 0,
        'lack_of_dwelling_forced_outmigration': 0,
    }


def test_same_seed_same_history():
    a = SimulationEngine.from_preset(PRESET_DIR, simulation_overrides={"seed": 123})
    b = SimulationEngine.from_preset(PRESET_DIR, simulation_overrides={"seed": 123})
    a.run(n_years=6, progress=False)
    b.run(n_years=6, progress=False)
    assert [s.to_dict() for s in a.recorder.history] == [s.to_dict() for s in b.recorder.history]
    assert sorted(dd.id for dd in a.registry.dwellings()) == sorted(dd.id for dd in b.registry.dwellings())


def test_population_follows_target():
    engine = SimulationEngine.from_preset(PRESET_DIR)
    engine.config.event_rules.demolition = False
    summary = engine.run(n_years=5, progress=False)
    assert summary['total_demolished'] == 0
    assert summary['final_dwellings'] == 30
    # 2015년 목표 59명, 가구 단위 추출이라 최대 가구원수-1 만큼 벗어날 수 있음
    assert abs(summary['final_population'] - 59) <= 3


def test_unknown_model_in_order():
    with pytest.raises(ConfigurationError):
        SimulationEngine.from_preset(PRESET_DIR,
                                     simulation_overrides={"model_order": ["demolition", "renovation"]})
    with pytest.raises(ConfigurationError):
        SimulationEngine.from_preset(PRESET_DIR,
                                     simulation_overrides={"model_order": ["migration", "migration"]})


def test_result_file_written(tmp_path):
    engine = SimulationEngine.from_preset(PRESET_DIR, simulation_overrides={"output_dir": str(tmp_path)})
    engine.run(n_years=1, progress=False)
    text = (tmp_path / "result_small_city.csv").read_text(encoding="utf-8")
    assert "Year,2011" in text
    assert "DemolishedDD," in text
    assert "InmigrantsPP," in text
    assert "CountOfDD,SFD," in text
    assert "QualityLevel,Dwellings,InitialShare,CurrentShare" in text
    assert "VacancyByTypeRegion," in text
    assert "AvePriceByTypeRegion," in text
    # 연말 flush 후 파일과 메모리 행이 같다
    assert text.splitlines() == engine.result_file.rows


def test_result_file_buffers_until_flush(tmp_path):
    path = tmp_path / "out" / "r.csv"
    result_file = ResultFile(path)
    result_file.write("Year,2011")
    result_file.write_all(["DemolishedDD,0", "InmigrantsPP,3"])
    assert path.read_text(encoding="utf-8") == ""
    result_file.flush()
    assert path.read_text(encoding="utf-8").splitlines() == ["Year,2011", "DemolishedDD,0", "InmigrantsPP,3"]
    result_file.write("Year,2012")
    result_file.flush()
    result_file.flush()
    assert path.read_text(encoding="utf-8").splitlines()[-1] == "Year,2012"
    assert len(result_file.rows) == 4


def test_result_file_without_path_keeps_rows():
    result_file = ResultFile()
    result_file.write("Year,2011")
    result_file.flush()
    assert result_file.rows == ["Year,2011"]


def test_phase_order():
    assert DEFAULT_PHASE_ORDER[0] == Phase.MARKET_AGGREGATION
    assert DEFAULT_PHASE_ORDER[-1] == Phase.RECORD_STATS


def test_cli_quiet_prints_summary(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["housing_msm", "--years", "2", "--seed", "9", "--quiet"])
    main()
    summary = json.loads(capsys.readouterr().out)
    assert summary['years'] == 2
    assert summary['first_year'] == 2011


def test_cli_missing_table_year_exits(monkeypatch, caplog):
    # 목표 인구표는 2011~2040, 31년째(2041) 행이 없음
    monkeypatch.setattr(sys, "argv", ["housing_msm", "--years", "31", "--quiet"])
    with caplog.at_level(logging.ERROR, logger="housing_msm"):
        with pytest.raises(SystemExit) as exc:
            main()
    assert exc.value.code == 1
    assert "no row for year 2041" in caplog.text


def test_cli_missing_preset(monkeypatch):
    monkeypatch.setattr(sys, "argv", ["housing_msm", "--preset", "no_such_preset"])
    with pytest.raises(SystemExit) as exc:
        main()
    assert exc.value.code == 1
