"""CLI 엔트리 포인트

사용법:
    python -m housing_msm --preset small_city --years 10
    python -m housing_msm --preset-dir ./my_region --seed 7 --quiet
"""

import argparse
import json
import logging
import sys
from pathlib import Path

import numpy as np
from pydantic import ValidationError

from .core.errors import ConfigurationError
from .simulation.engine import SimulationEngine

logger = logging.getLogger("housing_msm")


class NumpyEncoder(json.JSONEncoder):
    def default(self, obj):
        if isinstance(obj, (np.integer,)):
            return int(obj)
        if isinstance(obj, (np.floating,)):
            return float(obj)
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        return super().default(obj)


def main():
    parser = argparse.ArgumentParser(description="주택시장/가구 입지 미시시뮬레이션")
    parser.add_argument("--preset", type=str, default="small_city",
                        help="프리셋 이름 (small_city)")
    parser.add_argument("--preset-dir", type=str, default=None,
                        help="프리셋 디렉토리 직접 지정")
    parser.add_argument("--years", type=int, default=None,
                        help="시뮬레이션 연수 (기본: end_year - start_year)")
    parser.add_argument("--seed", type=int, default=None,
                        help="랜덤 시드")
    parser.add_argument("--output-dir", type=str, default=None,
                        help="결과 파일 디렉토리")
    parser.add_argument("--log-level", type=str, default="WARNING",
                        help="로그 레벨 (DEBUG, INFO, WARNING, ERROR)")
    parser.add_argument("--quiet", action="store_true",
                        help="진행 출력 끄기 (JSON 요약만 출력)")

    args = parser.parse_args()
    logging.basicConfig(level=args.log_level.upper(),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    # 프리셋 디렉토리 결정
    if args.preset_dir:
        preset_dir = Path(args.preset_dir)
    else:
        preset_dir = Path(__file__).parent / "presets" / args.preset

    if not preset_dir.exists():
        logger.error("Preset directory not found: %s", preset_dir)
        sys.exit(1)

    # CLI 인자로 오버라이드 (난수 생성기/결과 파일은 엔진 생성 시 고정됨)
    overrides = {}
    if args.seed is not None:
        overrides["seed"] = args.seed
    if args.output_dir is not None:
        overrides["output_dir"] = args.output_dir

    try:
        engine = SimulationEngine.from_preset(preset_dir, simulation_overrides=overrides)
    except ValidationError as e:
        logger.error("Invalid scenario configuration in %s:\n%s", preset_dir, e)
        sys.exit(1)
    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        sys.exit(1)

    # 표에 없는 연도는 실행 중에 드러난다
    try:
        summary = engine.run(n_years=args.years, progress=not args.quiet)
    except ConfigurationError as e:
        logger.error("Configuration error in year %d: %s", engine.current_year, e)
        sys.exit(1)

    if args.quiet:
        print(json.dumps(summary, indent=2, ensure_ascii=False, cls=NumpyEncoder))


if __name__ == "__main__":
    main()
