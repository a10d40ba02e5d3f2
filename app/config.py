"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from scoring.config import PillarWeights, ScoringBenchmarks, ScoringModelConfig

_DEFAULT_BENCHMARKS = ScoringBenchmarks()
_DEFAULT_WEIGHTS = PillarWeights()


ENV_FILENAMES: tuple[str, ...] = (".env", ".env.local")


def load_env_files(project_root: Path | None = None) -> None:
    """
    Load KEY=VALUE pairs for the SCORE_* and LOG_LEVEL settings from
    `.env` and `.env.local` under ``project_root`` (defaults to the repo root).

    There is no separate database package to share a loader with, so the
    loader sits next to the settings it feeds. Existing process environment
    variables are not overwritten.
    """

    root = project_root or Path(__file__).resolve().parents[1]
    for filename in ENV_FILENAMES:
        env_path = root / filename
        if not env_path.exists():
            continue

        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_float_env(name: str, default: float) -> float:
    """
    Read a float from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return float(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


@dataclass(frozen=True)
class AppSettings:
    """
    Process-level API settings.
    """

    log_level: str = "INFO"
    title: str = "AdPilot Metrics API"


@lru_cache(maxsize=1)
def get_app_settings() -> AppSettings:
    """
    Return cached application settings from environment variables.
    """

    return AppSettings(log_level=_get_str_env("LOG_LEVEL", "INFO").upper())


@lru_cache(maxsize=1)
def get_scoring_config() -> ScoringModelConfig:
    """
    Return the cached scoring model configuration.

    Benchmarks and weights can be overridden through ``SCORE_BENCHMARK_*``
    and ``SCORE_WEIGHT_*`` variables. Raises ScoringConfigurationError when
    the resulting weights do not sum to 1.0 or a benchmark is not positive.
    """

    benchmarks = ScoringBenchmarks(
        ctr=_get_float_env("SCORE_BENCHMARK_CTR", _DEFAULT_BENCHMARKS.ctr),
        cpa=_get_float_env("SCORE_BENCHMARK_CPA", _DEFAULT_BENCHMARKS.cpa),
        roas=_get_float_env("SCORE_BENCHMARK_ROAS", _DEFAULT_BENCHMARKS.roas),
        cpm=_get_float_env("SCORE_BENCHMARK_CPM", _DEFAULT_BENCHMARKS.cpm),
        frequency_fatigue_threshold=_get_float_env(
            "SCORE_FREQUENCY_FATIGUE_THRESHOLD",
            _DEFAULT_BENCHMARKS.frequency_fatigue_threshold,
        ),
    )
    weights = PillarWeights(
        performance=_get_float_env("SCORE_WEIGHT_PERFORMANCE", _DEFAULT_WEIGHTS.performance),
        delivery=_get_float_env("SCORE_WEIGHT_DELIVERY", _DEFAULT_WEIGHTS.delivery),
        creative=_get_float_env("SCORE_WEIGHT_CREATIVE", _DEFAULT_WEIGHTS.creative),
        structure=_get_float_env("SCORE_WEIGHT_STRUCTURE", _DEFAULT_WEIGHTS.structure),
    )
    return ScoringModelConfig(benchmarks=benchmarks, weights=weights)
