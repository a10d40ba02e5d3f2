from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path
from unittest import mock

import pytest

from app.config import get_app_settings, get_scoring_config, load_env_files
from app.services.metrics_service import get_metrics_service
from scoring.config import ScoringConfigurationError


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Iterator[None]:
    get_scoring_config.cache_clear()
    get_app_settings.cache_clear()
    get_metrics_service.cache_clear()
    yield
    get_scoring_config.cache_clear()
    get_app_settings.cache_clear()
    get_metrics_service.cache_clear()


def test_defaults_without_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("SCORE_BENCHMARK_CPA", "SCORE_WEIGHT_PERFORMANCE", "SCORE_WEIGHT_DELIVERY"):
        monkeypatch.delenv(name, raising=False)

    config = get_scoring_config()

    assert config.benchmarks.cpa == 25.0
    assert config.weights.performance == 0.40


def test_benchmark_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SCORE_BENCHMARK_CPA", "40")

    assert get_scoring_config().benchmarks.cpa == 40.0


def test_unparseable_override_falls_back_to_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SCORE_BENCHMARK_ROAS", "lots")

    assert get_scoring_config().benchmarks.roas == 3.5


def test_weight_override_must_keep_sum_at_one(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SCORE_WEIGHT_PERFORMANCE", "0.5")

    with pytest.raises(ScoringConfigurationError):
        get_scoring_config()


def test_balanced_weight_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SCORE_WEIGHT_PERFORMANCE", "0.5")
    monkeypatch.setenv("SCORE_WEIGHT_DELIVERY", "0.15")

    weights = get_scoring_config().weights

    assert weights.performance == 0.5
    assert weights.delivery == 0.15


def test_log_level_is_upper_cased(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "debug")

    assert get_app_settings().log_level == "DEBUG"


def test_service_uses_environment_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SCORE_BENCHMARK_CTR", "3.0")

    explanation = get_metrics_service().explanation

    assert explanation.benchmarks["CTR"] == 3.0


def test_env_files_fill_missing_settings_only(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text(
        "# scoring overrides\nSCORE_BENCHMARK_CPM=\"20\"\nLOG_LEVEL=debug\nnot a pair\n",
        encoding="utf-8",
    )
    (tmp_path / ".env.local").write_text("SCORE_BENCHMARK_CPM=30\nSCORE_WEIGHT_CREATIVE='0.2'\n", encoding="utf-8")

    with mock.patch.dict(os.environ, {"LOG_LEVEL": "WARNING"}):
        os.environ.pop("SCORE_BENCHMARK_CPM", None)
        os.environ.pop("SCORE_WEIGHT_CREATIVE", None)

        load_env_files(tmp_path)

        assert os.environ["SCORE_BENCHMARK_CPM"] == "20"
        assert os.environ["SCORE_WEIGHT_CREATIVE"] == "0.2"
        assert os.environ["LOG_LEVEL"] == "WARNING"


def test_missing_env_files_are_ignored(tmp_path: Path) -> None:
    with mock.patch.dict(os.environ, {}):
        before = dict(os.environ)

        load_env_files(tmp_path)

        assert dict(os.environ) == before
