"""
scoring/model.py

Four-pillar campaign performance model implementing BaseScoringModel.
Computes a weighted, benchmark-normalized score from derived ad metrics.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from scoring.base import BaseScoringModel
from scoring.config import DEFAULT_SCORING_CONFIG, ScoringModelConfig
from scoring.normalizer import ScoreNormalizer

_MAX_DRIVERS = 4


@dataclass(frozen=True)
class PillarScores:
    """Unrounded pillar sub-scores, each in [0, 100]."""

    performance: float = 0.0
    delivery: float = 0.0
    creative: float = 0.0
    structure: float = 0.0


@dataclass(frozen=True)
class ScoreOutcome:
    """Composite score plus the signals that shaped it."""

    value: int
    pillars: PillarScores
    low_volume_penalty: bool = False
    fatigue_penalty: bool = False
    tracking_penalty: bool = False
    volume_penalty: bool = False


class PerformanceScoreModel(BaseScoringModel):
    """Weighted Performance / Delivery / Creative / Structure model.

    Pillar rules:
        - Performance: benchmark CPA / CPA, averaged with ROAS vs
          benchmark when ROAS is positive; x0.6 under 5 conversions.
        - Delivery: half CPM efficiency, half CTR vs benchmark;
          x0.8 when mean frequency exceeds the fatigue threshold.
        - Creative: CTR vs benchmark.
        - Structure: conversion volume tiers with a tracking-failure
          deduction for heavy spend with almost no conversions.

    The weighted sum is rounded half-up, reduced by 15 points under
    10 conversions, and floored at 0.
    """

    PILLAR_MIN: float = 10.0
    PILLAR_MAX: float = 100.0

    NO_CONVERSION_PERFORMANCE: float = 20.0
    CPA_SCALE: float = 90.0
    LOW_VOLUME_CONVERSIONS: float = 5.0
    LOW_VOLUME_FACTOR: float = 0.6
    FATIGUE_FACTOR: float = 0.8

    STRUCTURE_TIERS: tuple[tuple[float, float], ...] = ((20.0, 95.0), (5.0, 70.0))
    STRUCTURE_BASE: float = 40.0
    TRACKING_SPEND_THRESHOLD: float = 2000.0
    TRACKING_CONVERSION_THRESHOLD: float = 2.0
    TRACKING_PENALTY: float = 40.0

    VOLUME_PENALTY_CONVERSIONS: float = 10.0
    VOLUME_PENALTY: int = 15

    def __init__(self, config: ScoringModelConfig | None = None) -> None:
        """
        Args:
            config: Validated benchmarks and weights. Defaults to the
                    standard model configuration.
        """
        self._config = config or DEFAULT_SCORING_CONFIG
        self._normalizer = ScoreNormalizer()

    @property
    def config(self) -> ScoringModelConfig:
        return self._config

    def compute(self, inputs: dict) -> ScoreOutcome:
        """Score one dataset from its derived metrics.

        Args:
            inputs: Dictionary with any of ``spend``, ``conversions``,
                ``impressions``, ``ctr``, ``cpa``, ``cpm``, ``roas`` and
                ``frequency``. Missing keys default to 0.0.

        Returns:
            A ScoreOutcome with the 0-100 composite value.
        """
        spend: float = inputs.get("spend", 0.0)
        conversions: float = inputs.get("conversions", 0.0)
        impressions: float = inputs.get("impressions", 0.0)
        ctr: float = inputs.get("ctr", 0.0)
        cpa: float = inputs.get("cpa", 0.0)
        cpm: float = inputs.get("cpm", 0.0)
        roas: float = inputs.get("roas", 0.0)
        frequency: float = inputs.get("frequency", 0.0)

        performance, low_volume = self._performance(conversions, cpa, roas)
        delivery, fatigued = self._delivery(impressions, cpm, ctr, frequency)
        creative = self._creative(ctr)
        structure, tracking_failure = self._structure(spend, conversions)

        pillars = PillarScores(
            performance=performance,
            delivery=delivery,
            creative=creative,
            structure=structure,
        )

        w = self._config.weights
        weighted_sum = (
            performance * w.performance
            + delivery * w.delivery
            + creative * w.creative
            + structure * w.structure
        )
        value = int(math.floor(weighted_sum + 0.5))

        volume_penalty = conversions < self.VOLUME_PENALTY_CONVERSIONS
        if volume_penalty:
            value -= self.VOLUME_PENALTY
        value = int(self._normalizer.clamp(value, 0, 100))

        return ScoreOutcome(
            value=value,
            pillars=pillars,
            low_volume_penalty=low_volume,
            fatigue_penalty=fatigued,
            tracking_penalty=tracking_failure,
            volume_penalty=volume_penalty,
        )

    def drivers(self, inputs: dict, outcome: ScoreOutcome) -> list[str]:
        """Short statements explaining the main score movers, at most four."""
        b = self._config.benchmarks
        roas: float = inputs.get("roas", 0.0)
        cpa: float = inputs.get("cpa", 0.0)
        frequency: float = inputs.get("frequency", 0.0)
        conversions: float = inputs.get("conversions", 0.0)

        drivers: list[str] = []
        if outcome.tracking_penalty:
            drivers.append("Possible conversion tracking failure (high spend, almost no conversions)")
        if roas >= b.roas:
            drivers.append(f"Strong ROAS efficiency ({roas:.2f}x)")
        if conversions > 0 and 0 < cpa <= b.cpa:
            drivers.append(f"Efficient CPA ({cpa:.2f})")
        if outcome.pillars.creative >= 80:
            drivers.append("High ad engagement")
        if outcome.fatigue_penalty:
            drivers.append(f"Creative fatigue risk (frequency {frequency:.1f})")
        if outcome.volume_penalty:
            drivers.append(f"Low conversion volume ({conversions:g} conversions)")
        return drivers[:_MAX_DRIVERS]

    # ------------------------------------------------------------------
    # Pillars
    # ------------------------------------------------------------------

    def _performance(self, conversions: float, cpa: float, roas: float) -> tuple[float, bool]:
        n = self._normalizer
        b = self._config.benchmarks

        if conversions > 0 and cpa <= 0:
            # free conversions saturate the pillar
            score = self.PILLAR_MAX
        elif conversions > 0:
            score = n.clamp(
                n.inverse_benchmark_ratio(cpa, b.cpa) * self.CPA_SCALE,
                self.PILLAR_MIN,
                self.PILLAR_MAX,
            )
        else:
            score = self.NO_CONVERSION_PERFORMANCE

        if roas > 0:
            roas_score = n.clamp(n.benchmark_ratio(roas, b.roas) * 100.0, 0.0, self.PILLAR_MAX)
            score = (score + roas_score) / 2.0

        low_volume = conversions < self.LOW_VOLUME_CONVERSIONS
        if low_volume:
            score *= self.LOW_VOLUME_FACTOR
        return score, low_volume

    def _delivery(
        self, impressions: float, cpm: float, ctr: float, frequency: float
    ) -> tuple[float, bool]:
        n = self._normalizer
        b = self._config.benchmarks

        if impressions > 0 and cpm <= 0:
            # free reach: the CPM term alone hits the cap
            score = self.PILLAR_MAX
        else:
            score = n.clamp(
                n.inverse_benchmark_ratio(cpm, b.cpm) * 50.0 + n.benchmark_ratio(ctr, b.ctr) * 50.0,
                self.PILLAR_MIN,
                self.PILLAR_MAX,
            )
        fatigued = frequency > b.frequency_fatigue_threshold
        if fatigued:
            score *= self.FATIGUE_FACTOR
        return score, fatigued

    def _creative(self, ctr: float) -> float:
        n = self._normalizer
        return n.clamp(
            n.benchmark_ratio(ctr, self._config.benchmarks.ctr) * 100.0,
            self.PILLAR_MIN,
            self.PILLAR_MAX,
        )

    def _structure(self, spend: float, conversions: float) -> tuple[float, bool]:
        score = self.STRUCTURE_BASE
        for threshold, tier_score in self.STRUCTURE_TIERS:
            if conversions > threshold:
                score = tier_score
                break

        tracking_failure = (
            spend > self.TRACKING_SPEND_THRESHOLD
            and conversions < self.TRACKING_CONVERSION_THRESHOLD
        )
        if tracking_failure:
            score -= self.TRACKING_PENALTY
        return max(0.0, score), tracking_failure
