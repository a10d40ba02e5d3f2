"""
scoring/config.py

Immutable benchmark and weight configuration for the performance score.

The configuration is validated once at construction; an invalid
configuration raises :class:`ScoringConfigurationError`. This is the only
error the metrics pipeline raises on its own.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

SCORE_MODEL_VERSION = "score_model_v2"


class ScoringConfigurationError(ValueError):
    """
    Raised when scoring benchmarks or pillar weights are invalid.
    """

    def __init__(self, message: str, *, problems: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.message = message
        self.problems = problems

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message, "problems": list(self.problems)}


@dataclass(frozen=True)
class ScoringBenchmarks:
    """
    Industry reference values the raw metrics are normalized against.
    """

    ctr: float = 1.5
    """Click-through rate benchmark, in percent."""

    cpa: float = 25.0
    """Cost-per-acquisition benchmark, in account currency."""

    roas: float = 3.5
    """Return-on-ad-spend benchmark, as a multiple."""

    cpm: float = 15.0
    """Cost-per-mille benchmark, in account currency."""

    frequency_fatigue_threshold: float = 3.5
    """Mean frequency above which the delivery pillar is penalised."""


@dataclass(frozen=True)
class PillarWeights:
    """
    Relative weight of each pillar in the composite score. Must sum to 1.0.
    """

    performance: float = 0.40
    delivery: float = 0.25
    creative: float = 0.20
    structure: float = 0.15

    def total(self) -> float:
        return self.performance + self.delivery + self.creative + self.structure

    def as_percentages(self) -> dict[str, str]:
        return {
            "Performance": f"{self.performance * 100:.0f}%",
            "Delivery": f"{self.delivery * 100:.0f}%",
            "Creative": f"{self.creative * 100:.0f}%",
            "Structure": f"{self.structure * 100:.0f}%",
        }


@dataclass(frozen=True)
class ScoringModelConfig:
    """
    Complete scoring model configuration: benchmarks, weights and version.

    Raises
    ------
    ScoringConfigurationError
        When a benchmark is not a positive finite number, a weight is
        negative, or the weights do not sum to 1.0.
    """

    benchmarks: ScoringBenchmarks = field(default_factory=ScoringBenchmarks)
    weights: PillarWeights = field(default_factory=PillarWeights)
    version: str = SCORE_MODEL_VERSION

    def __post_init__(self) -> None:
        problems: list[str] = []

        for name in ("ctr", "cpa", "roas", "cpm", "frequency_fatigue_threshold"):
            value = getattr(self.benchmarks, name)
            if not math.isfinite(value) or value <= 0:
                problems.append(f"benchmark '{name}' must be a positive number, got {value!r}")

        for name in ("performance", "delivery", "creative", "structure"):
            value = getattr(self.weights, name)
            if not math.isfinite(value) or value < 0:
                problems.append(f"weight '{name}' must be a non-negative number, got {value!r}")

        total = self.weights.total()
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            problems.append(f"pillar weights must sum to 1.0, got {total:.6f}")

        if problems:
            raise ScoringConfigurationError(
                "Invalid scoring model configuration.",
                problems=tuple(problems),
            )

    def explanation(self) -> dict[str, Any]:
        """
        Static description of the weighting model for "how was this scored" views.
        """

        b = self.benchmarks
        return {
            "version": self.version,
            "steps": [
                "Normalize raw metrics against benchmarks",
                "Score four pillars: Performance, Delivery, Creative, Structure",
                "Apply low-volume, fatigue and tracking penalties",
                "Apply weighted sum and clamp final result between 0-100",
            ],
            "weights": self.weights.as_percentages(),
            "benchmarks": {
                "CTR": b.ctr,
                "CPA": b.cpa,
                "ROAS": b.roas,
                "CPM": b.cpm,
                "FREQUENCY_FATIGUE_THRESHOLD": b.frequency_fatigue_threshold,
            },
            "normalization": (
                "Linear ratio of actual vs benchmark (inverted for cost metrics), "
                "each pillar clamped to 10-100"
            ),
            "penalties": [
                "Performance x0.6 when conversions < 5",
                f"Delivery x0.8 when mean frequency > {b.frequency_fatigue_threshold:g}",
                "Structure -40 when spend > 2000 and conversions < 2",
                "Final score -15 when conversions < 10",
            ],
            "data_rules": [
                "Row-level data only",
                "Respects active date filters",
                "Excludes summary/total rows",
                "Granular purchases + leads take precedence over generic results per row",
            ],
            "confidence_rule": "High confidence requires >15 conversions; Medium requires >5.",
        }


DEFAULT_SCORING_CONFIG = ScoringModelConfig()
