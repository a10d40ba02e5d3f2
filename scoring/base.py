"""
scoring/base.py

Abstract base interface for campaign performance scoring models.
All scoring model implementations must inherit from BaseScoringModel.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from scoring.model import ScoreOutcome


class BaseScoringModel(ABC):
    """Abstract base class for performance scoring models.

    Defines the interface that all scoring model implementations
    must follow. Enforces a consistent compute contract across
    different weighting strategies.
    """

    @abstractmethod
    def compute(self, inputs: dict) -> "ScoreOutcome":
        """Compute a composite score from derived dataset metrics.

        Args:
            inputs: A dictionary of derived metrics (spend, conversions,
                    ctr, cpa, cpm, roas, frequency). Missing keys count
                    as zero.

        Returns:
            A ScoreOutcome holding the 0-100 composite value and the
            unrounded pillar sub-scores.

        Raises:
            NotImplementedError: If the subclass does not implement
                                 this method.
        """
        raise NotImplementedError("Subclasses must implement compute()")
