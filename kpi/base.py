"""
kpi/base.py

Abstract base class for advertising KPI formula implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class BaseKPIFormula(ABC):
    """
    Contract for KPI formula implementations.

    Subclasses receive a plain dictionary of summed delivery figures and
    must return a plain dictionary of derived metric values. Every
    returned value is a finite float: a ratio whose denominator is zero
    takes a documented neutral default instead of NaN or infinity.

    No I/O, no logging, and no side effects are permitted inside
    :meth:`calculate`.
    """

    @abstractmethod
    def calculate(self, inputs: dict[str, Any]) -> dict[str, float]:
        """
        Compute KPI metrics from *inputs* and return a result dictionary.

        Parameters
        ----------
        inputs:
            Summed numerical values required by the formula. Missing keys
            are treated as zero.

        Returns
        -------
        dict[str, float]
            Computed metrics keyed by metric name.
        """
