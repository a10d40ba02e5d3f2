"""
scoring/normalizer.py

Deterministic benchmark normalization utilities for score inputs.
"""


class ScoreNormalizer:
    """Provides stateless normalization methods for scoring inputs.

    All methods are deterministic and never return NaN or infinity.
    No external dependencies, state, or side effects.
    """

    def benchmark_ratio(self, actual: float, benchmark: float) -> float:
        """Ratio of a higher-is-better metric to its benchmark.

        Args:
            actual: Observed metric value (e.g. CTR, ROAS).
            benchmark: Positive benchmark value.

        Returns:
            actual / benchmark, or 0.0 when the benchmark is not positive.
        """
        if benchmark <= 0:
            return 0.0
        return actual / benchmark

    def inverse_benchmark_ratio(self, actual: float, benchmark: float) -> float:
        """Ratio of a lower-is-better cost metric to its benchmark.

        Returns 0.0 for a zero cost rather than an unbounded ratio. Callers
        that treat free results as the best case handle that before
        calling.

        Args:
            actual: Observed cost metric (e.g. CPA, CPM).
            benchmark: Benchmark cost value.

        Returns:
            benchmark / actual, or 0.0 when actual is not positive.
        """
        if actual <= 0:
            return 0.0
        return benchmark / actual

    def clamp(self, value: float, min_value: float, max_value: float) -> float:
        """Bound a pillar or composite value to [min_value, max_value]."""
        return max(min_value, min(value, max_value))
