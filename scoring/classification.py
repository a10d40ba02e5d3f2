"""
scoring/classification.py

Threshold classification of composite scores and conversion volume.
Contains no scoring math.
"""

# ---------------------------------------------------------------------------
# Thresholds are exclusive lower bounds, checked from the top down
# ---------------------------------------------------------------------------

_RATING_THRESHOLDS: tuple[tuple[int, str], ...] = (
    (85, "Excellent"),
    (70, "Good"),
    (40, "Average"),
)

_CONFIDENCE_THRESHOLDS: tuple[tuple[float, str], ...] = (
    (15, "High"),
    (5,  "Medium"),
)


def classify_rating(score: int) -> str:
    """Map an integer score in [0, 100] to a rating label.

    Args:
        score: Composite performance score.

    Returns:
        One of "Excellent", "Good", "Average", or "Critical".
    """
    for threshold, label in _RATING_THRESHOLDS:
        if score > threshold:
            return label
    return "Critical"


def classify_confidence(conversions: float) -> str:
    """Map total blended conversions to a confidence label.

    Args:
        conversions: Dataset-wide blended conversion count.

    Returns:
        One of "High", "Medium", or "Low".
    """
    for threshold, label in _CONFIDENCE_THRESHOLDS:
        if conversions > threshold:
            return label
    return "Low"
