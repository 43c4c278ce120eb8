"""
Benchmark metrics.
"""

# Weights of the recommended score; tunable policy, not derived from data
SPEED_WEIGHT = 0.4
COMPRESSION_WEIGHT = 0.6


def calculate_reduction(original: float, compressed: float) -> float:
    """Size reduction in percent; negative when the output grew, 0 for empty input"""
    if original == 0:
        return 0
    return (original - compressed) / original * 100


def calculate_recommended_score(time_ms: float, reduction_percent: float) -> float:
    """
    Weighted score balancing speed and compression ratio.

    The speed part is ``1000 / (time_ms + 1)`` so that a zero-time run stays
    finite.
    """
    speed_score = 1000 / (time_ms + 1)
    return speed_score * SPEED_WEIGHT + reduction_percent * COMPRESSION_WEIGHT
