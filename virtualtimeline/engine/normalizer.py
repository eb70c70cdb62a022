"""Collapse raw hidden intervals into a sorted, disjoint partition."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence

from virtualtimeline.core.models import Interval

logger = logging.getLogger(__name__)


def normalize_intervals(
    raw: Iterable[tuple[float, float]],
    real_duration: float | None = None,
) -> list[Interval]:
    """Reduce raw ``(a, b)`` pairs to a sorted, strictly disjoint partition.

    Each pair is order-normalized and clamped to ``[0, real_duration]``
    (``[0, inf)`` when no duration is given). Pairs collapsing to zero length
    are dropped. Touching intervals are fused, since an instant of gap carries
    no virtual time.
    """
    upper = math.inf if real_duration is None else max(0.0, real_duration)

    clamped: list[tuple[float, float]] = []
    dropped = 0
    for a, b in raw:
        start = max(0.0, min(a, b))
        end = min(upper, max(a, b))
        if end <= start:
            dropped += 1
            continue
        clamped.append((start, end))

    clamped.sort(key=lambda pair: pair[0])

    merged: list[list[float]] = []
    for start, end in clamped:
        if merged and start <= merged[-1][1]:
            merged[-1][1] = max(merged[-1][1], end)
        else:
            merged.append([start, end])

    logger.debug(
        "Normalized %d raw intervals into %d (dropped %d degenerate)",
        len(clamped) + dropped,
        len(merged),
        dropped,
    )
    return [Interval(start=start, end=end) for start, end in merged]


def clamp_partition(
    partition: Sequence[Interval], real_duration: float
) -> list[Interval]:
    """Clip a normalized partition to ``[0, real_duration]``."""
    upper = max(0.0, real_duration)
    clipped = []
    for interval in partition:
        if interval.start >= upper:
            break
        piece = interval.clip(upper)
        if piece is not None:
            clipped.append(piece)
    return clipped


def total_length(partition: Iterable[Interval]) -> float:
    """Sum of interval lengths."""
    return sum(interval.length for interval in partition)
