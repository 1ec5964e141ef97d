"""Partition a sampled track into above/below-horizon runs."""

from collections.abc import Iterator, Sequence
from itertools import groupby

from lunartrack.models import HorizonRuns, TrackPoint


def iter_runs(
    points: Sequence[TrackPoint],
) -> Iterator[tuple[bool, tuple[TrackPoint, ...]]]:
    """Yield (above_horizon, run) pairs in their original order."""
    for above, run in groupby(points, key=lambda p: p.above_horizon):
        yield above, tuple(run)


def segment(points: Sequence[TrackPoint]) -> HorizonRuns:
    """Split points into maximal contiguous runs sharing the same visibility.

    Single-point runs are kept. Interleaving above_runs and below_runs back in
    their original order reproduces points exactly.

    Args:
        points: Temporally ordered samples.

    Returns:
        HorizonRuns with above-horizon and below-horizon runs, each in order.
    """
    above_runs: list[tuple[TrackPoint, ...]] = []
    below_runs: list[tuple[TrackPoint, ...]] = []
    for above, run in iter_runs(points):
        (above_runs if above else below_runs).append(run)
    return HorizonRuns(above_runs=tuple(above_runs), below_runs=tuple(below_runs))
