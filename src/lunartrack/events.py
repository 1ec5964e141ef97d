"""Rise, set, and culmination detection over an already-sampled sequence.

Detection is a single left-to-right scan with no interpolation, so reported
instants are sampled approximations whose precision is bounded by the
sampling interval.
"""

from collections.abc import Sequence

from lunartrack.models import HorizonCrossing, TrackPoint


def find_rise_point(points: Sequence[TrackPoint]) -> TrackPoint | None:
    """Return the first sample that is above the horizon right after one below it."""
    for prev, curr in zip(points, points[1:]):
        if not prev.above_horizon and curr.above_horizon:
            return curr
    return None


def find_set_point(points: Sequence[TrackPoint]) -> TrackPoint | None:
    """Return the last above-horizon sample before the first descent below it."""
    for prev, curr in zip(points, points[1:]):
        if prev.above_horizon and not curr.above_horizon:
            return prev
    return None


def find_transit_point(points: Sequence[TrackPoint]) -> TrackPoint | None:
    """Return the highest above-horizon sample, earliest one on ties."""
    best: TrackPoint | None = None
    for point in points:
        if not point.above_horizon:
            continue
        # strict comparison keeps the first maximum
        if best is None or point.altitude_deg > best.altitude_deg:
            best = point
    return best


def horizon_crossings(points: Sequence[TrackPoint]) -> tuple[HorizonCrossing, ...]:
    """Return every rise and set transition in order.

    Uses the same conventions as the single-event finders: a rise reports the
    first sample above the horizon, a set reports the last sample above it.
    Useful when the window contains more than one pass.

    Args:
        points: Temporally ordered samples.

    Returns:
        Tuple of HorizonCrossing records in sample order.
    """
    crossings: list[HorizonCrossing] = []
    for prev, curr in zip(points, points[1:]):
        if not prev.above_horizon and curr.above_horizon:
            crossings.append(HorizonCrossing(kind="rise", point=curr))
        elif prev.above_horizon and not curr.above_horizon:
            crossings.append(HorizonCrossing(kind="set", point=prev))
    return tuple(crossings)
