"""
Location Clusterer - Group activities by rounded start coordinates.

Clustering is plain coordinate rounding (4 digits is roughly 11 m), not a
proximity search: two activities share a cluster iff both their rounded
latitude and rounded longitude are equal.
"""
from typing import Dict, Iterable, List, Tuple

from app.core.errors import validate_range
from app.core.logging import get_logger
from app.core.numbers import round_half_up
from app.models.activity import Activity
from app.models.stats import LocationCluster

logger = get_logger(__name__)

MAX_PRECISION_DIGITS = 8


def cluster_by_location(
    activities: Iterable[Activity],
    precision_digits: int = 4,
) -> List[LocationCluster]:
    """
    Cluster activities by start location.

    Activities without start coordinates are skipped. Clusters are ordered
    by run_count descending; equal counts keep first-seen order.

    Raises:
        ValidationError: precision_digits outside 0..8
    """
    validate_range(precision_digits, "precision_digits", 0, MAX_PRECISION_DIGITS)

    groups: Dict[Tuple[float, float], List[float]] = {}
    skipped = 0
    for activity in activities:
        if activity.start_coordinates is None:
            skipped += 1
            continue
        lat, lon = activity.start_coordinates
        key = (
            round_half_up(lat, precision_digits),
            round_half_up(lon, precision_digits),
        )
        groups.setdefault(key, []).append(activity.distance_meters)

    clusters = [
        LocationCluster(
            lat=lat,
            lon=lon,
            run_count=len(distances),
            total_distance_m=sum(distances),
            avg_distance_m=sum(distances) / len(distances),
        )
        for (lat, lon), distances in groups.items()
    ]
    clusters.sort(key=lambda c: c.run_count, reverse=True)

    logger.debug(
        "Clustered activities by location",
        clusters=len(clusters),
        skipped_without_coordinates=skipped,
        precision_digits=precision_digits,
    )

    return clusters
