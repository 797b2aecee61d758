"""Per-location distribution of sightings."""

from collections import Counter
from collections.abc import Iterable

from bugwatch.domain.sightings import DistributionEntry, Sighting
from bugwatch.services.timefmt import round_half_up

MIN_BAR_WIDTH = 6


def aggregate(sightings: Iterable[Sighting]) -> list[DistributionEntry]:
    """Count sightings per location, most reported first.

    Ties are ordered by location label so equal inputs always render the same.
    """
    counts = Counter(sighting.location for sighting in sightings)
    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return [
        DistributionEntry(location=location, count=count) for location, count in ranked
    ]


def bar_width(count: int, top_count: int) -> int:
    """Return the progress bar width (percent) relative to the top location."""
    top = top_count if top_count > 0 else 1
    return max(MIN_BAR_WIDTH, round_half_up(count / top * 100))
