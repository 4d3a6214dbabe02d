"""Co-channel / adjacent-channel interference and channel planning."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import replace
from typing import Dict, Iterable, List, Mapping, Sequence, Set, Tuple

from ..core.device import AccessPoint
from ..protocols.wifi import get_band

logger = logging.getLogger(__name__)

ChannelKey = Tuple[str, int]

INTERFERENCE_PER_AP = 0.1
MAX_INTERFERENCE = 1.0


def build_channel_map(access_points: Iterable[AccessPoint]) -> Dict[ChannelKey, List[str]]:
    """Group access-point ids by ``(band, channel)``; each AP listed once per channel."""
    channel_map: Dict[ChannelKey, List[str]] = {}
    for ap in access_points:
        for assignment in ap.channels:
            ids = channel_map.setdefault((assignment.band, assignment.channel), [])
            if ap.id not in ids:
                ids.append(ap.id)
    return channel_map


def cell_interference(
    sensor_ids: Iterable[str],
    access_points: Mapping[str, AccessPoint],
    channel_map: Mapping[ChannelKey, Sequence[str]],
) -> float:
    """Interference score (0–1) for a cell served by *sensor_ids*.

    Every channel in use by a serving AP contributes 0.1 per AP found on
    any channel overlapping it. On the serving channel itself one AP (the
    server) is not counted.
    """
    in_use: Set[ChannelKey] = set()
    for ap_id in sensor_ids:
        ap = access_points.get(ap_id)
        if ap is None:
            continue
        in_use.update((a.band, a.channel) for a in ap.channels)

    total = 0.0
    for band_name, channel in sorted(in_use):
        band = get_band(band_name)
        for other in band.interfering_channels(channel):
            count = len(channel_map.get((band_name, other), ()))
            if other == channel:
                count = max(count - 1, 0)
            total += count * INTERFERENCE_PER_AP
    return min(total, MAX_INTERFERENCE)


def optimize_channels(access_points: Sequence[AccessPoint]) -> Dict[str, int]:
    """Assign each AP network the least-used candidate channel of its band.

    Usage is a global count of AP networks per ``(band, channel)``; it does
    not weigh how close the APs are to each other. Networks are visited in
    input order, the network being placed is not counted against itself,
    and each placement updates the counts for the networks after it. Ties
    go to the earlier candidate.

    Returns
    -------
    dict
        ``{"<ap id>-<network id or index>": channel}``
    """
    usage: Counter = Counter()
    for ap in access_points:
        for assignment in ap.channels:
            usage[(assignment.band, assignment.channel)] += 1

    plan: Dict[str, int] = {}
    for ap in access_points:
        for index, assignment in enumerate(ap.channels):
            band = get_band(assignment.band)
            current = (assignment.band, assignment.channel)
            usage[current] -= 1

            best = band.candidate_channels[0]
            best_usage = None
            for candidate in band.candidate_channels:
                count = usage[(assignment.band, candidate)]
                if best_usage is None or count < best_usage:
                    best, best_usage = candidate, count

            usage[(assignment.band, best)] += 1
            plan[ap.network_key(index)] = best
            if best != assignment.channel:
                logger.debug("%s: channel %d -> %d", ap.network_key(index), assignment.channel, best)

    return plan


def apply_channel_plan(access_points: Sequence[AccessPoint], plan: Mapping[str, int]) -> List[AccessPoint]:
    """Copies of *access_points* with the channels from *plan* applied."""
    updated: List[AccessPoint] = []
    for ap in access_points:
        channels = tuple(
            replace(a, channel=plan.get(ap.network_key(i), a.channel)) for i, a in enumerate(ap.channels)
        )
        updated.append(replace(ap, channels=channels, band_ranges=dict(ap.band_ranges)))
    return updated
