"""Wi-Fi band presets (802.11 b/g/n/ax at 2.4, 5 and 6 GHz)."""

from __future__ import annotations

from typing import Dict

from .base import Band

WIFI_2_4GHZ = Band(
    name="2.4GHz",
    frequency_mhz=2400.0,
    candidate_channels=(1, 6, 11),
    overlap_span=4,
    min_channel=1,
    max_channel=14,
    distance_attenuation_db=0.0,
)

WIFI_5GHZ = Band(
    name="5GHz",
    frequency_mhz=5000.0,
    candidate_channels=(36, 40, 44, 48, 149, 153, 157, 161),
    overlap_span=1,
    distance_attenuation_db=0.05,
)

WIFI_6GHZ = Band(
    name="6GHz",
    frequency_mhz=6000.0,
    candidate_channels=(1, 5, 9, 13, 17, 21, 25, 29),
    overlap_span=1,
    distance_attenuation_db=0.08,
)

# Iteration order matters: on equal signal the earlier band wins a cell.
BANDS: Dict[str, Band] = {
    WIFI_2_4GHZ.name: WIFI_2_4GHZ,
    WIFI_5GHZ.name: WIFI_5GHZ,
    WIFI_6GHZ.name: WIFI_6GHZ,
}


def get_band(name: str) -> Band:
    """Look up a band by label.

    Raises
    ------
    ValueError
        If *name* is not a known band.
    """
    band = BANDS.get(name)
    if band is None:
        raise ValueError(f"Unknown band '{name}'. Choose from: " + ", ".join(BANDS))
    return band
