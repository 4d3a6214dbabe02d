"""Indoor Wi-Fi signal model: FSPL, wall penetration and environmental losses."""

from __future__ import annotations

from typing import Dict, Iterable

import numpy as np

from ..core.floorplan import Obstruction
from ..core.grid import SIGNAL_FLOOR_DBM
from ..protocols.base import Band

# ---------------------------------------------------------------------------
# Wall penetration loss (dB) per material and band
# ---------------------------------------------------------------------------
MATERIAL_ATTENUATION: Dict[str, Dict[str, float]] = {
    "drywall": {"2.4GHz": 3.0, "5GHz": 4.0, "6GHz": 5.0},
    "brick": {"2.4GHz": 10.0, "5GHz": 15.0, "6GHz": 20.0},
    "concrete": {"2.4GHz": 15.0, "5GHz": 25.0, "6GHz": 35.0},
    "metal": {"2.4GHz": 25.0, "5GHz": 30.0, "6GHz": 35.0},
    "glass": {"2.4GHz": 2.0, "5GHz": 3.0, "6GHz": 4.0},
    "wood": {"2.4GHz": 4.0, "5GHz": 6.0, "6GHz": 8.0},
}

DEFAULT_MATERIAL_ATTENUATION_DB = 5.0

MIN_DISTANCE = 1e-6


def free_space_path_loss(distance: np.ndarray | float, freq_mhz: float) -> np.ndarray:
    """Free-Space Path Loss.

    FSPL(dB) = 20·log10(d) + 20·log10(f) + 32.45

    *d* is in plan units, *f* in MHz. Distances are clipped at 1e-6 so a
    receiver on top of the transmitter stays finite.
    """
    d = np.clip(np.asarray(distance, dtype=np.float64), MIN_DISTANCE, None)
    return 20.0 * np.log10(d) + 20.0 * np.log10(freq_mhz) + 32.45  # type: ignore[return-value]


def material_attenuation(material: str, band: str) -> float:
    """Penetration loss (dB) of one wall of *material* at *band*."""
    return MATERIAL_ATTENUATION.get(material.lower(), {}).get(band, DEFAULT_MATERIAL_ATTENUATION_DB)


def environmental_attenuation(distance: float, band: Band) -> float:
    """Multipath / clutter loss: ``min(0.1·d, 10)`` plus a band-specific ``k·d`` term."""
    return min(distance * 0.1, 10.0) + distance * band.distance_attenuation_db


def received_signal_dbm(
    tx_power_dbm: float,
    distance: float,
    band: Band,
    obstructions: Iterable[Obstruction] = (),
) -> float:
    """Received power at *distance* after free-space, wall and clutter losses.

    Never returns less than the -100 dBm floor.
    """
    signal = tx_power_dbm - float(free_space_path_loss(distance, band.frequency_mhz))
    for obs in obstructions:
        signal -= material_attenuation(obs.material, band.name)
    signal -= environmental_attenuation(distance, band)
    return max(SIGNAL_FLOOR_DBM, signal)
