"""Base radio band definition."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class Band:
    """A Wi-Fi frequency band as used by the signal model.

    Parameters
    ----------
    name : str
        Band label, e.g. ``"5GHz"``.
    frequency_mhz : float
        Representative frequency used for free-space path loss.
    candidate_channels : tuple of int
        Channels the channel optimiser may assign.
    overlap_span : int
        Channels within this many numbers of each other interfere.
    min_channel, max_channel : int
        Valid channel numbers for overlap calculations.
    distance_attenuation_db : float
        Extra loss per plan unit on top of the shared environmental term.
    """

    name: str
    frequency_mhz: float
    candidate_channels: Tuple[int, ...] = field(default_factory=tuple)
    overlap_span: int = 1
    min_channel: int = 1
    max_channel: int = 233
    distance_attenuation_db: float = 0.0

    def interfering_channels(self, channel: int) -> Tuple[int, ...]:
        """Channels that overlap *channel*, including *channel* itself."""
        lo = max(self.min_channel, channel - self.overlap_span)
        hi = min(self.max_channel, channel + self.overlap_span)
        return tuple(range(lo, hi + 1))
