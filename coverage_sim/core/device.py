"""Device records: sensors (cameras, access points), wireless clients and network gear."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple, Union

from .errors import UnsupportedSensorError
from .geometry import Point
from ..protocols.wifi import BANDS, get_band


@dataclass
class Camera:
    """Fixed camera with a horizontal field-of-view cone."""

    id: str
    position: Point
    direction_degrees: float = 0.0
    fov_degrees: float = 90.0
    range_units: float = 10.0
    name: str = ""

    def __post_init__(self) -> None:
        if self.range_units <= 0:
            raise ValueError(f"Camera '{self.id}' range must be positive, got {self.range_units}")
        if not 0 < self.fov_degrees <= 360:
            raise ValueError(f"Camera '{self.id}' FOV must be in (0, 360], got {self.fov_degrees}")

    @property
    def label(self) -> str:
        return self.name or self.id


@dataclass(frozen=True)
class ChannelAssignment:
    """One radio network (SSID) of an access point on a given channel."""

    band: str
    channel: int
    network_id: str = ""

    def __post_init__(self) -> None:
        get_band(self.band)


@dataclass
class AccessPoint:
    """Wi-Fi access point.

    Parameters
    ----------
    transmit_power_dbm : float
        Conducted transmit power (dBm).
    band_ranges : dict
        Usable range per band label, e.g. ``{"2.4GHz": 30, "5GHz": 20}``.
        ``"6GHz"`` is optional.
    channels : tuple of ChannelAssignment
        Radio networks this AP serves.
    """

    id: str
    position: Point
    transmit_power_dbm: float = 20.0
    band_ranges: Dict[str, float] = field(default_factory=lambda: {"2.4GHz": 30.0, "5GHz": 20.0})
    channels: Tuple[ChannelAssignment, ...] = field(default_factory=tuple)
    name: str = ""

    def __post_init__(self) -> None:
        for band_name in self.band_ranges:
            get_band(band_name)
        self.channels = tuple(self.channels)

    @property
    def label(self) -> str:
        return self.name or self.id

    def bands(self) -> List[str]:
        """Supported bands in canonical order (2.4 → 5 → 6 GHz)."""
        return [name for name in BANDS if name in self.band_ranges]

    def network_key(self, index: int) -> str:
        assignment = self.channels[index]
        return f"{self.id}-{assignment.network_id or index}"


@dataclass
class WirelessClient:
    """A Wi-Fi device (typically a wireless camera) whose link quality is checked."""

    id: str
    position: Point
    name: str = ""
    wifi_capable: bool = True

    @property
    def label(self) -> str:
        return self.name or self.id


@dataclass
class NetworkDevice:
    id: str
    name: str = ""
    kind: str = "switch"


@dataclass
class Connection:
    """Cable between two network devices.

    ``bandwidth`` (Mbps) overrides the cable type's nominal rate when set.
    """

    id: str
    from_id: str
    to_id: str
    cable_type: str = "cat6"
    length: float = 0.0
    bandwidth: Optional[float] = None


@dataclass
class BandwidthRequirement:
    device_id: str
    required_mbps: float
    priority: str = "medium"


Sensor = Union[Camera, AccessPoint]


def split_sensors(sensors: Iterable[Sensor]) -> Tuple[List[Camera], List[AccessPoint]]:
    """Partition sensors by variant.

    Raises
    ------
    UnsupportedSensorError
        For any record that is neither a :class:`Camera` nor an :class:`AccessPoint`.
    """
    cameras: List[Camera] = []
    access_points: List[AccessPoint] = []
    for sensor in sensors:
        if isinstance(sensor, Camera):
            cameras.append(sensor)
        elif isinstance(sensor, AccessPoint):
            access_points.append(sensor)
        else:
            raise UnsupportedSensorError(f"Unsupported sensor type: {type(sensor).__name__}")
    return cameras, access_points
