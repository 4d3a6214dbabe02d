from .geometry import Point, distance, normalize_angle, angular_difference, bearing, segments_intersect
from .errors import AnalysisError, InvalidFloorPlanError, GridTooLargeError, UnsupportedSensorError, JobStateError
from .floorplan import Bounds, FloorElement, FloorPlan, Obstruction, ObstructionIndex, MATERIALS
from .device import (
    Camera, AccessPoint, ChannelAssignment, WirelessClient,
    NetworkDevice, Connection, BandwidthRequirement, Sensor, split_sensors,
)
from .grid import CoverageCell, WirelessCell, RasterGrid, QUALITY_TIERS, SIGNAL_FLOOR_DBM
from .config import AnalysisConfig
from .jobs import AnalysisJob, JobRegistry, JobStatus
from .engine import AnalysisEngine, AnalysisResult, WirelessAnalysisResult

__all__ = [
    "Point", "distance", "normalize_angle", "angular_difference", "bearing", "segments_intersect",
    "AnalysisError", "InvalidFloorPlanError", "GridTooLargeError", "UnsupportedSensorError", "JobStateError",
    "Bounds", "FloorElement", "FloorPlan", "Obstruction", "ObstructionIndex", "MATERIALS",
    "Camera", "AccessPoint", "ChannelAssignment", "WirelessClient",
    "NetworkDevice", "Connection", "BandwidthRequirement", "Sensor", "split_sensors",
    "CoverageCell", "WirelessCell", "RasterGrid", "QUALITY_TIERS", "SIGNAL_FLOOR_DBM",
    "AnalysisConfig", "AnalysisJob", "JobRegistry", "JobStatus",
    "AnalysisEngine", "AnalysisResult", "WirelessAnalysisResult",
]
