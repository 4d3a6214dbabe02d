"""FastAPI web app for floor-plan coverage, Wi-Fi and network analysis."""

import logging
from typing import Annotated, Dict, List, Literal, Optional, Union

from fastapi import BackgroundTasks, FastAPI
from pydantic import BaseModel, Field

from coverage_sim.core import (
    AccessPoint,
    AnalysisConfig,
    AnalysisEngine,
    AnalysisJob,
    BandwidthRequirement,
    Bounds,
    Camera,
    ChannelAssignment,
    Connection,
    FloorElement,
    FloorPlan,
    JobStateError,
    NetworkDevice,
    Point,
    WirelessClient,
)
from coverage_sim.propagation.pathloss import DEFAULT_MATERIAL_ATTENUATION_DB, MATERIAL_ATTENUATION

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("coverage_sim.app")

app = FastAPI(title="Sensor Coverage Analyzer")
engine = AnalysisEngine(AnalysisConfig())

# ============================================================================
# Data models
# ============================================================================

class PointModel(BaseModel):
    x: float
    y: float


class ElementModel(BaseModel):
    id: str = ""
    type: Literal["wall", "door", "window"] = "wall"
    start: PointModel
    end: PointModel
    material: str = "drywall"
    thickness: float = 0.1


class FloorPlanModel(BaseModel):
    id: str = ""
    width: float
    height: float
    elements: List[ElementModel] = []


class CameraModel(BaseModel):
    type: Literal["camera"] = "camera"
    id: str
    name: str = ""
    position: PointModel
    direction: float = 0.0
    fov: float = 90.0
    range: float = 10.0


class ChannelModel(BaseModel):
    band: str
    channel: int
    network_id: str = ""


class AccessPointModel(BaseModel):
    type: Literal["access_point"] = "access_point"
    id: str
    name: str = ""
    position: PointModel
    transmit_power: float = 20.0
    band_ranges: Dict[str, float] = {"2.4GHz": 30.0, "5GHz": 20.0}
    channels: List[ChannelModel] = []


SensorModel = Annotated[Union[CameraModel, AccessPointModel], Field(discriminator="type")]


class ClientModel(BaseModel):
    id: str
    name: str = ""
    position: PointModel
    wifi_capable: bool = True


class DeviceModel(BaseModel):
    id: str
    name: str = ""
    kind: str = "switch"


class ConnectionModel(BaseModel):
    id: str
    from_id: str
    to_id: str
    cable_type: str = "cat6"
    length: float = 0.0
    bandwidth: Optional[float] = None


class RequirementModel(BaseModel):
    device_id: str
    required_mbps: float
    priority: str = "medium"


class CoverageRequest(BaseModel):
    floor_plan: FloorPlanModel
    sensors: List[SensorModel] = []


class WirelessRequest(CoverageRequest):
    clients: List[ClientModel] = []


class NetworkRequest(BaseModel):
    devices: List[DeviceModel] = []
    connections: List[ConnectionModel] = []
    requirements: List[RequirementModel] = []


class ChannelRequest(BaseModel):
    sensors: List[SensorModel] = []


class JobRequest(BaseModel):
    """Body of a background job; which fields are used depends on the job kind."""

    floor_plan: Optional[FloorPlanModel] = None
    sensors: List[SensorModel] = []
    clients: List[ClientModel] = []
    devices: List[DeviceModel] = []
    connections: List[ConnectionModel] = []
    requirements: List[RequirementModel] = []


# ============================================================================
# Conversion to engine records
# ============================================================================

def _point(p: PointModel) -> Point:
    return Point(p.x, p.y)


def to_floor_plan(fp: FloorPlanModel) -> FloorPlan:
    elements = tuple(
        FloorElement(
            kind=e.type, start=_point(e.start), end=_point(e.end),
            material=e.material, thickness=e.thickness, id=e.id,
        )
        for e in fp.elements
    )
    return FloorPlan(bounds=Bounds(fp.width, fp.height), elements=elements, id=fp.id)


def to_sensor(s: SensorModel) -> Union[Camera, AccessPoint]:
    if isinstance(s, CameraModel):
        return Camera(
            id=s.id, position=_point(s.position), direction_degrees=s.direction,
            fov_degrees=s.fov, range_units=s.range, name=s.name,
        )
    return AccessPoint(
        id=s.id,
        position=_point(s.position),
        transmit_power_dbm=s.transmit_power,
        band_ranges=dict(s.band_ranges),
        channels=tuple(ChannelAssignment(c.band, c.channel, c.network_id) for c in s.channels),
        name=s.name,
    )


def to_clients(clients: List[ClientModel]) -> List[WirelessClient]:
    return [WirelessClient(c.id, _point(c.position), c.name, c.wifi_capable) for c in clients]


def to_network(req: Union[NetworkRequest, JobRequest]):
    devices = [NetworkDevice(d.id, d.name, d.kind) for d in req.devices]
    connections = [
        Connection(c.id, c.from_id, c.to_id, c.cable_type, c.length, c.bandwidth)
        for c in req.connections
    ]
    requirements = [BandwidthRequirement(r.device_id, r.required_mbps, r.priority) for r in req.requirements]
    return devices, connections, requirements


def _fail(exc: Exception) -> Dict:
    logger.warning("Request rejected: %s", exc)
    return {"ok": False, "error": str(exc)}


# ============================================================================
# API endpoints
# ============================================================================

@app.post("/api/analysis/coverage")
def coverage(req: CoverageRequest):
    try:
        result = engine.analyze_cameras(to_floor_plan(req.floor_plan), [to_sensor(s) for s in req.sensors])
    except (ValueError, TypeError) as e:
        return _fail(e)
    return {"ok": True, "result": result.to_dict()}


@app.post("/api/analysis/wireless")
def wireless(req: WirelessRequest):
    try:
        result = engine.analyze_wireless(
            to_floor_plan(req.floor_plan),
            [to_sensor(s) for s in req.sensors],
            to_clients(req.clients),
        )
    except (ValueError, TypeError) as e:
        return _fail(e)
    return {"ok": True, "result": result.to_dict()}


@app.post("/api/analysis/network")
def network(req: NetworkRequest):
    devices, connections, requirements = to_network(req)
    result = engine.analyze_network(devices, connections, requirements)
    return {"ok": True, "result": result.to_dict()}


@app.post("/api/channels/optimize")
def channels(req: ChannelRequest):
    try:
        plan = engine.optimize_channels([to_sensor(s) for s in req.sensors])
    except (ValueError, TypeError) as e:
        return _fail(e)
    return {"ok": True, "result": plan}


def _run_job(job: AnalysisJob, req: JobRequest) -> None:
    """Background worker; failures are recorded on the job itself."""
    if job.is_finished:
        return
    try:
        if job.kind == "network":
            args = to_network(req)
        else:
            args = (to_floor_plan(req.floor_plan), [to_sensor(s) for s in req.sensors])
    except (ValueError, TypeError) as e:
        try:
            job.start()
        except JobStateError:
            logger.info("Job %s cancelled before it started", job.id)
            return
        job.fail(str(e))
        logger.warning("Job %s rejected: %s", job.id, e)
        return

    try:
        if job.kind == "network":
            engine.analyze_network(*args, job=job)
        elif job.kind == "coverage":
            engine.analyze_cameras(*args, job=job)
        else:
            engine.analyze_wireless(*args, to_clients(req.clients), job=job)
    except JobStateError:
        # Cancelled between the check above and the engine starting it
        logger.info("Job %s cancelled before it started", job.id)
    except (ValueError, TypeError) as e:
        logger.warning("Job %s failed: %s", job.id, e)


@app.post("/api/jobs/{kind}")
def submit_job(kind: Literal["coverage", "wireless", "network"], req: JobRequest, background: BackgroundTasks):
    if kind != "network" and req.floor_plan is None:
        return {"ok": False, "error": f"A '{kind}' job needs a floor_plan"}
    job = engine.submit(kind)
    background.add_task(_run_job, job, req)
    return {"ok": True, "result": job.to_dict()}


@app.get("/api/jobs/{job_id}")
def job_status(job_id: str):
    job = engine.jobs.get(job_id)
    if job is None:
        return {"ok": False, "error": f"Unknown job '{job_id}'"}
    body = job.to_dict()
    if job.result is not None:
        body["result"] = job.result.to_dict()
    return {"ok": True, "result": body}


@app.delete("/api/jobs/{job_id}")
def cancel_job(job_id: str):
    if not engine.jobs.cancel(job_id):
        return {"ok": False, "error": f"Job '{job_id}' is unknown or already finished"}
    return {"ok": True, "result": {"id": job_id, "status": "cancelled"}}


@app.get("/api/materials")
def materials():
    return {
        "ok": True,
        "result": {"attenuation_db": MATERIAL_ATTENUATION, "default_db": DEFAULT_MATERIAL_ATTENUATION_DB},
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=8001)
