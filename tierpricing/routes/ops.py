from fastapi import APIRouter
from tierpricing.metrics import metrics_endpoint
from datetime import datetime, timezone

router = APIRouter()

start_time = datetime.now(timezone.utc)

@router.get("/healthz")
def healthz():
    uptime = (datetime.now(timezone.utc) - start_time).total_seconds()
    return {"status": "ok", "uptime_seconds": uptime}

@router.get("/metrics")
def metrics():
    return metrics_endpoint()
