# backend/tc_alerts/api/alerts.py
from fastapi import APIRouter, Request
from typing import List
from pydantic import BaseModel, Field

from tc_alerts.api.errors import ResponseWriter, get_handle_errors_func
from tc_alerts.schemas.alert import AlertLevel, Alerts, create_alerts

router = APIRouter(prefix="/api", tags=["alerts"])


# ===== Pydantic Models =====
class AlertsCreate(BaseModel):
    level: AlertLevel
    messages: List[str] = Field(default_factory=list)


class AlertsMerge(BaseModel):
    bags: List[Alerts] = Field(default_factory=list)


# ===== API Endpoints =====
@router.get("/alerts/levels")
def list_levels():
    return {"response": [lvl.value for lvl in AlertLevel]}


@router.get("/alerts/levels/{name}")
def get_level(name: str, request: Request):
    """
    Look up one alert level. Unknown names are answered through the legacy
    error handler, so existing clients keep getting the same 404 body.
    """
    if name in {lvl.value for lvl in AlertLevel}:
        return {"response": name}
    w = ResponseWriter()
    handle_errors = get_handle_errors_func(w, request)
    handle_errors(404, LookupError(f"alert level '{name}' not found"))
    return w.to_response()


@router.post("/alerts", response_model=Alerts)
def build_alerts(body: AlertsCreate):
    return create_alerts(body.level, *body.messages)


@router.post("/alerts/merge", response_model=Alerts)
def merge_alerts(body: AlertsMerge):
    merged = Alerts()
    for bag in body.bags:
        merged.add_alerts(bag)
    return merged
