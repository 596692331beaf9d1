# backend/tc_alerts/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import os, logging

from tc_alerts.api import errors

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))

app = FastAPI(title="Traffic Ops Alerts API", version="0.1.0")

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("CORS_ALLOW_ORIGINS", "*").split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Stashed-status middleware + alert-shaped error bodies
errors.install(app)

# Health check
@app.get("/api/health")
def health():
    return {"status": "ok"}

from tc_alerts.api.alerts import router as alerts_router  # noqa: E402
app.include_router(alerts_router)
logging.info("Mounted router: tc_alerts.api.alerts")
