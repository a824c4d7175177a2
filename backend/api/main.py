"""FastAPI application for the Valley Haze Simulator."""

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
load_dotenv(os.path.join(os.path.dirname(__file__), "..", ".env"))

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import scenarios, sessions

logging.basicConfig(
    level=os.environ.get("AIRSHED_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: sessions live in memory and die with the process."""
    logger.info("Valley Haze Simulator API starting")

    yield

    sessions.sessions.clear()


app = FastAPI(
    title="Valley Haze Simulator",
    description=(
        "API for a day-by-day winter air quality simulation of an urban valley. "
        "Players move emission sliders, enact policies and advance through a "
        "scripted week of meteorology while PM builds up or clears."
    ),
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware - allow localhost origins for development
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://localhost:5173",
        "http://localhost:8080",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
        "http://127.0.0.1:8080",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include REST API routers
app.include_router(scenarios.router, prefix="/api")
app.include_router(sessions.router, prefix="/api")


@app.get("/api/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return {
        "status": "ok",
        "active_sessions": len(sessions.sessions),
    }
