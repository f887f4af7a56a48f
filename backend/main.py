"""
Stopwatch – Backend API
Start with: uvicorn main:app --reload
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from clock import Clock
from config import CORS_ORIGINS, LOG_LEVEL
from db import create_db_and_tables, make_engine
from routers import sessions, timer
from tracker import Tracker

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(engine=None, clock: Clock | None = None) -> FastAPI:
    """Build the API around one stopwatch and one session store."""
    engine = engine if engine is not None else make_engine()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        create_db_and_tables(engine)
        app.state.tracker.store.load()
        yield

    app = FastAPI(
        title="Stopwatch API",
        description="Time tracking: stopwatch sessions, stats and CSV export",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.tracker = Tracker(engine, clock)

    # Allow frontend to call this API
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    def health():
        """Check that the API is running. Frontend can call this first."""
        return {"status": "ok", "message": "Stopwatch API is running"}

    @app.get("/")
    def root():
        """Root welcome."""
        return {"app": "Stopwatch", "docs": "/docs"}

    app.include_router(timer.router)
    app.include_router(sessions.router)
    return app


app = create_app()
