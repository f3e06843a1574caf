"""
Health-check listener so hosting platforms see an open port.
"""

import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from jobdaemon.core.orchestrator import Orchestrator
from jobdaemon.store.seen_store import SeenStore, SeenStoreError

logger = logging.getLogger(__name__)


def create_app(orchestrator: Orchestrator, store: Optional[SeenStore] = None) -> FastAPI:
    app = FastAPI(title="JobDaemon", docs_url=None, redoc_url=None)

    @app.get("/", response_class=PlainTextResponse)
    async def root() -> str:
        return "JobDaemon is running\n"

    @app.get("/health")
    async def health() -> dict:
        seen = None
        if store is not None:
            try:
                seen = store.count()
            except SeenStoreError as e:
                logger.warning(f"Health check could not read the seen-store: {e}")

        last = orchestrator.last_report
        return {
            "status": "ok",
            "running": orchestrator.running,
            "seen": seen,
            "last_run": last.to_dict() if last else None,
        }

    return app


def create_server(app: FastAPI, port: int) -> uvicorn.Server:
    config = uvicorn.Config(app, host="0.0.0.0", port=port, log_level="warning")
    return uvicorn.Server(config)
