"""
CPG Explorer — FastAPI Backend
Serves package statistics, module rollups and the package dependency graph
from a pre-computed code-property-graph SQLite store (read-only).
"""
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import FileResponse, JSONResponse, Response
from fastapi.staticfiles import StaticFiles
from loguru import logger

from core.config import Settings
from core.errors import ExplorerError, QueryError
from db import Store
from routers.stats import router as stats_router
from routers.modules import router as modules_router
from routers.packages import router as packages_router

_CORS_HEADERS = {
    "Access-Control-Allow-Origin":  "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def create_app(settings: Optional[Settings] = None, store: Optional[Store] = None) -> FastAPI:
    settings = settings or Settings()
    if store is None:
        if settings.db_path is None:
            raise ValueError("database path required: use --db or CPG_DB_PATH")
        store = Store(settings.db_path, max_connections=settings.max_connections)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store.ping()
        logger.info(f"Serving CPG store {store.db_path} (max {store.max_connections} connections)")
        yield
        store.close()

    app = FastAPI(title="CPG Explorer API", version="0.1.0", lifespan=lifespan)
    app.state.store = store

    @app.middleware("http")
    async def unexpected_errors(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            logger.exception(f"{request.method} {request.url.path}: {exc!r}")
            return JSONResponse(status_code=500, content={"error": str(exc) or type(exc).__name__})

    # registered last, so it wraps unexpected_errors and every response gets the headers
    @app.middleware("http")
    async def cors(request: Request, call_next):
        if request.method == "OPTIONS":
            return Response(status_code=204, headers=_CORS_HEADERS)
        response = await call_next(request)
        response.headers.update(_CORS_HEADERS)
        return response

    @app.exception_handler(ExplorerError)
    async def explorer_error(request: Request, exc: ExplorerError):
        if isinstance(exc, QueryError):
            logger.error(f"{request.method} {request.url.path}: {exc}")
        else:
            logger.warning(f"{request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc)})

    app.include_router(stats_router)
    app.include_router(modules_router)
    app.include_router(packages_router)

    # ── Serve React frontend (must be last) ──────────────────────────────────
    if settings.frontend_dist.exists():
        mount_frontend(app, settings.frontend_dist)

    return app


def mount_frontend(app: FastAPI, dist: Path) -> None:
    if (dist / "assets").is_dir():
        app.mount("/assets", StaticFiles(directory=dist / "assets"), name="assets")

    @app.get("/{full_path:path}", include_in_schema=False)
    async def serve_spa(full_path: str):
        """Serve a real file when one exists, otherwise index.html for SPA routing."""
        if full_path == "api" or full_path.startswith("api/"):
            raise HTTPException(status_code=404, detail="Not Found")
        candidate = (dist / full_path).resolve()
        if full_path and candidate.is_file() and candidate.is_relative_to(dist.resolve()):
            return FileResponse(candidate)
        return FileResponse(dist / "index.html")
