"""
Process bootstrap: parse flags, resolve settings, start uvicorn.

    cpg-explorer --db cpg.db --port 8080

CPG_DB_PATH is used when --db is not given; CPG_PORT, when set, wins over --port.
"""
from __future__ import annotations

import argparse
import os
from pathlib import Path

import uvicorn

from core.config import Settings
from core.logging import setup_logging
from main import create_app


def resolve_settings(args: argparse.Namespace, env: dict | None = None) -> Settings:
    env = os.environ if env is None else env
    settings = Settings()
    update: dict = {}
    if args.db:
        update["db_path"] = Path(args.db)
    if args.port is not None and "CPG_PORT" not in env:
        update["port"] = args.port
    if args.host:
        update["host"] = args.host
    return settings.model_copy(update=update)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Read-only CPG analytics API.")
    parser.add_argument("--db",   default="",   help="Path to CPG SQLite database (or CPG_DB_PATH)")
    parser.add_argument("--port", type=int,     help="HTTP server port (default 8080, or CPG_PORT)")
    parser.add_argument("--host", default="",   help="Bind address (default 0.0.0.0, or CPG_HOST)")
    args = parser.parse_args(argv)

    settings = resolve_settings(args)
    logger = setup_logging(settings.log_level)
    if settings.db_path is None:
        parser.error("database path required: use --db flag or CPG_DB_PATH env var")

    app = create_app(settings)
    logger.info(f"CPG Explorer listening on http://{settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
