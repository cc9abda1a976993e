from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="CPG_", env_file=".env", extra="ignore")

    app_name: str = "cpg-explorer"

    db_path: Path | None = None
    host: str = "0.0.0.0"
    port: int = 8080
    max_connections: int = 4

    frontend_dist: Path = Path(__file__).parent.parent.parent / "frontend" / "dist"
    log_level: str = "INFO"
