"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API starts with the in‑memory backend and the bundled fixtures when
nothing is configured.  In a production deployment you should
override these via environment variables.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Campus Admin API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Host and port used by ``run.py`` when serving the API with uvicorn.
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))

    # Which data layer backs the services: ``memory`` keeps records in
    # per‑entity stores seeded from fixtures, ``remote`` forwards every
    # operation to the record API configured below.
    data_backend: str = os.getenv("DATA_BACKEND", "memory")

    # Multiplier applied to the simulated latency of every service call.
    # ``1.0`` reproduces the 200–400 ms delays, ``0`` disables waiting.
    latency_scale: float = float(os.getenv("LATENCY_SCALE", "1.0"))

    # Directory holding the JSON fixture files used to seed the stores.
    # Empty means the fixtures shipped inside the package.
    fixtures_dir: str = os.getenv("FIXTURES_DIR", "")

    # Fee charged per late day when a return does not state a fine
    # amount.  ``0`` keeps fines on returns manual.
    late_fee_per_day: float = float(os.getenv("LATE_FEE_PER_DAY", "0"))

    # Remote record API.  Only read when ``data_backend`` is ``remote``.
    record_api_url: str = os.getenv("RECORD_API_URL", "")
    record_api_project_id: str = os.getenv("RECORD_API_PROJECT_ID", "")
    record_api_key: str = os.getenv("RECORD_API_KEY", "")
    record_api_timeout: int = int(os.getenv("RECORD_API_TIMEOUT", "15"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at class definition time, environment variables should
# be set before importing this module.
settings = Settings()
