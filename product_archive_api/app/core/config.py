"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts without any configuration; in a deployment you should
at least point ``FILE_UPLOAD_DIR`` at a persistent volume.
"""

import os
from dataclasses import dataclass


def _as_bool(value: str) -> bool:
    return value.lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Product Archive API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = _as_bool(os.getenv("DEBUG", "false"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Optional path of a log file.  Empty means console logging only.
    log_file: str = os.getenv("LOG_FILE", "")

    # Root directory for uploaded files, archives and extracted trees.
    # Relative paths are resolved against the current working directory
    # when the storage services are created.
    upload_dir: str = os.getenv("FILE_UPLOAD_DIR", "uploads")

    # Populate the in-memory product list with three sample products
    # when the application starts.
    seed_products: bool = _as_bool(os.getenv("SEED_PRODUCTS", "true"))

    # Largest product id accepted by the lookup and delete routes.
    max_product_id: int = int(os.getenv("MAX_PRODUCT_ID", "100"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# must be set before this module is imported.
settings = Settings()
