"""Entry point for running the Product Archive API with Uvicorn.

Host and port are read from the ``HOST`` and ``PORT`` environment
variables (defaults ``0.0.0.0`` and ``8081``).  Other settings, such
as ``FILE_UPLOAD_DIR``, are read by ``product_archive_api.app.core.config``.

Usage:
    python run.py
"""
import os

from uvicorn import Config, Server

from product_archive_api.app.main import app


def main() -> None:
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8081"))
    # handlers come from create_app; uvicorn must not install its own
    config = Config(app=app, host=host, port=port, reload=False, log_config=None)
    Server(config).run()


if __name__ == "__main__":
    try:
        main()
    except (KeyboardInterrupt, SystemExit):
        pass
