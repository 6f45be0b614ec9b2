"""
Application package initializer.

The project is split into a small number of layers: ``core`` holds
settings, logging, domain exceptions and request instrumentation;
``services`` holds the product store and the file storage/archive
logic; ``schemas`` defines the pydantic payloads; and ``api`` wires
the services to HTTP routes.  Product routes are versioned under
``/api/v1`` while file routes live under ``/api/files``.
"""

from .main import app  # noqa: F401
