"""
Top‑level router for version 1 of the API.

Mounted by ``main.create_app`` under ``/api/v1``.
"""

from fastapi import APIRouter

from .endpoints import products

router = APIRouter()

router.include_router(products.router, prefix="/products", tags=["products"])
