"""
Product endpoints for API v1.

CRUD over the in-memory product list plus grouped views.  Status
codes follow the contract existing clients were built against:
lookups answer ``302 Found`` with the data in the body, creation
``201``, deletion ``202`` with a plain-text confirmation, and every
product failure (invalid data, unknown id, empty list) surfaces as a
``ProductError`` which the application maps to ``500``.

Static paths (``/byname``, ``/queue/stats`` ...) are declared before
``/{product_id}`` so they are not captured by it.
"""

import logging
from typing import Dict, List

from fastapi import APIRouter, Depends, Path, Query, status
from fastapi.responses import PlainTextResponse

from product_archive_api.app.api.deps import get_product_service, get_request_metrics
from product_archive_api.app.core.config import settings
from product_archive_api.app.core.exceptions import ProductError
from product_archive_api.app.core.metrics import RequestMetrics
from product_archive_api.app.schemas.product import Product, QueueStats
from product_archive_api.app.services.product_service import ProductService


logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=Product, status_code=status.HTTP_201_CREATED)
async def add_product(
    product: Product,
    service: ProductService = Depends(get_product_service),
    metrics: RequestMetrics = Depends(get_request_metrics),
) -> Product:
    """Add a product to the list.

    The product needs a non-empty name, a positive price and a
    non-negative quantity.  Ids are not checked for uniqueness.
    """
    with metrics.track("add_product"):
        metrics.enqueue(product)
        saved = service.save_product(product)
        if saved is None:
            raise ProductError(f"Error while saving product {product}")
        metrics.record_response_size("add_product", saved.model_dump_json(by_alias=True))
        return saved


@router.get("", response_model=List[Product], status_code=status.HTTP_302_FOUND)
async def list_products(
    service: ProductService = Depends(get_product_service),
    metrics: RequestMetrics = Depends(get_request_metrics),
) -> List[Product]:
    """Return every product; an empty list is reported as an error."""
    with metrics.track("list_products"):
        products = service.get_products()
        if products is None:
            raise ProductError("No products in list")
        logger.debug("Returning %d products", len(products))
        return products


@router.get("/queue/stats", response_model=QueueStats)
async def get_queue_stats(metrics: RequestMetrics = Depends(get_request_metrics)) -> QueueStats:
    """Return the processing queue length and the number of active requests."""
    stats = QueueStats(**metrics.snapshot())
    metrics.record_response_size("queue_stats", stats.model_dump_json())
    return stats


@router.get("/search", response_model=List[Product], status_code=status.HTTP_302_FOUND)
async def search_products(
    name: str = Query(..., description="Name prefix to match"),
    service: ProductService = Depends(get_product_service),
) -> List[Product]:
    """Return products whose name starts with ``name``."""
    return service.search_products(name)


def _non_empty(groups: Dict, label: str) -> Dict:
    if not groups:
        logger.debug("No products found")
        raise ProductError("No products in list")
    logger.debug("Products grouped by %s", label)
    return groups


@router.get("/byname", response_model=Dict[str, List[Product]], status_code=status.HTTP_302_FOUND)
async def get_products_by_name(service: ProductService = Depends(get_product_service)):
    return _non_empty(service.get_products_by_name(), "name")


@router.get("/byprice", response_model=Dict[float, List[Product]], status_code=status.HTTP_302_FOUND)
async def get_products_by_price(service: ProductService = Depends(get_product_service)):
    return _non_empty(service.get_products_by_price(), "price")


@router.get("/byquantity", response_model=Dict[int, List[Product]], status_code=status.HTTP_302_FOUND)
async def get_products_by_quantity(service: ProductService = Depends(get_product_service)):
    return _non_empty(service.get_products_by_quantity(), "quantity")


@router.get("/byid", response_model=Dict[int, List[Product]], status_code=status.HTTP_302_FOUND)
async def get_products_by_id(service: ProductService = Depends(get_product_service)):
    return _non_empty(service.get_products_by_id(), "id")


@router.get("/{product_id}", response_model=Product, status_code=status.HTTP_302_FOUND)
async def find_product_by_id(
    product_id: int = Path(..., le=settings.max_product_id),
    service: ProductService = Depends(get_product_service),
    metrics: RequestMetrics = Depends(get_request_metrics),
) -> Product:
    """Return the first product carrying ``product_id``."""
    with metrics.track("find_product"):
        product = service.get_product_by_id(product_id)
        if product is None:
            raise ProductError(f"No product with such id {product_id}")
        return product


@router.put("/{product_id}", response_model=Product, status_code=status.HTTP_302_FOUND)
async def update_product(
    product_id: int,
    name: str = Query(...),
    quantity: int = Query(...),
    price: float = Query(...),
    service: ProductService = Depends(get_product_service),
    metrics: RequestMetrics = Depends(get_request_metrics),
) -> Product:
    """Replace a product with the values given as query parameters.

    If ``product_id`` is unknown the first product in the list is
    replaced and the response carries id ``0``.
    """
    product = Product(id=product_id, name=name, quantity=quantity, price=price)
    with metrics.track("update_product"):
        metrics.enqueue(product)
        updated = service.update_product(product_id, product)
        if updated is None:
            raise ProductError(f"No product with such id {product_id}")
        metrics.record_response_size("update_product", updated.model_dump_json(by_alias=True))
        return updated


@router.delete("/{product_id}", response_class=PlainTextResponse, status_code=status.HTTP_202_ACCEPTED)
async def delete_product(
    product_id: int = Path(..., le=settings.max_product_id),
    service: ProductService = Depends(get_product_service),
    metrics: RequestMetrics = Depends(get_request_metrics),
) -> str:
    """Delete every product carrying ``product_id``."""
    with metrics.track("delete_product"):
        metrics.enqueue(product_id)
        if not service.delete_product(product_id):
            logger.debug("No product with such id %s", product_id)
            raise ProductError(f"No product with such id {product_id}")
        message = f"Product with id {product_id} successfully deleted"
        metrics.record_response_size("delete_product", message)
        return message
