"""
Pydantic models for product data.

``Product`` carries no value constraints.  Name, price and quantity
are checked by ``ProductService``, so an invalid product is answered
with the product error status rather than ``422``.  The image URI
travels as ``imageUri`` on the wire; ``image_uri`` is accepted too.
"""

from typing import Optional

from pydantic import BaseModel, Field


class Product(BaseModel):
    """A product held in the in-memory list."""

    id: int = Field(0, examples=[1])
    name: Optional[str] = Field(None, examples=["aproduct 1"])
    quantity: int = Field(0, examples=[10])
    price: float = Field(0.0, examples=[1000.0])
    image_uri: Optional[str] = Field(None, alias="imageUri", examples=["https://example.com/1.png"])

    model_config = {
        "from_attributes": True,
        "populate_by_name": True,
    }


class QueueStats(BaseModel):
    """Snapshot of the request processing queue."""

    queue_size: int
    active_requests: int
