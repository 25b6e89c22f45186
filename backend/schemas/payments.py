"""Pydantic schemas for payment orders."""
from pydantic import Field

from schemas.base import CamelModel


class CreateOrderRequest(CamelModel):
    """Payload for POST /create-order; amount in rupees."""

    amount: float = Field(gt=0)
