"""Payment API route: POST /create-order."""
import logging

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_payment_client
from charging_core.errors import PaymentGatewayError
from charging_core.payments import RazorpayClient
from schemas.payments import CreateOrderRequest

LOG = logging.getLogger(__name__)

router = APIRouter(tags=["payments"])


@router.post("/create-order")
def create_order(
    body: CreateOrderRequest,
    client: RazorpayClient = Depends(get_payment_client),
) -> dict:
    """Create a Razorpay order for amount (rupees); returns the provider's order."""
    try:
        return client.create_order(body.amount)
    except PaymentGatewayError as e:
        LOG.error("Razorpay order creation failed: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Razorpay order creation failed",
        ) from e
