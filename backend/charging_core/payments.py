"""Razorpay Orders API client used by POST /create-order."""
import logging
from typing import Any, Optional

import httpx

from charging_core.errors import PaymentGatewayError
from utils.clock import now_ms

LOG = logging.getLogger(__name__)

CURRENCY = "INR"


def amount_to_paise(amount: float) -> int:
    """Rupees -> paise (minor units)."""
    return int(round(amount * 100))


class RazorpayClient:
    """Creates payment orders; auth is HTTP Basic with key id and secret."""

    def __init__(
        self,
        key_id: str,
        key_secret: str,
        base_url: str = "https://api.razorpay.com/v1",
        timeout_s: float = 15.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._key_id = key_id
        self._key_secret = key_secret
        self._base_url = base_url.rstrip("/")
        self._timeout_s = timeout_s
        self._transport = transport

    def create_order(self, amount: float) -> dict[str, Any]:
        """Create an order for amount rupees. Returns the provider's order JSON.

        Raises PaymentGatewayError on network errors or non-2xx responses.
        """
        payload = {
            "amount": amount_to_paise(amount),
            "currency": CURRENCY,
            "receipt": f"order_rcptid_{now_ms()}",
        }
        try:
            with httpx.Client(
                base_url=self._base_url,
                auth=(self._key_id, self._key_secret),
                timeout=self._timeout_s,
                transport=self._transport,
            ) as client:
                r = client.post("/orders", json=payload)
        except httpx.RequestError as e:
            LOG.error("Razorpay request failed: %s", e)
            raise PaymentGatewayError(f"Network error creating order: {e}") from e
        if r.status_code >= 400:
            LOG.error("Razorpay order creation failed: %s %s", r.status_code, r.text)
            raise PaymentGatewayError(f"Order creation failed with status {r.status_code}")
        try:
            return r.json()
        except ValueError as e:
            raise PaymentGatewayError("Invalid JSON from payment gateway") from e
