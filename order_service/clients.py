"""
This module provides the communication client for the external payment gateway
(Paystack-compatible REST API). The client encapsulates the protocol logic,
error logging and connection management for the "initialize transaction" call
that returns the hosted checkout URL for an order.
"""

import logging

import httpx

from .config import PAYMENT_CALLBACK_URL, PAYMENT_SECRET_KEY, PAYMENT_SERVICE_URL

log = logging.getLogger(__name__)


# --- Payment Client (REST) ---
class PaymentClient:
    """
    Client for the payment gateway (REST API).
    Starts a hosted checkout session for an order.
    """
    def __init__(self, client: httpx.Client = None, secret_key: str = PAYMENT_SECRET_KEY,
                 callback_url: str = PAYMENT_CALLBACK_URL):
        """
        Initializes the HTTP client with timeout configuration and the bearer key.

        Args:
            client (httpx.Client, optional): Preconfigured client (e.g. with a mock transport).
            secret_key (str): Secret API key of the merchant account.
            callback_url (str, optional): URL the gateway redirects to after checkout.
        """
        if client is None:
            timeout_config = httpx.Timeout(5.0, read=8.0)
            client = httpx.Client(base_url=PAYMENT_SERVICE_URL, timeout=timeout_config)
        self.client = client
        self.client.headers["Authorization"] = f"Bearer {secret_key}"
        self.callback_url = callback_url

    def initialize_payment(self, email: str, amount: int, order_id: str) -> dict:
        """
        Initializes a transaction and returns the gateway response.
        Args:
            email (str): Email of the paying customer.
            amount (int): Amount in the smallest currency unit (e.g. kobo, cents).
            order_id (str): Order the payment belongs to, sent as metadata.
        Returns:
            dict: JSON response, e.g. {"status": true, "data": {"authorization_url": ..., "reference": ...}}.
        Raises:
            httpx.TimeoutException: If the gateway does not respond within the timeout.
            httpx.HTTPStatusError: If the gateway returns an error status (4xx or 5xx).
        """
        payload = {
            "email": email,
            "amount": amount,
            "metadata": {"orderId": order_id},
        }
        if self.callback_url:
            payload["callback_url"] = self.callback_url

        try:
            response = self.client.post("/transaction/initialize", json=payload)
            response.raise_for_status()
            return response.json()
        except httpx.TimeoutException:
            log.error(f"[Order: {order_id}] Payment Gateway Timeout. Kein Checkout-Link erhalten.")
            raise
        except httpx.HTTPStatusError as e:
            log.error(f"[Order: {order_id}] HTTP-Fehler beim Payment ({e.response.status_code}): {e.response.text}")
            raise

    def close(self):
        """Closes the HTTP client session."""
        self.client.close()
