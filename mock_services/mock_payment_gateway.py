"""
mock_payment_gateway.py — Mock Implementation of the Payment Gateway (REST API)

This module provides a simulated payment gateway for local runs of the order
service. It exposes a FastAPI application that mimics the "initialize
transaction" call of a hosted-checkout provider.

Simulation Scenarios:
    • Successful initialization (checkout URL + reference)
    • Missing/invalid bearer key (HTTP 401)
    • Rejected customer (HTTP 400) for emails containing "decline"

Endpoints:
    POST /transaction/initialize — Starts a checkout session.

Port:
    Default: 8001 (HTTP)
"""

import logging
import uuid
from typing import Any, Dict, Optional

from fastapi import FastAPI, Header, HTTPException
from pydantic import BaseModel, Field

app = FastAPI(title="Mock Payment Gateway")
logging.basicConfig(level=logging.INFO)

CHECKOUT_BASE_URL = "https://checkout.mock-gateway.local"


class InitializeRequest(BaseModel):
    """
    Represents a transaction initialization payload.

    Attributes:
        email (str): Email of the paying customer.
        amount (int): Amount in the smallest currency unit (e.g., kobo, cents).
        metadata (dict, optional): Free-form data echoed back by the gateway.
        callback_url (str, optional): Redirect target after checkout.
    """
    email: str
    amount: int = Field(..., gt=0)
    metadata: Optional[Dict[str, Any]] = None
    callback_url: Optional[str] = None


@app.post("/transaction/initialize")
def initialize_transaction(
        request: InitializeRequest,
        authorization: Optional[str] = Header(None)
):
    """
    Starts a simulated checkout session.

    Returns:
        dict: Gateway envelope with `status`, `message` and `data`
            (authorization_url, access_code, reference).

    Raises:
        HTTPException(401): If no bearer key is sent.
        HTTPException(400): If the customer email contains "decline".
    """
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail={"status": False, "message": "Invalid key"})

    order_id = (request.metadata or {}).get("orderId", "UNKNOWN")
    logging.info(f"[PG] Initialisierung für Order {order_id} über {request.amount}")

    if "decline" in request.email:
        logging.warning(f"[PG] Kunde {request.email} abgelehnt.")
        raise HTTPException(status_code=400, detail={"status": False, "message": "Customer rejected"})

    access_code = uuid.uuid4().hex[:15]
    reference = f"ref_{uuid.uuid4().hex[:12]}"
    logging.info(f"[PG] Checkout für Order {order_id} erstellt (Referenz: {reference}).")
    return {
        "status": True,
        "message": "Authorization URL created",
        "data": {
            "authorization_url": f"{CHECKOUT_BASE_URL}/{access_code}",
            "access_code": access_code,
            "reference": reference,
        }
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8001)
