"""
main.py — FastAPI Entry Point for the Order Service

This module provides the REST API of the order service. It validates incoming
requests, hands them to the controller functions and converts business errors
into client responses.

Responsibilities:
    • Create orders and return the payment checkout URL
    • List orders and fetch single orders (Redis cache-aside)
    • Delete orders
    • Map business errors to `{"message": ...}` responses
    • Provide system health information
"""

from typing import Any, Dict, List

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from . import controller
from .database import close_connections
from .dependencies import (
    get_order_cache,
    get_order_repository,
    get_payment_client,
    get_user_repository,
)
from .errors import OrderServiceError
from .logging_config import get_logger, setup_logging
from .models import CreateOrderResponse, MessageResponse, NewOrderRequest

# Initialization
setup_logging()
log = get_logger(__name__)
app = FastAPI(title="Order Service")


@app.on_event("startup")
def on_startup():
    log.info("Order-Service startet...")


@app.on_event("shutdown")
def on_shutdown():
    """Closes the shared MongoDB and Redis clients."""
    close_connections()
    log.info("Order-Service gestoppt.")


# Error Handling
@app.exception_handler(OrderServiceError)
async def order_service_error_handler(request: Request, exc: OrderServiceError):
    """Reports business errors with their status code and a fixed message."""
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    """
    Generic error path for everything that is not a business error
    (database, cache or programming errors).
    """
    log.critical(f"Unbehandelter Fehler bei {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


# API Endpoints: Orders
@app.post("/orders/create", status_code=201, response_model=CreateOrderResponse)
def create_order(
        order: NewOrderRequest,
        users=Depends(get_user_repository),
        orders=Depends(get_order_repository),
        payment=Depends(get_payment_client),
        cache=Depends(get_order_cache)
):
    """
    Creates an order and starts the hosted checkout for it.

    Args:
        order (NewOrderRequest): Validated checkout payload.

    Returns:
        dict: JSON response containing:
            - message (str): Confirmation message.
            - order (dict): The persisted order.
            - paymentUrl (str): Checkout URL of the payment gateway.
            - paymentReference (str): Gateway reference of the transaction.

    Raises:
        TotalAmountMismatchError (400), UserNotFoundError (404),
        PaymentInitializationError (502).
    """
    log.info(f"[User: {order.userId}] Neue Bestellung erhalten ({len(order.products)} Positionen).")
    return controller.create_order(order, users, orders, payment, cache)


@app.get("/orders", response_model=List[Dict[str, Any]])
def list_orders(
        orders=Depends(get_order_repository),
        cache=Depends(get_order_cache)
):
    return controller.get_orders(orders, cache)


@app.get("/orders/{order_id}", response_model=Dict[str, Any])
def get_order(
        order_id: str,
        orders=Depends(get_order_repository),
        cache=Depends(get_order_cache)
):
    return controller.get_order_by_id(order_id, orders, cache)


@app.delete("/orders/{order_id}", response_model=MessageResponse)
def delete_order(
        order_id: str,
        orders=Depends(get_order_repository),
        cache=Depends(get_order_cache)
):
    return controller.delete_order(order_id, orders, cache)


# Health Check Endpoint
@app.get("/health")
def health_check():
    """
    Simple health check endpoint.

    Can be used by monitoring systems or container orchestrators
    (e.g., Docker, Kubernetes) to verify that the service is running.

    Returns:
        dict: A basic JSON object indicating service availability.
    """
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
