"""
controller.py — Order Operations

This module contains the logic behind the order endpoints. Each function
receives its collaborators (repositories, cache, payment client) as arguments
and either returns the response body or raises an `OrderServiceError`.

Checkout flow (create_order):
1. Load the ordering user
2. Check the client-supplied total against the line items
3. Persist the order (status 'pending')
4. Initialize the payment and obtain the checkout URL
5. Invalidate cached order lists

Reads (get_orders, get_order_by_id) follow the cache-aside pattern: serve from
Redis when present, otherwise query MongoDB and populate the cache afterwards.
"""

import logging

import httpx

from .errors import (
    OrderNotFoundError,
    PaymentInitializationError,
    TotalAmountMismatchError,
    UserNotFoundError,
)
from .models import NewOrderRequest

log = logging.getLogger(__name__)


def to_minor_units(amount: float) -> int:
    """Converts a major-unit amount (e.g. 149.99) into minor units (14999)."""
    return int(round(amount * 100))


def create_order(request: NewOrderRequest, users, orders, payment, cache) -> dict:
    """
    Creates an order and starts the payment for it.

    Args:
        request (NewOrderRequest): Validated checkout payload.
        users (UserRepository): Used to resolve the customer's email.
        orders (OrderRepository): Persists the new order.
        payment (PaymentClient): Starts the hosted checkout.
        cache (OrderCache): Invalidated after the order was created.

    Returns:
        dict: message, persisted order, paymentUrl and paymentReference.

    Raises:
        UserNotFoundError: If userId does not reference an existing user.
        TotalAmountMismatchError: If totalAmount differs from Σ price × quantity.
        PaymentInitializationError: If the gateway fails or returns no checkout URL.
            The pending order is removed again in this case.
    """
    log_prefix = f"[User: {request.userId}]"

    user = users.find_by_id(request.userId)
    if user is None:
        log.warning(f"{log_prefix} Bestellung abgelehnt: Benutzer nicht gefunden.")
        raise UserNotFoundError()

    # Vergleich auf Cent-Genauigkeit
    computed_total = request.computed_total()
    if to_minor_units(computed_total) != to_minor_units(request.totalAmount):
        log.warning(
            f"{log_prefix} Bestellung abgelehnt: totalAmount {request.totalAmount} "
            f"!= Summe der Positionen {computed_total}."
        )
        raise TotalAmountMismatchError()

    order = orders.create(
        user_id=request.userId,
        products=[item.model_dump() for item in request.products],
        total_amount=request.totalAmount,
    )
    order_id = order["_id"]
    log_prefix = f"[Order: {order_id}]"

    try:
        payment_result = payment.initialize_payment(
            email=user["email"],
            amount=to_minor_units(request.totalAmount),
            order_id=order_id,
        )
        payment_data = payment_result.get("data") or {}
        payment_url = payment_data["authorization_url"]
        payment_reference = payment_data["reference"]
        if not payment_url or not payment_reference:
            raise KeyError("authorization_url/reference leer")
    except (httpx.HTTPError, ValueError, KeyError, AttributeError) as e:
        log.error(f"{log_prefix} Zahlungsinitialisierung fehlgeschlagen ({e!r}). Entferne Bestellung.")
        # Kompensation: keine offene Bestellung ohne Checkout-Link zurücklassen
        try:
            orders.find_by_id_and_delete(order_id)
        except Exception as comp_e:
            log.critical(f"{log_prefix} KRITISCH: Kompensation fehlgeschlagen! {comp_e}")
        raise PaymentInitializationError() from e

    cache.invalidate()
    log.info(f"{log_prefix} Bestellung angelegt, Checkout gestartet (Referenz: {payment_reference}).")

    return {
        "message": "Order created successfully",
        "order": order,
        "paymentUrl": payment_url,
        "paymentReference": payment_reference,
    }


def get_orders(orders, cache) -> list:
    """
    Returns all orders, served from the cache when possible.

    On a miss the populated list is read from the database and written to the
    'orders' key with the configured expiry.
    """
    cached = cache.get_orders()
    if cached is not None:
        log.debug("[Cache] Treffer für Bestellliste.")
        return cached

    result = orders.find_all()
    cache.set_orders(result)
    log.info(f"Bestellliste aus Datenbank geladen ({len(result)} Einträge), Cache aktualisiert.")
    return result


def get_order_by_id(order_id: str, orders, cache) -> dict:
    cached = cache.get_order(order_id)
    if cached is not None:
        return cached

    order = orders.find_by_id(order_id)
    if order is None:
        log.info(f"[Order: {order_id}] Nicht gefunden.")
        raise OrderNotFoundError()

    cache.set_order(order_id, order)
    return order


def delete_order(order_id: str, orders, cache) -> dict:
    """
    Deletes an order and drops every cache entry that could still contain it.

    Raises:
        OrderNotFoundError: If no order with this id exists.
    """
    deleted = orders.find_by_id_and_delete(order_id)
    if deleted is None:
        log.info(f"[Order: {order_id}] Löschen nicht möglich: nicht gefunden.")
        raise OrderNotFoundError()

    cache.invalidate(order_id)
    log.info(f"[Order: {order_id}] Bestellung gelöscht.")
    return {"message": "Order deleted successfully"}
