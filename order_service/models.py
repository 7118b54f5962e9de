"""
models.py — Data Models for Order Requests and Responses

This module defines the data structures used for order creation and the
responses returned by the API. Pydantic models provide type safety and
automatic validation of incoming data.

Models:
    - OrderProduct: A single line item of an order.
    - NewOrderRequest: The checkout payload sent by the client.
    - CreateOrderResponse: The body returned after a successful checkout.
    - MessageResponse: Plain confirmation message.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class OrderProduct(BaseModel):
    """
    Represents a single product line in an order.

    Attributes:
        id (str, optional): Reference to the product document.
        quantity (int): Number of units. Must be greater than zero.
        price (float): Unit price in major currency units. Must not be negative.
    """
    id: Optional[str] = None
    quantity: int = Field(..., gt=0)
    price: float = Field(..., ge=0)


class NewOrderRequest(BaseModel):
    """
    Represents a checkout request sent by the client.

    Attributes:
        userId (str): Identifier of the ordering user.
        products (List[OrderProduct]): Line items, at least one.
        totalAmount (float): Client-computed total; has to match the line items.
    """
    userId: str
    products: List[OrderProduct] = Field(..., min_length=1)
    totalAmount: float = Field(..., ge=0)

    def computed_total(self) -> float:
        """Sum of price × quantity over all line items."""
        return sum(item.price * item.quantity for item in self.products)


class CreateOrderResponse(BaseModel):
    message: str
    order: Dict[str, Any]
    paymentUrl: str
    paymentReference: str


class MessageResponse(BaseModel):
    message: str
