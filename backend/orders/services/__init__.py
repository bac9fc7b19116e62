"""
Orders services package.

- OrderEngine: order lifecycle (create, add/resize/remove lines, pay)
- OrderItemService: builds and looks up order lines
- OrderCalculationService: order total arithmetic
"""

from .order_service import OrderEngine
from .calculation_service import OrderCalculationService
from .item_service import LineItemRequest, OrderItemService

__all__ = [
    'OrderEngine',
    'OrderCalculationService',
    'OrderItemService',
    'LineItemRequest',
]
