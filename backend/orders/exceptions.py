"""
Custom exceptions for order pricing and the order lifecycle.
"""


class OrderError(Exception):
    """Base exception for order-related errors."""

    code = "order_error"


class InvalidLineItem(OrderError):
    """Raised when a priced line has a negative price or quantity."""

    code = "invalid_line_item"

    def __init__(self, line, message=None):
        self.line = line
        if message is None:
            message = (
                f"Invalid line for catalog item {getattr(line, 'catalog_item_id', '?')}: "
                f"price {getattr(line, 'unit_price', '?')}, quantity {getattr(line, 'quantity', '?')}"
            )
        super().__init__(message)


class IllegalTransition(OrderError):
    """Raised when an order status change is not allowed from its current status."""

    code = "illegal_transition"

    def __init__(self, source, target, message=None):
        self.source = source
        self.target = target
        if message is None:
            message = f"Cannot change order status from '{source}' to '{target}'"
        super().__init__(message)


class EstablishmentClosed(OrderError):
    """Raised when checking out while the establishment is closed."""

    code = "establishment_closed"

    def __init__(self, establishment, next_opening=None, message=None):
        self.establishment = establishment
        self.next_opening = next_opening
        if message is None:
            message = f"{establishment.name} is currently closed."
            if next_opening is not None:
                message += f" Next opening: {next_opening:%d/%m %H:%M}"
        super().__init__(message)
