"""
Error kinds raised by the services.

Each error carries a symbolic message key plus positional arguments for the
localized message, the structured context a caller may inspect, and the HTTP
status / response code the API layer maps it to. Nothing here formats text.
"""

from typing import Any, Optional, Tuple


class AppError(Exception):
    status_code: int = 400
    code: str = "BUSINESS_ERROR"

    def __init__(self, message_key: str, *args: Any):
        super().__init__(message_key)
        self.message_key = message_key
        self.message_args: Tuple[Any, ...] = args


class ResourceNotFoundError(AppError):
    status_code = 404
    code = "RESOURCE_NOT_FOUND"

    def __init__(self, message_key: str, resource_id: Any):
        super().__init__(message_key, resource_id)
        self.resource_id = resource_id


class DuplicateResourceError(AppError):
    status_code = 409
    code = "DUPLICATE_RESOURCE"

    def __init__(self, message_key: str, value: Any):
        super().__init__(message_key, value)
        self.value = value


class BusinessRuleError(AppError):
    status_code = 400
    code = "BUSINESS_ERROR"


class ProductInactiveError(AppError):
    status_code = 400
    code = "PRODUCT_INACTIVE"

    def __init__(self, product_id: Any, product_name: str):
        super().__init__("order.product.not.active", product_name)
        self.product_id = product_id
        self.product_name = product_name


class InsufficientStockError(AppError):
    status_code = 400
    code = "INSUFFICIENT_STOCK"

    def __init__(self, product_name: str, available: int, requested: int):
        super().__init__("order.insufficient.stock", product_name, available, requested)
        self.product_name = product_name
        self.available = available
        self.requested = requested


class InvalidOrderStateError(AppError):
    status_code = 400
    code = "INVALID_ORDER_STATE"

    def __init__(self, message_key: str, current_status: Any, target_status: Optional[Any] = None):
        super().__init__(message_key, getattr(current_status, "value", current_status))
        self.current_status = current_status
        self.target_status = target_status


class ConcurrentUpdateError(AppError):
    status_code = 409
    code = "CONCURRENT_UPDATE"

    def __init__(self, operation: str, attempts: int):
        key = "order.concurrent.update" if operation.endswith("_order") else "resource.concurrent.update"
        super().__init__(key, attempts)
        self.operation = operation
        self.attempts = attempts
