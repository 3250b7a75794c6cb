"""
Pydantic models for order line requests and responses.
"""

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, PositiveInt
from pydantic import ValidationError as PydanticValidationError

from app.utils.error_handler import ValidationException


class OrderLineCreate(BaseModel):
    """
    Request to add a line to an order.

    ``quantity`` must be positive; the service checks it again on its own.
    """

    model_config = ConfigDict(frozen=True)

    order_id: int = Field(..., description="Key of the order receiving the line")
    product_id: int = Field(..., description="Key of the ordered product")
    quantity: PositiveInt = Field(..., description="Ordered quantity")

    @classmethod
    def from_raw(cls, data: Mapping[str, Any]) -> "OrderLineCreate":
        """
        Build a request from untrusted input.

        Args:
            data: Raw request fields

        Returns:
            OrderLineCreate: Validated request

        Raises:
            ValidationException: For the first field that fails validation
        """
        try:
            return cls.model_validate(data)
        except PydanticValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(part) for part in first["loc"]) or "request"
            raise ValidationException(
                message=f"Invalid order line request: {field}: {first['msg']}",
                field=field,
                invalid_value=first.get("input"),
                expected_format=first["type"],
                details={"error_count": e.error_count()},
            ) from e


class OrderLineResponse(BaseModel):
    """Order line as returned to callers."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    order_id: int
    product_id: int
    quantity: int
