"""
Pydantic models for swap orders.

A swap order links exactly two distinct users with two or more
distinct products.  The schemas only check the shape of the identity
lists (sizes and duplicates); whether an identity is well formed or
points at an existing record is decided by ``IntegrityService``.

Two read models exist: ``SwapOrderRead`` returns the identity lists as
stored, ``SwapOrderDetail`` replaces them with the referenced records.
"""

from datetime import datetime
from typing import Annotated, List

from pydantic import AfterValidator, BeforeValidator, Field

from swap_api.app.core.validation import require_list, require_unique
from swap_api.app.schemas.common import CamelModel
from swap_api.app.schemas.product import ProductRead
from swap_api.app.schemas.user import UserRead

ProductIds = Annotated[
    List[str],
    BeforeValidator(require_list("At least 2 products are required", min_length=2)),
    AfterValidator(require_unique("Duplicate product IDs are not allowed")),
]
UserIds = Annotated[
    List[str],
    BeforeValidator(require_list("Users must contain exactly 2 valid User IDs", min_length=2, max_length=2)),
    AfterValidator(require_unique("Duplicate user IDs are not allowed")),
]


class SwapOrderCreate(CamelModel):
    """Schema for creating a swap order.

    ``insertionDate`` is always set by the server.
    """

    products: ProductIds = Field(None, validate_default=True)
    users: UserIds = Field(None, validate_default=True)


class SwapOrderUpdate(CamelModel):
    """Schema for updating a swap order.

    Each list is replaced as a whole when present.
    """

    products: ProductIds = None
    users: UserIds = None


class SwapOrderRead(CamelModel):
    id: str = Field(alias="_id")
    products: List[str]
    users: List[str]
    insertion_date: datetime


class SwapOrderDetail(CamelModel):
    """Swap order with its users and products resolved to full records."""

    id: str = Field(alias="_id")
    products: List[ProductRead]
    users: List[UserRead]
    insertion_date: datetime
