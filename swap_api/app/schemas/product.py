"""
Pydantic models for product data.

A product has a name and an ordered list of image URLs.  At least one
image is required and each one must be an ``http``, ``https`` or
``ftp`` URL.  The order of ``image`` is kept as sent.
"""

from typing import Annotated, List

from pydantic import BeforeValidator, Field

from swap_api.app.core.validation import require_list, require_text, require_url
from swap_api.app.schemas.common import CamelModel

ProductName = Annotated[str, BeforeValidator(require_text("Product name cannot be empty"))]
ImageUrl = Annotated[str, BeforeValidator(require_url("not a valid URL"))]
Images = Annotated[
    List[ImageUrl],
    BeforeValidator(require_list("Image field must be an array with min. 1 element", min_length=1)),
]


class ProductCreate(CamelModel):
    """Schema for creating a product."""

    name: ProductName = Field(None, validate_default=True, examples=["Vintage camera"])
    image: Images = Field(None, validate_default=True, examples=[["http://example.com/camera.jpg"]])


class ProductUpdate(CamelModel):
    """Schema for a partial product update."""

    name: ProductName = None
    image: Images = None


class ProductRead(CamelModel):
    id: str = Field(alias="_id")
    name: str
    image: List[str]
