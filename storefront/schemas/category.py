from datetime import datetime
from typing import Optional

from pydantic import Field

from storefront.schemas.common import CamelModel


class CategoryCreate(CamelModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    active: bool = True


class CategoryUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    active: Optional[bool] = None


class CategoryOut(CamelModel):
    id: int
    name: str
    slug: str
    description: Optional[str] = None
    active: bool
    created_at: datetime
    updated_at: datetime
